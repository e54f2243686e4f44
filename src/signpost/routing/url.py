"""URL assembly.

Turns a filled-in route path plus the URL options (protocol, host,
credentials, anchor, query parameters) into the final string. Knows
nothing about routes.
"""

import re
from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import quote

from signpost.errors import ConfigurationError, MissingHost

# Bracketed IPv6 literals keep their colons
_HOST_WITH_PROTOCOL = re.compile(r"^(?:([a-zA-Z][a-zA-Z0-9+.-]*:)?//)?(\[[^\]]+\]|[^/:]+)(?::(\d+))?")
_DEFAULT_PORTS = {"http": 80, "https": 443}

# RFC 3986 fragment characters left unescaped
_FRAGMENT_SAFE = "/?:@!$&'()*+,;=-._~"


def normalize_protocol(protocol: str | None) -> str:
    """Return *protocol* as a URL prefix (``https`` -> ``https://``).

    ``None`` means http; ``//`` (or an empty string) keeps the URL
    protocol-relative.
    """
    if protocol is None:
        return "http://"
    if protocol in ("", "//"):
        return "//"
    if protocol.endswith("://"):
        return protocol
    return f"{protocol.removesuffix(':')}://"


def _port_number(port: int | str) -> int:
    try:
        number = int(port)
    except (TypeError, ValueError):
        number = -1
    if isinstance(port, bool) or not 0 < number < 65536:
        raise ConfigurationError(f"Invalid port {port!r}: pass an integer between 1 and 65535.")
    return number


def build_host_url(
    *,
    protocol: str | None,
    host: str | None,
    port: int | str | None = None,
    user: str | None = None,
    password: str | None = None,
    port_given: bool = False,
    default_protocol: str | None = None,
) -> str:
    """Build ``protocol://[user:password@]host[:port]``.

    *host* may carry its own protocol and port (``https://example.com:8080``);
    those are used unless *protocol* or an explicit *port* override them.
    *default_protocol* applies when neither *protocol* nor *host* names one.
    Raises ``MissingHost`` when *host* is blank and ``ConfigurationError``
    when *port* is not a valid port number.
    """
    if not host:
        raise MissingHost(
            "Missing host to link to! Set host in the options, on the "
            "RoutingContext, or as ResolverConfig.default_host; or pass only_path=True."
        )

    match = _HOST_WITH_PROTOCOL.match(host)
    if match is not None:
        if protocol is None and match.group(1):
            protocol = match.group(1)
        host = match.group(2)
        if not port_given and match.group(3):
            port = match.group(3)

    if protocol is None:
        protocol = default_protocol
    prefix = normalize_protocol(protocol)
    scheme = prefix.removesuffix("://")
    if port is not None and str(port):
        port = _port_number(port)
        if _DEFAULT_PORTS.get(scheme) != port:
            host = f"{host}:{port}"

    if user and password:
        credentials = f"{quote(str(user), safe='')}:{quote(str(password), safe='')}@"
    else:
        credentials = ""

    return f"{prefix}{credentials}{host}"


def _query_pairs(key: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key in sorted(value, key=str):
            yield from _query_pairs(f"{key}[{sub_key}]", value[sub_key])
    elif isinstance(value, list | tuple | set | frozenset):
        for item in value:
            yield from _query_pairs(f"{key}[]", item)
    elif isinstance(value, bool):
        yield key, "true" if value else "false"
    else:
        yield key, str(value)


def to_query(params: Mapping[str, Any]) -> str:
    """Encode *params* as a query string with keys in sorted order.

    Lists become ``key[]=a&key[]=b``, nested mappings ``key[sub]=v``.
    ``None`` values are omitted.
    """
    pairs: list[str] = []
    for key in sorted(params, key=str):
        for name, value in _query_pairs(str(key), params[key]):
            pairs.append(f"{quote(name, safe='[]')}={quote(value, safe='')}")
    return "&".join(pairs)


def build_url(
    path: str,
    *,
    only_path: bool,
    params: Mapping[str, Any] | None = None,
    anchor: Any = None,
    trailing_slash: bool = False,
    script_name: str = "",
    protocol: str | None = None,
    host: str | None = None,
    port: int | str | None = None,
    user: str | None = None,
    password: str | None = None,
    port_given: bool = False,
    default_protocol: str | None = None,
) -> str:
    """Assemble a path (``only_path=True``) or a fully qualified URL."""
    result = script_name.rstrip("/") + path
    if not result:
        result = "/"
    if trailing_slash and not result.endswith("/"):
        result += "/"

    if params:
        query = to_query(params)
        if query:
            result = f"{result}?{query}"

    if anchor is not None and str(anchor) != "":
        result = f"{result}#{quote(str(anchor), safe=_FRAGMENT_SAFE)}"

    if only_path:
        return result
    return build_host_url(
        protocol=protocol,
        host=host,
        port=port,
        user=user,
        password=password,
        port_given=port_given,
        default_protocol=default_protocol,
    ) + result
