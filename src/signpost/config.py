"""Resolver configuration.

ResolverConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Resolver configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ResolverConfig(default_host="example.com", default_protocol="https")
    """

    # Generation mode: relative paths unless a caller asks for a full URL
    generate_paths_by_default: bool = True

    # Fallbacks for full URLs when the routing context has no request
    default_protocol: str = "http"
    default_host: str | None = None
    default_port: int | None = None

    # Mount point prepended to every generated path
    script_name: str = ""

    # Append "/" to every generated path
    trailing_slash: bool = False

    # Returned for BACK when the referer is missing or unusable
    back_fallback: str = "javascript:history.back()"
