"""Raw ASGI scope helpers.

Only the pieces of an HTTP scope that URL generation needs: scheme,
host, mount point, and the referer.
"""

from collections.abc import MutableMapping
from typing import Any, TypeAlias

# Raw ASGI scope, as servers pass it
Scope: TypeAlias = MutableMapping[str, Any]


def scope_header(scope: Scope, name: str) -> str | None:
    """Return the first header *name* from a raw ASGI scope, or None.

    Header names are compared case-insensitively; values are decoded
    as latin-1 like every other ASGI header.
    """
    wanted = name.lower().encode("latin-1")
    for raw_name, raw_value in scope.get("headers", ()):
        if raw_name.lower() == wanted:
            return raw_value.decode("latin-1")
    return None
