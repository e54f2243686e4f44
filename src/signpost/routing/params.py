"""Path parameter converters for URL generation.

Built-in converters for route path segments like ``{id:int}``. Where a
matcher would parse a captured string, generation goes the other way:
a Python value is checked against the converter and rendered into the
path, percent-encoded.
"""

import re
from urllib.parse import quote

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}

_COMPILED: dict[str, re.Pattern[str]] = {
    name: re.compile(f"^{pattern}$") for name, (pattern, _) in CONVERTERS.items()
}


def format_param(value: object, param_type: str) -> str | None:
    """Render *value* for a ``{name:param_type}`` segment.

    Returns the percent-encoded segment, or None when the value does not
    satisfy the converter (``"abc"`` for an ``int`` segment, an empty
    string for any segment). ``path`` segments keep their slashes.

    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    pattern = _COMPILED[param_type]
    if value is None or isinstance(value, bool):
        return None
    text = str(value)
    if not pattern.match(text):
        return None
    safe = "/" if param_type == "path" else ""
    return quote(text, safe=safe + "-._~!$&'()*+,;=:@")
