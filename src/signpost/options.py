"""Option normalization.

Coerces a caller's parameter map into the canonical form the route
generator expects: string keys, the URL option vocabulary spelled one
way, and ``only_path`` always decided.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

# Canonical URL option names, keyed by their case/separator-folded form
_VOCABULARY = {
    key.replace("_", ""): key
    for key in (
        "anchor",
        "only_path",
        "trailing_slash",
        "host",
        "protocol",
        "port",
        "user",
        "password",
        "script_name",
        "controller",
        "action",
    )
}


def canonical_key(key: object) -> str:
    """Coerce a mapping key to its canonical string form.

    ``bytes`` are decoded, enum members contribute their value (or name),
    anything else goes through ``str``. Spellings of the URL option
    vocabulary in any case or separator style are folded
    (``onlyPath``, ``Only-Path`` and ``ONLY_PATH`` all become ``only_path``);
    other route parameters keep their spelling.
    """
    if isinstance(key, Enum):
        key = key.value if isinstance(key.value, str) else key.name
    if isinstance(key, bytes):
        key = key.decode("utf-8")
    text = str(key)
    folded = text.strip().replace("-", "").replace("_", "").lower()
    return _VOCABULARY.get(folded, text)


def only_path_for(host: Any, generate_paths_by_default: bool) -> bool:
    """Generation mode for a map that did not choose one.

    A path whenever paths are the default and no host override was given;
    a full URL when a host is supplied, so the host is never dropped.
    """
    return generate_paths_by_default and not host


def normalize_options(raw: Mapping[Any, Any], *, generate_paths_by_default: bool = True) -> dict[str, Any]:
    """Return a canonical copy of *raw* with ``only_path`` decided.

    A caller-supplied ``only_path`` is never overwritten. Every other
    value passes through unmodified; *raw* itself is not mutated.
    """
    options = {canonical_key(k): v for k, v in raw.items()}
    if "only_path" not in options:
        options["only_path"] = only_path_for(options.get("host"), generate_paths_by_default)
    return options
