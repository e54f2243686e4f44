"""Route-key inflection.

Derives the named-route stem for a record type: ``BlogPost`` becomes
``blog_post`` (singular) and ``blog_posts`` (plural). Small rule tables
rather than a full inflector; records with unusual names can set
``__route_key__`` on the class.
"""

import re

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

_UNCOUNTABLE = frozenset(
    {"equipment", "information", "rice", "money", "species", "series", "fish", "sheep", "news", "data"}
)

_IRREGULAR = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "mouse": "mice",
    "goose": "geese",
    "ox": "oxen",
}

# (pattern, replacement) tried in order; first match wins
_PLURAL_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(quiz)$"), r"\1zes"),
    (re.compile(r"(matr|vert|ind)(?:ix|ex)$"), r"\1ices"),
    (re.compile(r"(x|ch|ss|sh|z)$"), r"\1es"),
    (re.compile(r"([^aeiouy]|qu)y$"), r"\1ies"),
    (re.compile(r"(?:([^f])fe|([lr])f)$"), r"\1\2ves"),
    (re.compile(r"sis$"), "ses"),
    (re.compile(r"(bu|stat|octop|vir)us$"), r"\1uses"),
    (re.compile(r"(bu)s$"), r"\1ses"),
    (re.compile(r"(buffal|tomat|potat|her)o$"), r"\1oes"),
    (re.compile(r"s$"), "s"),
    (re.compile(r"$"), "s"),
)


def underscore(name: str) -> str:
    """Convert a CamelCase identifier to snake_case.

    Examples::

        "Workshop"     -> "workshop"
        "BlogPost"     -> "blog_post"
        "HTTPRequest"  -> "http_request"
    """
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


def pluralize(word: str) -> str:
    """Return the plural of a snake_case route key.

    Only the last ``_``-separated word is inflected, so ``blog_post``
    becomes ``blog_posts`` and ``admin_person`` becomes ``admin_people``.
    """
    head, sep, last = word.rpartition("_")
    if not last or last in _UNCOUNTABLE:
        return word
    if last in _IRREGULAR:
        return f"{head}{sep}{_IRREGULAR[last]}"
    for pattern, replacement in _PLURAL_RULES:
        if pattern.search(last):
            return f"{head}{sep}{pattern.sub(replacement, last, count=1)}"
    return word


def route_key_for_type(cls: type) -> str:
    """Singular route key for a class.

    ``__route_key__`` on the class is used verbatim. Otherwise the
    qualified name is used, so a nested ``Admin.Workshop`` maps to
    ``admin_workshop``. Function-local classes ignore the ``<locals>``
    part of their qualified name.
    """
    explicit = getattr(cls, "__route_key__", None)
    if isinstance(explicit, str) and explicit:
        return explicit
    parts = [p for p in cls.__qualname__.split(".") if not p.startswith("<")]
    if "<locals>" in cls.__qualname__:
        parts = parts[-1:]
    return "_".join(underscore(p) for p in parts)
