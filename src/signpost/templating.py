"""Kida template integration.

Registers ``url_for`` (and the ``BACK`` descriptor) as globals on a kida
Environment so templates resolve links the same way Python code does::

    env = Environment(loader=FileSystemLoader("templates"))
    register_url_helpers(env, resolver)

    <a href="{{ url_for(controller='books', action='index') }}">Books</a>
    <a href="{{ url_for(workshop) }}">{{ workshop.title }}</a>
    <a href="{{ url_for(BACK) }}">Back</a>
"""

from collections.abc import Callable
from typing import Any

from kida import Environment

from signpost.descriptors import BACK, Name
from signpost.resolver import UrlResolver


def template_url_for(resolver: UrlResolver) -> Callable[..., str]:
    """Build the template-facing ``url_for``.

    Accepts a single descriptor, or route parameters as keywords. When
    both are given the keywords are appended as a trailing options map
    to a segment list, or merged into a parameter map.
    """

    def url_for(descriptor: Any = None, **params: Any) -> str:
        if not params:
            return resolver.url_for(descriptor)
        if descriptor is None:
            return resolver.url_for(params)
        if isinstance(descriptor, dict):
            return resolver.url_for({**descriptor, **params})
        if isinstance(descriptor, list | tuple):
            return resolver.url_for([*descriptor, params])
        return resolver.url_for([descriptor, params])

    return url_for


def register_url_helpers(env: Environment, resolver: UrlResolver) -> Environment:
    """Install ``url_for``, ``route`` and ``BACK`` as template globals."""
    env.add_global("url_for", template_url_for(resolver))
    env.add_global("route", Name)
    env.add_global("BACK", BACK)
    return env
