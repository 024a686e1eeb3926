"""Slug generation for category URLs."""

import re

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")


def generate_slug(name: str) -> str:
    """Lower-case, trim, whitespace runs to '-', drop anything outside [a-z0-9-].

    >>> generate_slug("Men's Polo Shirts!")
    'mens-polo-shirts'
    """
    slug = _WHITESPACE.sub("-", name.lower().strip())
    return _DISALLOWED.sub("", slug)
