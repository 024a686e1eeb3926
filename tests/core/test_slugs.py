"""Slug Generation — category URL slugs derived from names.

Tests cover:
    - punctuation dropped, whitespace runs collapsed to one dash
    - surrounding whitespace trimmed
    - existing dashes kept as-is
"""

import pytest

from storefront.core.slugs import generate_slug


@pytest.mark.parametrize("name, slug", [
    ("Men's Polo Shirts!", "mens-polo-shirts"),
    ("  Electronics  ", "electronics"),
    ("Home   Decor", "home-decor"),
    ("Home & Garden", "home--garden"),
    ("T-Shirts 2024", "t-shirts-2024"),
    ("Ünïcode", "ncode"),
])
def test_generate_slug(name, slug):
    assert generate_slug(name) == slug
