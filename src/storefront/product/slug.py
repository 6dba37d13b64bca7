"""URL slugs derived from product names."""

import re

_DISALLOWED = re.compile(r"[^a-z0-9 -]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(name: str) -> str:
    """'Pro Laptop 15" (2024)' -> 'pro-laptop-15-2024'."""
    slug = _DISALLOWED.sub("", (name or "").lower())
    slug = _WHITESPACE.sub("-", slug.strip())
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")
