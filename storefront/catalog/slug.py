"""Slug generation for catalog names."""

from slugify import slugify as _slugify

EMPTY_SLUG = "n-a"


def slugify(text: str | None) -> str:
    """Turn arbitrary text into a lowercase ASCII slug.

    Characters are transliterated where possible and dropped otherwise,
    runs of anything that is not a letter or digit become a single hyphen.
    Never returns an empty string.

    Args:
        text: Text to normalize.

    Returns:
        Slug, or ``"n-a"`` when nothing usable is left.
    """
    slug = _slugify((text or "").strip(), lowercase=True, separator="-")
    return slug or EMPTY_SLUG
