"""
Slug generation utility
"""
import re
import unicodedata
from typing import Iterable


def generate_slug(text: str) -> str:
    """
    Generate a URL-friendly slug from text

    Args:
        text: Text to convert to slug

    Returns:
        Slug made of lowercase ASCII letters, digits and single hyphens,
        or an empty string when nothing usable remains
    """
    if not text:
        return ""

    # Remove accents/diacritics
    text = unicodedata.normalize('NFKD', text)
    text = text.encode('ascii', 'ignore').decode('ascii')

    text = text.lower().strip()

    # Drop everything but letters, digits, whitespace and hyphens
    text = re.sub(r'[^\w\s-]', '', text)
    # Whitespace, underscores and hyphens collapse into one hyphen
    text = re.sub(r'[\s_-]+', '-', text)

    return text.strip('-')


# Name used by the form controllers
slugify = generate_slug


def make_unique_slug(base_slug: str, existing_slugs: Iterable[str], max_length: int = 255) -> str:
    """
    Make a slug unique by appending a number if needed

    Args:
        base_slug: Base slug to make unique
        existing_slugs: Slugs already taken
        max_length: Maximum length of the slug

    Returns:
        Unique slug
    """
    taken = set(existing_slugs)
    slug = base_slug[:max_length]
    counter = 1

    while slug in taken:
        suffix = f"-{counter}"
        # Ensure we don't exceed max_length
        available_length = max_length - len(suffix)
        slug = f"{base_slug[:available_length]}{suffix}"
        counter += 1

    return slug
