# kushon/utils/slug.py
import re

_INVALID_CHARS = re.compile(r'[^a-z0-9\s-]')
_WHITESPACE = re.compile(r'\s+')
_DASHES = re.compile(r'-+')

def generate_slug(name: str) -> str:
    """Lowercase the name, drop anything outside [a-z0-9], whitespace and '-', then hyphenate.

    >>> generate_slug("One Piece: Vol. 1")
    'one-piece-vol-1'
    """
    slug = _INVALID_CHARS.sub('', name.lower())
    slug = _WHITESPACE.sub('-', slug)
    slug = _DASHES.sub('-', slug)
    return slug.strip()
