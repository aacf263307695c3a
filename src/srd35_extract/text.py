"""
Text cleaning shared by both pipelines.
"""

import re

# Look-alike punctuation found in the wiki and SRD pages.
CHARACTER_SUBS: tuple[tuple[str, str], ...] = (
    ("–", "-"),  # en dash
    ("—", "-"),  # em dash
    ("−", "-"),  # minus sign
    ("’", "'"),  # right single quotation mark
)

_WHITESPACE_RE = re.compile(r"\s+")
_TRAILING_COLON_RE = re.compile(r":\s*$")


def clean(text: str | None) -> str:
    """Collapse whitespace, trim, and map look-alike punctuation to ASCII."""
    if not text:
        return ""
    text = _WHITESPACE_RE.sub(" ", text).strip()
    for old, new in CHARACTER_SUBS:
        text = text.replace(old, new)
    return text


def normalize_header(text: str | None) -> str:
    """Turn a statblock row header into its field key.

    'Base Attack/Grapple:' -> 'base_attack/grapple'
    """
    text = _TRAILING_COLON_RE.sub("", clean(text)).strip().lower()
    return _WHITESPACE_RE.sub("_", text)


__all__ = ["CHARACTER_SUBS", "clean", "normalize_header"]
