"""
Ordered text rewrites.

Field parsers describe their corpus fix-ups as tuples of Rewrite entries that
are applied strictly in order; later entries often rely on text produced by
earlier ones.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Rewrite:
    """One substitution step.

    A ``str`` pattern is replaced literally, an ``re.Pattern`` as a regex
    (``\\1`` style group references allowed in the replacement).
    ``count`` 0 replaces every occurrence, 1 only the first.
    """
    pattern: str | re.Pattern[str]
    replacement: str
    count: int = 0

    def apply(self, text: str) -> str:
        if isinstance(self.pattern, re.Pattern):
            return self.pattern.sub(self.replacement, text, count=self.count)
        return text.replace(self.pattern, self.replacement, self.count or -1)


def every(pattern: str | re.Pattern[str], replacement: str) -> Rewrite:
    """Rewrite all occurrences."""
    return Rewrite(pattern, replacement, 0)


def first(pattern: str | re.Pattern[str], replacement: str) -> Rewrite:
    """Rewrite the first occurrence only."""
    return Rewrite(pattern, replacement, 1)


def apply_rewrites(text: str, rewrites: Iterable[Rewrite]) -> str:
    for rewrite in rewrites:
        text = rewrite.apply(text)
    return text


def rewrite_until_stable(text: str, pattern: re.Pattern[str], replacement: str) -> str:
    """Apply a single-occurrence regex rewrite until it stops matching."""
    while True:
        updated = pattern.sub(replacement, text, count=1)
        if updated == text:
            return text
        text = updated


__all__ = ["Rewrite", "every", "first", "apply_rewrites", "rewrite_until_stable"]
