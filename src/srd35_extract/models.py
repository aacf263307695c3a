"""
Record models for extracted SRD content.

Raw and parsed representations are peers: the cleaned source text is always
kept next to its structured form so every value can be audited.
"""

from typing import Any

from pydantic import BaseModel, Field


class Statblock(BaseModel):
    """A monster statblock table."""
    raw: dict[str, str] = Field(
        default_factory=dict,
        description="Cleaned cell text keyed by normalised row header",
    )
    parsed: dict[str, Any] = Field(
        default_factory=dict,
        description="Typed values for every recognised row",
    )


class MonsterRecord(BaseModel):
    """One crawled monster page."""
    name: str = Field(description="Page title without the 'SRD:' prefix")
    statblock: Statblock | None = Field(
        default=None,
        description="Statblock table, absent when the page has none",
    )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SpellField(BaseModel):
    """A spell field rewritten into its raw/structured pair."""
    raw: str = Field(description="Field text as found in the input record")
    structured: dict[str, Any] = Field(
        default_factory=dict,
        description="Caveat flags plus the normalised value",
    )


__all__ = ["Statblock", "MonsterRecord", "SpellField"]
