"""
Exception hierarchy for srd35-extract.

Every failure a field parser or fetcher can signal derives from ExtractError,
so the record assemblers can drop a single record and keep going without
intercepting unrelated programming errors.
"""

from __future__ import annotations


class ExtractError(Exception):
    """Base error for a record that cannot be extracted."""


class UnrecognizedValue(ExtractError):
    """A value is not a member of its closed vocabulary."""

    def __init__(self, field: str, text: str):
        self.field = field
        self.text = text
        super().__init__(f"Unknown {field}: '{text}'.")


class MalformedRollSpec(ExtractError):
    """A hit-dice roll specification did not reduce to a number."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Bad roll specification for HD: '{text}'.")


class UnknownStatblockField(ExtractError):
    """A statblock row header is not one of the known rows."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"Unknown statblock header: '{header}'.")


class UnparsedPattern(ExtractError):
    """A field value matches none of the shapes its parser knows."""

    def __init__(self, field: str, text: str):
        self.field = field
        self.text = text
        super().__init__(f"Non-parsed {field}: '{text}'.")


class MissingLookup(ExtractError):
    """A required lookup table has no entry for a record."""

    def __init__(self, table: str, key: str):
        self.table = table
        self.key = key
        super().__init__(f"No {table} entry for '{key}'.")


class MissingElement(ExtractError):
    """A source page lacks an element every record needs."""

    def __init__(self, selector: str, source: str = ""):
        self.selector = selector
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Missing element '{selector}'{where}.")


class FetchError(ExtractError):
    """A source page could not be fetched or read from the cache."""


__all__ = [
    "ExtractError",
    "UnrecognizedValue",
    "MalformedRollSpec",
    "UnknownStatblockField",
    "UnparsedPattern",
    "MissingLookup",
    "MissingElement",
    "FetchError",
]
