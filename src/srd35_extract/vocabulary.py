"""
Closed vocabularies for creature size, type and subtype.

The sets are built once at import time and passed explicitly to the
normalisers, so tests can substitute their own vocabularies.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import UnrecognizedValue


@dataclass(frozen=True)
class Vocabulary:
    """A named, immutable set of lowercase values."""
    field: str
    values: frozenset[str]

    def __contains__(self, value: object) -> bool:
        return value in self.values

    def __len__(self) -> int:
        return len(self.values)

    def normalize(self, text: str) -> str:
        """Lower-case and trim ``text``, then require membership.

        Raises:
            UnrecognizedValue: If the normalised text is not in the vocabulary.
        """
        value = text.lower().strip()
        if value not in self.values:
            raise UnrecognizedValue(self.field, value)
        return value


SIZES = Vocabulary("size", frozenset({
    "fine",
    "diminutive",
    "tiny",
    "small",
    "medium",
    "large",
    "huge",
    "gargantuan",
    "colossal",
}))

TYPES = Vocabulary("type", frozenset({
    "aberration",
    "animal",
    "construct",
    "dragon",
    "elemental",
    "fey",
    "giant",
    "humanoid",
    "magical beast",
    "monstrous humanoid",
    "ooze",
    "outsider",
    "plant",
    "undead",
    "vermin",
}))

SUBTYPES = Vocabulary("subtype", frozenset({
    "air",
    "aquatic",
    "archon",
    "chaotic",
    "cold",
    "dwarf",
    "earth",
    "elf",
    "evil",
    "extraplanar",
    "fire",
    "gnome",
    "goblinoid",
    "good",
    "halfling",
    "human",
    "incorporeal",
    "lawful",
    "maenad",
    "native",
    "orc",
    "psionic",
    "reptilian",
    "shapechanger",
    "water",
    "xeph",
}))


@dataclass(frozen=True)
class Vocabularies:
    """The three creature vocabularies used by the statblock parser."""
    sizes: Vocabulary = field(default=SIZES)
    types: Vocabulary = field(default=TYPES)
    subtypes: Vocabulary = field(default=SUBTYPES)


DEFAULT_VOCABULARIES = Vocabularies()


def normalize_size(text: str, vocabulary: Vocabulary = SIZES) -> str:
    return vocabulary.normalize(text)


def normalize_type(text: str, vocabulary: Vocabulary = TYPES) -> str:
    return vocabulary.normalize(text)


def normalize_subtype(text: str, vocabulary: Vocabulary = SUBTYPES) -> str:
    return vocabulary.normalize(text)


__all__ = [
    "Vocabulary",
    "Vocabularies",
    "SIZES",
    "TYPES",
    "SUBTYPES",
    "DEFAULT_VOCABULARIES",
    "normalize_size",
    "normalize_type",
    "normalize_subtype",
]
