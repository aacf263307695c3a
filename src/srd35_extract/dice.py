"""
Hit-dice roll evaluator.

Reduces a roll specification such as ``"4d8+2"`` or ``"(1/2) + 1d4"`` to the
creature's hit-die count. Bonuses and die sizes are discarded; fractional hit
dice and compound ``a + b`` expressions are folded into a single number.
"""

from __future__ import annotations

import re

from .errors import MalformedRollSpec

_DIE_BONUS_RE = re.compile(r"(d\d+)[+\-]\d+")
_DIE_RE = re.compile(r"d\d+")
_FRACTION_RE = re.compile(r"\((\d+)/(\d+)\)")
_SUM_RE = re.compile(r"(\d+\.?\d*) \+ (\d+\.?\d*)")
_NUMBER_RE = re.compile(r"^\d+\.?\d*$")
_WHOLE_RE = re.compile(r"^\d+(\.0)?$")


def _format(value: float) -> str:
    return repr(float(value))


def parse_hit_dice(roll_specification: str) -> int | float:
    """Evaluate a roll specification to its hit-die count.

    Fractions are resolved before sums. Each resolved sub-expression becomes
    the whole working value, so anything after the first fraction or sum is
    dropped: ``"(1/2) + 1d4"`` evaluates to ``0.5``.

    Args:
        roll_specification: Cleaned dice expression.

    Returns:
        An int when the count is whole, otherwise a float.

    Raises:
        MalformedRollSpec: If the expression does not reduce to a number.
    """
    value = _DIE_BONUS_RE.sub(r"\1", roll_specification)
    value = _DIE_RE.sub("", value)

    while match := _FRACTION_RE.search(value):
        denominator = int(match.group(2))
        if denominator == 0:
            raise MalformedRollSpec(roll_specification)
        value = _format(int(match.group(1)) / denominator)

    while match := _SUM_RE.search(value):
        value = _format(float(match.group(1)) + float(match.group(2)))

    if not _NUMBER_RE.match(value):
        raise MalformedRollSpec(roll_specification)

    if _WHOLE_RE.match(value):
        return int(float(value))
    return float(value)


__all__ = ["parse_hit_dice"]
