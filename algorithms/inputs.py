"""
inputs.py — Input Parsing & Validation
=======================================
The view hands us either a list of numbers or the raw text of an
input box ("64, 34, 25, 12"). Both end up as a fresh list that the
generator can own. Validation happens here, before any Step exists.
"""

import math
import random
from typing import Any, Iterable, List, Optional

from algorithms.errors import InvalidInputError
from algorithms.step import Number


def parse_input(text: str) -> List[Number]:
    """
    Split comma-separated text into numbers, silently dropping tokens
    that are not numeric ("12, x, 7" → [12, 7]).
    """
    values: List[Number] = []
    for token in text.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            values.append(int(token))
            continue
        except ValueError:
            pass
        try:
            values.append(float(token))
        except ValueError:
            continue
    return values


def validate_values(values: Iterable[Number]) -> List[Number]:
    """Return a defensive copy of `values`, or raise InvalidInputError."""
    if values is None:
        raise InvalidInputError("Input is empty — enter at least one number.")
    if isinstance(values, str):
        values = parse_input(values)
    try:
        values = list(values)
    except TypeError:
        raise InvalidInputError(f"Input must be a list of numbers, got {type(values).__name__}") from None

    checked: List[Number] = []
    for pos, v in enumerate(values):
        # bool is an int subclass but "True, False" is not a numeric array
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise InvalidInputError(f"Value at position {pos} is not a number: {v!r}")
        if isinstance(v, float) and not math.isfinite(v):
            raise InvalidInputError(f"Value at position {pos} is not finite: {v!r}")
        checked.append(v)

    if not checked:
        raise InvalidInputError("Input is empty — enter at least one number.")
    return checked


def validate_seed(seed: Any) -> Optional[int]:
    """Seeds are plain integers or None."""
    if seed is None:
        return None
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise InvalidInputError(f"Seed must be an integer, got {seed!r}")
    return seed


def validate_size(size: Any) -> int:
    """Array size for random_input; accepts numeric text from a form field."""
    if isinstance(size, bool):
        raise InvalidInputError(f"Array size must be an integer, got {size!r}")
    try:
        return int(size)
    except (TypeError, ValueError):
        raise InvalidInputError(f"Array size must be an integer, got {size!r}") from None


def make_rng(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> random.Random:
    """An explicit rng wins; otherwise seeded if `seed` is given, else unseeded."""
    if rng is not None:
        return rng
    return random.Random(validate_seed(seed))


def random_input(
    size: int = 7,
    low: int = 1,
    high: int = 99,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """Random integer array for the "shuffle" button."""
    if size < 1:
        raise InvalidInputError(f"Array size must be at least 1, got {size}")
    if low > high:
        raise InvalidInputError(f"Empty value range [{low}, {high}]")
    r = make_rng(seed, rng)
    return [r.randint(low, high) for _ in range(size)]
