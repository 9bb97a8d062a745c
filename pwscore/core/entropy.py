from __future__ import annotations

import math
import re
import string
from typing import Iterable, Tuple

LOG2_10 = math.log2(10.0)
NUM_YEARS = 129.0  # years matched: 1900 - 2029
NUM_MONTHS = 12.0
NUM_DAYS = 31.0
NUM_TWO_DIGIT_YEARS = 100.0
SEPARATOR_BITS = 2.0

DIGIT_CARDINALITY = 10
UPPER_CARDINALITY = 26
LOWER_CARDINALITY = 26
SYMBOL_CARDINALITY = 33

_DIGITS = frozenset(string.digits)
_UPPER = frozenset(string.ascii_uppercase)
_LOWER = frozenset(string.ascii_lowercase)

# Common capitalization schemes only double the search space.
_START_UPPER = re.compile(r"[A-Z][^A-Z]+")
_END_UPPER = re.compile(r"[^A-Z]+[A-Z]")
_ALL_UPPER = re.compile(r"[A-Z]+")


def binom(n: int, k: int) -> float:
    """Binomial coefficient without factorials."""
    if k > n:
        return 0.0
    if k == 0:
        return 1.0
    result = 1.0
    remaining = float(n)
    for denom in range(1, k + 1):
        result *= remaining
        result /= denom
        remaining -= 1.0
    return result


def bruteforce_cardinality(text: str) -> int:
    """Size of the union of symbol classes used anywhere in `text`."""
    chars = set(text)
    space = 0
    if chars & _DIGITS:
        space += DIGIT_CARDINALITY
    if chars & _UPPER:
        space += UPPER_CARDINALITY
    if chars & _LOWER:
        space += LOWER_CARDINALITY
    if chars - _DIGITS - _UPPER - _LOWER:
        space += SYMBOL_CARDINALITY
    return space


def bruteforce_entropy(length: int, cardinality: float) -> float:
    if length <= 0 or cardinality <= 1:
        return 0.0
    return length * math.log2(cardinality)


def repeat_entropy(token: str) -> float:
    return math.log2(bruteforce_cardinality(token) * len(token))


def sequence_entropy(token: str, ascending: bool) -> float:
    first = token[0]
    if first in ("a", "1"):
        base = 1.0
    elif first in _DIGITS:
        base = LOG2_10
    elif first in _LOWER:
        base = math.log2(26)
    else:
        # upper case sequences cost one more bit
        base = math.log2(26) + 1
    if not ascending:
        base += 1
    return base + math.log2(len(token))


def digits_entropy(token: str) -> float:
    return len(token) * LOG2_10


def year_entropy() -> float:
    return math.log2(NUM_YEARS)


def date_entropy(two_digit_year: bool, separator: str) -> float:
    years = NUM_TWO_DIGIT_YEARS if two_digit_year else NUM_YEARS
    entropy = math.log2(NUM_DAYS * NUM_MONTHS * years)
    if separator:
        entropy += SEPARATOR_BITS
    return entropy


def spatial_entropy(
    token: str,
    turns: int,
    shifted_count: int,
    starting_positions: int,
    average_degree: float,
) -> float:
    """Patterns of length <= L with <= `turns` turns, plus bits for shifted keys."""
    s = starting_positions
    d = int(average_degree)
    length = len(token)
    possibilities = 0
    for i in range(2, length + 1):
        possible_turns = min(turns, i - 1)
        for j in range(1, possible_turns + 1):
            possibilities += round(binom(i - 1, j - 1)) * s * d**j
    if possibilities <= 0:
        return 0.0
    entropy = math.log2(possibilities)

    # same math as extra uppercase entropy: % instead of 5, A instead of a
    if shifted_count > 0:
        shifted = shifted_count
        unshifted = length - shifted_count
        entropy += math.log2(_flip_possibilities(shifted, unshifted))
    return entropy


def dictionary_base_entropy(rank: int) -> float:
    return math.log2(rank)


def extra_uppercase_entropy(token: str) -> float:
    if not any(ch in _UPPER for ch in token):
        return 0.0
    for rx in (_START_UPPER, _END_UPPER, _ALL_UPPER):
        if rx.fullmatch(token):
            return 1.0

    # ways to capitalize U+L letters with U uppercase or fewer (or the mirror
    # case for mostly-uppercase words like PASSwORD)
    upper = sum(1 for ch in token if ch in _UPPER)
    lower = sum(1 for ch in token if ch in _LOWER)
    return math.log2(_flip_possibilities(upper, lower))


def extra_l33t_entropy(token: str, sub: Iterable[Tuple[str, str]]) -> float:
    possibilities = 0.0
    for subbed, unsubbed in sub:
        possibilities += _flip_possibilities(token.count(subbed), token.count(unsubbed))
    if possibilities <= 1:
        return 1.0
    return math.log2(possibilities)


def _flip_possibilities(changed: int, unchanged: int) -> float:
    total = 0.0
    for i in range(0, min(changed, unchanged) + 1):
        total += binom(changed + unchanged, i)
    return total
