from __future__ import annotations

import math
from typing import Iterable, List, Optional

from pwscore.core import entropy as calc
from pwscore.core.error_dialect import INVALID_REQUEST, make_error
from pwscore.core.models import BruteforceMatch, Match, Score

# Threat model: stolen salted hashes of a slow hash (bcrypt/scrypt/PBKDF2).
# 10ms per guess is a safe lower bound on fast hardware with a small work
# factor; the attacker runs 100 guessers in parallel and on average finds the
# password after searching half the space.
SINGLE_GUESS_SECONDS = 0.010
NUM_ATTACKERS = 100.0
SECONDS_PER_GUESS = SINGLE_GUESS_SECONDS / NUM_ATTACKERS

# 2.0 ** x overflows a float at x = 1024
_MAX_FINITE_EXPONENT = 1023.0

MINUTE = 60.0
HOUR = MINUTE * 60.0
DAY = HOUR * 24.0
MONTH = DAY * 31.0
YEAR = MONTH * 12.0
CENTURY = YEAR * 100.0

_TIME_UNITS = (
    (HOUR, MINUTE, "minutes"),
    (DAY, HOUR, "hours"),
    (MONTH, DAY, "days"),
    (YEAR, MONTH, "months"),
    (CENTURY, YEAR, "years"),
)


def round_to_x_digits(number: float, digits: int) -> float:
    return round(number, digits)


def entropy_to_crack_time(entropy_bits: float) -> float:
    if entropy_bits > _MAX_FINITE_EXPONENT:
        return math.inf
    return 2.0**entropy_bits * SECONDS_PER_GUESS / 2.0


def crack_time_to_score(seconds: float) -> int:
    if seconds < 1e2:
        return 0
    if seconds < 1e4:
        return 1
    if seconds < 1e6:
        return 2
    if seconds < 1e8:
        return 3
    return 4


def display_time(seconds: float) -> str:
    # every bucket reads one unit above the ceiling: 61 seconds is "3 minutes"
    if seconds < MINUTE:
        return "instant"
    for limit, unit, name in _TIME_UNITS:
        if seconds < limit:
            return f"{1 + math.ceil(seconds / unit)} {name}"
    return "centuries"


def _bruteforce_match(password: str, i: int, j: int, cardinality: int) -> BruteforceMatch:
    return BruteforceMatch(token=password[i : j + 1], i=i, j=j, cardinality=cardinality)


def minimum_entropy_match_sequence(password: str, matches: Iterable[Match]) -> Score:
    """Cheapest non-overlapping cover of `password` by `matches` plus brute force.

    Shortest path over the character boundaries 0..n: boundary k-1 -> k costs
    lg(cardinality); a match i..j links boundary i -> j+1 at its entropy.
    Edges only point forward, so one left-to-right pass settles every node.
    O(n + m) for a length-n password with m candidate matches.
    """
    n = len(password)
    cardinality = calc.bruteforce_cardinality(password)
    lg_cardinality = math.log2(cardinality) if cardinality > 1 else 0.0

    by_end: List[List[Match]] = [[] for _ in range(n)]
    for match in matches:
        if not 0 <= match.i <= match.j < n or password[match.i : match.j + 1] != match.token:
            raise make_error(
                INVALID_REQUEST,
                f"{match.pattern} match {match.i}..{match.j} does not fit the password",
            )
        by_end[match.j].append(match)

    up_to_k = [0.0] * (n + 1)
    backpointers: List[Optional[Match]] = [None] * (n + 1)
    for k in range(1, n + 1):
        up_to_k[k] = up_to_k[k - 1] + lg_cardinality
        for match in by_end[k - 1]:
            candidate = up_to_k[match.i] + match.entropy
            if candidate < up_to_k[k]:
                up_to_k[k] = candidate
                backpointers[k] = match

    chosen: List[Match] = []
    k = n
    while k > 0:
        match = backpointers[k]
        if match is None:
            k -= 1
        else:
            chosen.append(match)
            k = match.i
    chosen.reverse()

    match_sequence: List[Match] = []
    k = 0
    for match in chosen:
        if match.i > k:
            match_sequence.append(_bruteforce_match(password, k, match.i - 1, cardinality))
        match_sequence.append(match)
        k = match.j + 1
    if k < n:
        match_sequence.append(_bruteforce_match(password, k, n - 1, cardinality))

    min_entropy = up_to_k[n]
    crack_time = entropy_to_crack_time(min_entropy)
    return Score(
        password=password,
        entropy=round_to_x_digits(min_entropy, 3),
        crack_time=crack_time,
        crack_time_display=display_time(crack_time),
        value=crack_time_to_score(crack_time),
        match_sequence=tuple(match_sequence),
    )


score = minimum_entropy_match_sequence
