from __future__ import annotations

from dataclasses import dataclass, fields
from functools import cached_property
import math
from typing import Any, ClassVar, Dict, Tuple

from pwscore.core import entropy as calc


def _format_bits(bits: float) -> str:
    if not math.isfinite(bits):
        return "unknown"
    rounded = round(bits, 3)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.3f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class Match:
    """Candidate explanation for password[i..j] (inclusive, code point offsets)."""

    pattern: ClassVar[str] = ""

    token: str
    i: int
    j: int

    def __post_init__(self) -> None:
        assert 0 <= self.i <= self.j, f"invalid match span {self.i}..{self.j}"

    @cached_property
    def entropy(self) -> float:
        return self._entropy()

    def _entropy(self) -> float:
        raise NotImplementedError

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"pattern": self.pattern}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = [list(pair) for pair in value] if f.name == "sub" else value
        out["entropy"] = round(self.entropy, 3)
        return out


@dataclass(frozen=True)
class DictionaryMatch(Match):
    pattern: ClassVar[str] = "dictionary"

    matched_word: str
    rank: int
    dictionary_name: str
    l33t: bool = False
    sub: Tuple[Tuple[str, str], ...] = ()
    sub_display: str = ""

    @cached_property
    def base_entropy(self) -> float:
        return calc.dictionary_base_entropy(self.rank)

    @cached_property
    def uppercase_entropy(self) -> float:
        return calc.extra_uppercase_entropy(self.token)

    @cached_property
    def l33t_entropy(self) -> float:
        if not self.l33t:
            return 0.0
        return calc.extra_l33t_entropy(self.token, self.sub)

    def _entropy(self) -> float:
        return self.base_entropy + self.uppercase_entropy + self.l33t_entropy


@dataclass(frozen=True)
class SpatialMatch(Match):
    pattern: ClassVar[str] = "spatial"

    graph: str
    turns: int
    shifted_count: int
    starting_positions: int
    average_degree: float

    def _entropy(self) -> float:
        return calc.spatial_entropy(
            self.token,
            self.turns,
            self.shifted_count,
            self.starting_positions,
            self.average_degree,
        )


@dataclass(frozen=True)
class RepeatMatch(Match):
    pattern: ClassVar[str] = "repeat"

    repeated_char: str

    def _entropy(self) -> float:
        return calc.repeat_entropy(self.token)


@dataclass(frozen=True)
class SequenceMatch(Match):
    pattern: ClassVar[str] = "sequence"

    sequence_name: str
    sequence_space: int
    ascending: bool

    def _entropy(self) -> float:
        return calc.sequence_entropy(self.token, self.ascending)


@dataclass(frozen=True)
class DigitsMatch(Match):
    pattern: ClassVar[str] = "digits"

    def _entropy(self) -> float:
        return calc.digits_entropy(self.token)


@dataclass(frozen=True)
class YearMatch(Match):
    pattern: ClassVar[str] = "year"

    def _entropy(self) -> float:
        return calc.year_entropy()


@dataclass(frozen=True)
class DateMatch(Match):
    pattern: ClassVar[str] = "date"

    day: int
    month: int
    year: int
    separator: str = ""
    two_digit_year: bool = False

    def _entropy(self) -> float:
        return calc.date_entropy(self.two_digit_year, self.separator)


@dataclass(frozen=True)
class BruteforceMatch(Match):
    pattern: ClassVar[str] = "bruteforce"

    cardinality: int

    def _entropy(self) -> float:
        return calc.bruteforce_entropy(len(self.token), self.cardinality)


@dataclass(frozen=True)
class Score:
    password: str
    entropy: float
    crack_time: float
    crack_time_display: str
    value: int
    match_sequence: Tuple[Match, ...]
    calc_time: float = 0.0

    def as_lines(self, show_matches: bool = False) -> Tuple[str, ...]:
        lines = [
            f"entropy={_format_bits(self.entropy)} crack_time={self.crack_time_display} score={self.value}"
        ]
        if show_matches:
            for match in self.match_sequence:
                lines.append(
                    f"  [{match.pattern}] {match.i}..{match.j} token={match.token!r} "
                    f"entropy={_format_bits(match.entropy)}"
                )
        return tuple(lines)

    def as_dict(self, show_matches: bool = False) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "entropy": self.entropy,
            "crack_time": self.crack_time,
            "crack_time_display": self.crack_time_display,
            "score": self.value,
            "calc_time": self.calc_time,
        }
        if show_matches:
            out["match_sequence"] = [match.as_dict() for match in self.match_sequence]
        return out
