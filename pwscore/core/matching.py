from __future__ import annotations

from dataclasses import replace
from functools import lru_cache
import re
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from pwscore.core.adjacency_graphs import AdjacencyGraph
from pwscore.core.frequency_lists import build_ranked_dict
from pwscore.core.models import (
    DateMatch,
    DictionaryMatch,
    DigitsMatch,
    Match,
    RepeatMatch,
    SequenceMatch,
    SpatialMatch,
    YearMatch,
)
from pwscore.core.resources import MatchResources, default_resources

USER_INPUTS_DICTIONARY = "user_inputs"

L33T_TABLE: Mapping[str, Tuple[str, ...]] = {
    "a": ("4", "@"),
    "b": ("8",),
    "c": ("(", "{", "[", "<"),
    "e": ("3",),
    "g": ("6", "9"),
    "i": ("1", "!", "|"),
    "l": ("1", "|", "7"),
    "o": ("0",),
    "s": ("$", "5"),
    "t": ("+", "7"),
    "x": ("%",),
    "z": ("2",),
}

# The digit sequence keeps its trailing zero; lookups resolve to the first '0'.
SEQUENCES: Tuple[Tuple[str, str], ...] = (
    ("lower", "abcdefghijklmnopqrstuvwxyz"),
    ("upper", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
    ("digits", "01234567890"),
)

DIGITS_RX = re.compile(r"\d{3,}", re.ASCII)
YEAR_RX = re.compile(r"19\d\d|200\d|201\d|202\d", re.ASCII)
DATE_RX = re.compile(
    r"(\d{1,2})( |-|/|\.|_)?(\d{1,2})( |-|/|\.|_)?(19\d{2}|200\d|201\d|202\d|\d{2})",
    re.ASCII,
)


class PatternMatcher(Protocol):
    def scan(self, password: str) -> List[Match]: ...


class DictionaryMatcher:
    def __init__(self, name: str, ranked_dict: Mapping[str, int]) -> None:
        self.name = name
        self._ranked = ranked_dict
        self._max_word_len = max((len(word) for word in ranked_dict), default=0)

    def scan(self, password: str) -> List[Match]:
        # Lowercase per character so offsets stay aligned with `password`
        # even when a character lowercases to several code points.
        lowered = [ch.lower() for ch in password]
        n = len(password)
        out: List[Match] = []
        for i in range(n):
            word = ""
            for j in range(i, n):
                word += lowered[j]
                if len(word) > self._max_word_len:
                    break
                rank = self._ranked.get(word)
                if rank is not None:
                    out.append(
                        DictionaryMatch(
                            token=password[i : j + 1],
                            i=i,
                            j=j,
                            matched_word=word,
                            rank=rank,
                            dictionary_name=self.name,
                        )
                    )
        return out


def user_inputs_matcher(user_inputs: Iterable[str]) -> DictionaryMatcher:
    return DictionaryMatcher(USER_INPUTS_DICTIONARY, build_ranked_dict(user_inputs))


def relevant_l33t_subtable(password: str) -> Dict[str, List[str]]:
    """Pruned copy of L33T_TABLE with only the glyphs present in `password`."""
    present = set(password)
    filtered: Dict[str, List[str]] = {}
    for letter, glyphs in L33T_TABLE.items():
        relevant = [glyph for glyph in glyphs if glyph in present]
        if relevant:
            filtered[letter] = relevant
    return filtered


def enumerate_l33t_subs(table: Mapping[str, Sequence[str]]) -> List[Dict[str, str]]:
    """Every distinct glyph -> letter assignment the table allows.

    A glyph shared by two letters ('1' is both 'i' and 'l') forks the
    assignment into one branch per letter.
    """
    subs: List[List[Tuple[str, str]]] = [[]]
    for letter, glyphs in table.items():
        next_subs: List[List[Tuple[str, str]]] = []
        for glyph in glyphs:
            for sub in subs:
                dup_index = next((idx for idx, (g, _) in enumerate(sub) if g == glyph), -1)
                if dup_index == -1:
                    next_subs.append(sub + [(glyph, letter)])
                else:
                    alternative = sub[:dup_index] + sub[dup_index + 1 :] + [(glyph, letter)]
                    next_subs.append(sub)
                    next_subs.append(alternative)
        subs = _dedup_subs(next_subs)
    return [dict(sub) for sub in subs]


def _dedup_subs(subs: List[List[Tuple[str, str]]]) -> List[List[Tuple[str, str]]]:
    deduped: List[List[Tuple[str, str]]] = []
    seen: set[str] = set()
    for sub in subs:
        assoc = sorted(sub, key=lambda pair: (pair[0].lower(), pair[0]))
        label = "-".join(f"{glyph},{letter}" for glyph, letter in assoc)
        if label not in seen:
            seen.add(label)
            deduped.append(sub)
    return deduped


class L33tMatcher:
    def __init__(self, dictionary_matchers: Sequence[DictionaryMatcher]) -> None:
        self._dictionary_matchers = tuple(dictionary_matchers)

    def scan(self, password: str) -> List[Match]:
        out: List[Match] = []
        n = len(password)
        for sub in enumerate_l33t_subs(relevant_l33t_subtable(password)):
            if not sub:
                break
            subbed = password.translate(str.maketrans(sub))
            for matcher in self._dictionary_matchers:
                for match in matcher.scan(subbed):
                    # offsets are code point positions in `subbed`; map them back
                    # onto `password` only when they land inside it
                    if not (0 <= match.i <= match.j < n) or len(subbed) != n:
                        continue
                    token = password[match.i : match.j + 1]
                    # only keep matches that contain an actual substitution
                    if token.lower() == match.matched_word:
                        continue
                    used = tuple((glyph, letter) for glyph, letter in sub.items() if glyph in token)
                    out.append(
                        replace(
                            match,
                            token=token,
                            l33t=True,
                            sub=used,
                            sub_display=", ".join(f"{glyph} -> {letter}" for glyph, letter in used),
                        )
                    )
        return out


class SpatialMatcher:
    def __init__(self, graphs: Mapping[str, AdjacencyGraph]) -> None:
        self._graphs = tuple(graphs.values())

    def scan(self, password: str) -> List[Match]:
        out: List[Match] = []
        for graph in self._graphs:
            out.extend(self._scan_graph(password, graph))
        return out

    @staticmethod
    def _scan_graph(password: str, graph: AdjacencyGraph) -> List[Match]:
        out: List[Match] = []
        n = len(password)
        i = 0
        while i < n - 1:
            j = i + 1
            last_direction = -1
            turns = 0
            shifted_count = 0
            while True:
                found = False
                if j < n:
                    cur_char = password[j]
                    for direction, adjacent in enumerate(graph.neighbors.get(password[j - 1], ())):
                        if adjacent is None or cur_char not in adjacent:
                            continue
                        found = True
                        # position 1 of a neighbour token is its shifted character: '@' in '2@'
                        if adjacent.index(cur_char) == 1:
                            shifted_count += 1
                        # the first step always counts as a turn
                        if last_direction != direction:
                            turns += 1
                            last_direction = direction
                        break
                if found:
                    j += 1
                    continue
                if j - i > 2:
                    out.append(
                        SpatialMatch(
                            token=password[i:j],
                            i=i,
                            j=j - 1,
                            graph=graph.name,
                            turns=turns,
                            shifted_count=shifted_count,
                            starting_positions=graph.starting_positions,
                            average_degree=graph.average_degree,
                        )
                    )
                i = j
                break
        return out


class RepeatMatcher:
    def scan(self, password: str) -> List[Match]:
        out: List[Match] = []
        n = len(password)
        i = 0
        while i < n:
            j = i + 1
            while j < n and password[j] == password[i]:
                j += 1
            if j - i > 2:
                out.append(RepeatMatch(token=password[i:j], i=i, j=j - 1, repeated_char=password[i]))
            i = j
        return out


class SequenceMatcher:
    def scan(self, password: str) -> List[Match]:
        out: List[Match] = []
        n = len(password)
        i = 0
        while i < n:
            j = i + 1
            found = self._find_sequence(password, i)
            if found is not None:
                name, seq, direction = found
                while j < n:
                    prev_n = seq.find(password[j - 1])
                    cur_n = seq.find(password[j])
                    if prev_n == -1 or cur_n == -1 or cur_n - prev_n != direction:
                        break
                    j += 1
                if j - i > 2:
                    out.append(
                        SequenceMatch(
                            token=password[i:j],
                            i=i,
                            j=j - 1,
                            sequence_name=name,
                            sequence_space=len(seq),
                            ascending=direction == 1,
                        )
                    )
            i = j
        return out

    @staticmethod
    def _find_sequence(password: str, i: int) -> Optional[Tuple[str, str, int]]:
        if i + 1 >= len(password):
            return None
        for name, seq in SEQUENCES:
            i_n = seq.find(password[i])
            j_n = seq.find(password[i + 1])
            if i_n == -1 or j_n == -1:
                continue
            direction = j_n - i_n
            if direction in (1, -1):
                return name, seq, direction
        return None


class DigitsMatcher:
    def scan(self, password: str) -> List[Match]:
        return [DigitsMatch(token=m.group(0), i=m.start(), j=m.end() - 1) for m in DIGITS_RX.finditer(password)]


class YearMatcher:
    def scan(self, password: str) -> List[Match]:
        return [YearMatch(token=m.group(0), i=m.start(), j=m.end() - 1) for m in YEAR_RX.finditer(password)]


class DateMatcher:
    def scan(self, password: str) -> List[Match]:
        out: List[Match] = []
        for m in DATE_RX.finditer(password):
            month = int(m.group(1))
            day = int(m.group(3))
            year_text = m.group(5)
            year = int(year_text)

            # tolerate both day-month and month-day order
            if 12 < month <= 31 and day <= 12:
                day, month = month, day
            if day > 31 or month > 12:
                continue
            if year < 30:
                year += 2000
            elif year < 100:
                year += 1900

            out.append(
                DateMatch(
                    token=m.group(0),
                    i=m.start(),
                    j=m.end() - 1,
                    day=day,
                    month=month,
                    year=year,
                    separator=m.group(2) or "",
                    two_digit_year=len(year_text) == 2,
                )
            )
        return out


class Omnimatcher:
    """Fixed set of pattern matchers over one immutable resource bundle.

    Safe to share: per-call user inputs become a local matcher and are never
    stored on the instance.
    """

    def __init__(self, resources: Optional[MatchResources] = None) -> None:
        resources = default_resources() if resources is None else resources
        self.resources = resources
        self.dictionary_matchers = tuple(
            DictionaryMatcher(name, ranked) for name, ranked in resources.dictionaries.items()
        )
        self.matchers: Tuple[PatternMatcher, ...] = self.dictionary_matchers + (
            L33tMatcher(self.dictionary_matchers),
            DigitsMatcher(),
            YearMatcher(),
            DateMatcher(),
            RepeatMatcher(),
            SequenceMatcher(),
            SpatialMatcher(resources.graphs),
        )

    def omnimatch(self, password: str, user_inputs: Iterable[str] = ()) -> List[Match]:
        matchers: Tuple[PatternMatcher, ...] = self.matchers
        user_inputs = tuple(user_inputs)
        if user_inputs:
            matchers = matchers + (user_inputs_matcher(user_inputs),)

        matches: List[Match] = []
        for matcher in matchers:
            matches.extend(matcher.scan(password))
        # start ascending, longer span first on ties
        matches.sort(key=lambda m: (m.i, -m.j))
        return matches


@lru_cache(maxsize=8)
def omnimatcher_for(resources: MatchResources) -> Omnimatcher:
    return Omnimatcher(resources)


def default_omnimatcher() -> Omnimatcher:
    return omnimatcher_for(default_resources())


def omnimatch(password: str, user_inputs: Iterable[str] = ()) -> List[Match]:
    return default_omnimatcher().omnimatch(password, user_inputs)
