from __future__ import annotations

from functools import lru_cache
import json
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from pwscore.core.error_dialect import RESOURCE_INVALID, RESOURCE_NOT_FOUND, make_error

MAX_FREQUENCY_LIST_FILE_BYTES = 64 * 1024 * 1024
MAX_WORD_LENGTH = 128

# zxcvbn frequency lists (2012 Dropbox data): passwords, english, female_names,
# male_names and surnames, each ordered from most to least common.
BUNDLED_FREQUENCY_LISTS_PATH = Path(__file__).resolve().parents[1] / "data" / "frequency_lists.json"


def build_ranked_dict(ordered_list: Iterable[str]) -> dict[str, int]:
    """Map each word (lowercased) to its 1-based position in `ordered_list`.

    A repeated word keeps the rank of its first occurrence; the duplicate still
    takes up its position, so later words are not promoted.
    """
    ranked: dict[str, int] = {}
    for rank, word in enumerate(ordered_list, 1):
        key = word.lower()
        if key and key not in ranked:
            ranked[key] = rank
    return ranked


def build_ranked_dictionaries(
    frequency_lists: Mapping[str, Iterable[str]],
) -> Mapping[str, Mapping[str, int]]:
    return MappingProxyType(
        {name: MappingProxyType(build_ranked_dict(words)) for name, words in frequency_lists.items()}
    )


def load_frequency_lists(path: str) -> dict[str, Tuple[str, ...]]:
    """Read `{"name": ["word", ...], ...}` from a JSON file."""
    p = Path(path).expanduser()
    try:
        st = p.stat()
    except FileNotFoundError as exc:
        raise make_error(RESOURCE_NOT_FOUND, f"frequency list file not found: {p}") from exc
    except OSError as exc:
        raise make_error(RESOURCE_INVALID, f"unable to stat frequency list file '{p}': {exc}") from exc

    if not p.is_file():
        raise make_error(RESOURCE_INVALID, f"frequency list path is not a file: {p}")
    if st.st_size > MAX_FREQUENCY_LIST_FILE_BYTES:
        raise make_error(RESOURCE_INVALID, f"frequency list file too large: {p} ({st.st_size} bytes)")

    try:
        payload = json.loads(p.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeError) as exc:
        raise make_error(RESOURCE_INVALID, f"unable to read frequency list file '{p}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise make_error(RESOURCE_INVALID, f"frequency list file '{p}' is not valid JSON: {exc}") from exc

    return parse_frequency_lists(payload, source=str(p))


@lru_cache(maxsize=1)
def bundled_frequency_lists() -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType(load_frequency_lists(str(BUNDLED_FREQUENCY_LISTS_PATH)))


def parse_frequency_lists(payload: object, *, source: str = "payload") -> dict[str, Tuple[str, ...]]:
    if not isinstance(payload, dict) or not payload:
        raise make_error(RESOURCE_INVALID, f"{source}: expected a non-empty object of named word lists")

    out: dict[str, Tuple[str, ...]] = {}
    for name, words in payload.items():
        if not isinstance(name, str) or not name.strip():
            raise make_error(RESOURCE_INVALID, f"{source}: dictionary names must be non-empty strings")
        if not isinstance(words, list):
            raise make_error(RESOURCE_INVALID, f"{source}: dictionary {name!r} must be a list of words")
        cleaned: list[str] = []
        for word in words:
            if not isinstance(word, str):
                raise make_error(RESOURCE_INVALID, f"{source}: dictionary {name!r} contains a non-string entry")
            word = word.strip()
            if len(word) > MAX_WORD_LENGTH:
                raise make_error(RESOURCE_INVALID, f"{source}: dictionary {name!r} has a word longer than {MAX_WORD_LENGTH}")
            if word:
                cleaned.append(word)
        out[name.strip()] = tuple(cleaned)
    return out
