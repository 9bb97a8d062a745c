from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from pwscore.core.adjacency_graphs import AdjacencyGraph, default_graphs
from pwscore.core.error_dialect import CONFIG_INVALID, make_error
from pwscore.core.frequency_lists import (
    build_ranked_dictionaries,
    bundled_frequency_lists,
    load_frequency_lists,
)

ENV_FREQUENCY_LISTS = "PWSCORE_FREQUENCY_LISTS"
ENV_TRACE = "PWSCORE_TRACE"


def _parse_bool(value: str, field: str) -> bool:
    raw = value.strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off", ""):
        return False
    raise make_error(CONFIG_INVALID, f"{field} must be a boolean")


@dataclass(frozen=True)
class ResourceConfig:
    frequency_lists_path: str = ""
    trace: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ResourceConfig":
        env = os.environ if environ is None else environ
        return cls(
            frequency_lists_path=(env.get(ENV_FREQUENCY_LISTS, "") or "").strip(),
            trace=_parse_bool(env.get(ENV_TRACE, ""), ENV_TRACE),
        )


@dataclass(frozen=True, eq=False)
class MatchResources:
    """Ranked dictionaries and keyboard graphs shared by every scan.

    Both mappings are read-only views; instances hash by identity.
    """

    dictionaries: Mapping[str, Mapping[str, int]]
    graphs: Mapping[str, AdjacencyGraph]


def build_resources(
    frequency_lists: Mapping[str, Iterable[str]],
    graphs: Optional[Mapping[str, AdjacencyGraph]] = None,
) -> MatchResources:
    return MatchResources(
        dictionaries=build_ranked_dictionaries(frequency_lists),
        graphs=default_graphs() if graphs is None else MappingProxyType(dict(graphs)),
    )


@lru_cache(maxsize=8)
def load_resources(frequency_lists_path: str = "") -> MatchResources:
    if frequency_lists_path:
        return build_resources(load_frequency_lists(frequency_lists_path))
    return build_resources(bundled_frequency_lists())


def default_resources() -> MatchResources:
    return load_resources(ResourceConfig.from_env().frequency_lists_path)
