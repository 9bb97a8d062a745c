from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple

Coord = Tuple[int, int]
Neighbors = Tuple[Optional[str], ...]

# Each key token holds the unshifted character first and the shifted one second.
QWERTY = r"""
`~ 1! 2@ 3# 4$ 5% 6^ 7& 8* 9( 0) -_ =+
    qQ wW eE rR tT yY uU iI oO pP [{ ]} \|
     aA sS dD fF gG hH jJ kK lL ;: '"
      zZ xX cC vV bB nN mM ,< .> /?
"""

DVORAK = r"""
`~ 1! 2@ 3# 4$ 5% 6^ 7& 8* 9( 0) [{ ]}
    '" ,< .> pP yY fF gG cC rR lL /? =+ \|
     aA oO eE uU iI dD hH tT nN sS -_
      ;: qQ jJ kK xX bB mM wW vV zZ
"""

KEYPAD = r"""
  / * -
7 8 9 +
4 5 6
1 2 3
  0 .
"""

MAC_KEYPAD = r"""
  = / *
7 8 9 -
4 5 6 +
1 2 3
  0 .
"""

# (name, drawing, slanted)
LAYOUTS: Tuple[Tuple[str, str, bool], ...] = (
    ("qwerty", QWERTY, True),
    ("dvorak", DVORAK, True),
    ("keypad", KEYPAD, False),
    ("mac_keypad", MAC_KEYPAD, False),
)


def slanted_adjacent_coords(x: int, y: int) -> List[Coord]:
    """Six neighbours on a keyboard whose rows shift right as they go down.

    Order is clockwise from the key on the left: left, two above, right, two below.
    """
    return [(x - 1, y), (x, y - 1), (x + 1, y - 1), (x + 1, y), (x, y + 1), (x - 1, y + 1)]


def aligned_adjacent_coords(x: int, y: int) -> List[Coord]:
    """Eight neighbours on a keypad whose rows are vertically aligned, clockwise from the left."""
    return [
        (x - 1, y),
        (x - 1, y - 1),
        (x, y - 1),
        (x + 1, y - 1),
        (x + 1, y),
        (x + 1, y + 1),
        (x, y + 1),
        (x - 1, y + 1),
    ]


def build_graph(layout: str, slanted: bool) -> Dict[str, Neighbors]:
    """Turn a layout drawing into `{char: (neighbour token or None, ...)}`.

    The tuple position is the direction, so every key of one layout has a
    same-length neighbour tuple. On qwerty 'g' maps to
    ('fF', 'tT', 'yY', 'hH', 'bB', 'vV').
    """
    tokens = layout.split()
    if not tokens:
        raise ValueError("keyboard layout is empty")
    token_size = len(tokens[0])
    if any(len(token) != token_size for token in tokens):
        raise ValueError("keyboard layout tokens must share one length")
    x_unit = token_size + 1
    adjacent: Callable[[int, int], List[Coord]] = slanted_adjacent_coords if slanted else aligned_adjacent_coords

    positions: Dict[Coord, str] = {}
    for y, line in enumerate(layout.split("\n")):
        # each drawn keyboard row is indented one column further than the previous one
        slant = y - 1 if slanted else 0
        for token in line.split():
            x, remainder = divmod(line.index(token) - slant, x_unit)
            if remainder != 0:
                raise ValueError(f"unexpected x offset for {token!r} in keyboard layout")
            positions[(x, y)] = token

    graph: Dict[str, Neighbors] = {}
    for (x, y), token in positions.items():
        neighbors = tuple(positions.get(coord) for coord in adjacent(x, y))
        for char in token:
            graph[char] = neighbors
    return graph


def average_degree(graph: Mapping[str, Neighbors]) -> float:
    # on qwerty 'g' has degree 6 and '\' has degree 1
    if not graph:
        return 0.0
    total = sum(sum(1 for neighbor in neighbors if neighbor is not None) for neighbors in graph.values())
    return total / float(len(graph))


def starting_positions(graph: Mapping[str, Neighbors]) -> int:
    return len(graph)


@dataclass(frozen=True)
class AdjacencyGraph:
    name: str
    neighbors: Mapping[str, Neighbors]
    starting_positions: int
    average_degree: float

    @classmethod
    def from_mapping(cls, name: str, graph: Mapping[str, object]) -> "AdjacencyGraph":
        frozen: Dict[str, Neighbors] = {}
        for key, neighbors in graph.items():
            frozen[key] = tuple(None if n is None else str(n) for n in neighbors)  # type: ignore[union-attr]
        return cls(
            name=name,
            neighbors=MappingProxyType(frozen),
            starting_positions=starting_positions(frozen),
            average_degree=average_degree(frozen),
        )

    @classmethod
    def from_layout(cls, name: str, layout: str, slanted: bool) -> "AdjacencyGraph":
        return cls.from_mapping(name, build_graph(layout, slanted))


@lru_cache(maxsize=1)
def default_graphs() -> Mapping[str, AdjacencyGraph]:
    return MappingProxyType(
        {name: AdjacencyGraph.from_layout(name, layout, slanted) for name, layout, slanted in LAYOUTS}
    )
