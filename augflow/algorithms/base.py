"""Shared aliases, strategy enum and validators for the flow algorithms."""

from __future__ import annotations

from enum import IntEnum
from numbers import Integral
from typing import Any, List, Sequence, Tuple

#: Vertex index in ``[0, n)``.
Vertex = int

#: Integer edge capacity (and flow amount).
Capacity = int

#: An augmenting path given as the sequence of vertices it visits.
Path = List[Vertex]

#: Original edge identifier ``(tail, head)``.
Edge = Tuple[Vertex, Vertex]

#: Edge triple as consumed by the builders: ``(tail, head, capacity)``.
EdgeTriple = Tuple[Vertex, Vertex, Capacity]


class PathStrategy(IntEnum):
    """
    Augmenting-path selection strategies.
    """

    #: Any source-sink path, found depth-first (Ford-Fulkerson).
    ANY = 1
    #: Fewest-edge path, found breadth-first (Edmonds-Karp).
    SHORTEST = 2

    @classmethod
    def from_name(cls, name: str) -> PathStrategy:
        """Resolve a strategy from a case-insensitive name or alias.

        Accepted names: ``any``, ``dfs``, ``ford_fulkerson``, ``shortest``,
        ``bfs``, ``edmonds_karp`` (dashes are treated as underscores).

        Raises:
            ValueError: If the name is not recognized.
        """
        key = name.strip().lower().replace("-", "_")
        try:
            return _STRATEGY_ALIASES[key]
        except KeyError:
            raise ValueError(
                f"Unknown path strategy '{name}'. "
                f"Expected one of: {', '.join(sorted(_STRATEGY_ALIASES))}."
            ) from None


_STRATEGY_ALIASES = {
    "any": PathStrategy.ANY,
    "dfs": PathStrategy.ANY,
    "ford_fulkerson": PathStrategy.ANY,
    "shortest": PathStrategy.SHORTEST,
    "bfs": PathStrategy.SHORTEST,
    "edmonds_karp": PathStrategy.SHORTEST,
}


class FlowInvariantError(RuntimeError):
    """Raised when a flow invariant is violated during search or augmentation.

    This signals a defect in the engine or its inputs after construction, not
    a user input error. Construction errors raise ``ValueError`` instead.
    """


def is_vertex_index(value: Any) -> bool:
    """Return True for integral, non-boolean values."""
    return isinstance(value, Integral) and not isinstance(value, bool)


def validate_vertex(num_vertices: int, vertex: Any, role: str = "Vertex") -> Vertex:
    """Return ``vertex`` as ``int`` if it is a valid index in ``[0, num_vertices)``.

    Raises:
        ValueError: If the value is not an integer or is out of range.
    """
    if not is_vertex_index(vertex):
        raise ValueError(f"{role} '{vertex!r}' is not an integer vertex index.")
    if not 0 <= vertex < num_vertices:
        raise ValueError(
            f"{role} {vertex} is out of range for a network with "
            f"{num_vertices} vertices."
        )
    return int(vertex)


def validate_capacity(capacity: Any) -> Capacity:
    """Return ``capacity`` as ``int`` if it is a non-negative integer.

    Booleans and floats are rejected rather than coerced.

    Raises:
        ValueError: If the capacity is not a non-negative integer.
    """
    if not is_vertex_index(capacity):
        raise ValueError(f"Capacity '{capacity!r}' is not an integer.")
    if capacity < 0:
        raise ValueError(f"Capacity {capacity} is negative.")
    return int(capacity)


def path_edges(path: Sequence[Vertex]) -> List[Edge]:
    """Return the consecutive vertex pairs of a path."""
    return list(zip(path[:-1], path[1:]))
