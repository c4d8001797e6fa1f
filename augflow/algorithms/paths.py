"""Augmenting-path finders.

Both finders implement ``PathFinder.find_path``: given a residual network,
return a simple source-to-sink path whose every arc has positive residual
capacity, or ``None`` when the sink is unreachable. Finders never mutate the
network; the flow engine computes the bottleneck and augments afterwards.

- ``DepthFirstPathFinder``: any path (Ford-Fulkerson), O(E) per search and
  O(E * |f*|) overall for integer capacities.
- ``BreadthFirstPathFinder``: a fewest-edge path (Edmonds-Karp), O(E) per
  search and O(V * E^2) overall regardless of capacity magnitudes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union

from augflow.algorithms.base import Capacity, Path, PathStrategy, Vertex
from augflow.algorithms.residual import ResidualNetwork


class PathFinder(ABC):
    """Strategy interface for finding augmenting paths."""

    #: Strategy implemented by the finder.
    strategy: PathStrategy

    @abstractmethod
    def find_path(
        self, residual: ResidualNetwork, source: Vertex, sink: Vertex
    ) -> Optional[Path]:
        """Return an augmenting path from ``source`` to ``sink`` or ``None``.

        The returned path starts with ``source``, ends with ``sink`` and
        repeats no vertex. Visit marks are fresh on every call.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DepthFirstPathFinder(PathFinder):
    """Depth-first search for any augmenting path.

    Uses an explicit stack of ``(vertex, arc iterator)`` frames; the order in
    which arcs are tried matches a recursive traversal over adjacency lists
    in insertion order, so identical inputs give identical paths.
    """

    strategy = PathStrategy.ANY

    def find_path(
        self, residual: ResidualNetwork, source: Vertex, sink: Vertex
    ) -> Optional[Path]:
        if source == sink:
            return None

        visited: Set[Vertex] = {source}
        path: Path = [source]
        stack: List[Iterator[Tuple[Vertex, Capacity]]] = [
            residual.residual_neighbors(source)
        ]
        while stack:
            for v, _ in stack[-1]:
                if v in visited:
                    continue
                visited.add(v)
                path.append(v)
                if v == sink:
                    return path
                stack.append(residual.residual_neighbors(v))
                break
            else:
                # Dead end: every arc out of path[-1] is exhausted.
                stack.pop()
                path.pop()
        return None


class BreadthFirstPathFinder(PathFinder):
    """Breadth-first search for a shortest (fewest-edge) augmenting path."""

    strategy = PathStrategy.SHORTEST

    def find_path(
        self, residual: ResidualNetwork, source: Vertex, sink: Vertex
    ) -> Optional[Path]:
        if source == sink:
            return None

        pred: Dict[Vertex, Vertex] = {}
        visited: Set[Vertex] = {source}
        queue = deque([source])
        while queue and sink not in visited:
            u = queue.popleft()
            for v, _ in residual.residual_neighbors(u):
                if v in visited:
                    continue
                visited.add(v)
                pred[v] = u
                if v == sink:
                    break
                queue.append(v)

        if sink not in visited:
            return None

        path: Path = [sink]
        while path[-1] != source:
            path.append(pred[path[-1]])
        path.reverse()
        return path


_FINDERS = {
    PathStrategy.ANY: DepthFirstPathFinder,
    PathStrategy.SHORTEST: BreadthFirstPathFinder,
}


def get_path_finder(strategy: Union[PathStrategy, str, PathFinder]) -> PathFinder:
    """Return a path finder for ``strategy``.

    Args:
        strategy: A ``PathStrategy`` member, a strategy name accepted by
            ``PathStrategy.from_name``, or a ready ``PathFinder`` instance
            (returned as-is).

    Raises:
        ValueError: If the strategy cannot be resolved.
    """
    if isinstance(strategy, PathFinder):
        return strategy
    if isinstance(strategy, str):
        strategy = PathStrategy.from_name(strategy)
    try:
        return _FINDERS[PathStrategy(strategy)]()
    except ValueError:
        raise ValueError(f"Unsupported path strategy: {strategy!r}") from None
