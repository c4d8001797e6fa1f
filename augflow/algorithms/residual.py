"""Residual network over an edge pool with paired forward/reverse arcs.

Every original edge ``(u, v)`` owns two arc records in a shared pool: the
forward arc ``u -> v`` at an even index and the reverse arc ``v -> u`` at the
next odd index, so the partner of arc ``i`` is ``i ^ 1``. The reverse arc has
zero capacity and carries the negated forward flow, which makes the residual
capacity ``capacity - flow`` uniform for both arc kinds:

- forward arc: ``c(u, v) - f(u, v)``
- reverse arc: ``0 - (-f(u, v)) = f(u, v)``

The residual graph itself is never materialized; it is read off the pool on
demand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Dict,
    Iterable,
    Iterator,
    List,
    Sequence,
    Set,
    Tuple,
)

from augflow.algorithms.base import (
    Capacity,
    Edge,
    EdgeTriple,
    FlowInvariantError,
    Vertex,
    is_vertex_index,
    path_edges,
    validate_capacity,
    validate_vertex,
)

if TYPE_CHECKING:
    from augflow.graph.flow_network import FlowNetwork


@dataclass
class Arc:
    """One direction of an original edge in the residual pool.

    Attributes:
        tail: Vertex the arc leaves.
        head: Vertex the arc enters.
        capacity: Capacity of the arc (zero for reverse arcs).
        flow: Current flow on the arc (negative on reverse arcs carrying flow).
    """

    tail: Vertex
    head: Vertex
    capacity: Capacity
    flow: Capacity = 0

    @property
    def residual(self) -> Capacity:
        return self.capacity - self.flow


class ResidualNetwork:
    """Capacities and flows of a flow network, with O(1) residual queries.

    A residual network is owned by a single flow computation. Build a new one
    for every independent computation over the same input.
    """

    def __init__(self, num_vertices: int) -> None:
        """Create an empty network over vertices ``0..num_vertices-1``.

        Args:
            num_vertices: Number of vertices; must be a non-negative integer.

        Raises:
            ValueError: If ``num_vertices`` is negative or not an integer.
        """
        if not is_vertex_index(num_vertices) or num_vertices < 0:
            raise ValueError(
                f"Vertex count must be a non-negative integer, got {num_vertices!r}."
            )
        self._n: int = int(num_vertices)
        self._arcs: List[Arc] = []
        # Arc indices leaving each vertex, in insertion order.
        self._adj: List[List[int]] = [[] for _ in range(self._n)]
        # Ordered vertex pair -> arc index, for both arc kinds.
        self._arc_index: Dict[Edge, int] = {}

    @classmethod
    def from_edges(
        cls, num_vertices: int, edges: Iterable[EdgeTriple]
    ) -> ResidualNetwork:
        """Build a residual network from ``(u, v, capacity)`` triples.

        Edges are added in iteration order, which fixes the search order.
        """
        residual = cls(num_vertices)
        for u, v, capacity in edges:
            residual.add_edge(u, v, capacity)
        return residual

    @classmethod
    def from_flow_network(cls, network: FlowNetwork) -> ResidualNetwork:
        """Build a residual network from a ``FlowNetwork``."""
        return cls.from_edges(network.num_vertices, network.edge_list())

    #
    # Construction
    #
    def add_edge(self, u: Vertex, v: Vertex, capacity: Capacity) -> None:
        """Add the original edge ``u -> v`` with zero flow.

        Records the forward arc in ``u``'s adjacency and the reverse arc in
        ``v``'s adjacency so that cancelling flow is visible to searches.

        Args:
            u: Tail vertex.
            v: Head vertex.
            capacity: Non-negative integer capacity.

        Raises:
            ValueError: On an out-of-range vertex, a self-loop, an invalid
                capacity, a duplicate edge, or an edge opposite to an existing
                original edge. The network is left unchanged.
        """
        u = validate_vertex(self._n, u, "Source vertex")
        v = validate_vertex(self._n, v, "Target vertex")
        if u == v:
            raise ValueError(f"Self-loop on vertex {u} is not allowed.")
        capacity = validate_capacity(capacity)
        if (u, v) in self._arc_index:
            if self._arc_index[(u, v)] % 2 == 0:
                raise ValueError(f"Edge ({u}, {v}) already exists.")
            raise ValueError(
                f"Edge ({u}, {v}) conflicts with existing edge ({v}, {u}); "
                "antiparallel original edges are not allowed."
            )

        forward = len(self._arcs)
        self._arcs.append(Arc(u, v, capacity))
        self._arcs.append(Arc(v, u, 0))
        self._arc_index[(u, v)] = forward
        self._arc_index[(v, u)] = forward + 1
        self._adj[u].append(forward)
        self._adj[v].append(forward + 1)

    #
    # Queries
    #
    @property
    def num_vertices(self) -> int:
        return self._n

    @property
    def num_edges(self) -> int:
        """Number of original edges."""
        return len(self._arcs) // 2

    def __len__(self) -> int:
        return self._n

    def has_edge(self, u: Vertex, v: Vertex) -> bool:
        """Return True if ``(u, v)`` is an original edge."""
        index = self._arc_index.get((u, v))
        return index is not None and index % 2 == 0

    def capacity(self, u: Vertex, v: Vertex) -> Capacity:
        """Stored capacity of the arc ``u -> v`` (0 for reverse or absent arcs)."""
        index = self._arc_index.get((u, v))
        return 0 if index is None else self._arcs[index].capacity

    def flow(self, u: Vertex, v: Vertex) -> Capacity:
        """Stored flow of the arc ``u -> v``; ``flow(u, v) == -flow(v, u)``."""
        index = self._arc_index.get((u, v))
        return 0 if index is None else self._arcs[index].flow

    def residual_capacity(self, u: Vertex, v: Vertex) -> Capacity:
        """Residual capacity ``c(u, v) - f(u, v)``; 0 when no arc exists."""
        index = self._arc_index.get((u, v))
        return 0 if index is None else self._arcs[index].residual

    def neighbors(self, u: Vertex) -> List[Vertex]:
        """Heads of all arcs leaving ``u``, in insertion order."""
        return [self._arcs[i].head for i in self._adj[u]]

    def residual_neighbors(self, u: Vertex) -> Iterator[Tuple[Vertex, Capacity]]:
        """Yield ``(head, residual)`` for arcs leaving ``u`` with positive residual."""
        arcs = self._arcs
        for i in self._adj[u]:
            arc = arcs[i]
            if arc.capacity - arc.flow > 0:
                yield arc.head, arc.capacity - arc.flow

    def bottleneck(self, path: Sequence[Vertex]) -> Capacity:
        """Minimum residual capacity along ``path``.

        Raises:
            ValueError: If the path has fewer than two vertices.
        """
        if len(path) < 2:
            raise ValueError("A path needs at least two vertices.")
        return min(
            self.residual_capacity(x, y) for x, y in path_edges(path)
        )

    def edges(self) -> Iterator[Tuple[Vertex, Vertex, Capacity, Capacity]]:
        """Yield original edges as ``(u, v, capacity, flow)`` in insertion order."""
        for arc in self._arcs[::2]:
            yield arc.tail, arc.head, arc.capacity, arc.flow

    def arcs(self) -> Iterator[Arc]:
        """Yield every arc record, forward and reverse."""
        return iter(self._arcs)

    def net_flow(self, v: Vertex) -> Capacity:
        """Outflow minus inflow at ``v``.

        Reverse arcs leaving ``v`` carry the negated inflow, so the sum over
        all arcs leaving ``v`` is exactly the net flow.
        """
        return sum(self._arcs[i].flow for i in self._adj[v])

    def reachable_from(self, source: Vertex) -> Set[Vertex]:
        """Vertices reachable from ``source`` over arcs with positive residual."""
        source = validate_vertex(self._n, source, "Source vertex")
        reachable = {source}
        stack = [source]
        while stack:
            u = stack.pop()
            for v, _ in self.residual_neighbors(u):
                if v not in reachable:
                    reachable.add(v)
                    stack.append(v)
        return reachable

    def flow_matrix(self) -> List[List[Capacity]]:
        """Dense ``n x n`` skew-symmetric flow assignment."""
        matrix = [[0] * self._n for _ in range(self._n)]
        for arc in self._arcs:
            matrix[arc.tail][arc.head] = arc.flow
        return matrix

    #
    # Mutation
    #
    def augment(self, path: Sequence[Vertex], bottleneck: Capacity) -> None:
        """Push ``bottleneck`` units along ``path``.

        For each consecutive pair ``(x, y)``: ``f[x][y] += b; f[y][x] -= b``.
        The whole path is checked before any flow value changes.

        Args:
            path: Simple vertex sequence from source to sink.
            bottleneck: Positive amount no larger than any residual on the path.

        Raises:
            FlowInvariantError: If the path is too short or not simple, uses a
                missing arc,
                or the bottleneck is not a positive integer within every
                arc's residual capacity.
        """
        if len(path) < 2:
            raise FlowInvariantError(f"Cannot augment along path {list(path)}.")
        if not is_vertex_index(bottleneck) or bottleneck <= 0:
            raise FlowInvariantError(
                f"Augmentation amount must be a positive integer, got {bottleneck!r}."
            )
        if len(set(path)) != len(path):
            raise FlowInvariantError(f"Augmenting path {list(path)} is not simple.")

        indices = []
        for x, y in path_edges(path):
            index = self._arc_index.get((x, y))
            if index is None:
                raise FlowInvariantError(f"Path uses non-existent arc ({x}, {y}).")
            residual = self._arcs[index].residual
            if residual < bottleneck:
                raise FlowInvariantError(
                    f"Augmenting by {bottleneck} exceeds residual capacity "
                    f"{residual} of arc ({x}, {y})."
                )
            indices.append(index)

        for index in indices:
            self._arcs[index].flow += bottleneck
            self._arcs[index ^ 1].flow -= bottleneck

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(num_vertices={self._n}, "
            f"num_edges={self.num_edges})"
        )
