"""Validated capacitated digraph used as max-flow input.

`FlowNetwork` extends `networkx.DiGraph` to enforce the shape the flow engine
expects: nodes are exactly the integers ``0..n-1``, every edge has a
non-negative integer ``capacity``, self-loops and antiparallel pairs are
rejected, and edges remember their insertion order (which fixes the
augmentation sequence of the engine).
"""

from __future__ import annotations

from pickle import dumps, loads
from typing import Any, Dict, Iterable, List, Optional

import networkx as nx

from augflow.algorithms.base import (
    Capacity,
    Edge,
    EdgeTriple,
    Vertex,
    is_vertex_index,
    validate_capacity,
    validate_vertex,
)


class FlowNetwork(nx.DiGraph):
    """A directed flow network over integer vertices with strict edge rules.

    This class enforces:
      - Nodes are ``0..n-1``; ``add_node`` only appends the next index.
      - Nodes cannot be removed.
      - Edges require a non-negative integer ``capacity``.
      - No self-loops, no duplicate edges, no antiparallel edge pairs.
      - Violations raise ``ValueError`` and leave the graph unchanged.

    Inherits from:
        networkx.DiGraph
    """

    def __init__(self, num_vertices: int = 0, **attr: Any) -> None:
        """Initialize a FlowNetwork with ``num_vertices`` isolated vertices.

        Args:
            num_vertices: Initial vertex count.
            **attr: Graph attributes forwarded to ``networkx.DiGraph``.

        Raises:
            ValueError: If ``num_vertices`` is not a non-negative integer.
        """
        if not is_vertex_index(num_vertices) or num_vertices < 0:
            raise ValueError(
                f"Vertex count must be a non-negative integer, got {num_vertices!r}."
            )
        super().__init__(**attr)
        self._edge_order: List[Edge] = []
        for vertex in range(num_vertices):
            self.add_node(vertex)

    def copy(self, as_view: bool = False, pickle: bool = True) -> FlowNetwork:
        """Create a copy of this network.

        By default, use pickle-based deep copying. If ``pickle=False``,
        call the parent class's copy, which supports views. Both paths keep
        the edge insertion order of this network.
        """
        if not pickle:
            graph = super().copy(as_view=as_view)
            # The parent re-adds edges in adjacency order.
            graph._edge_order = (
                self._edge_order if as_view else list(self._edge_order)
            )
            return graph  # type: ignore[return-value]
        return loads(dumps(self))

    @property
    def num_vertices(self) -> int:
        return self.number_of_nodes()

    @property
    def num_edges(self) -> int:
        return self.number_of_edges()

    #
    # Node management
    #
    def add_node(self, node_for_adding: Vertex, **attr: Any) -> None:
        """Append the next vertex index.

        Raises:
            ValueError: If ``node_for_adding`` is not the next unused index.
        """
        expected = self.number_of_nodes()
        if not is_vertex_index(node_for_adding) or node_for_adding != expected:
            raise ValueError(
                f"Vertices must be added in order; expected {expected}, "
                f"got {node_for_adding!r}."
            )
        super().add_node(int(node_for_adding), **attr)

    def add_nodes_from(self, nodes_for_adding: Iterable[Any], **attr: Any) -> None:
        for item in nodes_for_adding:
            if isinstance(item, tuple):
                node, node_attr = item
                self.add_node(node, **{**attr, **node_attr})
            else:
                self.add_node(item, **attr)

    def remove_node(self, n: Vertex) -> None:
        raise ValueError("Vertices cannot be removed from a FlowNetwork.")

    def remove_nodes_from(self, nodes: Iterable[Vertex]) -> None:
        raise ValueError("Vertices cannot be removed from a FlowNetwork.")

    #
    # Edge management
    #
    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self,
        u_of_edge: Vertex,
        v_of_edge: Vertex,
        capacity: Optional[Capacity] = None,
        **attr: Any,
    ) -> None:
        """Add the directed edge ``u -> v``.

        Args:
            u_of_edge: Tail vertex; must exist.
            v_of_edge: Head vertex; must exist.
            capacity: Non-negative integer capacity (required).
            **attr: Extra edge attributes.

        Raises:
            ValueError: If a vertex is unknown, the edge is a self-loop, the
                capacity is missing or invalid, the edge already exists, or
                the opposite edge ``v -> u`` exists.
        """
        n = self.number_of_nodes()
        u = validate_vertex(n, u_of_edge, "Source vertex")
        v = validate_vertex(n, v_of_edge, "Target vertex")
        if u == v:
            raise ValueError(f"Self-loop on vertex {u} is not allowed.")
        if capacity is None:
            raise ValueError(f"Edge ({u}, {v}) has no capacity.")
        capacity = validate_capacity(capacity)
        if self.has_edge(u, v):
            raise ValueError(f"Edge ({u}, {v}) already exists.")
        if self.has_edge(v, u):
            raise ValueError(
                f"Edge ({u}, {v}) conflicts with existing edge ({v}, {u}); "
                "antiparallel original edges are not allowed."
            )
        super().add_edge(u, v, capacity=capacity, **attr)
        self._edge_order.append((u, v))

    def add_edges_from(self, ebunch_to_add: Iterable[Any], **attr: Any) -> None:
        """Add edges given as ``(u, v)``, ``(u, v, capacity)`` or ``(u, v, dict)``."""
        for edge in ebunch_to_add:
            if len(edge) == 2:
                u, v = edge
                data: Dict[str, Any] = {}
            elif len(edge) == 3:
                u, v, extra = edge
                data = dict(extra) if isinstance(extra, dict) else {"capacity": extra}
            else:
                raise ValueError(f"Edge tuple {edge!r} must be a 2-tuple or 3-tuple.")
            self.add_edge(u, v, **{**attr, **data})

    def remove_edge(self, u: Vertex, v: Vertex) -> None:
        """Remove the edge ``u -> v``.

        Raises:
            ValueError: If the edge does not exist.
        """
        if not self.has_edge(u, v):
            raise ValueError(f"No edge ({u}, {v}) to remove.")
        super().remove_edge(u, v)
        self._edge_order.remove((u, v))

    def remove_edges_from(self, ebunch: Iterable[Any]) -> None:
        for edge in ebunch:
            self.remove_edge(edge[0], edge[1])

    #
    # Convenience methods
    #
    def capacity(self, u: Vertex, v: Vertex) -> Capacity:
        """Capacity of the edge ``u -> v``.

        Raises:
            ValueError: If the edge does not exist.
        """
        if not self.has_edge(u, v):
            raise ValueError(f"Edge ({u}, {v}) not found.")
        return self[u][v]["capacity"]

    def update_capacity(self, u: Vertex, v: Vertex, capacity: Capacity) -> None:
        """Replace the capacity of an existing edge.

        Raises:
            ValueError: If the edge does not exist or the capacity is invalid.
        """
        if not self.has_edge(u, v):
            raise ValueError(f"Edge ({u}, {v}) not found.")
        self[u][v]["capacity"] = validate_capacity(capacity)

    def edge_list(self) -> List[EdgeTriple]:
        """Return ``(u, v, capacity)`` triples in insertion order."""
        return [(u, v, self[u][v]["capacity"]) for u, v in self._edge_order]

    @classmethod
    def from_edges(
        cls, num_vertices: int, edges: Iterable[EdgeTriple]
    ) -> FlowNetwork:
        """Build a network from ``(u, v, capacity)`` triples."""
        network = cls(num_vertices)
        for u, v, capacity in edges:
            network.add_edge(u, v, capacity=capacity)
        return network
