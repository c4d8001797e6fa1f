"""NetworkX graph conversion utilities.

Converts directed NetworkX graphs with arbitrary hashable node names into
integer-indexed ``FlowNetwork`` instances and back.

Example:
    >>> import networkx as nx
    >>> from augflow.graph.convert import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("s", "a", capacity=3)
    >>> G.add_edge("a", "t", capacity=2)
    >>>
    >>> network, node_map = from_networkx(G)
    >>> node_map.to_index["t"]
    2
    >>> G_out = to_networkx(network, node_map)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Hashable, List, Optional

import networkx as nx

from augflow.algorithms.base import Capacity, Edge, validate_capacity
from augflow.graph.flow_network import FlowNetwork

if TYPE_CHECKING:
    from augflow.algorithms.residual import ResidualNetwork


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and vertex indices.

    Attributes:
        to_index: Maps original node names to integer indices
        to_name: Maps integer indices back to original node names

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> NodeMap:
        """Create a NodeMap from a list of node names in index order."""
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        """Return the number of nodes in the mapping."""
        return len(self.to_index)


def from_networkx(
    graph: nx.DiGraph,
    capacity_attr: str = "capacity",
) -> tuple[FlowNetwork, NodeMap]:
    """Convert a directed NetworkX graph into a ``FlowNetwork``.

    Nodes are indexed in the graph's node iteration order. Parallel edges of
    a ``MultiDiGraph`` are merged into one edge whose capacity is their sum.

    Args:
        graph: Directed NetworkX graph (``DiGraph`` or ``MultiDiGraph``).
        capacity_attr: Edge attribute holding the integer capacity.

    Returns:
        Tuple of ``(network, node_map)``.

    Raises:
        ValueError: If the graph is undirected, an edge lacks a valid
            capacity, or the edges violate ``FlowNetwork`` rules (self-loops,
            antiparallel pairs).
    """
    if not graph.is_directed():
        raise ValueError("Max-flow input must be a directed graph.")

    node_map = NodeMap.from_names(list(graph.nodes()))
    capacities: Dict[Edge, Capacity] = {}
    for u, v, data in graph.edges(data=True):
        if capacity_attr not in data:
            raise ValueError(f"Edge ({u!r}, {v!r}) has no '{capacity_attr}' attribute.")
        try:
            capacity = validate_capacity(data[capacity_attr])
        except ValueError as exc:
            raise ValueError(f"Edge ({u!r}, {v!r}): {exc}") from exc
        key = (node_map.to_index[u], node_map.to_index[v])
        capacities[key] = capacities.get(key, 0) + capacity

    network = FlowNetwork(len(node_map))
    for (u, v), capacity in capacities.items():
        try:
            network.add_edge(u, v, capacity=capacity)
        except ValueError as exc:
            raise ValueError(
                f"Edge ({node_map.to_name[u]!r}, {node_map.to_name[v]!r}): {exc}"
            ) from exc
    return network, node_map


def to_networkx(
    network: FlowNetwork,
    node_map: Optional[NodeMap] = None,
    residual: Optional[ResidualNetwork] = None,
) -> nx.DiGraph:
    """Convert a ``FlowNetwork`` into a plain ``networkx.DiGraph``.

    Args:
        network: Network to convert.
        node_map: Optional mapping used to restore original node names.
        residual: Optional residual network whose flow is written to a
            ``flow`` attribute on every edge.

    Returns:
        nx.DiGraph: Graph with ``capacity`` (and optionally ``flow``) edge attributes.
    """

    def name(vertex: int) -> Hashable:
        return node_map.to_name[vertex] if node_map is not None else vertex

    graph = nx.DiGraph()
    graph.add_nodes_from(name(v) for v in range(network.num_vertices))
    for u, v, capacity in network.edge_list():
        attrs = {"capacity": capacity}
        if residual is not None:
            attrs["flow"] = residual.flow(u, v)
        graph.add_edge(name(u), name(v), **attrs)
    return graph
