"""Loaders for max-flow problem files.

Two formats are supported:

Edge list (plain text)::

    # n m
    4 5
    0 1 2
    0 2 1
    1 2 1
    1 3 1
    2 3 2

The first non-comment line holds the vertex count ``n`` and edge count ``m``,
followed by ``m`` lines ``u v capacity``. The source is vertex ``0`` and the
sink is vertex ``n - 1``.

YAML::

    vertices: 4
    source: 0
    sink: 3
    edges:
      - [0, 1, 2]
      - {src: 1, dst: 3, capacity: 1}

``source`` and ``sink`` are optional and default as above.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from augflow.algorithms.base import EdgeTriple, Vertex, validate_vertex
from augflow.algorithms.max_flow import calc_max_flow
from augflow.graph.flow_network import FlowNetwork
from augflow.logging import get_logger
from augflow.utils.yaml_utils import normalize_yaml_dict_keys

logger = get_logger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


@dataclass
class FlowProblem:
    """A flow network together with its designated terminals.

    Attributes:
        network: The capacitated input network.
        source: Source vertex index.
        sink: Sink vertex index.
    """

    network: FlowNetwork
    source: Vertex
    sink: Vertex

    def __post_init__(self) -> None:
        n = self.network.num_vertices
        self.source = validate_vertex(n, self.source, "Source vertex")
        self.sink = validate_vertex(n, self.sink, "Sink vertex")

    def solve(self, **kwargs: Any):
        """Run ``calc_max_flow`` on this problem; kwargs are passed through."""
        return calc_max_flow(self.network, self.source, self.sink, **kwargs)


def _default_terminals(num_vertices: int) -> tuple[int, int]:
    if num_vertices == 0:
        raise ValueError("A flow problem needs at least one vertex.")
    return 0, num_vertices - 1


def parse_edge_list(
    text: str, source: Optional[Vertex] = None, sink: Optional[Vertex] = None
) -> FlowProblem:
    """Parse an edge-list document.

    Args:
        text: Document contents.
        source: Override for the source vertex (default ``0``).
        sink: Override for the sink vertex (default ``n - 1``).

    Raises:
        ValueError: On malformed headers or edge lines, a wrong edge count,
            or any edge rejected by ``FlowNetwork``.
    """
    rows: List[tuple[int, List[str]]] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if line:
            rows.append((lineno, line.split()))
    if not rows:
        raise ValueError("Edge list is empty.")

    header_line, header = rows[0]
    if len(header) != 2:
        raise ValueError(
            f"Line {header_line}: expected header 'n m', got {' '.join(header)!r}."
        )
    num_vertices, num_edges = (_parse_int(tok, header_line) for tok in header)
    if len(rows) - 1 != num_edges:
        raise ValueError(
            f"Header declares {num_edges} edges but {len(rows) - 1} edge lines follow."
        )

    network = FlowNetwork(num_vertices)
    for lineno, tokens in rows[1:]:
        if len(tokens) != 3:
            raise ValueError(
                f"Line {lineno}: expected 'u v capacity', got {' '.join(tokens)!r}."
            )
        u, v, capacity = (_parse_int(tok, lineno) for tok in tokens)
        try:
            network.add_edge(u, v, capacity=capacity)
        except ValueError as exc:
            raise ValueError(f"Line {lineno}: {exc}") from exc

    default_source, default_sink = _default_terminals(num_vertices)
    logger.debug(
        "Parsed edge list with %d vertices and %d edges", num_vertices, num_edges
    )
    return FlowProblem(
        network,
        default_source if source is None else source,
        default_sink if sink is None else sink,
    )


def _parse_int(token: str, lineno: int) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"Line {lineno}: '{token}' is not an integer.") from None


def parse_yaml(
    yaml_str: str, source: Optional[Vertex] = None, sink: Optional[Vertex] = None
) -> FlowProblem:
    """Parse a YAML problem document.

    Explicit ``source``/``sink`` arguments override values in the document.

    Raises:
        ValueError: If the document is not valid YAML or not a mapping,
            ``vertices`` is missing,
            an edge entry is malformed, or an edge is rejected.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")
    data = normalize_yaml_dict_keys(data)

    unknown = set(data) - {"vertices", "edges", "source", "sink"}
    if unknown:
        raise ValueError(f"Unrecognized keys in flow problem: {sorted(unknown)}")
    if "vertices" not in data:
        raise ValueError("Flow problem must define 'vertices'.")

    edges_section = data.get("edges") or []
    if not isinstance(edges_section, list):
        raise ValueError("'edges' must be a list")

    network = FlowNetwork(data["vertices"])
    for position, entry in enumerate(edges_section):
        u, v, capacity = _edge_from_yaml(entry, position)
        try:
            network.add_edge(u, v, capacity=capacity)
        except ValueError as exc:
            raise ValueError(f"Edge #{position}: {exc}") from exc

    default_source, default_sink = _default_terminals(network.num_vertices)
    if source is None:
        source = data.get("source", default_source)
    if sink is None:
        sink = data.get("sink", default_sink)
    logger.debug(
        "Parsed YAML problem with %d vertices and %d edges",
        network.num_vertices,
        network.num_edges,
    )
    return FlowProblem(network, source, sink)


def _edge_from_yaml(entry: Any, position: int) -> EdgeTriple:
    if isinstance(entry, dict):
        entry = normalize_yaml_dict_keys(entry)
        missing = {"src", "dst", "capacity"} - set(entry)
        if missing:
            raise ValueError(f"Edge #{position} is missing {sorted(missing)}.")
        return entry["src"], entry["dst"], entry["capacity"]
    if isinstance(entry, list) and len(entry) == 3:
        return entry[0], entry[1], entry[2]
    raise ValueError(
        f"Edge #{position} must be [src, dst, capacity] or a mapping, got {entry!r}."
    )


def load_problem(
    path: Union[str, Path],
    source: Optional[Vertex] = None,
    sink: Optional[Vertex] = None,
) -> FlowProblem:
    """Load a flow problem from ``path``, choosing the format by suffix.

    ``.yaml``/``.yml`` files are parsed as YAML; anything else as an edge list.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    logger.debug("Loading flow problem from %s", path)
    if path.suffix.lower() in YAML_SUFFIXES:
        return parse_yaml(text, source=source, sink=sink)
    return parse_edge_list(text, source=source, sink=sink)
