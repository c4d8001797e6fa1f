"""Flow invariant checks over a residual network.

Each ``check_*`` function raises ``FlowInvariantError`` describing the first
violation it finds. ``check_flow`` runs all per-state checks and is what the
engine calls after every augmentation when invariant checking is enabled.
"""

from __future__ import annotations

from typing import Optional

from augflow.algorithms.base import Capacity, FlowInvariantError, Vertex
from augflow.algorithms.residual import ResidualNetwork


def check_capacity_bounds(residual: ResidualNetwork) -> None:
    """Check ``0 <= f(u, v) <= c(u, v)`` on every original edge."""
    for u, v, capacity, flow in residual.edges():
        if flow < 0 or flow > capacity:
            raise FlowInvariantError(
                f"Flow {flow} on edge ({u}, {v}) violates capacity bound [0, {capacity}]."
            )


def check_skew_symmetry(residual: ResidualNetwork) -> None:
    """Check ``f(u, v) == -f(v, u)`` and non-negative residuals on all arcs."""
    for arc in residual.arcs():
        reverse = residual.flow(arc.head, arc.tail)
        if arc.flow != -reverse:
            raise FlowInvariantError(
                f"Skew symmetry broken on ({arc.tail}, {arc.head}): "
                f"{arc.flow} != -{reverse}."
            )
        if arc.residual < 0:
            raise FlowInvariantError(
                f"Negative residual capacity {arc.residual} on arc "
                f"({arc.tail}, {arc.head})."
            )


def check_conservation(
    residual: ResidualNetwork, source: Vertex, sink: Vertex
) -> None:
    """Check inflow equals outflow at every vertex other than the terminals."""
    for v in range(residual.num_vertices):
        if v in (source, sink):
            continue
        excess = residual.net_flow(v)
        if excess != 0:
            raise FlowInvariantError(
                f"Flow conservation violated at vertex {v}: net outflow {excess}."
            )


def check_flow(
    residual: ResidualNetwork,
    source: Vertex,
    sink: Vertex,
    value: Optional[Capacity] = None,
) -> None:
    """Run every invariant check, plus value consistency when ``value`` is given.

    Value consistency means the net flow leaving ``source`` and the net flow
    entering ``sink`` both equal ``value``.
    """
    check_capacity_bounds(residual)
    check_skew_symmetry(residual)
    check_conservation(residual, source, sink)
    if value is None or source == sink:
        return
    out_of_source = residual.net_flow(source)
    into_sink = -residual.net_flow(sink)
    if not out_of_source == into_sink == value:
        raise FlowInvariantError(
            f"Flow value mismatch: reported {value}, leaving source "
            f"{out_of_source}, entering sink {into_sink}."
        )
