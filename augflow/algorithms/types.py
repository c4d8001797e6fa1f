"""Types and data structures for max-flow results.

Defines immutable containers for augmentation history and post-run analytics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from augflow.algorithms.base import Capacity, Edge, PathStrategy, Vertex


@dataclass(frozen=True)
class AugmentationRecord:
    """One augmentation applied by the flow engine.

    Attributes:
        path: Vertices of the augmenting path, source first.
        bottleneck: Amount of flow pushed along the path.
    """

    path: Tuple[Vertex, ...]
    bottleneck: Capacity

    @property
    def length(self) -> int:
        """Number of arcs on the path."""
        return len(self.path) - 1


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Captures edge flows, residual capacities, the reachable set and the min-cut.

    Attributes:
        total_flow: Maximum flow value achieved.
        strategy: Path strategy that produced the flow.
        edge_flow: Flow per original edge ``(u, v)``.
        residual_cap: Remaining forward capacity per original edge.
        reachable: Vertices reachable from the source in the final residual network.
        min_cut: Original edges leaving ``reachable``; all are saturated.
        cut_capacity: Total capacity of ``min_cut``; equals ``total_flow``.
        augmentations: Ordered augmentation history.
    """

    total_flow: Capacity
    strategy: PathStrategy
    edge_flow: Dict[Edge, Capacity]
    residual_cap: Dict[Edge, Capacity]
    reachable: Set[Vertex]
    min_cut: List[Edge]
    cut_capacity: Capacity
    augmentations: Tuple[AugmentationRecord, ...]
