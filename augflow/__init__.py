"""augflow: augmenting-path maximum flow.

Computes maximum flows over integer-capacity networks with two
interchangeable path strategies: depth-first (Ford-Fulkerson) and
breadth-first shortest paths (Edmonds-Karp).

Primary API:
    calc_max_flow() - One-shot max flow with optional summary and residual
    FlowEngine - Search/augment driver bound to one ResidualNetwork
    FlowNetwork - Validated networkx-based input graph
    from_networkx() / to_networkx() - Conversion helpers
    load_problem() - Read edge-list or YAML problem files

Example:
    from augflow import FlowNetwork, calc_max_flow

    net = FlowNetwork(4)
    net.add_edge(0, 1, capacity=3)
    net.add_edge(1, 3, capacity=3)
    net.add_edge(0, 2, capacity=2)
    net.add_edge(2, 3, capacity=2)

    calc_max_flow(net, 0, 3)                 # 5, Edmonds-Karp
    calc_max_flow(net, 0, 3, strategy="dfs")  # 5, Ford-Fulkerson
"""

from __future__ import annotations

from augflow import logging
from augflow._version import __version__
from augflow.algorithms.base import FlowInvariantError, PathStrategy
from augflow.algorithms.max_flow import (
    EngineState,
    FlowEngine,
    calc_max_flow,
    run_sensitivity,
    saturated_edges,
)
from augflow.algorithms.paths import (
    BreadthFirstPathFinder,
    DepthFirstPathFinder,
    PathFinder,
    get_path_finder,
)
from augflow.algorithms.residual import ResidualNetwork
from augflow.algorithms.types import AugmentationRecord, FlowSummary
from augflow.config import ENGINE_CONFIG, FlowEngineConfig
from augflow.graph.convert import NodeMap, from_networkx, to_networkx
from augflow.graph.flow_network import FlowNetwork
from augflow.io import FlowProblem, load_problem

__all__ = [
    "__version__",
    "logging",
    "AugmentationRecord",
    "BreadthFirstPathFinder",
    "DepthFirstPathFinder",
    "ENGINE_CONFIG",
    "EngineState",
    "FlowEngine",
    "FlowEngineConfig",
    "FlowInvariantError",
    "FlowNetwork",
    "FlowProblem",
    "FlowSummary",
    "NodeMap",
    "PathFinder",
    "PathStrategy",
    "ResidualNetwork",
    "calc_max_flow",
    "from_networkx",
    "get_path_finder",
    "load_problem",
    "run_sensitivity",
    "saturated_edges",
    "to_networkx",
]
