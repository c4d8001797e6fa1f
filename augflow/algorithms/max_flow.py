"""Maximum-flow computation via repeated augmenting-path search.

``FlowEngine`` drives the search/augment loop over a ``ResidualNetwork`` with
an interchangeable ``PathFinder``:

    SEARCHING --(path found)--> AUGMENTING --> SEARCHING
    SEARCHING --(no path)-----> TERMINATED

At termination no source-sink path remains in the residual network, so the
vertices reachable from the source and their complement form a cut whose
capacity equals the flow value, which proves the flow is maximum.

``calc_max_flow`` wraps the engine in the functional API used by the CLI and
analytics helpers (``saturated_edges``, ``run_sensitivity``).
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional, Set, Tuple, Union, overload

from augflow.algorithms.base import (
    Capacity,
    Edge,
    FlowInvariantError,
    PathStrategy,
    Vertex,
    validate_vertex,
)
from augflow.algorithms.invariants import check_flow
from augflow.algorithms.paths import PathFinder, get_path_finder
from augflow.algorithms.residual import ResidualNetwork
from augflow.algorithms.types import AugmentationRecord, FlowSummary
from augflow.config import ENGINE_CONFIG, FlowEngineConfig
from augflow.graph.flow_network import FlowNetwork
from augflow.logging import get_logger

logger = get_logger(__name__)

StrategyLike = Union[PathStrategy, str, PathFinder]


class EngineState(Enum):
    """Lifecycle states of a ``FlowEngine``."""

    SEARCHING = "searching"
    AUGMENTING = "augmenting"
    TERMINATED = "terminated"


class FlowEngine:
    """Augmenting-path max-flow driver bound to one residual network.

    An engine runs once. Build a fresh ``ResidualNetwork`` (and engine) for
    each independent computation.

    Example:
        >>> residual = ResidualNetwork.from_edges(3, [(0, 1, 4), (1, 2, 3)])
        >>> engine = FlowEngine(residual, strategy="bfs")
        >>> engine.compute(0, 2)
        3
    """

    def __init__(
        self,
        residual: ResidualNetwork,
        strategy: Optional[StrategyLike] = None,
        config: Optional[FlowEngineConfig] = None,
    ) -> None:
        """Bind the engine to ``residual``.

        Args:
            residual: Residual network to mutate; must carry zero flow.
            strategy: Path strategy, strategy name, or ``PathFinder`` instance.
                Defaults to ``config.default_strategy``.
            config: Engine configuration. Defaults to ``ENGINE_CONFIG``.

        Raises:
            ValueError: If ``residual`` already carries flow, or the strategy
                cannot be resolved.
        """
        if any(flow for _, _, _, flow in residual.edges()):
            raise ValueError(
                "ResidualNetwork already carries flow; build a fresh one."
            )
        self._config = config if config is not None else ENGINE_CONFIG
        if strategy is None:
            strategy = self._config.resolve_strategy()
        self._residual = residual
        self._finder = get_path_finder(strategy)
        self._state = EngineState.SEARCHING
        self._flow_value: Capacity = 0
        self._augmentations: List[AugmentationRecord] = []
        self._source: Optional[Vertex] = None
        self._sink: Optional[Vertex] = None

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def flow_value(self) -> Capacity:
        """Flow accumulated so far (the maximum once terminated)."""
        return self._flow_value

    @property
    def augmentations(self) -> Tuple[AugmentationRecord, ...]:
        return tuple(self._augmentations)

    @property
    def residual(self) -> ResidualNetwork:
        return self._residual

    @property
    def finder(self) -> PathFinder:
        return self._finder

    @property
    def strategy(self) -> PathStrategy:
        return self._finder.strategy

    def compute(self, source: Vertex, sink: Vertex) -> Capacity:
        """Run search/augment cycles until no augmenting path remains.

        Args:
            source: Source vertex index.
            sink: Sink vertex index.

        Returns:
            Capacity: The maximum flow value from ``source`` to ``sink``.
            ``source == sink`` yields ``0`` without any augmentation.

        Raises:
            ValueError: If either terminal is not a valid vertex index.
            RuntimeError: If the engine has already terminated.
            FlowInvariantError: If a found path has no positive bottleneck,
                or invariant checking is enabled and a check fails.
        """
        if self._state is EngineState.TERMINATED:
            raise RuntimeError(
                "FlowEngine has already run; build a fresh ResidualNetwork "
                "for another computation."
            )
        n = self._residual.num_vertices
        source = validate_vertex(n, source, "Source vertex")
        sink = validate_vertex(n, sink, "Sink vertex")
        self._source = source
        self._sink = sink

        if source == sink:
            logger.debug("Source equals sink (%d); max flow is 0", source)
            self._state = EngineState.TERMINATED
            return 0

        logger.info(
            "Computing max flow %d -> %d on %d vertices, %d edges (%s)",
            source,
            sink,
            n,
            self._residual.num_edges,
            self._finder.strategy.name.lower(),
        )
        check_invariants = self._config.check_invariants
        progress_interval = self._config.progress_interval

        while True:
            path = self._finder.find_path(self._residual, source, sink)
            if path is None:
                break

            self._state = EngineState.AUGMENTING
            bottleneck = self._residual.bottleneck(path)
            if bottleneck <= 0:
                raise FlowInvariantError(
                    f"Path finder returned path {path} with bottleneck {bottleneck}."
                )
            self._residual.augment(path, bottleneck)
            self._flow_value += bottleneck
            self._augmentations.append(AugmentationRecord(tuple(path), bottleneck))
            logger.debug(
                "Augmentation %d: pushed %d along %s",
                len(self._augmentations),
                bottleneck,
                path,
            )
            if check_invariants:
                check_flow(self._residual, source, sink, self._flow_value)
            if progress_interval and len(self._augmentations) % progress_interval == 0:
                logger.info(
                    "%d augmentations, flow so far %d",
                    len(self._augmentations),
                    self._flow_value,
                )
            self._state = EngineState.SEARCHING

        self._state = EngineState.TERMINATED
        if check_invariants:
            check_flow(self._residual, source, sink, self._flow_value)
        logger.info(
            "Max flow %d -> %d is %d after %d augmentations",
            source,
            sink,
            self._flow_value,
            len(self._augmentations),
        )
        return self._flow_value

    def min_cut(self) -> Tuple[Set[Vertex], List[Edge]]:
        """Return the source side of the minimum cut and the cut edges.

        Returns:
            Tuple of ``(reachable, cut_edges)``: the vertices reachable from the
            source in the final residual network, and the original edges
            leaving that set, in insertion order.
            When source and sink coincide there is no cut: the result is
            ``({source}, [])``.

        Raises:
            RuntimeError: If the engine has not terminated.
        """
        if self._state is not EngineState.TERMINATED or self._source is None:
            raise RuntimeError("Minimum cut is only defined after compute().")
        if self._source == self._sink:
            return {self._source}, []
        reachable = self._residual.reachable_from(self._source)
        cut = [
            (u, v)
            for u, v, _, _ in self._residual.edges()
            if u in reachable and v not in reachable
        ]
        return reachable, cut


@overload
def calc_max_flow(
    network: Union[FlowNetwork, ResidualNetwork],
    source: Vertex,
    sink: Vertex,
    *,
    strategy: Optional[StrategyLike] = None,
    return_summary: Literal[False] = False,
    return_residual: Literal[False] = False,
    config: Optional[FlowEngineConfig] = None,
) -> Capacity: ...


@overload
def calc_max_flow(
    network: Union[FlowNetwork, ResidualNetwork],
    source: Vertex,
    sink: Vertex,
    *,
    strategy: Optional[StrategyLike] = None,
    return_summary: Literal[True],
    return_residual: Literal[False] = False,
    config: Optional[FlowEngineConfig] = None,
) -> Tuple[Capacity, FlowSummary]: ...


@overload
def calc_max_flow(
    network: Union[FlowNetwork, ResidualNetwork],
    source: Vertex,
    sink: Vertex,
    *,
    strategy: Optional[StrategyLike] = None,
    return_summary: Literal[False] = False,
    return_residual: Literal[True],
    config: Optional[FlowEngineConfig] = None,
) -> Tuple[Capacity, ResidualNetwork]: ...


@overload
def calc_max_flow(
    network: Union[FlowNetwork, ResidualNetwork],
    source: Vertex,
    sink: Vertex,
    *,
    strategy: Optional[StrategyLike] = None,
    return_summary: Literal[True],
    return_residual: Literal[True],
    config: Optional[FlowEngineConfig] = None,
) -> Tuple[Capacity, FlowSummary, ResidualNetwork]: ...


def calc_max_flow(
    network: Union[FlowNetwork, ResidualNetwork],
    source: Vertex,
    sink: Vertex,
    *,
    strategy: Optional[StrategyLike] = None,
    return_summary: bool = False,
    return_residual: bool = False,
    config: Optional[FlowEngineConfig] = None,
) -> Union[Capacity, tuple]:
    """Compute the maximum flow from ``source`` to ``sink``.

    A ``FlowNetwork`` is never modified: a fresh ``ResidualNetwork`` is built
    for every call. A ``ResidualNetwork`` argument is used in place and must
    not carry flow yet.

    Args:
        network: Input network.
        source: Source vertex index.
        sink: Sink vertex index.
        strategy: Path strategy (``PathStrategy``, name such as ``"dfs"`` or
            ``"bfs"``, or a ``PathFinder``). Defaults to the configured one.
        return_summary: If True, also return a ``FlowSummary``.
        return_residual: If True, also return the terminated ``ResidualNetwork``
            holding the final flow assignment.
        config: Engine configuration. Defaults to ``ENGINE_CONFIG``.

    Returns:
        Union[int, tuple]:
            - If neither flag: ``int`` max-flow value.
            - If return_summary only: ``(value, FlowSummary)``.
            - If return_residual only: ``(value, ResidualNetwork)``.
            - If both flags: ``(value, FlowSummary, ResidualNetwork)``.

    Raises:
        ValueError: If a terminal is out of range, or a ``ResidualNetwork``
            argument already carries flow.

    Examples:
        >>> net = FlowNetwork(4)
        >>> net.add_edge(0, 1, capacity=3)
        >>> net.add_edge(1, 3, capacity=3)
        >>> net.add_edge(0, 2, capacity=2)
        >>> net.add_edge(2, 3, capacity=2)
        >>> calc_max_flow(net, 0, 3)
        5
        >>> value, summary = calc_max_flow(net, 0, 3, return_summary=True)
        >>> summary.min_cut
        [(0, 1), (0, 2)]
    """
    if isinstance(network, ResidualNetwork):
        residual = network
    else:
        residual = ResidualNetwork.from_flow_network(network)

    engine = FlowEngine(residual, strategy=strategy, config=config)
    value = engine.compute(source, sink)

    if not (return_summary or return_residual):
        return value

    ret: list = [value]
    if return_summary:
        ret.append(_build_flow_summary(engine))
    if return_residual:
        ret.append(residual)
    return tuple(ret)


def _build_flow_summary(engine: FlowEngine) -> FlowSummary:
    """Construct a ``FlowSummary`` from a terminated engine."""
    residual = engine.residual
    edge_flow: Dict[Edge, Capacity] = {}
    residual_cap: Dict[Edge, Capacity] = {}
    capacity: Dict[Edge, Capacity] = {}
    for u, v, cap, flow in residual.edges():
        edge_flow[(u, v)] = flow
        residual_cap[(u, v)] = cap - flow
        capacity[(u, v)] = cap

    reachable, cut = engine.min_cut()
    cut_capacity = sum(capacity[edge] for edge in cut)
    if cut_capacity != engine.flow_value:
        raise FlowInvariantError(
            f"Cut capacity {cut_capacity} differs from flow value {engine.flow_value}."
        )

    return FlowSummary(
        total_flow=engine.flow_value,
        strategy=engine.strategy,
        edge_flow=edge_flow,
        residual_cap=residual_cap,
        reachable=reachable,
        min_cut=cut,
        cut_capacity=cut_capacity,
        augmentations=engine.augmentations,
    )


def saturated_edges(
    network: FlowNetwork,
    source: Vertex,
    sink: Vertex,
    **kwargs,
) -> List[Edge]:
    """Identify original edges left with zero residual capacity by a max flow.

    Zero-capacity edges are reported as saturated.

    Args:
        network: The network to analyze.
        source: Source vertex.
        sink: Sink vertex.
        **kwargs: Additional arguments passed to ``calc_max_flow``.

    Returns:
        List[Edge]: Saturated edges ``(u, v)`` in insertion order.
    """
    _, summary = calc_max_flow(network, source, sink, return_summary=True, **kwargs)
    return [edge for edge, residual in summary.residual_cap.items() if residual == 0]


def run_sensitivity(
    network: FlowNetwork,
    source: Vertex,
    sink: Vertex,
    *,
    change_amount: Capacity = 1,
    **kwargs,
) -> Dict[Edge, Capacity]:
    """Simple sensitivity analysis for per-edge capacity changes.

    Changes each saturated edge's capacity by ``change_amount`` (clamped at
    zero) on a copy of ``network`` and measures the resulting change in max
    flow.

    Args:
        network: The network to analyze.
        source: Source vertex.
        sink: Sink vertex.
        change_amount: Capacity delta; positive increases, negative decreases.
        **kwargs: Additional arguments passed to ``calc_max_flow``.

    Returns:
        Dict[Edge, int]: Flow delta per modified edge.
    """
    baseline = calc_max_flow(network, source, sink, **kwargs)

    sensitivity: Dict[Edge, Capacity] = {}
    for u, v in saturated_edges(network, source, sink, **kwargs):
        test_network = network.copy()
        new_capacity = max(0, test_network.capacity(u, v) + change_amount)
        test_network.update_capacity(u, v, new_capacity)
        new_flow = calc_max_flow(test_network, source, sink, **kwargs)
        sensitivity[(u, v)] = new_flow - baseline
    return sensitivity
