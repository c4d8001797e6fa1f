import pytest

from augflow.algorithms.base import PathStrategy
from augflow.algorithms.paths import (
    BreadthFirstPathFinder,
    DepthFirstPathFinder,
    PathFinder,
    get_path_finder,
)
from augflow.algorithms.residual import ResidualNetwork


def _assert_augmenting(residual, path, source, sink):
    assert path[0] == source
    assert path[-1] == sink
    assert len(set(path)) == len(path)
    assert all(residual.residual_capacity(x, y) > 0 for x, y in zip(path, path[1:]))


class TestDepthFirstPathFinder:
    def test_follows_insertion_order(self):
        # 0 -> 1 -> 3 is added first, so DFS takes it even though 0 -> 3 exists.
        r = ResidualNetwork.from_edges(4, [(0, 1, 1), (1, 3, 1), (0, 3, 1)])
        assert DepthFirstPathFinder().find_path(r, 0, 3) == [0, 1, 3]

    def test_backtracks_from_dead_end(self):
        r = ResidualNetwork.from_edges(
            5, [(0, 1, 1), (1, 2, 1), (0, 3, 1), (3, 4, 1)]
        )
        path = DepthFirstPathFinder().find_path(r, 0, 4)
        assert path == [0, 3, 4]

    def test_skips_saturated_arcs(self):
        r = ResidualNetwork.from_edges(3, [(0, 1, 1), (1, 2, 1), (0, 2, 1)])
        r.augment([0, 1, 2], 1)
        assert DepthFirstPathFinder().find_path(r, 0, 2) == [0, 2]

    def test_uses_reverse_arcs(self, zigzag):
        r = ResidualNetwork.from_flow_network(zigzag)
        r.augment([0, 1, 2, 3], 1)
        r.augment([0, 1, 3], 999)
        assert DepthFirstPathFinder().find_path(r, 0, 3) == [0, 2, 1, 3]

    def test_no_path(self, disconnected):
        r = ResidualNetwork.from_flow_network(disconnected)
        assert DepthFirstPathFinder().find_path(r, 0, 3) is None

    def test_source_equals_sink(self, single_edge):
        r = ResidualNetwork.from_flow_network(single_edge)
        assert DepthFirstPathFinder().find_path(r, 0, 0) is None

    def test_long_chain_does_not_recurse(self):
        n = 5000
        r = ResidualNetwork.from_edges(n, [(i, i + 1, 1) for i in range(n - 1)])
        path = DepthFirstPathFinder().find_path(r, 0, n - 1)
        assert path == list(range(n))

    def test_visited_marks_reset_between_calls(self, two_paths):
        r = ResidualNetwork.from_flow_network(two_paths)
        finder = DepthFirstPathFinder()
        first = finder.find_path(r, 0, 3)
        assert finder.find_path(r, 0, 3) == first
        r.augment(first, r.bottleneck(first))
        second = finder.find_path(r, 0, 3)
        assert second == [0, 2, 3]


class TestBreadthFirstPathFinder:
    def test_finds_fewest_edges(self):
        r = ResidualNetwork.from_edges(4, [(0, 1, 1), (1, 3, 1), (0, 3, 1)])
        assert BreadthFirstPathFinder().find_path(r, 0, 3) == [0, 3]

    def test_ties_broken_by_insertion_order(self, two_paths):
        r = ResidualNetwork.from_flow_network(two_paths)
        assert BreadthFirstPathFinder().find_path(r, 0, 3) == [0, 1, 3]

    def test_uses_reverse_arcs(self):
        r = ResidualNetwork.from_edges(
            4, [(0, 1, 1), (1, 2, 1), (2, 3, 1), (0, 2, 1), (1, 3, 1)]
        )
        r.augment([0, 1, 2, 3], 1)
        path = BreadthFirstPathFinder().find_path(r, 0, 3)
        assert path == [0, 2, 1, 3]
        _assert_augmenting(r, path, 0, 3)

    def test_no_path(self, disconnected):
        r = ResidualNetwork.from_flow_network(disconnected)
        assert BreadthFirstPathFinder().find_path(r, 0, 3) is None

    def test_source_equals_sink(self, single_edge):
        r = ResidualNetwork.from_flow_network(single_edge)
        assert BreadthFirstPathFinder().find_path(r, 1, 1) is None

    def test_clrs_first_path(self, clrs):
        r = ResidualNetwork.from_flow_network(clrs)
        path = BreadthFirstPathFinder().find_path(r, 0, 5)
        assert path == [0, 1, 3, 5]


@pytest.mark.parametrize("finder_cls", [DepthFirstPathFinder, BreadthFirstPathFinder])
def test_paths_are_augmenting(finder_cls, clrs):
    r = ResidualNetwork.from_flow_network(clrs)
    finder = finder_cls()
    while (path := finder.find_path(r, 0, 5)) is not None:
        _assert_augmenting(r, path, 0, 5)
        r.augment(path, r.bottleneck(path))
    assert r.net_flow(0) == 23


class TestGetPathFinder:
    @pytest.mark.parametrize(
        "strategy,expected",
        [
            (PathStrategy.ANY, DepthFirstPathFinder),
            (PathStrategy.SHORTEST, BreadthFirstPathFinder),
            ("dfs", DepthFirstPathFinder),
            ("Ford-Fulkerson", DepthFirstPathFinder),
            ("bfs", BreadthFirstPathFinder),
            ("edmonds_karp", BreadthFirstPathFinder),
            (1, DepthFirstPathFinder),
        ],
    )
    def test_lookup(self, strategy, expected):
        assert isinstance(get_path_finder(strategy), expected)

    def test_instance_passthrough(self):
        finder = BreadthFirstPathFinder()
        assert get_path_finder(finder) is finder

    @pytest.mark.parametrize("strategy", ["dinic", 7, None])
    def test_unknown_strategy(self, strategy):
        with pytest.raises(ValueError):
            get_path_finder(strategy)

    def test_custom_finder_subclass(self):
        class FirstArcOnly(PathFinder):
            strategy = PathStrategy.ANY

            def find_path(self, residual, source, sink):
                for v, _ in residual.residual_neighbors(source):
                    return [source, v] if v == sink else None
                return None

        finder = get_path_finder(FirstArcOnly())
        r = ResidualNetwork.from_edges(2, [(0, 1, 1)])
        assert finder.find_path(r, 0, 1) == [0, 1]
        assert repr(finder) == "FirstArcOnly()"
