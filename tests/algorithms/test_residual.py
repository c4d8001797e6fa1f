import pytest

from augflow.algorithms.base import FlowInvariantError
from augflow.algorithms.residual import ResidualNetwork


class TestResidualConstruction:
    def test_empty_network(self):
        r = ResidualNetwork(3)
        assert r.num_vertices == 3
        assert r.num_edges == 0
        assert len(r) == 3
        assert r.flow_matrix() == [[0, 0, 0], [0, 0, 0], [0, 0, 0]]

    def test_add_edge_sets_both_directions(self):
        r = ResidualNetwork(2)
        r.add_edge(0, 1, 7)

        assert r.capacity(0, 1) == 7
        assert r.capacity(1, 0) == 0
        assert r.flow(0, 1) == 0
        assert r.flow(1, 0) == 0
        assert r.residual_capacity(0, 1) == 7
        assert r.residual_capacity(1, 0) == 0
        assert r.has_edge(0, 1)
        assert not r.has_edge(1, 0)

    def test_reverse_arc_visible_in_head_adjacency(self):
        r = ResidualNetwork(3)
        r.add_edge(0, 1, 1)
        r.add_edge(2, 1, 1)
        assert r.neighbors(0) == [1]
        assert r.neighbors(1) == [0, 2]
        assert r.neighbors(2) == [1]

    def test_adjacency_keeps_insertion_order(self):
        r = ResidualNetwork.from_edges(4, [(0, 3, 1), (0, 1, 1), (0, 2, 1)])
        assert r.neighbors(0) == [3, 1, 2]
        assert list(r.edges()) == [(0, 3, 1, 0), (0, 1, 1, 0), (0, 2, 1, 0)]

    def test_zero_capacity_edge_is_allowed(self):
        r = ResidualNetwork(2)
        r.add_edge(0, 1, 0)
        assert r.has_edge(0, 1)
        assert r.residual_capacity(0, 1) == 0
        assert list(r.residual_neighbors(0)) == []

    def test_unrelated_pair_has_zero_residual(self):
        r = ResidualNetwork.from_edges(3, [(0, 1, 4)])
        assert r.residual_capacity(0, 2) == 0
        assert r.capacity(2, 0) == 0
        assert r.flow(1, 2) == 0

    @pytest.mark.parametrize(
        "u,v,capacity,message",
        [
            (0, 0, 1, "Self-loop"),
            (0, 3, 1, "out of range"),
            (-1, 1, 1, "out of range"),
            (0, 1, -2, "negative"),
            (0, 1, 1.5, "not an integer"),
            (0, 1, True, "not an integer"),
            ("0", 1, 1, "not an integer"),
        ],
    )
    def test_invalid_edges_rejected(self, u, v, capacity, message):
        r = ResidualNetwork(3)
        with pytest.raises(ValueError, match=message):
            r.add_edge(u, v, capacity)
        assert r.num_edges == 0

    def test_duplicate_edge_rejected(self):
        r = ResidualNetwork.from_edges(2, [(0, 1, 3)])
        with pytest.raises(ValueError, match="already exists"):
            r.add_edge(0, 1, 5)
        assert r.capacity(0, 1) == 3

    def test_antiparallel_edge_rejected(self):
        r = ResidualNetwork.from_edges(2, [(0, 1, 3)])
        with pytest.raises(ValueError, match="antiparallel"):
            r.add_edge(1, 0, 5)
        assert r.num_edges == 1
        assert r.capacity(1, 0) == 0

    @pytest.mark.parametrize("n", [-1, 2.0, "3"])
    def test_invalid_vertex_count(self, n):
        with pytest.raises(ValueError):
            ResidualNetwork(n)

    def test_from_flow_network(self, clrs):
        r = ResidualNetwork.from_flow_network(clrs)
        assert r.num_vertices == 6
        assert r.num_edges == 9
        assert [(u, v, c) for u, v, c, _ in r.edges()] == clrs.edge_list()


class TestAugment:
    def test_augment_updates_skew_symmetric_flow(self):
        r = ResidualNetwork.from_edges(3, [(0, 1, 5), (1, 2, 3)])
        r.augment([0, 1, 2], 3)

        assert r.flow(0, 1) == 3
        assert r.flow(1, 0) == -3
        assert r.flow(1, 2) == 3
        assert r.flow(2, 1) == -3
        assert r.residual_capacity(0, 1) == 2
        assert r.residual_capacity(1, 0) == 3
        assert r.residual_capacity(1, 2) == 0
        assert r.residual_capacity(2, 1) == 3

    def test_augment_over_reverse_arc_cancels_flow(self):
        r = ResidualNetwork.from_edges(4, [(0, 1, 2), (1, 2, 2), (0, 2, 2), (2, 3, 2)])
        r.augment([0, 1, 2], 2)
        # Push back over the reverse arc 2 -> 1.
        r.augment([2, 1], 1)
        assert r.flow(1, 2) == 1
        assert r.residual_capacity(1, 2) == 1
        assert r.residual_capacity(2, 1) == 1

    def test_bottleneck(self):
        r = ResidualNetwork.from_edges(4, [(0, 1, 9), (1, 2, 4), (2, 3, 6)])
        assert r.bottleneck([0, 1, 2, 3]) == 4
        assert r.bottleneck([0, 1]) == 9

    def test_bottleneck_needs_two_vertices(self):
        r = ResidualNetwork(1)
        with pytest.raises(ValueError):
            r.bottleneck([0])

    def test_augment_beyond_residual_leaves_flow_untouched(self):
        r = ResidualNetwork.from_edges(3, [(0, 1, 5), (1, 2, 3)])
        with pytest.raises(FlowInvariantError, match="exceeds residual"):
            r.augment([0, 1, 2], 4)
        assert r.flow(0, 1) == 0
        assert r.flow(1, 2) == 0

    @pytest.mark.parametrize(
        "path,amount",
        [
            ([0], 1),
            ([0, 2], 1),
            ([0, 1, 2], 0),
            ([0, 1, 2], -1),
            ([0, 1, 2], 1.0),
            ([0, 1, 0, 1], 1),
        ],
    )
    def test_invalid_augment_rejected(self, path, amount):
        r = ResidualNetwork.from_edges(3, [(0, 1, 5), (1, 2, 3)])
        with pytest.raises(FlowInvariantError):
            r.augment(path, amount)
        assert r.flow_matrix() == [[0, 0, 0], [0, 0, 0], [0, 0, 0]]


class TestResidualQueries:
    def test_net_flow(self):
        r = ResidualNetwork.from_edges(3, [(0, 1, 5), (1, 2, 3)])
        r.augment([0, 1, 2], 2)
        assert r.net_flow(0) == 2
        assert r.net_flow(1) == 0
        assert r.net_flow(2) == -2

    def test_reachable_from(self):
        r = ResidualNetwork.from_edges(4, [(0, 1, 1), (1, 2, 5), (2, 3, 5)])
        assert r.reachable_from(0) == {0, 1, 2, 3}
        r.augment([0, 1, 2, 3], 1)
        assert r.reachable_from(0) == {0}
        # Reverse arcs make the tail reachable from downstream vertices.
        assert r.reachable_from(2) == {0, 1, 2, 3}

    def test_residual_neighbors(self):
        r = ResidualNetwork.from_edges(3, [(0, 1, 2), (0, 2, 1)])
        r.augment([0, 2], 1)
        assert list(r.residual_neighbors(0)) == [(1, 2)]
        assert list(r.residual_neighbors(2)) == [(0, 1)]

    def test_flow_matrix(self):
        r = ResidualNetwork.from_edges(3, [(0, 1, 5), (1, 2, 3)])
        r.augment([0, 1, 2], 3)
        assert r.flow_matrix() == [[0, 3, 0], [-3, 0, 3], [0, -3, 0]]

    def test_repr(self):
        r = ResidualNetwork.from_edges(3, [(0, 1, 5)])
        assert repr(r) == "ResidualNetwork(num_vertices=3, num_edges=1)"
