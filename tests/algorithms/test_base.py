import pytest

from augflow.algorithms.base import (
    PathStrategy,
    is_vertex_index,
    path_edges,
    validate_capacity,
    validate_vertex,
)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("any", PathStrategy.ANY),
        ("DFS", PathStrategy.ANY),
        ("ford-fulkerson", PathStrategy.ANY),
        (" ford_fulkerson ", PathStrategy.ANY),
        ("shortest", PathStrategy.SHORTEST),
        ("bfs", PathStrategy.SHORTEST),
        ("Edmonds-Karp", PathStrategy.SHORTEST),
    ],
)
def test_strategy_from_name(name, expected):
    assert PathStrategy.from_name(name) is expected


def test_strategy_from_unknown_name():
    with pytest.raises(ValueError, match="Unknown path strategy 'dinic'"):
        PathStrategy.from_name("dinic")


@pytest.mark.parametrize("value,expected", [(0, True), (7, True), (True, False), (1.0, False), ("1", False)])
def test_is_vertex_index(value, expected):
    assert is_vertex_index(value) is expected


def test_validate_vertex():
    assert validate_vertex(3, 2) == 2
    with pytest.raises(ValueError, match="Sink vertex 3 is out of range"):
        validate_vertex(3, 3, "Sink vertex")
    with pytest.raises(ValueError, match="not an integer vertex index"):
        validate_vertex(3, None)


def test_validate_capacity():
    assert validate_capacity(0) == 0
    assert validate_capacity(10**20) == 10**20
    with pytest.raises(ValueError, match="negative"):
        validate_capacity(-3)
    with pytest.raises(ValueError, match="not an integer"):
        validate_capacity(2.5)
    with pytest.raises(ValueError, match="not an integer"):
        validate_capacity(False)


def test_path_edges():
    assert path_edges([0, 2, 1, 3]) == [(0, 2), (2, 1), (1, 3)]
    assert path_edges([4]) == []
