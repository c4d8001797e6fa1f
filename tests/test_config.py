"""Test the configuration module functionality."""

import pytest

from augflow.algorithms.base import PathStrategy
from augflow.algorithms.max_flow import FlowEngine, calc_max_flow
from augflow.algorithms.paths import BreadthFirstPathFinder
from augflow.algorithms.residual import ResidualNetwork
from augflow.config import ENGINE_CONFIG, FlowEngineConfig


def test_flow_engine_config_defaults():
    """Test that the default configuration values are correct."""
    config = FlowEngineConfig()

    assert config.default_strategy == "bfs"
    assert config.check_invariants is False
    assert config.progress_interval == 1000
    assert config.resolve_strategy() is PathStrategy.SHORTEST


def test_resolve_strategy_aliases():
    assert FlowEngineConfig("ford-fulkerson").resolve_strategy() is PathStrategy.ANY
    with pytest.raises(ValueError):
        FlowEngineConfig("push-relabel").resolve_strategy()


def test_global_config_instance():
    """Test that the global configuration instance is properly initialized."""
    assert isinstance(ENGINE_CONFIG, FlowEngineConfig)
    engine = FlowEngine(ResidualNetwork(2))
    assert isinstance(engine.finder, BreadthFirstPathFinder)


def test_global_config_drives_default_strategy(monkeypatch, zigzag):
    """Changing the global default strategy changes unspecified runs."""
    monkeypatch.setattr(ENGINE_CONFIG, "default_strategy", "dfs")
    _, summary = calc_max_flow(zigzag, 0, 3, return_summary=True)
    assert summary.strategy is PathStrategy.ANY
    assert len(summary.augmentations) == 4


def test_config_passed_explicitly(zigzag):
    config = FlowEngineConfig(default_strategy="dfs", check_invariants=True)
    value = calc_max_flow(zigzag, 0, 3, config=config)
    assert value == 2000
