"""Configuration classes for augflow components."""

from dataclasses import dataclass

from augflow.algorithms.base import PathStrategy


@dataclass
class FlowEngineConfig:
    """Configuration for the augmenting-path flow engine."""

    # Strategy name used when a caller does not choose one
    default_strategy: str = "bfs"

    # Verify capacity, skew symmetry and conservation after every augmentation
    check_invariants: bool = False

    # Emit an INFO progress message every N augmentations (0 disables)
    progress_interval: int = 1000

    def resolve_strategy(self) -> PathStrategy:
        """Return the ``PathStrategy`` named by ``default_strategy``."""
        return PathStrategy.from_name(self.default_strategy)


# Global configuration instance
ENGINE_CONFIG = FlowEngineConfig()
