"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the MCTS engine:
the search budget (iterations and/or wall-clock time), the UCT
exploration constant and an optional seed for reproducible agents.
"""
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional
import math


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    A search stops as soon as either budget is exhausted. Leaving one of
    them as None makes that dimension unbounded, but at least one must be set.
    """
    # Budget
    iterations: Optional[int] = 1000
    """Maximum number of select/expand/simulate/backpropagate cycles (None = no limit)"""

    time_limit_ms: Optional[float] = None
    """Maximum wall-clock time in milliseconds (None = no limit)"""

    # Selection
    exploration_weight: float = math.sqrt(2)
    """UCT exploration constant (default is sqrt(2))"""

    # Reproducibility
    seed: Optional[int] = None
    """Seed for an agent-owned random source (None = process-wide source)"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations is None and self.time_limit_ms is None:
            raise ValueError("at least one of iterations or time_limit_ms must be set")

        if self.iterations is not None and self.iterations < 0:
            raise ValueError("iterations must be non-negative or None")

        if self.time_limit_ms is not None and self.time_limit_ms < 0:
            raise ValueError("time_limit_ms must be non-negative or None")

        if self.exploration_weight < 0:
            raise ValueError("exploration_weight must be non-negative")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer iterations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(iterations=200)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration for a thorough search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(iterations=50000)

    @classmethod
    def timed(cls, time_limit_ms: float) -> 'MCTSConfig':
        """
        Get a configuration bounded only by wall-clock time.

        Args:
            time_limit_ms: Time budget per search in milliseconds

        Returns:
            Time-bounded MCTSConfig object
        """
        return cls(iterations=None, time_limit_ms=time_limit_ms)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Unknown keys are ignored.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        valid_names = {f.name for f in fields(cls)}
        valid_params = {k: v for k, v in config_dict.items() if k in valid_names}
        return cls(**valid_params)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return asdict(self)

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
