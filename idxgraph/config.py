"""Configuration classes for idxgraph algorithms."""

from dataclasses import dataclass


@dataclass
class FlowConfig:
    """Numeric tolerances used by the max-flow engines."""

    # Residual capacities at or below this value count as exhausted
    # when capacities are floats
    float_epsilon: float = 1e-9

    def epsilon_for(self, sample: object, zero: object) -> object:
        """Pick the comparison tolerance for values shaped like ``sample``."""
        if isinstance(sample, float):
            return self.float_epsilon
        return zero


# Global configuration instance
FLOW_CONFIG = FlowConfig()
