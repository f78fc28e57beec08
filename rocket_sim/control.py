"""
Rocket Flight Simulation - Control Input

The per-tick command supplied by the driver: one throttle per engine plus a
pitch angle. Yaw and roll are carried for forward compatibility only; the
thrust model does not apply them.
"""

from dataclasses import dataclass, field
from typing import List

from .vehicle import RocketConfig


@dataclass
class ControlCommand:
    """
    Control input for one integration step.

    Attributes:
        engine_throttle: Throttle per engine (0.0 - 1.0). Entries beyond the
            vehicle's engine count are ignored, missing entries mean 0.
        pitch: Tilt from local up toward the local horizontal axis (deg)
        yaw: Reserved (deg)
        roll: Reserved (deg)
    """
    engine_throttle: List[float] = field(default_factory=list)
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    @property
    def engine_count(self) -> int:
        return len(self.engine_throttle)

    def throttle_for(self, index: int) -> float:
        """Throttle of engine `index`, clamped to [0, 1]; 0 if not commanded."""
        if index < 0 or index >= len(self.engine_throttle):
            return 0.0
        return max(0.0, min(1.0, float(self.engine_throttle[index])))

    def with_pitch(self, pitch: float) -> 'ControlCommand':
        """Copy of this command with a new pitch."""
        return ControlCommand(
            engine_throttle=list(self.engine_throttle),
            pitch=pitch,
            yaw=self.yaw,
            roll=self.roll,
        )


def full_throttle(config: RocketConfig, pitch: float = 0.0) -> ControlCommand:
    """Every engine at 100 %."""
    return ControlCommand(engine_throttle=[1.0] * config.engine_count, pitch=pitch)


def engines_off(config: RocketConfig, pitch: float = 0.0) -> ControlCommand:
    """Every engine at 0 %."""
    return ControlCommand(engine_throttle=[0.0] * config.engine_count, pitch=pitch)
