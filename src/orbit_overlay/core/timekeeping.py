"""Frame timing and time-warped fixed simulation steps."""
from __future__ import annotations

import math
import time
from dataclasses import dataclass, field


@dataclass
class FrameTimer:
    """Wall-clock frame delta, capped so a stalled window does not jump the orbit."""

    max_delta: float = 0.25
    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = min(now - self.last_time, self.max_delta)
        self.last_time = now
        return max(0.0, dt)


@dataclass
class FixedStepAccumulator:
    """Turns real seconds into at most ``max_substeps`` simulation steps.

    ``time_warp`` is simulated seconds per real second.
    """

    step: float
    max_substeps: int
    time_warp: float = 1.0
    value: float = 0.0

    def accrue(self, real_delta: float) -> None:
        if real_delta > 0.0:
            self.value += real_delta * self.time_warp

    def clear(self) -> None:
        self.value = 0.0

    def scale_warp(self, factor: float, *, lo: float = 1.0, hi: float = 100_000.0) -> float:
        self.time_warp = max(lo, min(hi, self.time_warp * factor))
        return self.time_warp

    def consume(self) -> tuple[int, float]:
        if self.value <= 0.0:
            return 0, 0.0
        steps_needed = max(1, math.ceil(self.value / self.step))
        steps_to_run = min(steps_needed, self.max_substeps)
        dt = self.value / steps_to_run
        self.value = 0.0
        return steps_to_run, dt


__all__ = ["FixedStepAccumulator", "FrameTimer"]
