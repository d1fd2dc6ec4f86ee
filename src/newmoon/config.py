from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime

# Mean synodic month (days) used to step between candidate dates.
LUNAR_CYCLE = 29.53058770576


@dataclass(frozen=True)
class NewMoonConfig:
    """
    Driver settings for a new-moon table.

    All instants are UT; start defaults to the k=0 new moon date and end to
    the last new moon of 2050.
    """
    start: datetime = field(default_factory=lambda: datetime(2000, 1, 6))
    end: datetime = field(default_factory=lambda: datetime(2050, 12, 14))
    step_days: float = LUNAR_CYCLE

    # fixed-width display column
    width: int = 20

    # raise instead of using ΔT = 0 outside -1999..3000
    strict_delta_t: bool = False

    def __post_init__(self) -> None:
        if self.step_days <= 0:
            raise ValueError("step_days must be positive")
        if self.end < self.start:
            raise ValueError("end must be >= start")
