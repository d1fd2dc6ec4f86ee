from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

@dataclass(frozen=True)
class OrbitalElements:
    """Mean elements of one lunation (angles in degrees, reduced to [0,360))."""
    E: float       # eccentricity correction, ~1
    M: float       # Sun's mean anomaly
    Mp: float      # Moon's mean anomaly
    F: float       # Moon's argument of latitude
    Omega: float   # longitude of the ascending node

@dataclass(frozen=True)
class CalendarDateTime:
    """
    Calendar date and time of day.

    Years use astronomical numbering (year 0 = 1 BC). Dates before
    1582-10-15 are on the Julian calendar, later ones Gregorian.
    """
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    calendar: Literal["julian", "gregorian"] = "gregorian"

    @property
    def day_fraction(self) -> float:
        """Day of month plus time of day as a fraction of a day."""
        ms = ((self.hour * 60 + self.minute) * 60 + self.second) * 1000 + self.millisecond
        return self.day + ms / 86_400_000.0

    def to_datetime(self) -> datetime:
        """Timezone-aware UTC datetime (Gregorian dates in years 1..9999 only)."""
        if self.calendar != "gregorian":
            raise ValueError(f"{self.isoformat()} is a Julian calendar date")
        return datetime(
            self.year, self.month, self.day,
            self.hour, self.minute, self.second, self.millisecond * 1000,
            tzinfo=timezone.utc,
        )

    def isoformat(self) -> str:
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}.{self.millisecond:03d}"
        )

@dataclass(frozen=True)
class NewMoon:
    """One lunation carried through the whole pipeline."""
    k: int
    T: float
    jde_mean: float
    elements: OrbitalElements
    planetary: float   # A1..A14 sum (days)
    principal: float   # periodic-term sum (days)
    jde: float         # corrected JDE (TT)
    delta_t: float     # seconds, TT - UT
    tt: CalendarDateTime
    ut: CalendarDateTime

    @property
    def jd_ut(self) -> float:
        return self.jde - self.delta_t / 86400.0
