"""newmoon public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    new_moon,
    new_moon_near,
    each_lunar_cycle,
    iter_new_moons,
    new_moons_between,
    format_utc,
    explain,
)
from .config import NewMoonConfig
from .core.errors import DeltaTRangeError, InvalidJulianDayError, NewMoonError
from .core.time import lunation_index
from .core.types import CalendarDateTime, NewMoon, OrbitalElements
from .reference.deltat import estimate_delta_t
from .reference.time_scales import from_calendar, to_calendar

__all__ = [
    "new_moon",
    "new_moon_near",
    "each_lunar_cycle",
    "iter_new_moons",
    "new_moons_between",
    "format_utc",
    "explain",
    "NewMoonConfig",
    "NewMoonError",
    "InvalidJulianDayError",
    "DeltaTRangeError",
    "lunation_index",
    "CalendarDateTime",
    "NewMoon",
    "OrbitalElements",
    "estimate_delta_t",
    "from_calendar",
    "to_calendar",
]
