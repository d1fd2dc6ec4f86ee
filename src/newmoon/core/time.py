from __future__ import annotations
from datetime import date, datetime, timezone
import math
from typing import Union

# Lunations per Julian year, Meeus (49.2).
LUNATIONS_PER_YEAR = 12.3685

DateLike = Union[date, datetime]


def _as_naive_utc(d: DateLike) -> datetime:
    if isinstance(d, datetime):
        if d.tzinfo is not None:
            d = d.astimezone(timezone.utc).replace(tzinfo=None)
        return d
    return datetime(d.year, d.month, d.day)


def year_decimal_approx(d: DateLike) -> float:
    """Approximate decimal year as float: year + elapsed/span, time of day included."""
    dt = _as_naive_utc(d)
    start = datetime(dt.year, 1, 1)
    if dt.year < 9999:
        span = (datetime(dt.year + 1, 1, 1) - start).total_seconds()
    else:
        span = 365 * 86400.0
    return dt.year + (dt - start).total_seconds() / span


def lunation_index(d: DateLike) -> int:
    """
    Meeus lunation index k for a calendar date (49.2).

    k = 0 is the new moon of 2000-01-06; the result is floored so a date
    shortly before a new moon maps onto that new moon.
    """
    return int(math.floor((year_decimal_approx(d) - 2000.0) * LUNATIONS_PER_YEAR))


def k_from_epoch_jd(m0: float) -> int:
    """
    Derives the lunation index from a mean new moon JDE.
    """
    # 2451550.09766 is the JDE of the k=0 mean new moon.
    # 29.530588861 is the mean synodic month length.
    return round((float(m0) - 2451550.09766) / 29.530588861)
