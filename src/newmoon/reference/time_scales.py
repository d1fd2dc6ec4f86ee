from __future__ import annotations

from datetime import date, datetime, timezone
import math
from typing import Optional, Tuple

from ..core.errors import InvalidJulianDayError
from ..core.types import CalendarDateTime
from .deltat import estimate_delta_t


# First day of the Gregorian calendar, 1582-10-15, as an integer day count Z.
GREGORIAN_CUTOVER_Z = 2299161

_MS_PER_DAY = 86_400_000


# ============================================================
# Basic JD / JDN helpers
# ============================================================

def jd_to_jdn(jd: float) -> int:
    """
    Convert Julian Date (JD, days from noon) to Julian Day Number (JDN, integer day starting at midnight).

    Standard relation:
      JDN = floor(JD + 0.5)
    """
    return int(math.floor(jd + 0.5))


def jdn_to_jd(jdn: int) -> float:
    """
    Convert Julian Day Number (JDN) to the JD at midnight of that day.
    Since JD starts at noon, midnight is JDN - 0.5.
    """
    return float(jdn) - 0.5


# ============================================================
# Gregorian calendar date <-> JDN  (Fliegel–Van Flandern)
# ============================================================

def date_to_jdn(d: date) -> int:
    """
    Gregorian date -> JDN (proleptic Gregorian).
    """
    y = d.year
    m = d.month
    day = d.day

    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3

    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return int(jdn)


def jdn_to_date(jdn: int) -> date:
    """
    JDN -> Gregorian date (proleptic Gregorian).
    """
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4

    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153

    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)

    return date(int(year), int(month), int(day))


# ============================================================
# datetime(UT) -> JD
# ============================================================

def from_calendar(dt: datetime) -> float:
    """
    datetime -> JD on the proleptic Gregorian calendar.

    Naive datetimes are taken as UT; aware ones are converted to UTC first.
    A plain date is taken as 0h.
    """
    if isinstance(dt, datetime):
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        seconds = dt.hour * 3600 + dt.minute * 60 + dt.second + dt.microsecond / 1e6
    else:
        seconds = 0.0
    return jdn_to_jd(date_to_jdn(dt)) + seconds / 86400.0


# ============================================================
# Calendar <-> JD (Meeus chapter 7, Julian/Gregorian cutover)
# ============================================================

def is_gregorian(year: int, month: int, day: float) -> bool:
    """True for dates on or after 1582-10-15."""
    return (year, month, day) >= (1582, 10, 15)


def calendar_to_jd(year: int, month: int, day: float, *, gregorian: Optional[bool] = None) -> float:
    """
    Calendar date -> JD, Meeus (7.1). `day` may carry the time of day as a fraction.

    gregorian:
        None picks the calendar by the 1582-10-15 cutover; True/False forces it.
    """
    if gregorian is None:
        gregorian = is_gregorian(year, month, day)

    if month <= 2:
        year -= 1
        month += 12

    if gregorian:
        a = year // 100
        b = 2 - a + a // 4
    else:
        b = 0

    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day + b - 1524.5
    )


def to_calendar(jd: float) -> CalendarDateTime:
    """
    JD -> calendar date and time, Meeus chapter 7.

    Days before JD 2299160.5 (1582-10-15 0h) come out on the Julian
    calendar. The time of day is rounded to the nearest millisecond.
    """
    if not math.isfinite(jd):
        raise InvalidJulianDayError(f"julian day must be a finite number, got {jd!r}")

    jd = jd + 0.5
    Z = math.floor(jd)
    ms = round((jd - Z) * _MS_PER_DAY)
    if ms >= _MS_PER_DAY:
        # rounding reached the next midnight
        Z += 1
        ms -= _MS_PER_DAY

    if Z < GREGORIAN_CUTOVER_Z:
        A = Z
    else:
        a = math.floor((Z - 1867216.25) / 36524.25)
        A = Z + 1 + a - math.floor(a / 4)

    B = A + 1524
    C = math.floor((B - 122.1) / 365.25)
    D = math.floor(365.25 * C)
    E = math.floor((B - D) / 30.6001)

    day = B - D - math.floor(30.6001 * E)
    month = E - 13 if E in (14, 15) else E - 1
    year = C - 4715 if month in (1, 2) else C - 4716

    seconds, millisecond = divmod(ms, 1000)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)

    return CalendarDateTime(
        year=int(year),
        month=int(month),
        day=int(day),
        hour=int(hour),
        minute=int(minute),
        second=int(second),
        millisecond=int(millisecond),
        calendar="julian" if Z < GREGORIAN_CUTOVER_Z else "gregorian",
    )


def calendar_datetime_to_jd(cal: CalendarDateTime) -> float:
    """Inverse of to_calendar."""
    return calendar_to_jd(cal.year, cal.month, cal.day_fraction, gregorian=(cal.calendar == "gregorian"))


# ============================================================
# TT -> UT via ΔT
# ============================================================

def jd_tt_to_ut(jd_tt: float, *, strict: bool = False) -> Tuple[CalendarDateTime, float]:
    """
    JD(TT) -> (UT calendar date, ΔT seconds).

    ΔT is evaluated on the calendar year of the TT instant and subtracted:
      UT = TT - ΔT
    """
    tt = to_calendar(jd_tt)
    dT = estimate_delta_t(tt.year, strict=strict)
    return to_calendar(jd_tt - dT / 86400.0), dT
