from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Iterator, List, Optional

from .config import LUNAR_CYCLE, NewMoonConfig
from .core.errors import NewMoonError
from .core.time import DateLike, lunation_index
from .core.types import CalendarDateTime, NewMoon
from .reference import astro_args as aa
from .reference import periodic
from .reference.time_scales import jd_tt_to_ut, to_calendar

logger = logging.getLogger(__name__)


def new_moon(k: int, *, strict_delta_t: bool = False) -> NewMoon:
    """Carry lunation k through the full pipeline: mean JDE -> corrected JDE -> UT."""
    T = aa.century_fraction(k)
    jde_mean = aa.mean_conjunction_jde(k, T)
    el = aa.lunation_elements(k, T)
    A = periodic.planetary_correction(k, T)
    NM = periodic.principal_correction(el.E, el.M, el.Mp, el.F, el.Omega)

    jde = jde_mean + NM + A
    tt = to_calendar(jde)
    ut, dT = jd_tt_to_ut(jde, strict=strict_delta_t)

    return NewMoon(
        k=k,
        T=T,
        jde_mean=jde_mean,
        elements=el,
        planetary=A,
        principal=NM,
        jde=jde,
        delta_t=dT,
        tt=tt,
        ut=ut,
    )


def new_moon_near(d: DateLike, *, strict_delta_t: bool = False) -> NewMoon:
    """New moon for the lunation index of date d."""
    return new_moon(lunation_index(d), strict_delta_t=strict_delta_t)


def each_lunar_cycle(start: datetime, end: datetime, *, step_days: float = LUNAR_CYCLE) -> Iterator[datetime]:
    """Candidate dates from start, one synodic month apart, while <= end."""
    if step_days <= 0:
        raise ValueError("step_days must be positive")
    step = timedelta(days=step_days)
    d = start
    while d <= end:
        yield d
        d += step


def iter_new_moons(config: Optional[NewMoonConfig] = None) -> Iterator[NewMoon]:
    """
    New moons for every candidate date of the configured range.

    A candidate that fails is logged and skipped; lunations are independent.
    """
    if config is None:
        config = NewMoonConfig()

    for d in each_lunar_cycle(config.start, config.end, step_days=config.step_days):
        k = lunation_index(d)
        try:
            nm = new_moon(k, strict_delta_t=config.strict_delta_t)
        except NewMoonError as e:
            logger.warning("skipping lunation k=%d (candidate %s): %s", k, d.isoformat(), e)
            continue
        logger.debug("k=%d jde=%.5f dT=%.1fs -> %s", k, nm.jde, nm.delta_t, nm.ut.isoformat())
        yield nm


def new_moons_between(
    start: datetime,
    end: datetime,
    *,
    step_days: float = LUNAR_CYCLE,
    strict_delta_t: bool = False,
) -> List[NewMoon]:
    cfg = NewMoonConfig(start=start, end=end, step_days=step_days, strict_delta_t=strict_delta_t)
    return list(iter_new_moons(cfg))


def format_utc(cal: CalendarDateTime, *, width: int = 20) -> str:
    """'M/D/YYYY HH:MM:SS UTC', right-justified to width."""
    text = f"{cal.month}/{cal.day}/{cal.year} {cal.hour:02d}:{cal.minute:02d}:{cal.second:02d} UTC"
    return f"{text:>{width}}"


def explain(k: int, *, strict_delta_t: bool = False) -> Dict[str, Any]:
    """Stage-by-stage values for lunation k."""
    nm = new_moon(k, strict_delta_t=strict_delta_t)
    el = nm.elements
    return {
        "k": nm.k,
        "T": nm.T,
        "jde_mean": nm.jde_mean,
        "E": el.E,
        "M": el.M,
        "Mp": el.Mp,
        "F": el.F,
        "Omega": el.Omega,
        "planetary": nm.planetary,
        "principal": nm.principal,
        "jde": nm.jde,
        "tt": nm.tt.isoformat(),
        "delta_t": nm.delta_t,
        "ut": nm.ut.isoformat(),
    }
