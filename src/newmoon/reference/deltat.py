from __future__ import annotations

"""
newmoon.reference.deltat

ΔT (= TT − UT) from the Espenak–Meeus (NASA) piecewise polynomials, as
published for the Five Millennium Canon of Solar Eclipses:
  https://eclipse.gsfc.nasa.gov/SEhelp/deltatpoly2004.html

The model is evaluated on the calendar year alone. The polynomials are
valid for −1999..+3000; a year outside every band yields 0.0, or raises
DeltaTRangeError when strict=True. The zero is kept for compatibility
with tables generated by the classic new-moon driver.

Band edges: the lower bound of each band is exclusive and the upper bound
inclusive (a band "500 < y <= 1600" does not contain 500). The first band
is closed on both ends: −1999 <= y <= −500.
"""

from typing import Tuple

from ..core.errors import DeltaTRangeError


DELTA_T_RANGE: Tuple[int, int] = (-1999, 3000)

# (lower bound, upper bound) of each polynomial band, in evaluation order.
DELTA_T_BANDS: Tuple[Tuple[int, int], ...] = (
    (-1999, -500),
    (-500, 500),
    (500, 1600),
    (1600, 1700),
    (1700, 1800),
    (1800, 1860),
    (1860, 1900),
    (1900, 1920),
    (1920, 1941),
    (1941, 1961),
    (1961, 1986),
    (1986, 2005),
    (2005, 2050),
    (2050, 2150),
    (2150, 3000),
)


def _poly(u: float, coeffs: Tuple[float, ...]) -> float:
    """Horner evaluation for Σ coeffs[k] u^k."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * u + c
    return acc


def in_range(y: float) -> bool:
    lo, hi = DELTA_T_RANGE
    return lo <= y <= hi


def estimate_delta_t(y: float, *, strict: bool = False) -> float:
    """
    ΔT(y) in seconds for calendar year y.

    The driver passes whole years; a fractional year is evaluated with
    the polynomial of the band that contains it.

    strict:
        If True, a year outside [-1999, 3000] raises DeltaTRangeError
        instead of returning 0.0.
    """
    if not in_range(y):
        if strict:
            lo, hi = DELTA_T_RANGE
            raise DeltaTRangeError(f"year {y} outside ΔT polynomial range [{lo}, {hi}]")
        return 0.0

    if y <= -500:
        u = (y - 1820.0) / 100.0
        dt = -20.0 + 32.0 * u * u
    elif y <= 500:
        u = y / 100.0
        dt = _poly(u, (
            10583.6,
            -1014.41,
            33.78311,
            -5.952053,
            -0.1798452,
            0.022174192,
            0.0090316521,
        ))
    elif y <= 1600:
        u = (y - 1000.0) / 100.0
        dt = _poly(u, (
            1574.2,
            -556.01,
            71.23472,
            0.319781,
            -0.8503463,
            -0.005050998,
            0.0083572073,
        ))
    elif y <= 1700:
        t = y - 1600.0
        dt = 120.0 - 0.9808 * t - 0.01532 * t * t + (t ** 3) / 7129.0
    elif y <= 1800:
        t = y - 1700.0
        dt = 8.83 + 0.1603 * t - 0.0059285 * t * t + 0.00013336 * (t ** 3) - (t ** 4) / 1174000.0
    elif y <= 1860:
        t = y - 1800.0
        dt = _poly(t, (
            13.72,
            -0.332447,
            0.0068612,
            0.0041116,
            -0.00037436,
            0.0000121272,
            -0.0000001699,
            0.000000000875,
        ))
    elif y <= 1900:
        t = y - 1860.0
        dt = 7.62 + 0.5737 * t - 0.251754 * (t ** 2) + 0.01680668 * (t ** 3) - 0.0004473624 * (t ** 4) + (t ** 5) / 233174.0
    elif y <= 1920:
        t = y - 1900.0
        dt = -2.79 + 1.494119 * t - 0.0598939 * (t ** 2) + 0.0061966 * (t ** 3) - 0.000197 * (t ** 4)
    elif y <= 1941:
        t = y - 1920.0
        dt = 21.20 + 0.84493 * t - 0.076100 * (t ** 2) + 0.0020936 * (t ** 3)
    elif y <= 1961:
        t = y - 1950.0
        dt = 29.07 + 0.407 * t - (t ** 2) / 233.0 + (t ** 3) / 2547.0
    elif y <= 1986:
        t = y - 1975.0
        dt = 45.45 + 1.067 * t - (t ** 2) / 260.0 - (t ** 3) / 718.0
    elif y <= 2005:
        t = y - 2000.0
        dt = _poly(t, (
            63.86,
            0.3345,
            -0.060374,
            0.0017275,
            0.000651814,
            0.00002373599,
        ))
    elif y <= 2050:
        t = y - 2000.0
        dt = 62.92 + 0.32217 * t + 0.005589 * (t ** 2)
    elif y <= 2150:
        # discontinuity-fix term
        u = (y - 1820.0) / 100.0
        dt = -20.0 + 32.0 * u * u - 0.5628 * (2150.0 - y)
    else:
        u = (y - 1820.0) / 100.0
        dt = -20.0 + 32.0 * u * u

    return float(dt)


def band_of(y: float) -> Tuple[int, int] | None:
    """The (lower, upper) band used for year y, or None outside the model."""
    if not in_range(y):
        return None
    if y <= DELTA_T_BANDS[0][1]:
        return DELTA_T_BANDS[0]
    for lo, hi in DELTA_T_BANDS[1:]:
        if lo < y <= hi:
            return (lo, hi)
    return None
