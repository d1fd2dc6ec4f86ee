#ephemeris/de422.py
"""
True Sun–Moon conjunctions from the JPL DE422 ephemeris.

A conjunction is the instant where the geocentric ecliptic elongation
λ_moon - λ_sun passes through zero. The root finder only needs an object
with ``elong_deg(jd_tt)``, so it can be driven by DE422 or by any other
elongation model.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from newmoon.core.errors import NewMoonError
from newmoon.core.time import k_from_epoch_jd
from newmoon.reference import astro_args as aa
from newmoon.reference import periodic


# Mean obliquity of the ecliptic at J2000.0 (deg).
OBLIQUITY_J2000 = 23.439291111

# Earth/Moon mass ratio used when the de422 package ships no constants.
EMRAT_DEFAULT = 81.30056907419062


def signed_elongation(deg: float) -> float:
    """Map an elongation onto [-180, 180) so a new moon is a sign change."""
    return (deg + 180.0) % 360.0 - 180.0


def ecliptic_longitude(v_eq) -> float:
    """Ecliptic longitude (deg, [0, 360)) of an equatorial J2000 vector."""
    eps = math.radians(OBLIQUITY_J2000)
    x, y, z = float(v_eq[0]), float(v_eq[1]), float(v_eq[2])
    y_ecl = math.cos(eps) * y + math.sin(eps) * z
    return math.degrees(math.atan2(y_ecl, x)) % 360.0


def _earth_moon_ratio(de422_mod) -> float:
    import pathlib
    import numpy as np

    path = pathlib.Path(de422_mod.__file__).resolve().parent / "constants.npy"
    if not path.exists():
        return EMRAT_DEFAULT
    try:
        constants = np.load(str(path), allow_pickle=True).item()
    except (OSError, ValueError):
        return EMRAT_DEFAULT
    for key in ("EMRAT", "emrat"):
        if key in constants:
            return float(constants[key])
    return EMRAT_DEFAULT


@dataclass
class DE422Elongation:
    """
    Geocentric ecliptic elongation of the Moon from the Sun, from DE422.

    Requires optional deps:
      pip install "newmoon[ephemeris]"
    """
    eph: object
    emrat: float

    @classmethod
    def load(cls) -> "DE422Elongation":
        try:
            import de422  # type: ignore
            from jplephem import Ephemeris  # type: ignore
        except ImportError as e:
            raise RuntimeError(
                "DE422 ephemeris not available. Install extras:\n"
                "  pip install \"newmoon[ephemeris]\""
            ) from e
        return cls(eph=Ephemeris(de422), emrat=_earth_moon_ratio(de422))

    def elong_deg(self, jd_tt: float) -> float:
        # "moon" is geocentric; "earthmoon" and "sun" are barycentric
        moon = self.eph.compute("moon", jd_tt)[:3]
        earth = self.eph.compute("earthmoon", jd_tt)[:3] - moon / (self.emrat + 1.0)
        sun = self.eph.compute("sun", jd_tt)[:3] - earth
        return (ecliptic_longitude(moon) - ecliptic_longitude(sun)) % 360.0


def solve_conjunction_near(
    el,
    jde_guess: float,
    *,
    halfwidth_days: float = 3.0,
    tol_days: float = 1e-9,
) -> float:
    """
    TT Julian day near ``jde_guess`` where the elongation crosses zero.

    The bracket grows from ``halfwidth_days`` up to a quarter of a synodic
    month, which keeps the full moon (elongation 180°) out of it. The root
    is refined with the Illinois variant of regula falsi.
    """
    def f(t: float) -> float:
        return signed_elongation(el.elong_deg(t))

    w = halfwidth_days
    a, b = jde_guess - w, jde_guess + w
    fa, fb = f(a), f(b)
    while fa * fb > 0:
        w *= 1.5
        if w > 0.25 * aa.SYNODIC_MONTH:
            raise NewMoonError(f"no conjunction bracketed near JDE {jde_guess:.5f}")
        a, b = jde_guess - w, jde_guess + w
        fa, fb = f(a), f(b)

    if fa == 0.0:
        return a
    if fb == 0.0:
        return b

    t = a
    side = 0
    for _ in range(200):
        t = (a * fb - b * fa) / (fb - fa)
        ft = f(t)
        if ft == 0.0 or (b - a) < tol_days:
            break
        if ft * fb > 0:
            b, fb = t, ft
            if side == -1:
                fa *= 0.5
            side = -1
        else:
            a, fa = t, ft
            if side == 1:
                fb *= 0.5
            side = 1
    return t


def conjunction_for_lunation(el, k: int) -> float:
    """
    Conjunction (TT JD) of lunation k, seeded from the Meeus JDE.

    Raises NewMoonError when the root belongs to another lunation.
    """
    jde = periodic.corrected_jde(k, aa.century_fraction(k))
    t = solve_conjunction_near(el, jde)
    found = k_from_epoch_jd(t)
    if found != k:
        raise NewMoonError(f"conjunction near JDE {jde:.5f} belongs to lunation {found}, not {k}")
    return t
