# reference/periodic.py

from __future__ import annotations

import math

from . import astro_args as aa


# (m, m', f, omega, power of E, coefficient in days)
# Periodic terms for the true new moon, Meeus p. 351. The multipliers apply
# to M (Sun's mean anomaly), M' (Moon's mean anomaly), F and Omega.
NEW_MOON_TERMS = (
    (0, 1, 0, 0, 0, -0.40720),
    (1, 0, 0, 0, 1, 0.17241),
    (0, 2, 0, 0, 0, 0.01608),
    (0, 0, 2, 0, 0, 0.01039),
    (-1, 1, 0, 0, 1, 0.00739),
    (1, 1, 0, 0, 1, -0.00514),
    (2, 0, 0, 0, 2, 0.00208),
    (0, 1, -2, 0, 0, -0.00111),
    (0, 1, 2, 0, 0, -0.00057),
    (1, 2, 0, 0, 1, 0.00056),
    (0, 3, 0, 0, 0, -0.00042),
    (1, 0, 2, 0, 1, 0.00042),
    (1, 0, -2, 0, 1, 0.00038),
    (-1, 2, 0, 0, 1, -0.00024),
    (0, 0, 0, 1, 0, -0.00017),
    (2, 1, 0, 0, 0, -0.00007),
    (0, 2, -2, 0, 0, 0.00004),
    (3, 0, 0, 0, 0, 0.00004),
    (1, 1, -2, 0, 0, 0.00003),
    (0, 2, 2, 0, 0, 0.00003),
    (1, 1, 2, 0, 0, -0.00003),
    (-1, 1, 2, 0, 0, 0.00003),
    (-1, 1, -2, 0, 0, -0.00002),
    (1, 3, 0, 0, 0, -0.00002),
    (0, 4, 0, 0, 0, 0.00002),
)

# (A0 deg, deg per lunation, coefficient in days)
# Additional corrections A1..A14 for all phases, Meeus pp. 351-352.
# A1 also carries -0.009173 T^2, see A1_T2.
PLANETARY_TERMS = (
    (299.77, 0.107408, 0.000325),
    (251.88, 0.016321, 0.000165),
    (251.83, 26.651886, 0.000164),
    (349.42, 36.412478, 0.000126),
    (84.66, 18.206239, 0.000110),
    (141.74, 53.303771, 0.000062),
    (207.14, 2.453732, 0.000060),
    (154.84, 7.306860, 0.000056),
    (34.52, 27.261239, 0.000047),
    (207.19, 0.121824, 0.000042),
    (291.34, 1.844379, 0.000040),
    (161.72, 24.198154, 0.000037),
    (239.56, 25.513099, 0.000035),
    (331.55, 3.592518, 0.000023),
)
A1_T2 = -0.009173


def planetary_arguments(k: int, T: float) -> tuple[float, ...]:
    """A1..A14 in degrees, each reduced to [0,360)."""
    args = []
    for i, (a0, rate, _coef) in enumerate(PLANETARY_TERMS):
        a = a0 + rate * k
        if i == 0:
            a += A1_T2 * T * T
        args.append(aa.reduce_angle(a))
    return tuple(args)


def planetary_correction(k: int, T: float) -> float:
    """
    Sum of the 14 planetary terms (days). Magnitude stays below 0.002.
    """
    total = 0.0
    for (_a0, _rate, coef), a in zip(PLANETARY_TERMS, planetary_arguments(k, T)):
        total += coef * math.sin(aa.to_radians(a))
    return total


def principal_correction(E: float, M: float, Mp: float, F: float, Omega: float) -> float:
    """
    Periodic correction from mean to true new moon (days), angles in degrees.

    The dominant term is -0.40720 sin M', so the sum stays below 0.5 day.
    """
    M_rad = aa.to_radians(M)
    Mp_rad = aa.to_radians(Mp)
    F_rad = aa.to_radians(F)
    Omega_rad = aa.to_radians(Omega)

    total = 0.0
    for m, mp, f, om, e_pow, coef in NEW_MOON_TERMS:
        term_coef = coef
        if e_pow == 1:
            term_coef *= E
        elif e_pow == 2:
            term_coef *= (E * E)

        arg = m * M_rad + mp * Mp_rad + f * F_rad + om * Omega_rad
        total += term_coef * math.sin(arg)
    return total


def corrected_jde(k: int, T: float) -> float:
    """True new moon JDE (TT): mean conjunction + principal + planetary corrections."""
    el = aa.lunation_elements(k, T)
    return (
        aa.mean_conjunction_jde(k, T)
        + principal_correction(el.E, el.M, el.Mp, el.F, el.Omega)
        + planetary_correction(k, T)
    )
