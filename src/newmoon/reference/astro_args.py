from __future__ import annotations

from math import fmod

import math

from ..core.types import OrbitalElements


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def reduce_angle(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    # -1e-15 + 360 rounds to 360.0
    if y >= 360.0:
        y -= 360.0
    return y

def to_radians(deg: float) -> float:
    return deg * (math.pi / 180.0)


# ------------------------------------------------------------
# Lunation time variable
# ------------------------------------------------------------

# Lunations per Julian century, Meeus (49.3).
LUNATIONS_PER_CENTURY = 1236.85

# JDE of the mean new moon with k=0 (2000-01-06).
JDE_K0 = 2451550.09766

# Mean synodic month used by (49.1), days.
SYNODIC_MONTH = 29.530588861


def century_fraction(k: int) -> float:
    """T = k / 1236.85, Julian centuries since J2000.0 (49.3)."""
    return k / LUNATIONS_PER_CENTURY


# ------------------------------------------------------------
# Mean conjunction and mean elements, Meeus chapter 49
# ------------------------------------------------------------

def mean_conjunction_jde(k: int, T: float) -> float:
    """
    Mean new moon JDE (TT), Meeus (49.1):
      2451550.09766 + 29.530588861 k + 0.00015437 T^2 - 0.000000150 T^3 + 0.00000000073 T^4
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2
    return (
        JDE_K0
        + SYNODIC_MONTH * k
        + 0.00015437 * T2
        - 0.000000150 * T3
        + 0.00000000073 * T4
    )


def eccentricity_correction(T: float) -> float:
    """
    Eccentricity factor E for terms involving the Sun's mean anomaly (47.6):
      1 - 0.002516 T - 0.0000074 T^2
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)


def sun_mean_anomaly(k: int, T: float) -> float:
    """Sun's mean anomaly M in degrees (49.4)."""
    T2 = T * T
    M = (
        2.5534
        + 29.10535670 * k
        - 0.0000014 * T2
        - 0.00000011 * T2 * T
    )
    return reduce_angle(M)


def moon_mean_anomaly(k: int, T: float) -> float:
    """Moon's mean anomaly M' in degrees (49.5)."""
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2
    Mp = (
        201.5643
        + 385.81693528 * k
        + 0.0107582 * T2
        + 0.00001238 * T3
        - 0.000000058 * T4
    )
    return reduce_angle(Mp)


def moon_arg_latitude(k: int, T: float) -> float:
    """Moon's argument of latitude F in degrees (49.6)."""
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2
    F = (
        160.7108
        + 390.67050284 * k
        - 0.0016118 * T2
        - 0.00000227 * T3
        + 0.000000011 * T4
    )
    return reduce_angle(F)


def node_longitude(k: int, T: float) -> float:
    """Longitude of the ascending node of the lunar orbit, Omega (49.7)."""
    T2 = T * T
    Omega = (
        124.7746
        - 1.56375588 * k
        + 0.0020672 * T2
        + 0.00000215 * T2 * T
    )
    return reduce_angle(Omega)


def lunation_elements(k: int, T: float) -> OrbitalElements:
    return OrbitalElements(
        E=eccentricity_correction(T),
        M=sun_mean_anomaly(k, T),
        Mp=moon_mean_anomaly(k, T),
        F=moon_arg_latitude(k, T),
        Omega=node_longitude(k, T),
    )
