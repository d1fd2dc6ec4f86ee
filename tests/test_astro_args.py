# tests/test_astro_args.py

import math
import random

import pytest
from newmoon.reference import astro_args as aa


def test_reduce_angle_range():
    random.seed(42)
    for _ in range(10000):
        d = random.uniform(-1e6, 1e6)
        r = aa.reduce_angle(d)
        assert 0.0 <= r < 360.0

def test_reduce_angle_is_periodic():
    random.seed(7)
    for _ in range(1000):
        d = random.uniform(-1e5, 1e5)
        diff = abs(aa.reduce_angle(d + 360.0) - aa.reduce_angle(d))
        # equal up to rounding, possibly on opposite sides of the 0/360 seam
        assert min(diff, 360.0 - diff) < 1e-8

def test_reduce_angle_negative_inputs():
    # true modulo, not truncating remainder
    assert aa.reduce_angle(-30.0) == pytest.approx(330.0)
    assert aa.reduce_angle(-360.0) == 0.0
    assert aa.reduce_angle(-721.5) == pytest.approx(358.5)
    assert aa.reduce_angle(725.0) == pytest.approx(5.0)
    assert aa.reduce_angle(-1e-20) < 360.0

def test_reduce_angle_nan_propagates():
    assert math.isnan(aa.reduce_angle(float("nan")))

def test_to_radians():
    assert aa.to_radians(180.0) == pytest.approx(math.pi)
    assert aa.to_radians(-90.0) == pytest.approx(-math.pi / 2)
    assert aa.to_radians(0.0) == 0.0

def test_mean_conjunction_at_k0_is_exact():
    assert aa.mean_conjunction_jde(0, 0.0) == 2451550.09766

def test_century_fraction():
    assert aa.century_fraction(0) == 0.0
    assert aa.century_fraction(1236) == pytest.approx(1236 / 1236.85)
    assert aa.century_fraction(-283) == pytest.approx(-0.22881, abs=1e-5)

def test_meeus_example_49a_mean_elements():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 49.a.
    New moon of 1977 February, k = -283.
    """
    k = -283
    T = aa.century_fraction(k)

    assert aa.mean_conjunction_jde(k, T) == pytest.approx(2443192.94102, abs=1e-5)

    el = aa.lunation_elements(k, T)
    assert el.E == pytest.approx(1.0005753, abs=1e-7)
    assert el.M == pytest.approx(45.7375, abs=1e-4)
    assert el.Mp == pytest.approx(95.3722, abs=1e-4)
    assert el.F == pytest.approx(120.9584, abs=1e-4)
    assert el.Omega == pytest.approx(207.3176, abs=1e-4)

def test_elements_at_k0():
    el = aa.lunation_elements(0, 0.0)
    assert el.E == 1.0
    assert el.M == pytest.approx(2.5534)
    assert el.Mp == pytest.approx(201.5643)
    assert el.F == pytest.approx(160.7108)
    assert el.Omega == pytest.approx(124.7746)

def test_elements_are_reduced():
    for k in range(-12000, 12001, 97):
        T = aa.century_fraction(k)
        el = aa.lunation_elements(k, T)
        for x in (el.M, el.Mp, el.F, el.Omega):
            assert 0.0 <= x < 360.0
        # |T| <= 9.7 here, so E stays within 1 -/+ 0.025
        assert abs(el.E - 1.0) < 0.03
