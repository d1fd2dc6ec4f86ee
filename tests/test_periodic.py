# tests/test_periodic.py

import pytest
from newmoon.reference import astro_args as aa
from newmoon.reference import periodic


def test_term_tables_shape():
    assert len(periodic.PLANETARY_TERMS) == 14
    assert len(periodic.NEW_MOON_TERMS) == 25
    # dominant term first
    assert periodic.NEW_MOON_TERMS[0] == (0, 1, 0, 0, 0, -0.40720)

def test_meeus_example_49a_true_new_moon():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 49.a.
    k = -283 -> JDE 2443192.65118 (1977 February 18, 3h37m42s TD).
    """
    k = -283
    T = aa.century_fraction(k)
    assert periodic.corrected_jde(k, T) == pytest.approx(2443192.65118, abs=1e-4)

def test_planetary_arguments_are_reduced():
    args = periodic.planetary_arguments(1234, aa.century_fraction(1234))
    assert len(args) == 14
    for a in args:
        assert 0.0 <= a < 360.0

def test_planetary_argument_a1_carries_t2():
    k = 5000
    T = aa.century_fraction(k)
    a1 = periodic.planetary_arguments(k, T)[0]
    expected = aa.reduce_angle(299.77 + 0.107408 * k - 0.009173 * T * T)
    assert a1 == pytest.approx(expected, abs=1e-9)

def test_correction_bounds_over_centuries():
    # about 1700..2300
    for k in range(-3700, 3700):
        T = aa.century_fraction(k)
        el = aa.lunation_elements(k, T)
        A = periodic.planetary_correction(k, T)
        NM = periodic.principal_correction(el.E, el.M, el.Mp, el.F, el.Omega)
        assert abs(A) < 0.002
        # sum of |coefficients| is ~0.625 day
        assert abs(NM) < 0.63

def test_corrected_jde_is_monotonic():
    prev = None
    for k in range(-2000, 2000):
        jde = periodic.corrected_jde(k, aa.century_fraction(k))
        if prev is not None:
            assert jde > prev
            # true lunations run between ~29.27 and ~29.83 days
            assert 29.0 < jde - prev < 30.1
        prev = jde

def test_principal_correction_scales_solar_terms_by_e():
    # M = 90: the E-scaled terms sum to 0.16148, the E^2 term sits on sin(180)
    base = periodic.principal_correction(1.0, 90.0, 0.0, 0.0, 0.0)
    scaled = periodic.principal_correction(1.001, 90.0, 0.0, 0.0, 0.0)
    assert scaled - base == pytest.approx(0.001 * 0.16148, abs=1e-7)
