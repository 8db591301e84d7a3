"""
Tests for natural cubic spline interpolation.
"""

import pytest
import numpy as np
from scipy.interpolate import CubicSpline

from radchem.core.errors import OutOfDomainError
from radchem.spectral.spline import NaturalCubicSpline, build_spline
from radchem.spectral.table import SpectralTable


@pytest.fixture
def sine_spline():
    x = np.linspace(0.0, 10.0, 11)
    return NaturalCubicSpline(SpectralTable(x, np.sin(x)))


def test_matches_scipy_natural_spline(sine_spline):
    """Spline agrees with scipy's natural cubic spline inside the table."""
    reference = CubicSpline(sine_spline.x, sine_spline.y, bc_type="natural")
    points = np.linspace(0.0, 10.0, 137)

    values = sine_spline(points)

    np.testing.assert_allclose(values, reference(points), rtol=1e-10, atol=1e-12)


def test_second_derivatives_vanish_at_ends(sine_spline):
    """Natural end conditions."""
    assert sine_spline.y2[0] == 0.0
    assert sine_spline.y2[-1] == 0.0


def test_second_derivatives_match_scipy(sine_spline):
    reference = CubicSpline(sine_spline.x, sine_spline.y, bc_type="natural")
    np.testing.assert_allclose(
        sine_spline.y2, reference(sine_spline.x, 2), rtol=1e-9, atol=1e-12
    )


def test_reproduces_knots(sine_spline):
    """Spline passes through the tabulated points."""
    for xi, yi in zip(sine_spline.x, sine_spline.y):
        assert sine_spline(xi) == pytest.approx(yi, abs=1e-14)


def test_linear_data_is_exact():
    """Natural spline of a straight line is the line itself."""
    x = np.array([1.0, 2.0, 4.0, 7.0])
    spline = NaturalCubicSpline.from_arrays(x, 3.0 * x - 2.0)

    np.testing.assert_allclose(build_spline(x, 3.0 * x - 2.0), 0.0, atol=1e-14)
    assert spline(5.5) == pytest.approx(14.5)


def test_two_point_table_interpolates_linearly():
    spline = NaturalCubicSpline.from_arrays([0.0, 2.0], [1.0, 5.0])
    assert spline(0.5) == pytest.approx(2.0)


def test_below_table_is_exactly_zero(sine_spline):
    """Below the lower bound the spline evaluates to zero."""
    value, hint = sine_spline.evaluate(-0.5, hint=3)
    assert value == 0.0
    assert hint == 3
    assert sine_spline(-100.0) == 0.0


def test_above_table_raises(sine_spline):
    """Above the upper bound evaluation fails instead of extrapolating."""
    with pytest.raises(OutOfDomainError) as exc_info:
        sine_spline(10.5)

    assert exc_info.value.value == 10.5
    assert exc_info.value.upper == 10.0


def test_endpoints_are_inside_domain(sine_spline):
    assert sine_spline(0.0) == pytest.approx(0.0, abs=1e-14)
    assert sine_spline(10.0) == pytest.approx(np.sin(10.0))


def test_hint_does_not_change_result(sine_spline):
    """Any hint gives the same value as an unhinted lookup."""
    for hint in (-1, 0, 3, 4, 5, 9, 50):
        value, _ = sine_spline.evaluate(4.3, hint)
        assert value == pytest.approx(sine_spline(4.3))


def test_hint_tracks_ordered_sweep(sine_spline):
    """Returned hint is the interval containing the point."""
    hint = -1
    for x in np.linspace(0.05, 9.95, 40):
        _, hint = sine_spline.evaluate(x, hint)
        assert sine_spline.x[hint] <= x <= sine_spline.x[hint + 1]


def test_locate_falls_back_to_search(sine_spline):
    assert sine_spline.locate(7.5, hint=0) == 7
    assert sine_spline.locate(10.0) == 9


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
