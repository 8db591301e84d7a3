"""
Tests for incident flux scaling.
"""

import math

import pytest

from radchem.radiation.scaling import FluxScaling, erf_ramp


def test_erf_ramp_values():
    """5 erf(t / 8e4 - 1.5) + 5.1"""
    assert erf_ramp(0.0) == pytest.approx(5.0 * math.erf(-1.5) + 5.1)
    assert erf_ramp(1.2e5) == pytest.approx(5.1)
    assert erf_ramp(1.0e7) == pytest.approx(10.1)


def test_erf_ramp_is_increasing():
    values = [erf_ramp(t) for t in (0.0, 5.0e4, 1.0e5, 2.0e5, 4.0e5)]
    assert values == sorted(values)


def test_default_scaling_is_identity():
    assert FluxScaling()(123.0) == 1.0


def test_distance_scaling():
    """Flux falls off with the inverse square of the distance."""
    scaling = FluxScaling(scaling=3.0, distance=2.0, reference_distance=1.0)
    assert scaling(0.0) == pytest.approx(0.75)


def test_ramp_applied():
    scaling = FluxScaling(scaling=2.0, ramp=erf_ramp)
    assert scaling(1.2e5) == pytest.approx(10.2)


def test_rejects_nonpositive_distance():
    with pytest.raises(ValueError, match="Distances must be positive"):
        FluxScaling(distance=0.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
