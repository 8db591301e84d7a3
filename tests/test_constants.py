"""
Tests for physical constants module.
"""

import pytest
from radchem.core import constants


def test_constants_exist():
    """Test that all expected constants are defined."""
    for name in ("KB", "H_PLANCK", "C_LIGHT", "E_CHARGE", "N_AVOGADRO", "RYDBERG_ENERGY"):
        assert hasattr(constants, name)


def test_conversion_factors():
    """Test conversion factor relationships."""
    assert constants.EV_TO_J == constants.E_CHARGE
    assert constants.RY_TO_J / constants.EV_TO_J == pytest.approx(13.605693, rel=1e-6)
    assert constants.MEGABARN == pytest.approx(1.0e6 * constants.BARN)


def test_electron_molar_mass():
    """Electron molar mass matches the electron mass times Avogadro."""
    assert constants.MOLAR_MASS_ELECTRON / constants.N_AVOGADRO == pytest.approx(
        9.1093837015e-31, rel=1e-9
    )


def test_rate_coefficients():
    assert constants.ALPHA_B_COEFF == 2.59e-19
    assert constants.ALPHA_B_TREF == 1.0e4
    assert constants.ALPHA_B_EXPONENT == -0.7
    assert constants.LYA_COOLING_TEMP == 118348.0
    assert constants.HYDROGEN_XS_THRESHOLD == 6.30431812e-22


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
