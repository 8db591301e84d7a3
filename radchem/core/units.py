"""
Unit conversion utilities for radchem.

Converts between photon wavelength and energy, and resolves the energy units
used by cross-section tables.
"""

import numpy as np
from typing import Union

from radchem.core.constants import C_LIGHT, EV_TO_J, H_PLANCK, RY_TO_J

_ENERGY_FACTORS = {
    "j": 1.0,
    "ev": EV_TO_J,
    "ry": RY_TO_J,
    "rydberg": RY_TO_J,
}


def energy_factor(unit: str) -> float:
    """
    Factor converting a table energy unit into joules.

    Parameters
    ----------
    unit : str
        'J', 'eV' or 'Ry' (case-insensitive)

    Returns
    -------
    float
        Joules per unit

    Raises
    ------
    ValueError
        If the unit is not known
    """
    try:
        return _ENERGY_FACTORS[unit.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown energy unit: {unit}. Available: {list(_ENERGY_FACTORS)}"
        ) from None


def wavelength_to_energy(wavelength_m: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Photon energy E = h c / lambda.

    Parameters
    ----------
    wavelength_m : float or array
        Wavelength in meters

    Returns
    -------
    float or array
        Photon energy in J
    """
    return H_PLANCK * C_LIGHT / wavelength_m


def energy_to_wavelength(energy_j: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Wavelength in meters of a photon with energy ``energy_j`` (J)."""
    return H_PLANCK * C_LIGHT / energy_j
