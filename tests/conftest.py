"""
Pytest configuration and shared fixtures for radchem tests.

This module provides:
- Species sets for hydrogen and helium ionization
- Radiation bands sampled around the hydrogen threshold
- Temporary cross-section and rate tables
- Sample configuration dictionaries and files
"""

import os
import tempfile
from pathlib import Path

import numpy as np
import pytest

from radchem.chemistry.species import Species, SpeciesSet
from radchem.chemistry.state import CellState
from radchem.core.constants import (
    EV_TO_J,
    MOLAR_MASS_ELECTRON,
    MOLAR_MASS_HELIUM,
    MOLAR_MASS_HYDROGEN,
)
from radchem.core.units import energy_to_wavelength
from radchem.radiation.band import RadiationBand

HYDROGEN_IONIZATION_EV = 13.6
HELIUM_IONIZATION_EV = 24.587


@pytest.fixture
def hydrogen_species():
    """H, H+ and e- with mass-consistent molar masses."""
    return SpeciesSet(
        [
            Species(0, "H", MOLAR_MASS_HYDROGEN, 0.0),
            Species(
                1, "H+", MOLAR_MASS_HYDROGEN - MOLAR_MASS_ELECTRON, HYDROGEN_IONIZATION_EV * EV_TO_J
            ),
            Species(2, "e-", MOLAR_MASS_ELECTRON, 0.0),
        ]
    )


@pytest.fixture
def helium_species():
    """He, He+ and e-."""
    return SpeciesSet(
        [
            Species(0, "He", MOLAR_MASS_HELIUM, 0.0),
            Species(
                1, "He+", MOLAR_MASS_HELIUM - MOLAR_MASS_ELECTRON, HELIUM_IONIZATION_EV * EV_TO_J
            ),
            Species(2, "e-", MOLAR_MASS_ELECTRON, 0.0),
        ]
    )


@pytest.fixture
def hydrogen_threshold(hydrogen_species):
    """Hydrogen threshold wavelength in m."""
    return energy_to_wavelength(hydrogen_species.ionization_energy("H", "H+"))


@pytest.fixture
def threshold_band(hydrogen_threshold):
    """Band in meters sampled at half, exactly at and 1.5x the hydrogen threshold."""
    lam0 = hydrogen_threshold
    return RadiationBand("euv", [0.5 * lam0, lam0, 1.5 * lam0], wavelength_to_meters=1.0)


@pytest.fixture
def ionizing_band(hydrogen_threshold):
    """Band in meters strictly inside the hydrogen ionizing range."""
    lam0 = hydrogen_threshold
    return RadiationBand("uv", [0.25 * lam0, 0.5 * lam0, 2.0 * lam0], wavelength_to_meters=1.0)


@pytest.fixture
def neutral_cell(hydrogen_species):
    """Cell with neutral hydrogen only."""
    return CellState(hydrogen_species, np.array([1.0e-10, 0.0, 0.0]))


@pytest.fixture
def write_table(tmp_path):
    """
    Factory fixture writing a whitespace-separated table.

    Returns a function ``(rows, name="table.dat", header=None) -> Path``.
    """

    def _write(rows, name="table.dat", header=None):
        path = tmp_path / name
        lines = []
        if header:
            lines.append(f"# {header}")
        for row in rows:
            lines.append(" ".join(f"{v:.10e}" for v in row))
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def helium_table(write_table):
    """Helium cross sections in Rydberg / megabarn."""
    rows = [(1.8, 7.4), (2.0, 6.6), (2.5, 4.8), (3.0, 3.5), (4.0, 2.0), (6.0, 0.8)]
    return write_table(rows, name="he_xs.dat", header="energy[Ry] xs[Mb]")


@pytest.fixture
def sample_config_dict():
    """Create a sample hydrogen configuration dictionary."""
    return {
        "species": [
            {"name": "H", "molar_mass": MOLAR_MASS_HYDROGEN},
            {
                "name": "H+",
                "molar_mass": MOLAR_MASS_HYDROGEN - MOLAR_MASS_ELECTRON,
                "energy_ev": HYDROGEN_IONIZATION_EV,
            },
            {"name": "e-", "molar_mass": MOLAR_MASS_ELECTRON},
        ],
        "floors": {"density": 1.0e-30, "pressure": 1.0e-20, "species": 0.0},
        "depletion_policy": "clamp",
        "radiation": {
            "scaling": {"factor": 1.0, "distance": 1.0, "reference_distance": 1.0},
            "bands": [
                {
                    "name": "euv",
                    "wavelength_range": [10.0, 90.0, 9],
                    "wavelength_to_meters": 1.0e-9,
                    "absorbers": [
                        {"name": "H-xs", "type": "hydrogen", "neutral": "H", "ion": "H+"},
                    ],
                }
            ],
        },
        "reactions": [
            {"name": "H-photo", "type": "photoionization", "absorber": "H-xs", "electron": "e-"},
            {
                "name": "H-recomb",
                "type": "hydrogen_recombination",
                "neutral": "H",
                "ion": "H+",
                "electron": "e-",
            },
            {"name": "Lya", "type": "lyman_alpha", "neutral": "H", "electron": "e-"},
        ],
        "cell": {
            "densities": {"H": 1.0e-12, "H+": 1.0e-14, "e-": 1.0e-14 * 5.446e-4},
            "temperature": 1.0e4,
            "absorbed_power": {"H-xs": 1.0e-8},
            "dt": 10.0,
            "steps": 3,
        },
    }


@pytest.fixture
def temp_config_file(sample_config_dict):
    """Create a temporary YAML config file."""
    import yaml

    config_fd, config_path = tempfile.mkstemp(suffix=".yaml")
    os.close(config_fd)  # Close file descriptor to prevent leaks

    with open(config_path, "w") as f:
        yaml.dump(sample_config_dict, f)

    yield config_path

    Path(config_path).unlink()
