"""
Per-cell composition state seen by reactions.
"""

from dataclasses import dataclass, field
from typing import Dict, Union

import numpy as np

from radchem.chemistry.species import SpeciesSet

AbsorbedFlux = Union[float, np.ndarray]


@dataclass
class CellState:
    """
    Composition of one grid cell during a reaction step.

    Attributes
    ----------
    species : SpeciesSet
        Species metadata (masses, energies)
    densities : np.ndarray
        Species mass densities in kg m^-3, indexed by species index
    absorbed_flux : Dict[str, float or np.ndarray]
        Absorbed radiative power per unit volume (W m^-3), keyed by absorber
        name; either a band total or one value per spectral sample
    """

    species: SpeciesSet
    densities: np.ndarray
    absorbed_flux: Dict[str, AbsorbedFlux] = field(default_factory=dict)

    def __post_init__(self):
        self.densities = np.array(self.densities, dtype=float)
        if self.densities.shape != (len(self.species),):
            raise ValueError(
                f"Expected {len(self.species)} species densities, got shape {self.densities.shape}"
            )

    @property
    def number_densities(self) -> np.ndarray:
        """Species number densities in m^-3."""
        return self.species.number_densities(self.densities)

    def number_density(self, index: int) -> float:
        return float(self.densities[index] / self.species.particle_masses[index])

    def total_density(self) -> float:
        """Total gas mass density (sum over species) in kg m^-3."""
        return float(np.sum(self.densities))

    def copy(self) -> "CellState":
        return CellState(self.species, self.densities.copy(), dict(self.absorbed_flux))
