"""
Block-level primitive state exchanged with the fluid solver.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from radchem.chemistry.species import SpeciesSet
from radchem.core.constants import KB


@dataclass
class BlockState:
    """
    Primitive fluid state of one grid block.

    Attributes
    ----------
    density : np.ndarray
        Gas mass density per cell (kg m^-3)
    pressure : np.ndarray
        Gas pressure per cell (Pa)
    velocity : np.ndarray
        Velocity components, shape ``(3, *cells)`` (m s^-1)
    species : np.ndarray
        Species mass densities, shape ``(N, *cells)`` (kg m^-3)
    temperature : np.ndarray, optional
        Temperature per cell (K); computed from the equation of state if None
    """

    density: np.ndarray
    pressure: np.ndarray
    velocity: np.ndarray
    species: np.ndarray
    temperature: Optional[np.ndarray] = None

    def __post_init__(self):
        self.density = np.asarray(self.density, dtype=float)
        self.pressure = np.asarray(self.pressure, dtype=float)
        self.velocity = np.asarray(self.velocity, dtype=float)
        self.species = np.asarray(self.species, dtype=float)
        shape = self.density.shape
        if self.pressure.shape != shape:
            raise ValueError(f"pressure shape {self.pressure.shape} != density shape {shape}")
        if self.velocity.shape != (3,) + shape:
            raise ValueError(f"velocity must have shape {(3,) + shape}")
        if self.species.shape[1:] != shape:
            raise ValueError(f"species must have shape (N, {', '.join(map(str, shape))})")
        if self.temperature is not None:
            self.temperature = np.asarray(self.temperature, dtype=float)
            if self.temperature.shape != shape:
                raise ValueError("temperature shape must match density shape")

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.density.shape

    def primitive_fields(self) -> Iterator[Tuple[str, np.ndarray]]:
        """Primitive quantities checked for finiteness, in diagnostic order."""
        yield "dens", self.density
        yield "press", self.pressure
        for i in range(3):
            yield f"vel{i + 1}", self.velocity[i]


class IdealGasTemperature:
    """
    Ideal-gas temperature ``T = p / (k_B sum(n_s))``.

    Satisfies the EquationOfState protocol. Pressure is raised to its floor
    before use; an empty cell has zero temperature.

    Parameters
    ----------
    species : SpeciesSet
        Species metadata for number densities
    pressure_floor : float
        Minimum pressure (Pa)
    """

    def __init__(self, species: SpeciesSet, pressure_floor: float = 0.0):
        self.species = species
        self.pressure_floor = pressure_floor

    def __call__(self, density: float, pressure: float, species_densities: np.ndarray) -> float:
        pressure = max(pressure, self.pressure_floor)
        n_total = float(np.sum(self.species.number_densities(np.maximum(species_densities, 0.0))))
        if n_total <= 0:
            return 0.0
        return pressure / (KB * n_total)
