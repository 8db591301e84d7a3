"""
Abstract base classes and protocols for extensibility.

ABCs are used for the closed capability interfaces (Absorber, Reaction) whose
variants are registered with the factories. Protocols describe the external
collaborators (equation of state, radiation field) that radchem only consumes.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Protocol, Tuple, TYPE_CHECKING, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from radchem.chemistry.state import CellState
    from radchem.radiation.band import RadiationBand


class Absorber(ABC):
    """
    Abstract interface for spectral absorbers.

    An absorber belongs to one radiation band and keeps one cross section and
    one energy partition ``(h, q)`` per spectral sample of that band.
    """

    name: str
    band: "RadiationBand"
    threshold_energy: Optional[float] = None

    @abstractmethod
    def cross_section(self, n: int, state: Optional["CellState"] = None) -> float:
        """Cross section (m^2) at spectral sample ``n``."""
        pass

    @abstractmethod
    def energy_partition(self, n: int) -> Tuple[float, float]:
        """Fractions ``(h, q)`` of absorbed photon energy at sample ``n``."""
        pass

    @abstractmethod
    def update_spectral_properties(self) -> None:
        """Recompute per-sample arrays after the band changed."""
        pass

    @abstractmethod
    def absorption_coefficient(self, n: int, state: "CellState") -> float:
        """Absorption coefficient (m^-1) at sample ``n`` for a cell."""
        pass


class Reaction(ABC):
    """
    Abstract interface for reactions.

    ``rate`` returns events per unit volume per unit time; ``apply`` turns a
    rate into signed species mass-density changes without any clamping.
    """

    name: str
    kind: str = "generic"

    @property
    @abstractmethod
    def stoichiometry(self) -> Dict[int, float]:
        """Mapping species index -> stoichiometric coefficient."""
        pass

    @abstractmethod
    def rate(self, temperature: float, state: "CellState") -> float:
        """Nonnegative reaction rate (m^-3 s^-1)."""
        pass

    @abstractmethod
    def apply(self, rate: float, dt: float, state: "CellState") -> np.ndarray:
        """Species mass-density change (kg m^-3) from ``rate`` over ``dt``."""
        pass

    def energy_rate(self, temperature: float, state: "CellState") -> float:
        """Net heating power (W m^-3); negative for cooling."""
        return 0.0

    @property
    def species_indices(self) -> Tuple[int, ...]:
        """All species the reaction touches."""
        return tuple(self.stoichiometry)


@runtime_checkable
class EquationOfState(Protocol):
    """
    Protocol for temperature evaluation (structural typing).

    Any callable computing a cell temperature from primitive density,
    pressure and species mass densities can be used.
    """

    def __call__(self, density: float, pressure: float, species_densities: np.ndarray) -> float:
        ...
