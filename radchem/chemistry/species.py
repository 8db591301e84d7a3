"""
Species metadata shared by absorbers and reactions.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple, Union

import numpy as np

from radchem.core.constants import N_AVOGADRO
from radchem.core.errors import ConfigurationError, UnknownSpeciesError


@dataclass(frozen=True)
class Species:
    """
    A chemical or ionization state tracked as its own density field.

    Attributes
    ----------
    index : int
        Position in the species set (0..N-1)
    name : str
        Species name (e.g. 'H', 'H+', 'e-')
    molar_mass : float
        Molar mass in kg/mol
    energy : float
        Reference formation/ionization energy per particle in J
    """

    index: int
    name: str
    molar_mass: float
    energy: float = 0.0

    @property
    def particle_mass(self) -> float:
        """Mass of one particle in kg."""
        return self.molar_mass / N_AVOGADRO


class SpeciesSet:
    """
    Immutable, contiguously indexed collection of species.

    Parameters
    ----------
    species : iterable of Species
        Species in any order; indices must cover 0..N-1 exactly once
    """

    def __init__(self, species: Iterable[Species]):
        ordered = sorted(species, key=lambda s: s.index)
        if not ordered:
            raise ConfigurationError("At least one species must be specified", parameter="species")

        indices = [s.index for s in ordered]
        if indices != list(range(len(ordered))):
            raise ConfigurationError(
                f"Species indices must be contiguous 0..{len(ordered) - 1}, got {indices}",
                parameter="species",
            )

        names = [s.name for s in ordered]
        if len(set(names)) != len(names):
            raise ConfigurationError(f"Duplicate species names: {names}", parameter="species")

        for s in ordered:
            if s.molar_mass <= 0:
                raise ConfigurationError(
                    f"Molar mass of {s.name} must be positive", parameter=f"species.{s.name}"
                )

        self._species: Tuple[Species, ...] = tuple(ordered)
        self._by_name: Dict[str, Species] = {s.name: s for s in ordered}
        self.molar_masses = np.array([s.molar_mass for s in ordered])
        self.particle_masses = np.array([s.particle_mass for s in ordered])
        self.energies = np.array([s.energy for s in ordered])
        for arr in (self.molar_masses, self.particle_masses, self.energies):
            arr.setflags(write=False)

    def __len__(self) -> int:
        return len(self._species)

    def __iter__(self) -> Iterator[Species]:
        return iter(self._species)

    def __contains__(self, index) -> bool:
        return isinstance(index, (int, np.integer)) and 0 <= index < len(self._species)

    def __getitem__(self, key: Union[int, str]) -> Species:
        if isinstance(key, str):
            try:
                return self._by_name[key]
            except KeyError:
                raise UnknownSpeciesError(
                    f"Unknown species '{key}'. Available: {list(self._by_name)}",
                    parameter=key,
                ) from None
        if key not in self:
            raise UnknownSpeciesError(
                f"Unknown species index {key} (have {len(self)} species)", parameter=str(key)
            )
        return self._species[key]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self._species)

    def index_of(self, key: Union[int, str]) -> int:
        """Resolve a name or index to a validated index."""
        return self[key].index

    def ionization_energy(self, neutral: Union[int, str], ion: Union[int, str]) -> float:
        """Energy difference E[ion] - E[neutral] in J."""
        return self[ion].energy - self[neutral].energy

    def number_densities(self, mass_densities: np.ndarray) -> np.ndarray:
        """Convert mass densities (kg m^-3) to number densities (m^-3)."""
        return np.asarray(mass_densities, dtype=float) / self.particle_masses

    def mass_densities(self, number_densities: np.ndarray) -> np.ndarray:
        """Convert number densities (m^-3) to mass densities (kg m^-3)."""
        return np.asarray(number_densities, dtype=float) * self.particle_masses

    def __repr__(self) -> str:
        return f"SpeciesSet({list(self.names)})"
