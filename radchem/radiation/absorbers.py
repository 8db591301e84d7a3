"""
Spectral absorbers.

Variants:
- GenericAbsorber: constant or closed-form cross section, no ionization
- HydrogenIonization: analytic hydrogenic photoionization cross section
- TabulatedIonization / HeliumIonization: spline over a cross-section table
- UserDefinedIonization: cross section from a user callable

Ionizing absorbers split absorbed photon energy at sample wavelength
``lambda`` into ``h = lambda / lambda_0`` (spent overcoming the ionization
energy) and ``q = 1 - h`` (left as heat). Above the threshold wavelength
``lambda_0`` both fractions are zero.
"""

from abc import abstractmethod
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

import numpy as np

from radchem.chemistry.species import SpeciesSet
from radchem.core.abc import Absorber
from radchem.core.constants import EV_TO_J, H_PLANCK, HYDROGEN_XS_THRESHOLD, MEGABARN, RY_TO_J
from radchem.core.errors import ConfigurationError, OutOfDomainError
from radchem.core.logging_config import get_logger
from radchem.core.units import energy_to_wavelength
from radchem.radiation.band import RadiationBand
from radchem.spectral.spline import NaturalCubicSpline
from radchem.spectral.table import load_table

logger = get_logger("radiation.absorbers")


class GenericAbsorber(Absorber):
    """
    Non-ionizing absorber with a constant or closed-form cross section.

    All absorbed energy is deposited as heat, so the partition is
    ``(h, q) = (0, 1)`` at every sample.

    Parameters
    ----------
    name : str
        Absorber name (unique within the band)
    band : RadiationBand
        Band the absorber belongs to
    cross_section : float or callable
        Cross section in m^2, or ``f(wavelength_m) -> m^2``
    species_index : int, optional
        Absorbing species; if None the total number density is used
    """

    def __init__(
        self,
        name: str,
        band: RadiationBand,
        cross_section: Union[float, Callable[[float], float]],
        species_index: Optional[int] = None,
    ):
        self.name = name
        self.band = band
        self.species_index = species_index
        self._xs_source = cross_section
        self.update_spectral_properties()
        band.add_absorber(self)

    def update_spectral_properties(self) -> None:
        if callable(self._xs_source):
            xs = [float(self._xs_source(self.band.wavelength_m(n))) for n in range(self.band.nspec)]
            self.cross_sections = np.array(xs)
        else:
            self.cross_sections = np.full(self.band.nspec, float(self._xs_source))

    def cross_section(self, n, state=None) -> float:
        return float(self.cross_sections[n])

    def energy_partition(self, n: int) -> Tuple[float, float]:
        return 0.0, 1.0

    def absorption_coefficient(self, n, state) -> float:
        if self.species_index is None:
            density = float(np.sum(state.number_densities))
        else:
            density = state.number_density(self.species_index)
        return self.cross_section(n, state) * density


class IonizingAbsorber(Absorber):
    """
    Base class for absorbers that photoionize ``neutral`` into ``ion``.

    The threshold is the reference-energy difference of the two species,
    ``I = E[ion] - E[neutral]``, with ``nu_0 = I / h`` and
    ``lambda_0 = c / nu_0``.

    Parameters
    ----------
    name : str
        Absorber name
    band : RadiationBand
        Band the absorber belongs to
    species : SpeciesSet
        Species metadata
    neutral, ion : int or str
        Absorbing species and the ion it produces
    """

    def __init__(
        self,
        name: str,
        band: RadiationBand,
        species: SpeciesSet,
        neutral: Union[int, str],
        ion: Union[int, str],
    ):
        self.name = name
        self.band = band
        self.species = species
        self.neutral = species.index_of(neutral)
        self.ion = species.index_of(ion)

        self.threshold_energy = species.ionization_energy(self.neutral, self.ion)
        if self.threshold_energy <= 0:
            raise ConfigurationError(
                f"Absorber {name}: ionization energy of {species[self.neutral].name} -> "
                f"{species[self.ion].name} must be positive",
                parameter=f"absorbers.{name}",
            )
        self.threshold_frequency = self.threshold_energy / H_PLANCK
        self.threshold_wavelength = energy_to_wavelength(self.threshold_energy)

        self.update_spectral_properties()
        band.add_absorber(self)
        logger.info(
            f"Absorber {name}: threshold {self.threshold_energy / EV_TO_J:.3f} eV "
            f"({self.threshold_wavelength * 1e9:.2f} nm) in band {band.name}"
        )

    def update_spectral_properties(self) -> None:
        self.calculate_energy_functions()
        self.calculate_cross_sections()

    def calculate_energy_functions(self) -> None:
        """Fill the per-sample partition arrays ``h`` and ``q``."""
        nspec = self.band.nspec
        self.h = np.zeros(nspec)
        self.q = np.zeros(nspec)
        for n in range(nspec):
            wave = self.band.wavelength_m(n)
            # no absorption beyond threshold; fractions unused there
            if wave <= self.threshold_wavelength:
                self.h[n] = wave / self.threshold_wavelength
                self.q[n] = 1.0 - self.h[n]

    @abstractmethod
    def calculate_cross_sections(self) -> None:
        """Fill ``self.cross_sections`` (m^2) for every sample."""
        pass

    def cross_section(self, n, state=None) -> float:
        return float(self.cross_sections[n])

    def energy_partition(self, n: int) -> Tuple[float, float]:
        return float(self.h[n]), float(self.q[n])

    def mean_energy_partition(self) -> Tuple[float, float]:
        """
        Cross-section weighted band average of ``(h, q)``.

        Used when only a band-integrated absorbed power is available. A band
        where the absorber has no cross section returns ``(0, 1)``, so any
        power attributed to it is counted as heat.
        """
        weights = self.cross_sections
        total = float(np.sum(weights))
        if total <= 0:
            logger.debug(f"Absorber {self.name}: no cross section in band {self.band.name}")
            return 0.0, 1.0
        h = float(np.dot(weights, self.h) / total)
        return h, 1.0 - h

    def absorption_coefficient(self, n, state) -> float:
        return self.cross_section(n, state) * state.number_density(self.neutral)


class HydrogenIonization(IonizingAbsorber):
    """
    Hydrogenic photoionization from the ground state.

    ``sigma = A0 (nu0/nu)^4 exp(4 - 4 atan(eps)/eps) / (1 - exp(-2 pi/eps))``
    with ``eps = sqrt(nu/nu0 - 1)``; ``A0`` exactly at threshold and zero
    below it.
    """

    def __init__(self, name, band, species, neutral, ion, a0: float = HYDROGEN_XS_THRESHOLD):
        self.a0 = a0
        super().__init__(name, band, species, neutral, ion)

    def hydrogenic_cross_section(self, frequency: float) -> float:
        nu_0 = self.threshold_frequency
        if frequency < nu_0:
            return 0.0
        if frequency == nu_0:
            return self.a0

        eps = np.sqrt(frequency / nu_0 - 1.0)
        numerator = np.exp(4.0 - 4.0 * np.arctan(eps) / eps)
        denominator = 1.0 - np.exp(-2.0 * np.pi / eps)
        return float(self.a0 * (nu_0 / frequency) ** 4 * numerator / denominator)

    def calculate_cross_sections(self) -> None:
        energies = [self.band.photon_energy(n) for n in range(self.band.nspec)]
        self.cross_sections = np.array(
            [self.hydrogenic_cross_section(e / H_PLANCK) for e in energies]
        )


class TabulatedIonization(IonizingAbsorber):
    """
    Photoionization with a tabulated cross section.

    Each sample wavelength becomes a photon energy ``E = h c / lambda``,
    expressed in the table's energy unit, interpolated with a natural cubic
    spline and scaled to m^2. Problems surface at construction: a missing
    file or a sample energy above the table raise ConfigurationError.

    Parameters
    ----------
    table_file : str or Path
        Two-column table (energy, cross section), ascending in energy
    energy_unit : float
        Joules per table energy unit
    cross_section_unit : float
        m^2 per table cross-section unit
    """

    def __init__(
        self,
        name,
        band,
        species,
        neutral,
        ion,
        table_file: Union[str, Path],
        energy_unit: float = EV_TO_J,
        cross_section_unit: float = MEGABARN,
    ):
        self.table_file = Path(table_file)
        self.energy_unit = energy_unit
        self.cross_section_unit = cross_section_unit

        if not self.table_file.exists():
            raise ConfigurationError(
                f"Cannot open cross sections file {self.table_file}",
                parameter=f"absorbers.{name}.file",
            )
        self.spline = NaturalCubicSpline(load_table(self.table_file))
        super().__init__(name, band, species, neutral, ion)

    def calculate_cross_sections(self) -> None:
        nspec = self.band.nspec
        self.cross_sections = np.zeros(nspec)
        hint = -1
        for n in range(nspec):
            energy = self.band.photon_energy(n) / self.energy_unit
            try:
                xs, hint = self.spline.evaluate(energy, hint)
            except OutOfDomainError as e:
                raise ConfigurationError(
                    f"Absorber {self.name}: photon energy too high for {self.table_file} "
                    f"at sample {n} ({self.band.wavelengths[n]:g} band units)",
                    parameter=f"absorbers.{self.name}.file",
                    context={"energy": energy, "table_max": e.upper},
                ) from e
            self.cross_sections[n] = max(xs, 0.0) * self.cross_section_unit


class HeliumIonization(TabulatedIonization):
    """Tabulated helium photoionization; table in Rydberg and megabarn."""

    def __init__(self, name, band, species, neutral, ion, table_file):
        super().__init__(
            name,
            band,
            species,
            neutral,
            ion,
            table_file,
            energy_unit=RY_TO_J,
            cross_section_unit=MEGABARN,
        )


class UserDefinedIonization(IonizingAbsorber):
    """
    Photoionization with a user-supplied cross section.

    Parameters
    ----------
    cross_section_func : callable
        ``f(photon_energy_J) -> m^2``; only called at or above threshold
    """

    def __init__(self, name, band, species, neutral, ion, cross_section_func: Callable):
        self.cross_section_func = cross_section_func
        super().__init__(name, band, species, neutral, ion)

    def calculate_cross_sections(self) -> None:
        nspec = self.band.nspec
        self.cross_sections = np.zeros(nspec)
        for n in range(nspec):
            energy = self.band.photon_energy(n)
            if energy >= self.threshold_energy:
                self.cross_sections[n] = float(self.cross_section_func(energy))
