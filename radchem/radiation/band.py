"""
Radiation bands: spectral sampling shared by a set of absorbers.
"""

from typing import Iterator, List, Optional, Sequence

import numpy as np

from radchem.core.abc import Absorber
from radchem.core.constants import WAVELENGTH_TO_METERS
from radchem.core.errors import ConfigurationError
from radchem.core.logging_config import get_logger
from radchem.core.units import wavelength_to_energy

logger = get_logger("radiation.band")


class RadiationBand:
    """
    A spectral band sampled at strictly increasing wavelengths.

    The band owns its absorbers in registration order. Changing the sampling
    through :meth:`set_spectral_properties` recomputes every absorber.

    Parameters
    ----------
    name : str
        Band name
    wavelengths : sequence of float
        Sample wavelengths in band units
    wavelength_to_meters : float
        Factor converting band units to meters (default: nm)
    """

    def __init__(
        self,
        name: str,
        wavelengths: Sequence[float],
        wavelength_to_meters: float = WAVELENGTH_TO_METERS,
    ):
        self.name = name
        self.wavelength_to_meters = wavelength_to_meters
        self.wavelengths = self._check_wavelengths(wavelengths)
        self.absorbers: List[Absorber] = []

    def _check_wavelengths(self, wavelengths: Sequence[float]) -> np.ndarray:
        wave = np.array(wavelengths, dtype=float)
        if wave.ndim != 1 or len(wave) == 0:
            raise ConfigurationError(
                f"Band {self.name} needs at least one wavelength sample",
                parameter=f"radiation.bands.{self.name}.wavelengths",
            )
        if np.any(wave <= 0) or np.any(np.diff(wave) <= 0):
            raise ConfigurationError(
                f"Band {self.name} wavelengths must be positive and strictly increasing",
                parameter=f"radiation.bands.{self.name}.wavelengths",
            )
        wave.setflags(write=False)
        return wave

    @property
    def nspec(self) -> int:
        return len(self.wavelengths)

    @property
    def wavelengths_m(self) -> np.ndarray:
        """Sample wavelengths in meters."""
        return self.wavelengths * self.wavelength_to_meters

    def wavelength_m(self, n: int) -> float:
        return float(self.wavelengths[n] * self.wavelength_to_meters)

    def photon_energy(self, n: int) -> float:
        """Photon energy (J) at sample ``n``."""
        return float(wavelength_to_energy(self.wavelength_m(n)))

    def add_absorber(self, absorber: Absorber) -> Absorber:
        if self.get_absorber(absorber.name) is not None:
            raise ConfigurationError(
                f"Band {self.name} already has an absorber named '{absorber.name}'",
                parameter=f"radiation.bands.{self.name}.absorbers",
            )
        self.absorbers.append(absorber)
        logger.debug(f"Band {self.name}: added absorber {absorber.name}")
        return absorber

    def get_absorber(self, name: str) -> Optional[Absorber]:
        for absorber in self.absorbers:
            if absorber.name == name:
                return absorber
        return None

    def __iter__(self) -> Iterator[Absorber]:
        return iter(self.absorbers)

    def set_spectral_properties(self, wavelengths: Sequence[float]) -> None:
        """
        Resample the band and recompute all absorber arrays.

        Parameters
        ----------
        wavelengths : sequence of float
            New strictly increasing sample wavelengths in band units
        """
        self.wavelengths = self._check_wavelengths(wavelengths)
        for absorber in self.absorbers:
            absorber.update_spectral_properties()
        logger.info(f"Band {self.name}: resampled to {self.nspec} wavelengths")

    def absorption_coefficients(self, state) -> np.ndarray:
        """
        Total absorption coefficient (m^-1) per sample for a cell.

        Parameters
        ----------
        state : CellState
            Cell composition
        """
        total = np.zeros(self.nspec)
        for absorber in self.absorbers:
            for n in range(self.nspec):
                total[n] += absorber.absorption_coefficient(n, state)
        return total

    def __repr__(self) -> str:
        return (
            f"RadiationBand({self.name!r}, nspec={self.nspec}, "
            f"absorbers={[a.name for a in self.absorbers]})"
        )
