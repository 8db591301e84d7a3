"""
Flux-driven photoionization.
"""

from typing import TYPE_CHECKING, Tuple

import numpy as np

from radchem.chemistry.reaction import ReactionTemplate
from radchem.chemistry.state import CellState

if TYPE_CHECKING:
    from radchem.radiation.absorbers import IonizingAbsorber


class Photoionization(ReactionTemplate):
    """
    Photoionization driven by the power absorbed in an ionizing absorber.

    With absorbed power ``P_n`` (W m^-3) per spectral sample, the fraction
    ``h_n`` pays the ionization energy ``I`` and ``q_n`` heats the gas:

        rate    = sum(h_n P_n) / I        (one ionization per photon)
        heating = sum(q_n P_n)

    A band-integrated (scalar) absorbed power uses the absorber's
    cross-section weighted mean partition.

    Parameters
    ----------
    name : str
        Reaction name
    absorber : IonizingAbsorber
        Absorber supplying the threshold and partition; its name keys the
        absorbed power in ``CellState.absorbed_flux``
    electron : int
        Electron species index
    """

    kind = "ionization"

    def __init__(self, name: str, absorber: "IonizingAbsorber", electron: int):
        super().__init__(
            name,
            species=[absorber.neutral, absorber.ion, electron],
            stoichiometry=[-1.0, 1.0, 1.0],
            colliders=[],
        )
        self.absorber = absorber
        self.ionization_energy = absorber.threshold_energy

    def partitioned_power(self, state: CellState) -> Tuple[float, float]:
        """Absorbed power split into (ionizing, heating) parts in W m^-3."""
        absorbed = state.absorbed_flux.get(self.absorber.name, 0.0)
        if np.ndim(absorbed) == 0:
            h, q = self.absorber.mean_energy_partition()
            power = float(absorbed)
            return h * power, q * power

        power = np.asarray(absorbed, dtype=float)
        if power.shape != self.absorber.h.shape:
            raise ValueError(
                f"Absorbed power for {self.absorber.name} has {power.size} samples, "
                f"band {self.absorber.band.name} has {self.absorber.band.nspec}"
            )
        return float(np.dot(self.absorber.h, power)), float(np.dot(self.absorber.q, power))

    def rate(self, temperature: float, state: CellState) -> float:
        ionizing, _ = self.partitioned_power(state)
        return max(ionizing / self.ionization_energy, 0.0)

    def energy_rate(self, temperature: float, state: CellState) -> float:
        _, heating = self.partitioned_power(state)
        return max(heating, 0.0)
