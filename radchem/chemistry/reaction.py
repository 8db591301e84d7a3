"""
Stoichiometric reaction templates.

Stoichiometric coefficients count particles; a rate ``r`` (events m^-3 s^-1)
applied for ``dt`` changes species ``s`` by ``nu_s * r * dt * m_s`` in mass
density. A reaction conserves mass when ``sum(nu_s * m_s)`` vanishes for the
configured species masses.
"""

from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union

import numpy as np

from radchem.chemistry.rates import RateLaw, TabulatedRate
from radchem.chemistry.species import SpeciesSet
from radchem.chemistry.state import CellState
from radchem.core.abc import Reaction
from radchem.core.errors import ConfigurationError
from radchem.spectral.table import load_table


class ReactionTemplate(Reaction):
    """
    Reaction with a rate ``alpha(T) * prod(n_c)`` over its colliders.

    Parameters
    ----------
    name : str
        Reaction name
    species : sequence of int
        Species indices taking part
    stoichiometry : sequence of float
        Coefficient per entry of ``species`` (negative: consumed)
    alpha : RateLaw, optional
        Rate coefficient law; no population change if None
    beta : RateLaw, optional
        Cooling coefficient law; cooling power is ``beta(T) * prod(n_c)``
    colliders : sequence of int, optional
        Species whose number densities multiply the coefficients; defaults to
        the reactants, each repeated by its coefficient
    kind : str, optional
        Diagnostic category ('ionization', 'recombination', 'cooling', ...)
    """

    kind = "generic"

    def __init__(
        self,
        name: str,
        species: Sequence[int],
        stoichiometry: Sequence[float],
        alpha: Optional[RateLaw] = None,
        beta: Optional[RateLaw] = None,
        colliders: Optional[Sequence[int]] = None,
        kind: Optional[str] = None,
    ):
        if len(species) != len(stoichiometry):
            raise ConfigurationError(
                f"Reaction {name}: {len(species)} species but "
                f"{len(stoichiometry)} stoichiometric coefficients",
                parameter=f"reactions.{name}",
            )
        if len(set(species)) != len(species):
            raise ConfigurationError(
                f"Reaction {name}: species listed more than once", parameter=f"reactions.{name}"
            )

        self.name = name
        self._stoichiometry: Dict[int, float] = {
            int(s): float(nu) for s, nu in zip(species, stoichiometry)
        }
        self.alpha_law = alpha
        self.beta_law = beta
        if colliders is None:
            colliders = []
            for s, nu in self._stoichiometry.items():
                if nu < 0:
                    colliders.extend([s] * int(round(-nu)))
        self.colliders: Tuple[int, ...] = tuple(int(c) for c in colliders)
        if kind is not None:
            self.kind = kind

    @property
    def stoichiometry(self) -> Dict[int, float]:
        return dict(self._stoichiometry)

    @property
    def species_indices(self) -> Tuple[int, ...]:
        return tuple(dict.fromkeys(list(self._stoichiometry) + list(self.colliders)))

    def alpha(self, temperature: float) -> float:
        return self.alpha_law(temperature) if self.alpha_law is not None else 0.0

    def beta(self, temperature: float) -> float:
        return self.beta_law(temperature) if self.beta_law is not None else 0.0

    def collision_product(self, state: CellState) -> float:
        """Product of collider number densities (m^-3 per collider)."""
        product = 1.0
        for c in self.colliders:
            product *= max(state.number_density(c), 0.0)
        return product

    def rate(self, temperature: float, state: CellState) -> float:
        if self.alpha_law is None:
            return 0.0
        return max(self.alpha(temperature) * self.collision_product(state), 0.0)

    def energy_rate(self, temperature: float, state: CellState) -> float:
        if self.beta_law is None:
            return 0.0
        return -self.beta(temperature) * self.collision_product(state)

    def apply(self, rate: float, dt: float, state: CellState) -> np.ndarray:
        delta = np.zeros(len(state.species))
        events = rate * dt
        masses = state.species.particle_masses
        for s, nu in self._stoichiometry.items():
            delta[s] += nu * events * masses[s]
        return delta

    def mass_defect(self, species: SpeciesSet) -> float:
        """``sum(nu_s * m_s)`` in kg per event; zero for mass-conserving reactions."""
        masses = species.particle_masses
        return float(sum(nu * masses[s] for s, nu in self._stoichiometry.items()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self._stoichiometry})"


class TabulatedReaction(ReactionTemplate):
    """
    Reaction whose coefficients are tabulated against temperature.

    The table file holds temperature in the first column; ``alpha_column``
    and ``beta_column`` select the rate and cooling coefficients.

    Parameters
    ----------
    data_file : str or Path
        Whitespace-separated table, ascending in temperature
    alpha_column : int
        Column of the rate coefficient (m^3 s^-1 for two-body reactions)
    beta_column : int, optional
        Column of the cooling coefficient (J m^3 s^-1)
    alpha_scale, beta_scale : float
        Unit factors for the tabulated columns
    """

    def __init__(
        self,
        name: str,
        species: Sequence[int],
        stoichiometry: Sequence[float],
        data_file: Union[str, Path],
        alpha_column: int = 1,
        beta_column: Optional[int] = None,
        alpha_scale: float = 1.0,
        beta_scale: float = 1.0,
        colliders: Optional[Sequence[int]] = None,
        kind: Optional[str] = None,
    ):
        self.data_file = Path(data_file)
        alpha = TabulatedRate(load_table(self.data_file, 0, alpha_column), alpha_scale)
        beta = None
        if beta_column is not None:
            beta = TabulatedRate(load_table(self.data_file, 0, beta_column), beta_scale)
        super().__init__(name, species, stoichiometry, alpha, beta, colliders, kind)
