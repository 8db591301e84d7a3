"""
Reaction network: ordered reactions applied per cell.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from radchem.chemistry.species import SpeciesSet
from radchem.chemistry.state import AbsorbedFlux, CellState
from radchem.core.abc import Reaction
from radchem.core.config import DEPLETION_POLICIES
from radchem.core.errors import ConfigurationError, ReactantDepletionError, UnknownSpeciesError
from radchem.core.logging_config import get_logger

logger = get_logger("chemistry.network")


@dataclass
class StepResult:
    """
    Outcome of one network step in one cell.

    Attributes
    ----------
    densities : np.ndarray
        Species mass densities after all reactions (kg m^-3)
    delta : np.ndarray
        Net species mass-density change (kg m^-3)
    energy_delta : float
        Net thermal energy change, heating minus cooling (J m^-3)
    rates : Dict[str, float]
        Applied rate per reaction after clamping (m^-3 s^-1)
    energy_rates : Dict[str, float]
        Applied heating power per reaction after clamping (W m^-3)
    clamp_factors : Dict[str, float]
        Factor by which each reaction's rate was reduced (1 = unclamped)
    """

    densities: np.ndarray
    delta: np.ndarray
    energy_delta: float
    rates: Dict[str, float] = field(default_factory=dict)
    energy_rates: Dict[str, float] = field(default_factory=dict)
    clamp_factors: Dict[str, float] = field(default_factory=dict)


class ReactionNetwork:
    """
    Ordered collection of reactions for one grid block.

    Reactions run in registration order and each sees the state left by the
    previous one, so a recombination nets against ionization produced
    earlier in the same step.

    Parameters
    ----------
    species : SpeciesSet
        Species shared by all reactions
    species_floor : float or sequence of float
        Minimum mass density (kg m^-3) a reaction may leave behind
    depletion_policy : str
        'clamp' scales an overshooting rate down to exactly exhaust the
        limiting reactant; 'abort' raises ReactantDepletionError instead
    """

    def __init__(
        self,
        species: SpeciesSet,
        species_floor: Union[float, Sequence[float]] = 0.0,
        depletion_policy: str = "clamp",
    ):
        if depletion_policy not in DEPLETION_POLICIES:
            raise ConfigurationError(
                f"Invalid depletion policy: {depletion_policy}. "
                f"Must be one of: {list(DEPLETION_POLICIES)}",
                parameter="depletion_policy",
            )
        self.species = species
        self.floor = np.broadcast_to(np.asarray(species_floor, dtype=float), (len(species),)).copy()
        if np.any(self.floor < 0):
            raise ConfigurationError(
                "Species floor must be nonnegative", parameter="floors.species"
            )
        self.depletion_policy = depletion_policy
        self._reactions: List[Reaction] = []
        self.initialized = False

    def add(self, reaction: Reaction) -> Reaction:
        """Register a reaction; it runs after all previously added ones."""
        if self.get(reaction.name) is not None:
            raise ConfigurationError(
                f"Duplicate reaction name: {reaction.name}", parameter=f"reactions.{reaction.name}"
            )
        self._reactions.append(reaction)
        self.initialized = False
        logger.debug(f"Registered reaction #{len(self._reactions)}: {reaction.name}")
        return reaction

    def get(self, name: str) -> Optional[Reaction]:
        for reaction in self._reactions:
            if reaction.name == name:
                return reaction
        return None

    @property
    def reactions(self) -> Tuple[Reaction, ...]:
        return tuple(self._reactions)

    def __iter__(self) -> Iterator[Reaction]:
        return iter(self._reactions)

    def __len__(self) -> int:
        return len(self._reactions)

    def initialize(self) -> None:
        """
        Validate species references of every registered reaction.

        Raises
        ------
        UnknownSpeciesError
            If a reaction references a species outside the species set
        """
        for reaction in self._reactions:
            for index in reaction.species_indices:
                if index not in self.species:
                    raise UnknownSpeciesError(
                        f"Reaction {reaction.name} references unknown species index {index} "
                        f"(have {len(self.species)} species)",
                        parameter=f"reactions.{reaction.name}",
                    )

            mass_defect = getattr(reaction, "mass_defect", None)
            if mass_defect is not None:
                defect = mass_defect(self.species)
                scale = max(float(np.max(self.species.particle_masses)), 1e-300)
                if abs(defect) > 1e-9 * scale:
                    logger.warning(
                        f"Reaction {reaction.name} does not conserve mass: "
                        f"{defect:.3e} kg per event"
                    )

        self.initialized = True
        logger.info(
            f"Initialized reaction network: {len(self._reactions)} reactions over "
            f"{len(self.species)} species ({self.depletion_policy} on depletion)"
        )

    def depletion_factor(
        self, reaction: Reaction, delta: np.ndarray, densities: np.ndarray, cell_index=None
    ) -> float:
        """
        Largest factor in [0, 1] keeping every species at or above its floor.

        Raises
        ------
        ReactantDepletionError
            Under the 'abort' policy when the factor would be below 1
        """
        factor = 1.0
        limiting = None
        for s in np.nonzero(delta < 0)[0]:
            available = max(densities[s] - self.floor[s], 0.0)
            if -delta[s] > available:
                f = available / -delta[s]
                if f < factor:
                    factor, limiting = f, s

        if limiting is None:
            return 1.0

        if self.depletion_policy == "abort":
            raise ReactantDepletionError(
                f"Reaction {reaction.name} would consume more {self.species[limiting].name} "
                f"than present. Re-run with lower timestep.",
                {
                    "cell": cell_index,
                    "reaction": reaction.name,
                    "species": self.species[limiting].name,
                    "required": float(-delta[limiting]),
                    "available": float(densities[limiting]),
                },
            )

        logger.debug(
            f"Cell {cell_index}: {reaction.name} limited by "
            f"{self.species[limiting].name}, rate scaled by {factor:.3e}"
        )
        return factor

    def step(
        self,
        cell_index,
        dt: float,
        state: CellState,
        absorbed_flux: Optional[Mapping[str, AbsorbedFlux]] = None,
        *,
        temperature: float,
    ) -> StepResult:
        """
        Apply every reaction, in order, to one cell.

        Parameters
        ----------
        cell_index : hashable
            Cell identifier used in diagnostics
        dt : float
            Time step in s
        state : CellState
            Cell composition before the step (not modified)
        absorbed_flux : mapping, optional
            Absorbed power per absorber name; overrides ``state.absorbed_flux``
        temperature : float
            Cell temperature in K (keyword-only; collisional rate laws need
            it positive)

        Returns
        -------
        StepResult
            Updated densities, deltas and net energy change
        """
        if not self.initialized:
            raise RuntimeError("ReactionNetwork.initialize() must be called before step()")

        work = state.copy()
        if absorbed_flux is not None:
            work.absorbed_flux = dict(absorbed_flux)
        initial = work.densities.copy()

        result = StepResult(densities=initial, delta=np.zeros_like(initial), energy_delta=0.0)
        for reaction in self._reactions:
            rate = reaction.rate(temperature, work)
            power = reaction.energy_rate(temperature, work)
            delta = reaction.apply(rate, dt, work)

            factor = self.depletion_factor(reaction, delta, work.densities, cell_index)
            updated = work.densities + factor * delta
            if factor < 1.0:
                consumed = delta < 0
                bound = np.minimum(self.floor, work.densities)
                updated[consumed] = np.maximum(updated[consumed], bound[consumed])
            work.densities = updated

            result.energy_delta += factor * power * dt
            result.rates[reaction.name] = factor * rate
            result.energy_rates[reaction.name] = factor * power
            result.clamp_factors[reaction.name] = factor

        result.densities = work.densities
        result.delta = work.densities - initial
        return result

    def __repr__(self) -> str:
        return f"ReactionNetwork({[r.name for r in self._reactions]})"
