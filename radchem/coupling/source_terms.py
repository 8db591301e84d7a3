"""
Source-term coupler between the reaction network and the fluid state.

Per cell and time step: read absorbed power and temperature, run the reaction
network, and accumulate the energy and species-density changes the fluid
solver adds to its conserved update.
"""

import itertools
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Sequence, Tuple

import numpy as np

from radchem.chemistry.network import ReactionNetwork
from radchem.chemistry.state import CellState
from radchem.core.abc import EquationOfState
from radchem.core.constants import TEMPERATURE_FLOOR
from radchem.core.errors import NumericalInstabilityError
from radchem.core.logging_config import get_logger
from radchem.coupling.diagnostics import Diagnostics
from radchem.coupling.state import BlockState, IdealGasTemperature
from radchem.radiation.scaling import FluxScaling

logger = get_logger("coupling.source_terms")

Region = Sequence[slice]


@dataclass
class SourceTerms:
    """
    Conserved-state changes for one time step.

    Attributes
    ----------
    energy : np.ndarray
        Energy density change per cell (J m^-3)
    species : np.ndarray
        Species mass-density change, shape ``(N, *cells)`` (kg m^-3)
    """

    energy: np.ndarray
    species: np.ndarray

    def apply_to(self, energy: np.ndarray, scalars: np.ndarray) -> None:
        """Add the changes in place to conserved energy and scalar arrays."""
        energy += self.energy
        scalars += self.species


class SourceTermCoupler:
    """
    Drives the reaction network over the cells of a block.

    Parameters
    ----------
    network : ReactionNetwork
        Initialized reaction network of the block
    temperature_func : EquationOfState, optional
        Used when the block carries no temperature; defaults to an ideal gas
        over the network's species
    flux_scaling : FluxScaling, optional
        Multiplier applied to absorbed power at each time
    density_floor : float
        Cells at or below this gas density are left untouched (kg m^-3)
    pressure_floor : float
        Pressure floor of the default ideal-gas temperature (Pa)
    temperature_floor : float
        Minimum cell temperature handed to the network (K); a cell still at
        or below zero after flooring is a numerical instability
    """

    def __init__(
        self,
        network: ReactionNetwork,
        temperature_func: Optional[EquationOfState] = None,
        flux_scaling: Optional[FluxScaling] = None,
        density_floor: float = 0.0,
        pressure_floor: float = 0.0,
        temperature_floor: float = TEMPERATURE_FLOOR,
    ):
        self.network = network
        self.temperature_func = temperature_func or IdealGasTemperature(
            network.species, pressure_floor=pressure_floor
        )
        self.flux_scaling = flux_scaling or FluxScaling()
        self.density_floor = density_floor
        self.temperature_floor = temperature_floor
        self.diagnostics: Optional[Diagnostics] = None

    @staticmethod
    def cells(shape: Tuple[int, ...], region: Optional[Region] = None) -> Iterator[Tuple[int, ...]]:
        """Cell indices of ``shape`` inside ``region`` (all cells if None)."""
        if region is None:
            region = [slice(None)] * len(shape)
        ranges = [range(*s.indices(n)) for s, n in zip(region, shape)]
        return itertools.product(*ranges)

    def check_finite(
        self, block: BlockState, time: float = 0.0, cycle: int = 0, region: Optional[Region] = None
    ) -> None:
        """
        Abort on the first non-finite primitive value.

        Raises
        ------
        NumericalInstabilityError
            Naming the field, cell index, simulation time and cycle
        """
        for cell in self.cells(block.shape, region):
            for name, values in block.primitive_fields():
                value = values[cell]
                if not np.isfinite(value):
                    error = NumericalInstabilityError(name, cell, time, cycle, float(value))
                    logger.error(error.diagnostic())
                    raise error

    def cell_temperature(
        self, block: BlockState, cell: Tuple[int, ...], time: float = 0.0, cycle: int = 0
    ) -> float:
        """
        Floored temperature of one cell.

        Uses the block temperature when present, ``temperature_func`` otherwise.

        Raises
        ------
        NumericalInstabilityError
            If the floored temperature is not positive
        """
        if block.temperature is not None:
            temperature = float(block.temperature[cell])
        else:
            temperature = float(
                self.temperature_func(
                    float(block.density[cell]),
                    float(block.pressure[cell]),
                    block.species[(slice(None),) + cell],
                )
            )

        temperature = max(temperature, self.temperature_floor)
        if not temperature > 0:
            error = NumericalInstabilityError("temperature", cell, time, cycle, temperature)
            logger.error(error.diagnostic())
            raise error
        return temperature

    def add_source_terms(
        self,
        block: BlockState,
        absorbed_flux: Mapping[str, np.ndarray],
        dt: float,
        time: float = 0.0,
        cycle: int = 0,
        region: Optional[Region] = None,
    ) -> SourceTerms:
        """
        Compute the block's radiative/chemical source terms for one step.

        Parameters
        ----------
        block : BlockState
            Primitive state (not modified)
        absorbed_flux : mapping
            Absorbed power (W m^-3) per absorber name, shaped like the block
            or with a trailing spectral-sample axis
        dt : float
            Time step in s
        time : float
            Simulation time in s (flux scaling and diagnostics)
        cycle : int
            Cycle count for diagnostics
        region : sequence of slice, optional
            Cells to update, e.g. the interior plus ghost layers

        Returns
        -------
        SourceTerms
            Energy and species-density changes to add to the conserved update
        """
        self.check_finite(block, time, cycle, region)

        species = self.network.species
        terms = SourceTerms(energy=np.zeros(block.shape), species=np.zeros(block.species.shape))
        diagnostics = Diagnostics(block.shape, self.network)
        scale = self.flux_scaling(time)
        fluxes = {name: np.asarray(values, dtype=float) for name, values in absorbed_flux.items()}

        for cell in self.cells(block.shape, region):
            if block.density[cell] <= self.density_floor:
                continue

            absorbed = {name: scale * values[cell] for name, values in fluxes.items()}
            temperature = self.cell_temperature(block, cell, time, cycle)
            state = CellState(species, block.species[(slice(None),) + cell], absorbed)

            result = self.network.step(cell, dt, state, temperature=temperature)

            terms.energy[cell] += result.energy_delta
            terms.species[(slice(None),) + cell] += result.delta
            total_absorbed = float(sum(np.sum(p) for p in absorbed.values()))
            diagnostics.record(cell, temperature, total_absorbed, result)

        self.diagnostics = diagnostics
        logger.debug(
            f"Cycle {cycle} (t={time:.4e} s): net energy change {np.sum(terms.energy):.4e} J m^-3"
        )
        return terms
