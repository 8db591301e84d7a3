"""
Per-cell diagnostic fields recorded by the source-term coupler.

Diagnostics are observational only; nothing in them feeds back into the
physics.
"""

from typing import Dict, Iterable, Tuple

import numpy as np
import pandas as pd

from radchem.chemistry.network import StepResult
from radchem.core.abc import Reaction

FIELDS = (
    "temperature",
    "absorbed_energy",
    "ionization_rate",
    "recombination_rate",
    "heating_rate",
    "cooling_rate",
    "energy_delta",
)


class Diagnostics:
    """
    Named diagnostic arrays for one block.

    Attributes
    ----------
    fields : Dict[str, np.ndarray]
        Totals: temperature (K), absorbed_energy (W m^-3),
        ionization_rate and recombination_rate (m^-3 s^-1),
        heating_rate and cooling_rate (W m^-3, both nonnegative),
        energy_delta (J m^-3)
    reaction_rates : Dict[str, np.ndarray]
        Applied rate per reaction
    reaction_power : Dict[str, np.ndarray]
        Heating (positive) or cooling (negative) power per reaction
    """

    def __init__(self, shape: Tuple[int, ...], reactions: Iterable[Reaction]):
        self.shape = tuple(shape)
        self.fields: Dict[str, np.ndarray] = {name: np.zeros(self.shape) for name in FIELDS}
        self._kinds = {r.name: r.kind for r in reactions}
        self.reaction_rates = {name: np.zeros(self.shape) for name in self._kinds}
        self.reaction_power = {name: np.zeros(self.shape) for name in self._kinds}

    def __getitem__(self, name: str) -> np.ndarray:
        if name in self.fields:
            return self.fields[name]
        if name.endswith("_cooling") and name[: -len("_cooling")] in self.reaction_power:
            return -np.minimum(self.reaction_power[name[: -len("_cooling")]], 0.0)
        raise KeyError(name)

    def record(
        self, cell: Tuple[int, ...], temperature: float, absorbed: float, result: StepResult
    ) -> None:
        """Store one cell's step outcome."""
        f = self.fields
        f["temperature"][cell] = temperature
        f["absorbed_energy"][cell] = absorbed
        f["energy_delta"][cell] = result.energy_delta

        for name, rate in result.rates.items():
            self.reaction_rates[name][cell] = rate
            kind = self._kinds.get(name)
            if kind == "ionization":
                f["ionization_rate"][cell] += rate
            elif kind == "recombination":
                f["recombination_rate"][cell] += rate

        for name, power in result.energy_rates.items():
            self.reaction_power[name][cell] = power
            if power >= 0:
                f["heating_rate"][cell] += power
            else:
                f["cooling_rate"][cell] -= power

    def to_dataframe(self) -> pd.DataFrame:
        """
        Flatten all fields into a table, one row per cell.

        Per-reaction columns are named ``rate:<reaction>`` and
        ``power:<reaction>``.
        """
        index = np.indices(self.shape).reshape(len(self.shape), -1)
        columns = {f"i{axis}": index[axis] for axis in range(len(self.shape))}
        for name, values in self.fields.items():
            columns[name] = values.ravel()
        for name, values in self.reaction_rates.items():
            columns[f"rate:{name}"] = values.ravel()
        for name, values in self.reaction_power.items():
            columns[f"power:{name}"] = values.ravel()
        return pd.DataFrame(columns)
