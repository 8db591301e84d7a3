"""
Temperature-dependent rate coefficient laws.

A rate law maps a cell temperature (K) to a coefficient. Closed-form laws are
the fast path for analytic collisional and recombination processes; the
tabulated law covers coefficients only known empirically.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

import numpy as np

from radchem.core.errors import OutOfDomainError
from radchem.spectral.spline import NaturalCubicSpline
from radchem.spectral.table import SpectralTable


def check_temperature(temperature: float, what: str = "temperature") -> float:
    """
    Return ``temperature`` if positive.

    Raises
    ------
    OutOfDomainError
        If the temperature is zero, negative or NaN
    """
    if not temperature > 0:
        raise OutOfDomainError(temperature, 0.0, np.inf, what=what)
    return temperature


class RateLaw(ABC):
    """Coefficient as a function of temperature."""

    @abstractmethod
    def __call__(self, temperature: float) -> float:
        """Evaluate the coefficient at ``temperature`` (K)."""
        pass


@dataclass(frozen=True)
class ConstantRate(RateLaw):
    """Temperature-independent coefficient."""

    coefficient: float

    def __call__(self, temperature: float) -> float:
        return self.coefficient


@dataclass(frozen=True)
class PowerLawRate(RateLaw):
    """``coefficient * (T / t_ref) ** exponent``."""

    coefficient: float
    exponent: float = 0.0
    t_ref: float = 1.0

    def __call__(self, temperature: float) -> float:
        check_temperature(temperature, "power-law temperature")
        return self.coefficient * (temperature / self.t_ref) ** self.exponent


@dataclass(frozen=True)
class ArrheniusRate(RateLaw):
    """``coefficient * (T / t_ref) ** exponent * exp(-t_activation / T)``."""

    coefficient: float
    exponent: float = 0.0
    t_activation: float = 0.0
    t_ref: float = 1.0

    def __call__(self, temperature: float) -> float:
        check_temperature(temperature, "Arrhenius temperature")
        return (
            self.coefficient
            * (temperature / self.t_ref) ** self.exponent
            * np.exp(-self.t_activation / temperature)
        )


class FunctionRate(RateLaw):
    """Wraps a plain callable ``f(T)``."""

    def __init__(self, func: Callable[[float], float]):
        self.func = func

    def __call__(self, temperature: float) -> float:
        return float(self.func(temperature))


class TabulatedRate(RateLaw):
    """
    Spline-interpolated coefficient versus temperature.

    Follows the spline's domain convention: zero below the table, an
    ``OutOfDomainError`` above it. Evaluation keeps no state, so one
    instance is shared by every cell.

    Parameters
    ----------
    table : SpectralTable
        Temperatures (K) and coefficients
    scale : float
        Unit factor applied to the tabulated coefficient
    """

    def __init__(self, table: SpectralTable, scale: float = 1.0):
        self.spline = NaturalCubicSpline(table)
        self.scale = scale

    def __call__(self, temperature: float) -> float:
        value, _ = self.spline.evaluate(temperature)
        return max(value, 0.0) * self.scale
