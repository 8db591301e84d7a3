"""
Time and distance scaling of the incident stellar flux.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from scipy.special import erf


def erf_ramp(
    time: float,
    amplitude: float = 5.0,
    timescale: float = 8.0e4,
    offset: float = 1.5,
    baseline: float = 5.1,
) -> float:
    """
    Smooth switch-on of the stellar flux.

    ``amplitude * erf(time / timescale - offset) + baseline``; the defaults
    ramp from ~0.1 to ~10.1 around ``t = 1.2e5`` s.
    """
    return float(amplitude * erf(time / timescale - offset) + baseline)


@dataclass(frozen=True)
class FluxScaling:
    """
    Multiplier applied to absorbed radiative power.

    ``scaling * (reference_distance / distance)^2 * ramp(time)``

    Attributes
    ----------
    scaling : float
        Constant factor
    distance : float
        Current distance to the source
    reference_distance : float
        Distance at which the band fluxes were computed
    ramp : callable, optional
        Time-dependent factor ``f(time)``; constant 1 if None
    """

    scaling: float = 1.0
    distance: float = 1.0
    reference_distance: float = 1.0
    ramp: Optional[Callable[[float], float]] = None

    def __post_init__(self):
        if self.distance <= 0 or self.reference_distance <= 0:
            raise ValueError("Distances must be positive")

    def __call__(self, time: float = 0.0) -> float:
        factor = self.scaling * (self.reference_distance / self.distance) ** 2
        if self.ramp is not None:
            factor *= self.ramp(time)
        return factor
