"""
Natural cubic spline interpolation over a SpectralTable.

Second derivatives are computed once with the tridiagonal sweep (zero second
derivative at both ends). Evaluation accepts a location hint so that ordered
sweeps (spectral samples, temperature grids) reuse the previous interval.

Below the table's lower bound the spline evaluates to exactly zero: a cross
section vanishes where the data stop. Above the upper bound evaluation is an
error, the spline never extrapolates.
"""

from typing import Tuple, Union

import numpy as np

from radchem.core.errors import OutOfDomainError
from radchem.spectral.table import SpectralTable


class NaturalCubicSpline:
    """
    Natural cubic spline interpolant.

    Attributes
    ----------
    x : np.ndarray
        Knot abscissae (strictly ascending)
    y : np.ndarray
        Knot ordinates
    y2 : np.ndarray
        Second derivatives at knots
    """

    def __init__(self, table: SpectralTable):
        self.table = table
        self.x = table.x
        self.y = table.y
        self.y2 = build_spline(table.x, table.y)

    @classmethod
    def from_arrays(cls, x, y) -> "NaturalCubicSpline":
        return cls(SpectralTable(x, y))

    @property
    def lower(self) -> float:
        return float(self.x[0])

    @property
    def upper(self) -> float:
        return float(self.x[-1])

    def locate(self, x: float, hint: int = -1) -> int:
        """
        Index ``i`` of the interval with ``x[i] <= x <= x[i+1]``.

        The hinted interval and its two neighbours are checked first; on a
        miss the interval is found by bisection.
        """
        n_intervals = len(self.x) - 1
        for i in (hint, hint + 1, hint - 1):
            if 0 <= i < n_intervals and self.x[i] <= x <= self.x[i + 1]:
                return i
        i = int(np.searchsorted(self.x, x, side="right")) - 1
        return min(max(i, 0), n_intervals - 1)

    def evaluate(self, x: float, hint: int = -1) -> Tuple[float, int]:
        """
        Interpolated value at ``x`` and the interval to use as the next hint.

        Parameters
        ----------
        x : float
            Evaluation point
        hint : int
            Interval returned by the previous call (-1 for none)

        Returns
        -------
        value : float
            Spline value; exactly 0.0 below the table
        hint : int
            Interval index containing ``x`` (unchanged when below the table)

        Raises
        ------
        OutOfDomainError
            If ``x`` exceeds the table's upper bound
        """
        if x < self.x[0]:
            return 0.0, hint
        if x > self.x[-1]:
            raise OutOfDomainError(x, self.lower, self.upper, what=f"x in {self.table.source}")

        klo = self.locate(x, hint)
        khi = klo + 1
        h = self.x[khi] - self.x[klo]
        a = (self.x[khi] - x) / h
        b = (x - self.x[klo]) / h
        value = (
            a * self.y[klo]
            + b * self.y[khi]
            + ((a**3 - a) * self.y2[klo] + (b**3 - b) * self.y2[khi]) * h * h / 6.0
        )
        return float(value), klo

    def __call__(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        if np.ndim(x) == 0:
            return self.evaluate(float(x))[0]

        values = np.empty(np.shape(x))
        hint = -1
        for idx, xi in np.ndenumerate(x):
            values[idx], hint = self.evaluate(float(xi), hint)
        return values


def build_spline(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Second derivatives of the natural cubic spline through ``(x, y)``.

    Parameters
    ----------
    x : np.ndarray
        Strictly ascending knots (at least two)
    y : np.ndarray
        Values at the knots

    Returns
    -------
    np.ndarray
        Second derivatives, zero at both ends
    """
    n = len(x)
    y2 = np.zeros(n)
    u = np.zeros(n)

    # forward elimination
    for i in range(1, n - 1):
        sig = (x[i] - x[i - 1]) / (x[i + 1] - x[i - 1])
        p = sig * y2[i - 1] + 2.0
        y2[i] = (sig - 1.0) / p
        slope_diff = (y[i + 1] - y[i]) / (x[i + 1] - x[i]) - (y[i] - y[i - 1]) / (x[i] - x[i - 1])
        u[i] = (6.0 * slope_diff / (x[i + 1] - x[i - 1]) - sig * u[i - 1]) / p

    # back substitution
    y2[n - 1] = 0.0
    for k in range(n - 2, -1, -1):
        y2[k] = y2[k] * y2[k + 1] + u[k]

    return y2
