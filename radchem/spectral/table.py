"""
Loading of two-column tabulated data (cross sections, rate coefficients).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np

from radchem.core.errors import MalformedTableError
from radchem.core.logging_config import get_logger

logger = get_logger("spectral.table")


@dataclass(frozen=True)
class SpectralTable:
    """
    Immutable tabulated function y(x).

    Attributes
    ----------
    x : np.ndarray
        Independent variable, strictly ascending
    y : np.ndarray
        Tabulated values
    source : str
        Where the table came from (file path or ``"<memory>"``)
    """

    x: np.ndarray
    y: np.ndarray
    source: str = "<memory>"

    def __post_init__(self):
        x = np.array(self.x, dtype=float)
        y = np.array(self.y, dtype=float)
        check_table(x, y, self.source)
        x.setflags(write=False)
        y.setflags(write=False)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __len__(self) -> int:
        return len(self.x)

    @property
    def lower(self) -> float:
        return float(self.x[0])

    @property
    def upper(self) -> float:
        return float(self.x[-1])


def check_table(x: np.ndarray, y: np.ndarray, source: str = "<memory>") -> None:
    """
    Validate tabulated data.

    Raises
    ------
    MalformedTableError
        If the arrays differ in shape, hold fewer than two rows, contain
        non-finite values or ``x`` is not strictly ascending.
    """
    if x.ndim != 1 or x.shape != y.shape:
        raise MalformedTableError(
            f"Table {source} must have matching one-dimensional columns", path=source
        )
    if len(x) < 2:
        raise MalformedTableError(f"Table {source} needs at least two rows", path=source)
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        raise MalformedTableError(f"Table {source} contains non-finite values", path=source)

    steps = np.diff(x)
    if np.any(steps <= 0):
        row = int(np.argmax(steps <= 0)) + 1
        raise MalformedTableError(
            f"Table {source} must be in strictly ascending order (row {row})", path=source
        )


def load_table(
    file_path: Union[str, Path], x_column: int = 0, y_column: int = 1
) -> SpectralTable:
    """
    Load a whitespace-separated ASCII table.

    Lines starting with ``#`` are comments. Extra columns are allowed and
    selected with ``x_column``/``y_column``.

    Parameters
    ----------
    file_path : str or Path
        Path to the table
    x_column : int
        Column of the independent variable
    y_column : int
        Column of the tabulated value

    Returns
    -------
    SpectralTable
        Validated table

    Raises
    ------
    MalformedTableError
        If the file cannot be read or parsed, or the data are invalid
    """
    file_path = Path(file_path)
    source = str(file_path)

    if not file_path.is_file():
        raise MalformedTableError(f"Cannot open table file {source}", path=source)

    try:
        data = np.loadtxt(file_path, comments="#", ndmin=2)
    except (OSError, ValueError) as e:
        raise MalformedTableError(f"Cannot parse table file {source}: {e}", path=source) from e

    if data.shape[1] <= max(x_column, y_column):
        raise MalformedTableError(
            f"Table {source} has {data.shape[1]} columns, "
            f"column {max(x_column, y_column)} requested",
            path=source,
        )

    table = SpectralTable(data[:, x_column], data[:, y_column], source=source)
    logger.info(
        f"Loaded table {source}: {len(table)} rows, x in [{table.lower:g}, {table.upper:g}]"
    )
    return table
