"""
I/O utilities for diagnostic fields.
"""

from pathlib import Path
from typing import Union

import pandas as pd

from radchem.core.logging_config import get_logger
from radchem.coupling.diagnostics import Diagnostics

logger = get_logger("io.diagnostics")


def save_diagnostics(file_path: Union[str, Path], data: Union[Diagnostics, pd.DataFrame]) -> Path:
    """
    Save diagnostic fields to file.

    ``.csv`` files are comma-separated; any other suffix is written
    whitespace-separated with a header line.

    Parameters
    ----------
    file_path : str or Path
        Output file path
    data : Diagnostics or pd.DataFrame
        Block diagnostics (flattened one row per cell) or an already
        tabulated history

    Returns
    -------
    Path
        Path written
    """
    file_path = Path(file_path)
    frame = data.to_dataframe() if isinstance(data, Diagnostics) else data

    if file_path.suffix.lower() == ".csv":
        frame.to_csv(file_path, index=False)
    else:
        frame.to_csv(file_path, sep=" ", index=False)

    logger.info(f"Saved diagnostics to {file_path}: {len(frame)} rows")
    return file_path


def load_diagnostics(file_path: Union[str, Path]) -> pd.DataFrame:
    """
    Load diagnostics written by :func:`save_diagnostics`.

    Parameters
    ----------
    file_path : str or Path
        Path to diagnostics file

    Returns
    -------
    pd.DataFrame
        One row per cell (or per step for single-cell histories)
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Diagnostics file not found: {file_path}")

    if file_path.suffix.lower() == ".csv":
        frame = pd.read_csv(file_path)
    else:
        frame = pd.read_csv(file_path, sep=" ")

    logger.info(f"Loaded diagnostics from {file_path}: {len(frame)} rows")
    return frame
