"""
Tests for diagnostics I/O.
"""

import numpy as np
import pandas as pd
import pytest

from radchem.chemistry.collisions import HydrogenRecombination
from radchem.chemistry.network import StepResult
from radchem.coupling import Diagnostics
from radchem.io import load_diagnostics, save_diagnostics


@pytest.fixture
def diagnostics():
    """2x2 block with one recorded cell."""
    reaction = HydrogenRecombination("H-recomb", 0, 1, 2)
    diag = Diagnostics((2, 2), [reaction])
    result = StepResult(densities=np.zeros(3), delta=np.zeros(3), energy_delta=-2.0e-6)
    result.rates["H-recomb"] = 3.0e8
    result.energy_rates["H-recomb"] = -1.0e-7
    diag.record((1, 0), 1.0e4, 0.0, result)
    return diag


def test_save_load_diagnostics_csv(diagnostics, tmp_path):
    path = save_diagnostics(tmp_path / "diag.csv", diagnostics)

    frame = load_diagnostics(path)

    assert len(frame) == 4
    row = frame[(frame["i0"] == 1) & (frame["i1"] == 0)].iloc[0]
    assert row["temperature"] == pytest.approx(1.0e4)
    assert row["recombination_rate"] == pytest.approx(3.0e8)
    assert row["cooling_rate"] == pytest.approx(1.0e-7)
    assert row["power:H-recomb"] == pytest.approx(-1.0e-7)


def test_save_load_diagnostics_whitespace(diagnostics, tmp_path):
    path = save_diagnostics(tmp_path / "diag.dat", diagnostics)

    assert " " in path.read_text().splitlines()[0]
    frame = load_diagnostics(path)
    assert list(frame.columns) == list(diagnostics.to_dataframe().columns)
    assert frame["energy_delta"].sum() == pytest.approx(-2.0e-6)


def test_save_dataframe(tmp_path):
    history = pd.DataFrame({"cycle": [0, 1], "time": [1.0, 2.0], "rho:H": [1.0e-12, 9.0e-13]})

    path = save_diagnostics(tmp_path / "history.csv", history)

    pd.testing.assert_frame_equal(load_diagnostics(path), history)


def test_load_diagnostics_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_diagnostics(tmp_path / "missing.csv")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
