"""
Tests for rate laws and reactions.
"""

import math

import pytest
import numpy as np

from radchem.chemistry.collisions import (
    ChargeExchange,
    HydrogenRecombination,
    LymanAlphaCooling,
    recombination_cooling_coefficient,
)
from radchem.chemistry.photoionization import Photoionization
from radchem.chemistry.rates import (
    ArrheniusRate,
    ConstantRate,
    FunctionRate,
    PowerLawRate,
    TabulatedRate,
)
from radchem.chemistry.reaction import ReactionTemplate, TabulatedReaction
from radchem.chemistry.species import Species, SpeciesSet
from radchem.chemistry.state import CellState
from radchem.core.constants import KB
from radchem.core.errors import ConfigurationError, OutOfDomainError
from radchem.radiation.absorbers import HydrogenIonization, UserDefinedIonization
from radchem.spectral.table import SpectralTable


@pytest.fixture
def ionized_cell(hydrogen_species):
    """Partially ionized hydrogen, charge neutral."""
    m = hydrogen_species.particle_masses
    n = np.array([1.0e12, 2.0e12, 2.0e12])
    return CellState(hydrogen_species, n * m)


# ==============================================================================
# Rate laws
# ==============================================================================


def test_constant_rate():
    assert ConstantRate(3.0e-15)(1.0e4) == 3.0e-15


def test_power_law_rate():
    law = PowerLawRate(2.59e-19, -0.7, 1.0e4)
    assert law(1.0e4) == pytest.approx(2.59e-19)
    assert law(2.0e4) == pytest.approx(2.59e-19 * 2.0**-0.7)


def test_arrhenius_rate():
    law = ArrheniusRate(7.5e-32, t_activation=118348.0)
    assert law(1.0e4) == pytest.approx(7.5e-32 * math.exp(-11.8348))


@pytest.mark.parametrize("temperature", [0.0, -5.0, float("nan")])
def test_collisional_laws_reject_nonpositive_temperature(temperature):
    with pytest.raises(OutOfDomainError, match="temperature"):
        PowerLawRate(2.59e-19, -0.7, 1.0e4)(temperature)
    with pytest.raises(OutOfDomainError, match="temperature"):
        ArrheniusRate(7.5e-32, t_activation=118348.0)(temperature)
    with pytest.raises(OutOfDomainError, match="temperature"):
        recombination_cooling_coefficient(temperature)


def test_function_rate():
    assert FunctionRate(lambda t: 2.0 * t)(3.0) == 6.0


def test_tabulated_rate():
    """Spline over temperature, zero below and an error above the table."""
    table = SpectralTable([1.0e3, 1.0e4, 1.0e5], [1.0, 2.0, 3.0])
    law = TabulatedRate(table, scale=1.0e-18)

    assert law(1.0e4) == pytest.approx(2.0e-18)
    assert law(500.0) == 0.0
    with pytest.raises(OutOfDomainError):
        law(2.0e5)


def test_tabulated_rate_is_order_independent():
    """A shared instance gives the same value whatever was evaluated before."""
    table = SpectralTable([1.0e3, 1.0e4, 1.0e5], [1.0, 2.0, 3.0])
    shared = TabulatedRate(table, scale=1.0e-18)
    temperatures = [9.0e4, 1.5e3, 5.0e4, 2.0e3]

    forward = [shared(t) for t in temperatures]
    backward = [shared(t) for t in reversed(temperatures)]

    assert forward == list(reversed(backward))
    assert forward == [TabulatedRate(table, scale=1.0e-18)(t) for t in temperatures]
    assert not hasattr(shared, "_hint")


# ==============================================================================
# Templates
# ==============================================================================


def test_template_rate_uses_colliders(hydrogen_species, ionized_cell):
    """Default colliders are the reactants repeated by their coefficient."""
    reaction = ReactionTemplate(
        "H2-like", species=[0, 1], stoichiometry=[-2.0, 1.0], alpha=ConstantRate(1.0e-20)
    )

    assert reaction.colliders == (0, 0)
    assert reaction.rate(100.0, ionized_cell) == pytest.approx(1.0e-20 * 1.0e12**2)


def test_template_apply_uses_particle_masses(hydrogen_species, ionized_cell):
    reaction = ReactionTemplate("r", [0, 1], [-1.0, 1.0], alpha=ConstantRate(1.0))
    delta = reaction.apply(1.0e6, 2.0, ionized_cell)

    m = hydrogen_species.particle_masses
    np.testing.assert_allclose(delta, [-2.0e6 * m[0], 2.0e6 * m[1], 0.0])


def test_apply_does_not_clamp(hydrogen_species, ionized_cell):
    """Reactions report the full change; clamping is the network's job."""
    reaction = ReactionTemplate("r", [0, 1], [-1.0, 1.0], alpha=ConstantRate(1.0))
    delta = reaction.apply(1.0e30, 1.0, ionized_cell)

    assert -delta[0] > ionized_cell.densities[0]


def test_template_without_alpha_has_no_rate(ionized_cell):
    reaction = ReactionTemplate("cool", [], [], beta=ConstantRate(1.0e-30), colliders=[0, 2])

    assert reaction.rate(1.0e4, ionized_cell) == 0.0
    assert reaction.energy_rate(1.0e4, ionized_cell) == pytest.approx(-1.0e-30 * 2.0e24)


def test_template_rejects_mismatched_lengths():
    with pytest.raises(ConfigurationError, match="stoichiometric coefficients"):
        ReactionTemplate("r", [0, 1], [-1.0])


def test_template_rejects_repeated_species():
    with pytest.raises(ConfigurationError, match="more than once"):
        ReactionTemplate("r", [0, 0], [-1.0, 1.0])


def test_species_indices_include_colliders():
    reaction = ReactionTemplate("r", [0], [-1.0], alpha=ConstantRate(1.0), colliders=[0, 3])
    assert reaction.species_indices == (0, 3)


def test_tabulated_reaction(write_table, hydrogen_species, ionized_cell):
    path = write_table([(1.0e3, 1.0, 4.0), (1.0e4, 2.0, 5.0), (1.0e5, 3.0, 6.0)])
    reaction = TabulatedReaction(
        "tab",
        species=[0, 1, 2],
        stoichiometry=[1.0, -1.0, -1.0],
        data_file=path,
        alpha_column=1,
        beta_column=2,
        alpha_scale=1.0e-19,
        beta_scale=1.0e-40,
        kind="recombination",
    )

    n_product = 2.0e12 * 2.0e12
    assert reaction.kind == "recombination"
    assert reaction.rate(1.0e4, ionized_cell) == pytest.approx(2.0e-19 * n_product)
    assert reaction.energy_rate(1.0e4, ionized_cell) == pytest.approx(-5.0e-40 * n_product)


# ==============================================================================
# Collisional processes
# ==============================================================================


def test_recombination_rate_and_cooling(ionized_cell):
    """Case-B recombination at 10^4 K."""
    reaction = HydrogenRecombination("H-recomb", neutral=0, ion=1, electron=2)
    n_product = 2.0e12 * 2.0e12

    assert reaction.rate(1.0e4, ionized_cell) == pytest.approx(2.59e-19 * n_product)
    cooling = 6.11e-16 * 1.0e4**-0.89 * KB * 1.0e4 * n_product
    assert reaction.energy_rate(1.0e4, ionized_cell) == pytest.approx(-cooling)
    assert recombination_cooling_coefficient(1.0e4) * n_product == pytest.approx(cooling)


def test_recombination_conserves_mass(hydrogen_species, ionized_cell):
    """Stoichiometry with consistent masses conserves total mass."""
    reaction = HydrogenRecombination("H-recomb", neutral=0, ion=1, electron=2)
    delta = reaction.apply(1.0e10, 1.0, ionized_cell)

    assert np.sum(delta) == pytest.approx(0.0, abs=1e-12 * np.max(np.abs(delta)))
    assert reaction.mass_defect(hydrogen_species) == pytest.approx(0.0, abs=1e-40)


def test_lyman_alpha_cooling(ionized_cell):
    """Collisional excitation cools without changing populations."""
    reaction = LymanAlphaCooling("Lya", neutral=0, electron=2)

    assert reaction.rate(1.0e4, ionized_cell) == 0.0
    np.testing.assert_array_equal(reaction.apply(0.0, 1.0, ionized_cell), 0.0)
    expected = 7.5e-32 * math.exp(-118348.0 / 1.0e4) * 1.0e12 * 2.0e12
    assert reaction.energy_rate(1.0e4, ionized_cell) == pytest.approx(-expected)


def test_charge_exchange():
    species = SpeciesSet(
        [
            Species(0, "A", 1.0e-3),
            Species(1, "B+", 2.0e-3),
            Species(2, "A+", 1.0e-3),
            Species(3, "B", 2.0e-3),
        ]
    )
    m = species.particle_masses
    state = CellState(species, np.array([3.0, 4.0, 0.0, 0.0]) * 1.0e10 * m)
    reaction = ChargeExchange(
        "cx",
        donor=0,
        acceptor_ion=1,
        donor_ion=2,
        acceptor=3,
        alpha=PowerLawRate(1.0e-15, 0.5, 1.0e4),
    )

    assert reaction.kind == "exchange"
    assert reaction.rate(4.0e4, state) == pytest.approx(2.0e-15 * 3.0e10 * 4.0e10)
    assert np.sum(reaction.apply(1.0, 1.0, state)) == pytest.approx(0.0, abs=1e-40)


# ==============================================================================
# Photoionization
# ==============================================================================


def test_photoionization_spectral_power(threshold_band, hydrogen_species, neutral_cell):
    """rate = sum(h P) / I, heating = sum(q P)."""
    absorber = HydrogenIonization("H-xs", threshold_band, hydrogen_species, "H", "H+")
    reaction = Photoionization("H-photo", absorber, electron=2)
    power = np.array([2.0e-6, 1.0e-6, 5.0e-6])
    neutral_cell.absorbed_flux = {"H-xs": power}

    ionization_energy = hydrogen_species.ionization_energy(0, 1)
    expected_rate = (0.5 * 2.0e-6 + 1.0 * 1.0e-6) / ionization_energy
    assert reaction.rate(1.0e4, neutral_cell) == pytest.approx(expected_rate)
    assert reaction.energy_rate(1.0e4, neutral_cell) == pytest.approx(0.5 * 2.0e-6)


def test_photoionization_scalar_power(ionizing_band, hydrogen_species, neutral_cell):
    """Band-integrated power uses the mean partition."""
    absorber = UserDefinedIonization(
        "H-const", ionizing_band, hydrogen_species, "H", "H+", lambda energy: 1.0e-22
    )
    reaction = Photoionization("H-photo", absorber, electron=2)
    neutral_cell.absorbed_flux = {"H-const": 1.0e-6}

    ionization_energy = hydrogen_species.ionization_energy(0, 1)
    assert reaction.rate(0.0, neutral_cell) == pytest.approx(0.375e-6 / ionization_energy)
    assert reaction.energy_rate(0.0, neutral_cell) == pytest.approx(0.625e-6)


def test_photoionization_scalar_power_without_cross_section(
    ionizing_band, hydrogen_species, neutral_cell
):
    """Scalar power on an absorber with no cross section heats without ionizing."""
    absorber = UserDefinedIonization(
        "H-zero", ionizing_band, hydrogen_species, "H", "H+", lambda energy: 0.0
    )
    reaction = Photoionization("H-photo", absorber, electron=2)
    neutral_cell.absorbed_flux = {"H-zero": 1.0e-6}

    assert reaction.rate(1.0e4, neutral_cell) == 0.0
    assert reaction.energy_rate(1.0e4, neutral_cell) == pytest.approx(1.0e-6)


def test_photoionization_without_flux(threshold_band, hydrogen_species, neutral_cell):
    absorber = HydrogenIonization("H-xs", threshold_band, hydrogen_species, "H", "H+")
    reaction = Photoionization("H-photo", absorber, electron=2)

    assert reaction.rate(1.0e4, neutral_cell) == 0.0
    assert reaction.energy_rate(1.0e4, neutral_cell) == 0.0


def test_photoionization_stoichiometry(threshold_band, hydrogen_species, neutral_cell):
    """Neutral -1, ion +1, electron +1; mass conserved."""
    absorber = HydrogenIonization("H-xs", threshold_band, hydrogen_species, "H", "H+")
    reaction = Photoionization("H-photo", absorber, electron=2)

    assert reaction.stoichiometry == {0: -1.0, 1: 1.0, 2: 1.0}
    assert reaction.kind == "ionization"
    delta = reaction.apply(1.0e10, 1.0, neutral_cell)
    assert np.sum(delta) == pytest.approx(0.0, abs=1e-12 * np.max(np.abs(delta)))


def test_photoionization_sample_mismatch(threshold_band, hydrogen_species, neutral_cell):
    absorber = HydrogenIonization("H-xs", threshold_band, hydrogen_species, "H", "H+")
    reaction = Photoionization("H-photo", absorber, electron=2)
    neutral_cell.absorbed_flux = {"H-xs": np.ones(5)}

    with pytest.raises(ValueError, match="samples"):
        reaction.rate(1.0e4, neutral_cell)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
