"""
Collisional processes: recombination, line cooling and charge exchange.
"""

from radchem.chemistry.rates import (
    ArrheniusRate,
    FunctionRate,
    PowerLawRate,
    RateLaw,
    check_temperature,
)
from radchem.chemistry.reaction import ReactionTemplate
from radchem.core.constants import (
    ALPHA_B_COEFF,
    ALPHA_B_EXPONENT,
    ALPHA_B_TREF,
    KB,
    LYA_COOLING_COEFF,
    LYA_COOLING_TEMP,
    RECOMB_COOLING_COEFF,
    RECOMB_COOLING_EXPONENT,
)


def recombination_cooling_coefficient(temperature: float) -> float:
    """Case-B recombination cooling coefficient (J m^3 s^-1)."""
    check_temperature(temperature, "recombination cooling temperature")
    return RECOMB_COOLING_COEFF * temperature**RECOMB_COOLING_EXPONENT * KB * temperature


class HydrogenRecombination(ReactionTemplate):
    """
    Radiative recombination H+ + e- -> H (case B).

    Rate ``alpha_B n_ion n_e`` with ``alpha_B = 2.59e-19 (T/1e4)^-0.7``
    m^3 s^-1; cooling ``6.11e-16 T^-0.89 k_B T n_ion n_e`` W m^-3.
    """

    kind = "recombination"

    def __init__(self, name: str, neutral: int, ion: int, electron: int):
        super().__init__(
            name,
            species=[neutral, ion, electron],
            stoichiometry=[1.0, -1.0, -1.0],
            alpha=PowerLawRate(ALPHA_B_COEFF, ALPHA_B_EXPONENT, ALPHA_B_TREF),
            beta=FunctionRate(recombination_cooling_coefficient),
            colliders=[ion, electron],
        )


class LymanAlphaCooling(ReactionTemplate):
    """
    Collisionally excited Lyman-alpha emission.

    No population change; cooling ``7.5e-32 exp(-118348/T) n_neutral n_e``
    W m^-3.
    """

    kind = "cooling"

    def __init__(self, name: str, neutral: int, electron: int):
        super().__init__(
            name,
            species=[],
            stoichiometry=[],
            beta=ArrheniusRate(LYA_COOLING_COEFF, t_activation=LYA_COOLING_TEMP),
            colliders=[neutral, electron],
        )


class ChargeExchange(ReactionTemplate):
    """
    Two-body charge transfer ``A + B+ -> A+ + B``.

    Parameters
    ----------
    donor : int
        Neutral that loses an electron (A)
    acceptor_ion : int
        Ion that captures it (B+)
    donor_ion : int
        Ionized donor (A+)
    acceptor : int
        Neutralized acceptor (B)
    alpha : RateLaw
        Rate coefficient (m^3 s^-1)
    """

    kind = "exchange"

    def __init__(
        self,
        name: str,
        donor: int,
        acceptor_ion: int,
        donor_ion: int,
        acceptor: int,
        alpha: RateLaw,
    ):
        super().__init__(
            name,
            species=[donor, acceptor_ion, donor_ion, acceptor],
            stoichiometry=[-1.0, -1.0, 1.0, 1.0],
            alpha=alpha,
        )
