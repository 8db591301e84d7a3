"""
Chemistry: species, rate laws, reactions and the reaction network.

This module provides:
- Species metadata and per-cell composition state
- Closed-form and tabulated rate laws
- Stoichiometric reaction templates, collisional processes and
  flux-driven photoionization
- The ordered per-cell reaction network with depletion clamping
"""

from radchem.chemistry.species import Species, SpeciesSet
from radchem.chemistry.state import CellState
from radchem.chemistry.rates import (
    RateLaw,
    ConstantRate,
    PowerLawRate,
    ArrheniusRate,
    FunctionRate,
    TabulatedRate,
)
from radchem.chemistry.reaction import ReactionTemplate, TabulatedReaction
from radchem.chemistry.collisions import HydrogenRecombination, LymanAlphaCooling, ChargeExchange
from radchem.chemistry.photoionization import Photoionization
from radchem.chemistry.network import ReactionNetwork, StepResult

__all__ = [
    "Species",
    "SpeciesSet",
    "CellState",
    "RateLaw",
    "ConstantRate",
    "PowerLawRate",
    "ArrheniusRate",
    "FunctionRate",
    "TabulatedRate",
    "ReactionTemplate",
    "TabulatedReaction",
    "HydrogenRecombination",
    "LymanAlphaCooling",
    "ChargeExchange",
    "Photoionization",
    "ReactionNetwork",
    "StepResult",
]
