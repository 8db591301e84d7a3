"""
Coupling of the reaction network to the fluid state.

This module provides:
- Block primitive state and a default ideal-gas temperature
- The per-cell source-term coupler with its finiteness check
- Diagnostic fields recorded during a step
"""

from radchem.coupling.state import BlockState, IdealGasTemperature
from radchem.coupling.diagnostics import Diagnostics, FIELDS
from radchem.coupling.source_terms import SourceTermCoupler, SourceTerms

__all__ = [
    "BlockState",
    "IdealGasTemperature",
    "Diagnostics",
    "FIELDS",
    "SourceTermCoupler",
    "SourceTerms",
]
