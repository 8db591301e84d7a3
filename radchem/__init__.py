"""
radchem: photoionization and chemistry source terms for fluid solvers

Absorbed stellar radiation drives photoionization, recombination and
radiative heating/cooling in a gas of chemical species. radchem computes the
per-cell energy and species-density changes a fluid solver adds to its
conserved update.
"""

__version__ = "0.1.0"

# Core imports for convenience
from radchem.core import constants
from radchem.core import units

__all__ = [
    "constants",
    "units",
]
