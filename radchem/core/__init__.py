"""
Core utilities.

This module provides:
- Physical constants
- Units and unit conversion
- Configuration and logging
- Error hierarchy
- Abstract base classes

Factories live in :mod:`radchem.core.factory`, which depends on the
radiation and chemistry packages and is imported explicitly.
"""

from radchem.core import constants
from radchem.core import units
from radchem.core import config
from radchem.core import logging_config
from radchem.core.errors import (
    RadChemError,
    ConfigurationError,
    MalformedTableError,
    UnknownSpeciesError,
    OutOfDomainError,
    NumericalInstabilityError,
    ReactantDepletionError,
)
from radchem.core.abc import Absorber, Reaction, EquationOfState
from radchem.core.config import RadChemConfig

__all__ = [
    # Modules
    "constants",
    "units",
    "config",
    "logging_config",
    # Errors
    "RadChemError",
    "ConfigurationError",
    "MalformedTableError",
    "UnknownSpeciesError",
    "OutOfDomainError",
    "NumericalInstabilityError",
    "ReactantDepletionError",
    # Abstract base classes
    "Absorber",
    "Reaction",
    "EquationOfState",
    # Configuration
    "RadChemConfig",
]
