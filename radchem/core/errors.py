"""
Error hierarchy for radchem.

Every fatal condition carries a category and a context mapping so that the
command line can print a structured diagnostic before terminating.
"""

import math
from typing import Any, Mapping, Optional, Sequence


class RadChemError(Exception):
    """Base exception for radchem failures."""

    category = "error"

    def __init__(self, message: str, context: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.context = dict(context) if context else {}

    def diagnostic(self) -> str:
        """
        Structured diagnostic: category, message and relevant values.

        Returns
        -------
        str
            Multi-line diagnostic text
        """
        lines = [f"### FATAL ERROR [{self.category}]", f"    {self}"]
        for key, value in self.context.items():
            lines.append(f"    {key}: {value}")
        return "\n".join(lines)


class ConfigurationError(RadChemError):
    """Invalid or missing setup input, detected before any step runs."""

    category = "configuration"

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        context = dict(context) if context else {}
        if parameter is not None:
            context.setdefault("parameter", parameter)
        super().__init__(message, context)
        self.parameter = parameter


class MalformedTableError(ConfigurationError):
    """Tabulated data file is unreadable or not strictly ascending."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, parameter=path, context={"path": path} if path else None)
        self.path = path


class UnknownSpeciesError(ConfigurationError):
    """A reaction or absorber references a species index that does not exist."""


class OutOfDomainError(RadChemError):
    """A value lies outside the covered range of a table or rate law."""

    category = "domain"

    def __init__(self, value: float, lower: float, upper: float, what: str = "value"):
        super().__init__(
            f"{what} {value:.6e} outside covered range [{lower:.6e}, {upper:.6e}]",
            {"value": value, "lower": lower, "upper": upper},
        )
        self.value = value
        self.lower = lower
        self.upper = upper


class NumericalInstabilityError(RadChemError):
    """Non-finite primitive value, or nonpositive temperature, detected in a cell."""

    category = "numerical-instability"

    def __init__(self, field: str, cell: Sequence[int], time: float, cycle: int, value: float):
        kind = "nan" if not math.isfinite(value) else "invalid"
        super().__init__(
            f"{kind} value detected in ({field}) at cell {tuple(cell)}",
            {"field": field, "cell": tuple(cell), "time": time, "cycle": cycle, "value": value},
        )
        self.field = field
        self.cell = tuple(cell)
        self.time = time
        self.cycle = cycle


class ReactantDepletionError(RadChemError):
    """A reaction would consume more of a species than the cell holds."""

    category = "depletion"


__all__ = [
    "RadChemError",
    "ConfigurationError",
    "MalformedTableError",
    "UnknownSpeciesError",
    "OutOfDomainError",
    "NumericalInstabilityError",
    "ReactantDepletionError",
]
