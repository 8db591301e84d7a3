"""
Tabulated data and interpolation.

This module provides:
- Loading and validation of two-column ASCII tables
- Natural cubic spline interpolation with hinted lookup
"""

from radchem.spectral.table import SpectralTable, load_table, check_table
from radchem.spectral.spline import NaturalCubicSpline, build_spline

__all__ = [
    "SpectralTable",
    "load_table",
    "check_table",
    "NaturalCubicSpline",
    "build_spline",
]
