"""
I/O utilities for diagnostics.
"""

from radchem.io.diagnostics import save_diagnostics, load_diagnostics

__all__ = ["save_diagnostics", "load_diagnostics"]
