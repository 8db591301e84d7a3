"""
Command-line interface for radchem.

This module provides CLI tools for:
- Inspecting tabulated cross-section and rate files
- Integrating a configured reaction network in a single cell
"""

__all__ = []
