"""
Radiation bands and absorbers.

This module provides:
- Radiation bands with strictly increasing spectral sampling
- Absorbers computing per-sample cross sections and energy partition
- Scaling of the incident flux with time and distance
"""

from radchem.radiation.band import RadiationBand
from radchem.radiation.absorbers import (
    GenericAbsorber,
    IonizingAbsorber,
    HydrogenIonization,
    TabulatedIonization,
    HeliumIonization,
    UserDefinedIonization,
)
from radchem.radiation.scaling import FluxScaling, erf_ramp

__all__ = [
    "RadiationBand",
    "GenericAbsorber",
    "IonizingAbsorber",
    "HydrogenIonization",
    "TabulatedIonization",
    "HeliumIonization",
    "UserDefinedIonization",
    "FluxScaling",
    "erf_ramp",
]
