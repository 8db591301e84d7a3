"""
Configuration management for radchem.

Provides utilities for loading and validating YAML/JSON configuration files
describing species, radiation bands with their absorbers, and the reaction
network. The validated configuration is an immutable object passed explicitly
to the factories; nothing is kept in module globals.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from radchem.core.constants import TEMPERATURE_FLOOR
from radchem.core.errors import ConfigurationError
from radchem.core.logging_config import get_logger

logger = get_logger("core.config")

DEPLETION_POLICIES = ("clamp", "abort")
ABSORBER_TYPES = ("generic", "hydrogen", "helium", "tabulated")
REACTION_TYPES = (
    "photoionization",
    "hydrogen_recombination",
    "lyman_alpha",
    "charge_exchange",
    "template",
    "tabulated",
)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from YAML or JSON file.

    Parameters
    ----------
    config_path : str or Path
        Path to configuration file (.yaml, .yml, or .json)

    Returns
    -------
    dict
        Configuration dictionary

    Raises
    ------
    FileNotFoundError
        If config file does not exist
    ValueError
        If file format is not supported
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    suffix = config_path.suffix.lower()

    with open(config_path, "r") as f:
        if suffix in [".yaml", ".yml"]:
            config = yaml.safe_load(f)
        elif suffix == ".json":
            config = json.load(f)
        else:
            raise ValueError(
                f"Unsupported config file format: {suffix}. " "Use .yaml, .yml, or .json"
            )

    logger.info(f"Loaded configuration from {config_path}")
    return config


def save_config(config: Dict[str, Any], config_path: Union[str, Path]) -> Path:
    """
    Save configuration to YAML or JSON file.

    Files without a recognised suffix are written as YAML with a ``.yaml``
    suffix.

    Parameters
    ----------
    config : dict
        Configuration dictionary
    config_path : str or Path
        Path to output file

    Returns
    -------
    Path
        Path actually written
    """
    config_path = Path(config_path)
    suffix = config_path.suffix.lower()

    if suffix == ".json":
        with open(config_path, "w") as f:
            json.dump(config, f, indent=2)
    else:
        if suffix not in [".yaml", ".yml"]:
            config_path = config_path.with_suffix(".yaml")
        with open(config_path, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved configuration to {config_path}")
    return config_path


def _check_positive(section: Dict[str, Any], key: str, where: str) -> None:
    if key in section and not float(section[key]) > 0:
        raise ConfigurationError(f"{where}.{key} must be positive", parameter=f"{where}.{key}")


def validate_chemistry_config(config: Dict[str, Any]) -> bool:
    """
    Validate chemistry configuration structure.

    Checks section presence and types, species definitions, floors, the
    depletion policy, band sampling and absorber/reaction types. Cross
    references (species and absorber names) are resolved by
    :func:`radchem.core.factory.build_network`.

    Parameters
    ----------
    config : dict
        Configuration dictionary

    Returns
    -------
    bool
        True if valid

    Raises
    ------
    ConfigurationError
        If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration must be a mapping")

    if "species" not in config:
        raise ConfigurationError("Configuration must contain 'species' section", "species")

    species = config["species"]
    if not isinstance(species, list) or not species:
        raise ConfigurationError("'species' must be a non-empty list", "species")
    for i, entry in enumerate(species):
        if not isinstance(entry, dict) or "name" not in entry or "molar_mass" not in entry:
            raise ConfigurationError(
                f"Species #{i} needs 'name' and 'molar_mass'", parameter=f"species[{i}]"
            )
        if float(entry["molar_mass"]) <= 0:
            raise ConfigurationError(
                f"Molar mass of {entry['name']} must be positive",
                parameter=f"species.{entry['name']}",
            )
        if "energy" in entry and "energy_ev" in entry:
            raise ConfigurationError(
                f"Species {entry['name']}: give 'energy' or 'energy_ev', not both",
                parameter=f"species.{entry['name']}",
            )

    floors = config.get("floors", {})
    if not isinstance(floors, dict):
        raise ConfigurationError("'floors' must be a mapping", "floors")
    for key in ("density", "pressure", "species", "temperature"):
        if key in floors and float(floors[key]) < 0:
            raise ConfigurationError(f"floors.{key} must be nonnegative", f"floors.{key}")

    policy = config.get("depletion_policy", "clamp")
    if policy not in DEPLETION_POLICIES:
        raise ConfigurationError(
            f"Invalid depletion policy: {policy}. " f"Must be one of: {list(DEPLETION_POLICIES)}",
            "depletion_policy",
        )

    radiation = config.get("radiation", {})
    if not isinstance(radiation, dict):
        raise ConfigurationError("'radiation' must be a mapping", "radiation")

    scaling = radiation.get("scaling", {})
    for key in ("distance", "reference_distance"):
        _check_positive(scaling, key, "radiation.scaling")

    for band in radiation.get("bands", []):
        name = band.get("name")
        where = f"radiation.bands.{name}"
        if name is None:
            raise ConfigurationError("Every band needs a 'name'", "radiation.bands")
        if ("wavelengths" in band) == ("wavelength_range" in band):
            raise ConfigurationError(
                f"Band {name}: give exactly one of 'wavelengths' or 'wavelength_range'", where
            )
        if "wavelength_range" in band:
            wrange = band["wavelength_range"]
            valid = len(wrange) == 3 and int(wrange[2]) >= 1
            if not valid or not 0 < float(wrange[0]) <= float(wrange[1]):
                raise ConfigurationError(
                    f"Band {name}: 'wavelength_range' must be [min, max, count] "
                    "with 0 < min <= max",
                    f"{where}.wavelength_range",
                )
        _check_positive(band, "wavelength_to_meters", where)

        for absorber in band.get("absorbers", []):
            if "name" not in absorber:
                raise ConfigurationError(f"Band {name}: absorber without a name", where)
            kind = absorber.get("type")
            if kind not in ABSORBER_TYPES:
                raise ConfigurationError(
                    f"Invalid absorber type: {kind}. Must be one of: {list(ABSORBER_TYPES)}",
                    f"{where}.absorbers.{absorber['name']}",
                )

    reactions = config.get("reactions", [])
    if not isinstance(reactions, list):
        raise ConfigurationError("'reactions' must be a list", "reactions")
    for reaction in reactions:
        if "name" not in reaction:
            raise ConfigurationError("Every reaction needs a 'name'", "reactions")
        kind = reaction.get("type")
        if kind not in REACTION_TYPES:
            raise ConfigurationError(
                f"Invalid reaction type: {kind}. Must be one of: {list(REACTION_TYPES)}",
                f"reactions.{reaction['name']}",
            )

    return True


@dataclass(frozen=True)
class RadChemConfig:
    """
    Immutable, validated chemistry configuration.

    Attributes
    ----------
    species : tuple of dict
        Species definitions in index order (name, molar_mass, energy/energy_ev)
    density_floor : float
        Gas density below which cells are skipped (kg m^-3)
    pressure_floor : float
        Pressure floor used by the default temperature evaluation (Pa)
    species_floor : float
        Minimum species mass density a reaction may leave behind (kg m^-3)
    temperature_floor : float
        Minimum cell temperature handed to the collisional rates (K)
    depletion_policy : str
        'clamp' or 'abort'
    radiation : dict
        Radiation section (scaling and bands)
    reactions : tuple of dict
        Reaction definitions in application order
    cell : dict
        Optional single-cell run parameters used by the command line
    base_path : Path, optional
        Directory against which relative table paths are resolved
    """

    species: Tuple[Dict[str, Any], ...]
    density_floor: float = 0.0
    pressure_floor: float = 0.0
    species_floor: float = 0.0
    temperature_floor: float = TEMPERATURE_FLOOR
    depletion_policy: str = "clamp"
    radiation: Dict[str, Any] = field(default_factory=dict)
    reactions: Tuple[Dict[str, Any], ...] = ()
    cell: Dict[str, Any] = field(default_factory=dict)
    base_path: Optional[Path] = None

    @classmethod
    def from_dict(
        cls, config: Dict[str, Any], base_path: Optional[Union[str, Path]] = None
    ) -> "RadChemConfig":
        """
        Build from a configuration dictionary.

        Parameters
        ----------
        config : dict
            Raw configuration
        base_path : str or Path, optional
            Directory for relative table paths

        Returns
        -------
        RadChemConfig
            Validated configuration

        Raises
        ------
        ConfigurationError
            If the configuration is invalid
        """
        validate_chemistry_config(config)
        floors = config.get("floors", {})
        return cls(
            species=tuple(dict(s) for s in config["species"]),
            density_floor=float(floors.get("density", 0.0)),
            pressure_floor=float(floors.get("pressure", 0.0)),
            species_floor=float(floors.get("species", 0.0)),
            temperature_floor=float(floors.get("temperature", TEMPERATURE_FLOOR)),
            depletion_policy=config.get("depletion_policy", "clamp"),
            radiation=dict(config.get("radiation", {})),
            reactions=tuple(dict(r) for r in config.get("reactions", [])),
            cell=dict(config.get("cell", {})),
            base_path=Path(base_path) if base_path is not None else None,
        )

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "RadChemConfig":
        """Load, validate and build; table paths resolve against the file's directory."""
        config_path = Path(config_path)
        return cls.from_dict(load_config(config_path), base_path=config_path.parent)

    def resolve_path(self, path: Union[str, Path]) -> Path:
        """Resolve a table path from the configuration."""
        path = Path(path)
        if path.is_absolute() or self.base_path is None:
            return path
        return self.base_path / path

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary suitable for :func:`save_config`."""
        config: Dict[str, Any] = {
            "species": [dict(s) for s in self.species],
            "floors": {
                "density": self.density_floor,
                "pressure": self.pressure_floor,
                "species": self.species_floor,
                "temperature": self.temperature_floor,
            },
            "depletion_policy": self.depletion_policy,
            "radiation": dict(self.radiation),
            "reactions": [dict(r) for r in self.reactions],
        }
        if self.cell:
            config["cell"] = dict(self.cell)
        return config
