"""
Factory patterns for creating absorbers, reactions and reaction networks.

The registries map configuration type names to classes; :func:`build_network`
turns a :class:`RadChemConfig` into radiation bands and an initialized
reaction network.
"""

from typing import Any, Dict, List, Mapping, Tuple, Type, Union

import numpy as np

from radchem.chemistry.collisions import ChargeExchange, HydrogenRecombination, LymanAlphaCooling
from radchem.chemistry.network import ReactionNetwork
from radchem.chemistry.photoionization import Photoionization
from radchem.chemistry.rates import ArrheniusRate, ConstantRate, PowerLawRate, RateLaw
from radchem.chemistry.reaction import ReactionTemplate, TabulatedReaction
from radchem.chemistry.species import Species, SpeciesSet
from radchem.core.abc import Absorber, Reaction
from radchem.core.config import RadChemConfig
from radchem.core.constants import BARN, EV_TO_J, MEGABARN
from radchem.core.errors import ConfigurationError
from radchem.core.logging_config import get_logger
from radchem.core.units import energy_factor
from radchem.radiation.absorbers import (
    GenericAbsorber,
    HeliumIonization,
    HydrogenIonization,
    IonizingAbsorber,
    TabulatedIonization,
)
from radchem.radiation.band import RadiationBand
from radchem.radiation.scaling import FluxScaling, erf_ramp

logger = get_logger("core.factory")

_CROSS_SECTION_UNITS = {"m2": 1.0, "cm2": 1.0e-4, "barn": BARN, "megabarn": MEGABARN}


class AbsorberFactory:
    """Factory for creating absorber instances."""

    _absorbers: Dict[str, Type[Absorber]] = {}

    @classmethod
    def register(cls, name: str, absorber_class: Type[Absorber]) -> None:
        """
        Register an absorber class.

        Parameters
        ----------
        name : str
            Absorber type name used in configuration files
        absorber_class : Type[Absorber]
            Absorber class
        """
        cls._absorbers[name] = absorber_class
        logger.debug(f"Registered absorber: {name}")

    @classmethod
    def create(cls, name: str, /, **kwargs) -> Absorber:
        """
        Create an absorber instance.

        Parameters
        ----------
        name : str
            Absorber type name
        **kwargs
            Arguments for the absorber constructor

        Returns
        -------
        Absorber
            Absorber instance, already attached to its band

        Raises
        ------
        ConfigurationError
            If absorber type is not registered
        """
        if name not in cls._absorbers:
            available = ", ".join(cls._absorbers.keys())
            raise ConfigurationError(f"Unknown absorber: {name}. Available: {available}")

        absorber_class = cls._absorbers[name]
        return absorber_class(**kwargs)

    @classmethod
    def list_absorbers(cls) -> list:
        """List available absorber types."""
        return list(cls._absorbers.keys())


class ReactionFactory:
    """Factory for creating reaction instances."""

    _reactions: Dict[str, Type[Reaction]] = {}

    @classmethod
    def register(cls, name: str, reaction_class: Type[Reaction]) -> None:
        """
        Register a reaction class.

        Parameters
        ----------
        name : str
            Reaction type name used in configuration files
        reaction_class : Type[Reaction]
            Reaction class
        """
        cls._reactions[name] = reaction_class
        logger.debug(f"Registered reaction: {name}")

    @classmethod
    def create(cls, name: str, /, **kwargs) -> Reaction:
        """
        Create a reaction instance.

        Raises
        ------
        ConfigurationError
            If reaction type is not registered
        """
        if name not in cls._reactions:
            available = ", ".join(cls._reactions.keys())
            raise ConfigurationError(f"Unknown reaction: {name}. Available: {available}")

        reaction_class = cls._reactions[name]
        return reaction_class(**kwargs)

    @classmethod
    def list_reactions(cls) -> list:
        """List available reaction types."""
        return list(cls._reactions.keys())


def build_species(config: RadChemConfig) -> SpeciesSet:
    """
    Species set from the ``species`` section, indexed in listed order.

    Reference energies are given in J (``energy``) or eV (``energy_ev``).
    """
    species = []
    for index, entry in enumerate(config.species):
        energy = entry.get("energy", float(entry.get("energy_ev", 0.0)) * EV_TO_J)
        species.append(Species(index, entry["name"], float(entry["molar_mass"]), float(energy)))
    return SpeciesSet(species)


def build_rate_law(spec: Union[float, Mapping[str, Any]], where: str) -> RateLaw:
    """
    Rate law from a number (constant) or a mapping with a ``law`` key.

    Supported laws: ``constant``, ``power`` (coefficient, exponent, t_ref) and
    ``arrhenius`` (coefficient, exponent, t_activation, t_ref).
    """
    if isinstance(spec, (int, float)):
        return ConstantRate(float(spec))

    law = spec.get("law", "constant")
    try:
        if law == "constant":
            return ConstantRate(float(spec["coefficient"]))
        if law == "power":
            return PowerLawRate(
                float(spec["coefficient"]),
                float(spec.get("exponent", 0.0)),
                float(spec.get("t_ref", 1.0)),
            )
        if law == "arrhenius":
            return ArrheniusRate(
                float(spec["coefficient"]),
                float(spec.get("exponent", 0.0)),
                float(spec.get("t_activation", 0.0)),
                float(spec.get("t_ref", 1.0)),
            )
    except KeyError as e:
        raise ConfigurationError(f"Rate law at {where} is missing {e}", parameter=where) from e
    raise ConfigurationError(
        f"Invalid rate law: {law}. Must be one of: ['constant', 'power', 'arrhenius']",
        parameter=where,
    )


def build_flux_scaling(config: RadChemConfig) -> FluxScaling:
    """Flux scaling from ``radiation.scaling``; ``ramp: erf`` enables the time ramp."""
    scaling = config.radiation.get("scaling", {})
    ramp = scaling.get("ramp")
    if ramp not in (None, "erf"):
        raise ConfigurationError(
            f"Invalid flux ramp: {ramp}. Must be 'erf' or omitted",
            parameter="radiation.scaling.ramp",
        )
    return FluxScaling(
        scaling=float(scaling.get("factor", 1.0)),
        distance=float(scaling.get("distance", 1.0)),
        reference_distance=float(scaling.get("reference_distance", 1.0)),
        ramp=erf_ramp if ramp == "erf" else None,
    )


def _band_wavelengths(band: Mapping[str, Any]) -> np.ndarray:
    if "wavelengths" in band:
        return np.asarray(band["wavelengths"], dtype=float)
    lower, upper, count = band["wavelength_range"]
    return np.linspace(float(lower), float(upper), int(count))


def _cross_section_unit(value: Union[float, str], where: str) -> float:
    if isinstance(value, str):
        try:
            return _CROSS_SECTION_UNITS[value.lower()]
        except KeyError:
            raise ConfigurationError(
                f"Unknown cross-section unit: {value}. "
                f"Available: {list(_CROSS_SECTION_UNITS)}",
                parameter=where,
            ) from None
    return float(value)


def _required(spec: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in spec:
        raise ConfigurationError(f"Absorber {spec['name']} needs '{key}'", parameter=where)
    return spec[key]


def _absorber_kwargs(
    spec: Mapping[str, Any], config: RadChemConfig, species: SpeciesSet, band: RadiationBand
) -> Dict[str, Any]:
    kind = spec["type"]
    where = f"radiation.bands.{band.name}.absorbers.{spec['name']}"
    kwargs: Dict[str, Any] = {"name": spec["name"], "band": band}

    if kind == "generic":
        kwargs["cross_section"] = float(_required(spec, "cross_section", where))
        if "species" in spec:
            kwargs["species_index"] = species.index_of(spec["species"])
        return kwargs

    kwargs.update(
        species=species,
        neutral=_required(spec, "neutral", where),
        ion=_required(spec, "ion", where),
    )
    if kind == "hydrogen":
        if "a0" in spec:
            kwargs["a0"] = float(spec["a0"])
    elif kind in ("helium", "tabulated"):
        if "file" not in spec:
            raise ConfigurationError(f"Absorber {spec['name']} needs a 'file'", parameter=where)
        kwargs["table_file"] = config.resolve_path(spec["file"])
        if kind == "tabulated":
            try:
                kwargs["energy_unit"] = energy_factor(spec.get("energy_unit", "eV"))
            except ValueError as e:
                raise ConfigurationError(str(e), parameter=f"{where}.energy_unit") from e
            kwargs["cross_section_unit"] = _cross_section_unit(
                spec.get("cross_section_unit", "megabarn"), f"{where}.cross_section_unit"
            )
    return kwargs


def build_bands(config: RadChemConfig, species: SpeciesSet) -> Dict[str, RadiationBand]:
    """
    Radiation bands with their absorbers, in configuration order.

    Returns
    -------
    Dict[str, RadiationBand]
        Bands keyed by name
    """
    bands: Dict[str, RadiationBand] = {}
    for spec in config.radiation.get("bands", []):
        if spec["name"] in bands:
            raise ConfigurationError(
                f"Duplicate band name: {spec['name']}", parameter="radiation.bands"
            )
        band = RadiationBand(
            spec["name"],
            _band_wavelengths(spec),
            float(spec.get("wavelength_to_meters", 1.0e-9)),
        )
        for absorber in spec.get("absorbers", []):
            AbsorberFactory.create(
                absorber["type"], **_absorber_kwargs(absorber, config, species, band)
            )
        bands[band.name] = band
        logger.info(
            f"Built band {band.name}: {band.nspec} samples, {len(band.absorbers)} absorbers"
        )
    return bands


def _stoichiometry(
    spec: Mapping[str, Any], species: SpeciesSet
) -> Tuple[List[int], List[float]]:
    where = f"reactions.{spec['name']}"
    if "stoichiometry" not in spec:
        raise ConfigurationError(f"Reaction {spec['name']} needs 'stoichiometry'", where)
    items = spec["stoichiometry"].items()
    return [species.index_of(s) for s, _ in items], [float(nu) for _, nu in items]


def _reaction_kwargs(
    spec: Mapping[str, Any],
    config: RadChemConfig,
    species: SpeciesSet,
    absorbers: Mapping[str, Absorber],
) -> Dict[str, Any]:
    kind = spec["type"]
    where = f"reactions.{spec['name']}"
    kwargs: Dict[str, Any] = {"name": spec["name"]}

    def index(key: str) -> int:
        if key not in spec:
            raise ConfigurationError(f"Reaction {spec['name']} needs '{key}'", where)
        return species.index_of(spec[key])

    if kind == "photoionization":
        absorber = absorbers.get(spec.get("absorber"))
        if not isinstance(absorber, IonizingAbsorber):
            raise ConfigurationError(
                f"Reaction {spec['name']}: '{spec.get('absorber')}' is not an ionizing absorber",
                parameter=f"{where}.absorber",
            )
        kwargs.update(absorber=absorber, electron=index("electron"))
    elif kind == "hydrogen_recombination":
        kwargs.update(neutral=index("neutral"), ion=index("ion"), electron=index("electron"))
    elif kind == "lyman_alpha":
        kwargs.update(neutral=index("neutral"), electron=index("electron"))
    elif kind == "charge_exchange":
        kwargs.update(
            donor=index("donor"),
            acceptor_ion=index("acceptor_ion"),
            donor_ion=index("donor_ion"),
            acceptor=index("acceptor"),
            alpha=build_rate_law(spec.get("alpha", 0.0), f"{where}.alpha"),
        )
    else:
        kwargs["species"], kwargs["stoichiometry"] = _stoichiometry(spec, species)
        if "colliders" in spec:
            kwargs["colliders"] = [species.index_of(c) for c in spec["colliders"]]
        kwargs["kind"] = spec.get("kind")
        if kind == "template":
            if "alpha" in spec:
                kwargs["alpha"] = build_rate_law(spec["alpha"], f"{where}.alpha")
            if "beta" in spec:
                kwargs["beta"] = build_rate_law(spec["beta"], f"{where}.beta")
        else:
            if "file" not in spec:
                raise ConfigurationError(f"Reaction {spec['name']} needs a 'file'", where)
            kwargs.update(
                data_file=config.resolve_path(spec["file"]),
                alpha_column=int(spec.get("alpha_column", 1)),
                beta_column=spec.get("beta_column"),
                alpha_scale=float(spec.get("alpha_scale", 1.0)),
                beta_scale=float(spec.get("beta_scale", 1.0)),
            )
    return kwargs


def build_network(
    config: RadChemConfig,
) -> Tuple[Dict[str, RadiationBand], ReactionNetwork]:
    """
    Build radiation bands and an initialized reaction network.

    Parameters
    ----------
    config : RadChemConfig
        Validated configuration

    Returns
    -------
    bands : Dict[str, RadiationBand]
        Bands keyed by name, each owning its absorbers
    network : ReactionNetwork
        Network with reactions in configuration order, initialized

    Raises
    ------
    ConfigurationError
        On unknown species or absorber references, unreadable tables or
        invalid parameters
    """
    species = build_species(config)
    bands = build_bands(config, species)

    absorbers: Dict[str, Absorber] = {}
    for band in bands.values():
        for absorber in band:
            if absorber.name in absorbers:
                raise ConfigurationError(
                    f"Absorber name {absorber.name} used in more than one band",
                    parameter="radiation.bands",
                )
            absorbers[absorber.name] = absorber

    network = ReactionNetwork(
        species,
        species_floor=config.species_floor,
        depletion_policy=config.depletion_policy,
    )
    for spec in config.reactions:
        network.add(
            ReactionFactory.create(
                spec["type"], **_reaction_kwargs(spec, config, species, absorbers)
            )
        )
    network.initialize()
    return bands, network


# Register default implementations
AbsorberFactory.register("generic", GenericAbsorber)
AbsorberFactory.register("hydrogen", HydrogenIonization)
AbsorberFactory.register("helium", HeliumIonization)
AbsorberFactory.register("tabulated", TabulatedIonization)
ReactionFactory.register("photoionization", Photoionization)
ReactionFactory.register("hydrogen_recombination", HydrogenRecombination)
ReactionFactory.register("lyman_alpha", LymanAlphaCooling)
ReactionFactory.register("charge_exchange", ChargeExchange)
ReactionFactory.register("template", ReactionTemplate)
ReactionFactory.register("tabulated", TabulatedReaction)
