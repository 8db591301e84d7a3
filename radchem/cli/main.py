"""
Main CLI entry point for radchem.
"""

import argparse
import sys
from pathlib import Path

from radchem.core.errors import RadChemError
from radchem.core.logging_config import get_logger, log_fatal, setup_logging

logger = get_logger("cli.main")


def table_cmd(args):
    """Table inspection command."""
    from radchem.spectral import NaturalCubicSpline, load_table

    table = load_table(args.file, x_column=args.x_column, y_column=args.y_column)
    spline = NaturalCubicSpline(table)

    print(f"# {table.source}")
    print(f"rows:  {len(table)}")
    print(f"range: [{table.lower:.6e}, {table.upper:.6e}]")
    print(f"min y: {table.y.min():.6e}")
    print(f"max y: {table.y.max():.6e}")

    if args.at:
        print("# x, spline(x)")
        hint = -1
        for x in sorted(args.at):
            value, hint = spline.evaluate(x, hint)
            print(f"{x:.6e},{value:.6e}")


def cell_cmd(args):
    """
    Single-cell integration command.

    Runs the configured network in one cell with the absorbed power held
    fixed (up to flux scaling) and reports the history of the composition.
    """
    import numpy as np
    import pandas as pd

    from radchem.core.config import RadChemConfig
    from radchem.core.errors import ConfigurationError
    from radchem.core.factory import build_flux_scaling, build_network
    from radchem.coupling import BlockState, SourceTermCoupler
    from radchem.io.diagnostics import save_diagnostics

    logger.info(f"Loading configuration from {args.config}")
    config = RadChemConfig.from_file(args.config)
    bands, network = build_network(config)
    species = network.species

    cell = config.cell
    steps = args.steps if args.steps is not None else int(cell.get("steps", 10))
    dt = args.dt if args.dt is not None else float(cell.get("dt", 1.0))
    if steps < 1 or dt <= 0:
        raise ConfigurationError("Need at least one step and a positive dt", parameter="cell")

    densities = np.zeros(len(species))
    for name, value in cell.get("densities", {}).items():
        densities[species.index_of(name)] = float(value)

    temperature = cell.get("temperature")
    if temperature is None and "pressure" not in cell:
        raise ConfigurationError("cell needs a temperature or a pressure", parameter="cell")
    pressure = float(cell.get("pressure", 0.0))
    block = BlockState(
        density=np.array([densities.sum()]),
        pressure=np.array([pressure]),
        velocity=np.zeros((3, 1)),
        species=densities[:, None],
        temperature=None if temperature is None else np.array([float(temperature)]),
    )

    absorbers = {a.name for band in bands.values() for a in band}
    absorbed = {}
    for name, power in cell.get("absorbed_power", {}).items():
        if name not in absorbers:
            raise ConfigurationError(
                f"Unknown absorber '{name}' in cell.absorbed_power", parameter="cell"
            )
        absorbed[name] = np.array([power], dtype=float)

    coupler = SourceTermCoupler(
        network,
        flux_scaling=build_flux_scaling(config),
        density_floor=config.density_floor,
        pressure_floor=config.pressure_floor,
        temperature_floor=config.temperature_floor,
    )

    rows = []
    time = float(cell.get("time", 0.0))
    energy = 0.0
    for cycle in range(steps):
        terms = coupler.add_source_terms(block, absorbed, dt, time=time, cycle=cycle)
        block.species += terms.species
        block.density = block.species.sum(axis=0)
        energy += float(terms.energy[0])
        time += dt

        row = {"cycle": cycle, "time": time}
        row.update(coupler.diagnostics.to_dataframe().iloc[0].drop("i0").to_dict())
        row["energy"] = energy
        for s in species:
            row[f"rho:{s.name}"] = float(block.species[s.index, 0])
        rows.append(row)

    history = pd.DataFrame(rows)
    logger.info(f"Integrated {steps} steps of {dt:g} s")

    if args.output:
        save_diagnostics(args.output, history)
        print(f"Diagnostics saved to {Path(args.output)}")
    else:
        columns = ["cycle", "time", "temperature", "energy"] + [
            f"rho:{s.name}" for s in species
        ]
        print(history[columns].to_string(index=False, float_format=lambda v: f"{v:.6e}"))


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="radchem: photoionization and chemistry source terms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Table inspection command
    table_parser = subparsers.add_parser(
        "table", help="Inspect a tabulated cross section or rate file"
    )
    table_parser.add_argument("file", type=str, help="Path to whitespace-separated table")
    table_parser.add_argument(
        "--x-column", type=int, default=0, help="Column of the independent variable"
    )
    table_parser.add_argument(
        "--y-column", type=int, default=1, help="Column of the tabulated value"
    )
    table_parser.add_argument(
        "--at", type=float, nargs="+", default=None, help="Evaluate the spline at these points"
    )
    table_parser.set_defaults(func=table_cmd)

    # Single-cell command
    cell_parser = subparsers.add_parser(
        "cell", help="Integrate the reaction network in a single cell"
    )
    cell_parser.add_argument(
        "config", type=str, help="Path to configuration file (YAML or JSON)"
    )
    cell_parser.add_argument(
        "--steps", type=int, default=None, help="Number of steps (default: cell.steps)"
    )
    cell_parser.add_argument(
        "--dt", type=float, default=None, help="Time step in s (default: cell.dt)"
    )
    cell_parser.add_argument(
        "--output", type=str, default=None, help="Output file path (default: print to stdout)"
    )
    cell_parser.set_defaults(func=cell_cmd)

    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(level=args.log_level)

    # Execute command
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except RadChemError as e:
        log_fatal(logger, e)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error executing command: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
