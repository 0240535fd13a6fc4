#!/usr/bin/env python3
"""
Rotor Parameter Launcher
========================

Loads a rotor coefficient document, derives the rotor's operating limits
and prints them. Optionally sweeps max RPM and shows the resulting plot.

Usage:
------
    # From the project root directory, default vehicle:
    python run_rotor_params.py

    # Explicit document, with the derivation trace and an RPM sweep plot:
    python run_rotor_params.py path/to/RotorParams.json --trace --sweep

    # Single precision arithmetic:
    python run_rotor_params.py --precision single

Requirements:
------------
- Python 3.8+
- numpy
- pandas
- matplotlib (only for --sweep)
"""

import argparse
import sys
from pathlib import Path

# -------------------------------------------------------------------------
# Path Configuration
# -------------------------------------------------------------------------

project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))

from src.rotor_params import (
    RotorParams,
    RotorParamsConfig,
    JsonFileSource,
    MissingFieldError,
    CalculationDebugger,
    FIELD_KEYS,
)
from src.rotor_params.sweep import sweep_max_rpm


# -------------------------------------------------------------------------
# Main Entry Point
# -------------------------------------------------------------------------

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Derive rotor operating limits.")
    parser.add_argument("path", nargs="?", default=None,
                        help="JSON coefficient document (default: configured vehicle)")
    parser.add_argument("--vehicle", default=None,
                        help="Vehicle folder under data/multirotors (default: from config)")
    parser.add_argument("--precision", choices=("double", "single"), default=None)
    parser.add_argument("--trace", action="store_true",
                        help="Print every derivation step")
    parser.add_argument("--sweep", action="store_true",
                        help="Plot max thrust and torque over a max RPM sweep")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def print_report(params: RotorParams):
    """Print base coefficients and derived limits."""
    values = params.as_dict()

    print("Base coefficients:")
    for attr in FIELD_KEYS:
        print(f"  {attr:<28} {values[attr]:.6g}")

    print()
    print("Derived limits:")
    print(f"  {'revolutions_per_second':<28} {values['revolutions_per_second']:.6g} rev/s")
    print(f"  {'max_angular_speed':<28} {values['max_angular_speed']:.6g} rad/s")
    print(f"  {'max_angular_speed_squared':<28} {values['max_angular_speed_squared']:.6g} rad²/s²")
    print(f"  {'max_thrust':<28} {values['max_thrust']:.6g} N")
    print(f"  {'max_torque':<28} {values['max_torque']:.6g} N·m")


def main(argv=None):
    """
    Load coefficients, derive limits and print them.

    Returns the process exit code.
    """
    args = parse_args(argv)

    print("=" * 60)
    print("  Drone Rotor Parameters - Limit Derivation")
    print("=" * 60)
    print()

    try:
        # Unset options keep the RotorParamsConfig defaults
        overrides = {"vehicle_name": args.vehicle, "precision": args.precision}
        config = RotorParamsConfig(
            default_verbose=args.verbose,
            **{key: value for key, value in overrides.items() if value is not None},
        )
        source = JsonFileSource(args.path, config=config)
        print(f"Loading: {source.path}")
        print()

        params = RotorParams.from_source(source, config=config)

    except FileNotFoundError as e:
        print(f"\n[ERROR] Coefficient file not found: {e}")
        return 1

    except MissingFieldError as e:
        print(f"\n[ERROR] {e}")
        return 1

    except (ValueError, TypeError) as e:
        print(f"\n[ERROR] Invalid coefficient file: {e}")
        return 1

    print_report(params)

    if args.trace:
        debugger = CalculationDebugger()
        params.recompute_limits(trace=debugger)
        print()
        print(debugger.get_report())

    if args.sweep:
        import matplotlib.pyplot as plt
        from src.rotor_params.plotting import RotorPlotter

        df = sweep_max_rpm(params, config=config)
        RotorPlotter().plot_limits_vs(df, "max_rpm")
        plt.show()

    return 0


if __name__ == "__main__":
    sys.exit(main())
