"""
Rotor Parameter Module
======================

Static aerodynamic model of a single multirotor rotor.

The module enables:
- Loading rotor coefficients from a mapping or a JSON document
- Deriving maximum thrust, torque and angular speed
- Sweeping one coefficient and plotting the resulting limits

Key Classes:
------------
- RotorParams: Coefficient record with recompute_limits()
- RotorParamsConfig: Paths, precision and sweep defaults
- JsonFileSource / MappingSource: Coefficient sources
- CalculationDebugger: Step-by-step trace of a derivation

Example Usage:
-------------
    from src.rotor_params import RotorParams, JsonFileSource

    params = RotorParams.from_source(JsonFileSource())
    print(f"Max thrust: {params.max_thrust:.3f} N")

Units Convention:
----------------
- Lengths: meters (rotor_z supplied in centimeters)
- RPM: revolutions per minute
- Thrust: Newtons (N)
- Torque: Newton-meters (N.m)
"""

from .config import RotorParamsConfig, DEFAULT_CONFIG, FIELD_KEYS
from .core import (
    RotorParams,
    RotorTurningDirection,
    MissingFieldError,
    GWS_9X5_COEFFICIENTS,
    centimeters_to_meters,
)
from .sources import MappingSource, JsonFileSource
from .debugger import CalculationDebugger, get_debugger, set_debugger
from .sweep import sweep_coefficient, sweep_max_rpm

__all__ = [
    # Core
    "RotorParams",
    "RotorTurningDirection",
    "MissingFieldError",
    "GWS_9X5_COEFFICIENTS",
    "centimeters_to_meters",
    # Config
    "RotorParamsConfig",
    "DEFAULT_CONFIG",
    "FIELD_KEYS",
    # Sources
    "MappingSource",
    "JsonFileSource",
    # Debugger
    "CalculationDebugger",
    "get_debugger",
    "set_debugger",
    # Sweeps
    "sweep_coefficient",
    "sweep_max_rpm",
]
