"""
Rotor Parameter Core Module
===========================

This module holds the aerodynamic coefficients of a single rotor and derives
the operating limits the flight-dynamics loop uses to clamp and scale
per-rotor control inputs.

Classes:
--------
- RotorParams: Coefficient record with the limit derivation
- RotorTurningDirection: Spin direction of a rotor (NED convention)
- MissingFieldError: Raised when a coefficient mapping lacks a field

Theory Background:
-----------------
Static thrust and torque of a propeller follow from its dimensionless
coefficients (ref: http://physics.stackexchange.com/a/32013/14061):

    T = C_T * rho * n^2 * D^4              [N]
    Q = C_P * rho * n^2 * D^5 / (2*pi)     [N.m]

Where:
- rho = air density (kg/m^3)
- n   = revolutions per second
- D   = propeller diameter (m)
- C_T, C_P = thrust and power coefficients, published for many propellers
  in the UIUC propeller database (http://m-selig.ae.illinois.edu/props/propDB.html)

Evaluating at the rated maximum RPM gives the rotor's maximum thrust and
torque.

Units Convention:
----------------
- Lengths: meters (rotor_z is supplied in centimeters and converted on load)
- RPM: revolutions per minute
- Angular speed: radians per second
- Thrust: Newtons (N)
- Torque: Newton-meters (N.m)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional

import numpy as np

from .config import (
    FIELD_KEYS,
    CENTIMETERS_PER_METER,
    SECONDS_PER_MINUTE,
    REAL_TYPES,
    RotorParamsConfig,
    DEFAULT_CONFIG,
)
from .debugger import CalculationDebugger, debug_step


# Coefficients that must be positive for the limits to mean anything
_POSITIVE_FIELDS = (
    "thrust_coefficient",
    "power_coefficient",
    "air_density",
    "max_rpm",
    "propeller_diameter",
)

# GWS 9x5 propeller, C_T and C_P measured by UIUC at 6396.667 RPM.
# Expected limits: max_thrust ~4.179446 N, max_torque ~0.055562 N.m
GWS_9X5_COEFFICIENTS: Dict[str, float] = {
    "C_T": 0.109919,
    "C_P": 0.040164,
    "air_density": 1.225,
    "max_rpm": 6396.667,
    "propeller_diameter": 0.2286,
    "propeller_height": 0.01,
    "control_signal_filter_tc": 0.005,
    "rotor_z": 0.0,
}


class MissingFieldError(KeyError):
    """A coefficient mapping lacks one or more required fields."""

    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(
            f"Missing rotor parameter field(s): {', '.join(self.missing)}"
        )

    def __str__(self) -> str:
        return self.args[0]


class RotorTurningDirection(Enum):
    """Rotor spin direction. In NED, positive torque turns clockwise."""
    CCW = -1
    CW = 1


def centimeters_to_meters(value_cm: float) -> float:
    """Convert a source-unit length (cm) to the model's unit (m)."""
    return value_cm / CENTIMETERS_PER_METER


@dataclass
class RotorParams:
    """
    Aerodynamic coefficients of one rotor and its derived operating limits.

    Base coefficients are plain attributes. Derived limits are read-only
    properties written only by recompute_limits().

    Attributes:
    ----------
    thrust_coefficient : float
        Propeller thrust coefficient C_T (dimensionless)

    power_coefficient : float
        Propeller power/torque coefficient C_P (dimensionless)

    air_density : float
        Ambient air density (kg/m^3)

    max_rpm : float
        Maximum rotor speed (revolutions per minute)

    propeller_diameter : float
        Propeller diameter (m)

    propeller_height : float
        Height of the cylinder swept by the spinning propeller (m)

    control_signal_filter_tc : float
        Time constant of the control-signal low pass filter (s)

    rotor_z : float
        Offset of the rotor along the body z axis (m)

    precision : str
        "double" or "single", the real type used by the derivation

    Example:
    -------
        params = RotorParams.from_mapping(GWS_9X5_COEFFICIENTS)
        print(f"Max thrust: {params.max_thrust:.3f} N")
    """

    thrust_coefficient: float = 0.0
    power_coefficient: float = 0.0
    air_density: float = 0.0
    max_rpm: float = 0.0
    propeller_diameter: float = 0.0
    propeller_height: float = 0.0
    control_signal_filter_tc: float = 0.0
    rotor_z: float = 0.0
    precision: str = field(default="double", repr=False, compare=False)

    # Derived limits
    _revolutions_per_second: float = field(default=0.0, init=False, repr=False, compare=False)
    _max_angular_speed: float = field(default=0.0, init=False, repr=False, compare=False)
    _max_angular_speed_squared: float = field(default=0.0, init=False, repr=False, compare=False)
    _max_thrust: float = field(default=0.0, init=False, repr=False, compare=False)
    _max_torque: float = field(default=0.0, init=False, repr=False, compare=False)

    # Base coefficients the current limits were computed from
    _limits_inputs: Optional[tuple] = field(default=None, init=False, repr=False, compare=False)

    def __setattr__(self, name: str, value: Any):
        # precision is checked on every assignment, __init__ included
        if name == "precision" and value not in REAL_TYPES:
            raise ValueError(
                f"Invalid precision: {value}. "
                f"Must be one of {sorted(REAL_TYPES)}."
            )
        super().__setattr__(name, value)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        precision: str = "double",
        verbose: bool = False
    ) -> "RotorParams":
        """
        Build a record from a coefficient mapping and compute its limits.

        Parameters:
        ----------
        mapping : Mapping
            Source mapping keyed by FIELD_KEYS values (rotor_z in cm).

        precision : str, optional
            "double" (default) or "single".

        verbose : bool, optional
            Print a warning for non-positive coefficients.

        Raises:
        ------
        MissingFieldError
            If a required field is absent from the mapping.
        """
        params = cls(precision=precision)
        params.load_base_coefficients(mapping, verbose=verbose)
        params.recompute_limits()
        return params

    @classmethod
    def from_source(cls, source, config: Optional[RotorParamsConfig] = None) -> "RotorParams":
        """
        Build a record from a coefficient source (any object with read()).

        The configuration supplies the precision and verbosity.
        """
        config = config if config is not None else DEFAULT_CONFIG
        return cls.from_mapping(
            source.read(),
            precision=config.precision,
            verbose=config.default_verbose,
        )

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_base_coefficients(self, mapping: Mapping[str, Any], verbose: bool = False):
        """
        Copy the eight base coefficients out of a source mapping.

        Every field is copied verbatim except rotor_z, which the source gives
        in centimeters and is converted to meters here. Nothing is assigned
        unless every field is present and numeric, so on error the record
        keeps its previous values. Derived limits are not recomputed.

        Parameters:
        ----------
        mapping : Mapping
            Source mapping keyed by FIELD_KEYS values ("C_T", "C_P", ...).
            Extra keys (e.g. "max_thrust" in older documents) are ignored.

        verbose : bool, optional
            If True, print a warning for non-positive coefficients.
            Such values are accepted; they give degenerate limits.

        Raises:
        ------
        MissingFieldError
            If any required field is absent.

        ValueError, TypeError
            If a field cannot be converted to float, or is too large for one.
        """
        missing = [key for key in FIELD_KEYS.values() if key not in mapping]
        if missing:
            raise MissingFieldError(missing)

        values = {}
        for attr, key in FIELD_KEYS.items():
            try:
                values[attr] = float(mapping[key])
            except OverflowError as e:
                raise ValueError(f"{key} is out of floating-point range") from e
        values["rotor_z"] = centimeters_to_meters(values["rotor_z"])

        if verbose:
            for attr in _POSITIVE_FIELDS:
                if values[attr] <= 0:
                    print(
                        f"Warning: {FIELD_KEYS[attr]} = {values[attr]} is not positive; "
                        "derived limits will be degenerate."
                    )

        for attr, value in values.items():
            setattr(self, attr, value)

    # -------------------------------------------------------------------------
    # Limit Derivation
    # -------------------------------------------------------------------------

    def recompute_limits(self, trace: Optional[CalculationDebugger] = None):
        """
        Recompute every derived limit from the current base coefficients.

        Arithmetic runs in the record's precision, with pi and the RPM
        divisor converted to that type as well. Integer powers are expanded
        into multiplications. Any numeric input gives a result; zero or
        negative coefficients give zero or negative limits.

        Parameters:
        ----------
        trace : CalculationDebugger, optional
            Receives one step per formula. Falls back to the global debugger.
        """
        real = REAL_TYPES[self.precision]

        # Out-of-range values saturate to inf in the cast as well
        with np.errstate(over="ignore", invalid="ignore"):
            c_t = real(self.thrust_coefficient)
            c_p = real(self.power_coefficient)
            rho = real(self.air_density)
            rpm = real(self.max_rpm)
            diameter = real(self.propeller_diameter)
            two_pi = real(2) * real(np.pi)

            n = rpm / real(SECONDS_PER_MINUTE)
            omega = n * two_pi
            omega_squared = omega * omega

            n_squared = n * n
            d_squared = diameter * diameter
            d_fourth = d_squared * d_squared
            d_fifth = d_fourth * diameter

            thrust = c_t * rho * n_squared * d_fourth
            torque = c_p * rho * n_squared * d_fifth / two_pi

        self._revolutions_per_second = n
        self._max_angular_speed = omega
        self._max_angular_speed_squared = omega_squared
        self._max_thrust = thrust
        self._max_torque = torque
        self._limits_inputs = self._base_values()

        debug_step("Revolutions per second", "n = max_rpm / 60",
                   {"max_rpm": rpm}, n, "n", "rev/s", debugger=trace)
        debug_step("Maximum angular speed", "w = n * 2*pi",
                   {"n": n}, omega, "max_angular_speed", "rad/s", debugger=trace)
        debug_step("Maximum angular speed squared", "w^2 = w * w",
                   {"w": omega}, omega_squared, "max_angular_speed_squared", "rad^2/s^2",
                   debugger=trace)
        debug_step("Maximum thrust", "T = C_T * rho * n^2 * D^4",
                   {"C_T": c_t, "rho": rho, "n": n, "D": diameter},
                   thrust, "max_thrust", "N", debugger=trace)
        debug_step("Maximum torque", "Q = C_P * rho * n^2 * D^5 / (2*pi)",
                   {"C_P": c_p, "rho": rho, "n": n, "D": diameter},
                   torque, "max_torque", "N.m", debugger=trace)

    def _base_values(self) -> tuple:
        return tuple(getattr(self, attr) for attr in FIELD_KEYS) + (self.precision,)

    @property
    def limits_stale(self) -> bool:
        """True when base coefficients changed since the last recomputation."""
        if self._limits_inputs is None:
            return True
        # NaN never equals itself, so NaN pairs count as unchanged
        return not all(
            old == new or (old != old and new != new)
            for old, new in zip(self._limits_inputs, self._base_values())
        )

    # -------------------------------------------------------------------------
    # Derived Limits (read-only)
    # -------------------------------------------------------------------------

    @property
    def revolutions_per_second(self) -> float:
        """Maximum revolutions per second."""
        return self._revolutions_per_second

    @property
    def max_angular_speed(self) -> float:
        """Maximum angular speed (rad/s)."""
        return self._max_angular_speed

    @property
    def max_angular_speed_squared(self) -> float:
        return self._max_angular_speed_squared

    @property
    def max_thrust(self) -> float:
        """Thrust at max_rpm (N)."""
        return self._max_thrust

    @property
    def max_torque(self) -> float:
        """Reaction torque at max_rpm (N.m)."""
        return self._max_torque

    def reaction_torque(self, direction: RotorTurningDirection) -> float:
        """Maximum torque signed by the rotor's turning direction."""
        return direction.value * self._max_torque

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def as_dict(self) -> Dict[str, float]:
        """
        Base coefficients and derived limits as plain floats.

        Returns:
        -------
        dict
            Attribute name -> value, base coefficients first.
        """
        result = {attr: float(getattr(self, attr)) for attr in FIELD_KEYS}
        result.update(self.limits())
        return result

    def limits(self) -> Dict[str, float]:
        """Derived limits as plain floats."""
        return {
            "revolutions_per_second": float(self._revolutions_per_second),
            "max_angular_speed": float(self._max_angular_speed),
            "max_angular_speed_squared": float(self._max_angular_speed_squared),
            "max_thrust": float(self._max_thrust),
            "max_torque": float(self._max_torque),
        }
