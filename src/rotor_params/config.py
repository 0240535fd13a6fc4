"""
Rotor Parameter Configuration Module
====================================

This module contains configuration settings for the rotor parameter model.
Data paths, numeric precision, source field names and sweep defaults are
centralized here so the rest of the package stays free of hardcoded values.

Configuration Classes:
---------------------
- RotorParamsConfig: Main configuration class with all settings

Constants:
---------
- FIELD_KEYS: Mapping from record attribute to coefficient source key
- CENTIMETERS_PER_METER: Divisor applied to rotor_z at load time
- SECONDS_PER_MINUTE: RPM to revolutions-per-second divisor

Usage:
------
    from src.rotor_params.config import RotorParamsConfig

    # Use default configuration
    config = RotorParamsConfig()

    # Or point at another vehicle in single precision
    config = RotorParamsConfig(vehicle_name="second", precision="single")
"""

from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np


# =============================================================================
# Constants
# =============================================================================

# Record attribute -> key in the coefficient source mapping.
# Order matters: it is the order fields are read and reported.
FIELD_KEYS: Dict[str, str] = {
    "thrust_coefficient": "C_T",
    "power_coefficient": "C_P",
    "air_density": "air_density",
    "max_rpm": "max_rpm",
    "propeller_diameter": "propeller_diameter",
    "propeller_height": "propeller_height",
    "control_signal_filter_tc": "control_signal_filter_tc",
    "rotor_z": "rotor_z",
}

# rotor_z arrives in centimeters
CENTIMETERS_PER_METER = 100.0

SECONDS_PER_MINUTE = 60.0

# Supported real-number precisions for the limit derivation
REAL_TYPES = {
    "single": np.float32,
    "double": np.float64,
}


@dataclass
class RotorParamsConfig:
    """
    Configuration settings for the rotor parameter model.

    Attributes:
    ----------
    data_root : Path
        Root directory holding the per-vehicle coefficient documents.
        Default: "data" folder relative to project root.

    multirotor_dir : str
        Subdirectory of data_root with one folder per vehicle.

    vehicle_name : str
        Vehicle folder whose coefficient document is loaded by default.

    params_filename : str
        Filename of the JSON coefficient document inside a vehicle folder.

    precision : str
        Real-number precision used by the limit derivation,
        "double" (numpy.float64) or "single" (numpy.float32).

    default_verbose : bool
        When True, loaders print warnings for suspicious coefficients.

    sweep_points : int
        Default number of samples in a parameter sweep.

    sweep_rpm_fraction : tuple
        (low, high) multiples of max_rpm spanned by an RPM sweep.

    Example:
    -------
        config = RotorParamsConfig()
        print(config.params_path)  # .../data/multirotors/first/RotorParams.json
    """

    # -------------------------------------------------------------------------
    # Path Configuration
    # -------------------------------------------------------------------------

    data_root: Optional[Path] = None
    multirotor_dir: str = "multirotors"
    vehicle_name: str = "first"
    params_filename: str = "RotorParams.json"

    # -------------------------------------------------------------------------
    # Runtime Configuration
    # -------------------------------------------------------------------------

    precision: str = "double"
    default_verbose: bool = False

    # Parameter sweep defaults
    sweep_points: int = 50
    sweep_rpm_fraction: Tuple[float, float] = (0.25, 1.25)

    def __post_init__(self):
        """
        Resolve the data root and check the precision setting.

        Raises:
        ------
        ValueError
            If precision is not one of REAL_TYPES.
        """
        # File location: src/rotor_params/config.py -> PROJECT_ROOT/
        self._project_root = Path(__file__).parent.parent.parent

        if self.data_root is None:
            self.data_root = self._project_root / "data"
        elif isinstance(self.data_root, str):
            self.data_root = Path(self.data_root)

        if self.precision not in REAL_TYPES:
            raise ValueError(
                f"Invalid precision: {self.precision}. "
                f"Must be one of {sorted(REAL_TYPES)}."
            )

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        return self._project_root

    @property
    def real_type(self) -> type:
        """numpy scalar type matching the configured precision."""
        return REAL_TYPES[self.precision]

    @property
    def multirotor_path(self) -> Path:
        """Directory containing one folder per vehicle."""
        return self.data_root / self.multirotor_dir

    @property
    def params_path(self) -> Path:
        """
        Get the full path to the configured vehicle's coefficient document.

        Returns:
        -------
        Path
            <data_root>/<multirotor_dir>/<vehicle_name>/<params_filename>
        """
        return self.multirotor_path / self.vehicle_name / self.params_filename

    def validate_paths(self) -> dict:
        """
        Validate that the configured paths exist.

        Returns:
        -------
        dict
            Dictionary with path names as keys and existence status as values.
        """
        return {
            "data_root": self.data_root.exists(),
            "multirotor_dir": self.multirotor_path.exists(),
            "params_file": self.params_path.exists(),
        }

    def list_available_vehicles(self) -> list:
        """
        List vehicle folders that contain a coefficient document.

        Returns:
        -------
        list
            Sorted list of vehicle names.
        """
        if not self.multirotor_path.exists():
            return []

        return sorted(
            folder.name
            for folder in self.multirotor_path.iterdir()
            if (folder / self.params_filename).is_file()
        )


# -------------------------------------------------------------------------
# Module-level default configuration instance
# -------------------------------------------------------------------------

DEFAULT_CONFIG = RotorParamsConfig()
