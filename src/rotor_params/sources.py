"""
Coefficient Sources
===================

Sources supply the flat name -> value mapping that RotorParams loads its
base coefficients from. Path resolution and document parsing happen here so
the rotor model itself never touches the filesystem.

A source is any object with a ``read()`` method returning a mapping.

Classes:
--------
- MappingSource: Coefficients already held in memory
- JsonFileSource: Coefficients stored in a JSON document

Usage:
------
    from src.rotor_params import RotorParams, JsonFileSource

    params = RotorParams.from_source(JsonFileSource())
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .config import RotorParamsConfig, DEFAULT_CONFIG


class MappingSource:
    """
    Coefficient source backed by an in-memory mapping.

    The mapping is copied on construction, so later changes to the caller's
    dict do not leak into records loaded from this source.
    """

    def __init__(self, mapping: Mapping[str, Any]):
        self._mapping = dict(mapping)

    def read(self) -> Dict[str, Any]:
        return dict(self._mapping)


class JsonFileSource:
    """
    Coefficient source backed by a JSON document.

    The document must be a JSON object whose keys are the coefficient
    names ("C_T", "C_P", "air_density", ...), with rotor_z in centimeters.

    Attributes:
    ----------
    path : Path
        Location of the JSON document.

    Example:
    -------
        # Default vehicle from the configuration
        source = JsonFileSource()

        # Or an explicit file
        source = JsonFileSource("my_rotor.json")
        mapping = source.read()
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        config: Optional[RotorParamsConfig] = None
    ):
        """
        Parameters:
        ----------
        path : str or Path, optional
            JSON document to read. Defaults to config.params_path.

        config : RotorParamsConfig, optional
            Configuration used to resolve the default path.
        """
        self.config = config if config is not None else DEFAULT_CONFIG
        self.path = Path(path) if path is not None else self.config.params_path

    def read(self) -> Dict[str, Any]:
        """
        Parse the JSON document.

        Returns:
        -------
        dict
            Coefficient mapping exactly as stored in the document.

        Raises:
        ------
        FileNotFoundError
            If the document does not exist.

        ValueError
            If the document is not valid JSON or is not a JSON object.
        """
        if not self.path.exists():
            raise FileNotFoundError(
                f"Rotor parameter file not found: {self.path}\n"
                f"Available vehicles: {self.config.list_available_vehicles()}"
            )

        with open(self.path, "r") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(
                f"Rotor parameter file must contain a JSON object, "
                f"got {type(data).__name__}: {self.path}"
            )

        return data
