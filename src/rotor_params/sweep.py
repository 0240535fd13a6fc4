"""
Parameter Sweep Module
======================

Re-derives rotor limits while one base coefficient is varied and collects
the results in a pandas DataFrame, one row per sample.

Functions:
---------
- sweep_coefficient(): Sweep any base coefficient over given values
- sweep_max_rpm(): Sweep max_rpm around its current value

Usage:
------
    from src.rotor_params import RotorParams, GWS_9X5_COEFFICIENTS
    from src.rotor_params.sweep import sweep_max_rpm

    params = RotorParams.from_mapping(GWS_9X5_COEFFICIENTS)
    df = sweep_max_rpm(params)
    print(df[["max_rpm", "max_thrust"]].head())
"""

from dataclasses import replace
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from .config import FIELD_KEYS, RotorParamsConfig, DEFAULT_CONFIG
from .core import RotorParams


def sweep_coefficient(
    params: RotorParams,
    name: str,
    values: Iterable[float]
) -> pd.DataFrame:
    """
    Recompute limits for each value of one base coefficient.

    The input record is left untouched; every sample is computed on a copy.

    Parameters:
    ----------
    params : RotorParams
        Record providing the coefficients held fixed.

    name : str
        Attribute name of the swept coefficient (e.g. "max_rpm").

    values : iterable of float
        Values to assign, in model units (rotor_z in meters).

    Returns:
    -------
    pd.DataFrame
        Columns: the swept coefficient, then every derived limit.

    Raises:
    ------
    ValueError
        If name is not a base coefficient.
    """
    if name not in FIELD_KEYS:
        raise ValueError(
            f"Unknown coefficient: {name}. "
            f"Must be one of {list(FIELD_KEYS)}."
        )

    rows = []
    for value in values:
        sample = replace(params, **{name: float(value)})
        sample.recompute_limits()

        row = {name: float(value)}
        row.update(sample.limits())
        rows.append(row)

    return pd.DataFrame(rows, columns=[name] + list(params.limits()))


def sweep_max_rpm(
    params: RotorParams,
    points: Optional[int] = None,
    config: Optional[RotorParamsConfig] = None
) -> pd.DataFrame:
    """
    Sweep max_rpm over config.sweep_rpm_fraction times its current value.

    Parameters:
    ----------
    params : RotorParams
        Record whose max_rpm sets the sweep range.

    points : int, optional
        Number of samples. Defaults to config.sweep_points.

    config : RotorParamsConfig, optional
        Supplies the sweep defaults.
    """
    config = config if config is not None else DEFAULT_CONFIG
    points = points if points is not None else config.sweep_points

    low, high = config.sweep_rpm_fraction
    rpm_values = np.linspace(low * params.max_rpm, high * params.max_rpm, points)

    return sweep_coefficient(params, "max_rpm", rpm_values)
