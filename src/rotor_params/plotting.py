"""
Rotor Parameter Plotting Module
===============================

Visualizes parameter sweeps: maximum thrust and maximum torque against the
swept coefficient on twin y axes.

Classes:
--------
- RotorPlotter: Generates sweep plots

Usage:
-----
    from src.rotor_params.plotting import RotorPlotter
    from src.rotor_params.sweep import sweep_max_rpm

    plotter = RotorPlotter()
    fig = plotter.plot_limits_vs(sweep_max_rpm(params), "max_rpm")
    plt.show()
"""

from typing import Optional, Tuple

import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes


# Axis labels for the swept coefficients
COEFFICIENT_LABELS = {
    "thrust_coefficient": "Thrust coefficient C_T [-]",
    "power_coefficient": "Power coefficient C_P [-]",
    "air_density": "Air density [kg/m³]",
    "max_rpm": "Max RPM [1/min]",
    "propeller_diameter": "Propeller diameter [m]",
    "propeller_height": "Propeller height [m]",
    "control_signal_filter_tc": "Filter time constant [s]",
    "rotor_z": "Rotor z offset [m]",
}


class RotorPlotter:
    """
    Rotor limit visualization class.

    Example:
    -------
        plotter = RotorPlotter()
        fig = plotter.plot_limits_vs(df, "propeller_diameter")
        fig.savefig("diameter_sweep.png")
    """

    DEFAULT_FIGURE_SIZE = (10, 6)
    DEFAULT_GRID = True

    THRUST_COLOR = "tab:blue"
    TORQUE_COLOR = "tab:red"

    def plot_limits_vs(
        self,
        df: pd.DataFrame,
        name: str,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """
        Plot max thrust and max torque against a swept coefficient.

        Parameters:
        ----------
        df : pd.DataFrame
            Sweep result with columns name, max_thrust and max_torque.

        name : str
            Swept coefficient column used for the x axis.

        figsize : tuple, optional
            Figure size in inches. Ignored when ax is given.

        ax : Axes, optional
            Existing axes to draw thrust on. Torque goes on a twin axis.

        Returns:
        -------
        Figure
            Figure containing the plot.

        Raises:
        ------
        ValueError
            If a required column is missing from df.
        """
        for column in (name, "max_thrust", "max_torque"):
            if column not in df.columns:
                raise ValueError(f"Sweep result has no '{column}' column")

        if ax is None:
            fig, ax = plt.subplots(figsize=figsize or self.DEFAULT_FIGURE_SIZE)
        else:
            fig = ax.get_figure()

        ax.plot(df[name], df["max_thrust"], color=self.THRUST_COLOR, label="Max thrust")
        ax.set_xlabel(COEFFICIENT_LABELS.get(name, name))
        ax.set_ylabel("Max thrust [N]", color=self.THRUST_COLOR)
        ax.tick_params(axis="y", labelcolor=self.THRUST_COLOR)

        torque_ax = ax.twinx()
        torque_ax.plot(df[name], df["max_torque"], color=self.TORQUE_COLOR,
                       linestyle="--", label="Max torque")
        torque_ax.set_ylabel("Max torque [N·m]", color=self.TORQUE_COLOR)
        torque_ax.tick_params(axis="y", labelcolor=self.TORQUE_COLOR)

        ax.grid(self.DEFAULT_GRID)
        ax.set_title(f"Rotor limits vs {COEFFICIENT_LABELS.get(name, name)}")
        fig.tight_layout()

        return fig
