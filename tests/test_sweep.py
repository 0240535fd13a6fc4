"""
Sweep, Trace and Launcher Tests
===============================

Checks parameter sweeps, their plots, the derivation trace and the
command-line launcher.
"""

import io
import json
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.rotor_params import (
    RotorParams,
    RotorParamsConfig,
    CalculationDebugger,
    GWS_9X5_COEFFICIENTS,
    get_debugger,
    set_debugger,
    sweep_coefficient,
    sweep_max_rpm,
)
from src.rotor_params.plotting import RotorPlotter

import run_rotor_params


class TestSweeps(unittest.TestCase):
    """Test parameter sweeps over base coefficients."""

    def setUp(self):
        self.params = RotorParams.from_mapping(GWS_9X5_COEFFICIENTS)

    def test_rpm_sweep_shape(self):
        df = sweep_max_rpm(self.params, points=20)

        self.assertEqual(len(df), 20)
        self.assertEqual(
            list(df.columns),
            ["max_rpm", "revolutions_per_second", "max_angular_speed",
             "max_angular_speed_squared", "max_thrust", "max_torque"],
        )

    def test_rpm_sweep_range_from_config(self):
        config = RotorParamsConfig(sweep_points=5, sweep_rpm_fraction=(0.5, 1.0))
        df = sweep_max_rpm(self.params, config=config)

        self.assertEqual(len(df), 5)
        self.assertAlmostEqual(df["max_rpm"].iloc[0], 0.5 * 6396.667)
        self.assertAlmostEqual(df["max_rpm"].iloc[-1], 6396.667)

    def test_rpm_sweep_monotonic(self):
        """Thrust and torque rise strictly along an increasing RPM sweep."""
        df = sweep_max_rpm(self.params)

        self.assertTrue(np.all(np.diff(df["max_thrust"]) > 0))
        self.assertTrue(np.all(np.diff(df["max_torque"]) > 0))

    def test_sweep_matches_direct_recompute(self):
        df = sweep_coefficient(self.params, "max_rpm", [6396.667])
        self.assertEqual(df["max_thrust"].iloc[0], float(self.params.max_thrust))

    def test_sweep_leaves_input_untouched(self):
        before = self.params.as_dict()
        sweep_coefficient(self.params, "propeller_diameter", [0.1, 0.2, 0.3])

        self.assertEqual(self.params.as_dict(), before)
        self.assertFalse(self.params.limits_stale)

    def test_diameter_sweep_through_zero(self):
        """A zero diameter sample gives zero limits instead of failing."""
        df = sweep_coefficient(self.params, "propeller_diameter", [0.0, 0.1, 0.2])

        self.assertEqual(df["max_thrust"].iloc[0], 0.0)
        self.assertEqual(df["max_torque"].iloc[0], 0.0)
        self.assertGreater(df["max_thrust"].iloc[2], df["max_thrust"].iloc[1])

    def test_sweep_keeps_precision(self):
        single = RotorParams.from_mapping(GWS_9X5_COEFFICIENTS, precision="single")
        df = sweep_coefficient(single, "air_density", [1.0, 1.225])

        self.assertAlmostEqual(df["max_thrust"].iloc[1], float(single.max_thrust), places=6)

    def test_unknown_coefficient(self):
        with self.assertRaises(ValueError):
            sweep_coefficient(self.params, "max_thrust", [1.0])


class TestRotorPlotter(unittest.TestCase):
    """Test sweep plotting."""

    def setUp(self):
        params = RotorParams.from_mapping(GWS_9X5_COEFFICIENTS)
        self.df = sweep_max_rpm(params, points=10)
        self.plotter = RotorPlotter()

    def tearDown(self):
        plt.close("all")

    def test_plot_returns_figure(self):
        fig = self.plotter.plot_limits_vs(self.df, "max_rpm")

        self.assertIsInstance(fig, Figure)
        # thrust axis plus twin torque axis
        self.assertEqual(len(fig.axes), 2)

    def test_plot_on_existing_axes(self):
        fig, ax = plt.subplots()
        result = self.plotter.plot_limits_vs(self.df, "max_rpm", ax=ax)
        self.assertIs(result, fig)

    def test_plot_missing_column(self):
        with self.assertRaises(ValueError):
            self.plotter.plot_limits_vs(self.df, "air_density")


class TestCalculationDebugger(unittest.TestCase):
    """Test the derivation trace."""

    def setUp(self):
        self.params = RotorParams.from_mapping(GWS_9X5_COEFFICIENTS)

    def tearDown(self):
        set_debugger(None)

    def test_trace_records_each_formula(self):
        debugger = CalculationDebugger()
        self.params.recompute_limits(trace=debugger)

        self.assertEqual(len(debugger.steps), 5)
        step = debugger.find_step_by_result("max_thrust")
        self.assertEqual(step.result, self.params.max_thrust)
        self.assertEqual(step.result_unit, "N")

    def test_report_contents(self):
        debugger = CalculationDebugger()
        self.params.recompute_limits(trace=debugger)
        report = debugger.get_report()

        self.assertIn("Maximum thrust", report)
        self.assertIn("T = C_T * rho * n^2 * D^4", report)
        self.assertIn("Total Steps: 5", report)

    def test_global_debugger(self):
        self.assertIsNone(get_debugger())

        debugger = CalculationDebugger()
        set_debugger(debugger)
        self.params.recompute_limits()

        self.assertEqual(len(debugger.steps), 5)

    def test_trace_does_not_change_limits(self):
        before = self.params.limits()
        self.params.recompute_limits(trace=CalculationDebugger())
        self.assertEqual(self.params.limits(), before)

    def test_clear(self):
        debugger = CalculationDebugger()
        self.params.recompute_limits(trace=debugger)
        debugger.clear()
        self.assertEqual(debugger.steps, [])
        self.assertIsNone(debugger.find_step_by_result("max_torque"))


class TestLauncher(unittest.TestCase):
    """Test the run_rotor_params command-line entry point."""

    def run_main(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = run_rotor_params.main(argv)
        return code, out.getvalue()

    def test_default_vehicle(self):
        code, output = self.run_main([])

        self.assertEqual(code, 0)
        self.assertIn("max_thrust", output)
        self.assertIn("4.17945", output)

    def test_trace_flag(self):
        code, output = self.run_main(["--trace"])

        self.assertEqual(code, 0)
        self.assertIn("ROTOR LIMIT DERIVATION", output)

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            code, output = self.run_main([str(Path(tmp) / "missing.json")])

        self.assertEqual(code, 1)
        self.assertIn("[ERROR]", output)

    def test_missing_field(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "RotorParams.json"
            mapping = dict(GWS_9X5_COEFFICIENTS)
            del mapping["C_P"]
            path.write_text(json.dumps(mapping))

            code, output = self.run_main([str(path)])

        self.assertEqual(code, 1)
        self.assertIn("C_P", output)

    def test_value_out_of_float_range(self):
        """A JSON integer too large for a float is reported, not raised."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "RotorParams.json"
            path.write_text(json.dumps(dict(GWS_9X5_COEFFICIENTS, max_rpm=10 ** 400)))

            code, output = self.run_main([str(path)])

        self.assertEqual(code, 1)
        self.assertIn("[ERROR]", output)
        self.assertIn("max_rpm", output)

    def test_unset_options_use_config_defaults(self):
        args = run_rotor_params.parse_args([])
        self.assertIsNone(args.vehicle)
        self.assertIsNone(args.precision)

        code, output = self.run_main([])
        self.assertEqual(code, 0)
        self.assertIn(str(RotorParamsConfig().params_path), output)


if __name__ == "__main__":
    unittest.main(verbosity=2)
