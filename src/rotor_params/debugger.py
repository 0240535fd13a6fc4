"""
Calculation Debugger
====================

Records each step of the rotor limit derivation (inputs, formula, result)
so a set of limits can be checked by hand against the coefficients that
produced it.
"""

from dataclasses import dataclass
from typing import List, Any, Optional


@dataclass
class CalculationStep:
    """One derivation step with its inputs, formula, and result."""
    description: str
    formula: str
    variables: dict
    result: Any
    result_name: str
    result_unit: str = ""


class CalculationDebugger:
    """
    Collects derivation steps and formats them as a text report.

    Usage:
        debugger = CalculationDebugger()
        params.recompute_limits(trace=debugger)
        print(debugger.get_report())
    """

    def __init__(self, title: str = "ROTOR LIMIT DERIVATION"):
        self.title = title
        self.steps: List[CalculationStep] = []

    def clear(self):
        """Drop all recorded steps."""
        self.steps = []

    def add_step(
        self,
        description: str,
        formula: str,
        variables: dict,
        result: Any,
        result_name: str,
        result_unit: str = ""
    ):
        """Record a derivation step."""
        self.steps.append(CalculationStep(
            description=description,
            formula=formula,
            variables=dict(variables),
            result=result,
            result_name=result_name,
            result_unit=result_unit,
        ))

    def get_report(self) -> str:
        """
        Format the recorded steps as a numbered text report.

        Returns:
        -------
        str
            Multi-line report, one block per step.
        """
        lines = ["=" * 70, self.title, "=" * 70, ""]

        for number, step in enumerate(self.steps, start=1):
            lines.append(f"[{number}] {step.description}")

            if step.variables:
                inputs = ", ".join(
                    f"{name}={float(value):.6g}" for name, value in step.variables.items()
                )
                lines.append(f"    Inputs: {inputs}")

            lines.append(f"    Formula: {step.formula}")
            unit = f" {step.result_unit}" if step.result_unit else ""
            lines.append(f"    => {step.result_name} = {float(step.result):.6g}{unit}")
            lines.append("")

        lines.append("=" * 70)
        lines.append(f"Total Steps: {len(self.steps)}")
        lines.append("=" * 70)
        return "\n".join(lines)

    def find_step_by_result(self, result_name: str) -> Optional[CalculationStep]:
        """Find the most recent step that produced a given result."""
        for step in reversed(self.steps):
            if step.result_name == result_name:
                return step
        return None


# Global debugger instance, None when tracing is off
_debugger: Optional[CalculationDebugger] = None


def get_debugger() -> Optional[CalculationDebugger]:
    """Get the global debugger instance (None when tracing is off)."""
    return _debugger


def set_debugger(debugger: Optional[CalculationDebugger]):
    """Install or remove the global debugger instance."""
    global _debugger
    _debugger = debugger


def debug_step(
    description: str,
    formula: str,
    variables: dict,
    result: Any,
    result_name: str,
    result_unit: str = "",
    debugger: Optional[CalculationDebugger] = None
):
    """Add a step to the given debugger, or to the global one if active."""
    target = debugger if debugger is not None else _debugger
    if target is not None:
        target.add_step(description, formula, variables, result, result_name, result_unit)
