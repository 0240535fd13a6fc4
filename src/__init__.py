"""
Drone Rotor Parameters - Main Package
=====================================

Static aerodynamic model of the rotors of a multirotor vehicle.

This package provides:
- Rotor Parameters (rotor_params): coefficient loading, thrust/torque/speed
  limit derivation, parameter sweeps and plots
"""

__version__ = "0.1.0"
