"""
Double pendulum simulated with fixed-step fourth-order Runge-Kutta.
"""

from .dynamics import (
    alpha_ddot,
    beta_ddot,
    equations,
    positions,
    rk4_increment,
    step,
    total_energy,
    xi_dot,
)
from .errors import (
    AngleOutOfRangeError,
    ConstructionError,
    InitialStateFormatError,
    NonPositiveParameterError,
)
from .pendulum import DoublePendulum
from .state import G, PhysicalParameters, StateVector, add, scale, scale_down

__all__ = [
    # State algebra
    "G",
    "PhysicalParameters",
    "StateVector",
    "add",
    "scale",
    "scale_down",
    # Dynamics
    "alpha_ddot",
    "beta_ddot",
    "equations",
    "xi_dot",
    "rk4_increment",
    "step",
    "positions",
    "total_energy",
    # Simulation
    "DoublePendulum",
    # Errors
    "ConstructionError",
    "AngleOutOfRangeError",
    "NonPositiveParameterError",
    "InitialStateFormatError",
]
