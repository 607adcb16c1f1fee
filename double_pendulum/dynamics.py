"""
dynamics.py

Equations of motion and the fixed-step RK4 integrator for the double pendulum.

State vector: y = [alpha, beta, alpha_dot, beta_dot]
Convention: angles are measured from the downward vertical, +y points down.
"""

import numpy as np
from numba import jit

from .state import StateVector, add, scale, scale_down

# error_model="numpy" keeps IEEE semantics (inf/nan) on a vanishing denominator
_JIT = dict(nopython=True, cache=True, error_model="numpy")


@jit(**_JIT)
def alpha_ddot(alpha, beta, alpha_dot, beta_dot, l1, l2, m1, m2, g):
    """Angular acceleration of rod 1 from the Lagrangian of the system."""
    delta = alpha - beta
    s_delta = np.sin(delta)
    c_delta = np.cos(delta)

    num = (
        m2 * g * l1 * np.sin(beta) * c_delta
        - m2 * l1**2 * alpha_dot**2 * s_delta * c_delta
        - (m1 + m2) * g * l1 * np.sin(alpha)
        - m2 * l1 * l2 * beta_dot**2 * s_delta
    )
    den = (m1 + m2) * l1**2 - m2 * l1**2 * c_delta**2
    return num / den


@jit(**_JIT)
def beta_ddot(alpha, beta, alpha_dot, a_ddot, l1, l2, g):
    """Angular acceleration of rod 2. Needs rod 1's acceleration `a_ddot`."""
    delta = alpha - beta
    return (
        l1 * alpha_dot**2 * np.sin(delta)
        - l1 * a_ddot * np.cos(delta)
        - g * np.sin(beta)
    ) / l2


@jit(**_JIT)
def equations(y, l1, l2, m1, m2, g):
    """
    Time derivative of y = [alpha, beta, alpha_dot, beta_dot].

    Returns [alpha_dot, beta_dot, alpha_ddot, beta_ddot]. alpha_ddot is evaluated
    first because beta_ddot depends on it.
    """
    alpha, beta, alpha_dot, beta_dot = y[0], y[1], y[2], y[3]
    a_dd = alpha_ddot(alpha, beta, alpha_dot, beta_dot, l1, l2, m1, m2, g)
    b_dd = beta_ddot(alpha, beta, alpha_dot, a_dd, l1, l2, g)
    return np.array([alpha_dot, beta_dot, a_dd, b_dd])


def xi_dot(state: StateVector) -> StateVector:
    """
    Derivative of `state` under its own physical parameters.

    The result is a StateVector carrying the same parameters so it composes with
    the state algebra.
    """
    return StateVector(equations(state.values, *state.params.as_tuple()), state.params)


def rk4_increment(state: StateVector) -> StateVector:
    """
    Change of state over one step h = state.params.step.

    Classical RK4: the four derivative samples are combined with weights
    (1, 2, 2, 1) / 6.
    """
    h = state.params.step

    k1 = xi_dot(state)
    k2 = xi_dot(add(state, scale(k1, h / 2.0)))
    k3 = xi_dot(add(state, scale(k2, h / 2.0)))
    k4 = xi_dot(add(state, scale(k3, h)))

    weighted = add(add(k1, scale(k2, 2.0)), add(scale(k3, 2.0), k4))
    return scale_down(scale(weighted, h), 6.0)


def step(state: StateVector) -> None:
    """Advance `state` in place by one fixed step. Angles are not wrapped."""
    state.values += rk4_increment(state).values


def positions(state: StateVector):
    """
    Cartesian bob positions (x1, y1, x2, y2), pivot at the origin.

    Bob 2 is chained from bob 1.
    """
    l1, l2 = state.params.l1, state.params.l2
    alpha, beta = state.values[0], state.values[1]

    x1 = l1 * np.sin(alpha)
    y1 = l1 * np.cos(alpha)
    x2 = x1 + l2 * np.sin(beta)
    y2 = y1 + l2 * np.cos(beta)
    return float(x1), float(y1), float(x2), float(y2)


def total_energy(state: StateVector) -> float:
    """Kinetic plus potential energy, zero potential at the pivot height."""
    l1, l2, m1, m2, g = state.params.as_tuple()
    th1, th2, w1, w2 = state.values

    V = -(m1 + m2) * g * l1 * np.cos(th1) - m2 * g * l2 * np.cos(th2)

    v1_sq = (l1 * w1) ** 2
    v2_sq = (l1 * w1) ** 2 + (l2 * w2) ** 2 + 2 * l1 * l2 * w1 * w2 * np.cos(th1 - th2)
    T = 0.5 * m1 * v1_sq + 0.5 * m2 * v2_sq

    return float(T + V)
