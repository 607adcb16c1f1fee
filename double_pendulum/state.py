"""
State vector and the small algebra RK4 is written in.

State: [alpha, beta, alpha_dot, beta_dot]
The derivative returned by dynamics.xi_dot has the same shape and holds rates.
"""

from dataclasses import dataclass, field

import numpy as np

from .errors import NonPositiveParameterError

G = 9.81


@dataclass(frozen=True)
class PhysicalParameters:
    l1: float
    l2: float
    m1: float
    m2: float
    step: float
    g: float = field(default=G, init=False)

    def __post_init__(self):
        for name in ("l1", "l2", "m1", "m2", "step"):
            value = getattr(self, name)
            # also rejects NaN
            if not value > 0.0:
                raise NonPositiveParameterError(name, value, "must be greater than 0")
            object.__setattr__(self, name, float(value))

    def as_tuple(self):
        """(l1, l2, m1, m2, g), the argument order of the compiled kernels."""
        return self.l1, self.l2, self.m1, self.m2, self.g


class StateVector:
    """Four float64 components plus the parameters they were generated under."""

    def __init__(self, values, params: PhysicalParameters):
        self.values = np.array(values, dtype=np.float64)
        if self.values.shape != (4,):
            raise ValueError(f"state must have 4 components, got shape {self.values.shape}")
        self.params = params

    @property
    def alpha(self) -> float:
        return float(self.values[0])

    @property
    def beta(self) -> float:
        return float(self.values[1])

    @property
    def alpha_dot(self) -> float:
        return float(self.values[2])

    @property
    def beta_dot(self) -> float:
        return float(self.values[3])

    def copy(self):
        return StateVector(self.values, self.params)

    def __repr__(self):
        a, b, ad, bd = self.values
        return f"StateVector(alpha={a}, beta={b}, alpha_dot={ad}, beta_dot={bd})"


def add(a: StateVector, b: StateVector) -> StateVector:
    """Elementwise sum. Parameters are taken from `a` and never compared with `b`'s."""
    return StateVector(a.values + b.values, a.params)


def scale(a: StateVector, k: float) -> StateVector:
    return StateVector(a.values * float(k), a.params)


def scale_down(a: StateVector, k: float) -> StateVector:
    # k == 0 gives inf/nan (numpy warns, does not raise)
    return StateVector(a.values / float(k), a.params)
