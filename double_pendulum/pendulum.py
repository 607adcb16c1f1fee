import numpy as np

from . import dynamics
from .errors import AngleOutOfRangeError
from .state import PhysicalParameters, StateVector


def _check_angle(name, value):
    # also rejects NaN
    if not -np.pi <= value <= np.pi:
        raise AngleOutOfRangeError(name, value, "must be between -pi and pi")
    return float(value)


class DoublePendulum:
    """
    A double pendulum advanced by fixed-step RK4.

    Angles are measured from the downward vertical and are only range-checked here;
    stepping may carry them outside [-pi, pi].

    Raises:
        ConstructionError: an angle is outside [-pi, pi], or a length, mass or the
            step is not strictly positive. Checked in argument order.
    """

    def __init__(self, alpha, beta, alpha_dot, beta_dot, l1, l2, m1, m2, step):
        alpha = _check_angle("alpha", alpha)
        beta = _check_angle("beta", beta)
        self.params = PhysicalParameters(l1=l1, l2=l2, m1=m1, m2=m2, step=step)
        self.state = StateVector([alpha, beta, alpha_dot, beta_dot], self.params)

    def step(self):
        dynamics.step(self.state)

    def alpha(self):
        return self.state.alpha

    def beta(self):
        return self.state.beta

    def alpha_dot(self):
        return self.state.alpha_dot

    def beta_dot(self):
        return self.state.beta_dot

    def positions(self):
        return dynamics.positions(self.state)

    def x1(self):
        return self.positions()[0]

    def y1(self):
        return self.positions()[1]

    def x2(self):
        return self.positions()[2]

    def y2(self):
        return self.positions()[3]

    def energy(self):
        return dynamics.total_energy(self.state)

    def __repr__(self):
        p = self.params
        return (
            f"DoublePendulum({self.state!r}, l1={p.l1}, l2={p.l2}, "
            f"m1={p.m1}, m2={p.m2}, step={p.step})"
        )
