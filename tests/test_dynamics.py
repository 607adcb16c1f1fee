import numpy as np
import pytest

from double_pendulum import dynamics
from double_pendulum.state import PhysicalParameters, StateVector

# --- Fixtures ---


@pytest.fixture
def params():
    return PhysicalParameters(l1=1.2, l2=0.8, m1=1.5, m2=0.7, step=0.01)


@pytest.fixture
def random_state(params):
    """A generic non-trivial state."""
    return StateVector([0.5, -0.4, 1.1, -0.6], params)


def reference_accelerations(y, l1, l2, m1, m2, g):
    """Solve the Euler-Lagrange equations as a 2x2 linear system."""
    a, b, ad, bd = y
    d = a - b
    M = np.array([
        [(m1 + m2) * l1, m2 * l2 * np.cos(d)],
        [l1 * np.cos(d), l2],
    ])
    rhs = np.array([
        -m2 * l2 * bd**2 * np.sin(d) - (m1 + m2) * g * np.sin(a),
        l1 * ad**2 * np.sin(d) - g * np.sin(b),
    ])
    return np.linalg.solve(M, rhs)


# --- Derivative ---


def test_xi_dot_matches_euler_lagrange(random_state, params):
    d = dynamics.xi_dot(random_state)

    expected = reference_accelerations(random_state.values, *params.as_tuple())

    assert d.alpha == random_state.alpha_dot
    assert d.beta == random_state.beta_dot
    np.testing.assert_allclose(d.values[2:], expected, rtol=1e-12, atol=1e-12)
    assert d.params is params


def test_beta_ddot_consumes_alpha_ddot(random_state, params):
    l1, l2, m1, m2, g = params.as_tuple()
    a, b, ad, bd = random_state.values

    a_dd = dynamics.alpha_ddot(a, b, ad, bd, l1, l2, m1, m2, g)
    b_dd = dynamics.beta_ddot(a, b, ad, a_dd, l1, l2, g)

    np.testing.assert_allclose(dynamics.xi_dot(random_state).values[2:], [a_dd, b_dd])


def test_degenerate_denominator_gives_nan_not_exception():
    # m1 = 0 and alpha == beta make both numerator and denominator vanish
    r = dynamics.alpha_ddot(0.3, 0.3, 0.0, 0.0, 1.0, 1.0, 0.0, 1.0, 9.81)
    assert np.isnan(r)


def test_xi_dot_at_rest_is_zero(params):
    rest = StateVector([0.0, 0.0, 0.0, 0.0], params)
    np.testing.assert_array_equal(dynamics.xi_dot(rest).values, np.zeros(4))


# --- Integrator ---


def test_step_mutates_in_place(random_state):
    values = random_state.values
    before = values.copy()

    dynamics.step(random_state)

    assert random_state.values is values
    assert not np.array_equal(before, values)


def test_rk4_increment_is_fourth_order(params):
    """Halving h shrinks the one-step error against a fine reference by ~2^5."""

    def one_step_error(h):
        p = PhysicalParameters(l1=params.l1, l2=params.l2, m1=params.m1, m2=params.m2, step=h)
        coarse = StateVector([0.5, -0.4, 1.1, -0.6], p)
        dynamics.step(coarse)

        fine_p = PhysicalParameters(l1=p.l1, l2=p.l2, m1=p.m1, m2=p.m2, step=h / 64)
        fine = StateVector([0.5, -0.4, 1.1, -0.6], fine_p)
        for _ in range(64):
            dynamics.step(fine)
        return np.linalg.norm(coarse.values - fine.values)

    ratio = one_step_error(0.04) / one_step_error(0.02)
    assert 12 < ratio < 80


def test_angles_are_not_wrapped(params):
    # fast spin carries alpha past pi
    s = StateVector([3.0, 3.0, 20.0, 20.0], params)
    for _ in range(20):
        dynamics.step(s)
    assert s.alpha > np.pi


# --- Diagnostics ---


def test_positions_on_rod_circles(random_state, params):
    x1, y1, x2, y2 = dynamics.positions(random_state)

    assert x1**2 + y1**2 == pytest.approx(params.l1**2)
    assert (x2 - x1) ** 2 + (y2 - y1) ** 2 == pytest.approx(params.l2**2)


def test_positions_hang_down_at_rest(params):
    rest = StateVector([0.0, 0.0, 0.0, 0.0], params)
    assert dynamics.positions(rest) == pytest.approx((0.0, params.l1, 0.0, params.l1 + params.l2))


def test_total_energy_at_rest_is_potential_only(params):
    rest = StateVector([0.0, 0.0, 0.0, 0.0], params)
    l1, l2, m1, m2, g = params.as_tuple()
    assert dynamics.total_energy(rest) == pytest.approx(-(m1 + m2) * g * l1 - m2 * g * l2)
