"""Run configuration and the initial-state line format."""

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .errors import InitialStateFormatError
from .pendulum import DoublePendulum


@dataclass
class SimulationConfig:
    alpha: float = np.pi / 2
    beta: float = np.pi / 2
    alpha_dot: float = 0.0
    beta_dot: float = 0.0
    l1: float = 1.0
    l2: float = 1.0
    m1: float = 1.0
    m2: float = 1.0
    step: float = 0.001
    # None runs until interrupted
    steps: Optional[int] = 10000

    def build(self) -> DoublePendulum:
        return DoublePendulum(
            self.alpha, self.beta, self.alpha_dot, self.beta_dot,
            self.l1, self.l2, self.m1, self.m2, self.step,
        )


def parse_initial_state(line: str, lineno: int, base: SimulationConfig) -> Optional[SimulationConfig]:
    """
    Parse one line of an initial-state file on top of `base`.

    Fields are comma or whitespace separated: either
    `alpha beta alpha_dot beta_dot` or the same followed by `l1 l2 m1 m2`.
    Blank lines give None.
    """
    if not line.strip():
        return None

    parts = line.replace(",", " ").split()
    if len(parts) not in (4, 8):
        raise InitialStateFormatError(lineno, line, f"expected 4 or 8 fields, got {len(parts)}")
    try:
        values = list(map(float, parts))
    except ValueError as exc:
        raise InitialStateFormatError(lineno, line, str(exc)) from exc

    names = ["alpha", "beta", "alpha_dot", "beta_dot", "l1", "l2", "m1", "m2"]
    return replace(base, **dict(zip(names, values)))


def format_initial_state(values) -> str:
    return ",".join(repr(float(v)) for v in values)
