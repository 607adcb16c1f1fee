"""
Drivers around the integrator: a console loop, a batch sweep over initial states,
and a generator for initial-state files.
"""

import itertools
import logging
import multiprocessing
import sys

import numpy as np
from tqdm import tqdm

from .config import SimulationConfig, format_initial_state, parse_initial_state
from .errors import ConstructionError

logger = logging.getLogger(__name__)


def run(config: SimulationConfig, out=None):
    """
    Print `t alpha beta alpha_dot beta_dot` once per step, with t = index * step.

    Each line is written before the state is advanced, so the first line is the
    initial state at t = 0. Runs for `config.steps` lines, or forever if None.
    """
    out = out or sys.stdout
    dp = config.build()
    counter = itertools.count() if config.steps is None else range(config.steps)

    for i in counter:
        print(i * config.step, dp.alpha(), dp.beta(), dp.alpha_dot(), dp.beta_dot(), file=out)
        dp.step()
    return dp


def simulate_single_trajectory(config: SimulationConfig):
    """Final [alpha, beta, alpha_dot, beta_dot, energy change] after config.steps."""
    dp = config.build()
    e0 = dp.energy()

    for _ in range(config.steps):
        dp.step()

    return np.array([dp.alpha(), dp.beta(), dp.alpha_dot(), dp.beta_dot(), dp.energy() - e0])


def load_configs(lines, base: SimulationConfig):
    """Parse and validate every line up front so a bad line fails before any work."""
    configs = []
    for lineno, line in enumerate(lines, start=1):
        config = parse_initial_state(line, lineno, base)
        if config is None:
            continue
        try:
            config.build()
        except ConstructionError as exc:
            logger.error("line %d: invalid initial state: %s", lineno, exc)
            raise
        configs.append(config)
    return configs


def sweep(lines, base: SimulationConfig, processes=None, progress=True):
    """
    Integrate every initial state in `lines` for `base.steps` steps.

    Lines without lengths and masses take them from `base`. Returns an array of
    shape (n, 5); see simulate_single_trajectory for the columns.
    """
    if base.steps is None:
        raise ValueError("sweep needs a finite number of steps")

    configs = load_configs(lines, base)
    if not configs:
        logger.warning("no initial states to simulate")
        return np.empty((0, 5))

    if processes is None:
        processes = max(1, multiprocessing.cpu_count() - 1)
    logger.info("Using %d core", processes)

    results = []
    if processes == 1:
        for res in tqdm(map(simulate_single_trajectory, configs), total=len(configs),
                        desc="Simulating", disable=not progress):
            results.append(res)
    else:
        with multiprocessing.Pool(processes=processes) as pool:
            for res in tqdm(pool.imap(simulate_single_trajectory, configs), total=len(configs),
                            desc="Simulating", disable=not progress):
                results.append(res)

    final = np.array(results, dtype=np.float64)
    logger.info("Done... %s", final.shape)
    return final


def generate_initial_states(n_samples, rng=None, randomize_params=False):
    """
    Random initial states, one row per sample.

    Angles are uniform in [-pi, pi] and angular velocities in [-10, 10]. With
    `randomize_params`, rows gain l1, l2 in [0.2, 3.0] and m1, m2 in [0.5, 6.5].
    """
    rng = rng if rng is not None else np.random.default_rng()

    theta = rng.uniform(-np.pi, np.pi, (n_samples, 2))
    omega = rng.uniform(-10, 10, (n_samples, 2))
    columns = [theta, omega]

    if randomize_params:
        columns.append(rng.uniform(0.2, 3.0, (n_samples, 2)))
        columns.append(rng.uniform(0.5, 6.5, (n_samples, 2)))

    return np.hstack(columns)


def write_initial_states(states, out):
    for row in states:
        out.write(format_initial_state(row) + "\n")
