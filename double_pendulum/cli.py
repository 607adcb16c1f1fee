import argparse
import logging
import sys
from dataclasses import fields

import numpy as np

from .config import SimulationConfig
from .driver import generate_initial_states, run, sweep, write_initial_states
from .errors import ConstructionError, InitialStateFormatError

logger = logging.getLogger("double_pendulum")


def _add_config_args(p):
    defaults = SimulationConfig()
    for f in fields(SimulationConfig):
        if f.name == "steps":
            continue
        flag = "--" + f.name.replace("_", "-")
        p.add_argument(flag, dest=f.name, type=float, default=getattr(defaults, f.name))
    p.add_argument("--steps", type=int, default=defaults.steps,
                   help="Number of steps; 0 or less runs until interrupted (run only)")


def _config_from_args(args):
    values = {f.name: getattr(args, f.name) for f in fields(SimulationConfig)}
    if values["steps"] is not None and values["steps"] <= 0:
        values["steps"] = None
    return SimulationConfig(**values)


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="double-pendulum",
                                description="Fixed-step RK4 double pendulum simulator")
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument("-q", "--quiet", action="store_true")
    sub = p.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", help="Print t alpha beta alpha_dot beta_dot per step")
    _add_config_args(p_run)

    p_sweep = sub.add_parser("sweep", help="Integrate every initial state in a file")
    p_sweep.add_argument("path", help="Initial-state file, '-' for stdin")
    _add_config_args(p_sweep)
    p_sweep.add_argument("--processes", type=int, default=None)
    p_sweep.add_argument("--no-progress", action="store_true")

    p_gen = sub.add_parser("initial-states", help="Write random initial states")
    p_gen.add_argument("path", help="Output file, '-' for stdout")
    p_gen.add_argument("-n", "--samples", type=int, default=50000)
    p_gen.add_argument("--seed", type=int, default=None)
    p_gen.add_argument("--randomize-params", action="store_true")

    return p.parse_args(argv)


def _run(args):
    try:
        run(_config_from_args(args))
    except KeyboardInterrupt:
        logger.info("Interrupted")


def _sweep(args):
    config = _config_from_args(args)
    if config.steps is None:
        logger.error("sweep needs --steps greater than 0")
        return 2

    if args.path == "-":
        lines = sys.stdin.readlines()
    else:
        with open(args.path, "r") as f:
            lines = f.readlines()

    final = sweep(lines, config, processes=args.processes, progress=not args.no_progress)
    for row in final:
        print(*row.tolist())
    return 0


def _initial_states(args):
    if args.samples < 1:
        logger.error("--samples must be >= 1, got %d", args.samples)
        return 2
    states = generate_initial_states(args.samples, np.random.default_rng(args.seed),
                                     randomize_params=args.randomize_params)
    if args.path == "-":
        write_initial_states(states, sys.stdout)
    else:
        with open(args.path, "w", encoding="utf-8") as f:
            write_initial_states(states, f)
    logger.info("Wrote %d initial states", len(states))
    return 0


def main(argv=None):
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, stream=sys.stderr,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    commands = {"run": _run, "sweep": _sweep, "initial-states": _initial_states}
    try:
        return commands[args.command](args) or 0
    except (ConstructionError, InitialStateFormatError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
