"""
Planar Machines - headless simulation driver.

Usage:
    python main.py [--seed N] [--seconds S] [--tick-hz HZ] [--log-level LEVEL]

Runs the simulation with the mine selected (so it runs without upkeep) and
prints the resource ledger at the end.
"""
import argparse

from config import GAME_TITLE, LOG_LEVEL, SIM_SEED, SIM_TICK_HZ
from planar.engine import SimulationContext
from planar.entities.resources import RESOURCE_ORDER
from planar.sim.log import configure_logging


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description=GAME_TITLE)
    parser.add_argument("--seed", type=int, default=SIM_SEED, help=f"Simulation seed (default: {SIM_SEED})")
    parser.add_argument(
        "--seconds", type=float, default=60.0, help="Simulated seconds to run (default: 60)"
    )
    parser.add_argument(
        "--tick-hz", type=int, default=SIM_TICK_HZ, help=f"Ticks per simulated second (default: {SIM_TICK_HZ})"
    )
    parser.add_argument("--log-level", type=str, default=LOG_LEVEL, help=f"Log level (default: {LOG_LEVEL})")
    args = parser.parse_args(argv)
    if args.tick_hz <= 0:
        parser.error("--tick-hz must be positive")
    if args.seconds < 0:
        parser.error("--seconds must not be negative")
    return args


def run(seed: int, seconds: float, tick_hz: int) -> SimulationContext:
    """Run `seconds` of simulation at `tick_hz` fixed steps and return the context."""
    sim = SimulationContext(seed=seed)
    sim.select(sim.mine)
    dt = 1.0 / tick_hz
    for _ in range(round(seconds * tick_hz)):
        sim.update(dt)
    return sim


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args.log_level)

    print("=" * 50)
    print(f"  {GAME_TITLE}")
    print("=" * 50)
    print()
    print(f"Seed: {args.seed}  Seconds: {args.seconds}  Tick rate: {args.tick_hz} Hz")
    print()

    sim = run(args.seed, args.seconds, args.tick_hz)

    state = sim.get_game_state()
    print(f"Elapsed: {state['elapsed']:.2f}s")
    print(f"Energy:  {state['energy']:.4f}")
    print()
    print("Resources:")
    for kind in RESOURCE_ORDER:
        if kind in sim.ledger:
            print(f"  {kind.value:<12} {sim.ledger[kind]}")
    return 0


if __name__ == "__main__":
    main()
