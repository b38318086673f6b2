"""Headless runner: evolves animals forever (or for N generations) and
exports progress as Prometheus metrics."""
import argparse
import logging
import random
import sys
import time

from prometheus_client import start_http_server

from .config import METRICS_PORT, SimulationConfig
from .metrics import SimulationMetrics
from .simulation import Simulation
from .vision import BlindEye, SectorEye

logger = logging.getLogger(__name__)

EYES = {"blind": BlindEye, "sector": SectorEye}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Evolve neural-network animals without a display.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random source (default: unseeded)")
    parser.add_argument("--generations", type=int, default=0, help="Stop after this many generations (0 = run forever)")
    parser.add_argument("--port", type=int, default=METRICS_PORT, help="Prometheus metrics port (0 = disabled)")
    parser.add_argument("--eye", choices=sorted(EYES), default="blind", help="Vision model fed to the brains")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def run(sim, rng, metrics=None, generations=0, out=None):
    """Step ``sim`` until ``generations`` generations finish; returns their Statistics."""
    out = out or sys.stdout
    history = []
    ticks_this_second = 0
    last_report_time = time.time()
    generation_length = sim.config.generation_length

    while not generations or len(history) < generations:
        stats = sim.step(rng)
        ticks_this_second += 1

        if stats is not None:
            history.append(stats)
            if metrics is not None:
                metrics.record_generation(stats)
            out.write(f"\n--- Generation {sim.generation} complete ---\n")
            out.write(f"    {stats}\n")

        now = time.time()
        if now - last_report_time >= 1.0:
            tps = ticks_this_second
            ticks_this_second = 0
            last_report_time = now
            if metrics is not None:
                metrics.update(sim)
            progress = sim.age / generation_length
            progress_bar = ('#' * int(progress * 20)).ljust(20, '-')
            out.write(f"\rGen {sim.generation + 1} [{progress_bar}] {int(progress * 100)}% | TPS: {tps} | Eaten: {sim.food_eaten}   ")
            out.flush()
    return history


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rng = random.Random(args.seed)
    config = SimulationConfig()
    eye = EYES[args.eye](cells=config.topology[0])
    sim = Simulation.random(rng, config=config, eye=eye)
    metrics = SimulationMetrics(sim)

    if args.port:
        start_http_server(args.port, registry=metrics.registry)
        logger.info("Serving metrics on port %d", args.port)

    print(f"Headless simulation starting ({args.eye} eye)... Press Ctrl+C to stop.")
    try:
        run(sim, rng, metrics=metrics, generations=args.generations)
    except KeyboardInterrupt:
        print("\nSimulation stopped by user.")
    print(f"\nExiting after {sim.generation} generations.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
