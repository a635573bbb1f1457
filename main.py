"""
EvoForage – Main Entry Point
============================

Usage examples:
  python main.py                            # defaults from config.py
  python main.py --gens 200 --pop 60        # custom parameters
  python main.py --steps 1000 --foods 80    # shorter generations, more food
  python main.py --config my_config.json    # load a JSON config
  python main.py --seed 42                  # reproducible run
"""

import argparse
import dataclasses
import os
import time

from chromosome import chromosome_length
from config import (SAVE_DIR, CHART_INTERVAL, SimulationConfig,
                    config_from_dict, load_config)
from simulation import initialize
from visualizer import ensure_dirs, save_fitness_chart, append_csv


# ──────────────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────────────

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="EvoForage – evolving foragers on a torus")
    p.add_argument("--config",     default=None,
                   help="JSON file overriding the defaults in config.py")
    p.add_argument("--gens",       type=int,   default=None,
                   help="Number of generations to run (default: max_generation)")
    p.add_argument("--pop",        type=int,   default=None,
                   help="Population size")
    p.add_argument("--foods",      type=int,   default=None,
                   help="Number of foods")
    p.add_argument("--steps",      type=int,   default=None,
                   help="Simulator steps per generation")
    p.add_argument("--mutation",   type=float, default=None,
                   help="Per-gene mutation chance")
    p.add_argument("--mutation_weight", type=float, default=None,
                   help="Largest perturbation a mutation adds to a gene")
    p.add_argument("--seed",       type=int,   default=None,
                   help="Random seed for reproducibility")
    p.add_argument("--outdir",     default=SAVE_DIR,
                   help="Output directory")
    p.add_argument("--chart_interval", type=int, default=CHART_INTERVAL,
                   help="Redraw the fitness chart every N generations")
    args = p.parse_args(argv)
    if args.gens is not None and args.gens < 1:
        p.error("--gens must be >= 1")
    if args.chart_interval < 1:
        p.error("--chart_interval must be >= 1")
    return args


def build_config(args) -> SimulationConfig:
    """Defaults ← JSON config file ← command-line flags."""
    config = load_config(args.config) if args.config else SimulationConfig()
    overrides = {
        "num_animals":       args.pop,
        "num_foods":         args.foods,
        "generation_length": args.steps,
        "mutation_chance":   args.mutation,
        "mutation_weight":   args.mutation_weight,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return config
    return config_from_dict({**dataclasses.asdict(config), **overrides})


def print_stats(gen_idx: int, stats: dict, elapsed: float):
    if gen_idx % 10 == 0 or gen_idx < 5:
        print(
            f"Gen {gen_idx:>5}  |  "
            f"fitness min {stats['min_fitness']:>6.1f}  "
            f"avg {stats['avg_fitness']:>7.2f}  "
            f"max {stats['max_fitness']:>6.1f}  |  "
            f"diversity {stats['diversity']:.3f}  |  "
            f"{elapsed:.2f}s"
        )


# ──────────────────────────────────────────────────────────────────────────────
# Main
# ──────────────────────────────────────────────────────────────────────────────

def run(argv=None):
    """Train for the requested generations; returns the Simulation."""
    args = parse_args(argv)
    config = build_config(args)
    generations = args.gens if args.gens is not None else config.max_generation
    ensure_dirs(args.outdir)

    print("=" * 60)
    print("  EvoForage – evolving foragers on a torus")
    print("=" * 60)
    print(f"  Population : {config.num_animals}")
    print(f"  Foods      : {config.num_foods}")
    print(f"  Generations: {generations}")
    print(f"  Steps/gen  : {config.generation_length}")
    print(f"  Eye        : {config.cells} cells, range {config.fov_range}")
    print(f"  Mutation   : {config.mutation_chance} (±{config.mutation_weight})")
    print(f"  Genes      : {chromosome_length(config)} per animal")
    print(f"  Output dir : {args.outdir}")
    print("=" * 60)

    sim = initialize(config, seed=args.seed)
    print(sim.world.animals[0].brain.summary())
    print("=" * 60)

    for gen_idx in range(generations):
        t0 = time.time()
        sim.fast_forward()
        stats = sim.stats[-1]
        print_stats(gen_idx, stats, time.time() - t0)
        append_csv(stats, args.outdir)

        if gen_idx % args.chart_interval == 0 and gen_idx > 0:
            save_fitness_chart(sim.stats, args.outdir)

    print("\nSaving final fitness chart …")
    chart_path = save_fitness_chart(sim.stats, args.outdir, "fitness_final.png")
    print(f"  → {chart_path}")
    print("\nDone! All outputs saved to:", os.path.abspath(args.outdir))
    return sim


def main(argv=None):
    run(argv)


if __name__ == "__main__":
    main()
