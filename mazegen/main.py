import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'mazegen' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np

from mazegen.algo.selectors import DEFAULT_PRIM_CHANCE, SELECTOR_CHOICES, build_selector

SEED_BITS = 64


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def fresh_seed() -> int:
    """Fresh OS entropy, folded to 64 bits."""
    return np.random.SeedSequence().entropy & ((1 << SEED_BITS) - 1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="mazegen: steppable, reversible growing-tree maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--shape", type=int, nargs="+", default=[20, 20], help="Extent of every dimension")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed (fresh entropy if omitted)")
    gen_parser.add_argument("--selector", type=str, default="default", choices=SELECTOR_CHOICES, help="Cell selection policy")
    gen_parser.add_argument("--prim-chance", type=float, default=DEFAULT_PRIM_CHANCE, help="Chance of a random pick for the default selector (0.0 - 1.0)")
    gen_parser.add_argument("--steps", type=int, default=None, help="Stop after this many forward steps")
    gen_parser.add_argument("--reverse", type=int, default=0, help="Undo this many steps afterwards")
    gen_parser.add_argument("--visual", action="store_true", help="Open the step-by-step viewer")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time full forward and backward runs")
    bench_parser.add_argument("--shape", type=int, nargs="+", default=[100, 100], help="Extent of every dimension")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("mazegen")

    if args.command is None:
        parser.print_help()
        return

    logger.info(f"Running command: {args.command}")

    from mazegen.algo.growing_tree import GrowingTreeMaze
    from mazegen.core.complexity import MazeStats

    if args.command == "generate":
        if not 0.0 <= args.prim_chance <= 1.0:
            parser.error("--prim-chance must be between 0 and 1")
        if args.steps is not None and args.steps < 0:
            parser.error("--steps must not be negative")
        if args.reverse < 0:
            parser.error("--reverse must not be negative")

        seed = args.seed if args.seed is not None else fresh_seed()
        selector = build_selector(args.selector, args.prim_chance)
        shape_label = 'x'.join(str(e) for e in args.shape)
        logger.info(f"Generating {shape_label} maze with {args.selector} selector (seed={seed})...")
        maze = GrowingTreeMaze(args.shape, selector, seed=seed)

        if args.visual:
            logger.info("Visual mode enabled - Opening window...")
            from mazegen.viz.renderer import Renderer
            renderer = Renderer(maze)
            renderer.init_window()
            renderer.run_loop()
        else:
            logger.info("Headless generation...")
            if args.steps is None:
                maze.run_all()
            else:
                for _ in range(args.steps):
                    if maze.is_generation_finished():
                        break
                    maze.advance_generation()
            if args.reverse:
                undone = maze.rewind(args.reverse)
                logger.info(f"Reversed {undone} steps.")

        logger.info(f"State: {maze.get_state()} after {maze.step_count} steps, {maze.remaining_cells} cells remaining")
        if maze.is_generation_finished():
            logger.info(f"Entrance: {tuple(maze.entrance)}  Exit: {tuple(maze.exit)}")
            stats = MazeStats.calculate_stats(maze.grid)
            logger.info(f"Stats: {stats}")
        print("Done.")

    elif args.command == "benchmark":
        shape_label = 'x'.join(str(e) for e in args.shape)
        logger.info(f"Benchmarking {shape_label} maze (seed={args.seed})...")
        maze = GrowingTreeMaze(args.shape, seed=args.seed)

        t0 = time.time()
        steps = maze.run_all()
        forward = time.time() - t0

        t0 = time.time()
        maze.rewind()
        backward = time.time() - t0

        print(f"\n{'DIRECTION':<10} | {'TIME (s)':<10} | {'STEPS':<10} | {'STEPS/s':<10}")
        print("-" * 50)
        for name, duration in (("Forward", forward), ("Backward", backward)):
            rate = steps / duration if duration > 0 else float("inf")
            print(f"{name:<10} | {duration:<10.4f} | {steps:<10} | {rate:<10,.0f}")


if __name__ == "__main__":
    main()
