import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazegen.algo.growing_tree import GrowingTreeMaze
from mazegen.algo.selectors import default_algorithm, recursive_backtracker
from mazegen.core.complexity import MazeStats

def benchmark_shape(shape, selector_name, selector):
    cells = 1
    for extent in shape:
        cells *= extent
    label = 'x'.join(str(e) for e in shape)
    print(f"\n--- Benchmarking {label} ({cells:,} cells) with {selector_name} ---")

    start_time = time.time()
    maze = GrowingTreeMaze(shape, selector, seed=42)
    print(f"Init: {time.time() - start_time:.4f}s")

    # 1. Forward
    gen_start = time.time()
    steps = maze.run_all()
    gen_time = time.time() - gen_start
    print(f"Forward: {gen_time:.4f}s for {steps:,} steps ({steps / gen_time:,.0f} steps/sec)")

    stats = MazeStats.calculate_stats(maze.grid)
    print(f"Dead ends: {stats['dead_end_percent']:.1f}%")

    # 2. Backward, all the way to the seed
    rev_start = time.time()
    undone = maze.rewind()
    rev_time = time.time() - rev_start
    print(f"Backward: {rev_time:.4f}s for {undone:,} steps ({undone / rev_time:,.0f} steps/sec)")

def run_suite():
    shapes = [
        (50, 50),
        (200, 200),
        (20, 20, 20),
        (6, 6, 6, 6),
    ]

    for shape in shapes:
        benchmark_shape(shape, "backtracker", recursive_backtracker())
        benchmark_shape(shape, "default", default_algorithm())

if __name__ == "__main__":
    run_suite()
