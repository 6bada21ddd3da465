import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazegen.core.rng import ReversibleRandom
from mazegen.algo.selectors import (
    DoubleSelector, MultiSelector, SelectionAlgorithm, SingleSelector,
    build_selector, default_algorithm, prims_algorithm, recursive_backtracker,
)


class FixedRandom:
    """Hands out the same double every time, counts draws."""
    def __init__(self, value: float):
        self.value = value
        self.draws = 0

    def next_double(self, bound: float = 1.0) -> float:
        self.draws += 1
        return self.value

    def next_int(self, bound: int) -> int:
        self.draws += 1
        return bound - 1


class TestSingleSelector(unittest.TestCase):
    def test_positional(self):
        rng = ReversibleRandom(1)
        self.assertEqual(SingleSelector(SelectionAlgorithm.FIRST).select(5, rng), 0)
        self.assertEqual(SingleSelector(SelectionAlgorithm.LAST).select(5, rng), 4)
        self.assertEqual(SingleSelector(SelectionAlgorithm.MIDDLE).select(5, rng), 2)
        self.assertEqual(SingleSelector(SelectionAlgorithm.MIDDLE).select(4, rng), 2)
        self.assertEqual(SingleSelector(SelectionAlgorithm.MIDDLE).select(1, rng), 0)
        self.assertEqual(rng.draws, 0, "Positional policies must not consume draws")

    def test_random(self):
        rng = ReversibleRandom(1)
        selector = SingleSelector(SelectionAlgorithm.RANDOM)
        picks = [selector.select(6, rng) for _ in range(100)]
        self.assertEqual(rng.draws, 100)
        self.assertTrue(all(0 <= p < 6 for p in picks))
        self.assertGreater(len(set(picks)), 1)

    def test_validation(self):
        with self.assertRaises(TypeError):
            SingleSelector(None)
        with self.assertRaises(TypeError):
            SingleSelector("last")


class TestDoubleSelector(unittest.TestCase):
    def test_certain_branches(self):
        rng = ReversibleRandom(4)
        always_primary = DoubleSelector.of(SelectionAlgorithm.FIRST, SelectionAlgorithm.LAST, 1.0)
        never_primary = DoubleSelector.of(SelectionAlgorithm.FIRST, SelectionAlgorithm.LAST, 0.0)
        for _ in range(20):
            self.assertEqual(always_primary.select(9, rng), 0)
            self.assertEqual(never_primary.select(9, rng), 8)
        # One draw per decision
        self.assertEqual(rng.draws, 40)

    def test_branch_draw_then_policy_draw(self):
        fixed = FixedRandom(0.25)
        selector = DoubleSelector.of(SelectionAlgorithm.RANDOM, SelectionAlgorithm.FIRST, 0.5)
        self.assertEqual(selector.select(7, fixed), 6)
        self.assertEqual(fixed.draws, 2)

        fixed = FixedRandom(0.5)
        self.assertEqual(selector.select(7, fixed), 0)
        self.assertEqual(fixed.draws, 1)

    def test_validation(self):
        with self.assertRaises(ValueError):
            DoubleSelector.of(SelectionAlgorithm.RANDOM, SelectionAlgorithm.LAST, 1.5)
        with self.assertRaises(ValueError):
            DoubleSelector.of(SelectionAlgorithm.RANDOM, SelectionAlgorithm.LAST, -0.1)
        with self.assertRaises(TypeError):
            DoubleSelector.of(None, SelectionAlgorithm.LAST, 0.5)
        with self.assertRaises(TypeError):
            DoubleSelector(SelectionAlgorithm.RANDOM, SelectionAlgorithm.LAST, 0.5)


class TestMultiSelector(unittest.TestCase):
    def setUp(self):
        self.selector = MultiSelector.of([SelectionAlgorithm.FIRST, SelectionAlgorithm.LAST], [0.3, 0.7])

    def test_boundary_draw_enters_next_bucket(self):
        # r lands in bucket i when cumulative[i-1] <= r < cumulative[i]:
        # a draw equal to the first cumulative weight is past bucket 0
        self.assertEqual(self.selector.bucket_for(0.3), 1)
        self.assertEqual(self.selector.bucket_for(0.29999), 0)
        self.assertEqual(self.selector.bucket_for(0.0), 0)
        self.assertEqual(self.selector.bucket_for(0.99), 1)

    def test_overshoot_clamps_to_last_bucket(self):
        self.assertEqual(self.selector.bucket_for(1.0), 1)
        self.assertEqual(self.selector.bucket_for(2.0), 1)

    def test_select_delegates_to_bucket(self):
        # The bucket's policy picks the cell, the bucket number is not an index
        self.assertEqual(self.selector.select(10, FixedRandom(0.3)), 9)
        self.assertEqual(self.selector.select(10, FixedRandom(0.1)), 0)

    def test_draw_scaled_by_total_weight(self):
        selector = MultiSelector.of(
            [SelectionAlgorithm.FIRST, SelectionAlgorithm.MIDDLE, SelectionAlgorithm.LAST], [0.5, 0.5, 0.25]
        )
        self.assertAlmostEqual(selector.total_weight, 1.25)
        self.assertEqual(selector.cumulative_weights, (0.5, 1.0, 1.25))
        self.assertEqual(selector.bucket_for(1.0), 2)
        rng = ReversibleRandom(10)
        for _ in range(50):
            self.assertIn(selector.select(5, rng), (0, 2, 4))

    def test_zero_weight_bucket_never_chosen(self):
        selector = MultiSelector.of([SelectionAlgorithm.FIRST, SelectionAlgorithm.LAST], [0.0, 1.0])
        rng = ReversibleRandom(11)
        for _ in range(50):
            self.assertEqual(selector.select(3, rng), 2)

    def test_validation(self):
        with self.assertRaises(ValueError):
            MultiSelector.of([], [])
        with self.assertRaises(ValueError):
            MultiSelector.of([SelectionAlgorithm.FIRST], [0.5, 0.5])
        with self.assertRaises(ValueError):
            MultiSelector.of([SelectionAlgorithm.FIRST], [1.5])
        with self.assertRaises(ValueError):
            MultiSelector.of([SelectionAlgorithm.FIRST, SelectionAlgorithm.LAST], [0.0, 0.0])
        with self.assertRaises(TypeError):
            MultiSelector.of([SelectionAlgorithm.FIRST, None], [0.5, 0.5])


class TestNamedSelectors(unittest.TestCase):
    def test_backtracker_and_prim_match(self):
        self.assertEqual(recursive_backtracker(), SingleSelector(SelectionAlgorithm.LAST))
        self.assertEqual(prims_algorithm(), recursive_backtracker())

    def test_default(self):
        selector = default_algorithm()
        self.assertEqual(selector.primary.algorithm, SelectionAlgorithm.RANDOM)
        self.assertEqual(selector.secondary.algorithm, SelectionAlgorithm.LAST)
        self.assertEqual(selector.primary_chance, 0.5)
        self.assertEqual(default_algorithm(0.9).primary_chance, 0.9)

    def test_build_selector(self):
        self.assertEqual(build_selector("backtracker"), recursive_backtracker())
        self.assertEqual(build_selector("prim"), prims_algorithm())
        self.assertEqual(build_selector("default", 0.2), default_algorithm(0.2))
        self.assertEqual(build_selector("middle"), SingleSelector(SelectionAlgorithm.MIDDLE))
        with self.assertRaises(ValueError):
            build_selector("kruskal")

if __name__ == '__main__':
    unittest.main()
