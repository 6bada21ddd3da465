import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazegen.core.rng import ReversibleRandom


def draw_ints(rng, count=5, bound=1_000_000):
    return [rng.next_int(bound) for _ in range(count)]


class TestReversibleRandom(unittest.TestCase):
    def test_determinism(self):
        a = ReversibleRandom(12345)
        b = ReversibleRandom(12345)
        self.assertEqual(draw_ints(a), draw_ints(b))
        a.advance()
        b.advance()
        self.assertEqual(draw_ints(a), draw_ints(b))

        self.assertNotEqual(draw_ints(ReversibleRandom(1)), draw_ints(ReversibleRandom(2)))

    def test_steps_use_separate_streams(self):
        rng = ReversibleRandom(7)
        first = draw_ints(rng)
        rng.advance()
        self.assertNotEqual(draw_ints(rng), first)

    def test_reverse_replays_undone_step(self):
        rng = ReversibleRandom(99)
        rng.advance()
        step1 = draw_ints(rng, 3)
        rng.advance()
        # Steps may consume different numbers of draws
        step2 = draw_ints(rng, 7)

        rng.reverse()
        self.assertEqual(rng.step, 1)
        self.assertEqual(draw_ints(rng, 7), step2)

        rng.reverse()
        self.assertEqual(rng.step, 0)
        self.assertEqual(draw_ints(rng, 3), step1)

        # Going forward again re-arms the same streams
        rng.advance()
        self.assertEqual(draw_ints(rng, 3), step1)
        rng.advance()
        self.assertEqual(draw_ints(rng, 7), step2)

    def test_partial_draws_do_not_shift_next_step(self):
        rng = ReversibleRandom(5)
        rng.advance()
        rng.advance()
        expected = draw_ints(rng)

        rng = ReversibleRandom(5)
        rng.advance()
        draw_ints(rng, 11)
        rng.advance()
        self.assertEqual(draw_ints(rng), expected)

    def test_reset(self):
        rng = ReversibleRandom(3)
        construction = draw_ints(rng)
        for _ in range(4):
            rng.advance()
        rng.reset()
        self.assertEqual(rng.step, 0)
        self.assertEqual(rng.draws, 0)
        self.assertEqual(draw_ints(rng), construction)

    def test_reverse_at_seed_position(self):
        with self.assertRaises(RuntimeError):
            ReversibleRandom(1).reverse()

    def test_bounds(self):
        rng = ReversibleRandom(2024)
        for _ in range(200):
            self.assertTrue(0 <= rng.next_int(3) < 3)
            self.assertTrue(0.0 <= rng.next_double() < 1.0)
            self.assertTrue(0.0 <= rng.next_double(5.0) < 5.0)
        self.assertEqual(rng.next_int(1), 0)
        with self.assertRaises(ValueError):
            rng.next_int(0)

    def test_draw_counter(self):
        rng = ReversibleRandom(8)
        rng.next_int(10)
        rng.next_double()
        self.assertEqual(rng.draws, 2)
        rng.advance()
        self.assertEqual(rng.draws, 0)

    def test_seed_is_64_bit(self):
        self.assertEqual(ReversibleRandom(-1).seed, (1 << 64) - 1)
        self.assertEqual(ReversibleRandom((1 << 64) + 5).seed, 5)

if __name__ == '__main__':
    unittest.main()
