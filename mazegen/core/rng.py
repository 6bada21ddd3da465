import numpy as np

SEED_MASK = (1 << 64) - 1


class ReversibleRandom:
    """
    Pseudorandom source whose cursor can move backwards.

    Draws are grouped into steps. Each step has its own PCG64 substream,
    spawned from the seed with the step number as spawn key, so a step may
    consume any number of draws and stepping back only has to re-arm the
    substream of the undone step. Step 0 is whatever happens before the
    first advance() (e.g. placing the root).
    """

    __slots__ = ('_seed', '_step', '_draws', '_generator')

    def __init__(self, seed: int):
        self._seed = int(seed) & SEED_MASK
        self._step = 0
        self._arm(0)

    def _arm(self, step: int):
        seq = np.random.SeedSequence(entropy=self._seed, spawn_key=(step,))
        self._generator = np.random.Generator(np.random.PCG64(seq))
        self._draws = 0

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def step(self) -> int:
        return self._step

    @property
    def draws(self) -> int:
        return self._draws

    def next_int(self, bound: int) -> int:
        """Uniform int in [0, bound)."""
        if bound < 1:
            raise ValueError(f"bound must be positive, got {bound}")
        self._draws += 1
        return int(self._generator.integers(bound))

    def next_double(self, bound: float = 1.0) -> float:
        """Uniform float in [0, bound)."""
        self._draws += 1
        return float(self._generator.random()) * bound

    def advance(self):
        self._step += 1
        self._arm(self._step)

    def reverse(self):
        """
        Undo the current step. The stream of that step is re-armed, so the
        next draws repeat exactly what it consumed going forward.
        """
        if self._step == 0:
            raise RuntimeError("cannot reverse past the seed position")
        self._arm(self._step)
        self._step -= 1

    def reset(self):
        self._step = 0
        self._arm(0)

    def __repr__(self):
        return f"ReversibleRandom(seed={self._seed}, step={self._step}, draws={self._draws})"
