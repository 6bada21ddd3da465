from dataclasses import dataclass
from enum import Enum
from itertools import accumulate
from typing import Sequence, Tuple

from mazegen.core.rng import ReversibleRandom

DEFAULT_PRIM_CHANCE = 0.5


class SelectionAlgorithm(Enum):
    RANDOM = "random"
    FIRST = "first"
    LAST = "last"
    MIDDLE = "middle"


def _require_probability(value: float, name: str):
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {value}")


def _require_algorithm(value, name: str):
    if not isinstance(value, SelectionAlgorithm):
        raise TypeError(f"{name} must be a SelectionAlgorithm, got {value!r}")


@dataclass(frozen=True)
class SingleSelector:
    algorithm: SelectionAlgorithm

    def __post_init__(self):
        _require_algorithm(self.algorithm, "algorithm")

    def select(self, size: int, random: ReversibleRandom) -> int:
        if self.algorithm is SelectionAlgorithm.RANDOM:
            return random.next_int(size)
        elif self.algorithm is SelectionAlgorithm.FIRST:
            return 0
        elif self.algorithm is SelectionAlgorithm.LAST:
            return size - 1
        elif self.algorithm is SelectionAlgorithm.MIDDLE:
            return size // 2
        raise AssertionError(f"unhandled selection algorithm {self.algorithm!r}")


@dataclass(frozen=True)
class DoubleSelector:
    """Uses 'primary' with probability 'primary_chance', else 'secondary'."""
    primary: SingleSelector
    secondary: SingleSelector
    primary_chance: float

    def __post_init__(self):
        for name in ("primary", "secondary"):
            if not isinstance(getattr(self, name), SingleSelector):
                raise TypeError(f"{name} must be a SingleSelector, got {getattr(self, name)!r}")
        _require_probability(self.primary_chance, "primary_chance")

    @classmethod
    def of(cls, primary: SelectionAlgorithm, secondary: SelectionAlgorithm, primary_chance: float):
        return cls(SingleSelector(primary), SingleSelector(secondary), primary_chance)

    def select(self, size: int, random: ReversibleRandom) -> int:
        if random.next_double() < self.primary_chance:
            return self.primary.select(size, random)
        return self.secondary.select(size, random)


@dataclass(frozen=True)
class MultiSelector:
    """
    Weighted choice between several single policies.

    A draw r in [0, total_weight) lands in bucket i when
    cumulative[i-1] <= r < cumulative[i], so a draw sitting exactly on a
    boundary belongs to the following bucket.
    """
    selectors: Tuple[SingleSelector, ...]
    weights: Tuple[float, ...]

    def __post_init__(self):
        if not self.selectors:
            raise ValueError("selectors must not be empty")
        if not self.weights:
            raise ValueError("weights must not be empty")
        if len(self.selectors) != len(self.weights):
            raise ValueError(
                f"selectors and weights must have the same length, got {len(self.selectors)} and {len(self.weights)}"
            )
        for i, selector in enumerate(self.selectors):
            if not isinstance(selector, SingleSelector):
                raise TypeError(f"selectors[{i}] must be a SingleSelector, got {selector!r}")
        for i, weight in enumerate(self.weights):
            _require_probability(weight, f"weights[{i}]")
        if self.total_weight <= 0:
            raise ValueError("weights must not all be zero")

    @classmethod
    def of(cls, algorithms: Sequence[SelectionAlgorithm], weights: Sequence[float]):
        for i, algorithm in enumerate(algorithms):
            _require_algorithm(algorithm, f"algorithms[{i}]")
        return cls(tuple(SingleSelector(a) for a in algorithms), tuple(float(w) for w in weights))

    @property
    def total_weight(self) -> float:
        return sum(self.weights)

    @property
    def cumulative_weights(self) -> Tuple[float, ...]:
        return tuple(accumulate(self.weights))

    def bucket_for(self, rand: float) -> int:
        for i, cumulative in enumerate(self.cumulative_weights):
            if rand < cumulative:
                return i
        # rand can only reach the total through float rounding
        return len(self.weights) - 1

    def select(self, size: int, random: ReversibleRandom) -> int:
        bucket = self.bucket_for(random.next_double(self.total_weight))
        return self.selectors[bucket].select(size, random)


def recursive_backtracker() -> SingleSelector:
    return SingleSelector(SelectionAlgorithm.LAST)


def prims_algorithm() -> SingleSelector:
    # Same policy as the backtracker; only the Default blend tells them apart
    return SingleSelector(SelectionAlgorithm.LAST)


def default_algorithm(prim_chance: float = DEFAULT_PRIM_CHANCE) -> DoubleSelector:
    return DoubleSelector.of(SelectionAlgorithm.RANDOM, SelectionAlgorithm.LAST, prim_chance)


SELECTOR_CHOICES = ("default", "backtracker", "prim", "random", "first", "last", "middle")


def build_selector(name: str, prim_chance: float = DEFAULT_PRIM_CHANCE):
    """Maps a CLI selector name to a selector instance."""
    if name == "default":
        return default_algorithm(prim_chance)
    elif name == "backtracker":
        return recursive_backtracker()
    elif name == "prim":
        return prims_algorithm()
    elif name in ("random", "first", "last", "middle"):
        return SingleSelector(SelectionAlgorithm(name))
    raise ValueError(f"unknown selector {name!r}, expected one of {', '.join(SELECTOR_CHOICES)}")
