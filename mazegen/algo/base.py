from abc import ABC, abstractmethod
from typing import Iterator, Optional
from mazegen.core.grid import Grid


class ReversibleGenerator(ABC):
    def __init__(self, grid: Grid, seed: int):
        self.grid = grid
        self.seed = seed
        # Steps currently applied to the grid
        self.step_count = 0

    @abstractmethod
    def advance_generation(self):
        """Executes exactly one forward step. No-op once finished."""

    @abstractmethod
    def reverse_generation(self):
        """Undoes exactly one step. No-op before the first step."""

    @abstractmethod
    def reset_generation(self):
        """Returns to the state right after construction."""

    @abstractmethod
    def is_generation_finished(self) -> bool:
        pass

    @abstractmethod
    def get_state(self) -> str:
        """Human readable label of the current phase."""

    def run(self) -> Iterator[str]:
        """
        Steps forward until finished, yielding the state label after each step.
        The actual grid modifications happen in-place on self.grid.
        """
        while not self.is_generation_finished():
            self.advance_generation()
            yield self.get_state()

    def run_all(self) -> int:
        """Helper to run the generator to completion. Returns steps taken."""
        taken = 0
        for _ in self.run():
            taken += 1
        return taken

    def rewind(self, steps: Optional[int] = None) -> int:
        """Reverses 'steps' steps, or all the way back. Returns steps undone."""
        undone = 0
        while self.step_count > 0 and (steps is None or undone < steps):
            self.reverse_generation()
            undone += 1
        return undone
