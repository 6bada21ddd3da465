from math import prod
from typing import List, Sequence, Tuple

import numpy as np

from mazegen.core.grid import Coordinate


class VisitationLedger:
    """
    Visited-but-active cells, completed cells and the dense visited flag
    matrix, mutated together so they never disagree.

    A cell is either unvisited, active (in 'active', flagged) or completed
    (in 'completed', flagged). Insertion order of 'active' matters since
    selectors pick by position.
    """

    def __init__(self, shape: Sequence[int]):
        self.shape = tuple(shape)
        self.size = prod(self.shape)
        self._active: List[Coordinate] = []
        self._completed: List[Coordinate] = []
        self._matrix = np.zeros(self.shape, dtype=bool)

    @property
    def active(self) -> Tuple[Coordinate, ...]:
        return tuple(self._active)

    @property
    def completed(self) -> Tuple[Coordinate, ...]:
        return tuple(self._completed)

    @property
    def active_count(self) -> int:
        return len(self._active)

    @property
    def visited_count(self) -> int:
        return len(self._active) + len(self._completed)

    @property
    def remaining(self) -> int:
        return self.size - self.visited_count

    def get_active(self, index: int) -> Coordinate:
        return self._active[index]

    def is_visited(self, coordinate: Sequence[int]) -> bool:
        # numpy would wrap negative indices, so bounds are checked here
        if len(coordinate) != len(self.shape) or not all(
            0 <= i < extent for i, extent in zip(coordinate, self.shape)
        ):
            raise IndexError(f"Coordinate {tuple(coordinate)} out of bounds for shape {self.shape}")
        return bool(self._matrix[tuple(coordinate)])

    def visit(self, coordinate: Coordinate):
        if self.is_visited(coordinate):
            raise ValueError(f"{coordinate!r} is already visited")
        self._active.append(coordinate)
        self._matrix[tuple(coordinate)] = True

    def complete(self, index: int) -> Coordinate:
        """Moves active[index] onto the completed stack."""
        cell = self._active.pop(index)
        self._completed.append(cell)
        return cell

    def unvisit(self) -> Coordinate:
        """Drops the most recently visited active cell."""
        cell = self._active.pop()
        self._matrix[tuple(cell)] = False
        return cell

    def uncomplete(self, index: int) -> Coordinate:
        """Pops the last completed cell back into active at 'index'."""
        cell = self._completed.pop()
        self._active.insert(index, cell)
        return cell

    def clear(self):
        self._active.clear()
        self._completed.clear()
        self._matrix.fill(False)

    def snapshot(self):
        """Comparable copy of the whole ledger, for tests and debugging."""
        return self.active, self.completed, self._matrix.tobytes()
