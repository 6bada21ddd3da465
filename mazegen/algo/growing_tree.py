import logging
from collections import deque
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from mazegen.algo.base import ReversibleGenerator
from mazegen.algo.selectors import DoubleSelector, MultiSelector, SingleSelector, default_algorithm
from mazegen.core.grid import Coordinate, Direction, Face, Grid
from mazegen.core.ledger import VisitationLedger
from mazegen.core.rng import ReversibleRandom

logger = logging.getLogger(__name__)

SELECTOR_TYPES = (SingleSelector, DoubleSelector, MultiSelector)


class State(Enum):
    PLACE_ROOT = "placing root"
    GROW_TREE = "growing tree"
    PLACE_ENTRANCE_AND_EXIT = "placing entrance and exit"
    FINISHED = "finished"


class GrowingTreeMaze(ReversibleGenerator):
    """
    Growing-tree maze generation, one step at a time, in any number of
    dimensions, with every step undoable.

    Each forward step either grows the tree by one cell or retires one
    active cell, and appends the dug direction (or None for a retirement)
    to path_directions. That log, the LIFO order of the active list and the
    per-step random substreams are enough to undo any step: a dug cell is
    always the last active one, and a retired cell's old position is found
    by replaying the selection that removed it.

    See http://weblog.jamisbuck.org/2011/1/27/maze-generation-growing-tree-algorithm
    """

    def __init__(self, shape: Sequence[int], selector=None, *, seed: int):
        grid = Grid(shape)
        super().__init__(grid, seed)
        if grid.size == 1:
            raise ValueError("maze must have more than one cell")
        if selector is None:
            selector = default_algorithm()
        if not isinstance(selector, SELECTOR_TYPES):
            raise TypeError(f"selector must be one of {[t.__name__ for t in SELECTOR_TYPES]}, got {selector!r}")

        self.selector = selector
        self.random = ReversibleRandom(seed)
        self.root = Coordinate([self.random.next_int(extent) for extent in grid.shape])
        self.entrance: Optional[Coordinate] = None
        self.exit: Optional[Coordinate] = None
        self.ledger = VisitationLedger(grid.shape)
        # Dug direction per GROW_TREE step, None where a cell was completed
        self.path_directions: List[Optional[Direction]] = []
        self.state = State.PLACE_ROOT

        logger.debug(f"Maze {grid.shape} (seed={self.random.seed}) rooted at {tuple(self.root)}")

    @property
    def remaining_cells(self) -> int:
        return self.ledger.remaining

    @property
    def visited_cells(self) -> Tuple[Coordinate, ...]:
        return self.ledger.active

    @property
    def completed_cells(self) -> Tuple[Coordinate, ...]:
        return self.ledger.completed

    def is_generation_finished(self) -> bool:
        return self.state is State.FINISHED

    def get_state(self) -> str:
        return self.state.value

    def _set_state(self, state: State):
        if state is not self.state:
            logger.debug(f"{self.state.name} -> {state.name} (step {self.step_count})")
        self.state = state

    def _get_most_distant_edge_cell(self, from_cell: Coordinate) -> Optional[Coordinate]:
        """
        Breadth-first walk through open faces. Returns the first edge cell
        found at strictly the greatest distance from 'from_cell'.
        """
        # (cell, direction leading back to where we came from, distance)
        queue = deque([(from_cell, None, 0)])
        to_cell = None
        greatest_distance = 0
        while queue:
            cell, from_direction, distance = queue.popleft()
            if distance > greatest_distance and self.grid.is_edge_cell(cell):
                to_cell = cell
                greatest_distance = distance
            # The maze is a tree, so never turning straight back is enough
            for neighbor, to_direction in self.grid.get_open_neighbors(cell):
                if to_direction != from_direction:
                    queue.append((neighbor, to_direction.invert(), distance + 1))
        return to_cell

    def _set_entrance_and_exit(self):
        origin = Coordinate.origin(self.grid.dimensions)
        self.entrance = self._get_most_distant_edge_cell(origin)
        self.exit = self._get_most_distant_edge_cell(self.entrance)
        logger.debug(f"Entrance {tuple(self.entrance)}, exit {tuple(self.exit)}")

    def _unset_entrance_and_exit(self):
        self.entrance = None
        self.exit = None

    def _unvisited_neighbors(self, cell: Coordinate) -> List[Tuple[Coordinate, Direction]]:
        found = []
        for direction in self.grid.directions:
            neighbor = cell.offset(direction)
            try:
                if not self.ledger.is_visited(neighbor):
                    found.append((neighbor, direction))
            except IndexError:
                # Off the grid, not a neighbor
                continue
        return found

    def advance_generation(self):
        if self.state is State.FINISHED:
            return
        self.random.advance()
        self.step_count += 1

        if self.state is State.PLACE_ROOT:
            self.ledger.visit(self.root)
            self._set_state(State.GROW_TREE)

        elif self.state is State.GROW_TREE:
            cell_index = self.selector.select(self.ledger.active_count, self.random)
            cell = self.ledger.get_active(cell_index)
            neighbors = self._unvisited_neighbors(cell)
            if neighbors:
                neighbor, direction = neighbors[self.random.next_int(len(neighbors))]
                self.grid.remove_wall(Face(cell, direction))
                self.ledger.visit(neighbor)
                self.path_directions.append(direction)
            else:
                self.ledger.complete(cell_index)
                self.path_directions.append(None)
            if self.ledger.remaining == 0:
                self._set_state(State.PLACE_ENTRANCE_AND_EXIT)

        elif self.state is State.PLACE_ENTRANCE_AND_EXIT:
            self._set_entrance_and_exit()
            self.grid.remove_wall(self.grid.get_external_face(self.entrance))
            self.grid.remove_wall(self.grid.get_external_face(self.exit))
            self._set_state(State.FINISHED)

        else:
            raise AssertionError(f"unknown state {self.state!r}")

    def reverse_generation(self):
        if self.state is State.PLACE_ROOT:
            return
        self.random.reverse()
        self.step_count -= 1

        if self.state is State.FINISHED:
            self.grid.add_wall(self.grid.get_external_face(self.entrance))
            self.grid.add_wall(self.grid.get_external_face(self.exit))
            self._unset_entrance_and_exit()
            self._set_state(State.PLACE_ENTRANCE_AND_EXIT)

        elif self.state in (State.GROW_TREE, State.PLACE_ENTRANCE_AND_EXIT):
            if self.path_directions:
                direction = self.path_directions.pop()
                if direction is not None:
                    neighbor = self.ledger.unvisit()
                    self.grid.add_wall(Face(neighbor, direction.invert()))
                else:
                    # Replays the selection that retired the cell
                    cell_index = self.selector.select(self.ledger.active_count + 1, self.random)
                    self.ledger.uncomplete(cell_index)
                self._set_state(State.GROW_TREE)
            else:
                self.ledger.unvisit()
                self._set_state(State.PLACE_ROOT)

        else:
            raise AssertionError(f"unknown state {self.state!r}")

    def reset_generation(self):
        self.random.reset()
        self._unset_entrance_and_exit()
        self.ledger.clear()
        self.path_directions.clear()
        self.grid.reset_walls()
        self.step_count = 0
        self.state = State.PLACE_ROOT
        logger.debug("Generation reset")
