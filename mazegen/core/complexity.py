from collections import deque
from mazegen.core.grid import Coordinate, Grid


class MazeStats:
    @staticmethod
    def count_open_faces(grid: Grid, coordinate: Coordinate) -> int:
        """Open internal faces of one cell, i.e. its passages to neighbors."""
        return sum(1 for _ in grid.get_open_neighbors(coordinate))

    @staticmethod
    def calculate_stats(grid: Grid):
        dead_ends = 0     # 1 passage
        corridors = 0     # 2 passages
        junctions = 0     # 3+ passages
        open_internal = 0
        open_external = 0

        for cell in grid.cells_iter():
            passages = MazeStats.count_open_faces(grid, cell)
            open_internal += passages
            if passages == 1: dead_ends += 1
            elif passages == 2: corridors += 1
            elif passages >= 3: junctions += 1

            for face in grid.get_external_faces(cell):
                if not grid.has_wall(face):
                    open_external += 1

        total = grid.size
        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            # Every internal passage was counted from both sides
            "open_internal_faces": open_internal // 2,
            "open_external_faces": open_external,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }

    @staticmethod
    def reachable_cells(grid: Grid, start: Coordinate) -> int:
        seen = {start}
        queue = deque([start])
        while queue:
            cell = queue.popleft()
            for neighbor, _ in grid.get_open_neighbors(cell):
                if neighbor not in seen:
                    seen.add(neighbor)
                    queue.append(neighbor)
        return len(seen)

    @staticmethod
    def is_spanning_tree(grid: Grid) -> bool:
        """
        True when every cell is reachable through open faces and there are
        exactly size - 1 passages, i.e. the maze is perfect.
        """
        stats = MazeStats.calculate_stats(grid)
        if stats["open_internal_faces"] != grid.size - 1:
            return False
        return MazeStats.reachable_cells(grid, Coordinate.origin(grid.dimensions)) == grid.size
