from array import array
from enum import Enum
from math import prod
from typing import Iterator, List, NamedTuple, Sequence, Tuple

# One wall bit per direction, 'L' is at least 32 bits wide
MAX_DIMENSIONS = 16


class Sign(Enum):
    """Which way along an axis a direction points."""
    POSITIVE = 1
    NEGATIVE = -1

    def is_positive(self) -> bool:
        return self is Sign.POSITIVE

    def is_negative(self) -> bool:
        return self is Sign.NEGATIVE

    def to_int(self) -> int:
        return self.value

    def invert(self) -> "Sign":
        return Sign.NEGATIVE if self.is_positive() else Sign.POSITIVE

    def __str__(self):
        return "+" if self.is_positive() else "-"


class Direction(NamedTuple):
    axis: int
    sign: Sign

    @property
    def ordinal(self) -> int:
        # Stable position in Direction.all(), doubles as the wall bit number
        return 2 * self.axis + (0 if self.sign.is_positive() else 1)

    @property
    def bit(self) -> int:
        return 1 << self.ordinal

    def invert(self) -> "Direction":
        return Direction(self.axis, self.sign.invert())

    @staticmethod
    def all(dimensions: int) -> Tuple["Direction", ...]:
        """
        All 2*D unit moves, axis-major with POSITIVE before NEGATIVE.
        The order is relied on for neighbor scans and search tie-breaking.
        """
        return tuple(
            Direction(axis, sign)
            for axis in range(dimensions)
            for sign in (Sign.POSITIVE, Sign.NEGATIVE)
        )

    def __str__(self):
        return f"{self.sign}{self.axis}"


class Coordinate(tuple):
    __slots__ = ()

    def __new__(cls, indices: Sequence[int]):
        return super().__new__(cls, (int(i) for i in indices))

    @classmethod
    def origin(cls, dimensions: int) -> "Coordinate":
        return cls([0] * dimensions)

    def offset(self, direction: Direction) -> "Coordinate":
        """Adjacent coordinate in 'direction'. May fall outside the grid."""
        indices = list(self)
        indices[direction.axis] += direction.sign.to_int()
        return Coordinate(indices)

    def __repr__(self):
        return f"Coordinate({tuple(self)})"


class Face(NamedTuple):
    coordinate: Coordinate
    direction: Direction


class Grid:
    """
    Dense N-dimensional maze of cells, each holding a bitmask of its walls.
    Bit i is set when the wall towards Direction.all(D)[i] is present.
    """

    __slots__ = ('shape', 'dimensions', 'size', 'directions', 'all_walls', 'cells', '_strides')

    def __init__(self, shape: Sequence[int]):
        shape = tuple(int(extent) for extent in shape)
        if not shape:
            raise ValueError("maze must have at least one dimension")
        if len(shape) > MAX_DIMENSIONS:
            raise ValueError(f"maze can have at most {MAX_DIMENSIONS} dimensions, got {len(shape)}")
        if any(extent < 1 for extent in shape):
            raise ValueError(f"every extent must be positive, got {shape}")

        self.shape = shape
        self.dimensions = len(shape)
        self.size = prod(shape)
        self.directions = Direction.all(self.dimensions)
        self.all_walls = (1 << len(self.directions)) - 1

        # Row-major strides, last axis varies fastest
        strides = [1] * self.dimensions
        for axis in range(self.dimensions - 2, -1, -1):
            strides[axis] = strides[axis + 1] * shape[axis + 1]
        self._strides = tuple(strides)

        # All walls present by default
        self.cells = array('L', [self.all_walls] * self.size)

    def contains(self, coordinate: Sequence[int]) -> bool:
        return len(coordinate) == self.dimensions and all(
            0 <= index < extent for index, extent in zip(coordinate, self.shape)
        )

    def get_index(self, coordinate: Sequence[int]) -> int:
        if not self.contains(coordinate):
            raise IndexError(f"Coordinate {tuple(coordinate)} out of bounds for shape {self.shape}")
        return sum(index * stride for index, stride in zip(coordinate, self._strides))

    def cells_iter(self) -> Iterator[Coordinate]:
        """Every coordinate in row-major order."""
        total = self.size
        for flat in range(total):
            indices = []
            for stride in self._strides:
                indices.append(flat // stride)
                flat %= stride
            yield Coordinate(indices)

    def has_wall(self, face: Face) -> bool:
        return (self.cells[self.get_index(face.coordinate)] & face.direction.bit) != 0

    def remove_wall(self, face: Face):
        """
        Opens the face on its own cell and, for internal faces, the
        opposite face on the neighbor.
        """
        idx = self.get_index(face.coordinate)
        self.cells[idx] &= ~face.direction.bit

        neighbor = face.coordinate.offset(face.direction)
        if self.contains(neighbor):
            self.cells[self.get_index(neighbor)] &= ~face.direction.invert().bit

    def add_wall(self, face: Face):
        idx = self.get_index(face.coordinate)
        self.cells[idx] |= face.direction.bit

        # Handle neighbor (strict consistency)
        neighbor = face.coordinate.offset(face.direction)
        if self.contains(neighbor):
            self.cells[self.get_index(neighbor)] |= face.direction.invert().bit

    def reset_walls(self):
        for idx in range(self.size):
            self.cells[idx] = self.all_walls

    def is_external(self, face: Face) -> bool:
        return not self.contains(face.coordinate.offset(face.direction))

    def is_edge_cell(self, coordinate: Coordinate) -> bool:
        self.get_index(coordinate)
        return any(index == 0 or index == extent - 1 for index, extent in zip(coordinate, self.shape))

    def get_external_face(self, coordinate: Coordinate) -> Face:
        """First face of an edge cell, in direction order, that borders the outside."""
        for direction in self.directions:
            face = Face(coordinate, direction)
            if self.is_external(face):
                return face
        raise ValueError(f"{coordinate!r} is not an edge cell")

    def get_external_faces(self, coordinate: Coordinate) -> List[Face]:
        return [Face(coordinate, d) for d in self.directions if self.is_external(Face(coordinate, d))]

    def get_neighbors(self, coordinate: Coordinate) -> Iterator[Tuple[Coordinate, Direction]]:
        """
        Yields (neighbor, direction_to_neighbor) for all in-bounds neighbors.
        Does NOT check walls (that's for pathfinding).
        """
        for direction in self.directions:
            neighbor = coordinate.offset(direction)
            if self.contains(neighbor):
                yield neighbor, direction

    def get_open_neighbors(self, coordinate: Coordinate) -> Iterator[Tuple[Coordinate, Direction]]:
        """
        Yields (neighbor, direction) for in-bounds neighbors NOT blocked by a wall.
        """
        val = self.cells[self.get_index(coordinate)]
        for neighbor, direction in self.get_neighbors(coordinate):
            if not (val & direction.bit):
                yield neighbor, direction
