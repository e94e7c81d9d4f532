"""
A cell coordinate on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from lasthit.core.shared_types import Direction

# The board is always 15x15. Kept as a constant so the geometry is defined in one place.
BOARD_SIZE = 15

Vector = tuple[int, int]

# "up" points to the top rows of the grid, i.e. towards y = 0
DIRECTION_VECTORS: dict[Direction, Vector] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def shifted(self, direction: Direction) -> Position:
        """The neighbouring cell one step along the direction (may be off the board)."""
        dx, dy = DIRECTION_VECTORS[direction]
        return Position(self.x + dx, self.y + dy)

    def is_within_bounds(self, size: int = BOARD_SIZE) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

    def squared_distance(self, other: Position) -> int:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> Position:
        return cls(int(data["x"]), int(data["y"]))
