"""The game board implements all rules that only depend on the grid: bounds, occupancy, walls and attack rays."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Self

from lasthit.core.shared_types import Direction, Party
from lasthit.game.position import BOARD_SIZE, Position


class Cell(IntEnum):
    """Cell contents. The values are the persisted encoding of the grid."""

    OUT_OF_BOUNDS = -1  # sentinel returned by queries, never stored in the grid
    EMPTY = 0
    WALL = 1
    PLAYER1 = 2
    PLAYER2 = 3


OCCUPANT_CELLS: dict[Party, Cell] = {
    Party.PLAYER1: Cell.PLAYER1,
    Party.PLAYER2: Cell.PLAYER2,
}

# player1 starts bottom center, player2 top center
START_POSITIONS: dict[Party, Position] = {
    Party.PLAYER1: Position(7, 12),
    Party.PLAYER2: Position(7, 2),
}

# Central horizontal barrier on row 7
BARRIER_WALLS: tuple[Position, ...] = tuple(Position(x, 7) for x in range(5, 10))

CORNER_WALLS: tuple[Position, ...] = (
    # top left
    Position(3, 3),
    Position(4, 3),
    Position(3, 4),
    # top right
    Position(10, 3),
    Position(11, 3),
    Position(11, 4),
    # bottom left
    Position(3, 10),
    Position(4, 10),
    Position(3, 11),
    # bottom right
    Position(10, 10),
    Position(11, 10),
    Position(11, 11),
)

COVER_WALLS: tuple[Position, ...] = (
    Position(2, 5),
    Position(12, 5),
    Position(2, 9),
    Position(12, 9),
)


@dataclass
class Board:
    """Square grid, indexed as cells[y][x]."""

    cells: list[list[Cell]]

    @classmethod
    def empty(cls, size: int = BOARD_SIZE) -> Self:
        return cls([[Cell.EMPTY for _ in range(size)] for _ in range(size)])

    @classmethod
    def initial(cls) -> Self:
        """
        The fixed starting layout.
        ----

        * walls along all four edges
        * a horizontal barrier through the middle of the board
        * four L-shaped clusters near the corners, plus four single cover walls
        * player1 at the bottom center, player2 at the top center
        """
        board = cls.empty()
        last = board.size - 1
        for i in range(board.size):
            for border in (Position(i, 0), Position(i, last), Position(0, i), Position(last, i)):
                board.set_cell(border, Cell.WALL)

        for wall in BARRIER_WALLS + CORNER_WALLS + COVER_WALLS:
            board.set_cell(wall, Cell.WALL)

        for party, start in START_POSITIONS.items():
            board.set_cell(start, OCCUPANT_CELLS[party])
        return board

    @classmethod
    def from_rows(cls, rows: list[list[int]]) -> Self:
        """Build a board from the plain integer grid used for persistence. Raises ValueError on unknown cell values."""
        return cls([[_stored_cell(value) for value in row] for row in rows])

    def to_rows(self) -> list[list[int]]:
        return [[int(cell) for cell in row] for row in self.cells]

    @property
    def size(self) -> int:
        return len(self.cells)

    # --- QUERIES ---
    def in_bounds(self, pos: Position) -> bool:
        return pos.is_within_bounds(self.size)

    def cell_kind(self, pos: Position) -> Cell:
        if not self.in_bounds(pos):
            return Cell.OUT_OF_BOUNDS
        return self.cells[pos.y][pos.x]

    def is_occupiable(self, pos: Position) -> bool:
        return self.cell_kind(pos) == Cell.EMPTY

    def locate(self, cell: Cell) -> list[Position]:
        return [
            Position(x, y)
            for y, row in enumerate(self.cells)
            for x, value in enumerate(row)
            if value == cell
        ]

    def walls(self) -> list[Position]:
        return self.locate(Cell.WALL)

    def attack_path(self, origin: Position, direction: Direction) -> list[Position]:
        """
        Raycasting
        -----

        Step away from the origin (the origin itself is never part of the path) until we either leave
        the board or hit a non-empty cell. The blocking cell is the last entry of the path.
        """
        path: list[Position] = []
        current = origin
        while True:
            current = current.shifted(direction)
            if not self.in_bounds(current):
                break
            path.append(current)
            if self.cell_kind(current) != Cell.EMPTY:
                break
        return path

    # --- MUTATIONS ---
    def set_cell(self, pos: Position, cell: Cell) -> None:
        self.cells[pos.y][pos.x] = cell

    def destroy_wall(self, pos: Position) -> bool:
        """Only walls can be destroyed. Anything else (occupants included) is left alone."""
        if self.cell_kind(pos) != Cell.WALL:
            return False
        self.set_cell(pos, Cell.EMPTY)
        return True

    def move_occupant(self, from_pos: Position, to_pos: Position) -> None:
        occupant = self.cell_kind(from_pos)
        self.set_cell(from_pos, Cell.EMPTY)
        self.set_cell(to_pos, occupant)


def _stored_cell(value: int) -> Cell:
    cell = Cell(value)
    if cell == Cell.OUT_OF_BOUNDS:
        raise ValueError(f"{cell.name} cannot be stored in the grid")
    return cell
