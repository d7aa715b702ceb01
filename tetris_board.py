
"""Board grid: collision, placement, line clears, ghost row"""
from typing import List, Optional, Tuple
from tetris_piece import Piece, COLS, ROWS

Color = Tuple[int, int, int]
Grid = List[List[Optional[Color]]]


def empty_row() -> List[Optional[Color]]:
    return [None] * COLS


class Board:
    def __init__(self):
        self.grid: Grid = [empty_row() for _ in range(ROWS)]

    def is_valid_position(self, piece: Piece, x: int, y: int) -> bool:
        for bx, by in piece.cells(x, y):
            if bx < 0 or bx >= COLS or by >= ROWS: return False
            # rows above the board are spawn space
            if by >= 0 and self.grid[by][bx]: return False
        return True

    def place_piece(self, piece: Piece, x: int, y: int):
        for bx, by in piece.cells(x, y):
            if by >= 0: self.grid[by][bx] = piece.color

    def full_rows(self) -> List[int]:
        """Indices of completely filled rows, bottom to top."""
        return [y for y in range(ROWS - 1, -1, -1) if all(self.grid[y])]

    def clear_lines(self) -> Tuple[int, List[int]]:
        """Remove full rows and drop everything above them.

        Returns the number of rows removed and their indices as they were
        before removal, largest first.
        """
        rows = self.full_rows()
        for y in rows:
            del self.grid[y]
        for _ in rows:
            self.grid.insert(0, empty_row())
        return len(rows), rows

    def get_ghost_y(self, piece: Piece, x: int, start_y: int) -> int:
        y = start_y
        while self.is_valid_position(piece, x, y + 1): y += 1
        return y

    def is_game_over(self) -> bool:
        return any(self.grid[0])
