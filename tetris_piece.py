
"""Piece model, shapes, kick-table rotation"""
from typing import Dict, NamedTuple, Tuple

COLS, ROWS = 10, 20

KINDS = ["I", "O", "T", "S", "Z", "J", "L"]

SHAPES = {
    "I": [[0,0,0,0],[1,1,1,1],[0,0,0,0],[0,0,0,0]],
    "O": [[1,1],[1,1]],
    "T": [[0,1,0],[1,1,1],[0,0,0]],
    "S": [[0,1,1],[1,1,0],[0,0,0]],
    "Z": [[1,1,0],[0,1,1],[0,0,0]],
    "J": [[1,0,0],[1,1,1],[0,0,0]],
    "L": [[0,0,1],[1,1,1],[0,0,0]],
}

COLORS: Dict[str, Tuple[int,int,int]] = {
    "I": (0,255,255),
    "O": (255,255,0),
    "T": (128,0,128),
    "S": (0,255,0),
    "Z": (255,0,0),
    "J": (0,0,255),
    "L": (255,165,0),
}

def rotate_cw(m): return [list(r) for r in zip(*m[::-1])]

# Keyed by the rotation state *before* the turn, for either direction.
JLSTZ_KICKS = {
    0:[(-1,0),(-1,1),(0,-2),(-1,-2)],
    1:[(1,0),(1,-1),(0,2),(1,2)],
    2:[(1,0),(1,1),(0,-2),(1,-2)],
    3:[(-1,0),(-1,-1),(0,2),(-1,2)],
}
I_KICKS = {
    0:[(-2,0),(1,0),(-2,-1),(1,2)],
    1:[(-1,0),(2,0),(-1,2),(2,-1)],
    2:[(2,0),(-1,0),(2,1),(-1,-2)],
    3:[(1,0),(-2,0),(1,-2),(-2,1)],
}
O_KICKS = {s: [(0,0)] for s in range(4)}


def kick_table(kind: str):
    if kind == "I": return I_KICKS
    if kind == "O": return O_KICKS
    return JLSTZ_KICKS


def _rotation_states(base):
    states = [base]
    for _ in range(3):
        states.append(rotate_cw(states[-1]))
    # frozen: every piece of a kind shares these
    return tuple(tuple(tuple(r) for r in s) for s in states)

ROTATIONS: Dict[str, Tuple[Tuple[Tuple[int, ...], ...], ...]] = {k: _rotation_states(s) for k, s in SHAPES.items()}


class RotateResult(NamedTuple):
    x: int
    y: int
    success: bool


class Piece:
    def __init__(self, kind: str):
        if kind not in SHAPES:
            raise ValueError(f"unknown piece kind: {kind!r}")
        self.kind = kind
        self.color = COLORS[kind]
        self.rotation = 0

    def __repr__(self):
        return f"Piece({self.kind!r}, rotation={self.rotation})"

    def get_shape(self) -> Tuple[Tuple[int, ...], ...]:
        return ROTATIONS[self.kind][self.rotation]

    @property
    def width(self) -> int:
        return len(self.get_shape()[0])

    def cells(self, x: int, y: int):
        """Yield board (col, row) of every occupied cell with the box anchored at (x, y)."""
        for r, row in enumerate(self.get_shape()):
            for c, v in enumerate(row):
                if v: yield x + c, y + r

    def rotate(self, direction: int, board, x: int, y: int) -> RotateResult:
        """Turn by `direction` (+1 cw, -1 ccw), trying each kick in order.

        The rotation index is only kept when a kick lands on a valid position;
        otherwise it is restored and the starting anchor comes back with
        success=False.
        """
        if direction not in (1, -1):
            raise ValueError(f"rotation direction must be +1 or -1, got {direction}")
        old = self.rotation
        self.rotation = (old + direction + 4) % 4
        for dx, dy in kick_table(self.kind)[old]:
            if board.is_valid_position(self, x + dx, y + dy):
                return RotateResult(x + dx, y + dy, True)
        self.rotation = old
        return RotateResult(x, y, False)
