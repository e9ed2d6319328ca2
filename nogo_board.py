"""
NoGo board with numba-compiled liberty detection
"""
import logging
from typing import Optional, Tuple

import numpy as np
from numba import njit

from nogo_errors import CorruptFileError, InvalidDimensionError, InvalidPositionError, PositionTakenError

logger = logging.getLogger(__name__)

# Constants for board representation
EMPTY = 0
PLAYER_O = 1
PLAYER_X = 2

MIN_DIMENSION = 4
MAX_DIMENSION = 1000

CELL_TO_CHAR = {EMPTY: '.', PLAYER_O: 'O', PLAYER_X: 'X'}
CHAR_TO_CELL = {char: cell for cell, char in CELL_TO_CHAR.items()}

# Neighbor offsets in search order: left, top, right, bottom
_ROW_OFFSETS = np.array([0, -1, 0, 1], dtype=np.int64)
_COL_OFFSETS = np.array([-1, 0, 1, 0], dtype=np.int64)


def get_opponent(player: int) -> int:
    """Get opponent of a player"""
    return PLAYER_X if player == PLAYER_O else PLAYER_O


def player_name(player: int) -> str:
    return CELL_TO_CHAR[player]


def _valid_dimension(size: int) -> bool:
    return MIN_DIMENSION <= size <= MAX_DIMENSION


@njit
def _group_has_liberty(board, row, col, visited, stack, touched):
    """Search the group at (row, col) for an adjacent empty cell.

    Neighbors are checked left, top, right, bottom and the search stops on the
    first empty one. Same-owner neighbors are pushed in reverse so the left one
    is explored next. Visited marks are cleared before returning, leaving the
    buffers ready for the next search.
    """
    height, width = board.shape
    owner = board[row, col]

    top = 0
    count = 0
    start = row * width + col
    stack[top] = start
    top += 1
    touched[count] = start
    count += 1
    visited[row, col] = True

    found = False
    while top > 0:
        top -= 1
        r = stack[top] // width
        c = stack[top] % width

        for k in range(4):
            nr = r + _ROW_OFFSETS[k]
            nc = c + _COL_OFFSETS[k]
            if nr >= 0 and nr < height and nc >= 0 and nc < width and board[nr, nc] == EMPTY:
                found = True
                break

        if found:
            break

        for k in range(3, -1, -1):
            nr = r + _ROW_OFFSETS[k]
            nc = c + _COL_OFFSETS[k]
            if nr >= 0 and nr < height and nc >= 0 and nc < width:
                if board[nr, nc] == owner and not visited[nr, nc]:
                    visited[nr, nc] = True
                    stack[top] = nr * width + nc
                    top += 1
                    touched[count] = nr * width + nc
                    count += 1

    for i in range(count):
        visited[touched[i] // width, touched[i] % width] = False

    return found


@njit
def _find_stone_without_liberty(board):
    """Row-major scan for the first occupied cell whose group has no liberty.

    Every occupied cell gets its own search, so members of one group are
    explored once per member.
    """
    height, width = board.shape
    visited = np.zeros((height, width), dtype=np.bool_)
    stack = np.empty(height * width, dtype=np.int64)
    touched = np.empty(height * width, dtype=np.int64)

    for r in range(height):
        for c in range(width):
            if board[r, c] != EMPTY:
                if not _group_has_liberty(board, r, c, visited, stack, touched):
                    return r, c

    return -1, -1


class NogoBoard:
    """Rectangular NoGo board backed by a NumPy grid"""

    def __init__(self, height: int, width: int):
        if not (_valid_dimension(height) and _valid_dimension(width)):
            raise InvalidDimensionError()

        self.board = np.zeros((height, width), dtype=np.int8)
        logger.debug("Created empty %dx%d board", height, width)

    @classmethod
    def from_text(cls, contents: str) -> 'NogoBoard':
        """Create board from its text form, one row per whitespace-delimited line"""
        rows = contents.split()
        if not rows:
            raise CorruptFileError()

        height = len(rows)
        width = len(rows[0])
        if not (_valid_dimension(height) and _valid_dimension(width)):
            raise CorruptFileError()

        grid = np.zeros((height, width), dtype=np.int8)
        for row, line in enumerate(rows):
            if len(line) != width:
                raise CorruptFileError()
            for col, char in enumerate(line):
                if char not in CHAR_TO_CELL:
                    raise CorruptFileError()
                grid[row, col] = CHAR_TO_CELL[char]

        board = cls(height, width)
        board.board = grid
        logger.debug("Loaded %dx%d board from text", height, width)
        return board

    @property
    def height(self) -> int:
        return self.board.shape[0]

    @property
    def width(self) -> int:
        return self.board.shape[1]

    def get(self, row: int, col: int) -> int:
        """Cell at a coordinate the caller has already bounds-checked"""
        return int(self.board[row, col])

    def insert_move(self, row: int, col: int, player: int):
        """Place a stone for player, making sure it's a valid position"""
        if not 0 <= row < self.height:
            raise InvalidPositionError("Invalid row")
        if not 0 <= col < self.width:
            raise InvalidPositionError("Invalid column")
        if self.board[row, col] != EMPTY:
            raise PositionTakenError()

        self.board[row, col] = player

    def check_liberty(self, row: int, col: int) -> bool:
        """Check if the group containing (row, col) has an adjacent empty cell.

        Stones of the same owner touching each other are linked: if one of them
        has a liberty they all have one.
        """
        assert self.board[row, col] != EMPTY, f"No stone at ({row}, {col})"

        visited = np.zeros(self.board.shape, dtype=np.bool_)
        stack = np.empty(self.board.size, dtype=np.int64)
        touched = np.empty(self.board.size, dtype=np.int64)
        return bool(_group_has_liberty(self.board, row, col, visited, stack, touched))

    def check_win(self) -> Optional[Tuple[int, int]]:
        """Check if the game has been won.

        Returns:
            The coordinate of the first stone in row-major order whose group has
            no liberty. The owner of that stone lost. None if every stone has
            a liberty.
        """
        row, col = _find_stone_without_liberty(self.board)
        if row < 0:
            return None

        logger.debug("Stone at (%d, %d) has no liberty", row, col)
        return int(row), int(col)

    def winner_at(self, row: int, col: int) -> int:
        """Winner when the stone at (row, col) ran out of liberties"""
        owner = self.get(row, col)
        assert owner != EMPTY, f"No stone at ({row}, {col})"
        return get_opponent(owner)

    def to_text(self) -> str:
        """Board rows with no border, one per line"""
        return ''.join(self._row_text(row) + '\n' for row in range(self.height))

    def render(self) -> str:
        """Board with borders around it"""
        edge = '-' * self.width
        lines = ['/' + edge + '\\']
        lines.extend('|' + self._row_text(row) + '|' for row in range(self.height))
        lines.append('\\' + edge + '/')
        return '\n'.join(lines)

    def _row_text(self, row: int) -> str:
        return ''.join(CELL_TO_CHAR[cell] for cell in self.board[row].tolist())
