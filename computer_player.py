"""
Deterministic move generator for computer players
"""
import logging
from typing import Dict, Optional, Tuple

from nogo_board import PLAYER_O, PLAYER_X, player_name

logger = logging.getLogger(__name__)

HUMAN = 'h'
COMPUTER = 'c'
PLAYER_TYPES = (HUMAN, COMPUTER)

MOVE_MODULUS = 1_000_003

# (initial row, initial column, multiplier) per player
PLAYER_SEEDS = {
    PLAYER_O: (1, 4, 29),
    PLAYER_X: (2, 10, 17),
}


class ComputerPlayer:
    """Generates an unbounded, reproducible sequence of board coordinates.

    Four small steps move the position along, then every fifth move jumps to
    (b + (counter // 5) * multiplier) % MOVE_MODULUS. Row and column are kept
    unwrapped and only reduced modulo the board size when a move is read, so a
    restored player continues the exact same sequence.
    """

    def __init__(self, player: int, height: int, width: int):
        initial_row, initial_column, multiplier = PLAYER_SEEDS[player]

        self.player = player
        self.height = height
        self.width = width
        self.multiplier = multiplier
        self.b = initial_row * width + initial_column
        self._row = initial_row
        self._column = initial_column
        self._counter = 0

    @classmethod
    def restore(cls, player: int, height: int, width: int,
                row: int, column: int, counter: int) -> 'ComputerPlayer':
        """Rebuild a player from the counters of a save file"""
        computer = cls(player, height, width)
        computer._row = row
        computer._column = column
        computer._counter = counter
        return computer

    @property
    def row(self) -> int:
        return self._row

    @property
    def column(self) -> int:
        return self._column

    @property
    def counter(self) -> int:
        return self._counter

    def get_and_generate_move(self) -> Tuple[int, int]:
        """Get the current move, then generate the next one"""
        move = (self._row % self.height, self._column % self.width)
        self._generate_next_move()

        logger.debug("Player %s generated move %s (counter %d)",
                     player_name(self.player), move, self._counter)
        return move

    def _generate_next_move(self):
        self._counter += 1
        step = self._counter % 5

        if step == 1:
            self._row += 1
            self._column += 1
        elif step == 2:
            self._row += 2
            self._column += 1
        elif step == 3:
            self._row += 1
        elif step == 4:
            self._column += 1
        else:
            n = (self.b + self._counter // 5 * self.multiplier) % MOVE_MODULUS
            self._row = n // self.width
            self._column = n % self.width


def create_computers(player_types: Tuple[str, str], height: int,
                     width: int) -> Dict[int, Optional[ComputerPlayer]]:
    """Computer player for each computer seat, None for human seats"""
    computers = {}
    for player, player_type in zip((PLAYER_O, PLAYER_X), player_types):
        computers[player] = ComputerPlayer(player, height, width) if player_type == COMPUTER else None
    return computers
