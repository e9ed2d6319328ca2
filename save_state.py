"""
Save file format for suspended games

A save file is a header line

    height width nextPlayer c1Row c1Column c1Counter c2Row c2Column c2Counter

followed by the board rows. nextPlayer is 0 when O moves next and 1 when X
does. A human seat has no generator state and is written as 0 0 0.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from computer_player import COMPUTER, ComputerPlayer
from nogo_board import PLAYER_O, PLAYER_X, NogoBoard
from nogo_errors import CorruptFileError, FailedToOpenError

logger = logging.getLogger(__name__)

HEADER_FIELDS = 9
NEXT_PLAYER_CODES = {PLAYER_O: '0', PLAYER_X: '1'}
CODE_TO_PLAYER = {code: player for player, code in NEXT_PLAYER_CODES.items()}


@dataclass
class SaveState:
    board: NogoBoard
    next_player: int = PLAYER_O
    computers: Dict[int, Optional[ComputerPlayer]] = field(
        default_factory=lambda: {PLAYER_O: None, PLAYER_X: None})


def _computer_fields(computer: Optional[ComputerPlayer]) -> List[int]:
    if computer is None:
        return [0, 0, 0]
    return [computer.row, computer.column, computer.counter]


def _parse_field(token: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise CorruptFileError()
    return int(token)


def dump_state(state: SaveState) -> str:
    """Serialize a game to the save file format"""
    board = state.board
    header = [board.height, board.width, NEXT_PLAYER_CODES[state.next_player]]
    header += _computer_fields(state.computers.get(PLAYER_O))
    header += _computer_fields(state.computers.get(PLAYER_X))

    return ' '.join(str(value) for value in header) + '\n' + board.to_text()


def load_state(contents: str, player_types: Tuple[str, str]) -> SaveState:
    """Parse a save file.

    player_types decides which seats get a ComputerPlayer; the saved counters
    of a human seat are ignored.
    """
    header, newline, board_text = contents.partition('\n')
    if not newline:
        raise CorruptFileError()

    tokens = header.split()
    if len(tokens) != HEADER_FIELDS:
        raise CorruptFileError()

    if tokens[2] not in CODE_TO_PLAYER:
        raise CorruptFileError()
    next_player = CODE_TO_PLAYER[tokens[2]]

    height, width = _parse_field(tokens[0]), _parse_field(tokens[1])
    seat_fields = {
        PLAYER_O: [_parse_field(token) for token in tokens[3:6]],
        PLAYER_X: [_parse_field(token) for token in tokens[6:9]],
    }

    board = NogoBoard.from_text(board_text)
    if board.height != height or board.width != width:
        raise CorruptFileError()

    computers = {}
    for player, player_type in zip((PLAYER_O, PLAYER_X), player_types):
        if player_type == COMPUTER:
            row, column, counter = seat_fields[player]
            computers[player] = ComputerPlayer.restore(player, height, width, row, column, counter)
        else:
            computers[player] = None

    logger.debug("Loaded %dx%d game, next player %s", height, width, tokens[2])
    return SaveState(board=board, next_player=next_player, computers=computers)


def save_game(filename: str, state: SaveState):
    """Write game to filename, replacing any existing file"""
    try:
        with open(filename, 'w') as f:
            f.write(dump_state(state))
    except OSError as e:
        raise FailedToOpenError() from e

    logger.info("Game saved to %s", filename)


def load_game(filename: str, player_types: Tuple[str, str]) -> SaveState:
    try:
        with open(filename) as f:
            contents = f.read()
    except OSError as e:
        raise FailedToOpenError() from e
    except UnicodeDecodeError as e:
        raise CorruptFileError() from e

    return load_state(contents, player_types)
