"""
Command line NoGo game

Usage: nogo p1type p2type [height width | filename]

Player types are 'h' (human) or 'c' (computer). Player 1 plays O, player 2
plays X. A human can type 'w <filename>' instead of a move to save the game.
"""
import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from computer_player import PLAYER_TYPES, ComputerPlayer, create_computers
from nogo_board import PLAYER_O, NogoBoard, get_opponent, player_name
from nogo_errors import IncorrectTypeError, InvalidDimensionError, NogoError, NumArgError
from save_state import SaveState, load_game, save_game

logger = logging.getLogger(__name__)

SAVE_COMMAND = 'w'


class _ArgumentParser(argparse.ArgumentParser):
    """Report usage problems as NumArgError instead of exiting"""

    def error(self, message):
        raise NumArgError()


@dataclass
class GameConfig:
    player_types: Tuple[str, str]
    height: int = 0
    width: int = 0
    filename: Optional[str] = None
    log_level: str = 'WARNING'


def parse_args(argv: Optional[List[str]] = None) -> GameConfig:
    parser = _ArgumentParser(prog='nogo', description='Play NoGo on the command line.')
    parser.add_argument('p1type', help="Player O type: 'h' for human, 'c' for computer.")
    parser.add_argument('p2type', help="Player X type: 'h' for human, 'c' for computer.")
    parser.add_argument('source', nargs='+', help='Board height and width, or a save file to load.')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level.')

    args = parser.parse_args(argv)

    if len(args.source) > 2:
        raise NumArgError()

    if args.p1type not in PLAYER_TYPES or args.p2type not in PLAYER_TYPES:
        raise IncorrectTypeError()

    config = GameConfig(player_types=(args.p1type, args.p2type), log_level=args.log_level)
    if len(args.source) == 1:
        config.filename = args.source[0]
        return config

    try:
        config.height = int(args.source[0])
        config.width = int(args.source[1])
    except ValueError as e:
        raise InvalidDimensionError() from e

    return config


class NogoGame:
    """Runs the turn loop between two players on one board"""

    def __init__(self, board: NogoBoard, player_types: Tuple[str, str],
                 computers: Dict[int, Optional[ComputerPlayer]],
                 current_player: int = PLAYER_O, stdin=None, stdout=None, stderr=None):
        self.board = board
        self.player_types = player_types
        self.computers = computers
        self.current_player = current_player
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    @classmethod
    def from_config(cls, config: GameConfig, **streams) -> 'NogoGame':
        """New game from dimensions, or a resumed game from a save file"""
        if config.filename is not None:
            state = load_game(config.filename, config.player_types)
            logger.info("Resuming game from %s", config.filename)
            return cls(state.board, config.player_types, state.computers,
                       state.next_player, **streams)

        board = NogoBoard(config.height, config.width)
        computers = create_computers(config.player_types, board.height, board.width)
        return cls(board, config.player_types, computers, **streams)

    def save(self, filename: str):
        state = SaveState(board=self.board, next_player=self.current_player, computers=self.computers)
        save_game(filename, state)

    def run(self) -> Optional[int]:
        """Play until a player wins.

        Returns:
            The winning player, or None if input ran out first.
        """
        while True:
            self._print(self.board.render())

            move = self._get_move()
            if move is None:
                logger.warning("End of input, stopping game")
                return None

            row, col = move
            try:
                self.board.insert_move(row, col, self.current_player)
            except NogoError as e:
                self._print(e.message, file=self.stderr)
                continue

            losing_stone = self.board.check_win()
            if losing_stone is not None:
                winner = self.board.winner_at(*losing_stone)
                self._print(self.board.render())
                self._print(f"Player {player_name(winner)} wins!")
                return winner

            self.current_player = get_opponent(self.current_player)

    def _get_move(self) -> Optional[Tuple[int, int]]:
        """Move from the computer or the human. Handles save requests."""
        self._prompt()

        computer = self.computers.get(self.current_player)
        if computer is not None:
            row, col = computer.get_and_generate_move()
            self._print(f"{row} {col}")
            return row, col

        while True:
            line = self.stdin.readline()
            if not line:
                return None

            tokens = line.split()
            if len(tokens) < 2:
                self._print("Error: please enter 2 numbers", file=self.stderr)
                self._prompt()
                continue

            if tokens[0] == SAVE_COMMAND:
                self._save_requested(tokens[1])
                self._prompt()
                continue

            try:
                return self._parse_coordinate(tokens[0]), self._parse_coordinate(tokens[1])
            except ValueError as e:
                self._print(f"Error: {e}", file=self.stderr)
                self._prompt()

    def _save_requested(self, filename: str):
        self._print(f"Saving to {filename}")
        try:
            self.save(filename)
        except NogoError:
            self._print("Failed to save file", file=self.stderr)

    @staticmethod
    def _parse_coordinate(token: str) -> int:
        if not (token.isascii() and token.isdigit()):
            raise ValueError(f"invalid number '{token}'")
        return int(token)

    def _prompt(self):
        self.stdout.write(f"Player {player_name(self.current_player)}> ")
        self.stdout.flush()

    def _print(self, text: str, file=None):
        print(text, file=file or self.stdout)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = parse_args(argv)
        logging.basicConfig(level=config.log_level, stream=sys.stderr,
                            format='%(asctime)s %(name)s %(levelname)s: %(message)s')

        game = NogoGame.from_config(config)
        game.run()
    except NogoError as e:
        print(e.message, file=sys.stderr)
        return e.exit_code

    return 0


if __name__ == '__main__':
    sys.exit(main())
