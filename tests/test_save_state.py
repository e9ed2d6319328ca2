"""
Pytest tests for the save file format and save/load round trips.
"""

import pytest
import numpy as np
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from computer_player import ComputerPlayer, COMPUTER, HUMAN
from nogo_board import NogoBoard, PLAYER_O, PLAYER_X
from nogo_errors import CorruptFileError, FailedToOpenError
from save_state import SaveState, dump_state, load_state, save_game, load_game

BOARD_TEXT = (
    'O...\n'
    '.X..\n'
    '....\n'
    '...O\n'
    '....\n'
)


@pytest.fixture
def mid_game_state():
    """Fixture for a 5x4 game with a computer O that has made three moves."""
    board = NogoBoard.from_text(BOARD_TEXT)
    computer = ComputerPlayer(PLAYER_O, 5, 4)
    for _ in range(3):
        computer.get_and_generate_move()
    return SaveState(board=board, next_player=PLAYER_X,
                     computers={PLAYER_O: computer, PLAYER_X: None})


class TestDumpState:
    """Test writing the save format."""

    @pytest.mark.unit
    def test_header_and_rows(self, mid_game_state):
        text = dump_state(mid_game_state)
        header, _, rows = text.partition('\n')

        assert header == '5 4 1 5 6 3 0 0 0'
        assert rows == BOARD_TEXT

    @pytest.mark.unit
    def test_new_game_with_humans(self):
        state = SaveState(board=NogoBoard(4, 6))
        assert dump_state(state) == '4 6 0 0 0 0 0 0 0\n' + '......\n' * 4


class TestLoadState:
    """Test reading the save format."""

    @pytest.mark.unit
    def test_round_trip(self, mid_game_state):
        loaded = load_state(dump_state(mid_game_state), (COMPUTER, HUMAN))

        assert np.array_equal(loaded.board.board, mid_game_state.board.board)
        assert loaded.next_player == PLAYER_X
        assert loaded.computers[PLAYER_X] is None

        computer = loaded.computers[PLAYER_O]
        assert (computer.row, computer.column, computer.counter) == (5, 6, 3)
        assert computer.b == 1 * 4 + 4

    @pytest.mark.unit
    def test_resume_continues_move_sequence(self, mid_game_state):
        original = mid_game_state.computers[PLAYER_O]
        loaded = load_state(dump_state(mid_game_state), (COMPUTER, HUMAN))
        resumed = loaded.computers[PLAYER_O]

        expected = [original.get_and_generate_move() for _ in range(40)]
        assert [resumed.get_and_generate_move() for _ in range(40)] == expected

    @pytest.mark.unit
    def test_human_seat_counters_ignored(self):
        text = '4 4 0 7 8 9 1 2 3\n' + '....\n' * 4
        loaded = load_state(text, (HUMAN, HUMAN))
        assert loaded.computers == {PLAYER_O: None, PLAYER_X: None}

    @pytest.mark.unit
    def test_computer_seat_restored_from_zeros(self):
        # A seat saved as human but loaded as computer starts from the zeros
        text = '4 4 1 0 0 0 0 0 0\n' + '....\n' * 4
        loaded = load_state(text, (HUMAN, COMPUTER))
        computer = loaded.computers[PLAYER_X]
        assert (computer.row, computer.column, computer.counter) == (0, 0, 0)
        assert computer.b == 2 * 4 + 10
        assert loaded.next_player == PLAYER_X

    @pytest.mark.unit
    @pytest.mark.parametrize('text', [
        '',                                             # nothing at all
        '4 4 0 0 0 0 0 0 0',                            # no board lines
        '4 4 0 0 0 0 0 0\n' + '....\n' * 4,             # missing field
        '4 4 0 0 0 0 0 0 0 0\n' + '....\n' * 4,         # extra field
        '4 4 2 0 0 0 0 0 0\n' + '....\n' * 4,           # bad next player
        '4 four 0 0 0 0 0 0 0\n' + '....\n' * 4,        # unparsable number
        '4 4 0 -1 0 0 0 0 0\n' + '....\n' * 4,          # negative counter
        '5 4 0 0 0 0 0 0 0\n' + '....\n' * 4,           # height mismatch
        '4 5 0 0 0 0 0 0 0\n' + '....\n' * 4,           # width mismatch
        '4 4 0 0 0 0 0 0 0\n' + '....\n' * 3 + '...\n',  # jagged board
        '3 4 0 0 0 0 0 0 0\n' + '....\n' * 3,           # board too small
    ])
    def test_corrupt_contents(self, text):
        with pytest.raises(CorruptFileError):
            load_state(text, (COMPUTER, COMPUTER))


class TestSaveFiles:
    """Test save and load through the filesystem."""

    @pytest.mark.integration
    def test_save_then_load(self, mid_game_state, save_path):
        save_game(save_path, mid_game_state)
        with open(save_path) as f:
            assert f.read() == dump_state(mid_game_state)

        loaded = load_game(save_path, (COMPUTER, HUMAN))
        assert loaded.board.to_text() == BOARD_TEXT
        assert loaded.computers[PLAYER_O].counter == 3

    @pytest.mark.integration
    def test_save_replaces_existing_file(self, mid_game_state, save_path):
        with open(save_path, 'w') as f:
            f.write('old contents that are longer than the new save file\n' * 10)

        save_game(save_path, mid_game_state)
        assert load_game(save_path, (HUMAN, HUMAN)).next_player == PLAYER_X

    @pytest.mark.integration
    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FailedToOpenError):
            load_game(str(tmp_path / 'missing.sav'), (HUMAN, HUMAN))

    @pytest.mark.integration
    def test_save_to_missing_directory(self, mid_game_state, tmp_path):
        with pytest.raises(FailedToOpenError):
            save_game(str(tmp_path / 'no_such_dir' / 'game.sav'), mid_game_state)
