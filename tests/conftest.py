"""Shared pytest fixtures and configuration for all tests."""

import pytest
import sys
import os

# Add parent directory to path so we can import modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from nogo_board import NogoBoard
from tests.board_helpers import board_from_rows


@pytest.fixture
def empty_board_7x7():
    """Fixture for empty 7x7 board."""
    return NogoBoard(7, 7)


@pytest.fixture
def cross_position():
    """Fixture for an O cross splitting X into four groups, every group alive."""
    return board_from_rows(
        'XX.XX',
        'XXOXX',
        'OOOOO',
        'XXOXX',
        'XXOXX',
        'XX.XX',
    )


@pytest.fixture
def surrounded_corner_position():
    """Fixture for a lone O in the corner with both neighbors taken by X."""
    return board_from_rows(
        'OX..',
        'X...',
        '....',
        '....',
    )


@pytest.fixture
def save_path(tmp_path):
    """Path for a save file inside the test's temporary directory."""
    return str(tmp_path / 'game.sav')
