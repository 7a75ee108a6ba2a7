"""Shared pytest fixtures and configuration for all tests."""

import pytest
import sys
import os

# Add parent directory to path so we can import modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from board_io import parse_board
from pseudo_board import PseudoBoard, FlatPseudoBoard


@pytest.fixture(params=[PseudoBoard, FlatPseudoBoard], ids=['xy', 'flat'])
def board_class(request):
    """Run a test once per addressing scheme."""
    return request.param


@pytest.fixture
def build(board_class):
    """Build a board of the current addressing scheme from a diagram."""
    def _build(diagram):
        return board_class.from_rows(parse_board(diagram))
    return _build


@pytest.fixture
def as_xy():
    """Convert a list of vertices to a set of (x, y) pairs."""
    def _as_xy(board, vertices):
        return {board.to_xy(v) for v in vertices}
    return _as_xy


@pytest.fixture
def capture_diagram():
    """Center point whose four white neighbors each have it as their only liberty."""
    return """
        X O X
        O . O
        X O X
    """


@pytest.fixture
def suicide_diagram():
    """Center point surrounded by white stones that have liberties elsewhere."""
    return """
        . . . . .
        . . O . .
        . O . O .
        . . O . .
        . . . . .
    """


@pytest.fixture
def eye_diagram():
    """Single empty point enclosed by black stones."""
    return """
        X X X
        X . X
        X X X
    """


@pytest.fixture
def dead_corner_diagram():
    """White stone inside a black enclosure in the top left corner."""
    return """
        O . X . .
        . . X . .
        X X X . .
        . . . . .
        . . . . .
    """
