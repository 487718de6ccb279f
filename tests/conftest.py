"""
Pytest configuration and shared fixtures for the Taifho test suite.

Provides:
- Board fixtures for the standard 2- and 4-player openings
- Factories for pieces and hand-built positions
- A seeded AISession so stochastic searches replay identically
"""

import sys
from pathlib import Path
from typing import Callable

import pytest

# Ensure the repository root is on sys.path so `import taifho` and
# `import tests.helpers` work when running pytest without an editable install.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from taifho.ai.session import AISession, reset_ai_history
from taifho.board import Board
from taifho.models import Piece
from taifho.rules.board_setup import create_initial_board

from tests.helpers import make_board, make_piece


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def piece_factory() -> Callable[..., Piece]:
    """Factory for creating Piece instances."""
    return make_piece


@pytest.fixture
def board_factory() -> Callable[..., Board]:
    """Factory for creating boards from a cell -> piece mapping."""
    return make_board


# =============================================================================
# BOARD / SESSION FIXTURES
# =============================================================================


@pytest.fixture
def empty_board() -> Board:
    return Board()


@pytest.fixture
def initial_board() -> Board:
    """Standard two-player opening."""
    return create_initial_board(2)


@pytest.fixture
def initial_board_4p() -> Board:
    """Standard four-player opening."""
    return create_initial_board(4)


@pytest.fixture
def session() -> AISession:
    """Fresh seeded session per test."""
    return AISession(rng_seed=1234)


@pytest.fixture(autouse=True)
def _reset_default_session():
    """Keep the shared default session from leaking state between tests."""
    reset_ai_history()
    yield
    reset_ai_history()
