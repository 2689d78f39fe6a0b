# tests/conftest.py
import os, sys, pathlib
import pytest

# Add ./src to sys.path so `import mancalamax...` works in tests
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC  = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mancalamax.engine.core import BoardState, apply_move, new_game


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # Settings.from_env() must only see what a test sets explicitly
    for key in list(os.environ):
        if key.startswith("MANCALAMAX_"):
            monkeypatch.delenv(key)


@pytest.fixture
def opening():
    return new_game()

@pytest.fixture
def swap_position():
    # player_2 to move right after player_1 opened with pit 1
    return apply_move(new_game(), 1)

@pytest.fixture
def midgame():
    return BoardState([[0, 3, 5, 1, 0, 6], [2, 0, 7, 1, 4, 3]], [6, 10], ply=14, current_player=0)

@pytest.fixture
def small_board():
    return BoardState([[2, 0, 3], [1, 4, 0]], [2, 1], ply=5, current_player=1)
