# tests/test_state_io.py
import json

import pytest
from marshmallow import ValidationError

from mancalamax.engine.core import SWAP_MOVE, BoardState, init_custom
from mancalamax.io.display import format_board
from mancalamax.io.state_io import (
    StateFormatError,
    dump_json_state,
    format_move,
    format_state_tokens,
    load_json_state,
    parse_state_tokens,
)

# ----------------------------- STATE tokens --------------------------------

def test_parse_fresh_game():
    assert parse_state_tokens("STATE 2 2 2 2 2 0 0 1 1") == init_custom(2, 2)

def test_parse_translates_one_based_turn():
    s = parse_state_tokens("STATE 3\n1 0 2\n4 4 0\n5 7\n9 2\n")
    assert s == BoardState([[1, 0, 2], [4, 4, 0]], [5, 7], ply=9, current_player=1)

def test_tokens_survive_formatting(midgame):
    assert parse_state_tokens(format_state_tokens(midgame)) == midgame

@pytest.mark.parametrize("text,message", [
    ("", "header"),
    ("STAT 2 2 2 2 2 0 0 1 1", "header"),
    ("STATE", "pit count"),
    ("STATE 0 0 0 1 1", "at least 1"),
    ("STATE 2 2 2 2 2 0 0 1", "tokens"),
    ("STATE 2 2 2 2 2 0 0 1 1 7", "tokens"),
    ("STATE 2 2 x 2 2 0 0 1 1", "integer"),
    ("STATE 2 2 -2 2 2 0 0 1 1", "non-negative"),
    ("STATE 2 2 2 2 2 0 0 0 1", "ply"),
    ("STATE 2 2 2 2 2 0 0 1 3", "turn"),
])
def test_malformed_tokens(text, message):
    with pytest.raises(StateFormatError, match=message):
        parse_state_tokens(text)

def test_format_move():
    assert format_move(SWAP_MOVE) == "PIE"
    assert format_move(4) == "4"

# ----------------------------- JSON ----------------------------------------

def test_load_json_defaults_ply_and_ignores_extras():
    text = json.dumps({"pits": [[1, 2], [3, 4]], "stores": [0, 1], "current_player": 1, "note": "x"})
    s = load_json_state(text)
    assert s == BoardState([[1, 2], [3, 4]], [0, 1], ply=1, current_player=1)

def test_dump_json_state(small_board):
    data = json.loads(dump_json_state(small_board))
    assert data == small_board.to_dict()

@pytest.mark.parametrize("payload", [
    {"pits": [[1, 2], [3]], "stores": [0, 0], "current_player": 0},
    {"pits": [[], []], "stores": [0, 0], "current_player": 0},
    {"pits": [[1, 2], [3, 4]], "stores": [0], "current_player": 0},
    {"pits": [[1, -2], [3, 4]], "stores": [0, 0], "current_player": 0},
    {"pits": [[1, 2], [3, 4]], "stores": [0, 0], "current_player": 2},
    {"pits": [[1, 2], [3, 4]], "stores": [0, 0]},
    {"pits": [[1, 2], [3, 4]], "stores": [0, 0], "current_player": 0, "ply": 0},
])
def test_invalid_json_states(payload):
    with pytest.raises(ValidationError):
        load_json_state(json.dumps(payload))

def test_unparseable_json():
    with pytest.raises(ValidationError):
        load_json_state("{not json")

# ----------------------------- display -------------------------------------

def test_board_marks_turn_and_ply(swap_position):
    text = format_board(swap_position)
    lines = text.splitlines()
    assert lines[2].startswith("  P1:  ( 0)  [  4  5  5  5  5  0 ]")
    assert lines[3].startswith("* P2:")
    assert lines[3].endswith("[  4  4  4  4  4  4 ]  ( 0)")
    assert lines[-1] == "Turn: 2"
