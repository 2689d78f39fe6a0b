# Reading and writing positions: the "STATE ..." token format used to resume
# a game, and a JSON form validated with marshmallow.
from __future__ import annotations
import json
from typing import List

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate, validates_schema

from mancalamax.engine.core import SWAP_MOVE, BoardState

HEADER = "STATE"


class StateFormatError(ValueError):
    """Malformed resumable-state input."""


# ---------------------------------------------------------------------
# Token format
#   STATE <n> <p1 pit x n> <p2 pit x n> <store1> <store2> <ply> <turn 1|2>
# ---------------------------------------------------------------------

def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise StateFormatError(f"expected an integer for {what}, got {token!r}") from None


def parse_state_tokens(text: str) -> BoardState:
    tokens: List[str] = text.split()
    if not tokens or tokens[0] != HEADER:
        found = tokens[0] if tokens else "end of input"
        raise StateFormatError(f"expected {HEADER} header, got {found!r}")

    if len(tokens) < 2:
        raise StateFormatError("missing pit count")
    n = _to_int(tokens[1], "pit count")
    if n < 1:
        raise StateFormatError(f"pit count must be at least 1, got {n}")

    expected = 2 + 2 * n + 4
    if len(tokens) != expected:
        raise StateFormatError(f"expected {expected} tokens for {n} pits, got {len(tokens)}")

    values = [_to_int(tok, f"field {i}") for i, tok in enumerate(tokens[2:], start=2)]
    player1, player2 = values[:n], values[n:2 * n]
    store1, store2, ply, turn = values[2 * n:]

    if any(v < 0 for v in player1 + player2 + [store1, store2]):
        raise StateFormatError("stone counts must be non-negative")
    if ply < 1:
        raise StateFormatError(f"ply must be at least 1, got {ply}")
    if turn not in (1, 2):
        raise StateFormatError(f"turn must be 1 or 2, got {turn}")

    return BoardState([player1, player2], [store1, store2], ply, turn - 1)


def format_state_tokens(state: BoardState) -> str:
    values = [state.pit_count, *state.pits[0], *state.pits[1], *state.stores,
              state.ply, state.current_player + 1]
    return " ".join([HEADER, *(str(v) for v in values)])


def format_move(move: int) -> str:
    return "PIE" if move == SWAP_MOVE else str(move)

# ---------------------------------------------------------------------
# JSON form
# ---------------------------------------------------------------------

class StateSchema(Schema):
    class Meta: unknown = EXCLUDE
    pits = fields.List(
        fields.List(fields.Integer(validate=validate.Range(min=0))),
        required=True,
        validate=validate.Length(equal=2),
    )
    stores = fields.List(
        fields.Integer(validate=validate.Range(min=0)),
        required=True,
        validate=validate.Length(equal=2),
    )
    ply = fields.Integer(load_default=1, validate=validate.Range(min=1))
    current_player = fields.Integer(required=True, validate=validate.OneOf([0, 1]))

    @validates_schema
    def validate_rows(self, data, **kwargs):
        rows = data.get("pits") or []
        if len(rows) == 2 and (len(rows[0]) < 1 or len(rows[0]) != len(rows[1])):
            raise ValidationError("both rows need the same, non-zero number of pits", "pits")

    @post_load
    def make_state(self, data, **kwargs) -> BoardState:
        return BoardState(data["pits"], data["stores"], data["ply"], data["current_player"])


def load_json_state(text: str) -> BoardState:
    """Parse a JSON position. Raises marshmallow.ValidationError on bad input."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"invalid JSON: {e.msg}") from e
    return StateSchema().load(payload)


def dump_json_state(state: BoardState) -> str:
    return json.dumps(StateSchema().dump(state))
