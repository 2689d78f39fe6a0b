# Mancala core engine (Kalah rules + "pie" swap)
# State shape (see BoardState.to_dict):
# {
#   "pits": [[int]*n, [int]*n],   # row 0 = player_1, row 1 = player_2
#   "stores": [int, int],         # stores[0] = player_1 store, stores[1] = player_2 store
#   "ply": int,                   # 1-based move counter
#   "current_player": 0 | 1       # 0 = player_1 turn, 1 = player_2 turn
# }
#
# Every operation tolerates a None state and answers with None / False / -1.

from __future__ import annotations
from collections import deque
from typing import Dict, List, Optional, Sequence, Tuple

NUM_PITS = 6
INITIAL_STONES = 4

SWAP_MOVE = -1   # "pie" move, only for player_2 at ply 2
NO_MOVE = -2     # no move found / no move available


class BoardState:
    """One Mancala position. Treated as a value: moves return a new instance."""

    __slots__ = ("pits", "stores", "ply", "current_player")

    def __init__(
        self,
        pits: Sequence[Sequence[int]],
        stores: Sequence[int],
        ply: int = 1,
        current_player: int = 0,
    ):
        self.pits = [list(pits[0]), list(pits[1])]
        self.stores = [int(stores[0]), int(stores[1])]
        self.ply = int(ply)
        self.current_player = int(current_player)

    @property
    def pit_count(self) -> int:
        return len(self.pits[0])

    def copy(self) -> "BoardState":
        return BoardState(self.pits, self.stores, self.ply, self.current_player)

    def to_dict(self) -> Dict:
        return {
            "pits":   [self.pits[0][:], self.pits[1][:]],
            "stores": self.stores[:],
            "ply": self.ply,
            "current_player": self.current_player,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "BoardState":
        return cls(
            data["pits"],
            data["stores"],
            data.get("ply", 1),
            data.get("current_player", 0),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (
            self.pits == other.pits
            and self.stores == other.stores
            and self.ply == other.ply
            and self.current_player == other.current_player
        )

    def __repr__(self) -> str:
        return (
            f"BoardState(pits={self.pits!r}, stores={self.stores!r}, "
            f"ply={self.ply}, current_player={self.current_player})"
        )


# ---------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------

def init_custom(pits: int, stones_per_pit: int) -> Optional[BoardState]:
    """Fresh game with `pits` pits per side, each holding `stones_per_pit` stones."""
    if pits < 1 or stones_per_pit < 1:
        return None
    return BoardState(
        [[stones_per_pit] * pits, [stones_per_pit] * pits],
        [0, 0],
        ply=1,
        current_player=0,
    )

def new_game() -> BoardState:
    return init_custom(NUM_PITS, INITIAL_STONES)

init_basic = new_game

def copy_state(state: Optional[BoardState]) -> Optional[BoardState]:
    if state is None:
        return None
    return state.copy()

# ---------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------

def is_terminal_state(state: Optional[BoardState]) -> bool:
    if state is None:
        return False
    return not any(state.pits[0]) and not any(state.pits[1])

def get_current_turn(state: Optional[BoardState]) -> int:
    if state is None:
        return -1
    return state.current_player

def get_score(state: Optional[BoardState], player: int) -> int:
    if state is None:
        return -1
    return state.stores[player]

def legal_actions(state: Optional[BoardState]) -> Optional[List[int]]:
    """
    Moves for the current player: 1-based pit numbers with stones, plus
    SWAP_MOVE for player_2 right after the opening move.

    Moves are prepended as they are generated, so the highest pit comes
    first and SWAP_MOVE last. Searches break ties on this order.
    """
    if state is None:
        return None

    player = state.current_player
    moves: deque = deque()

    if player == 1 and state.ply == 2:
        moves.appendleft(SWAP_MOVE)

    for pit, stones in enumerate(state.pits[player]):
        if stones != 0:
            moves.appendleft(pit + 1)

    return list(moves)

# ---------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------

def _swap_sides(state: BoardState) -> None:
    state.pits.reverse()
    state.stores.reverse()

def _sow(state: BoardState, pit: int) -> bool:
    """
    Sow the stones of 1-based `pit` for the current player in place.
    Returns True when the last stone lands in the mover's own store.
    """
    mover = state.current_player
    n = state.pit_count

    side = mover
    row = state.pits[side]
    stones = row[pit - 1]
    row[pit - 1] = 0
    idx = pit  # next position on `row`; idx == n is that side's store

    extra_turn = False
    i = 0
    while i < stones:
        last_stone = i == stones - 1

        if idx != n:
            row[idx] += 1
        else:
            # Only the mover's store is ever sown into.
            into_store = side == mover
            if into_store:
                state.stores[side] += 1
                if last_stone:
                    extra_turn = True

            side = 1 - side
            row = state.pits[side]
            idx = 0

            # Skipped store: this stone goes into the first pit of the new row.
            # Filled store: the next stone (if any) goes there instead.
            if not into_store:
                row[idx] += 1
            elif not last_stone:
                row[idx] += 1
                i += 1

        if last_stone and side == mover and row[idx] == 1:
            mirror = n - idx - 1
            opponent_row = state.pits[1 - side]
            state.stores[side] += row[idx] + opponent_row[mirror]
            row[idx] = 0
            opponent_row[mirror] = 0

        idx += 1
        i += 1

    return extra_turn

def _sweep_if_finished(state: BoardState) -> None:
    if sum(state.pits[0]) == 0:
        recipient = 1
    elif sum(state.pits[1]) == 0:
        recipient = 0
    else:
        return

    row = state.pits[recipient]
    state.stores[recipient] += sum(row)
    row[:] = [0] * len(row)

def apply_move(state: Optional[BoardState], move: int) -> Optional[BoardState]:
    """
    Return the position after the current player plays `move`.

    `move` must come from legal_actions(state); the input state is left
    untouched.
    """
    if state is None:
        return None

    new_state = state.copy()

    if move == SWAP_MOVE:
        _swap_sides(new_state)
        new_state.current_player = 1 - new_state.current_player
        new_state.ply += 1
        return new_state

    extra_turn = _sow(new_state, move)
    _sweep_if_finished(new_state)

    if not extra_turn:
        new_state.current_player = 1 - new_state.current_player
    new_state.ply += 1

    return new_state

def step(state: BoardState, action: int) -> Tuple[BoardState, float, bool]:
    """
    Apply one move for state.current_player.
    Returns: (next_state, reward, done)
      - reward: 0.0 for non-terminal; at terminal, store difference from mover's perspective.
    """
    mover = state.current_player
    next_state = apply_move(state, action)
    done = is_terminal_state(next_state)
    reward = float(next_state.stores[mover] - next_state.stores[1 - mover]) if done else 0.0
    return next_state, reward, done
