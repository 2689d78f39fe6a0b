# Board printing for the terminal driver.
from __future__ import annotations

from mancalamax.engine.core import BoardState

RULE = "=" * 46


def format_board(state: BoardState) -> str:
    """
    Bird's-eye view: player_1's row is drawn right-to-left above player_2's,
    so pits facing each other line up. `*` marks the player to move.
    """
    p1_mark = "*" if state.current_player == 0 else " "
    p2_mark = "*" if state.current_player == 1 else " "

    p1_pits = " ".join(f"{n:2d}" for n in reversed(state.pits[0]))
    p2_pits = " ".join(f"{n:2d}" for n in state.pits[1])
    pad = " " * len(f"({state.stores[0]:2d})")

    return "\n".join([
        "Bird's-Eye View of Game State",
        RULE,
        f"{p1_mark} P1:  ({state.stores[0]:2d})  [ {p1_pits} ]",
        f"{p2_mark} P2:  {pad}  [ {p2_pits} ]  ({state.stores[1]:2d})",
        f"Turn: {state.ply}",
    ])


def print_board(state: BoardState, newline: bool = True) -> None:
    if newline:
        print()
    print(format_board(state))
