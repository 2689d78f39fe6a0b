# Evaluation functions for the search agents.
# Every function takes (state, player) and scores the position for `player`;
# higher is better for that player.

from __future__ import annotations
from typing import Callable, Dict

from mancalamax.engine.core import BoardState

Heuristic = Callable[[BoardState, int], float]

# positional_heuristic weights
CAPTURE_WEIGHT = 0.5
EXTRA_TURN_WEIGHT = 1.0
MATERIAL_WEIGHT = 0.1


def utility(state: BoardState, player: int) -> float:
    """Store difference. Exact value of a finished game."""
    return float(state.stores[player] - state.stores[1 - player])

def heuristic(state: BoardState, player: int) -> float:
    """Default cutoff evaluation: same as utility."""
    return float(state.stores[player] - state.stores[1 - player])

def weighted_heuristic(state: BoardState, player: int) -> float:
    """
    Experimental store weighting, deliberately lopsided between the seats.
    Kept for comparing against the default in tournaments.
    """
    if player == 0:
        return state.stores[0] - 0.65 * state.stores[1]
    return state.stores[1] - 1.85 * state.stores[0]

# ---------------------------------------------------------------------
# Positional heuristic
# ---------------------------------------------------------------------

def _side_potential(state: BoardState, me: int) -> float:
    n = state.pit_count
    my_pits = state.pits[me]
    opp_pits = state.pits[1 - me]

    # empty own pit facing stones = capture threat
    captures = sum(
        opp_pits[n - 1 - i]
        for i in range(n)
        if my_pits[i] == 0 and opp_pits[n - 1 - i] > 0
    )

    # pit i holding exactly n - i stones ends in the store
    extra_turns = sum(1 for i in range(n) if my_pits[i] == n - i)

    return (
        captures * CAPTURE_WEIGHT
        + extra_turns * EXTRA_TURN_WEIGHT
        + sum(my_pits) * MATERIAL_WEIGHT
    )

def positional_heuristic(state: BoardState, player: int) -> float:
    """Store difference plus capture threats, extra-turn chances and material."""
    opponent = 1 - player
    score_diff = state.stores[player] - state.stores[opponent]
    return float(
        score_diff
        + _side_potential(state, player)
        - _side_potential(state, opponent)
    )


HEURISTICS: Dict[str, Heuristic] = {
    "default": heuristic,
    "weighted": weighted_heuristic,
    "positional": positional_heuristic,
}

def get_heuristic(name: str) -> Heuristic:
    try:
        return HEURISTICS[name]
    except KeyError:
        raise ValueError(
            f"Unknown heuristic '{name}'. Choose from: {', '.join(HEURISTICS)}"
        ) from None
