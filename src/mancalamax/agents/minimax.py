# Simple Minimax (STATE-BASED, no alpha-beta)
# Same roles, cutoffs and tie-breaking as agents.alpha_beta, minus the pruning.
# Mostly useful as a yardstick for the pruned search.
from __future__ import annotations
import math
from typing import Optional, Tuple

from mancalamax.agents.alpha_beta import SearchResult, SearchSession, random_move
from mancalamax.agents.heuristics import Heuristic, utility
from mancalamax.engine.core import NO_MOVE, BoardState, apply_move, is_terminal_state, legal_actions

def _minimax(
    state: BoardState,
    depth: int,
    maximizing: bool,
    optimize_for: int,
    session: SearchSession,
) -> Tuple[float, int]:
    session.nodes += 1

    if is_terminal_state(state):
        return utility(state, optimize_for), NO_MOVE
    if depth <= 0:
        return session.heuristic(state, optimize_for), NO_MOVE

    best = -math.inf if maximizing else math.inf
    best_move = NO_MOVE

    for mv in legal_actions(state):
        ns = apply_move(state, mv)
        # Extra turn keeps the role, otherwise it flips.
        same_player = ns.current_player == state.current_player
        child_max = maximizing if same_player else not maximizing
        score, _ = _minimax(ns, depth - 1, child_max, optimize_for, session)
        if (maximizing and score > best) or (not maximizing and score < best):
            best, best_move = score, mv

    return best, best_move

# Public helpers -------------------------------------------------------

def minimax_search(state: BoardState, depth: int, heuristic: Optional[Heuristic] = None) -> SearchResult:
    """Full-width minimax for the player to move."""
    session = SearchSession(heuristic)
    value, move = _minimax(state, depth, True, state.current_player, session)
    return SearchResult(value=value, move=move, depth=depth, nodes=session.nodes)

def choose_move(state: Optional[BoardState], depth: int = 5, heuristic: Optional[Heuristic] = None) -> int:
    """Return best move for the current state using plain minimax (no alpha-beta)."""
    if state is None:
        return NO_MOVE
    move = minimax_search(state, depth, heuristic).move
    if move == NO_MOVE:
        return random_move(state)
    return move
