# Minimax with alpha-beta pruning + iterative deepening (STATE-BASED)
# Role continuity: when a move earns an extra turn the child is searched with
# the same role (max stays max), so roles follow whose turn it is, not depth.

from __future__ import annotations
import logging
import math
import random
import time
from collections import deque
from dataclasses import dataclass
from typing import Optional, Tuple

from mancalamax.agents.heuristics import Heuristic, heuristic as default_heuristic, utility
from mancalamax.engine.core import (
    NO_MOVE,
    BoardState,
    apply_move,
    is_terminal_state,
    legal_actions,
)

logger = logging.getLogger(__name__)

# iterative deepening starts at this depth
FIRST_DEPTH = 2


@dataclass
class SearchResult:
    """Outcome of one depth-bounded search from the root."""
    value: float
    move: int
    depth: int
    nodes: int


def _now_ms() -> float:
    return time.monotonic() * 1000.0


class SearchSession:
    """
    Configuration and counters for one top-level search call.

    A new session is created per call and threaded through the recursion, so
    a deadline or heuristic never outlives the search that set it.
    """

    def __init__(self, heuristic: Optional[Heuristic] = None, time_limit_ms: float = 0):
        self.heuristic = heuristic if heuristic is not None else default_heuristic
        self.time_limit_ms = max(0, time_limit_ms)
        self.start_ms = _now_ms()
        self.nodes = 0

    def elapsed_ms(self) -> float:
        return _now_ms() - self.start_ms

    def out_of_time(self) -> bool:
        # 0 means no deadline
        return self.time_limit_ms > 0 and self.elapsed_ms() > self.time_limit_ms


# ----------------------------- alpha-beta core ------------------------------

def max_value(
    state: BoardState,
    alpha: float,
    beta: float,
    optimize_for: int,
    depth: int,
    session: SearchSession,
) -> Tuple[float, int]:
    session.nodes += 1

    if is_terminal_state(state):
        return utility(state, optimize_for), NO_MOVE

    if depth <= 0 or session.out_of_time():
        return session.heuristic(state, optimize_for), NO_MOVE

    depth -= 1
    v, best_move = -math.inf, NO_MOVE

    for move in legal_actions(state):
        child = apply_move(state, move)

        # Extra turn: same player -> keep maximizing
        if child.current_player == state.current_player:
            child_v, _ = max_value(child, alpha, beta, optimize_for, depth, session)
        else:
            child_v, _ = min_value(child, alpha, beta, optimize_for, depth, session)

        if child_v > v:
            v, best_move = child_v, move
            alpha = max(alpha, v)

        if v >= beta:  # beta cut
            return v, best_move

    return v, best_move


def min_value(
    state: BoardState,
    alpha: float,
    beta: float,
    optimize_for: int,
    depth: int,
    session: SearchSession,
) -> Tuple[float, int]:
    session.nodes += 1

    if is_terminal_state(state):
        return utility(state, optimize_for), NO_MOVE

    if depth <= 0 or session.out_of_time():
        return session.heuristic(state, optimize_for), NO_MOVE

    depth -= 1
    v, best_move = math.inf, NO_MOVE

    for move in legal_actions(state):
        child = apply_move(state, move)

        if child.current_player == state.current_player:
            child_v, _ = min_value(child, alpha, beta, optimize_for, depth, session)
        else:
            child_v, _ = max_value(child, alpha, beta, optimize_for, depth, session)

        if child_v < v:
            v, best_move = child_v, move
            beta = min(beta, v)

        if v <= alpha:  # alpha cut
            return v, best_move

    return v, best_move


# ------------------------------- public API ---------------------------------

def random_move(state: Optional[BoardState], rng: Optional[random.Random] = None) -> int:
    """Uniformly chosen legal move, or NO_MOVE when there is none."""
    moves = legal_actions(state)
    if not moves:
        return NO_MOVE
    return (rng or random).choice(moves)


def alpha_beta_search(
    state: BoardState,
    depth: int,
    heuristic: Optional[Heuristic] = None,
    session: Optional[SearchSession] = None,
) -> SearchResult:
    """Search `depth` plies from `state` for the player to move."""
    if session is None:
        session = SearchSession(heuristic)
    value, move = max_value(
        state, -math.inf, math.inf, state.current_player, depth, session
    )
    return SearchResult(value=value, move=move, depth=depth, nodes=session.nodes)


def search_fixed_depth(
    state: Optional[BoardState],
    max_depth: int,
    heuristic: Optional[Heuristic] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """
    Best move at a fixed depth with no time limit.

    Falls back to a random legal move when the search records none, and
    returns NO_MOVE if there is nothing to play.
    """
    if state is None:
        return NO_MOVE

    result = alpha_beta_search(state, max_depth, heuristic)
    logger.debug(
        "depth %d: move=%d value=%s nodes=%d",
        max_depth, result.move, result.value, result.nodes,
    )

    if result.move == NO_MOVE:
        logger.info("fixed-depth search found no move, picking at random")
        return random_move(state, rng)
    return result.move


def search_time_bounded(
    state: Optional[BoardState],
    time_limit_ms: float,
    max_depth: int,
    heuristic: Optional[Heuristic] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """
    Iterative deepening from depth 2 until `time_limit_ms` runs out or
    `max_depth` is reached.

    The newest depth may have been cut short by the deadline, so the move
    from the depth before it is returned. With fewer than two finished
    depths a random legal move is played instead.
    """
    if state is None:
        return NO_MOVE

    session = SearchSession(heuristic, time_limit_ms)
    best_moves: deque = deque()
    depth = FIRST_DEPTH

    while session.elapsed_ms() < time_limit_ms and depth <= max_depth:
        value, move = max_value(
            state, -math.inf, math.inf, state.current_player, depth, session
        )
        if move != NO_MOVE:
            best_moves.appendleft(move)

        logger.debug(
            "depth %d: move=%d value=%s nodes=%d elapsed=%.1fms",
            depth, move, value, session.nodes, session.elapsed_ms(),
        )
        depth += 1

    if len(best_moves) < 2:
        logger.info(
            "iterative deepening finished %d depth(s) in %dms, picking at random",
            len(best_moves), time_limit_ms,
        )
        return random_move(state, rng)

    return best_moves[1]
