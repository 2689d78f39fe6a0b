# src/mancalamax/io/registry.py
import logging
from typing import Callable, Dict, Optional

from mancalamax.agents import alpha_beta, minimax
from mancalamax.agents.heuristics import get_heuristic
from mancalamax.engine.core import BoardState
from mancalamax.utils.config import Settings

logger = logging.getLogger(__name__)

AgentFn = Callable[[BoardState, Settings], int]

# ---------------------------------------------------------------------
# Agent adapters
# ---------------------------------------------------------------------
def _iterative_action(state: BoardState, settings: Settings) -> int:
    return alpha_beta.search_time_bounded(
        state,
        settings.time_limit_ms,
        settings.max_depth,
        get_heuristic(settings.heuristic),
        rng=settings.rng,
    )

def _alphabeta_action(state: BoardState, settings: Settings) -> int:
    return alpha_beta.search_fixed_depth(
        state,
        settings.fixed_depth,
        get_heuristic(settings.heuristic),
        rng=settings.rng,
    )

def _minimax_action(state: BoardState, settings: Settings) -> int:
    return minimax.choose_move(state, settings.fixed_depth, get_heuristic(settings.heuristic))

def _random_action(state: BoardState, settings: Settings) -> int:
    return alpha_beta.random_move(state, settings.rng)

AGENTS: Dict[str, AgentFn] = {
    "iterative": _iterative_action,
    "alpha_beta": _alphabeta_action,
    "minimax": _minimax_action,
    "random": _random_action,
}

_ALIASES = {
    "alphabeta": "alpha_beta",
    "alpha-beta": "alpha_beta",
    "iterdep": "iterative",
}

# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------
def resolve_agent(agent: str) -> str:
    name = (agent or "iterative").lower()
    name = _ALIASES.get(name, name)
    if name not in AGENTS:
        raise ValueError(f"Unknown agent '{agent}'. Choose from: {', '.join(AGENTS)}")
    return name

def pick_action(state: BoardState, agent: str, settings: Optional[Settings] = None) -> int:
    settings = settings or Settings.from_env()
    name = resolve_agent(agent)
    move = AGENTS[name](state, settings)
    logger.debug("%s picked %d at ply %d", name, move, state.ply)
    return move
