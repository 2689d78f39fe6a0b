# tests/test_registry.py
import pytest

from mancalamax.engine.core import legal_actions
from mancalamax.io.registry import AGENTS, pick_action, resolve_agent
from mancalamax.utils.config import Settings


@pytest.mark.parametrize("agent", sorted(AGENTS))
def test_every_agent_returns_legal_move(agent, swap_position):
    settings = Settings(time_limit_ms=200, max_depth=4, fixed_depth=3, seed=1)
    assert pick_action(swap_position, agent, settings) in legal_actions(swap_position)

def test_aliases():
    assert resolve_agent("Alpha-Beta") == "alpha_beta"
    assert resolve_agent("alphabeta") == "alpha_beta"
    assert resolve_agent(None) == "iterative"

def test_unknown_agent():
    with pytest.raises(ValueError, match="Unknown agent"):
        resolve_agent("oracle")

def test_settings_heuristic_is_applied(small_board):
    settings = Settings(fixed_depth=2, heuristic="nope")
    with pytest.raises(ValueError):
        pick_action(small_board, "alpha_beta", settings)
