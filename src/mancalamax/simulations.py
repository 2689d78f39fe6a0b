# Self-play tournaments between search agents.
import logging
import time
from itertools import product
from typing import Dict, List, Optional, Sequence

import pandas as pd
from tqdm import tqdm

from mancalamax.engine.core import INITIAL_STONES, NUM_PITS, BoardState, init_custom, is_terminal_state, step
from mancalamax.io.registry import pick_action, resolve_agent
from mancalamax.utils.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_AGENTS = ("random", "alpha_beta", "iterative")


def make_strategy(agent: str, settings: Settings, name: Optional[str] = None) -> Dict:
    agent = resolve_agent(agent)

    def _play(state: BoardState) -> int:
        return pick_action(state, agent, settings)

    return {"name": name or agent, "function": _play}


def simulate_game(player1_strategy, player2_strategy, pits=NUM_PITS, stones=INITIAL_STONES):
    """Simulate a game between two strategies."""
    start_time = time.time()
    state = init_custom(pits, stones)
    moves_count = 0

    while not is_terminal_state(state):
        strategy = player1_strategy if state.current_player == 0 else player2_strategy
        move = strategy["function"](state)
        state, _, _ = step(state, move)
        moves_count += 1

    p1_score, p2_score = state.stores
    return {
        "player1": player1_strategy["name"],
        "player2": player2_strategy["name"],
        "p1_score": p1_score,
        "p2_score": p2_score,
        "winner": "Draw" if p1_score == p2_score else ("Player1" if p1_score > p2_score else "Player2"),
        "moves": moves_count,
        "time": time.time() - start_time,
    }


def run_simulations_for_pair(pair, num_games, pits=NUM_PITS, stones=INITIAL_STONES, progress=True):
    player1_strat, player2_strat = pair
    results = []
    # Progress bar for games within a single strategy pair
    games = tqdm(range(num_games), desc=f"{player1_strat['name']} vs {player2_strat['name']}",
                 leave=False, disable=not progress)
    for _ in games:
        result = simulate_game(player1_strat, player2_strat, pits, stones)
        results.append({
            "Player1_Strategy": result["player1"],
            "Player2_Strategy": result["player2"],
            "Player1_Score": result["p1_score"],
            "Player2_Score": result["p2_score"],
            "Winner": result["winner"],
            "Moves": result["moves"],
            "Time_Seconds": round(result["time"], 3),
        })
    return results


def run_simulations(strategies: Sequence[Dict], num_games: int = 10, pits=NUM_PITS,
                    stones=INITIAL_STONES, progress=True) -> List[Dict]:
    """Play `num_games` games for every ordered pair of strategies."""
    results = []
    combinations = list(product(strategies, strategies))
    logger.info("running %d pairings x %d games", len(combinations), num_games)

    with tqdm(total=len(combinations), desc="Overall Progress", disable=not progress) as overall_progress:
        for pair in combinations:
            results.extend(run_simulations_for_pair(pair, num_games, pits, stones, progress))
            overall_progress.update(1)

    return results


def summarize(results: List[Dict]) -> Dict[str, pd.DataFrame]:
    """Win rates, average game time and score-difference stats per pairing."""
    df = pd.DataFrame(results)
    pairing = ["Player1_Strategy", "Player2_Strategy"]

    win_rates = df.groupby(pairing)["Winner"].value_counts(normalize=True).unstack(fill_value=0.0)
    avg_times = df.groupby(pairing)["Time_Seconds"].mean()

    df["Score_Diff"] = df["Player1_Score"] - df["Player2_Score"]
    score_stats = df.groupby(pairing)["Score_Diff"].describe()

    return {
        "results": df,
        "win_rates": win_rates,
        "avg_times": avg_times.to_frame(),
        "score_stats": score_stats,
    }
