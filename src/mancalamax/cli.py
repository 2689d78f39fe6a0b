"""
Command-line interface: play against the search, solve a single position,
or run a self-play tournament.
"""

import argparse
import logging
import sys
from typing import Iterator, List, Optional, TextIO

from marshmallow import ValidationError

from mancalamax.agents.alpha_beta import search_fixed_depth, search_time_bounded
from mancalamax.agents.heuristics import HEURISTICS, get_heuristic
from mancalamax.engine.core import (
    INITIAL_STONES,
    NO_MOVE,
    NUM_PITS,
    BoardState,
    apply_move,
    init_custom,
    is_terminal_state,
    legal_actions,
)
from mancalamax.io.display import print_board
from mancalamax.io.registry import AGENTS, pick_action
from mancalamax.io.state_io import StateFormatError, format_move, load_json_state, parse_state_tokens
from mancalamax.simulations import DEFAULT_AGENTS, make_strategy, run_simulations, summarize
from mancalamax.utils.config import Settings

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mancalamax",
        description="Kalah-style Mancala with the pie rule, played by alpha-beta search",
    )
    parser.add_argument(
        "--heuristic",
        choices=list(HEURISTICS.keys()),
        default=None,
        help="Cutoff evaluation (default: MANCALAMAX_HEURISTIC or 'default')",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for random fallback moves",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: MANCALAMAX_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play a game in the terminal")
    play.add_argument("--pits", type=int, default=NUM_PITS, help=f"Pits per side (default: {NUM_PITS})")
    play.add_argument("--stones", type=int, default=INITIAL_STONES,
                      help=f"Stones per pit (default: {INITIAL_STONES})")
    play.add_argument("--human", type=int, choices=[1, 2], default=2,
                      help="Seat of the human player (default: 2)")
    play.add_argument("--self-play", action="store_true", help="Computer plays both seats")
    play.add_argument("--agent", choices=list(AGENTS.keys()), default="iterative",
                      help="Computer player (default: iterative)")
    play.add_argument("--time-limit-ms", "-t", type=int, default=None,
                      help="Thinking time per move in ms (default: MANCALAMAX_TIME_LIMIT_MS or 1000)")
    play.add_argument("--max-depth", "-d", type=int, default=None,
                      help="Iterative-deepening depth ceiling (default: MANCALAMAX_MAX_DEPTH or 1000)")

    solve = sub.add_parser("solve", help="Pick a move for one position")
    solve.add_argument("path", nargs="?", default="-", help="Position file, '-' for stdin (default)")
    solve.add_argument("--json", action="store_true", help="Position is JSON instead of STATE tokens")
    solve.add_argument("--depth", "-d", type=int, default=None,
                       help="Search depth (default: MANCALAMAX_FIXED_DEPTH or 8)")
    solve.add_argument("--time-limit-ms", "-t", type=int, default=None,
                       help="Use iterative deepening with this budget instead of a fixed depth")

    tour = sub.add_parser("tournament", help="Round-robin self-play between agents")
    tour.add_argument("--agents", "-a", default=",".join(DEFAULT_AGENTS),
                      help=f"Comma-separated agents (default: {','.join(DEFAULT_AGENTS)})")
    tour.add_argument("--games", "-g", type=int, default=10, help="Games per pairing (default: 10)")
    tour.add_argument("--pits", type=int, default=NUM_PITS)
    tour.add_argument("--stones", type=int, default=INITIAL_STONES)
    tour.add_argument("--time-limit-ms", "-t", type=int, default=None)
    tour.add_argument("--depth", "-d", type=int, default=None, help="Fixed search depth")
    tour.add_argument("--csv", default=None, help="Write raw results to this CSV file")
    tour.add_argument("--no-progress", action="store_true", help="Hide progress bars")

    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with command-line overrides applied."""
    env = Settings.from_env()
    time_limit = getattr(args, "time_limit_ms", None)
    max_depth = getattr(args, "max_depth", None)
    depth = getattr(args, "depth", None)
    return Settings(
        time_limit_ms=time_limit if time_limit is not None else env.time_limit_ms,
        max_depth=max_depth if max_depth is not None else env.max_depth,
        fixed_depth=depth if depth is not None else env.fixed_depth,
        heuristic=args.heuristic or env.heuristic,
        seed=args.seed if args.seed is not None else env.seed,
        log_level=args.log_level or env.log_level,
    )


# ---------------------------------------------------------------------------
# play
# ---------------------------------------------------------------------------

def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def read_human_move(state: BoardState, tokens: Iterator[str]) -> Optional[int]:
    """Next enumerated move typed by the user, or None once input runs out."""
    legal = legal_actions(state)
    for token in tokens:
        try:
            move = int(token)
        except ValueError:
            print(f"Not a number: {token!r}. Legal moves: {legal}")
            continue
        if move not in legal:
            print(f"Illegal move {move}. Legal moves: {legal}")
            continue
        return move
    return None


def run_play(args: argparse.Namespace, settings: Settings, stdin: Optional[TextIO] = None) -> int:
    state = init_custom(args.pits, args.stones)
    if state is None:
        print("error: --pits and --stones must both be at least 1", file=sys.stderr)
        return 1

    human_seats = set() if args.self_play else {args.human - 1}
    tokens = _tokens(stdin or sys.stdin)
    print_board(state)

    while not is_terminal_state(state):
        if state.current_player in human_seats:
            move = read_human_move(state, tokens)
            if move is None:
                print("error: input closed before the game finished", file=sys.stderr)
                return 1
            print(f"USER SELECTED: {move}")
        else:
            move = pick_action(state, args.agent, settings)
            print(f"MINIMAX SELECTED: {move}")

        state = apply_move(state, move)
        print_board(state)

    print(f"Final score (P1 - P2): {state.stores[0] - state.stores[1]}")
    return 0


# ---------------------------------------------------------------------------
# solve
# ---------------------------------------------------------------------------

def _read_input(path: str, stdin: TextIO) -> str:
    if path == "-":
        return stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def run_solve(args: argparse.Namespace, settings: Settings, stdin: Optional[TextIO] = None) -> int:
    try:
        text = _read_input(args.path, stdin or sys.stdin)
        state = load_json_state(text) if args.json else parse_state_tokens(text)
    except (OSError, StateFormatError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"error: invalid state: {e.messages}", file=sys.stderr)
        return 1

    heuristic = get_heuristic(settings.heuristic)
    if args.time_limit_ms is not None:
        move = search_time_bounded(state, settings.time_limit_ms, settings.max_depth,
                                   heuristic, rng=settings.rng)
    else:
        move = search_fixed_depth(state, settings.fixed_depth, heuristic, rng=settings.rng)

    if move == NO_MOVE:
        print("error: no moves available, the game is over", file=sys.stderr)
        return 1

    print(format_move(move))
    return 0


# ---------------------------------------------------------------------------
# tournament
# ---------------------------------------------------------------------------

def run_tournament(args: argparse.Namespace, settings: Settings) -> int:
    names = [a.strip() for a in args.agents.split(",") if a.strip()]
    if init_custom(args.pits, args.stones) is None:
        print("error: --pits and --stones must both be at least 1", file=sys.stderr)
        return 1
    try:
        strategies = [make_strategy(name, settings) for name in names]
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    results = run_simulations(strategies, args.games, args.pits, args.stones,
                              progress=not args.no_progress)
    tables = summarize(results)

    if args.csv:
        tables["results"].to_csv(args.csv, index=False)
        print(f"Results written to {args.csv}")

    print("\nWin rates:")
    print(tables["win_rates"])
    print("\nAverage game time (s):")
    print(tables["avg_times"])
    print("\nScore difference (P1 - P2):")
    print(tables["score_stats"])
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = build_settings(args)
        get_heuristic(settings.heuristic)
        logging.basicConfig(
            level=settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    logger.debug("settings: %r", settings)

    if args.command == "play":
        return run_play(args, settings)
    if args.command == "solve":
        return run_solve(args, settings)
    return run_tournament(args, settings)


if __name__ == "__main__":
    sys.exit(main())
