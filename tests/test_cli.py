# tests/test_cli.py
import io
import json

import pytest

from mancalamax.cli import main


def _run(monkeypatch, argv, stdin=""):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    return main(argv)

# ----------------------------- solve ---------------------------------------

def test_solve_prints_a_pit(monkeypatch, capsys):
    rc = _run(monkeypatch, ["solve", "--depth", "3"], "STATE 6 " + "4 " * 12 + "0 0 1 1")
    out = capsys.readouterr().out.strip()
    assert rc == 0
    assert out in {"1", "2", "3", "4", "5", "6"}

def test_solve_prints_pie(monkeypatch, capsys):
    rc = _run(monkeypatch, ["solve", "-d", "3"], "STATE 2 0 1 0 1 10 0 2 2")
    assert rc == 0
    assert capsys.readouterr().out.strip() == "PIE"

def test_solve_with_time_budget(monkeypatch, capsys):
    rc = _run(monkeypatch, ["--seed", "1", "solve", "-t", "0"], "STATE 2 2 2 2 2 0 0 1 1")
    assert rc == 0
    assert capsys.readouterr().out.strip() in {"1", "2"}

def test_solve_bad_header_exits_nonzero(monkeypatch, capsys):
    rc = _run(monkeypatch, ["solve"], "BOARD 2 2 2 2 2 0 0 1 1")
    assert rc == 1
    assert "STATE header" in capsys.readouterr().err

def test_solve_finished_game(monkeypatch, capsys):
    rc = _run(monkeypatch, ["solve"], "STATE 2 0 0 0 0 3 5 20 1")
    assert rc == 1
    assert "no moves" in capsys.readouterr().err

def test_solve_json_file(tmp_path, capsys):
    path = tmp_path / "pos.json"
    path.write_text(json.dumps({"pits": [[1, 1], [2, 2]], "stores": [0, 0], "ply": 3, "current_player": 0}))
    assert main(["solve", "--json", "-d", "2", str(path)]) == 0
    assert capsys.readouterr().out.strip() == "2"

def test_solve_invalid_json(monkeypatch, capsys):
    rc = _run(monkeypatch, ["solve", "--json"], '{"pits": [[1], [1, 1]], "stores": [0, 0], "current_player": 0}')
    assert rc == 1
    assert "invalid state" in capsys.readouterr().err

def test_solve_missing_file(tmp_path, capsys):
    assert main(["solve", str(tmp_path / "nope.txt")]) == 1

# ----------------------------- play ----------------------------------------

def test_self_play_runs_to_the_end(monkeypatch, capsys):
    rc = _run(monkeypatch, ["--seed", "2", "play", "--pits", "3", "--stones", "2",
                            "--self-play", "--agent", "alpha_beta"])
    out = capsys.readouterr().out
    assert rc == 0
    assert out.count("MINIMAX SELECTED") >= 1
    assert "USER SELECTED" not in out
    assert "Final score (P1 - P2):" in out

def test_human_input_is_checked(monkeypatch, capsys):
    moves = "x 5 " + "1 2 " * 30
    rc = _run(monkeypatch, ["--seed", "0", "play", "--pits", "2", "--stones", "1",
                            "--human", "1", "--agent", "random"], moves)
    out = capsys.readouterr().out
    assert rc == 0
    assert "Not a number: 'x'" in out
    assert "Illegal move 5" in out
    assert "USER SELECTED: 1" in out
    assert "Bird's-Eye View" in out

def test_closed_input_aborts(monkeypatch, capsys):
    rc = _run(monkeypatch, ["play", "--human", "1"], "")
    assert rc == 1
    assert "input closed" in capsys.readouterr().err

def test_play_rejects_empty_board(monkeypatch, capsys):
    assert _run(monkeypatch, ["play", "--pits", "0"]) == 1

# ----------------------------- settings ------------------------------------

def test_bad_environment_is_reported(monkeypatch, capsys):
    monkeypatch.setenv("MANCALAMAX_MAX_DEPTH", "lots")
    assert _run(monkeypatch, ["solve"], "STATE 2 2 2 2 2 0 0 1 1") == 1
    assert "MANCALAMAX_MAX_DEPTH" in capsys.readouterr().err

def test_unknown_heuristic_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("MANCALAMAX_HEURISTIC", "magic")
    assert _run(monkeypatch, ["solve"], "STATE 2 2 2 2 2 0 0 1 1") == 1

def test_unknown_subcommand_option():
    with pytest.raises(SystemExit):
        main(["play", "--agent", "oracle"])

# ----------------------------- tournament ----------------------------------

def test_tournament_writes_csv(tmp_path, capsys):
    csv = tmp_path / "results.csv"
    rc = main(["--seed", "4", "tournament", "--agents", "random,alpha_beta", "--games", "1",
               "--pits", "3", "--stones", "2", "-d", "2", "--no-progress", "--csv", str(csv)])
    out = capsys.readouterr().out
    assert rc == 0
    assert csv.exists()
    assert "Win rates:" in out

def test_tournament_unknown_agent(capsys):
    assert main(["tournament", "--agents", "random,oracle", "--no-progress"]) == 1
    assert "Unknown agent" in capsys.readouterr().err
