from __future__ import annotations

import sys

import pytest
from rich.console import Console

import play
from bench import time_first_guess
from constraints import ConstraintState
from game import Game
from play import render_turn, run_game
from precompute_first_guess import find_best_first_guess
from solver import best_guess


def test_render_turn_styles(table):
    game = Game("crane", table, table, first_guess="trace")
    text = render_turn(game.step())
    assert text.plain == "trace"
    styles = [str(span.style) for span in text.spans]
    assert styles == ["black on white", "black on green", "black on green",
                      "black on yellow", "black on green"]


def test_run_game_log(table):
    game = Game("crane", table, table, first_guess="trace")
    steps = run_game(game)
    assert steps[0] == {"guess": "trace", "feedback": [0, 2, 2, 1, 2],
                        "remaining": 1, "pattern": ".ra.e"}
    assert steps[-1]["guess"] == "crane"
    assert steps[-1]["pattern"] == "crane"


def test_run_game_prints_turns(table):
    console = Console(record=True, width=80)
    run_game(Game("crane", table, table, first_guess="trace"), console)
    out = console.export_text()
    assert "trace  remaining=1" in out
    assert "crane  remaining=1" in out


def test_first_guess_helpers(toy):
    assert find_best_first_guess(toy, toy, max_workers=1, verbose=False) == best_guess(
        ConstraintState(), toy, toy)
    times = time_first_guess(toy, repeat=2)
    assert len(times) == 2 and all(t >= 0 for t in times)


@pytest.mark.parametrize("argv", [["CR4NE"], ["crane", "--first-guess", "CR4NE"]])
def test_cli_rejects_malformed_words(monkeypatch, capsys, argv):
    monkeypatch.setattr(sys, "argv", ["play.py", *argv])
    with pytest.raises(SystemExit) as exc:
        play.main()
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("error:")
