from __future__ import annotations

import csv
import json
import sys

import pytest

import benchmark
from benchmark import BenchmarkResults, GameResult, run_benchmark
from word import WordTable


def test_serial_run_keeps_secret_order(words):
    secrets = [words[5], words[0], words[17]]
    results = run_benchmark(words, words, first_guess=None, secrets=secrets,
                            max_workers=1, chunk_size=2, verbose=False)
    assert [g.answer for g in results.games] == [w.text for w in secrets]
    assert all(g.num_guesses >= 1 for g in results.games)


def test_forced_opening_solves_itself(words):
    results = run_benchmark(words, words, first_guess=words[0], secrets=[words[0]],
                            max_workers=1, verbose=False)
    assert results.games == [GameResult(words[0].text, 1)]


def test_summary():
    results = BenchmarkResults([GameResult("crane", 3), GameResult("slate", 4),
                                GameResult("zonal", 7), GameResult("abide", 3)])
    s = results.summary()
    assert s["words"] == 4
    assert (s["max"], s["min"]) == (7, 3)
    assert s["avg"] == 4.25
    assert s["win_rate"] == 0.75
    assert s["guess_distribution"] == {"3": 2, "4": 1, "7": 1}


def test_empty_summary():
    assert BenchmarkResults().summary()["words"] == 0


def test_print_summary(capsys):
    BenchmarkResults([GameResult("crane", 3), GameResult("zonal", 7)]).print_summary()
    assert capsys.readouterr().out.strip() == "Words=2 Max=7 Min=3 Avg=5.00 Win=50.00%"


def test_csv_and_json(tmp_path):
    results = BenchmarkResults([GameResult("crane", 3), GameResult("zonal", 7)])
    results.to_csv(tmp_path / "out" / "r.csv")
    with (tmp_path / "out" / "r.csv").open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows == [["answer", "num_guesses", "won"], ["crane", "3", "1"], ["zonal", "7", "0"]]

    results.to_json(tmp_path / "r.json", {"opening": "aesir"})
    data = json.loads((tmp_path / "r.json").read_text(encoding="utf-8"))
    assert data["config"] == {"opening": "aesir"}
    assert data["summary"]["words"] == 2
    assert data["games"][1] == {"answer": "zonal", "num_guesses": 7}


def test_word_tables_reach_every_game(monkeypatch, words, table):
    seen = []

    def fake_play(answer, answers, guesses, first_guess, max_workers):
        seen.append((answers, guesses))
        return 1

    monkeypatch.setattr(benchmark, "play", fake_play)
    run_benchmark(table, words, first_guess=None, secrets=["crane", "slate"],
                  max_workers=1, verbose=False)
    assert len(seen) == 2
    for answers, guesses in seen:
        assert answers is table
        assert isinstance(guesses, WordTable)
        assert guesses.words == table.words


def test_cli_rejects_malformed_first_guess(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["benchmark.py", "--first-guess", "CR4NE"])
    with pytest.raises(SystemExit) as exc:
        benchmark.main()
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("error:")
