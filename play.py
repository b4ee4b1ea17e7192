#!/usr/bin/env python3
"""Play a single answer with detailed per-turn output.

Usage:
    python3 play.py crane
    python3 play.py crane --answers data/answer_words.txt --guesses data/guess_words.txt
    python3 play.py crane --no-first-guess --workers 8   # compute the opening too
    python3 play.py crane --json results/crane.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.text import Text

from game import ABSENT, EXACT, PRESENT, Game, Turn
from lexicon import load_lexicon
from opening import resolve_first_guess
from word import Word

_STYLES = {
    EXACT: "black on green",
    PRESENT: "black on yellow",
    ABSENT: "black on white",
}


def render_turn(turn: Turn) -> Text:
    """Colored tiles for one guess."""
    text = Text()
    for letter, mark in zip(turn.guess.text, turn.feedback):
        text.append(letter, style=_STYLES[mark])
    return text


def run_game(game: Game, console: Console | None = None) -> list[dict]:
    """Play *game* to the end, printing each turn if *console* is given."""
    steps: list[dict] = []
    while not game.is_solved():
        turn = game.step()
        steps.append({
            "guess": turn.guess.text,
            "feedback": list(turn.feedback),
            "remaining": turn.remaining,
            "pattern": game.state.pattern,
        })
        if console is not None:
            line = render_turn(turn)
            line.append(f"  remaining={turn.remaining}")
            console.print(line)
    return steps


def main() -> None:
    parser = argparse.ArgumentParser(description="Solve one answer verbosely")
    parser.add_argument("word", type=str, help="The answer to solve for")
    parser.add_argument("--answers", type=str, default=None, help="Path to answer word list")
    parser.add_argument("--guesses", type=str, default=None, help="Path to guess word list")
    parser.add_argument("--first-guess", type=str, default=None,
                        help="Forced opening (default: cached or 'aesir')")
    parser.add_argument("--no-first-guess", action="store_true",
                        help="Let the solver compute the opening (slow on full lists)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Parallel workers for the search (default: all cores)")
    parser.add_argument("--json", type=str, default=None, help="Save the game log as JSON")
    args = parser.parse_args()

    try:
        answer = Word(args.word)
        override = Word(args.first_guess) if args.first_guess is not None else None
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    lex = load_lexicon(args.answers, args.guesses)
    if answer not in lex.answers:
        print(f"error: word is not a possible answer: {answer}", file=sys.stderr)
        sys.exit(1)

    opening = None
    if not args.no_first_guess:
        opening = resolve_first_guess(lex.answers, lex.guesses, override=override)
        if opening is None:
            print("  [warn] opening is not in the guess list; computing it instead",
                  file=sys.stderr)

    game = Game(answer, lex.answers, lex.guesses, first_guess=opening,
                max_workers=args.workers)
    console = Console()
    steps = run_game(game, console)
    console.print(f"Solved [bold]{answer}[/bold] in {game.num_guesses} guesses")

    if args.json:
        json_path = Path(args.json)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        output = {
            "answer": answer.text,
            "num_guesses": game.num_guesses,
            "steps": steps,
            "knowledge": game.state.summary(),
        }
        json_path.write_text(json.dumps(output, indent=2), encoding="utf-8")
        print(f"JSON saved to {json_path}")


if __name__ == "__main__":
    main()
