"""
Command line entry point.

Run:
  wordle-minimax opener guesses.txt solutions.txt
  wordle-minimax worst-case guesses.txt solutions.txt --opener aggri --workers 8
  wordle-minimax play guesses.txt solutions.txt crane
  wordle-minimax buckets guesses.txt solutions.txt aggri
"""

import argparse
import sys
from typing import List, Optional

from .analysis import print_results, resolve_opener, simulate_all, summarize
from .banks import WordBanks
from .buckets import largest_bucket
from .game import FixedWordle
from .grading import DEFAULT_RULE, RULES, grade_to_emoji
from .selector import rank_guesses


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordle-minimax",
        description="Minimax-bucket Wordle strategy: best opener and worst-case game length.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("guesses", help="Path to the guess word list (one word per line)")
    common.add_argument("solutions", help="Path to the solution word list (one word per line)")
    common.add_argument("--no-union", action="store_true",
                        help="Do not add solution words to the guess bank")
    common.add_argument("--rule", choices=RULES, default=DEFAULT_RULE,
                        help=f"Grading rule (default: {DEFAULT_RULE})")
    common.add_argument("--quiet", action="store_true", help="Only print the answer")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("opener", parents=[common], help="Best opening guess")
    p.add_argument("--top", type=int, default=10, help="Runners-up to list (default: 10)")

    p = sub.add_parser("worst-case", parents=[common], help="Worst-case game length")
    p.add_argument("--opener", type=str, default=None,
                   help="Turn-1 guess (default: computed best opener)")
    p.add_argument("--workers", type=int, default=None, help="Worker threads (default: auto)")

    p = sub.add_parser("play", parents=[common], help="Trace one simulated game")
    p.add_argument("word", help="Hidden solution")
    p.add_argument("--opener", type=str, default=None,
                   help="Turn-1 guess (default: computed best opener)")

    p = sub.add_parser("buckets", parents=[common], help="Largest bucket a guess leaves")
    p.add_argument("word", help="Guess to inspect")

    return parser


def _cmd_opener(banks: WordBanks, args) -> None:
    ranked = rank_guesses(None, banks, top=max(args.top, 1))
    best, worst = ranked[0]
    if args.quiet:
        print(banks.guesses[best])
        return
    print(f"Best opener id: {best}")
    print(f"Best opener: {banks.guesses[best]} (worst bucket {worst} of {banks.n_solutions})")
    print("\nTop guesses:")
    for g, w in ranked:
        print(f"  {banks.guesses[g]:>5}  {w}")


def _cmd_worst_case(banks: WordBanks, args) -> None:
    verbose = not args.quiet
    results = simulate_all(banks, opener=args.opener, workers=args.workers, verbose=verbose)
    summary = summarize(results)
    if args.quiet:
        print(summary['worst_case'])
    else:
        print_results(summary)


def _cmd_play(banks: WordBanks, args) -> None:
    solution = banks.solution_id(args.word)
    opener = resolve_opener(banks, args.opener, verbose=not args.quiet)
    game = FixedWordle(banks, solution, opener=opener)
    while not game.is_terminal:
        n_cand = len(game.left)
        game.update()
        g, grade = game.history[-1]
        if not args.quiet:
            print(f"Turn {game.turns}: {banks.guesses[g]} -> {grade_to_emoji(grade)} "
                  f"({n_cand} -> {len(game.left)} candidates)")
            if 1 < len(game.left) <= 10:
                print(f"        remaining: {[banks.solutions[c] for c in game.left]}")
    res = game.result()
    if args.quiet:
        print(res.turns)
    else:
        print(f"\nIsolated '{res.solution}' in {res.turns} turns "
              f"({res.guesses_to_win} guesses to win)")


def _cmd_buckets(banks: WordBanks, args) -> None:
    guess = banks.guess_id(args.word)
    bkt = largest_bucket(guess, None, banks)
    print(len(bkt))
    if not args.quiet:
        print([banks.solutions[c] for c in bkt])


COMMANDS = {
    "opener": _cmd_opener,
    "worst-case": _cmd_worst_case,
    "play": _cmd_play,
    "buckets": _cmd_buckets,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        banks = WordBanks.from_files(args.guesses, args.solutions,
                                     union=not args.no_union, rule=args.rule,
                                     verbose=not args.quiet)
        if not args.quiet:
            print(f"  Guesses: {banks.n_guesses} words")
            print(f"  Solutions: {banks.n_solutions} words")
        COMMANDS[args.command](banks, args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
