from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List

from lispy.core.config import get_settings
from lispy.core.exceptions import LispyError, LispyParseError
from lispy.models.evaluation import EvaluationResult
from lispy.services.evaluator import EvaluatorService
from lispy.services.evaluator_http import EvaluatorHttpClient

try:
    # Line editing and history for input(); not available on every platform.
    import readline  # noqa: F401
except ImportError:
    readline = None

logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")
logger = logging.getLogger("lispy.repl")

BANNER = ["Lispy Version 0.0.0.0.1", "Press Ctrl+c to Exit\n"]

Evaluate = Callable[[str], EvaluationResult]


def evaluate_line(evaluate: Evaluate, line: str) -> str:
    try:
        return evaluate(line).output
    except LispyParseError as exc:
        return exc.message


def run_repl(
    evaluate: Evaluate,
    *,
    prompt: str,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    for line in BANNER:
        write(line)

    while True:
        try:
            line = read(prompt)
        except (EOFError, KeyboardInterrupt):
            write("")
            return 0

        try:
            write(evaluate_line(evaluate, line))
        except LispyError as exc:
            logger.warning("repl.evaluation_failed", extra={"error_type": exc.error_type})
            write(exc.message)


def _build_evaluator(args: argparse.Namespace) -> Evaluate:
    if args.remote:
        return EvaluatorHttpClient.from_settings().evaluate
    return EvaluatorService.from_settings().evaluate


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Interactive prefix arithmetic evaluator.")
    parser.add_argument("--prompt", default=settings.repl_prompt, help="Prompt shown before each line.")
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Evaluate through the HTTP evaluator configured by EVAL_HTTP_BASE_URL.",
    )
    parser.add_argument("-e", "--eval", dest="expression", help="Evaluate one expression, print it and exit.")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        evaluate = _build_evaluator(args)
    except LispyError as exc:
        print(exc.message, file=sys.stderr)
        return 1

    if args.expression is not None:
        try:
            print(evaluate(args.expression).output)
        except LispyError as exc:
            print(exc.message, file=sys.stderr)
            return 1
        return 0

    return run_repl(evaluate, prompt=args.prompt)


if __name__ == "__main__":
    sys.exit(main())
