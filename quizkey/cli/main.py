from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from quizkey.config import AppConfig, default_app_config
from quizkey.data.loader import load_quiz, save_quiz
from quizkey.errors import QuizKeyError
from quizkey.keys.sequence import compare_answer_keys, generate_answer_sequence, split_answer_sequence
from quizkey.keys.shuffle import shuffle_quiz
from quizkey.statistical.position_bias import analyze_answer_key
from quizkey.utils.determinism import make_rng
from quizkey.utils.logging import setup_logging


def _parse_sizes(text: str) -> List[int]:
    try:
        return [int(x) for x in text.split(",") if x.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected comma-separated integers, got {text!r}")


def _load_config(path: Optional[str]) -> AppConfig:
    if path is None:
        return default_app_config().apply_env()
    return AppConfig.from_file(path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizkey",
        description="quizkey CLI - unbiased answer keys for multiple-choice quizzes",
        epilog="""Examples:
  # 30-letter placement hint for a retrieval quiz, split per topic
  quizkey sequence --length 30 --split 10,10,10

  # Shuffle options of a generated quiz and rewrite its answer key
  quizkey shuffle output.json shuffled.json --seed 7

  # Check the answer key of a quiz for positional bias
  quizkey audit shuffled.json --output results/audit.json

  # Did the generator follow the requested placement?
  quizkey check-key abcdcbadcb abcdcbadca
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", "-c", default=None, help="Path to config file (.json/.yaml); defaults built in")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    seq_parser = subparsers.add_parser("sequence", help="Generate an answer-position sequence")
    seq_parser.add_argument("--length", "-n", type=int, default=30, help="Number of questions (default: 30)")
    seq_parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides config)")
    seq_parser.add_argument("--split", type=_parse_sizes, default=None, help="Comma-separated per-topic sizes, e.g. 10,10,10")

    shuffle_parser = subparsers.add_parser("shuffle", help="Shuffle quiz options and rewrite the answer key")
    shuffle_parser.add_argument("input", help="Quiz file (.json/.yaml)")
    shuffle_parser.add_argument("output", help="Output JSON path")
    shuffle_parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides config)")

    audit_parser = subparsers.add_parser("audit", help="Analyze answer-key position bias of a quiz")
    audit_parser.add_argument("input", help="Quiz file (.json/.yaml)")
    audit_parser.add_argument("--output", "-o", help="Output file path for the report (JSON format)")
    audit_parser.add_argument("--significance", type=float, default=0.05, help="Significance level (default: 0.05)")

    check_parser = subparsers.add_parser("check-key", help="Compare a generated answer key with the requested one")
    check_parser.add_argument("generated", help="Answer key returned by the generator")
    check_parser.add_argument("expected", help="Requested answer sequence")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        cfg = _load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Config file '{args.config}' not found")
        return 1
    except (json.JSONDecodeError, TypeError, ValueError) as e:
        source = args.config or "environment"
        print(f"Error: Invalid config in '{source}': {e}")
        return 1
    logger = setup_logging(cfg.logging.log_dir, cfg.logging.filename, cfg.logging.level, cfg.logging.structured)

    seed = getattr(args, "seed", None)
    if seed is None:
        seed = cfg.determinism.seed

    try:
        if args.command == "sequence":
            sequence = generate_answer_sequence(
                args.length,
                rng=make_rng(seed),
                max_repair_attempts=cfg.sequence.max_repair_attempts,
                max_generations=cfg.sequence.max_generations,
            )
            logger.info("Generated answer sequence of length %d", len(sequence), extra={"seed": seed})
            if args.split:
                for part in split_answer_sequence(sequence, args.split):
                    print(part)
            else:
                print(sequence)
            return 0

        elif args.command == "shuffle":
            quiz = load_quiz(args.input)
            shuffled = shuffle_quiz(quiz, rng=make_rng(seed))
            save_quiz(args.output, shuffled)
            print(f"Wrote shuffled quiz to {args.output}")
            print(f"Answer key: {shuffled.answer_key_string}")
            logger.info(
                "Shuffled %d questions from %s into %s",
                shuffled.question_count, args.input, args.output,
                extra={"seed": seed},
            )
            return 0

        elif args.command == "audit":
            quiz = load_quiz(args.input)
            report = analyze_answer_key(
                quiz.answer_key,
                significance_level=args.significance,
                save_path=Path(args.output) if args.output else None,
            )
            chi = report.chi_square_results
            print("\nAnswer Key Position Bias")
            print("========================")
            print(f"Questions: {report.total_questions}")
            print(f"Frequencies: {report.position_frequencies}")
            print(f"Chi-square statistic: {chi['chi_square_statistic']:.4f}")
            print(f"P-value: {chi['p_value']:.6f}")
            print(f"Effect size (Cramer's V): {chi['effect_size']:.4f}")
            print(f"Significant bias detected: {'YES' if chi['significant'] else 'NO'}")
            print(f"Adjacent repeats: {report.adjacent_repeats}")
            print(f"Longest run: {report.longest_run}")
            if args.output:
                print(f"\nDetailed results saved to: {args.output}")
            logger.info(
                "Audit completed: bias_detected=%s, adjacent_repeats=%d",
                chi["significant"], report.adjacent_repeats,
                extra={"metrics": asdict(report)["summary_statistics"]},
            )
            return 0

        elif args.command == "check-key":
            result = compare_answer_keys(args.generated, args.expected)
            print(result.message)
            logger.info("Answer key comparison: %s", result.message)
            return 0 if result.is_valid else 2

        parser.error(f"Unknown command: {args.command}")
        return 1

    except FileNotFoundError as e:
        print(f"Error: {e}")
        logger.error("FileNotFoundError: %s", e)
        return 1
    except QuizKeyError as e:
        print(f"Error: {e}")
        logger.error("%s: %s", type(e).__name__, e, extra={"error_type": type(e).__name__})
        return 1
    except ValueError as e:
        print(f"Error: Invalid data format - {e}")
        logger.error("ValueError: %s", e, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
