"""Answer-key sequence generation.

Produces the letter sequence handed to the question generator as a placement
hint: near-uniform letter counts and no letter repeated in consecutive
positions.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from ..data.schemas import LETTERS, NUM_OPTIONS
from ..errors import GenerationExhausted
from ..utils.determinism import make_rng
from .shuffle import fisher_yates

logger = logging.getLogger(__name__)

RETRIEVAL_TOPICS = 3
QUESTIONS_PER_TOPIC = 10
RETRIEVAL_QUESTION_COUNT = RETRIEVAL_TOPICS * QUESTIONS_PER_TOPIC

DEFAULT_MAX_REPAIR_ATTEMPTS = 100
DEFAULT_MAX_GENERATIONS = 1000


@dataclass(frozen=True)
class SequenceValidation:
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class KeyComparison:
    is_valid: bool
    message: str
    mismatch_position: Optional[int] = None  # 0-based


def allowed_count_range(length: int) -> tuple[int, int]:
    """Inclusive bounds on how often each letter may appear in ``length`` slots."""
    return length // NUM_OPTIONS, math.ceil(length / NUM_OPTIONS)


def validate_answer_sequence(
    sequence: Iterable[str], expected_length: Optional[int] = None
) -> SequenceValidation:
    """Check alphabet, adjacency and distribution of an answer sequence."""
    seq = list(sequence)
    errors: List[str] = []

    if expected_length is not None and len(seq) != expected_length:
        errors.append(f"Length must be {expected_length}, got {len(seq)}")

    for i in range(len(seq) - 1):
        if seq[i] == seq[i + 1]:
            errors.append(f"Consecutive duplicate at positions {i} and {i + 1}: {seq[i]!r}")

    counts = {letter: 0 for letter in LETTERS}
    for i, letter in enumerate(seq):
        if isinstance(letter, str) and letter in counts:
            counts[letter] += 1
        else:
            errors.append(f"Invalid letter {letter!r} at position {i}")

    low, high = allowed_count_range(len(seq))
    for letter, count in counts.items():
        if not low <= count <= high:
            errors.append(f"Letter {letter!r} appears {count} times, should be {low}-{high}")

    return SequenceValidation(is_valid=not errors, errors=errors, counts=counts)


def _swap_leaves_repeat(seq: List[str], a: int, b: int) -> bool:
    """Would swapping seq[a] and seq[b] leave equal neighbours next to either slot?"""
    seq[a], seq[b] = seq[b], seq[a]
    try:
        last = len(seq) - 1
        return any(
            0 <= k < last and seq[k] == seq[k + 1]
            for k in {a - 1, a, b - 1, b}
        )
    finally:
        seq[a], seq[b] = seq[b], seq[a]


def _repair_adjacent(letters: List[str], rng: random.Random, max_attempts: int) -> bool:
    """Remove adjacent duplicates in place by forward swaps.

    When a duplicate has no usable swap partner the whole list is reshuffled
    and the scan starts over, up to ``max_attempts`` times.
    """
    for attempt in range(max_attempts):
        stuck_at = None
        for i in range(len(letters) - 1):
            if letters[i] != letters[i + 1]:
                continue
            for j in range(i + 2, len(letters)):
                if not _swap_leaves_repeat(letters, i + 1, j):
                    letters[i + 1], letters[j] = letters[j], letters[i + 1]
                    break
            else:
                stuck_at = i
                break
        if stuck_at is None:
            return True
        logger.debug("No swap partner for duplicate at %d, reshuffling (attempt %d)", stuck_at, attempt + 1)
        letters[:] = fisher_yates(letters, rng)
    return all(letters[i] != letters[i + 1] for i in range(len(letters) - 1))


def generate_answer_sequence(
    length: int,
    rng: Optional[random.Random] = None,
    max_repair_attempts: int = DEFAULT_MAX_REPAIR_ATTEMPTS,
    max_generations: int = DEFAULT_MAX_GENERATIONS,
) -> str:
    """Generate a ``length``-letter answer sequence over a, b, c, d.

    The result has no two equal neighbours and every letter appears
    floor(length/4) or ceil(length/4) times.

    Args:
        length: Number of questions; must be a positive integer
        rng: Random source (``random.Random`` interface); OS entropy if None
        max_repair_attempts: Reshuffles allowed while removing duplicates
        max_generations: Full regenerations allowed before giving up

    Raises:
        ValueError: If ``length`` is not a positive integer
        GenerationExhausted: If no valid sequence was found in time
    """
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise ValueError(f"length must be a positive integer, got {length!r}")
    if max_generations < 1 or max_repair_attempts < 1:
        raise ValueError("max_generations and max_repair_attempts must be at least 1")
    rng = rng if rng is not None else make_rng()

    per_letter = math.ceil(length / NUM_OPTIONS)
    errors: List[str] = []
    for attempt in range(1, max_generations + 1):
        letters = fisher_yates([letter for letter in LETTERS for _ in range(per_letter)], rng)
        _repair_adjacent(letters, rng, max_repair_attempts)
        sequence = letters[:length]

        result = validate_answer_sequence(sequence, expected_length=length)
        if result.is_valid:
            logger.debug(
                "Generated %d-letter answer sequence after %d attempt(s)",
                length,
                attempt,
                extra={"length": length, "attempts": attempt},
            )
            return "".join(sequence)
        errors = result.errors
        logger.debug("Generated sequence failed validation, regenerating: %s", "; ".join(errors))

    logger.error(
        "Answer sequence generation exhausted after %d attempts",
        max_generations,
        extra={"length": length, "attempts": max_generations, "error_type": "GenerationExhausted"},
    )
    raise GenerationExhausted(length, max_generations, errors)


def generate_retrieval_answer_sequence(rng: Optional[random.Random] = None) -> str:
    """30-letter sequence for a three-topic retrieval quiz."""
    return generate_answer_sequence(RETRIEVAL_QUESTION_COUNT, rng=rng)


def split_answer_sequence(sequence: str, sizes: Sequence[int]) -> List[str]:
    """Cut one sequence into consecutive per-topic slices."""
    if any(s <= 0 for s in sizes):
        raise ValueError(f"Slice sizes must be positive, got {list(sizes)}")
    if sum(sizes) != len(sequence):
        raise ValueError(f"Slice sizes sum to {sum(sizes)}, sequence has {len(sequence)} letters")
    out: List[str] = []
    start = 0
    for size in sizes:
        out.append(sequence[start:start + size])
        start += size
    return out


def parse_answer_sequence(text: Iterable[str]) -> List[str]:
    """Lowercase and keep only a-d characters from a free-form answer key."""
    return [c for c in "".join(text).lower() if c in LETTERS]


def compare_answer_keys(generated: Iterable[str], expected: Iterable[str]) -> KeyComparison:
    """Report whether a generator's answer key follows the requested sequence."""
    got = parse_answer_sequence(generated)
    want = parse_answer_sequence(expected)

    if len(got) != len(want):
        return KeyComparison(
            is_valid=False,
            message=f"Length mismatch: generated {len(got)}, expected {len(want)}",
        )

    for i, (g, w) in enumerate(zip(got, want)):
        if g != w:
            return KeyComparison(
                is_valid=False,
                message=f"Mismatch at position {i + 1}: generated {g!r}, expected {w!r}",
                mismatch_position=i,
            )

    return KeyComparison(is_valid=True, message="Answer key matches expected sequence")
