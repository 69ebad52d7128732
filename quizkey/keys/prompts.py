"""Placement-hint text for the upstream question generator.

Only builds strings; sending them to a model is the caller's business.
"""

from __future__ import annotations

from typing import List, NamedTuple, Sequence

from ..data.schemas import LETTER_TO_INDEX
from .sequence import split_answer_sequence, validate_answer_sequence

_INDEX_LEGEND = ", ".join(f"{letter}={i}" for letter, i in LETTER_TO_INDEX.items())


class TopicHint(NamedTuple):
    topic: str
    sequence: str


def format_sequence_instruction(sequence: str) -> str:
    """Render the instruction block telling the generator where answers go."""
    check = validate_answer_sequence(sequence)
    invalid = [e for e in check.errors if e.startswith("Invalid letter")]
    if not sequence or invalid:
        raise ValueError(f"Cannot build placement instruction from {sequence!r}")

    lines = [
        f'Use this answer sequence (STRICTLY): "{sequence}"',
        f"Place the correct option at the index given by its letter ({_INDEX_LEGEND}).",
    ]
    for n, letter in enumerate(sequence, start=1):
        lines.append(f"  - Answer for Q{n} = index of '{letter}' ({LETTER_TO_INDEX[letter]})")
    lines.append("Do not label which option is correct inside the questions.")
    return "\n".join(lines)


def build_topic_hints(
    sequence: str, topic_names: Sequence[str], per_topic: int
) -> List[TopicHint]:
    """Pair each topic with its slice of one overall sequence."""
    slices = split_answer_sequence(sequence, [per_topic] * len(topic_names))
    return [TopicHint(topic=name, sequence=s) for name, s in zip(topic_names, slices)]
