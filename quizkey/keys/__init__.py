"""Answer-key generation and option shuffling."""

from .prompts import TopicHint, build_topic_hints, format_sequence_instruction
from .sequence import (
    KeyComparison,
    SequenceValidation,
    compare_answer_keys,
    generate_answer_sequence,
    generate_retrieval_answer_sequence,
    parse_answer_sequence,
    split_answer_sequence,
    validate_answer_sequence,
)
from .shuffle import fisher_yates, shuffle_options, shuffle_questions, shuffle_quiz, validate_quiz

__all__ = [
    # Sequence generation
    "SequenceValidation",
    "KeyComparison",
    "generate_answer_sequence",
    "generate_retrieval_answer_sequence",
    "validate_answer_sequence",
    "split_answer_sequence",
    "parse_answer_sequence",
    "compare_answer_keys",
    # Shuffling
    "fisher_yates",
    "shuffle_options",
    "shuffle_quiz",
    "shuffle_questions",
    "validate_quiz",
    # Prompt hints
    "TopicHint",
    "format_sequence_instruction",
    "build_topic_hints",
]
