"""Statistical analysis modules for quizkey."""

from .position_bias import (
    PositionBiasReport,
    analyze_answer_key,
    calculate_position_frequencies,
    chi_square_test_from_scratch,
    count_adjacent_repeats,
    longest_run,
)

__all__ = [
    "PositionBiasReport",
    "analyze_answer_key",
    "calculate_position_frequencies",
    "chi_square_test_from_scratch",
    "count_adjacent_repeats",
    "longest_run",
]
