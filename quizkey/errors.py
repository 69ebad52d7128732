"""Exception types raised by the answer-key subsystem."""

from __future__ import annotations

from typing import Optional


class QuizKeyError(Exception):
    """Base exception for quizkey."""
    pass


class QuizValidationError(QuizKeyError, ValueError):
    """Raised when a quiz violates a structural precondition.

    Callers should treat these as non-retryable: they indicate a contract
    violation by whatever produced the quiz.
    """

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class MalformedQuestion(QuizValidationError):
    """A question does not carry exactly four options."""

    def __init__(self, position: int, option_count: int):
        super().__init__(
            f"Question at index {position} (question {position + 1}) must have "
            f"exactly 4 options, got {option_count}",
            position=position,
        )
        self.option_count = option_count


class InvalidAnswerKeyEntry(QuizValidationError):
    """An answer-key symbol outside {a, b, c, d}."""

    def __init__(self, position: int, symbol: object):
        super().__init__(
            f"Invalid answer key entry {symbol!r} at index {position} "
            f"(question {position + 1})",
            position=position,
        )
        self.symbol = symbol


class LengthMismatch(QuizValidationError):
    """Answer-key length differs from the number of questions."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Answer key has {actual} entries but the quiz has {expected} questions"
        )
        self.expected = expected
        self.actual = actual


class InternalConsistencyError(QuizKeyError, RuntimeError):
    """The shuffler lost track of the correct option. Always a bug."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class GenerationExhausted(QuizKeyError, RuntimeError):
    """Sequence generation ran out of retries."""

    def __init__(self, length: int, attempts: int, errors: Optional[list[str]] = None):
        super().__init__(
            f"Could not generate a valid {length}-letter answer sequence "
            f"after {attempts} attempts"
        )
        self.length = length
        self.attempts = attempts
        self.errors = errors or []
