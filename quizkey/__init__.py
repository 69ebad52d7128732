"""quizkey.

Answer-key generation and option shuffling for multiple-choice quizzes
produced by an external question generator.
"""

from .config import AppConfig, default_app_config
from .data import Question, Quiz, Topic, load_quiz, save_quiz
from .errors import (
    GenerationExhausted,
    InternalConsistencyError,
    InvalidAnswerKeyEntry,
    LengthMismatch,
    MalformedQuestion,
    QuizKeyError,
    QuizValidationError,
)
from .keys import generate_answer_sequence, shuffle_questions, shuffle_quiz, validate_answer_sequence
from .statistical import analyze_answer_key
from .utils import make_rng, setup_logging

__all__ = [
    "__version__",
    "AppConfig",
    "default_app_config",
    "Question",
    "Topic",
    "Quiz",
    "load_quiz",
    "save_quiz",
    "generate_answer_sequence",
    "validate_answer_sequence",
    "shuffle_quiz",
    "shuffle_questions",
    "analyze_answer_key",
    "QuizKeyError",
    "QuizValidationError",
    "MalformedQuestion",
    "InvalidAnswerKeyEntry",
    "LengthMismatch",
    "InternalConsistencyError",
    "GenerationExhausted",
    "make_rng",
    "setup_logging",
]

__version__ = "0.1.0"
