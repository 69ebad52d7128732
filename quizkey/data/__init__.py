"""Data handling modules for quizkey."""

from .schemas import LETTERS, NUM_OPTIONS, Question, Quiz, Topic
from .loader import load_quiz, save_quiz

__all__ = [
    "LETTERS",
    "NUM_OPTIONS",
    "Question",
    "Quiz",
    "Topic",
    "load_quiz",
    "save_quiz",
]
