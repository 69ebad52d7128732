"""Utilities for quizkey."""

from .determinism import make_rng
from .logging import setup_logging

__all__ = [
    "make_rng",
    "setup_logging",
]
