"""Command-line entry point for quizkey."""

from .main import main

__all__ = ["main"]
