"""Quiz loading utilities for quizkey."""

from pathlib import Path
from typing import Union

import yaml

from .schemas import Quiz
from ..utils.io import YAML_SUFFIXES, read_structured, write_json

_SUFFIXES = {".json"} | YAML_SUFFIXES


def load_quiz(path: Union[str, Path]) -> Quiz:
    """Load a quiz document (JSON or YAML) into a Quiz.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        Quiz object; the answer key is not validated here

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid or data is malformed
    """
    filepath = Path(path).resolve()
    if not filepath.exists():
        raise FileNotFoundError(f"Quiz file not found: {filepath}")
    if not filepath.is_file():
        raise ValueError(f"Path is not a file: {filepath}")
    if filepath.suffix.lower() not in _SUFFIXES:
        raise ValueError(f"Expected .json, .yaml or .yml file, got: {filepath.suffix}")

    try:
        payload = read_structured(filepath)
    except (ValueError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise ValueError(f"Failed to parse quiz file {filepath}: {e}") from e

    return Quiz.from_dict(payload)


def save_quiz(path: Union[str, Path], quiz: Quiz) -> None:
    """Write a quiz as indented JSON, creating parent directories."""
    write_json(path, quiz.to_dict())
