"""Tests for the structured (JSON lines) logging path."""

import json
import random

import pytest

from quizkey.data.schemas import Quiz
from quizkey.keys.shuffle import shuffle_quiz
from quizkey.utils.logging import StructuredFormatter, reset_logging, setup_logging


@pytest.fixture
def structured_log(tmp_path):
    reset_logging()
    logger = setup_logging(str(tmp_path / "logs"), "structured.log", "INFO", structured=True)
    yield logger, tmp_path / "logs" / "structured.log"
    reset_logging()


def _records(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


class TestStructuredLogging:
    def test_handlers_use_json_formatter(self, structured_log):
        logger, _ = structured_log
        assert logger.handlers
        assert all(isinstance(h.formatter, StructuredFormatter) for h in logger.handlers)

    def test_shuffle_line_carries_quiz_title(self, structured_log, small_quiz_data):
        _, path = structured_log
        quiz = Quiz.from_dict(small_quiz_data)
        shuffle_quiz(quiz, rng=random.Random(5))

        records = [r for r in _records(path) if r["logger"] == "quizkey.keys.shuffle"]
        assert records
        assert records[-1]["level"] == "INFO"
        assert records[-1]["quiz"] == quiz.title
        assert "Shuffled" in records[-1]["message"]

    def test_exception_info_is_serialized(self, structured_log):
        logger, path = structured_log
        try:
            raise ValueError("bad payload")
        except ValueError:
            logger.error("load failed", exc_info=True, extra={"error_type": "ValueError"})

        record = _records(path)[-1]
        assert record["error_type"] == "ValueError"
        assert record["exception"]["type"] == "ValueError"
        assert record["exception"]["message"] == "bad payload"
