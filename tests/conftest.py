from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


# ====================
# Quiz Fixtures
# ====================

def make_topic(name: str, n: int) -> Dict[str, Any]:
    return {
        "name": name,
        "questions": [
            {
                "question": f"{name} question {i + 1}?",
                "options": [f"{name}-{i + 1}-{k}" for k in "abcd"],
            }
            for i in range(n)
        ],
    }


@pytest.fixture
def retrieval_quiz_data() -> Dict[str, Any]:
    """Three topics of ten questions, like the generator returns them."""
    return {
        "title": "Retrieval Quiz - 19 October",
        "topics": [make_topic("Topic A", 10), make_topic("Topic B", 10), make_topic("Topic C", 10)],
        "answer_key": list("abcdabcdabcdabcdabcdabcdabcdab"),
    }


@pytest.fixture
def small_quiz_data() -> Dict[str, Any]:
    return {
        "title": "Capitals",
        "level": "GCSE",
        "topics": [
            {
                "name": "Topic A",
                "label": "A",
                "questions": [
                    {
                        "question": "Capital of France?",
                        "options": ["Paris", "London", "Madrid", "Berlin"],
                        "aoLevel": "AO1",
                    },
                    {
                        "question": "Capital of Germany?",
                        "options": ["Rome", "Berlin", "Vienna", "Prague"],
                    },
                ],
            }
        ],
        "answer_key": "ab",
    }


@pytest.fixture
def quiz_json_file(tmp_path, small_quiz_data):
    path = tmp_path / "quiz.json"
    path.write_text(json.dumps(small_quiz_data), encoding="utf-8")
    return path


@pytest.fixture
def quiz_yaml_file(tmp_path, small_quiz_data):
    path = tmp_path / "quiz.yaml"
    path.write_text(yaml.safe_dump(small_quiz_data), encoding="utf-8")
    return path


@pytest.fixture
def retrieval_quiz_file(tmp_path, retrieval_quiz_data):
    path = tmp_path / "retrieval.json"
    path.write_text(json.dumps(retrieval_quiz_data), encoding="utf-8")
    return path
