"""Data schemas for quizkey."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, NamedTuple, Sequence, Union

LETTERS = ("a", "b", "c", "d")
NUM_OPTIONS = len(LETTERS)
LETTER_TO_INDEX = {letter: i for i, letter in enumerate(LETTERS)}

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def _freeze(extra: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(extra)) if extra else _EMPTY


class Question(NamedTuple):
    """One multiple-choice item.

    ``metadata`` holds every other key of the source record so that it can be
    written back untouched after shuffling.
    """
    question: str
    options: Sequence[str]
    metadata: Mapping[str, Any] = _EMPTY

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "Question":
        if not isinstance(row, Mapping):
            raise ValueError(f"Invalid question format: expected dict, got {type(row).__name__}")
        options = row.get("options")
        if not isinstance(options, (list, tuple)):
            raise ValueError(f"Question options must be a list, got {type(options).__name__}")
        extra = {k: v for k, v in row.items() if k not in ("question", "options")}
        return cls(
            question=str(row.get("question", "")),
            options=tuple(options),
            metadata=_freeze(extra),
        )

    def to_dict(self) -> dict[str, Any]:
        return {**self.metadata, "question": self.question, "options": list(self.options)}


class Topic(NamedTuple):
    """Named group of questions (10 per topic in a retrieval quiz)."""
    name: str
    questions: Sequence[Question]
    metadata: Mapping[str, Any] = _EMPTY

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "Topic":
        if not isinstance(row, Mapping):
            raise ValueError(f"Invalid topic format: expected dict, got {type(row).__name__}")
        questions = row.get("questions")
        if not isinstance(questions, (list, tuple)):
            raise ValueError(f"Topic {row.get('name', 'unknown')!r} must include questions[]")
        extra = {k: v for k, v in row.items() if k not in ("name", "questions")}
        return cls(
            name=str(row.get("name", "")),
            questions=tuple(Question.from_dict(q) for q in questions),
            metadata=_freeze(extra),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.metadata,
            "name": self.name,
            "questions": [q.to_dict() for q in self.questions],
        }


class Quiz(NamedTuple):
    """Topics of questions plus the answer key, in flattened order."""
    title: str
    topics: Sequence[Topic]
    answer_key: Sequence[str]
    metadata: Mapping[str, Any] = _EMPTY

    def questions(self) -> Iterator[Question]:
        """Yield questions in flattened order (topic order, then question order)."""
        for topic in self.topics:
            yield from topic.questions

    @property
    def question_count(self) -> int:
        return sum(len(t.questions) for t in self.topics)

    @property
    def answer_key_string(self) -> str:
        return "".join(str(x) for x in self.answer_key)

    @classmethod
    def from_questions(
        cls,
        questions: Iterable[Question],
        answer_key: Union[str, Sequence[str]],
        title: str = "",
    ) -> "Quiz":
        """Wrap a flat list of questions into a single unnamed topic."""
        return cls(
            title=title,
            topics=(Topic(name="", questions=tuple(questions)),),
            answer_key=tuple(answer_key),
        )

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Quiz":
        """Build a quiz from its JSON shape.

        ``answer_key`` may be a list of letters or a single string. Entries are
        kept verbatim; checking them is the shuffler's job.
        """
        if not isinstance(payload, Mapping):
            raise ValueError(f"Invalid quiz format: expected dict, got {type(payload).__name__}")
        topics = payload.get("topics")
        answer_key = payload.get("answer_key")
        if not isinstance(topics, (list, tuple)) or not isinstance(answer_key, (list, tuple, str)):
            raise ValueError("Quiz object must include topics[] and answer_key[]")
        extra = {k: v for k, v in payload.items() if k not in ("title", "topics", "answer_key")}
        return cls(
            title=str(payload.get("title", "")),
            topics=tuple(Topic.from_dict(t) for t in topics),
            answer_key=tuple(answer_key),
            metadata=_freeze(extra),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.metadata,
            "title": self.title,
            "topics": [t.to_dict() for t in self.topics],
            "answer_key": list(self.answer_key),
        }
