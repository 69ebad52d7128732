"""Option shuffling with answer-key remapping.

Every question's four options are permuted independently with Fisher-Yates
and the answer key is rebuilt from where each correct option actually lands,
so the result is unbiased whatever the upstream generator did with the
placement hint.

Atomicity: the whole quiz is validated before any question is shuffled, so a
call either returns a complete new quiz or raises without producing output.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

from ..data.schemas import LETTER_TO_INDEX, LETTERS, NUM_OPTIONS, Question, Quiz, Topic
from ..errors import InternalConsistencyError, InvalidAnswerKeyEntry, LengthMismatch, MalformedQuestion
from ..utils.determinism import make_rng

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fisher_yates(items: Iterable[T], rng: random.Random) -> List[T]:
    """Return a uniformly shuffled copy of ``items``."""
    arr = list(items)
    for i in range(len(arr) - 1, 0, -1):
        j = rng.randrange(i + 1)
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def shuffle_options(
    options: Sequence[str],
    correct_index: int,
    rng: random.Random,
    position: Optional[int] = None,
) -> Tuple[Tuple[str, ...], int]:
    """Permute options and return them with the new index of the correct one.

    Options are tracked by original index, never by text, so duplicate option
    texts cannot confuse the remapping.
    """
    tagged = fisher_yates(enumerate(options), rng)
    new_correct = next(
        (pos for pos, (original, _) in enumerate(tagged) if original == correct_index),
        None,
    )
    if new_correct is None:
        where = f"question {position + 1}" if position is not None else "question"
        raise InternalConsistencyError(
            f"Could not locate correct option after shuffling {where}",
            position=position,
        )
    return tuple(text for _, text in tagged), new_correct


def validate_quiz(quiz: Quiz) -> None:
    """Check shuffler preconditions for the whole quiz.

    Raises:
        LengthMismatch: answer key length differs from the question count
        MalformedQuestion: a question does not have exactly 4 options
        InvalidAnswerKeyEntry: a key entry is not one of a, b, c, d
    """
    total = quiz.question_count
    if len(quiz.answer_key) != total:
        raise LengthMismatch(expected=total, actual=len(quiz.answer_key))

    for flat_index, (question, symbol) in enumerate(zip(quiz.questions(), quiz.answer_key)):
        if len(question.options) != NUM_OPTIONS:
            raise MalformedQuestion(flat_index, len(question.options))
        if not isinstance(symbol, str) or symbol not in LETTER_TO_INDEX:
            raise InvalidAnswerKeyEntry(flat_index, symbol)


def shuffle_quiz(quiz: Quiz, rng: Optional[random.Random] = None) -> Quiz:
    """Shuffle every question's options and return a new quiz with a fresh key.

    Topic names, question text and metadata are carried over unchanged; the
    input quiz is not modified.
    """
    validate_quiz(quiz)
    rng = rng if rng is not None else make_rng()

    new_key: List[str] = []
    topics: List[Topic] = []
    flat_index = 0
    for topic in quiz.topics:
        questions: List[Question] = []
        for question in topic.questions:
            correct = LETTER_TO_INDEX[quiz.answer_key[flat_index]]
            options, new_correct = shuffle_options(
                question.options, correct, rng, position=flat_index
            )
            questions.append(question._replace(options=options))
            new_key.append(LETTERS[new_correct])
            flat_index += 1
        topics.append(topic._replace(questions=tuple(questions)))

    logger.info(
        "Shuffled %d questions across %d topics",
        flat_index,
        len(topics),
        extra={"quiz": quiz.title},
    )
    return quiz._replace(topics=tuple(topics), answer_key=tuple(new_key))


def shuffle_questions(
    questions: Iterable[Question],
    answer_key: Union[str, Sequence[str]],
    rng: Optional[random.Random] = None,
) -> Quiz:
    """Flat-list variant of :func:`shuffle_quiz`."""
    return shuffle_quiz(Quiz.from_questions(questions, answer_key), rng=rng)
