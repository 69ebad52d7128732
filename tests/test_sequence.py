"""Tests for answer-sequence generation and validation."""

import random
from collections import Counter

import pytest

from quizkey.errors import GenerationExhausted
from quizkey.keys.sequence import (
    allowed_count_range,
    compare_answer_keys,
    generate_answer_sequence,
    generate_retrieval_answer_sequence,
    parse_answer_sequence,
    split_answer_sequence,
    validate_answer_sequence,
    _repair_adjacent,
)


class IdentityRandom(random.Random):
    """Random source whose Fisher-Yates draws never move anything."""

    def randrange(self, start, stop=None, step=1):
        return start - 1 if stop is None else stop - 1


class TestGenerateAnswerSequence:
    """Length, alphabet, adjacency and distribution guarantees."""

    @pytest.mark.parametrize("length", [1, 2, 3, 4, 5, 7, 10, 13, 30, 31, 64])
    def test_length_and_alphabet(self, length):
        seq = generate_answer_sequence(length, rng=random.Random(length))
        assert len(seq) == length
        assert set(seq) <= set("abcd")

    @pytest.mark.parametrize("length", [2, 5, 10, 30, 49])
    def test_no_adjacent_duplicates(self, length):
        rng = random.Random(99)
        for _ in range(50):
            seq = generate_answer_sequence(length, rng=rng)
            assert all(seq[i] != seq[i + 1] for i in range(length - 1))

    def test_thirty_letters_are_near_uniform(self):
        rng = random.Random(2024)
        for _ in range(200):
            seq = generate_answer_sequence(30, rng=rng)
            counts = Counter(seq)
            assert sum(counts.values()) == 30
            assert set(counts) == set("abcd")
            assert all(c in (7, 8) for c in counts.values())

    def test_ten_letters_never_repeat_neighbours(self):
        rng = random.Random(7)
        for _ in range(1000):
            seq = generate_answer_sequence(10, rng=rng)
            assert all(a != b for a, b in zip(seq, seq[1:]))

    def test_same_seed_same_sequence(self):
        assert generate_answer_sequence(30, rng=random.Random(5)) == generate_answer_sequence(30, rng=random.Random(5))

    def test_retrieval_sequence(self):
        seq = generate_retrieval_answer_sequence(rng=random.Random(1))
        assert len(seq) == 30
        assert validate_answer_sequence(seq, expected_length=30).is_valid

    def test_default_rng(self):
        assert len(generate_answer_sequence(12)) == 12

    @pytest.mark.parametrize("bad", [0, -3, 2.5, "30", True, None])
    def test_non_positive_length_fails_fast(self, bad):
        with pytest.raises(ValueError, match="positive integer"):
            generate_answer_sequence(bad)

    def test_exhaustion_raises(self):
        # Unshuffled pool "aabbccdd" repairs to "ababcdcd"; its first five
        # letters never contain a 'd', so every generation fails validation.
        with pytest.raises(GenerationExhausted) as exc_info:
            generate_answer_sequence(5, rng=IdentityRandom(), max_generations=3)
        assert exc_info.value.attempts == 3
        assert exc_info.value.length == 5
        assert any("'d' appears 0 times" in e for e in exc_info.value.errors)


class TestRepair:
    def test_repairs_sorted_pool(self):
        letters = list("aabbccdd")
        assert _repair_adjacent(letters, IdentityRandom(), max_attempts=1)
        assert "".join(letters) == "ababcdcd"

    def test_reshuffles_when_stuck(self):
        # 'a' can never be separated here, so every attempt gets stuck.
        letters = list("aaab")
        assert not _repair_adjacent(letters, random.Random(0), max_attempts=5)
        assert sorted(letters) == list("aaab")


class TestValidateAnswerSequence:
    def test_valid(self):
        result = validate_answer_sequence("abcdabcdab", expected_length=10)
        assert result.is_valid
        assert result.errors == []
        assert result.counts == {"a": 3, "b": 3, "c": 2, "d": 2}

    def test_wrong_length(self):
        result = validate_answer_sequence("abcd", expected_length=5)
        assert not result.is_valid
        assert "Length must be 5, got 4" in result.errors

    def test_adjacent_duplicate(self):
        result = validate_answer_sequence("abbcd")
        assert any("positions 1 and 2" in e for e in result.errors)

    def test_invalid_letter(self):
        result = validate_answer_sequence("abce")
        assert any("Invalid letter 'e' at position 3" in e for e in result.errors)

    def test_skewed_distribution(self):
        result = validate_answer_sequence("abababab")
        assert not result.is_valid
        assert any("'c' appears 0 times" in e for e in result.errors)

    def test_allowed_range(self):
        assert allowed_count_range(30) == (7, 8)
        assert allowed_count_range(8) == (2, 2)
        assert allowed_count_range(1) == (0, 1)


class TestSplitAndCompare:
    def test_split(self):
        assert split_answer_sequence("abcdabcdab" * 3, [10, 10, 10]) == ["abcdabcdab"] * 3

    def test_split_bad_sizes(self):
        with pytest.raises(ValueError, match="sum to 20"):
            split_answer_sequence("abcd" * 6, [10, 10])
        with pytest.raises(ValueError, match="positive"):
            split_answer_sequence("abcd", [4, 0])

    def test_parse(self):
        assert parse_answer_sequence("A, b; C-d x") == ["a", "b", "c", "d"]

    def test_compare_match(self):
        result = compare_answer_keys("ABCD", "abcd")
        assert result.is_valid
        assert result.mismatch_position is None

    def test_compare_mismatch(self):
        result = compare_answer_keys("abca", "abcd")
        assert not result.is_valid
        assert result.mismatch_position == 3
        assert "position 4" in result.message

    def test_compare_length(self):
        result = compare_answer_keys(["a", "b"], "abc")
        assert not result.is_valid
        assert "Length mismatch: generated 2, expected 3" == result.message
