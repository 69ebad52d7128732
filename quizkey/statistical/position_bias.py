"""Position-bias audit for quiz answer keys."""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..data.schemas import LETTERS
from ..keys.sequence import allowed_count_range


@dataclass
class PositionBiasReport:
    """Report structure for answer-key position bias."""
    method: str
    timestamp: str
    total_questions: int
    position_frequencies: Dict[str, int]
    chi_square_results: Dict[str, Any]
    adjacent_repeats: int
    longest_run: int
    summary_statistics: Dict[str, Any]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _regularized_gamma_p(s: float, x: float) -> float:
    """
    Regularized lower incomplete gamma P(s,x) using series/continued fraction (NR style).
    Accurate enough for chi-square CDF without SciPy.
    """
    if x < 0 or s <= 0:
        return float("nan")
    if x == 0:
        return 0.0

    if x < s + 1:
        # series
        term = 1.0 / s
        summ = term
        k = 1
        while True:
            term *= x / (s + k)
            summ += term
            if abs(term) < abs(summ) * 1e-12 or k > 10_000:
                break
            k += 1
        return summ * math.exp(-x + s * math.log(x) - math.lgamma(s))

    # continued fraction for Q (Lentz), return P = 1 - Q
    b0 = x + 1.0 - s
    f = 1.0 / b0
    c = 1.0 / 1e-30
    d = 1.0 / b0
    for i in range(1, 10_000):
        a = i * (s - i)
        b = b0 + 2.0 * i
        d = 1.0 / (b + a * d)
        c = b + a / c
        delta = c * d
        f *= delta
        if abs(delta - 1.0) < 1e-12:
            break
    return 1.0 - f * math.exp(-x + s * math.log(x) - math.lgamma(s))


def _chi2_sf(x: float, df: int) -> float:
    """Survival function (1 - CDF) for chi-square(df) using regularized gamma."""
    s = df / 2.0
    return max(0.0, min(1.0, 1.0 - _regularized_gamma_p(s, x / 2.0)))


def chi_square_test_from_scratch(observed: np.ndarray, expected: np.ndarray) -> Tuple[float, float, int]:
    """Classic Pearson chi-square and p-value (no SciPy)."""
    if observed.shape != expected.shape:
        raise ValueError("Observed and expected must have same shape.")
    if np.any(expected <= 0):
        raise ValueError("Expected frequencies must be positive.")

    chi2 = float(np.sum((observed - expected) ** 2 / expected))
    df = observed.size - 1
    p = _chi2_sf(chi2, df)
    return chi2, p, df


def calculate_position_frequencies(answer_key: Iterable[str]) -> Dict[str, int]:
    """Count how often each letter holds the correct answer."""
    counts = {letter: 0 for letter in LETTERS}
    for i, letter in enumerate(answer_key):
        if letter not in counts:
            raise ValueError(f"Invalid answer key entry {letter!r} at index {i}")
        counts[letter] += 1
    return counts


def count_adjacent_repeats(answer_key: Iterable[str]) -> int:
    key = list(answer_key)
    return sum(1 for a, b in zip(key, key[1:]) if a == b)


def longest_run(answer_key: Iterable[str]) -> int:
    """Length of the longest block of identical consecutive letters."""
    best = run = 0
    prev = None
    for letter in answer_key:
        run = run + 1 if letter == prev else 1
        best = max(best, run)
        prev = letter
    return best


def analyze_answer_key(
    answer_key: Iterable[str],
    significance_level: float = 0.05,
    save_path: Optional[Path] = None,
) -> PositionBiasReport:
    """Chi-square test of letter uniformity plus adjacency statistics."""
    key: List[str] = list(answer_key)
    if not key:
        raise ValueError("Answer key is empty")

    freqs = calculate_position_frequencies(key)
    observed = np.array([freqs[letter] for letter in LETTERS], dtype=float)
    expected = np.full(len(LETTERS), len(key) / len(LETTERS))
    chi2, p, df = chi_square_test_from_scratch(observed, expected)

    # Cramer's V for a 1 x k goodness-of-fit table
    effect_size = float(np.sqrt(chi2 / (len(key) * (len(LETTERS) - 1))))
    low, high = allowed_count_range(len(key))
    repeats = count_adjacent_repeats(key)

    report = PositionBiasReport(
        method="answer_key_position_bias",
        timestamp=_now_iso(),
        total_questions=len(key),
        position_frequencies=freqs,
        chi_square_results={
            "chi_square_statistic": chi2,
            "p_value": p,
            "degrees_of_freedom": df,
            "observed_frequencies": observed.tolist(),
            "expected_frequencies": expected.tolist(),
            "effect_size": effect_size,
            "significant": bool(p < significance_level),
        },
        adjacent_repeats=repeats,
        longest_run=longest_run(key),
        summary_statistics={
            "bias_detected": bool(p < significance_level),
            "near_uniform": all(low <= c <= high for c in freqs.values()),
            "no_adjacent_repeats": repeats == 0,
            "significance_level": significance_level,
        },
    )

    if save_path:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        with open(save_path, "w", encoding="utf-8") as f:
            json.dump(asdict(report), f, indent=2, ensure_ascii=False)

    return report
