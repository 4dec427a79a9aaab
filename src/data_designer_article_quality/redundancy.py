# SPDX-License-Identifier: Apache-2.0
"""Near-duplicate sentence detection by edit-distance similarity."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from data_designer_article_quality.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_article_quality.results import RedundancyExample, RedundancyReport
from data_designer_article_quality.segmentation import normalize_for_comparison

logger = logging.getLogger(__name__)


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance; insertion, deletion and substitution each cost 1."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def token_overlap(a: str, b: str) -> float:
    """Jaccard overlap of whitespace-split tokens."""
    words_a = set(a.split())
    words_b = set(b.split())
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def similarity(a: str, b: str, hp: Hyperparameters | None = None) -> float:
    """Similarity in ``[0, 1]`` between two normalized strings.

    Strings longer than ``hp.redundancy_long_string`` fall back to token
    overlap; everything else uses ``1 - distance / max(len(a), len(b))``.
    """
    hp = hp or DEFAULT_HYPERPARAMETERS
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    if len(a) > hp.redundancy_long_string or len(b) > hp.redundancy_long_string:
        return token_overlap(a, b)
    return 1.0 - edit_distance(a, b) / max(len(a), len(b))


def _prefix(text: str, width: int) -> str:
    return text[:width] + ("..." if len(text) > width else "")


def detect_redundancy(sentences: Sequence[str], hp: Hyperparameters | None = None) -> RedundancyReport:
    """Find sentence pairs whose normalized forms are near-duplicates.

    Only sentences at least ``hp.redundancy_min_length`` long are compared.
    Each unordered pair ``(i, j)`` with ``i < j`` is scored once. Every pair
    at or above ``hp.redundancy_threshold`` counts; examples stop at
    ``hp.redundancy_example_cap``.

    The scan covers at most ``hp.redundancy_max_sentences`` sentences and
    ``hp.redundancy_max_comparisons`` pairs. Hitting either limit sets
    ``truncated`` on the report.
    """
    hp = hp or DEFAULT_HYPERPARAMETERS
    candidates = [s for s in sentences if len(s) >= hp.redundancy_min_length]
    if len(candidates) < 2:
        return RedundancyReport()

    truncated = False
    if len(candidates) > hp.redundancy_max_sentences:
        candidates = candidates[: hp.redundancy_max_sentences]
        truncated = True
    normalized = [normalize_for_comparison(s) for s in candidates]

    count = 0
    comparisons = 0
    examples: list[RedundancyExample] = []
    for i in range(len(candidates) - 1):
        if truncated and comparisons >= hp.redundancy_max_comparisons:
            break
        for j in range(i + 1, len(candidates)):
            if comparisons >= hp.redundancy_max_comparisons:
                truncated = True
                break
            comparisons += 1
            score = similarity(normalized[i], normalized[j], hp)
            if score < hp.redundancy_threshold:
                continue
            count += 1
            if len(examples) < hp.redundancy_example_cap:
                examples.append(RedundancyExample(
                    sentence1=_prefix(candidates[i], hp.redundancy_example_chars),
                    sentence2=_prefix(candidates[j], hp.redundancy_example_chars),
                    similarity=round(score * 100),
                ))

    if truncated:
        logger.warning(
            f"Redundancy scan truncated after {comparisons} comparisons over {len(candidates)} sentences"
        )
    return RedundancyReport(count=count, examples=tuple(examples), truncated=truncated)
