# SPDX-License-Identifier: Apache-2.0
"""Scoring engine: adjust, clamp, weigh and sum the axis results, then pick a tier.

Three axes carry adjustments that depend on their details rather than on
their raw score alone:

* language: machine-translation, grammar and redundancy penalties plus a
  punctuation bonus,
* references: source-type, completeness, count-category and language-mix
  adjustments,
* media: density, licensing, alt-text and description adjustments.

Every adjustment is capped before it is folded in, and the adjusted score is
clamped to the axis maximum. Revision and integration are required but carry
no weight; they only contribute details and notes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from data_designer_article_quality.analyzers import AXIS_ORDER
from data_designer_article_quality.analyzers.base import capped
from data_designer_article_quality.errors import MissingAxisError
from data_designer_article_quality.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_article_quality.results import AggregatedResult, AxisResult, Tier, _clamp, round_half_up

logger = logging.getLogger(__name__)

REQUIRED_AXES: tuple[str, ...] = AXIS_ORDER

# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _validate(axis_results: Mapping[str, Any]) -> None:
    for axis in REQUIRED_AXES:
        if axis not in axis_results or axis_results[axis] is None:
            raise MissingAxisError(axis)
        if not isinstance(axis_results[axis], AxisResult):
            raise MissingAxisError(axis, f"malformed ({type(axis_results[axis]).__name__})")


# ---------------------------------------------------------------------------
# Adjustments
# ---------------------------------------------------------------------------


def adjust_language(result: AxisResult, hp: Hyperparameters | None = None) -> float:
    hp = hp or DEFAULT_HYPERPARAMETERS
    d = result.details
    score = result.score
    score -= capped(d.get("machine_translation_signals", 0), hp.mt_adjustment)
    score -= capped(d.get("grammar_violations", 0), hp.grammar_adjustment)
    score -= capped(d.get("redundant_sentences", 0), hp.redundancy_adjustment)
    if d.get("punctuation_score", 0) > hp.punctuation_bonus_min:
        score += hp.punctuation_bonus
    return _clamp(score, 0, result.max_score)


def adjust_references(result: AxisResult, hp: Hyperparameters | None = None) -> float:
    hp = hp or DEFAULT_HYPERPARAMETERS
    d = result.details
    types = d.get("reference_types", {})
    score = result.score
    score -= capped(d.get("incomplete_references_count", 0), hp.incomplete_reference_adjustment)
    score += capped(types.get("book", 0), hp.book_bonus)
    score += capped(types.get("journal", 0), hp.journal_bonus)
    if types.get("web", 0) > types.get("book", 0) + types.get("journal", 0) + types.get("news", 0):
        score -= hp.web_dominance_penalty
    score += capped(d.get("wikidata_citations_count", 0), hp.wikidata_citation_bonus)
    score += dict(hp.reference_count_adjustments).get(d.get("reference_count_category"), 0.0)
    languages_used = sum(1 for count in d.get("reference_languages", {}).values() if count > 0)
    if languages_used >= 2:
        score += hp.reference_language_bonus
    return _clamp(score, 0, result.max_score)


def adjust_media(result: AxisResult, hp: Hyperparameters | None = None) -> float:
    hp = hp or DEFAULT_HYPERPARAMETERS
    d = result.details
    score = result.score

    density = d.get("media_density", 0.0)
    low, high = hp.media_density_band
    in_band_bonus, dense_bonus = hp.media_density_bonus
    if d.get("article_media_count_corrected", 0) > 0:
        if low <= density <= high:
            score += in_band_bonus
        elif density > high:
            score += dense_bonus

    score -= capped(d.get("non_free_images_count", 0), hp.non_free_adjustment)
    score -= capped(d.get("bad_alt_text_count", 0), hp.bad_alt_adjustment)

    likely = d.get("repository_likely_count", 0)
    if likely > 0 and d.get("local_description_likely_count", 0) >= likely / 2:
        score += hp.local_description_bonus
    if d.get("filtered_out_images", 0) > d.get("informative_images", 0):
        score -= hp.filtered_media_penalty
    return _clamp(score, 0, result.max_score)


_ADJUSTMENTS = {
    "language": adjust_language,
    "references": adjust_references,
    "media": adjust_media,
}

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def tier_for(total: float, hp: Hyperparameters | None = None) -> Tier:
    """Evaluate the tier table top-down; the first minimum ``total`` meets wins."""
    hp = hp or DEFAULT_HYPERPARAMETERS
    for key, minimum in hp.tiers:
        if total >= minimum:
            return Tier(key, minimum)
    key, minimum = hp.tiers[-1]
    return Tier(key, minimum)


def calculate_final_score(axis_results: Mapping[str, AxisResult], hp: Hyperparameters | None = None) -> AggregatedResult:
    """Combine the nine axis results into a 0-100 total, a tier and ordered notes.

    Args:
        axis_results: Axis name to :class:`AxisResult`, for every axis in
            :data:`REQUIRED_AXES`. Extra keys are ignored.
        hp: Optional tuning overrides.

    Raises:
        MissingAxisError: A required axis is absent or is not an ``AxisResult``.
    """
    hp = hp or DEFAULT_HYPERPARAMETERS
    _validate(axis_results)

    normalized: dict[str, float] = {}
    for axis, weight in hp.weights:
        result = axis_results[axis]
        adjust = _ADJUSTMENTS.get(axis)
        adjusted = adjust(result, hp) if adjust else _clamp(result.score, 0, result.max_score)
        normalized[axis] = _clamp(adjusted, 0, weight)

    total = int(_clamp(round_half_up(sum(normalized.values())), hp.total_min, hp.total_max))
    tier = tier_for(total, hp)
    notes = tuple(note for axis in REQUIRED_AXES for note in axis_results[axis].notes)
    logger.debug(f"Article scored {total}/100 ({tier.key}) with {len(notes)} notes")

    return AggregatedResult(
        total=total,
        tier=tier,
        axis_scores={axis: round(score, 2) for axis, score in normalized.items()},
        details={axis: axis_results[axis] for axis in REQUIRED_AXES},
        notes=notes,
    )
