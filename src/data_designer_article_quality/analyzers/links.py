# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from typing import Any

from data_designer_article_quality.analyzers.base import Analyzer, bucket
from data_designer_article_quality.document import Document
from data_designer_article_quality.results import AxisResult

_INTERNAL_POINTS = ((30, 10), (20, 8), (10, 6), (5, 4), (2, 2))
_EXTERNAL_POINTS = 2
_DENSITY_IDEAL = (1.5, 5.0)
_DENSITY_FAIR_MIN = 0.5
_DENSITY_MINIMUM = 0.2
_RED_RATIO_PENALTIES = ((0.4, 4), (0.2, 2))
_FEW_INTERNAL_LINKS = 5
_EXPECTED_INTERNAL_LINKS = 10
_EXPECTED_LINKS_MIN_LENGTH = 2000
_LOW_DENSITY = 0.5


def _density_points(density: float) -> int:
    low, high = _DENSITY_IDEAL
    if low <= density <= high:
        return 3
    if _DENSITY_FAIR_MIN <= density < low:
        return 2
    # overlinking falls through to the sparse band
    return 1 if density >= _DENSITY_MINIMUM else 0


class LinksAnalyzer(Analyzer):
    name = "links"

    def empty_details(self) -> dict[str, Any]:
        return {"internal_links": 0, "red_links": 0, "external_links": 0, "link_density": 0.0, "word_count": 0}

    def _analyze(self, document: Document) -> AxisResult:
        internal = len(document.internal_links)
        red = len(document.red_links)
        external = len(document.external_links)
        words = document.word_count
        density = round(internal / words * 100, 2) if words else 0.0
        total = internal + red
        red_ratio = red / total if total else 0.0

        score = bucket(internal, _INTERNAL_POINTS)
        if external >= 1:
            score += _EXTERNAL_POINTS
        score += _density_points(density)
        for threshold, penalty in _RED_RATIO_PENALTIES:
            if red_ratio > threshold:
                score -= penalty
                break

        notes = []
        if internal < _FEW_INTERNAL_LINKS:
            notes.append("Very few internal links. Link the important terms.")
        elif internal < _EXPECTED_INTERNAL_LINKS and document.article_length >= _EXPECTED_LINKS_MIN_LENGTH:
            notes.append("Fewer internal links than expected for the article length.")
        if red_ratio > self.hp.red_link_ratio_note:
            notes.append(f"High share of red links ({red_ratio * 100:.0f}%). Create the pages or remove the links.")
        if density < _LOW_DENSITY:
            notes.append("Low link density. Add more internal links.")
        elif density > self.hp.link_density_high:
            notes.append("Very high link density. The article may be overlinked.")

        details = {
            "internal_links": internal,
            "red_links": red,
            "external_links": external,
            "link_density": density,
            "word_count": words,
        }
        return self._result(score, details, notes)
