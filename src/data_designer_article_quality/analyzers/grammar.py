# SPDX-License-Identifier: Apache-2.0
"""Grammar axis: caller-supplied rules applied to the opening paragraphs."""

from __future__ import annotations

from typing import Any

from data_designer_article_quality.analyzers.base import Analyzer
from data_designer_article_quality.document import Document
from data_designer_article_quality.results import AxisResult
from data_designer_article_quality.rules import apply_rules
from data_designer_article_quality.segmentation import first_paragraphs

_TRANSLATION_TEMPLATE_MARKERS = ("ترجمة آلية", "Translated")
_TRANSLATION_TEMPLATE_PENALTY = 2
# Upper error bound -> points; more errors than the last bound score 0.
_ERROR_POINTS = ((2, 3), (5, 2), (10, 1))


class GrammarAnalyzer(Analyzer):
    name = "grammar"

    def empty_details(self) -> dict[str, Any]:
        return {"error_count": 0, "errors": [], "has_translation_template": False}

    def _analyze(self, document: Document) -> AxisResult:
        sample = first_paragraphs(document.full_text, self.hp)
        report = apply_rules(sample, document.rules, cap=self.hp.rule_hit_cap)
        has_template = any(m in t for t in document.templates for m in _TRANSLATION_TEMPLATE_MARKERS)

        if report.count == 0:
            score = self.max_score
        else:
            score = next((points for bound, points in _ERROR_POINTS if report.count <= bound), 0)
        if has_template:
            score -= _TRANSLATION_TEMPLATE_PENALTY

        notes = []
        if report.count:
            notes.append(f"{report.count} possible language errors in the opening paragraphs. Proofread them.")
        if has_template:
            notes.append("Article carries a machine-translation template. Review and improve the wording.")

        details = {
            "error_count": report.count,
            "errors": [hit.to_payload() for hit in report.hits],
            "has_translation_template": has_template,
        }
        return self._result(score, details, notes)
