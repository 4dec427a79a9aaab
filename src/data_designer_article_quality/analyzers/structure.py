# SPDX-License-Identifier: Apache-2.0
"""Structure axis: lead length, heading layout, expected and empty sections."""

from __future__ import annotations

import re
from typing import Any

from data_designer_article_quality.analyzers.base import Analyzer, bucket
from data_designer_article_quality.document import Document
from data_designer_article_quality.results import AxisResult

_INTRO_SENTENCE_SPLIT_RE = re.compile(r"[.!؟?؛;]+")

_EXPECTED_SECTIONS = (
    ("References", re.compile(r"مراجع|references|مصادر", re.IGNORECASE)),
    ("External links", re.compile(r"وصلات خارجية|external links|روابط خارجية", re.IGNORECASE)),
    ("See also", re.compile(r"انظر أيضا|see also", re.IGNORECASE)),
)
_EARLY_LIFE_RE = re.compile(r"حياته|نشأته|سيرته|early life|biography", re.IGNORECASE)

# Lead points when the lead is outside the ideal ratio band.
_INTRO_LENGTH_POINTS = ((400, 8), (300, 6), (200, 4), (150, 2))
_INTRO_OPTIMAL_POINTS = 10
_H2_POINTS = ((4, 10), (3, 8), (2, 6), (1, 3))
_DEPTH_POINTS = ((3, 2), (2, 1))
_SHORT_ARTICLE_POINTS = 6
_BALANCE_POINTS = 3
_EMPTY_SECTION_PENALTY_CAP = 3
_LONG_INTRO_PENALTY_CAP = 2
_SHORT_INTRO_NOTE = 150


class StructureAnalyzer(Analyzer):
    name = "structure"

    def empty_details(self) -> dict[str, Any]:
        return {
            "intro": {
                "length": 0,
                "sentence_count": 0,
                "max_sentence_length": 0,
                "long_sentences": 0,
                "is_optimal_length": False,
                "percentage_of_article": 0.0,
            },
            "sections": {
                "total": 0,
                "level_counts": {f"h{level}": 0 for level in range(2, 7)},
                "structural_depth": 0,
            },
            "missing_sections": [],
            "empty_sections": [],
            "balance": {"is_balanced": False, "issue": None},
            "is_stub": False,
        }

    def _analyze(self, document: Document) -> AxisResult:
        intro = self._intro(document)
        sections = self._sections(document)
        missing = self._missing_sections(document)
        empty = [
            s.title for s in document.sections
            if 2 <= s.level <= 4 and len(s.content.strip()) < self.hp.empty_section_min_length
        ]
        balanced, issue = self._balance(document, sections["level_counts"]["h2"])
        is_stub = (
            len(document.sections) <= self.hp.stub_max_sections
            and document.article_length < self.hp.stub_max_length
        )
        details: dict[str, Any] = {
            "intro": intro,
            "sections": sections,
            "missing_sections": missing,
            "empty_sections": empty,
            "balance": {"is_balanced": balanced, "issue": issue},
            "is_stub": is_stub,
        }
        score = self._score(details, document)
        return self._result(score, details, self._notes(details))

    def _intro(self, document: Document) -> dict[str, Any]:
        intro_len = len(document.intro_text)
        article_len = document.article_length
        sentences = [s.strip() for s in _INTRO_SENTENCE_SPLIT_RE.split(document.intro_text) if s.strip()]
        lengths = [len(s) for s in sentences]
        return {
            "length": intro_len,
            "sentence_count": len(sentences),
            "max_sentence_length": max(lengths, default=0),
            "long_sentences": sum(1 for n in lengths if n > self.hp.intro_long_sentence),
            "is_optimal_length": (
                article_len * self.hp.intro_ideal_min_ratio <= intro_len <= article_len * self.hp.intro_ideal_max_ratio
            ),
            "percentage_of_article": round(intro_len / article_len * 100, 1) if article_len else 0.0,
        }

    @staticmethod
    def _sections(document: Document) -> dict[str, Any]:
        counts = {f"h{level}": 0 for level in range(2, 7)}
        for section in document.sections:
            key = f"h{section.level}"
            if key in counts:
                counts[key] += 1
        depth = sum(1 for key in ("h2", "h3", "h4") if counts[key] > 0)
        return {"total": len(document.sections), "level_counts": counts, "structural_depth": depth}

    def _missing_sections(self, document: Document) -> list[str]:
        titles = document.section_titles
        length = document.article_length
        thresholds = {
            "References": 0,
            "External links": self.hp.external_links_section_min_length,
            "See also": self.hp.see_also_section_min_length,
        }
        missing = []
        for label, pattern in _EXPECTED_SECTIONS:
            minimum = thresholds[label]
            if (minimum == 0 or length > minimum) and not any(pattern.search(t) for t in titles):
                missing.append(label)
        if "biography" in document.article_types() and not any(_EARLY_LIFE_RE.search(t) for t in titles):
            missing.append("Early life")
        return missing

    def _balance(self, document: Document, h2_count: int) -> tuple[bool, str | None]:
        length = document.article_length
        issue = None
        if length > self.hp.balance_long_article and h2_count < self.hp.balance_min_h2:
            issue = "Long article with too few sections"
        if length < self.hp.balance_short_article and h2_count > self.hp.balance_max_h2:
            issue = "Too many sections for a short article"
        return issue is None, issue

    def _score(self, details: dict[str, Any], document: Document) -> float:
        intro = details["intro"]
        score = _INTRO_OPTIMAL_POINTS if intro["is_optimal_length"] else bucket(intro["length"], _INTRO_LENGTH_POINTS)

        if details["is_stub"]:
            pass
        elif document.article_length < self.hp.short_article_length:
            score += _SHORT_ARTICLE_POINTS
        else:
            score += bucket(details["sections"]["level_counts"]["h2"], _H2_POINTS)
            score += bucket(details["sections"]["structural_depth"], _DEPTH_POINTS)

        score += sum(1 for label, _ in _EXPECTED_SECTIONS if label not in details["missing_sections"])
        if details["balance"]["is_balanced"]:
            score += _BALANCE_POINTS
        score -= min(_EMPTY_SECTION_PENALTY_CAP, len(details["empty_sections"]))
        if intro["long_sentences"] > 0 and "medical" not in document.article_types():
            score -= min(_LONG_INTRO_PENALTY_CAP, intro["long_sentences"])
        return score

    def _notes(self, details: dict[str, Any]) -> list[str]:
        intro = details["intro"]
        notes = []
        if details["is_stub"]:
            notes.append("Article is at stub stage. Expand it and organize it into sections.")
        if not intro["is_optimal_length"]:
            pct = intro["percentage_of_article"]
            if intro["length"] < _SHORT_INTRO_NOTE:
                notes.append(f"Lead section is very short ({intro['length']} characters). Expand it to summarize the topic.")
            elif pct < self.hp.intro_ideal_min_ratio * 100:
                notes.append(f"Lead section is relatively short ({pct}% of the article). The ideal is 10-20%.")
            elif pct > self.hp.intro_ideal_max_ratio * 100:
                notes.append(f"Lead section is relatively long ({pct}% of the article). Consider trimming it.")
        if not details["balance"]["is_balanced"]:
            notes.append(f"{details['balance']['issue']}. Consider reorganizing the structure.")
        if details["missing_sections"]:
            notes.append(f"Missing important sections: {', '.join(details['missing_sections'])}")
        if details["empty_sections"]:
            notes.append(f"Empty or very short sections: {', '.join(details['empty_sections'][:3])}")
        if intro["long_sentences"]:
            notes.append(
                f"{intro['long_sentences']} very long sentences in the lead "
                f"(over {self.hp.intro_long_sentence} characters). Consider splitting them."
            )
        return notes
