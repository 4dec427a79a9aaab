# SPDX-License-Identifier: Apache-2.0
"""Revision axis: editing stability estimated from page chrome, templates and section sizes.

No revision history is fetched; every figure here is a heuristic estimate.
"""

from __future__ import annotations

import re
from typing import Any

from data_designer_article_quality.analyzers.base import Analyzer
from data_designer_article_quality.document import Document
from data_designer_article_quality.results import AxisResult

_LOW_QUALITY_TEMPLATES = ("غير مراجعة", "يتيمة", "تنظيف", "بذرة", "مصدر", "لا مصدر", "مراجع", "توضيح")
_EDIT_WAR_TEMPLATES = ("تعارض تحرير", "خلاف تحريري", "نزاع محايد")
_REVERT_KEYWORDS = ("Reverted", "استرجاع", "تراجع", "Undid", "Revert")
_PROTECTION_KEYWORDS = ("هذه الصفحة محمية", "صفحة محمية", "محمية كلياً", "محمية جزئياً", "padlock", "قفل")
_REFERENCE_TITLES = ("مراجع", "References", "وصلات خارجية")

_MONTHS_AR = "يناير|فبراير|مارس|أبريل|مايو|يونيو|يوليو|أغسطس|سبتمبر|أكتوبر|نوفمبر|ديسمبر"
_MONTHS_EN = "January|February|March|April|May|June|July|August|September|October|November|December"
_LAST_EDITED_RES = (
    re.compile(rf"آخر تعديل.*?(\d{{1,2}})\s+({_MONTHS_AR})\s+(\d{{4}})"),
    re.compile(rf"Last edited.*?(\d{{1,2}})\s+({_MONTHS_EN})\s+(\d{{4}})"),
    re.compile(r"تم التعديل.*?(\d{4})-(\d{2})-(\d{2})"),
)

_BUSY_EDITS = 40
_FEW_EDITS = 10
_FEW_EDITORS = 2
_MANY_EDITORS = 5
_UNBALANCED_SECTIONS = 3
_EXAMPLE_CAP = 3

_EDITS_PENALTY = 2
_EDITORS_PENALTY = 1
_UNBALANCED_PENALTY = 2
_EDIT_WAR_PENALTY = 3
_PROTECTION_PENALTY = 1


def _has_references_section(document: Document) -> bool:
    return any("مراجع" in t or "References" in t for t in document.section_titles)


class RevisionAnalyzer(Analyzer):
    name = "revision"

    def empty_details(self) -> dict[str, Any]:
        return {
            "estimated_edits_last_90_days": 0,
            "estimated_unique_editors": 0,
            "large_edits_count": 0,
            "has_edit_wars": False,
            "has_protection": False,
            "revision_signals_count": 0,
            "examples": {"large_edits": [], "instability_signals": []},
            "stability_score": 0,
        }

    def _analyze(self, document: Document) -> AxisResult:
        unbalanced, unbalanced_examples = self._unbalanced_sections(document)
        details: dict[str, Any] = {
            "estimated_edits_last_90_days": self._estimate_recent_edits(document),
            "estimated_unique_editors": self._estimate_editors(document),
            "large_edits_count": unbalanced,
            "has_edit_wars": (
                any(name in t for t in document.templates for name in _EDIT_WAR_TEMPLATES)
                or any(k in document.page_chrome for k in _REVERT_KEYWORDS)
            ),
            "has_protection": any(k in document.page_chrome for k in _PROTECTION_KEYWORDS),
        }
        signals = self._instability_signals(details)
        details["revision_signals_count"] = len(signals)
        details["examples"] = {"large_edits": unbalanced_examples, "instability_signals": signals}
        details["stability_score"] = self._stability(details)
        return self._result(details["stability_score"], details, self._notes(details))

    def _estimate_recent_edits(self, document: Document) -> int:
        length = document.article_length
        if any(p.search(document.page_chrome) for p in _LAST_EDITED_RES):
            if length > 5000 and _has_references_section(document):
                return 30
            return 20 if length > 2000 else 10
        return 15 if length > 3000 else 5

    def _estimate_editors(self, document: Document) -> int:
        flagged = sum(1 for name in _LOW_QUALITY_TEMPLATES if any(name in t for t in document.templates))
        if flagged > 3:
            return 1
        if flagged > 1:
            return 2
        length = document.article_length
        sections = len(document.sections)
        if length > 5000 and _has_references_section(document) and sections >= 5:
            return 5
        if length > 3000 and sections >= 3:
            return 4
        return 3 if length > 1500 else 2

    def _unbalanced_sections(self, document: Document) -> tuple[int, list[dict[str, Any]]]:
        count = 0
        examples: list[dict[str, Any]] = []
        for section in document.sections:
            if not section.title:
                continue
            length = len(section.content)
            if length > self.hp.large_section_length:
                issue = "very large section"
            elif 0 < length < self.hp.small_section_length and not any(r in section.title for r in _REFERENCE_TITLES):
                issue = "very small section"
            else:
                continue
            count += 1
            if len(examples) < _EXAMPLE_CAP:
                examples.append({"section": section.title, "issue": issue, "length": length})
        return count, examples

    @staticmethod
    def _instability_signals(details: dict[str, Any]) -> list[str]:
        signals = []
        if details["estimated_edits_last_90_days"] > _BUSY_EDITS:
            signals.append(f"many recent edits (over {_BUSY_EDITS})")
        if details["estimated_unique_editors"] < _FEW_EDITORS:
            signals.append(f"few editors (under {_FEW_EDITORS})")
        if details["large_edits_count"] > _UNBALANCED_SECTIONS:
            signals.append(f"many unbalanced sections ({details['large_edits_count']})")
        if details["has_edit_wars"]:
            signals.append("edit war indications")
        if details["has_protection"]:
            signals.append("page is protected")
        return signals

    def _stability(self, details: dict[str, Any]) -> float:
        score = self.max_score
        if details["estimated_edits_last_90_days"] > _BUSY_EDITS:
            score -= _EDITS_PENALTY
        if details["estimated_unique_editors"] < _FEW_EDITORS:
            score -= _EDITORS_PENALTY
        if details["large_edits_count"] > _UNBALANCED_SECTIONS:
            score -= _UNBALANCED_PENALTY
        if details["has_edit_wars"]:
            score -= _EDIT_WAR_PENALTY
        if details["has_protection"]:
            score -= _PROTECTION_PENALTY
        return max(0, score)

    @staticmethod
    def _notes(details: dict[str, Any]) -> list[str]:
        notes = []
        edits = details["estimated_edits_last_90_days"]
        if edits > _BUSY_EDITS:
            notes.append(f"Heavy recent editing (estimated {edits} edits in 90 days). The article may be unstable.")
        elif edits < _FEW_EDITS:
            notes.append("Little recent editing activity. The article may need updating.")
        if details["estimated_unique_editors"] < _FEW_EDITORS:
            notes.append("Article appears to come from a single editor. Collaboration would improve it.")
        if details["large_edits_count"] > _UNBALANCED_SECTIONS:
            notes.append(
                f"{details['large_edits_count']} unbalanced sections (very large or very small). "
                "Review how the content is distributed."
            )
        if details["has_edit_wars"]:
            notes.append("Signs of edit warring. The article may need mediation or a neutral review.")
        if details["has_protection"]:
            notes.append("Page is protected, which may reflect past edit wars or sensitive content.")
        return notes
