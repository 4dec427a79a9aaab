# SPDX-License-Identifier: Apache-2.0
"""Cross-project axis: Wikidata binding, interlanguage links and sister-project boxes."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from data_designer_article_quality.analyzers.base import Analyzer
from data_designer_article_quality.document import Document
from data_designer_article_quality.results import AxisResult

_WIKIDATA_TEMPLATES = ("ويكي بيانات", "Wikidata", "استشهاد بويكي بيانات", "Cite Q")
_INTERWIKI_TEMPLATES = ("وإو", "Interlanguage link", "Ill", "Ill-wd", "Interlang", "وصلة بين لغوية")
_SISTER_TEMPLATES = (
    "شقيقات ويكيميديا", "روابط شقيقة", "Commons", "Wikisource", "Wiktionary", "Wikiquote",
    "Wikibooks", "Wikinews", "Wikiversity", "Wikivoyage", "كومنز", "ويكي مصدر", "ويكاموس", "ويكي الاقتباس",
)
_SISTER_DOMAINS = (
    "commons.wikimedia.org", "wikidata.org", "wikisource.org", "wiktionary.org",
    "wikiquote.org", "wikibooks.org", "wikinews.org",
)
_WIKIDATA_KEYWORDS = ("wikibase", "wikidata.org", "wikidata", "p-wikibase-otherprojects")
_ITEM_ID_RES = (
    re.compile(r"wikidata\.org/entity/(Q\d+)", re.IGNORECASE),
    re.compile(r"wikidata\.org/wiki/(Q\d+)", re.IGNORECASE),
    re.compile(r"\b(Q\d{3,})\b"),
)


def _template_re(name: str) -> re.Pattern[str]:
    return re.compile(r"\{\{\s*" + re.escape(name) + r"\s*(?:\|[^{}]*)?\}\}", re.IGNORECASE)


_WIKIDATA_TEMPLATE_RES = tuple(
    (name, re.compile(r"\{\{\s*" + re.escape(name), re.IGNORECASE)) for name in _WIKIDATA_TEMPLATES
)
_INTERWIKI_RES = tuple((name, _template_re(name)) for name in _INTERWIKI_TEMPLATES)
_SISTER_RES = tuple((name, _template_re(name)) for name in _SISTER_TEMPLATES)

_EXAMPLE_CAP = 3
_MANY_INTERWIKI = 3
_MANY_SISTERS = 2
_MISSING_WIKIDATA_PENALTY = 4
_MISSING_SISTER_PENALTY = 2
_NO_SISTER_BOX_PENALTY = 1


def _find_templates(
    markup: str, patterns: Sequence[tuple[str, re.Pattern[str]]], snippet_chars: int
) -> tuple[int, list[dict[str, str]]]:
    count = 0
    examples: list[dict[str, str]] = []
    for name, pattern in patterns:
        for m in pattern.finditer(markup):
            count += 1
            if len(examples) < _EXAMPLE_CAP:
                examples.append({"template": name, "snippet": m.group(0)[:snippet_chars]})
    return count, examples


class IntegrationAnalyzer(Analyzer):
    name = "integration"

    def empty_details(self) -> dict[str, Any]:
        return {
            "linked_to_wikidata": False,
            "wikidata_item_id": None,
            "missing_wikidata_link": False,
            "uses_interwiki_template": False,
            "interwiki_links_count": 0,
            "sister_project_boxes_count": 0,
            "missing_sister_links": False,
            "cross_project_signals_count": 0,
            "examples": {"interwiki_links": [], "sister_boxes": [], "wikidata_hints": []},
            "cross_project_score": 0,
        }

    def _analyze(self, document: Document) -> AxisResult:
        markup = document.raw_markup
        source = f"{markup}\n{document.page_chrome}"

        linked = any(k in source for k in _WIKIDATA_KEYWORDS)
        item_id = None
        for pattern in _ITEM_ID_RES:
            m = pattern.search(markup)
            if m:
                item_id = m.group(1)
                linked = True
                break
        hints = [name for name, pattern in _WIKIDATA_TEMPLATE_RES if pattern.search(markup)]
        linked = linked or bool(hints)

        interwiki, interwiki_examples = _find_templates(markup, _INTERWIKI_RES, 80)
        sisters, sister_examples = _find_templates(markup, _SISTER_RES, 60)
        sisters += sum(1 for domain in _SISTER_DOMAINS if domain in markup)

        details: dict[str, Any] = {
            "linked_to_wikidata": linked,
            "wikidata_item_id": item_id,
            "missing_wikidata_link": not linked,
            "uses_interwiki_template": interwiki > 0,
            "interwiki_links_count": interwiki,
            "sister_project_boxes_count": sisters,
            "missing_sister_links": interwiki == 0 and sisters == 0,
        }
        details["cross_project_signals_count"] = sum((
            linked,
            interwiki > 0,
            sisters > 0,
            item_id is not None,
            interwiki >= _MANY_INTERWIKI,
        ))
        details["examples"] = {
            "interwiki_links": interwiki_examples,
            "sister_boxes": sister_examples,
            "wikidata_hints": hints,
        }
        details["cross_project_score"] = self._cross_project_score(details)
        return self._result(details["cross_project_score"], details, self._notes(details))

    def _cross_project_score(self, details: dict[str, Any]) -> float:
        score = self.max_score
        if details["missing_wikidata_link"]:
            score -= _MISSING_WIKIDATA_PENALTY
        if details["missing_sister_links"]:
            score -= _MISSING_SISTER_PENALTY
        if details["sister_project_boxes_count"] == 0:
            score -= _NO_SISTER_BOX_PENALTY
        if details["wikidata_item_id"]:
            score += 1
        if details["interwiki_links_count"] >= _MANY_INTERWIKI:
            score += 1
        if details["sister_project_boxes_count"] >= _MANY_SISTERS:
            score += 1
        return max(0, min(self.max_score, score))

    @staticmethod
    def _notes(details: dict[str, Any]) -> list[str]:
        notes = []
        if details["missing_wikidata_link"]:
            notes.append("Article is not linked to a Wikidata item. Link it to improve cross-project integration.")
        interwiki = details["interwiki_links_count"]
        if interwiki == 0:
            notes.append("No interlanguage link templates. Consider {{وإو}} to link articles in other languages.")
        elif interwiki < _MANY_INTERWIKI:
            notes.append(f"Only {interwiki} interlanguage links. More would improve navigation between languages.")
        if details["sister_project_boxes_count"] == 0:
            notes.append("No sister-project links. Consider {{شقيقات ويكيميديا}} to link Commons and Wikisource.")
        return notes
