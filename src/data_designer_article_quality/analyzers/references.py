# SPDX-License-Identifier: Apache-2.0
"""References axis: citation counts, completeness, recency, source types and languages."""

from __future__ import annotations

import re
from typing import Any

from data_designer_article_quality.analyzers.base import Analyzer, bucket, prefix
from data_designer_article_quality.document import Document
from data_designer_article_quality.results import AxisResult
from data_designer_article_quality.segmentation import clean_markup

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_REF_OPEN_RE = re.compile(r"<ref[\s>]", re.IGNORECASE)
_NAMED_REF_RE = re.compile(r"<ref\s+name\s*=\s*[\"']?[^\"'>/]+[\"']?", re.IGNORECASE)
_REPEATED_REF_RE = re.compile(r"<ref\s+name\s*=\s*[\"']?[^\"'>/]+[\"']?\s*/>", re.IGNORECASE)
_URL_RE = re.compile(r"https?://[^\s<\]\"'|}]+", re.IGNORECASE)
_URL_HOST_RE = re.compile(r"https?://([^/\s<\]\"'|}:]+)", re.IGNORECASE)
_CITATION_RE = re.compile(r"\{\{\s*(?:cite|استشهاد)\s+[^}]+\}\}", re.IGNORECASE)
_CITATION_TYPE_RE = re.compile(r"\{\{\s*(?:cite|استشهاد)\s+(\w+)", re.IGNORECASE)
_PUBLICATION_YEAR_RE = re.compile(r"(?<![\w-])(?:year|سنة|date|تاريخ)\s*=\s*[^|}\n]*?(\d{4})", re.IGNORECASE)
_REFERENCES_SECTION_RE = re.compile(r"مراجع|references|مصادر|ملاحظات|الهوامش", re.IGNORECASE)
_LANGUAGE_FIELD_RE = re.compile(r"\|\s*(?:language|لغة)\s*=\s*([^|}\n]+)", re.IGNORECASE)
_ARABIC_LANGUAGE_RE = re.compile(r"arabic|عربي|\bar\b", re.IGNORECASE)
_ENGLISH_LANGUAGE_RE = re.compile(r"english|إنجليزي|\ben\b", re.IGNORECASE)

_FIELD_RES = {
    "title": re.compile(r"\|\s*(?:title|عنوان)\s*=", re.IGNORECASE),
    "author": re.compile(r"\|\s*(?:author|مؤلف|last|الأخير)\d*\s*=", re.IGNORECASE),
    "date": re.compile(r"\|\s*(?:date|تاريخ|year|سنة)\s*=", re.IGNORECASE),
    "publisher": re.compile(r"\|\s*(?:publisher|ناشر|work|عمل)\s*=", re.IGNORECASE),
    "url": re.compile(r"\|\s*(?:url|مسار)\s*=", re.IGNORECASE),
}

_REFERENCE_TYPE_PATTERNS = {
    "book": (r"\{\{\s*استشهاد\s+بكتاب", r"\{\{\s*cite\s+book", r"ISBN[\s:-]*\d{9,13}"),
    "journal": (
        r"\{\{\s*استشهاد\s+بدورية",
        r"\{\{\s*استشهاد\s+بمجلة",
        r"\{\{\s*cite\s+journal",
        r"DOI\s*[:=]\s*10\.\d+",
        r"ISSN[\s:-]*\d{4}-?\d{3}[\dXx]",
    ),
    "news": (
        r"\{\{\s*استشهاد\s+بخبر",
        r"\{\{\s*cite\s+news",
        r"bbc\.com|cnn\.com|reuters\.com|aljazeera\.|france24\.|dw\.com",
    ),
    "web": (r"\{\{\s*استشهاد\s+ويب", r"\{\{\s*cite\s+web"),
    "archive": (r"\{\{\s*استشهاد\s+أرشيف", r"archive\.org"),
    "wikidata": (r"\{\{\s*استشهاد\s+بويكي\s+بيانات", r"\{\{\s*cite\s+Q\b"),
}
_REFERENCE_TYPE_RES = {
    kind: tuple(re.compile(p, re.IGNORECASE) for p in patterns)
    for kind, patterns in _REFERENCE_TYPE_PATTERNS.items()
}

_RELIABLE_DOMAINS = (
    "britannica.com", "nature.com", "science.org", "nejm.org", "who.int", "archive.org",
    "jstor.org", "springer.com", "cambridge.org", "oxford", "bbc.com", "aljazeera.net",
)
_RELIABLE_DOMAIN_RES = tuple(re.compile(re.escape(d), re.IGNORECASE) for d in _RELIABLE_DOMAINS)

_ARABIC_PUBLISHERS = (
    "الجزيرة", "العربية", "bbc عربي", "سكاي نيوز عربية", "الشرق الأوسط", "الأهرام",
    "اليوم السابع", "الحياة", "العرب", "الخليج", "البيان", "الاتحاد", "الرياض",
)
_ENGLISH_PUBLISHERS = (
    "BBC", "CNN", "Reuters", "Guardian", "Telegraph", "Times", "Washington Post",
    "New York Times", "Nature", "Science", "Britannica",
)
_ARABIC_PUBLISHER_RES = tuple(re.compile(re.escape(p), re.IGNORECASE) for p in _ARABIC_PUBLISHERS)
_ENGLISH_PUBLISHER_RES = tuple(re.compile(re.escape(p), re.IGNORECASE) for p in _ENGLISH_PUBLISHERS)

_ARABIC_TLDS = (
    ".sa", ".eg", ".ae", ".sy", ".jo", ".iq", ".kw", ".qa", ".bh", ".om", ".ye", ".lb", ".ps",
    ".ma", ".tn", ".dz", ".ly", ".sd", ".mr",
)
_ENGLISH_TLDS = (".uk", ".us", ".au", ".nz", ".ca", ".ie")
_OTHER_TLDS = (".fr", ".be", ".ch", ".de", ".at", ".es", ".mx", ".ar", ".co", ".cl", ".pe")

# ---------------------------------------------------------------------------
# Score tables
# ---------------------------------------------------------------------------

_REF_COUNT_POINTS = ((16, 15), (8, 14), (4, 11), (2, 7), (1, 3))
_CITATION_QUALITY_POINTS = ((0.8, 4), (0.6, 3), (0.4, 2))
_RECENT_POINTS = ((5, 3), (3, 2), (1, 1))
_RELIABLE_POINTS = ((5, 3), (2, 2), (1, 1))
_BARE_URL_PENALTY = 2
_BARE_URL_PENALTY_CAP = 6
_NO_SECTION_PENALTY = 2


def categorize_reference_count(total: int) -> str:
    if total < 10:
        return "under10"
    if total <= 20:
        return "between10and20"
    if total <= 50:
        return "between20and50"
    return "above50"


def _count(patterns: tuple[re.Pattern[str], ...], text: str) -> int:
    return sum(len(p.findall(text)) for p in patterns)


class ReferencesAnalyzer(Analyzer):
    name = "references"

    def empty_details(self) -> dict[str, Any]:
        return {
            "total_refs": 0,
            "named_refs": 0,
            "repeated_refs": 0,
            "bare_urls": 0,
            "complete_citations": 0,
            "incomplete_citations": 0,
            "recent_years": 0,
            "all_years": 0,
            "has_references_section": False,
            "reliable_sources_count": 0,
            "reference_types": self._reference_types("", 0),
            "reference_languages": {"ar": 0, "en": 0, "other": 0},
            "reference_count_category": categorize_reference_count(0),
            "wikidata_citations_count": 0,
            "incomplete_references_count": 0,
            "incomplete_references": [],
        }

    def _analyze(self, document: Document) -> AxisResult:
        markup = document.raw_markup
        citations = _CITATION_RE.findall(markup)
        total_refs = len(_REF_OPEN_RE.findall(markup))
        complete = sum(1 for c in citations if self._present_fields(c, ("title", "author", "date")) >= 2)
        years = self._publication_years(markup)
        incomplete_count, incomplete_examples = self._incomplete_references(citations)
        reference_types = self._reference_types(markup, total_refs)

        details: dict[str, Any] = {
            "total_refs": total_refs,
            "named_refs": len(_NAMED_REF_RE.findall(markup)),
            "repeated_refs": len(_REPEATED_REF_RE.findall(markup)),
            "bare_urls": len(_URL_RE.findall(clean_markup(markup))),
            "complete_citations": complete,
            "incomplete_citations": len(citations) - complete,
            "recent_years": sum(1 for y in years if y >= self.hp.recent_year_min),
            "all_years": len(years),
            "has_references_section": any(_REFERENCES_SECTION_RE.search(t) for t in document.section_titles),
            "reliable_sources_count": _count(_RELIABLE_DOMAIN_RES, markup),
            "reference_types": reference_types,
            "reference_languages": self._reference_languages(markup),
            "reference_count_category": categorize_reference_count(total_refs),
            "wikidata_citations_count": reference_types["wikidata"],
            "incomplete_references_count": incomplete_count,
            "incomplete_references": incomplete_examples,
        }
        return self._result(self._score(details), details, self._notes(details))

    @staticmethod
    def _present_fields(citation: str, fields: tuple[str, ...]) -> int:
        return sum(1 for f in fields if _FIELD_RES[f].search(citation))

    def _publication_years(self, markup: str) -> list[int]:
        years = (int(y) for y in _PUBLICATION_YEAR_RE.findall(markup))
        return [y for y in years if self.hp.year_min <= y <= self.hp.year_max]

    def _incomplete_references(self, citations: list[str]) -> tuple[int, list[dict[str, Any]]]:
        count = 0
        examples: list[dict[str, Any]] = []
        for cite in citations:
            missing = [f for f in ("title", "publisher", "date", "url") if not _FIELD_RES[f].search(cite)]
            if len(missing) < 2:
                continue
            count += 1
            if len(examples) < self.hp.reference_example_cap:
                type_match = _CITATION_TYPE_RE.search(cite)
                examples.append({
                    "type": type_match.group(1) if type_match else "unknown",
                    "missing": missing,
                    "snippet": prefix(cite, self.hp.reference_snippet_chars),
                })
        return count, examples

    @staticmethod
    def _reference_types(markup: str, total_refs: int) -> dict[str, int]:
        types = {kind: _count(patterns, markup) for kind, patterns in _REFERENCE_TYPE_RES.items()}
        types["unknown"] = max(0, total_refs - sum(types.values()))
        return types

    @staticmethod
    def _reference_languages(markup: str) -> dict[str, int]:
        languages = {"ar": 0, "en": 0, "other": 0}
        for value in _LANGUAGE_FIELD_RE.findall(markup):
            if _ARABIC_LANGUAGE_RE.search(value):
                languages["ar"] += 1
            elif _ENGLISH_LANGUAGE_RE.search(value):
                languages["en"] += 1
            else:
                languages["other"] += 1

        languages["ar"] += _count(_ARABIC_PUBLISHER_RES, markup)
        languages["en"] += _count(_ENGLISH_PUBLISHER_RES, markup)

        for host in _URL_HOST_RE.findall(markup):
            host = host.lower()
            if host.endswith(_ARABIC_TLDS):
                languages["ar"] += 1
            elif host.endswith(_ENGLISH_TLDS):
                languages["en"] += 1
            elif host.endswith(_OTHER_TLDS):
                languages["other"] += 1
        return languages

    @staticmethod
    def _score(details: dict[str, Any]) -> float:
        score = bucket(details["total_refs"], _REF_COUNT_POINTS)

        total_citations = details["complete_citations"] + details["incomplete_citations"]
        if total_citations:
            score += bucket(details["complete_citations"] / total_citations, _CITATION_QUALITY_POINTS, default=1)

        score += bucket(details["recent_years"], _RECENT_POINTS)
        score += bucket(details["reliable_sources_count"], _RELIABLE_POINTS)

        if details["bare_urls"]:
            score -= min(_BARE_URL_PENALTY_CAP, details["bare_urls"] * _BARE_URL_PENALTY)
        if not details["has_references_section"] and details["total_refs"]:
            score -= _NO_SECTION_PENALTY
        return score

    def _notes(self, details: dict[str, Any]) -> list[str]:
        notes = []
        total = details["total_refs"]
        if total == 0:
            notes.append("Article has no references. Add reliable sources to support the content.")
        elif total < 3:
            notes.append("Very few references. Add more reliable sources.")
        elif total < 7:
            notes.append("Reference count is acceptable but more sources would help.")

        if details["bare_urls"]:
            notes.append(f"{details['bare_urls']} bare URLs without citation formatting. Convert them to full citations.")
        if details["incomplete_citations"]:
            notes.append(
                f"{details['incomplete_citations']} incomplete citation templates. "
                "Fill in the essential fields (title, author, date)."
            )
        if not details["has_references_section"] and total:
            notes.append('Add a dedicated references section ("مراجع" or "مصادر").')
        if details["recent_years"] == 0 and total:
            notes.append(
                f"No recent sources ({self.hp.recent_year_min}-{self.hp.year_max}). Update the sources where possible."
            )
        return notes
