# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import re
from typing import Any

from data_designer_article_quality.analyzers.base import Analyzer, bucket
from data_designer_article_quality.document import Document
from data_designer_article_quality.results import AxisResult

_ORPHAN_RE = re.compile(r"يتيم|orphan", re.IGNORECASE)
_STUB_RE = re.compile(r"بذرة|stub", re.IGNORECASE)
_CLEANUP_RE = re.compile(r"تنظيف|cleanup", re.IGNORECASE)

# Upper marker bound -> points.
_MARKER_POINTS = ((0, 12), (1, 8), (2, 5), (4, 2))
_CATEGORY_POINTS = ((5, 8), (3, 6), (1, 4))
_FEW_CATEGORIES = 3


class MaintenanceAnalyzer(Analyzer):
    name = "maintenance"

    def empty_details(self) -> dict[str, Any]:
        return {
            "maintenance_templates": 0,
            "categories": 0,
            "has_orphan_template": False,
            "has_stub_template": False,
            "has_cleanup_template": False,
        }

    def _analyze(self, document: Document) -> AxisResult:
        markers = document.maintenance_markers
        categories = len(document.categories)
        orphan = any(_ORPHAN_RE.search(t) for t in document.templates)
        stub = any(_STUB_RE.search(t) for t in document.templates)
        cleanup = any(_CLEANUP_RE.search(t) for t in document.templates)

        score = next((points for bound, points in _MARKER_POINTS if markers <= bound), 0)
        score += bucket(categories, _CATEGORY_POINTS)

        notes = []
        if markers:
            notes.append(f"Article carries {markers} maintenance templates. Resolve the issues they flag.")
        if categories == 0:
            notes.append("Article is uncategorized. Add suitable categories.")
        elif categories < _FEW_CATEGORIES:
            notes.append("Few categories. Add more specific categories.")
        if orphan:
            notes.append("Article is an orphan (no other articles link to it). Link it from related articles.")
        if stub:
            notes.append("Article is tagged as a stub. Expand it.")

        details = {
            "maintenance_templates": markers,
            "categories": categories,
            "has_orphan_template": orphan,
            "has_stub_template": stub,
            "has_cleanup_template": cleanup,
        }
        return self._result(score, details, notes)
