# SPDX-License-Identifier: Apache-2.0
"""Per-axis analyzers, listed in the fixed axis order used for notes and reports."""

from data_designer_article_quality.analyzers.base import Analyzer
from data_designer_article_quality.analyzers.grammar import GrammarAnalyzer
from data_designer_article_quality.analyzers.integration import IntegrationAnalyzer
from data_designer_article_quality.analyzers.language import LanguageAnalyzer
from data_designer_article_quality.analyzers.links import LinksAnalyzer
from data_designer_article_quality.analyzers.maintenance import MaintenanceAnalyzer
from data_designer_article_quality.analyzers.media import MediaAnalyzer
from data_designer_article_quality.analyzers.references import ReferencesAnalyzer
from data_designer_article_quality.analyzers.revision import RevisionAnalyzer
from data_designer_article_quality.analyzers.structure import StructureAnalyzer

ALL_ANALYZERS: tuple[type[Analyzer], ...] = (
    StructureAnalyzer,
    ReferencesAnalyzer,
    MediaAnalyzer,
    LinksAnalyzer,
    GrammarAnalyzer,
    MaintenanceAnalyzer,
    LanguageAnalyzer,
    RevisionAnalyzer,
    IntegrationAnalyzer,
)

AXIS_ORDER: tuple[str, ...] = tuple(cls.name for cls in ALL_ANALYZERS)

__all__ = [
    "ALL_ANALYZERS",
    "AXIS_ORDER",
    "Analyzer",
    "GrammarAnalyzer",
    "IntegrationAnalyzer",
    "LanguageAnalyzer",
    "LinksAnalyzer",
    "MaintenanceAnalyzer",
    "MediaAnalyzer",
    "ReferencesAnalyzer",
    "RevisionAnalyzer",
    "StructureAnalyzer",
]
