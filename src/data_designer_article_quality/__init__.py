# SPDX-License-Identifier: Apache-2.0
"""Article Quality plugin for NeMo Data Designer.

Adds an ``article-quality`` column type that rates Arabic encyclopedia
articles from their wikitext: structure, references, media, links, grammar,
maintenance, language and style, revision stability and cross-project
integration. Rule-based and deterministic; no LLM calls, no network access.

Usage::

    from data_designer_article_quality import ArticleQualityColumnConfig

    builder.add_column(ArticleQualityColumnConfig(
        name="quality",
        target_column="wikitext",
        title_column="title",
        min_score=65,
    ))

The engine can also be called directly::

    from data_designer_article_quality import analyze_wikitext

    analyze_wikitext(wikitext, title="القاهرة")["total"]
"""

from data_designer_article_quality.config import ArticleQualityColumnConfig
from data_designer_article_quality.core import analyze_document, analyze_wikitext, run_analyzers
from data_designer_article_quality.document import Document, Image, Link, Section
from data_designer_article_quality.hyperparameters import Hyperparameters
from data_designer_article_quality.report import render_text_report
from data_designer_article_quality.scoring import calculate_final_score
from data_designer_article_quality.wikitext import document_from_wikitext

__all__ = [
    "ArticleQualityColumnConfig",
    "Document",
    "Hyperparameters",
    "Image",
    "Link",
    "Section",
    "analyze_document",
    "analyze_wikitext",
    "calculate_final_score",
    "document_from_wikitext",
    "render_text_report",
    "run_analyzers",
]
