from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_article_quality.config import ArticleQualityColumnConfig
from data_designer_article_quality.core import analyze_document
from data_designer_article_quality.rules import DEFAULT_GRAMMAR_RULES, load_rules
from data_designer_article_quality.wikitext import document_from_wikitext

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def _cell(value: object) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value)


class ArticleQualityColumnGenerator(ColumnGeneratorFullColumn[ArticleQualityColumnConfig]):
    """Column generator that rates article wikitext on structure, sourcing, media and style."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f4da Rating column {self.config.name!r} for article quality")
        logger.info(f"   target column: {self.config.target_column}")
        logger.info(f"   title column: {self.config.title_column}")
        logger.info(f"   min_score: {self.config.min_score}")

        raw_rules = DEFAULT_GRAMMAR_RULES if self.config.grammar_rules is None else self.config.grammar_rules
        rules = load_rules(raw_rules)
        logger.info(f"   grammar rules: {len(rules)}")

        results = []
        for _, row in data.iterrows():
            title = _cell(row[self.config.title_column]) if self.config.title_column else ""
            document = document_from_wikitext(_cell(row[self.config.target_column]), title, rules)
            analysis = analyze_document(document)
            output: dict = {
                "is_valid": analysis.total >= self.config.min_score,
                "quality_score": analysis.total,
                "quality_tier": analysis.tier.key,
                "axis_scores": dict(analysis.axis_scores),
                "word_count": document.word_count,
            }
            if self.config.include_notes:
                output["quality_notes"] = list(analysis.notes)
            if self.config.include_details:
                output["quality_details"] = {name: axis.to_payload() for name, axis in analysis.details.items()}
            results.append(output)

        data = data.copy()
        data[self.config.name] = results
        return data
