from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig


class ArticleQualityColumnConfig(SingleColumnConfig):
    """Rate a wikitext column for encyclopedic article quality.

    Builds a document from each row's wikitext, runs the nine axis analyzers and
    produces a weighted total (0-100), a quality tier, per-axis scores and an
    ordered list of improvement notes.

    Attributes:
        target_column: Column holding the article wikitext.
        title_column: Optional column holding the article title.
        min_score: Minimum total (0-100) for ``is_valid=True``. Defaults to 50
            (the lower bound of the "start" tier).
        include_notes: Include the ordered improvement notes in output.
        include_details: Include every axis result (score, max, details, notes).
        grammar_rules: Raw grammar rules ``{pattern, flags, description, suggestion}``.
            Falls back to the built-in Arabic spelling rules when omitted.
    """

    target_column: str
    title_column: Optional[str] = Field(default=None, description="Column holding the article title")
    min_score: int = Field(default=50, ge=0, le=100, description="Minimum quality score for is_valid=True")
    include_notes: bool = Field(default=True, description="Include improvement notes in output")
    include_details: bool = Field(default=False, description="Include per-axis details in output")
    grammar_rules: Optional[list[dict[str, Any]]] = Field(default=None, description="Raw grammar rule mappings")
    column_type: Literal["article-quality"] = "article-quality"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f4da"

    @property
    def required_columns(self) -> list[str]:
        if self.title_column:
            return [self.target_column, self.title_column]
        return [self.target_column]

    @property
    def side_effect_columns(self) -> list[str]:
        return []
