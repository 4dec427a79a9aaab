from types import SimpleNamespace

import pytest

pytest.importorskip("data_designer")
pd = pytest.importorskip("pandas")

from pydantic import ValidationError  # noqa: E402

from data_designer_article_quality.config import ArticleQualityColumnConfig  # noqa: E402
from data_designer_article_quality.generator import ArticleQualityColumnGenerator  # noqa: E402
from data_designer_article_quality.plugin import article_quality_plugin  # noqa: E402

ARTICLE = (
    "'''القاهرة''' هي عاصمة [[مصر]] وأكبر مدنها، وتقع على ضفاف [[نهر النيل]].\n\n"
    "== التاريخ ==\n"
    "هاذا النص يصف تاريخ المدينة منذ تأسيسها في عهد [[الدولة الفاطمية]].\n\n"
    "[[تصنيف:مدن مصر]]\n"
)


class TestConfig:
    def test_defaults(self):
        config = ArticleQualityColumnConfig(name="quality", target_column="wikitext")
        assert config.column_type == "article-quality"
        assert config.min_score == 50
        assert config.include_notes
        assert not config.include_details
        assert config.required_columns == ["wikitext"]
        assert config.side_effect_columns == []
        assert ArticleQualityColumnConfig.get_column_emoji() == "\U0001f4da"

    def test_title_column_is_required(self):
        config = ArticleQualityColumnConfig(name="quality", target_column="wikitext", title_column="title")
        assert config.required_columns == ["wikitext", "title"]

    def test_min_score_bounds(self):
        with pytest.raises(ValidationError):
            ArticleQualityColumnConfig(name="quality", target_column="wikitext", min_score=101)


class TestPlugin:
    def test_qualified_names(self):
        assert article_quality_plugin.config_qualified_name.endswith("ArticleQualityColumnConfig")
        assert article_quality_plugin.impl_qualified_name.endswith("ArticleQualityColumnGenerator")


class TestGenerator:
    def _generate(self, config, data):
        return ArticleQualityColumnGenerator.generate(SimpleNamespace(config=config), data)

    def test_scores_every_row(self):
        config = ArticleQualityColumnConfig(name="quality", target_column="wikitext", title_column="title")
        data = pd.DataFrame({"wikitext": [ARTICLE, "", None], "title": ["القاهرة", "فارغ", None]})
        out = self._generate(config, data)

        assert "quality" not in data.columns
        assert len(out) == 3
        first = out["quality"].iloc[0]
        assert set(first) == {"is_valid", "quality_score", "quality_tier", "axis_scores", "word_count", "quality_notes"}
        assert 0 <= first["quality_score"] <= 100
        assert first["is_valid"] == (first["quality_score"] >= 50)
        empty = out["quality"].iloc[1]
        assert empty["quality_score"] == 0
        assert not empty["is_valid"]
        assert out["quality"].iloc[2]["word_count"] == 0

    def test_optional_outputs(self):
        config = ArticleQualityColumnConfig(
            name="quality", target_column="wikitext", include_notes=False, include_details=True, grammar_rules=[]
        )
        out = self._generate(config, pd.DataFrame({"wikitext": [ARTICLE]}))
        result = out["quality"].iloc[0]
        assert "quality_notes" not in result
        assert result["quality_details"]["grammar"]["details"]["error_count"] == 0

    def test_default_grammar_rules(self):
        config = ArticleQualityColumnConfig(name="quality", target_column="wikitext", include_details=True)
        out = self._generate(config, pd.DataFrame({"wikitext": [ARTICLE]}))
        assert out["quality"].iloc[0]["quality_details"]["grammar"]["details"]["error_count"] == 1
