import pytest

from data_designer_article_quality.analyzers import (
    ALL_ANALYZERS,
    AXIS_ORDER,
    GrammarAnalyzer,
    IntegrationAnalyzer,
    LanguageAnalyzer,
    LinksAnalyzer,
    MaintenanceAnalyzer,
    MediaAnalyzer,
    ReferencesAnalyzer,
    RevisionAnalyzer,
    StructureAnalyzer,
)
from data_designer_article_quality.analyzers.language import punctuation_score
from data_designer_article_quality.analyzers.references import categorize_reference_count
from data_designer_article_quality.document import Document, Image, Link, Section
from data_designer_article_quality.errors import InputValidationError
from data_designer_article_quality.rules import DEFAULT_GRAMMAR_RULES, load_rules

STUB_TEXT = "القاهرة هي عاصمة مصر وأكبر مدنها."

WORDS = "كلمة " * 500

REFERENCE_MARKUP = (
    "نص<ref>{{استشهاد ويب|عنوان=القاهرة|مؤلف=أحمد|تاريخ=2020|مسار=https://example.com|access-date=2024}}</ref>"
    ' ونص<ref name="كتاب">{{cite book|title=Cairo|author=Smith|year=2018|publisher=Oxford}}</ref>'
    '<ref name="كتاب"/> وسنة 1850.<ref>{{cite web|url=http://old.example|year=1850}}</ref>'
    " انظر https://example.org/page للمزيد."
)

DUPLICATE_TEXT = "تمت كتابة المقالة في عام 2020 من قبل الكاتب. تمت كتابة المقالة، في عام 2020 من قبل الكاتب."

LONG_DOCUMENT = Document(
    title="القاهرة",
    full_text=("تعد المدينة من أكبر المدن، وفيها آثار كثيرة. " * 40 + "\n\n") * 3,
    intro_text="تعد المدينة من أكبر المدن، وفيها آثار كثيرة. " * 8,
    sections=(
        Section(2, "التاريخ", "محتوى " * 100),
        Section(3, "العصر الحديث", "محتوى " * 100),
        Section(2, "الجغرافيا", "محتوى " * 100),
        Section(2, "انظر أيضا", ""),
        Section(2, "مراجع", ""),
    ),
    templates=("صندوق معلومات مدينة", "شقيقات ويكيميديا", "وإو"),
    categories=("مدن مصر", "عواصم"),
    images=(Image("Cairo.jpg", alt="منظر للمدينة", width=300, in_lead=True),),
    links=tuple(Link(f"مقالة {i}") for i in range(25)) + (Link("https://example.org", "external"),),
    raw_markup=REFERENCE_MARKUP + "{{وإو|Cairo|en}} {{شقيقات ويكيميديا}} wikidata Q85",
)


def _key_tree(details):
    return {key: _key_tree(value) if isinstance(value, dict) else None for key, value in details.items()}


class TestEmptyDocument:
    def test_every_axis_returns_zero_result(self):
        for cls in ALL_ANALYZERS:
            for document in (Document(), Document(full_text="  \n ")):
                result = cls().analyze(document)
                assert result.name == cls.name
                assert result.score == 0
                assert result.details == cls().empty_details()
                assert result.notes == ()

    def test_zero_details_match_a_full_run(self):
        for cls in ALL_ANALYZERS:
            empty = cls().analyze(Document()).details
            full = cls().analyze(LONG_DOCUMENT).details
            assert _key_tree(empty) == _key_tree(full), cls.name

    def test_zero_details_hold_no_counts_or_examples(self):
        details = LanguageAnalyzer().analyze(Document()).details
        assert details["machine_translation_signals"] == 0
        assert details["redundant_sentences"] == 0
        assert all(v == [] for v in details["examples"].values())
        media = MediaAnalyzer().analyze(Document()).details
        assert media["informative_images"] == 0
        assert all(v == [] for v in media["examples"].values())

    def test_axis_order(self):
        assert AXIS_ORDER == (
            "structure", "references", "media", "links", "grammar",
            "maintenance", "language", "revision", "integration",
        )


class TestDocumentValidation:
    def test_wrong_types_raise(self):
        with pytest.raises(InputValidationError):
            Document(full_text=5)
        with pytest.raises(InputValidationError):
            Document(templates="قالب")

    def test_none_fields_become_empty(self):
        document = Document(full_text=None, sections=None)
        assert document.full_text == ""
        assert document.sections == ()

    def test_derived_values(self):
        document = Document(
            full_text="  مرض خطير  ",
            links=(Link("أ"), Link("أ"), Link("ب", "red"), Link("https://x.org", "external")),
            templates=("صندوق معلومات شخص",),
        )
        assert document.article_length == len("مرض خطير")
        assert document.word_count == 2
        assert document.internal_links == ["أ"]
        assert document.red_links == ["ب"]
        assert document.external_links == ["https://x.org"]
        assert document.article_types() == ["medical", "biography"]


class TestStructure:
    def test_stub_without_sections(self):
        result = StructureAnalyzer().analyze(Document(full_text=STUB_TEXT, intro_text=STUB_TEXT))
        assert result.details["is_stub"]
        assert result.details["sections"]["total"] == 0
        assert result.notes[0] == "Article is at stub stage. Expand it and organize it into sections."

    def test_missing_and_empty_sections(self):
        result = StructureAnalyzer().analyze(LONG_DOCUMENT)
        assert not result.details["is_stub"]
        assert result.details["missing_sections"] == ["External links"]
        assert result.details["empty_sections"] == ["انظر أيضا", "مراجع"]
        assert result.details["sections"]["level_counts"]["h2"] == 4
        assert result.details["sections"]["structural_depth"] == 2


class TestReferences:
    def test_counts(self):
        result = ReferencesAnalyzer().analyze(Document(full_text="نص", raw_markup=REFERENCE_MARKUP))
        details = result.details
        assert details["total_refs"] == 4
        assert details["named_refs"] == 2
        assert details["repeated_refs"] == 1
        assert details["bare_urls"] == 1
        assert details["recent_years"] == 2
        assert details["all_years"] == 2
        assert details["reference_types"]["book"] == 1
        assert details["reference_types"]["web"] == 2
        assert details["complete_citations"] == 2
        assert details["incomplete_citations"] == 1
        assert not details["has_references_section"]
        assert details["reference_count_category"] == "under10"

    def test_reference_count_categories(self):
        assert categorize_reference_count(0) == "under10"
        assert categorize_reference_count(9) == "under10"
        assert categorize_reference_count(10) == "between10and20"
        assert categorize_reference_count(20) == "between10and20"
        assert categorize_reference_count(21) == "between20and50"
        assert categorize_reference_count(50) == "between20and50"
        assert categorize_reference_count(51) == "above50"

    def test_no_references_note(self):
        result = ReferencesAnalyzer().analyze(Document(full_text=STUB_TEXT))
        assert result.score == 0
        assert result.notes[0] == "Article has no references. Add reliable sources to support the content."


class TestMedia:
    def test_informative_and_decorative_images(self):
        document = Document(
            full_text="كلمة " * 200,
            images=(
                Image("File:Cairo.jpg", alt="صورة القاهرة من الجو", width=300),
                Image("File:Flag_of_Egypt.svg", width=20),
                Image("Map.png", alt="خريطة مصر", in_infobox=True),
            ),
        )
        result = MediaAnalyzer().analyze(document)
        assert result.details["informative_images"] == 1
        assert result.details["decorative_images"] == 1
        assert result.details["infobox_images"] == 1
        assert result.details["filtered_out_images"] == 1
        assert result.details["images_without_alt"] == 1
        assert result.score == 4.5

    def test_no_images(self):
        result = MediaAnalyzer().analyze(Document(full_text=STUB_TEXT))
        assert result.score == 0
        assert result.notes[0] == "Article has no images. Add illustrative images from Wikimedia Commons."


class TestLinks:
    def test_ideal_density(self):
        links = tuple(Link(f"مقالة {i}") for i in range(10)) + (Link("https://example.org", "external"),)
        result = LinksAnalyzer().analyze(Document(full_text=WORDS, links=links))
        assert result.details["link_density"] == 2.0
        assert result.score == 11

    def test_red_links_penalized(self):
        links = tuple(Link(f"مقالة {i}") for i in range(5)) + tuple(Link(f"حمراء {i}", "red") for i in range(5))
        result = LinksAnalyzer().analyze(Document(full_text=WORDS, links=links))
        assert result.score == 2
        assert "High share of red links (50%). Create the pages or remove the links." in result.notes

    def test_fair_density(self):
        links = tuple(Link(f"مقالة {i}") for i in range(10))
        result = LinksAnalyzer().analyze(Document(full_text="كلمة " * 1000, links=links))
        assert result.details["link_density"] == 1.0
        assert result.score == 8

    def test_overlinking_earns_a_single_density_point(self):
        links = tuple(Link(f"مقالة {i}") for i in range(10))
        result = LinksAnalyzer().analyze(Document(full_text="كلمة " * 100, links=links))
        assert result.details["link_density"] == 10.0
        assert result.score == 7
        assert "Very high link density. The article may be overlinked." in result.notes


class TestGrammar:
    TEXT = "هاذا النص يحتوي على خطأ إملائي واضح في بدايته."

    def test_clean_text_scores_max(self):
        assert GrammarAnalyzer().analyze(Document(full_text=self.TEXT)).score == 5

    def test_rule_hits(self):
        document = Document(full_text=self.TEXT, rules=load_rules(DEFAULT_GRAMMAR_RULES))
        result = GrammarAnalyzer().analyze(document)
        assert result.details["error_count"] == 1
        assert result.details["errors"][0]["match"] == "هاذا"
        assert result.score == 3

    def test_translation_template(self):
        result = GrammarAnalyzer().analyze(Document(full_text=self.TEXT, templates=("ترجمة آلية",)))
        assert result.details["has_translation_template"]
        assert result.score == 3


class TestMaintenance:
    def test_clean_and_categorized(self):
        document = Document(full_text=STUB_TEXT, categories=("أ", "ب", "ج", "د", "هـ"))
        assert MaintenanceAnalyzer().analyze(document).score == 20

    def test_markers_and_flags(self):
        document = Document(full_text=STUB_TEXT, templates=("بذرة",), maintenance_markers=1)
        result = MaintenanceAnalyzer().analyze(document)
        assert result.score == 8
        assert result.details["has_stub_template"]
        assert "Article is uncategorized. Add suitable categories." in result.notes


class TestLanguage:
    def test_near_duplicates_are_reported(self):
        result = LanguageAnalyzer().analyze(Document(full_text=DUPLICATE_TEXT))
        assert result.details["redundant_sentences"] == 1
        assert not result.details["redundancy_truncated"]
        assert result.details["machine_translation_signals"] == 2

    def test_punctuation_score_bands(self):
        assert punctuation_score("أ، ب؛ ج؟") == (100, 100)
        assert punctuation_score("،" * 7 + "," * 3) == (75, 70)
        assert punctuation_score("a, b. c;") == (25, 0)
        assert punctuation_score("بلا ترقيم") == (25, 0)


class TestRevisionAndIntegration:
    def test_protection_and_edit_wars(self):
        document = Document(full_text=STUB_TEXT, page_chrome="هذه الصفحة محمية. Reverted edits")
        result = RevisionAnalyzer().analyze(document)
        assert result.details["has_protection"]
        assert result.details["has_edit_wars"]
        assert result.score == 6

    def test_wikidata_and_sister_links(self):
        result = IntegrationAnalyzer().analyze(LONG_DOCUMENT)
        assert result.details["linked_to_wikidata"]
        assert result.details["interwiki_links_count"] == 1
        assert result.details["sister_project_boxes_count"] == 1

    def test_unlinked_article(self):
        result = IntegrationAnalyzer().analyze(Document(full_text=STUB_TEXT))
        assert result.details["missing_wikidata_link"]
        assert result.score == 3


class TestBounds:
    def test_every_axis_stays_in_bounds(self):
        documents = [
            Document(full_text=STUB_TEXT, intro_text=STUB_TEXT),
            LONG_DOCUMENT,
            Document(full_text=DUPLICATE_TEXT * 50, maintenance_markers=9, raw_markup="http://a.com " * 20),
        ]
        for document in documents:
            for cls in ALL_ANALYZERS:
                analyzer = cls()
                result = analyzer.analyze(document)
                assert 0 <= result.score <= analyzer.max_score
