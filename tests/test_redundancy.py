import logging

import pytest

from data_designer_article_quality.hyperparameters import Hyperparameters
from data_designer_article_quality.redundancy import detect_redundancy, edit_distance, similarity, token_overlap

SENTENCE = "تمت كتابة المقالة في عام 2020 من قبل الكاتب."
PUNCTUATION_VARIANT = "تمت كتابة المقالة، في عام 2020 من قبل الكاتب!"

LONG_A = " ".join(f"w{i}" for i in range(200))
LONG_B = " ".join(f"w{i}" for i in range(100, 300))

DISTINCT_SENTENCES = [
    "بنيت القلعة على تل مرتفع يطل على المدينة القديمة",
    "يعمل معظم السكان في الزراعة وصيد الأسماك منذ قرون",
    "افتتحت الجامعة الأولى في البلاد خلال القرن العشرين",
    "تشتهر المنطقة بأسواقها الشعبية ومساجدها التاريخية",
    "يمر نهر كبير عبر الوادي ويغذي البحيرات المجاورة",
]


class TestSimilarity:
    def test_edit_distance(self):
        assert edit_distance("kitten", "sitting") == 3
        assert edit_distance("", "abc") == 3
        assert edit_distance("abc", "") == 3
        assert edit_distance("كتاب", "كتاب") == 0

    def test_self_similarity(self):
        for text in ("abc", SENTENCE, LONG_A):
            assert similarity(text, text) == 1.0

    def test_empty_is_zero(self):
        assert similarity("", "abc") == 0.0
        assert similarity("abc", "") == 0.0

    def test_symmetric(self):
        pairs = [("kitten", "sitting"), (SENTENCE, PUNCTUATION_VARIANT), (LONG_A, LONG_B), ("a", LONG_A)]
        for a, b in pairs:
            assert similarity(a, b) == similarity(b, a)

    def test_short_strings_use_edit_distance(self):
        assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)

    def test_long_strings_fall_back_to_token_overlap(self):
        assert len(LONG_A) > 500
        assert similarity(LONG_A, LONG_B) == pytest.approx(1 / 3)
        assert similarity(LONG_A, LONG_B) == token_overlap(LONG_A, LONG_B)

    def test_both_paths_stay_in_unit_interval(self):
        for a, b in [("abc", "xyz"), ("ab", "abcdef"), (LONG_A, "zzz " * 200), (LONG_A, LONG_B)]:
            assert 0.0 <= similarity(a, b) <= 1.0

    def test_token_overlap_empty_union(self):
        assert token_overlap("", "   ") == 0.0


class TestDetectRedundancy:
    def test_punctuation_only_variant_is_reported(self):
        report = detect_redundancy([SENTENCE, PUNCTUATION_VARIANT])
        assert report.count == 1
        assert report.examples[0].sentence1 == SENTENCE
        assert report.examples[0].sentence2 == PUNCTUATION_VARIANT
        assert report.examples[0].similarity >= 85
        assert not report.truncated

    def test_short_sentences_are_ignored(self):
        assert detect_redundancy(["جملة قصيرة", "جملة قصيرة"]).count == 0

    def test_fewer_than_two_sentences(self):
        assert detect_redundancy([SENTENCE]).count == 0
        assert detect_redundancy([]).examples == ()

    def test_every_pair_counts_but_examples_are_capped(self):
        report = detect_redundancy([SENTENCE] * 5)
        assert report.count == 10
        assert len(report.examples) == 3

    def test_distinct_sentences(self):
        assert detect_redundancy(DISTINCT_SENTENCES).count == 0

    def test_long_examples_are_prefixed(self):
        sentence = "ا" * 100
        report = detect_redundancy([sentence, sentence])
        assert report.examples[0].sentence1 == "ا" * 70 + "..."

    def test_comparison_budget_truncates(self, caplog):
        hp = Hyperparameters(redundancy_max_comparisons=3)
        with caplog.at_level(logging.WARNING, logger="data_designer_article_quality.redundancy"):
            report = detect_redundancy([SENTENCE] * 5, hp)
        assert report.truncated
        assert report.count == 3
        assert "truncated" in caplog.text

    def test_sentence_cap_truncates(self):
        hp = Hyperparameters(redundancy_max_sentences=2)
        report = detect_redundancy([SENTENCE] * 3, hp)
        assert report.truncated
        assert report.count == 1
