import logging
import re

import pytest

from data_designer_article_quality.errors import PatternError
from data_designer_article_quality.results import SignalCount
from data_designer_article_quality.rules import (
    DEFAULT_GRAMMAR_RULES,
    Rule,
    apply_rules,
    compile_rule,
    is_safe_pattern,
    load_rules,
)
from data_designer_article_quality.signals import (
    FILLER,
    MACHINE_TRANSLATION,
    PREPOSITION_OPENING,
    WEAK_OPENING,
    count_anchored,
    count_anchored_hits,
    detect,
    detect_group,
    repeated_words,
    starts_with_and,
)

MT_TEXT = "تم بناء المسجد في عام 1950 على سبيل المثال."
FILLER_TEXT = "في الواقع المدينة كبيرة بشكل عام، في الواقع هي قديمة."


class TestPatternGroups:
    def test_machine_translation_counts_every_pattern(self):
        result = detect_group(MT_TEXT, MACHINE_TRANSLATION)
        assert result.count == 3
        assert result.examples == ("تم بناء", "في عام 1950", "على سبيل المثال")

    def test_examples_are_unique(self):
        result = detect_group(FILLER_TEXT, FILLER)
        assert result.count == 3
        assert result.examples == ("بشكل عام", "في الواقع")

    def test_detect_is_deterministic(self):
        assert detect(MT_TEXT + " " + FILLER_TEXT) == detect(MT_TEXT + " " + FILLER_TEXT)

    def test_empty_text(self):
        assert detect_group("", FILLER) == SignalCount()
        assert all(v.count == 0 for v in detect("").values())


class TestAnchoredPatterns:
    def test_one_count_per_sentence(self):
        sentences = ["في عام 1990 ولد الكاتب", "الكتاب مفيد جدا", "من المعروف أنه كتب كثيرا"]
        assert count_anchored(sentences, PREPOSITION_OPENING).count == 2
        assert count_anchored_hits(sentences, PREPOSITION_OPENING) == 3

    def test_examples_are_prefixes(self):
        long_sentence = "في " + "ا" * 100
        result = count_anchored([long_sentence], WEAK_OPENING)
        assert result.examples[0] == long_sentence[:80] + "..."

    def test_repeated_words(self):
        assert repeated_words("كتاب " * 16) == ["كتاب"]
        assert repeated_words("كتاب " * 15) == []

    def test_starts_with_and(self):
        assert starts_with_and("و كان ذلك في الصيف")
        assert not starts_with_and("وكان ذلك في الصيف")


class TestRules:
    def test_unsafe_patterns(self):
        assert not is_safe_pattern("(a+)++")
        assert not is_safe_pattern("(.*)+(b)")
        assert not is_safe_pattern("a{0,999}")
        assert is_safe_pattern("هاذا")

    def test_flags_are_translated(self):
        rule = compile_rule({"pattern": "abc", "flags": "gi"})
        assert rule.pattern.flags & re.IGNORECASE
        assert rule.pattern.search("ABC")

    def test_default_flags_ignore_case(self):
        assert compile_rule({"pattern": "abc"}).pattern.search("ABC")

    def test_compile_rejects_bad_rules(self):
        for raw in ({}, {"pattern": "[unclosed"}, {"pattern": "(a+)++"}, 42):
            with pytest.raises(PatternError):
                compile_rule(raw)

    def test_prebuilt_rules_pass_through(self):
        rule = Rule(pattern=re.compile("x"), description="d")
        assert compile_rule(rule) is rule
        assert compile_rule(re.compile("y")).pattern.pattern == "y"

    def test_invalid_rule_is_skipped_and_logged(self, caplog):
        rules = [{"pattern": "[bad", "description": "broken"}, {"pattern": "هاذا"}]
        with caplog.at_level(logging.WARNING, logger="data_designer_article_quality.rules"):
            report = apply_rules("هاذا الكتاب و هاذا القلم", rules)
        assert report.count == 2
        assert len(report.hits) == 2
        assert "Skipping grammar rule" in caplog.text
        assert "broken" in caplog.text

    def test_oversized_repeat_is_skipped(self):
        with pytest.raises(PatternError):
            compile_rule({"pattern": "a{99999999999}"})
        report = apply_rules("هاذا و هاذا", [{"pattern": "a{99999999999}"}, {"pattern": "هاذا"}])
        assert report.count == 2

    def test_bytes_patterns_are_rejected(self):
        for raw in (re.compile(b"x"), {"pattern": re.compile(b"x")}, Rule(pattern=re.compile(b"x"))):
            with pytest.raises(PatternError):
                compile_rule(raw)
        report = apply_rules("هاذا و هاذا", [re.compile(b"x"), {"pattern": "هاذا"}])
        assert report.count == 2

    def test_hits_are_capped(self):
        report = apply_rules("x " * 15, [{"pattern": "x"}], cap=10)
        assert report.count == 15
        assert len(report.hits) == 10

    def test_mapping_rule_sets(self):
        assert len(load_rules({"first": {"pattern": "a"}, "second": {"pattern": "b"}})) == 2
        assert load_rules(None) == ()

    def test_default_rules_compile(self):
        assert len(load_rules(DEFAULT_GRAMMAR_RULES)) == len(DEFAULT_GRAMMAR_RULES)
