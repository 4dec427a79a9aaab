# SPDX-License-Identifier: Apache-2.0
"""Language and style axis.

Runs the fixed pattern groups, the caller's grammar rules and the
near-duplicate scan over the article prose, then collects sentence,
paragraph and punctuation statistics. The axis score covers style only:
machine-translation, grammar and redundancy counts are left in the details
for the scoring engine to weigh.
"""

from __future__ import annotations

import re
from typing import Any

from data_designer_article_quality import signals
from data_designer_article_quality.analyzers.base import Analyzer, capped, prefix
from data_designer_article_quality.document import Document
from data_designer_article_quality.redundancy import detect_redundancy
from data_designer_article_quality.results import AxisResult, round_half_up
from data_designer_article_quality.rules import apply_rules
from data_designer_article_quality.segmentation import (
    classify_sentence_length,
    segment_paragraphs,
    segment_sentences,
)

_ARABIC_PUNCT_RE = re.compile(r"[،؛؟]")
_LATIN_PUNCT_RE = re.compile(r"[,;?!.]")
_PUNCTUATION_SCORES = ((70, 100), (50, 75), (30, 50))
_PUNCTUATION_FLOOR = 25
_LOW_PUNCTUATION_SCORE = 50
_REPEATED_WORD_WEIGHT = 2
_AND_OPENING_WEIGHT = 0.5
_LONG_SENTENCE_EXAMPLES = 5

_COUNT_KEYS = (
    "machine_translation_signals", "weak_style_signals", "grammar_violations", "long_sentences",
    "short_sentences", "avg_sentence_length", "sentence_count", "paragraph_count", "empty_paragraphs",
    "non_standard_paragraphs", "punctuation_score", "filler_words_count", "preposition_start_sentences",
    "narrative_weakness_signals", "redundant_sentences",
)
_EXAMPLE_KEYS = (
    "long_sentences", "machine_translation_phrases", "grammar_rule_hits",
    "preposition_start_sentences", "narrative_weakness", "redundant_sentences",
)


def punctuation_score(text: str) -> tuple[int, int]:
    """Return ``(score, arabic_ratio_percent)`` for the share of Arabic punctuation marks."""
    arabic = len(_ARABIC_PUNCT_RE.findall(text))
    total = arabic + len(_LATIN_PUNCT_RE.findall(text))
    ratio = arabic / total * 100 if total else 0.0
    # Strictly-greater bands, so a ratio of exactly 70 scores 75.
    score = next((points for minimum, points in _PUNCTUATION_SCORES if ratio > minimum), _PUNCTUATION_FLOOR)
    return score, round_half_up(ratio)


class LanguageAnalyzer(Analyzer):
    name = "language"

    def empty_details(self) -> dict[str, Any]:
        details: dict[str, Any] = dict.fromkeys(_COUNT_KEYS, 0)
        details["punctuation_ratio"] = 0
        details["redundancy_truncated"] = False
        details["examples"] = {key: [] for key in _EXAMPLE_KEYS}
        return details

    def _analyze(self, document: Document) -> AxisResult:
        hp = self.hp
        text = document.full_text
        sentences = segment_sentences(text)
        paragraphs = segment_paragraphs(text)

        lengths = [classify_sentence_length(s, hp) for s in sentences]
        long_sentences = [s for s, kind in zip(sentences, lengths) if kind == "long"]

        mt = signals.detect_group(text, signals.MACHINE_TRANSLATION)
        mt_count = mt.count + signals.count_anchored_hits(sentences, signals.WEAK_OPENING)
        filler = signals.detect_group(text, signals.FILLER)
        weak_style = self._weak_style(text, sentences, filler.count)
        grammar = apply_rules(text, document.rules, cap=hp.rule_hit_cap)
        punct_score, punct_ratio = punctuation_score(text)
        prepositions = signals.count_anchored(sentences, signals.PREPOSITION_OPENING, hp.opening_example_chars)
        narrative = signals.narrative_contexts(
            text, signals.NARRATIVE_WEAKNESS, hp.narrative_context_before, hp.narrative_context_after
        )
        redundancy = detect_redundancy(sentences, hp)
        empty_paragraphs = sum(1 for p in paragraphs if len(p) < hp.paragraph_min_length)

        details: dict[str, Any] = {
            "machine_translation_signals": mt_count,
            "weak_style_signals": weak_style,
            "grammar_violations": grammar.count,
            "long_sentences": len(long_sentences),
            "short_sentences": lengths.count("short"),
            "avg_sentence_length": round_half_up(sum(map(len, sentences)) / len(sentences)) if sentences else 0,
            "sentence_count": len(sentences),
            "paragraph_count": len(paragraphs),
            "empty_paragraphs": empty_paragraphs,
            "non_standard_paragraphs": signals.count_anchored(paragraphs, signals.WEAK_OPENING).count,
            "punctuation_score": punct_score,
            "punctuation_ratio": punct_ratio,
            "filler_words_count": filler.count,
            "preposition_start_sentences": prepositions.count,
            "narrative_weakness_signals": narrative.count,
            "redundant_sentences": redundancy.count,
            "redundancy_truncated": redundancy.truncated,
            "examples": {
                "long_sentences": [
                    {"text": prefix(s, hp.sentence_example_chars), "length": len(s)}
                    for s in long_sentences[:_LONG_SENTENCE_EXAMPLES]
                ],
                "machine_translation_phrases": list(mt.examples),
                "grammar_rule_hits": [hit.to_payload() for hit in grammar.hits],
                "preposition_start_sentences": list(prepositions.examples),
                "narrative_weakness": list(narrative.examples),
                "redundant_sentences": [e.to_payload() for e in redundancy.examples],
            },
        }
        return self._result(self._score(details), details, self._notes(details))

    def _weak_style(self, text: str, sentences: list[str], filler_count: int) -> int:
        hp = self.hp
        weak = float(filler_count)
        weak += _REPEATED_WORD_WEIGHT * len(
            signals.repeated_words(text, hp.repeated_word_min_length, hp.repeated_word_threshold)
        )
        for sentence in sentences:
            if len(sentence) > hp.unpunctuated_sentence_length and "،" not in sentence and "," not in sentence:
                weak += 1
            if signals.starts_with_and(sentence):
                weak += _AND_OPENING_WEIGHT
        return round_half_up(weak)

    def _score(self, details: dict[str, Any]) -> float:
        hp = self.hp
        score = float(self.max_score)
        score -= capped(details["weak_style_signals"], hp.weak_style_penalty)
        score -= capped(details["long_sentences"] - hp.long_sentence_allowance, hp.long_sentence_penalty)
        score -= capped(details["empty_paragraphs"] - hp.empty_paragraph_allowance, hp.empty_paragraph_penalty)
        score -= capped(details["filler_words_count"] - hp.filler_allowance, hp.filler_penalty)
        score -= capped(details["preposition_start_sentences"], hp.preposition_penalty)
        score -= capped(details["narrative_weakness_signals"], hp.narrative_penalty)
        if details["redundant_sentences"]:
            score -= hp.internal_redundancy_penalty
        return score

    def _notes(self, details: dict[str, Any]) -> list[str]:
        hp = self.hp
        notes = []
        if details["machine_translation_signals"]:
            notes.append(
                f"{details['machine_translation_signals']} phrases typical of machine translation. "
                "Rephrase them in natural Arabic."
            )
        if details["weak_style_signals"]:
            notes.append(f"{details['weak_style_signals']} weak-style signals such as filler phrases and repetition.")
        if details["grammar_violations"]:
            notes.append(f"{details['grammar_violations']} grammar or spelling rule violations in the article text.")
        if details["long_sentences"] > hp.long_sentence_allowance:
            notes.append(
                f"{details['long_sentences']} sentences exceed {hp.sentence_too_long} characters. Split them."
            )
        if details["empty_paragraphs"] > hp.empty_paragraph_allowance:
            notes.append(f"{details['empty_paragraphs']} very short paragraphs. Merge or expand them.")
        if details["preposition_start_sentences"]:
            notes.append(f"{details['preposition_start_sentences']} sentences open with a preposition.")
        if details["narrative_weakness_signals"]:
            notes.append(f"{details['narrative_weakness_signals']} wordy or story-like phrases. Use encyclopedic tone.")
        if details["redundant_sentences"]:
            notes.append(f"{details['redundant_sentences']} pairs of near-duplicate sentences. Remove the repetition.")
        if details["punctuation_score"] <= _LOW_PUNCTUATION_SCORE:
            notes.append("Latin punctuation dominates. Prefer Arabic marks (، ؛ ؟).")
        return notes
