# SPDX-License-Identifier: Apache-2.0
"""Fixed pattern libraries and the signal detector that applies them."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from data_designer_article_quality.results import SignalCount

# ---------------------------------------------------------------------------
# Pattern groups
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PatternGroup:
    """Ordered matchers sharing one intent.

    Attributes:
        name: Group key used in detector output.
        patterns: Matchers, evaluated in declaration order.
        example_cap: Maximum number of unique examples kept.
        anchored: Patterns only make sense at the start of a sentence or
            paragraph; use :func:`count_anchored` instead of :func:`detect`.
    """

    name: str
    patterns: tuple[re.Pattern[str], ...]
    example_cap: int = 3
    anchored: bool = False


def _group(name: str, sources: Iterable[str], example_cap: int = 3, anchored: bool = False) -> PatternGroup:
    return PatternGroup(name, tuple(re.compile(s) for s in sources), example_cap, anchored)


MACHINE_TRANSLATION = _group(
    "machine_translation",
    [
        r"\bتم\s+\w+",
        r"\bقام\s+ب",
        r"\bحوالي\s+\d+",
        r"\bوفقًا\s+ل",
        r"\bوفقاً\s+ل",
        r"\bفي\s+سنة\s+\d+",
        r"\bفي\s+عام\s+\d+",
        r"\bيُذكر\s+أن",
        r"\bيذكر\s+أن",
        r"\bكما\s+يلي",
        r"\bالجدير\s+بالذكر",
        r"\bمن\s+الجدير\s+بالذكر",
        r"\bعلى\s+سبيل\s+المثال",
        r"\bبشكل\s+خاص",
        r"\bبصفة\s+خاصة",
    ],
    example_cap=10,
)

FILLER = _group(
    "filler",
    [
        r"\bبشكل\s+عام",
        r"\bبصورة\s+عامة",
        r"\bبصفة\s+عامة",
        r"\bمن\s+ناحية\s+أخرى",
        r"\bمن\s+جهة\s+أخرى",
        r"\bفي\s+الواقع",
        r"\bفي\s+الحقيقة",
        r"\bبطبيعة\s+الحال",
        r"\bفي\s+نهاية\s+المطاف",
        r"\bفي\s+نهاية\s+الأمر",
        r"\bكما\s+هو\s+معروف",
        r"\bكما\s+هو\s+واضح",
    ],
    example_cap=5,
)

WEAK_OPENING = _group(
    "weak_opening",
    [
        r"^في\s+\w+",
        r"^على\s+\w+",
        r"^من\s+\w+",
        r"^عند\s+\w+",
        r"^وفقًا\s+",
        r"^وفقاً\s+",
        r"^حسب\s+",
        r"^بحسب\s+",
    ],
    anchored=True,
)

PREPOSITION_OPENING = _group(
    "preposition_opening",
    [
        r"^في\s+",
        r"^من\s+",
        r"^على\s+",
        r"^إلى\s+",
        r"^عن\s+",
        r"^حتى\s+",
        r"^لدى\s+",
        r"^عند\s+",
        r"^نحو\s+",
        r"^حسب\s+",
        r"^بحسب\s+",
        r"^وفقًا\s+لـ",
        r"^وفقاً\s+لـ",
        r"^بناءً\s+على",
        r"^بناء\s+على",
        r"^في\s+عام\s+",
        r"^في\s+سنة\s+",
    ],
    anchored=True,
)

NARRATIVE_WEAKNESS = _group(
    "narrative_weakness",
    [
        # Story-like openings
        r"تدور\s+القصة\s+حول",
        r"وتبدأ\s+الأحداث",
        r"وتدور\s+أحداث",
        r"كان\s+يا\s+ما\s+كان",
        r"في\s+قديم\s+الزمان",
        # Wordy phrasing
        r"من\s+الجدير\s+بالذكر",
        r"يجدر\s+بالذكر",
        r"كما\s+يلي",
        r"يمكن\s+القول\s+بأن",
        r"يُذكر\s+أن",
        r"يذكر\s+أن",
        r"من\s+المعروف\s+أن",
        r"كما\s+هو\s+معروف",
        # Padding
        r"بشكل\s+عام",
        r"بصورة\s+عامة",
        r"من\s+ناحية\s+أخرى",
        r"من\s+جهة\s+أخرى",
        r"بالإضافة\s+إلى\s+ذلك",
        r"بالإضافة\s+لذلك",
        r"علاوة\s+على\s+ذلك",
        r"فضلاً\s+عن\s+ذلك",
        r"في\s+الواقع",
        r"في\s+الحقيقة",
        r"بطبيعة\s+الحال",
    ],
)

UNANCHORED_GROUPS = (MACHINE_TRANSLATION, FILLER, NARRATIVE_WEAKNESS)
ANCHORED_GROUPS = (WEAK_OPENING, PREPOSITION_OPENING)

_SENTENCE_AND_RE = re.compile(r"^و\s+\w+")
_ARABIC_ONLY_RE = re.compile(r"[^\u0600-\u06FF\s]")

# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------


def _prefix(text: str, width: int) -> str:
    return text[:width] + ("..." if len(text) > width else "")


def detect_group(text: str, group: PatternGroup) -> SignalCount:
    """Match every pattern of ``group`` globally and sum the counts.

    All matches across all patterns are accumulated; the first
    ``group.example_cap`` unique matched strings become the examples.
    """
    if not text:
        return SignalCount()
    count = 0
    examples: list[str] = []
    for pattern in group.patterns:
        for m in pattern.finditer(text):
            count += 1
            matched = m.group(0)
            if len(examples) < group.example_cap and matched not in examples:
                examples.append(matched)
    return SignalCount(count=count, examples=tuple(examples))


def detect(text: str, groups: Sequence[PatternGroup] = UNANCHORED_GROUPS) -> dict[str, SignalCount]:
    return {group.name: detect_group(text, group) for group in groups}


def count_anchored(spans: Sequence[str], group: PatternGroup, example_chars: int = 80) -> SignalCount:
    """Count the spans (sentences or paragraphs) that open with any pattern of ``group``."""
    count = 0
    examples: list[str] = []
    for span in spans:
        if any(p.match(span) for p in group.patterns):
            count += 1
            if len(examples) < group.example_cap:
                examples.append(_prefix(span, example_chars))
    return SignalCount(count=count, examples=tuple(examples))


def count_anchored_hits(spans: Sequence[str], group: PatternGroup) -> int:
    """Count every (span, pattern) pair that matches; one span may hit several patterns."""
    return sum(1 for span in spans for p in group.patterns if p.match(span))


def narrative_contexts(text: str, group: PatternGroup, before: int = 20, after: int = 60) -> SignalCount:
    """Like :func:`detect_group`, but examples carry surrounding context."""
    if not text:
        return SignalCount()
    count = 0
    examples: list[str] = []
    for pattern in group.patterns:
        for m in pattern.finditer(text):
            count += 1
            if len(examples) < group.example_cap:
                start = max(0, m.start() - before)
                end = min(len(text), m.end() + after)
                examples.append(text[start:end].strip() + "...")
    return SignalCount(count=count, examples=tuple(examples))


def repeated_words(text: str, min_length: int = 4, threshold: int = 15) -> list[str]:
    """Arabic words of at least ``min_length`` letters used more than ``threshold`` times."""
    counts: dict[str, int] = {}
    for word in _ARABIC_ONLY_RE.sub("", text).split():
        if len(word) >= min_length:
            counts[word] = counts.get(word, 0) + 1
    return [w for w, c in counts.items() if c > threshold]


def starts_with_and(sentence: str) -> bool:
    return bool(_SENTENCE_AND_RE.match(sentence))
