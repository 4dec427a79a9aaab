# SPDX-License-Identifier: Apache-2.0
"""Sentence and paragraph segmentation plus comparison normalization."""

from __future__ import annotations

import re
import unicodedata
from typing import Literal

from data_designer_article_quality.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_REF_BLOCK_RE = re.compile(r"<ref[^>/]*>.*?</ref\s*>", re.IGNORECASE | re.DOTALL)
_REF_SELF_CLOSING_RE = re.compile(r"<ref[^>]*/>", re.IGNORECASE)
_INNER_TEMPLATE_RE = re.compile(r"\{\{[^{}]*\}\}")
_FILE_LINK_RE = re.compile(
    r"\[\[\s*(?:File|Image|ملف|صورة|Category|تصنيف)\s*:[^\[\]]*(?:\[\[[^\[\]]*\]\][^\[\]]*)*\]\]",
    re.IGNORECASE,
)
_INTERNAL_LINK_RE = re.compile(r"\[\[(?:[^|\]]*\|)?([^\]]+)\]\]")
_EXTERNAL_LINK_RE = re.compile(r"\[https?://[^\s\]]+\s*([^\]]*)\]")
_HEADING_LINE_RE = re.compile(r"^=+.*?=+\s*$", re.MULTILINE)
_LIST_MARKER_RE = re.compile(r"^[*#:;]+", re.MULTILINE)
_TAG_RE = re.compile(r"<[^>]+>")
_EMPHASIS_RE = re.compile(r"'{2,5}")
_MAGIC_WORD_RE = re.compile(r"__[A-Z]+__")
_WHITESPACE_RE = re.compile(r"\s+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")

_SENTENCE_SPLIT_RE = re.compile(r"[.!?؟]+(?:\s+|$)")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")

_LIST_ITEM_RE = re.compile(r"^[*#:;]")
_REF_FRAGMENT_RE = re.compile(r"<ref", re.IGNORECASE)

# Latin and Arabic punctuation removed before sentences are compared.
_COMPARISON_PUNCT_RE = re.compile(r"[.,،؛:;!؟?()\[\]{}«»\"'“”‘’]")
_ARABIC_HARAKAT_RE = re.compile(r"[\u064B-\u065F]")

SentenceLength = Literal["short", "normal", "long"]


# ---------------------------------------------------------------------------
# Markup cleanup
# ---------------------------------------------------------------------------


def _strip_templates(text: str) -> str:
    previous = None
    while previous != text:
        previous = text
        text = _INNER_TEMPLATE_RE.sub("", text)
    return text


def clean_markup(text: str | None, keep_paragraphs: bool = False) -> str:
    """Remove non-prose markup and collapse whitespace.

    Templates are removed innermost first until none are left. Internal and
    external links collapse to their display text. References, comments,
    headings, list markers, tags and emphasis quotes are dropped.

    Args:
        text: Raw markup, may be ``None``.
        keep_paragraphs: Keep blank-line paragraph boundaries instead of
            collapsing every whitespace run to a single space.
    """
    if not text:
        return ""
    out = _COMMENT_RE.sub("", text)
    out = _REF_BLOCK_RE.sub("", out)
    out = _REF_SELF_CLOSING_RE.sub("", out)
    out = _strip_templates(out)
    out = _FILE_LINK_RE.sub("", out)
    out = _INTERNAL_LINK_RE.sub(r"\1", out)
    out = _EXTERNAL_LINK_RE.sub(r"\1", out)
    out = _HEADING_LINE_RE.sub("", out)
    out = _LIST_MARKER_RE.sub("", out)
    out = _TAG_RE.sub("", out)
    out = _EMPHASIS_RE.sub("", out)
    out = _MAGIC_WORD_RE.sub("", out)
    if not keep_paragraphs:
        return _WHITESPACE_RE.sub(" ", out).strip()
    paragraphs = [_WHITESPACE_RE.sub(" ", p).strip() for p in _BLANK_LINES_RE.split(out)]
    return "\n\n".join(p for p in paragraphs if p)


# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------


def _is_list_item(text: str) -> bool:
    return bool(_LIST_ITEM_RE.match(text))


def _is_reference(text: str) -> bool:
    return bool(_REF_FRAGMENT_RE.search(text)) or (text.startswith("[") and text.endswith("]"))


def _is_template_or_tag(text: str) -> bool:
    return text.startswith(("{{", "<", "|"))


def segment_sentences(text: str | None) -> list[str]:
    """Split text into sentences on Latin and Arabic terminal punctuation.

    List fragments, reference fragments and leftover template or tag
    fragments are filtered out. Never raises; empty input gives ``[]``.
    """
    if not text or not isinstance(text, str):
        return []
    cleaned = clean_markup(text)
    sentences = (s.strip() for s in _SENTENCE_SPLIT_RE.split(cleaned))
    return [
        s for s in sentences
        if s and not _is_list_item(s) and not _is_reference(s) and not _is_template_or_tag(s)
    ]


def segment_paragraphs(text: str | None) -> list[str]:
    if not text or not isinstance(text, str):
        return []
    return [p.strip() for p in _PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def first_paragraphs(text: str | None, hp: Hyperparameters | None = None) -> str:
    """Join the first few paragraphs long enough to be prose."""
    hp = hp or DEFAULT_HYPERPARAMETERS
    picked: list[str] = []
    for paragraph in segment_paragraphs(text):
        if len(paragraph) >= hp.first_paragraph_min_length:
            picked.append(paragraph)
        if len(picked) >= hp.first_paragraph_count:
            break
    return " ".join(picked)


def classify_sentence_length(sentence: str, hp: Hyperparameters | None = None) -> SentenceLength:
    hp = hp or DEFAULT_HYPERPARAMETERS
    if len(sentence) > hp.sentence_too_long:
        return "long"
    if len(sentence) < hp.sentence_too_short:
        return "short"
    return "normal"


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def normalize_for_comparison(sentence: str | None) -> str:
    """Case-fold, strip diacritics and punctuation, and collapse whitespace.

    Pure and idempotent: ``normalize_for_comparison(normalize_for_comparison(s))``
    equals ``normalize_for_comparison(s)``.
    """
    if not sentence:
        return ""
    folded = sentence.casefold()
    decomposed = unicodedata.normalize("NFD", folded)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    stripped = _ARABIC_HARAKAT_RE.sub("", unicodedata.normalize("NFC", stripped))
    stripped = _COMPARISON_PUNCT_RE.sub(" ", stripped)
    return _WHITESPACE_RE.sub(" ", stripped).strip()
