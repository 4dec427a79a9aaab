# SPDX-License-Identifier: Apache-2.0
#
# Rates the editorial quality of an Arabic encyclopedia article on nine axes
# (structure, references, media, links, grammar, maintenance, language,
# revision and cross-project integration) and folds six of them into a
# weighted 0-100 total, a quality tier and an ordered list of improvement notes.

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

from data_designer_article_quality.analyzers import ALL_ANALYZERS
from data_designer_article_quality.document import Document
from data_designer_article_quality.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_article_quality.results import AggregatedResult, AxisResult
from data_designer_article_quality.rules import DEFAULT_GRAMMAR_RULES, RawRule, load_rules
from data_designer_article_quality.scoring import calculate_final_score
from data_designer_article_quality.wikitext import document_from_wikitext

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def run_analyzers(document: Document, hp: Hyperparameters | None = None, max_workers: int = 1) -> dict[str, AxisResult]:
    """Run every axis analyzer over ``document``; the result map is in axis order."""
    hp = hp or DEFAULT_HYPERPARAMETERS
    analyzers = [cls(hp) for cls in ALL_ANALYZERS]
    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(lambda analyzer: analyzer.analyze(document), analyzers))
    else:
        results = [analyzer.analyze(document) for analyzer in analyzers]
    return {analyzer.name: result for analyzer, result in zip(analyzers, results)}


def analyze_document(
    document: Document,
    rules: Iterable[RawRule] | None = None,
    hp: Hyperparameters | None = None,
    max_workers: int = 1,
) -> AggregatedResult:
    """Score a prepared document.

    Args:
        document: The article to rate.
        rules: Optional grammar rules. When given they replace ``document.rules``.
        hp: Optional tuning overrides.
        max_workers: Run the analyzers on a thread pool of this size when above 1.
    """
    if rules is not None:
        document = replace(document, rules=load_rules(rules))
    return calculate_final_score(run_analyzers(document, hp, max_workers), hp)


def analyze_wikitext(
    wikitext: str,
    title: str = "",
    rules: Iterable[RawRule] | None = None,
    hp: Hyperparameters | None = None,
) -> dict:
    """Score article wikitext.

    Args:
        wikitext: Article source markup.
        title: Optional display title.
        rules: Grammar rules. Falls back to the built-in Arabic spelling rules if omitted.
        hp: Optional tuning overrides. Uses sensible defaults if omitted.

    Returns:
        Dict with keys: total (0-100), tier, tier_label, axis_scores, details,
        notes, word_count.
    """
    document = document_from_wikitext(wikitext, title, DEFAULT_GRAMMAR_RULES if rules is None else rules)
    result = analyze_document(document, hp=hp)
    payload = result.to_payload()
    payload["word_count"] = document.word_count
    return payload
