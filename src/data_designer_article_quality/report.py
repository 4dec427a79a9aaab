# SPDX-License-Identifier: Apache-2.0
"""Plain-text rendering of an :class:`AggregatedResult`."""

from __future__ import annotations

from data_designer_article_quality.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_article_quality.results import AggregatedResult

AXIS_LABELS = {
    "structure": "Structure",
    "references": "References",
    "maintenance": "Maintenance",
    "links": "Links",
    "media": "Media",
    "language": "Language and style",
}

_RULE_HEAVY = "=" * 31
_RULE_LIGHT = "-" * 31


def render_text_report(result: AggregatedResult, hp: Hyperparameters | None = None) -> str:
    hp = hp or DEFAULT_HYPERPARAMETERS
    lines = [
        "Article quality analysis",
        _RULE_HEAVY,
        f"Total: {result.total} / 100",
        f"Tier: {result.tier.label}",
        "",
        "Details:",
        _RULE_LIGHT,
    ]
    for axis, weight in hp.weights:
        score = result.axis_scores.get(axis, 0)
        lines.append(f"* {AXIS_LABELS.get(axis, axis)}: {score:g} / {weight} ({weight}%)")
    lines += ["", "Notes and suggestions:", _RULE_LIGHT]

    if result.notes:
        lines.extend(f"{i}. {note}" for i, note in enumerate(result.notes, start=1))
    else:
        lines.append("No significant notes.")
    return "\n".join(lines)
