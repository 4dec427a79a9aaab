# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class Signal:
    match: str
    description: str = ""
    suggestion: str = ""

    def to_payload(self) -> dict[str, object]:
        return {
            "type": "Signal",
            "match": self.match,
            "description": self.description,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class SignalCount:
    count: int = 0
    examples: tuple[str, ...] = ()


@dataclass(frozen=True)
class RuleReport:
    count: int = 0
    hits: tuple[Signal, ...] = ()


@dataclass(frozen=True)
class RedundancyExample:
    sentence1: str
    sentence2: str
    similarity: int

    def to_payload(self) -> dict[str, object]:
        return {"sentence1": self.sentence1, "sentence2": self.sentence2, "similarity": self.similarity}


@dataclass(frozen=True)
class RedundancyReport:
    count: int = 0
    examples: tuple[RedundancyExample, ...] = ()
    truncated: bool = False


@dataclass(frozen=True)
class AxisResult:
    """Score, details and notes produced by one axis analyzer.

    The score is clamped into ``[0, max_score]`` on construction.
    """

    name: str
    score: float
    max_score: float
    details: dict[str, Any] = field(default_factory=dict)
    notes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "score", _clamp(self.score, 0, self.max_score))
        object.__setattr__(self, "notes", tuple(self.notes))

    def to_payload(self) -> dict[str, object]:
        return {
            "name": self.name,
            "score": self.score,
            "max_score": self.max_score,
            "details": self.details,
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class Tier:
    key: str
    minimum: int

    @property
    def label(self) -> str:
        return TIER_LABELS.get(self.key, self.key)


TIER_LABELS = {
    "featured": "Featured article",
    "good": "Good article",
    "advanced": "Advanced article",
    "start": "Start-class article",
    "stub-plus": "Developed stub",
    "stub": "Stub",
}


@dataclass(frozen=True)
class AggregatedResult:
    total: int
    tier: Tier
    axis_scores: dict[str, float]
    details: dict[str, AxisResult]
    notes: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, object]:
        return {
            "total": self.total,
            "tier": self.tier.key,
            "tier_label": self.tier.label,
            "axis_scores": dict(self.axis_scores),
            "details": {name: axis.to_payload() for name, axis in self.details.items()},
            "notes": list(self.notes),
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer; ``x.5`` rounds up."""
    return math.floor(value + 0.5)
