# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar

from data_designer_article_quality.document import Document
from data_designer_article_quality.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_article_quality.results import AxisResult


def bucket(value: float, table: Sequence[tuple[float, float]], default: float = 0) -> float:
    """Points for the first ``(minimum, points)`` row whose minimum ``value`` meets."""
    for minimum, points in table:
        if value >= minimum:
            return points
    return default


def capped(count: float, rate_cap: tuple[float, float]) -> float:
    rate, cap = rate_cap
    return min(count * rate, cap) if count > 0 else 0.0


def prefix(text: str, width: int) -> str:
    return text[:width] + ("..." if len(text) > width else "")


class Analyzer:
    """Base for the axis analyzers.

    Subclasses set ``name`` and implement :meth:`_analyze` and :meth:`empty_details`.
    A document with no prose gets the zero result without reaching :meth:`_analyze`;
    its details carry the same keys as a normal run, with every count at zero and
    every example collection empty.
    """

    name: ClassVar[str] = ""

    def __init__(self, hp: Hyperparameters | None = None) -> None:
        self.hp = hp or DEFAULT_HYPERPARAMETERS

    @property
    def max_score(self) -> int:
        return getattr(self.hp, f"{self.name}_max")

    def analyze(self, document: Document) -> AxisResult:
        if not document.full_text.strip():
            return self.empty_result()
        return self._analyze(document)

    def empty_result(self) -> AxisResult:
        return AxisResult(name=self.name, score=0, max_score=self.max_score, details=self.empty_details())

    def empty_details(self) -> dict[str, Any]:
        raise NotImplementedError

    def _analyze(self, document: Document) -> AxisResult:
        raise NotImplementedError

    def _result(self, score: float, details: dict[str, Any], notes: Sequence[str]) -> AxisResult:
        return AxisResult(name=self.name, score=score, max_score=self.max_score, details=details, notes=tuple(notes))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_score={self.max_score})"
