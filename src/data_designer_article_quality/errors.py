# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations


class ArticleQualityError(Exception):
    """Base class for errors raised by the article quality package."""


class InputValidationError(ArticleQualityError, ValueError):
    """A document field has the wrong type."""


class PatternError(ArticleQualityError, ValueError):
    """A rule pattern is missing, unsafe, or does not compile."""

    def __init__(self, rule_name: str, reason: str) -> None:
        super().__init__(f"Rule {rule_name!r} rejected: {reason}")
        self.rule_name = rule_name
        self.reason = reason


class MissingAxisError(ArticleQualityError, KeyError):
    """An axis result required by the scoring engine is missing or malformed."""

    def __init__(self, axis: str, reason: str = "missing") -> None:
        super().__init__(axis)
        self.axis = axis
        self.reason = reason

    def __str__(self) -> str:
        return f"Axis result {self.axis!r} is {self.reason}"
