# SPDX-License-Identifier: Apache-2.0
"""Caller-supplied grammar rules: validation, compilation and application.

A rule arrives either already compiled (a :class:`Rule` or an ``re.Pattern``)
or raw, as a mapping ``{"pattern": str, "flags": str, "description": str,
"suggestion": str}``. Raw rules are safety-checked and compiled once by
:func:`load_rules`. A rule that fails is logged and skipped; it never aborts
the batch and never raises past :func:`apply_rules`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from data_designer_article_quality.errors import PatternError
from data_designer_article_quality.results import RuleReport, Signal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    pattern: re.Pattern[str]
    description: str = ""
    suggestion: str = ""
    name: str = ""

    @property
    def label(self) -> str:
        return self.name or self.description or self.pattern.pattern


RawRule = Union[Mapping[str, Any], re.Pattern, Rule]


# Fallback rule set used when no community rule list is available.
DEFAULT_GRAMMAR_RULES: tuple[dict[str, str], ...] = (
    {"pattern": "هاذا", "flags": "g", "description": "خطأ إملائي: هاذا → هذا", "suggestion": "هذا"},
    {"pattern": "هاذه", "flags": "g", "description": "خطأ إملائي: هاذه → هذه", "suggestion": "هذه"},
    {"pattern": "ذالك", "flags": "g", "description": "خطأ إملائي: ذالك → ذلك", "suggestion": "ذلك"},
    {"pattern": "لذالك", "flags": "g", "description": "خطأ إملائي: لذالك → لذلك", "suggestion": "لذلك"},
    {"pattern": "مسؤلية", "flags": "g", "description": "خطأ إملائي: مسؤلية → مسؤولية", "suggestion": "مسؤولية"},
    {"pattern": "إست(?!ان|قبل)", "flags": "g", "description": "خطأ إملائي: إست → است", "suggestion": "است"},
    {"pattern": r"\sالى\s", "flags": "g", "description": "خطأ إملائي: الى → إلى", "suggestion": "إلى"},
    {"pattern": "حفض", "flags": "g", "description": "خطأ إملائي: حفض → حفظ", "suggestion": "حفظ"},
    {"pattern": "معضم", "flags": "g", "description": "خطأ إملائي: معضم → معظم", "suggestion": "معظم"},
    {"pattern": "كده|كدا|كدة", "flags": "g", "description": "تعبير عامي", "suggestion": ""},
    {"pattern": "علشان|عشان", "flags": "g", "description": "تعبير عامي", "suggestion": ""},
    {"pattern": "جداً جداً", "flags": "g", "description": "حشو لغوي", "suggestion": ""},
    {"pattern": "هو كان|كانت هي", "flags": "g", "description": "ترجمة آلية ركيكة", "suggestion": ""},
    {"pattern": " ,", "flags": "g", "description": "ترقيم خاطئ: مسافة قبل الفاصلة", "suggestion": ","},
    {"pattern": "!!", "flags": "g", "description": "ترقيم زائد", "suggestion": "!"},
)

# Shapes that invite catastrophic backtracking: nested quantifiers and huge ranges.
_UNSAFE_PATTERN_RES = (
    re.compile(r"\([^)]*\)\+\+"),
    re.compile(r"\([^)]*\)\*\*"),
    re.compile(r"\([^)]*\)\+\*"),
    re.compile(r"\(.*\)\+\("),
    re.compile(r"\{0,999\}"),
)

_FLAG_MAP = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL}
_IGNORED_FLAGS = frozenset("guy")


def is_safe_pattern(source: str) -> bool:
    return not any(p.search(source) for p in _UNSAFE_PATTERN_RES)


def _translate_flags(flags: Any) -> int:
    if flags is None:
        return re.IGNORECASE
    if isinstance(flags, int):
        return flags
    out = 0
    for letter in str(flags):
        if letter in _FLAG_MAP:
            out |= _FLAG_MAP[letter]
        elif letter not in _IGNORED_FLAGS:
            logger.debug(f"Ignoring unknown regex flag {letter!r}")
    return out


def _require_text_pattern(pattern: re.Pattern, name: str) -> None:
    if not isinstance(pattern.pattern, str):
        raise PatternError(name, "compiled pattern must match text, not bytes")


def compile_rule(raw: RawRule) -> Rule:
    """Validate and compile one rule.

    Raises:
        PatternError: The rule has no pattern, an unsupported shape, an unsafe
            pattern, or a pattern that does not compile.
    """
    if isinstance(raw, Rule):
        _require_text_pattern(raw.pattern, raw.label)
        return raw
    if isinstance(raw, re.Pattern):
        _require_text_pattern(raw, str(raw.pattern))
        return Rule(pattern=raw, name=raw.pattern)
    if not isinstance(raw, Mapping):
        raise PatternError("<unnamed>", f"unsupported rule type {type(raw).__name__}")

    source = raw.get("pattern")
    name = str(raw.get("name") or raw.get("description") or (source if isinstance(source, str) else "") or "<unnamed>")
    description = str(raw.get("description") or "")
    suggestion = str(raw.get("suggestion") or "")

    if source is None or source == "":
        raise PatternError(name, "missing pattern")
    if isinstance(source, re.Pattern):
        _require_text_pattern(source, name)
        return Rule(pattern=source, description=description, suggestion=suggestion, name=name)
    if not isinstance(source, str):
        raise PatternError(name, f"pattern must be a string or compiled regex, got {type(source).__name__}")
    if not is_safe_pattern(source):
        raise PatternError(name, "pattern is prone to catastrophic backtracking")
    try:
        compiled = re.compile(source, _translate_flags(raw.get("flags")))
    except (re.error, OverflowError, RecursionError) as exc:
        raise PatternError(name, f"invalid pattern: {exc}") from exc
    return Rule(pattern=compiled, description=description, suggestion=suggestion, name=name)


def load_rules(raws: Iterable[RawRule] | Mapping[str, RawRule] | None) -> tuple[Rule, ...]:
    """Compile a rule list once, skipping (and logging) every invalid rule."""
    if raws is None:
        return ()
    if isinstance(raws, Mapping):
        raws = list(raws.values())
    rules: list[Rule] = []
    for raw in raws:
        try:
            rules.append(compile_rule(raw))
        except PatternError as exc:
            logger.warning(f"Skipping grammar rule: {exc}")
    return tuple(rules)


def apply_rules(text: str, rules: Iterable[RawRule] | None, cap: int = 10) -> RuleReport:
    """Count every match of every valid rule and keep the first ``cap`` hits."""
    if not text or not rules:
        return RuleReport()
    count = 0
    hits: list[Signal] = []
    for rule in load_rules(rules):
        for m in rule.pattern.finditer(text):
            matched = m.group(0)
            if not matched:
                continue
            count += 1
            if len(hits) < cap:
                hits.append(Signal(matched, rule.description or rule.label, rule.suggestion))
    return RuleReport(count=count, hits=tuple(hits))
