# SPDX-License-Identifier: Apache-2.0
"""Read-only document model consumed by the axis analyzers.

The analyzers never parse markup. Everything they need is pre-extracted into
a :class:`Document` by a provider such as
:func:`data_designer_article_quality.wikitext.document_from_wikitext`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from data_designer_article_quality.errors import InputValidationError

if TYPE_CHECKING:
    from data_designer_article_quality.rules import Rule

LinkKind = Literal["internal", "red", "external"]

_MEDICAL_KEYWORDS = ("طب", "طبي", "مرض", "علاج", "دواء", "جراحة")
_GEOGRAPHIC_TEMPLATE_RE = re.compile(r"إحداثيات|coord", re.IGNORECASE)
_BIOGRAPHY_TEMPLATE_RE = re.compile(r"صندوق معلومات شخص|معلومات شخصية|Infobox person", re.IGNORECASE)


@dataclass(frozen=True)
class Section:
    level: int
    title: str
    content: str = ""


@dataclass(frozen=True)
class Image:
    src: str
    alt: str = ""
    width: int = 0
    height: int = 0
    in_infobox: bool = False
    in_lead: bool = False

    @property
    def filename(self) -> str:
        return self.src.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class Link:
    target: str
    kind: LinkKind = "internal"


def _as_text(name: str, value: object) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InputValidationError(f"Document field {name!r} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Document:
    """Normalized view of one article.

    Attributes:
        title: Article title, used only for display.
        full_text: Article prose with paragraph boundaries kept as blank lines.
        intro_text: Cleaned lead section text.
        sections: Headed sections in document order.
        templates: Template names used by the article.
        categories: Category names.
        images: Embedded images, including infobox images.
        links: Internal, red and external links.
        videos: Embedded video count.
        audios: Embedded audio count.
        raw_markup: Source markup scanned for citation structures.
        maintenance_markers: Rendered maintenance box count.
        page_chrome: Surrounding page text (last-edited line, protection indicators).
        rules: Compiled grammar rules applied by the grammar and language axes.
    """

    title: str = ""
    full_text: str = ""
    intro_text: str = ""
    sections: tuple[Section, ...] = ()
    templates: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    images: tuple[Image, ...] = ()
    links: tuple[Link, ...] = ()
    videos: int = 0
    audios: int = 0
    raw_markup: str = ""
    maintenance_markers: int = 0
    page_chrome: str = ""
    rules: tuple[Rule, ...] = field(default=())

    def __post_init__(self) -> None:
        for name in ("title", "full_text", "intro_text", "raw_markup", "page_chrome"):
            object.__setattr__(self, name, _as_text(name, getattr(self, name)))
        for name in ("sections", "templates", "categories", "images", "links", "rules"):
            value = getattr(self, name)
            if value is None:
                value = ()
            elif isinstance(value, (str, bytes)):
                raise InputValidationError(f"Document field {name!r} must be a sequence, got a string")
            object.__setattr__(self, name, tuple(value))

    @property
    def article_length(self) -> int:
        return len(self.full_text.strip())

    @property
    def word_count(self) -> int:
        return len(self.full_text.split())

    @property
    def section_titles(self) -> list[str]:
        return [s.title for s in self.sections]

    @property
    def internal_links(self) -> list[str]:
        return list(dict.fromkeys(link.target for link in self.links if link.kind == "internal"))

    @property
    def red_links(self) -> list[str]:
        return [link.target for link in self.links if link.kind == "red"]

    @property
    def external_links(self) -> list[str]:
        return [link.target for link in self.links if link.kind == "external"]

    def article_types(self) -> list[str]:
        types = []
        if any(k in self.full_text for k in _MEDICAL_KEYWORDS):
            types.append("medical")
        if any(_GEOGRAPHIC_TEMPLATE_RE.search(t) for t in self.templates):
            types.append("geographic")
        if any(_BIOGRAPHY_TEMPLATE_RE.search(t) for t in self.templates):
            types.append("biography")
        return types
