# SPDX-License-Identifier: Apache-2.0
"""Build a :class:`Document` from raw article wikitext.

This is a lightweight extractor, not a MediaWiki parser. It recovers what the
analyzers need: headed sections, the lead, cleaned prose, template and
category names, embedded files and links. Red links and page chrome are only
visible on a rendered page, so they are left empty.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import replace

from data_designer_article_quality.document import Document, Image, Link, Section
from data_designer_article_quality.errors import InputValidationError
from data_designer_article_quality.rules import RawRule, load_rules
from data_designer_article_quality.segmentation import clean_markup

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_HEADING_RE = re.compile(r"^(={2,6})\s*(.+?)\s*\1\s*$", re.MULTILINE)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_FILE_NAMESPACES = "File|Image|ملف|صورة"
_FILE_LINK_RE = re.compile(
    rf"\[\[\s*(?:{_FILE_NAMESPACES})\s*:([^\[\]]*(?:\[\[[^\[\]]*\]\][^\[\]]*)*)\]\]",
    re.IGNORECASE,
)
_CATEGORY_RE = re.compile(r"\[\[\s*(?:Category|تصنيف)\s*:\s*([^\]|]+)", re.IGNORECASE)
_WIKILINK_RE = re.compile(r"\[\[([^\[\]|#]*)(?:#[^\[\]|]*)?(?:\|[^\[\]]*)?\]\]")
_BRACKETED_URL_RE = re.compile(r"\[(https?://[^\s\]]+)[^\]]*\]")
_BARE_URL_RE = re.compile(r"(?<![\[=/])https?://[^\s\]\[<>|{}\"]+")
_WIDTH_RE = re.compile(r"^(\d+)(?:x(\d+))?\s*px$", re.IGNORECASE)
_INFOBOX_NAME_RE = re.compile(r"^(?:Infobox|صندوق معلومات|معلومات)", re.IGNORECASE)
_INFOBOX_IMAGE_PARAM_RE = re.compile(
    r"\|\s*(?:image|صورة)\s*=\s*([^|\n{}\[\]]+?\.(?:jpe?g|png|svg|gif|tiff?|webp))\s*(?=\||\n|\}\})",
    re.IGNORECASE,
)

# Namespaces and interlanguage prefixes that are not article links.
_NON_ARTICLE_PREFIX_RE = re.compile(
    rf"^\s*(?:{_FILE_NAMESPACES}|Category|تصنيف|Template|قالب|Wikipedia|ويكيبيديا|Help|مساعدة|Portal|بوابة"
    r"|[a-z]{2,3}(?:-[a-z]+)?)\s*:",
    re.IGNORECASE,
)

_VIDEO_EXTENSIONS = (".webm", ".ogv")
_AUDIO_EXTENSIONS = (".ogg", ".oga", ".mp3", ".wav", ".flac")
_VIDEO_FILE_RE = re.compile(r"\.(?:webm|ogv)\b", re.IGNORECASE)
_AUDIO_FILE_RE = re.compile(r"\.(?:ogg|oga|mp3|wav|flac)\b", re.IGNORECASE)

_MAINTENANCE_NAMES = (
    "تنظيف", "يتيمة", "بذرة", "لا مصدر", "مصدر", "غير مراجعة", "مقالة غير مراجعة", "بحاجة لمصادر",
    "Cleanup", "Orphan", "Stub", "Unreferenced", "Refimprove", "More citations needed", "Citation needed",
)
_MAINTENANCE_RE = re.compile(
    r"^(?:" + "|".join(re.escape(n) for n in _MAINTENANCE_NAMES) + r")(?:\s|$)|-stub$|-بذرة$",
    re.IGNORECASE,
)

# ---------------------------------------------------------------------------
# Template scanning
# ---------------------------------------------------------------------------


def _template_spans(text: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` of every outermost ``{{...}}`` span; unclosed spans run to the end."""
    depth = 0
    start = 0
    i = 0
    while i < len(text) - 1:
        pair = text[i : i + 2]
        if pair == "{{":
            if depth == 0:
                start = i
            depth += 1
            i += 2
        elif pair == "}}" and depth:
            depth -= 1
            i += 2
            if depth == 0:
                yield start, i
        else:
            i += 1
    if depth:
        yield start, len(text)


def _template_name(body: str) -> str:
    name = body.strip("{}").split("|", 1)[0]
    return name.replace("_", " ").strip()


def _strip_spans(text: str, spans: Iterable[tuple[int, int]]) -> str:
    out = []
    last = 0
    for start, end in spans:
        out.append(text[last:start])
        last = end
    out.append(text[last:])
    return "".join(out)


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


def _sections(wikitext: str) -> tuple[str, list[Section]]:
    headings = list(_HEADING_RE.finditer(wikitext))
    if not headings:
        return wikitext, []
    sections = []
    for i, m in enumerate(headings):
        end = headings[i + 1].start() if i + 1 < len(headings) else len(wikitext)
        sections.append(Section(
            level=len(m.group(1)),
            title=clean_markup(m.group(2)),
            content=clean_markup(wikitext[m.end() : end], keep_paragraphs=True),
        ))
    return wikitext[: headings[0].start()], sections


def _parse_file_link(inner: str, in_infobox: bool) -> Image:
    parts = inner.split("|")
    alt = ""
    width = height = 0
    for part in parts[1:]:
        part = part.strip()
        if part.lower().startswith("alt="):
            alt = part[4:].strip()
            continue
        size = _WIDTH_RE.match(part)
        if size:
            width = int(size.group(1))
            height = int(size.group(2) or 0)
    return Image(src=parts[0].strip(), alt=alt, width=width, height=height, in_infobox=in_infobox)


def _media(wikitext: str, infobox_spans: list[tuple[int, int]], lead_end: int) -> tuple[list[Image], int, int]:
    images: list[Image] = []
    videos = audios = 0
    lead_taken = False
    for m in _FILE_LINK_RE.finditer(wikitext):
        in_infobox = any(start <= m.start() < end for start, end in infobox_spans)
        image = _parse_file_link(m.group(1), in_infobox)
        filename = image.src.lower()
        if filename.endswith(_VIDEO_EXTENSIONS):
            videos += 1
            continue
        if filename.endswith(_AUDIO_EXTENSIONS):
            audios += 1
            continue
        if not lead_taken and m.start() < lead_end:
            image = replace(image, in_lead=True)
            lead_taken = True
        images.append(image)

    for start, end in infobox_spans:
        for m in _INFOBOX_IMAGE_PARAM_RE.finditer(wikitext, start, end):
            images.append(Image(src=m.group(1).strip(), in_infobox=True))

    # Media referenced outside file links, e.g. from listen or video templates.
    outside = _FILE_LINK_RE.sub("", wikitext)
    videos += len(_VIDEO_FILE_RE.findall(outside))
    audios += len(_AUDIO_FILE_RE.findall(outside))
    return images, videos, audios


def _links(wikitext: str, template_spans: list[tuple[int, int]]) -> list[Link]:
    links: list[Link] = []
    for m in _WIKILINK_RE.finditer(wikitext):
        target = m.group(1).replace("_", " ").strip()
        if target and not _NON_ARTICLE_PREFIX_RE.match(target):
            links.append(Link(target, "internal"))

    prose = _strip_spans(wikitext, template_spans)
    links.extend(Link(url, "external") for url in _BRACKETED_URL_RE.findall(prose))
    prose = _BRACKETED_URL_RE.sub("", prose)
    links.extend(Link(url, "external") for url in _BARE_URL_RE.findall(prose))
    return links


def document_from_wikitext(wikitext: str | None, title: str = "", rules: Iterable[RawRule] | None = ()) -> Document:
    """Extract a :class:`Document` from article wikitext.

    Args:
        wikitext: Article source markup. ``None`` is treated as empty.
        title: Display title.
        rules: Grammar rules attached to the document, compiled with
            :func:`~data_designer_article_quality.rules.load_rules`.

    Raises:
        InputValidationError: ``wikitext`` is not a string.
    """
    if wikitext is None:
        wikitext = ""
    if not isinstance(wikitext, str):
        raise InputValidationError(f"wikitext must be a string, got {type(wikitext).__name__}")

    source = _COMMENT_RE.sub("", wikitext)
    spans = list(_template_spans(source))
    templates = [_template_name(source[start:end]) for start, end in spans]
    infobox_spans = [span for span, name in zip(spans, templates) if _INFOBOX_NAME_RE.match(name)]

    lead, sections = _sections(source)
    images, videos, audios = _media(source, infobox_spans, lead_end=len(lead))

    return Document(
        title=title or "",
        full_text=clean_markup(source, keep_paragraphs=True),
        intro_text=clean_markup(lead),
        sections=tuple(sections),
        templates=tuple(t for t in templates if t),
        categories=tuple(c.strip() for c in _CATEGORY_RE.findall(source)),
        images=tuple(images),
        links=tuple(_links(source, spans)),
        videos=videos,
        audios=audios,
        raw_markup=wikitext,
        maintenance_markers=sum(1 for t in templates if _MAINTENANCE_RE.search(t)),
        rules=load_rules(rules),
    )
