# SPDX-License-Identifier: Apache-2.0
"""Media axis: informative versus decorative images, alt text, licensing and density."""

from __future__ import annotations

import re
from typing import Any

from data_designer_article_quality.analyzers.base import Analyzer, bucket
from data_designer_article_quality.document import Document, Image
from data_designer_article_quality.results import AxisResult

_FILTER_KEYWORDS = ("flag", "Flag", "علم", "logo", "Logo", "رمز", "Icon", "icon", "أيقونة", "Symbol", "symbol")
_NON_FREE_KEYWORDS = (
    "Fair use", "fair use", "Fair_use", "Non-free", "non-free", "Nonfree", "nonfree",
    "غير حر", "غير_حر", "fairuse", "Fairuse",
)
_FLAG_MARKERS = ("Flag_of", "Flag of", "علم_", "علم ")
_ICON_MARKERS = ("Icon-", "أيقونة")
_REPOSITORY_EXTENSION_RE = re.compile(r"\.(?:jpg|png|svg|jpeg|gif)$", re.IGNORECASE)
_ARABIC_RE = re.compile(r"[\u0600-\u06FF]")

_INFORMATIVE_POINTS = ((5, 6), (3, 5), (2, 4), (1, 3))
_INFOBOX_POINTS = 2
_MULTIMEDIA_POINTS = 2
_NO_ALT_PENALTY = 0.5
_NO_ALT_PENALTY_CAP = 2
_FILENAME_EXAMPLE_CHARS = 50
_LOW_DENSITY_NOTE = 0.5
_LOW_DENSITY_MIN_LENGTH = 3000
_FEW_IMAGES_NOTE = 3


def _has_keyword(image: Image, keywords: tuple[str, ...]) -> bool:
    return any(k in image.filename or k in image.alt or k in image.src for k in keywords)


class MediaAnalyzer(Analyzer):
    name = "media"

    def empty_details(self) -> dict[str, Any]:
        return {
            "infobox_images": 0,
            "article_images": 0,
            "decorative_images": 0,
            "informative_images": 0,
            "videos": 0,
            "audios": 0,
            "images_without_alt": 0,
            "has_lead_image": False,
            "filtered_out_images": 0,
            "non_free_images_count": 0,
            "repository_likely_count": 0,
            "local_description_likely_count": 0,
            "bad_alt_text_count": 0,
            "article_media_count_corrected": 0,
            "media_density": 0.0,
            "examples": {
                "filtered_out": [],
                "non_free_images": [],
                "missing_images": [],
                "no_local_description": [],
                "bad_alt_text": [],
            },
        }

    def _too_small(self, image: Image) -> bool:
        return 0 < image.width < self.hp.decorative_min_dimension

    def _is_decorative(self, image: Image) -> bool:
        small = self._too_small(image) or 0 < image.height < self.hp.decorative_min_dimension
        return (
            small
            or any(m in image.src for m in _FLAG_MARKERS)
            or any(m in image.src for m in _ICON_MARKERS)
        )

    def _analyze(self, document: Document) -> AxisResult:
        hp = self.hp
        images = document.images
        body_images = [i for i in images if not i.in_infobox]
        decorative = sum(1 for i in body_images if self._is_decorative(i))

        filtered = []
        for image in images:
            keyword = _has_keyword(image, _FILTER_KEYWORDS)
            if keyword or self._too_small(image):
                filtered.append({
                    "filename": image.filename[:_FILENAME_EXAMPLE_CHARS],
                    "reason": "keyword" if keyword else "too small",
                })
        non_free = [i.filename[:60] for i in images if _has_keyword(i, _NON_FREE_KEYWORDS)]
        bad_alt = [
            {"filename": i.filename[:40], "alt": i.alt, "issue": "too short" if i.alt.strip() else "missing"}
            for i in images
            if len(i.alt.strip()) < hp.alt_text_min_length
        ]

        repository_likely = 0
        local_description = 0
        missing_examples: list[str] = []
        no_local_examples: list[str] = []
        for image in images:
            name = image.filename[:_FILENAME_EXAMPLE_CHARS]
            if self._repository_likely(image):
                repository_likely += 1
                if _ARABIC_RE.search(image.filename) or _ARABIC_RE.search(image.alt):
                    local_description += 1
                else:
                    no_local_examples.append(name)
            else:
                missing_examples.append(name)

        corrected = sum(
            1 for i in body_images
            if not any(k in i.filename or k in i.src for k in _FILTER_KEYWORDS) and not self._too_small(i)
        )
        words = document.word_count
        cap = hp.media_example_cap
        details: dict[str, Any] = {
            "infobox_images": sum(1 for i in images if i.in_infobox),
            "article_images": len(body_images),
            "decorative_images": decorative,
            "informative_images": len(body_images) - decorative,
            "videos": document.videos,
            "audios": document.audios,
            "images_without_alt": sum(1 for i in body_images if not i.alt.strip()),
            "has_lead_image": any(i.in_lead or i.in_infobox for i in images),
            "filtered_out_images": len(filtered),
            "non_free_images_count": len(non_free),
            "repository_likely_count": repository_likely,
            "local_description_likely_count": local_description,
            "bad_alt_text_count": len(bad_alt),
            "article_media_count_corrected": corrected,
            "media_density": round(corrected / words * 100, 2) if words else 0.0,
            "examples": {
                "filtered_out": filtered[:cap],
                "non_free_images": non_free[:cap],
                "missing_images": missing_examples[:cap],
                "no_local_description": no_local_examples[:cap],
                "bad_alt_text": bad_alt[:cap],
            },
        }
        return self._result(self._score(details), details, self._notes(details, document))

    @staticmethod
    def _repository_likely(image: Image) -> bool:
        return (
            "commons" in image.src
            or "upload.wikimedia.org" in image.src
            or image.filename.startswith("File:")
            or bool(_REPOSITORY_EXTENSION_RE.search(image.filename))
        )

    @staticmethod
    def _score(details: dict[str, Any]) -> float:
        score = bucket(details["informative_images"], _INFORMATIVE_POINTS)
        if details["infobox_images"]:
            score += _INFOBOX_POINTS
        if details["videos"] or details["audios"]:
            score += _MULTIMEDIA_POINTS
        if details["images_without_alt"]:
            score -= min(_NO_ALT_PENALTY_CAP, details["images_without_alt"] * _NO_ALT_PENALTY)
        return score

    def _notes(self, details: dict[str, Any], document: Document) -> list[str]:
        notes = []
        informative = details["informative_images"]
        if details["article_images"] == 0 and details["infobox_images"] == 0:
            notes.append("Article has no images. Add illustrative images from Wikimedia Commons.")
        elif details["article_images"] == 0:
            notes.append("Images appear only in the infobox. Add illustrative images to the article body.")
        elif document.article_length > self.hp.long_article_length and informative < _FEW_IMAGES_NOTE:
            notes.append("Article is long but has few images. Add more illustrative images.")

        if details["images_without_alt"]:
            notes.append(f"{details['images_without_alt']} images have no alt text. Describe every image for accessibility.")
        if details["decorative_images"] > informative > 0:
            notes.append("Decorative images (icons and flags) outnumber informative ones. Focus on useful images.")
        if details["non_free_images_count"]:
            notes.append(
                f"{details['non_free_images_count']} non-free images detected. Replace them with free images from Commons."
            )
        if details["bad_alt_text_count"]:
            notes.append(f"{details['bad_alt_text_count']} images have missing or very short alt text.")
        likely = details["repository_likely_count"]
        if likely and details["local_description_likely_count"] < likely / 2:
            notes.append("Most images lack an Arabic description. Add Arabic descriptions on Wikimedia Commons.")
        if details["media_density"] < _LOW_DENSITY_NOTE and document.article_length > _LOW_DENSITY_MIN_LENGTH:
            notes.append(f"Low media density ({details['media_density']}%). Add more illustrative media.")
        return notes
