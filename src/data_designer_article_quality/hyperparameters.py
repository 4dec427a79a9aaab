# SPDX-License-Identifier: Apache-2.0
"""Tunable thresholds, caps, penalties and weights shared by every stage."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Hyperparameters:
    """Tunable thresholds, caps, and penalties used by the analyzers and scoring engine."""

    # Segmentation
    sentence_too_short: int = 20
    sentence_too_long: int = 200
    sentence_example_chars: int = 150
    paragraph_min_length: int = 50
    first_paragraph_count: int = 3
    first_paragraph_min_length: int = 30
    opening_example_chars: int = 80

    # Pattern detection
    mt_example_cap: int = 10
    narrative_example_cap: int = 3
    narrative_context_before: int = 20
    narrative_context_after: int = 60
    rule_hit_cap: int = 10
    repeated_word_min_length: int = 4
    repeated_word_threshold: int = 15
    unpunctuated_sentence_length: int = 250

    # Near-duplicate detection
    redundancy_threshold: float = 0.85
    redundancy_min_length: int = 30
    redundancy_long_string: int = 500
    redundancy_example_cap: int = 3
    redundancy_example_chars: int = 70
    redundancy_max_sentences: int = 300
    redundancy_max_comparisons: int = 20_000

    # Axis maxima
    structure_max: int = 30
    references_max: int = 25
    media_max: int = 10
    links_max: int = 15
    grammar_max: int = 5
    maintenance_max: int = 20
    language_max: int = 10
    revision_max: int = 10
    integration_max: int = 10

    # Structure axis
    intro_ideal_min_ratio: float = 0.10
    intro_ideal_max_ratio: float = 0.20
    intro_long_sentence: int = 200
    external_links_section_min_length: int = 3000
    see_also_section_min_length: int = 5000
    empty_section_min_length: int = 50
    stub_max_sections: int = 1
    stub_max_length: int = 1500
    short_article_length: int = 2500
    balance_long_article: int = 3000
    balance_min_h2: int = 2
    balance_short_article: int = 2000
    balance_max_h2: int = 5

    # References axis
    year_min: int = 1900
    year_max: int = 2025
    recent_year_min: int = 2015
    reference_example_cap: int = 3
    reference_snippet_chars: int = 80

    # Media axis
    decorative_min_dimension: int = 60
    alt_text_min_length: int = 5
    media_example_cap: int = 5
    long_article_length: int = 5000

    # Links axis
    red_link_ratio_note: float = 0.3
    link_density_high: float = 7.0

    # Revision axis
    large_section_length: int = 4000
    small_section_length: int = 80

    # Language axis penalties as (per-unit rate, cap)
    weak_style_penalty: tuple[float, float] = (0.1, 2.0)
    long_sentence_allowance: int = 5
    long_sentence_penalty: tuple[float, float] = (0.2, 1.5)
    empty_paragraph_allowance: int = 2
    empty_paragraph_penalty: tuple[float, float] = (0.3, 1.0)
    filler_allowance: int = 10
    filler_penalty: tuple[float, float] = (0.05, 1.0)
    preposition_penalty: tuple[float, float] = (0.08, 1.5)
    narrative_penalty: tuple[float, float] = (0.12, 1.5)
    internal_redundancy_penalty: float = 0.5

    # Engine adjustments as (per-unit rate, cap)
    mt_adjustment: tuple[float, float] = (0.1, 2.0)
    grammar_adjustment: tuple[float, float] = (0.15, 2.0)
    redundancy_adjustment: tuple[float, float] = (0.25, 2.0)
    punctuation_bonus_min: int = 70
    punctuation_bonus: float = 0.5
    incomplete_reference_adjustment: tuple[float, float] = (0.15, 2.0)
    book_bonus: tuple[float, float] = (0.2, 1.0)
    journal_bonus: tuple[float, float] = (0.2, 1.0)
    web_dominance_penalty: float = 0.5
    wikidata_citation_bonus: tuple[float, float] = (0.25, 1.0)
    reference_count_adjustments: tuple[tuple[str, float], ...] = (
        ("under10", -2.0),
        ("between10and20", -1.0),
        ("between20and50", 0.0),
        ("above50", 0.5),
    )
    reference_language_bonus: float = 0.5
    media_density_band: tuple[float, float] = (0.3, 1.5)
    media_density_bonus: tuple[float, float] = (1.0, 1.5)
    non_free_adjustment: tuple[float, float] = (0.3, 2.0)
    bad_alt_adjustment: tuple[float, float] = (0.2, 2.0)
    local_description_bonus: float = 0.5
    filtered_media_penalty: float = 1.0

    # Weights of the six scored axes; they sum to 100.
    weights: tuple[tuple[str, int], ...] = (
        ("structure", 25),
        ("references", 25),
        ("maintenance", 15),
        ("links", 15),
        ("media", 10),
        ("language", 10),
    )

    # Tier breakpoints, evaluated top-down.
    tiers: tuple[tuple[str, int], ...] = field(
        default_factory=lambda: (
            ("featured", 90),
            ("good", 80),
            ("advanced", 65),
            ("start", 50),
            ("stub-plus", 30),
            ("stub", 0),
        )
    )

    total_min: int = 0
    total_max: int = 100

    @property
    def weight_map(self) -> dict[str, int]:
        return dict(self.weights)


DEFAULT_HYPERPARAMETERS = Hyperparameters()
