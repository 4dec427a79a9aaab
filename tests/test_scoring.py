import pytest

from data_designer_article_quality.errors import MissingAxisError
from data_designer_article_quality.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_article_quality.results import AxisResult
from data_designer_article_quality.scoring import REQUIRED_AXES, calculate_final_score, tier_for


def _axis(name, score=None, details=None, notes=()):
    maximum = getattr(DEFAULT_HYPERPARAMETERS, f"{name}_max")
    return AxisResult(name, maximum if score is None else score, maximum, details or {}, notes)


def _results(**overrides):
    results = {name: _axis(name) for name in REQUIRED_AXES}
    results.update(overrides)
    return results


def _zero_results():
    return {name: _axis(name, 0) for name in REQUIRED_AXES}


class TestTiers:
    @pytest.mark.parametrize(
        "total, expected",
        [
            (100, "featured"),
            (92, "featured"),
            (90, "featured"),
            (89, "good"),
            (80, "good"),
            (79, "advanced"),
            (65, "advanced"),
            (51, "start"),
            (50, "start"),
            (30, "stub-plus"),
            (29, "stub"),
            (0, "stub"),
        ],
    )
    def test_boundaries_are_inclusive(self, total, expected):
        assert tier_for(total).key == expected

    def test_labels(self):
        assert tier_for(95).label == "Featured article"
        assert tier_for(10).label == "Stub"


class TestCalculateFinalScore:
    def test_weights_sum_to_100(self):
        assert sum(weight for _, weight in DEFAULT_HYPERPARAMETERS.weights) == 100

    def test_perfect_axes(self):
        result = calculate_final_score(_results())
        assert result.total == 100
        assert result.tier.key == "featured"
        assert result.axis_scores == {
            "structure": 25, "references": 25, "maintenance": 15, "links": 15, "media": 10, "language": 10,
        }

    def test_zero_axes(self):
        result = calculate_final_score(_zero_results())
        assert result.total == 0
        assert result.tier.key == "stub"

    def test_total_rounds_half_up(self):
        results = _zero_results()
        results["structure"] = _axis("structure", 12.5)
        assert calculate_final_score(results).total == 13

    def test_perturbing_one_axis_is_bounded_by_its_weight(self):
        weights = DEFAULT_HYPERPARAMETERS.weight_map
        low = calculate_final_score(_zero_results()).total
        for axis in REQUIRED_AXES:
            results = _zero_results()
            results[axis] = _axis(axis)
            change = calculate_final_score(results).total - low
            assert 0 <= change <= weights.get(axis, 0)

    def test_unweighted_axes_do_not_move_total(self):
        results = _results(revision=_axis("revision", 0), integration=_axis("integration", 0))
        assert calculate_final_score(results).total == 100

    def test_notes_follow_axis_order(self):
        results = {name: _axis(name, notes=(f"{name} note",)) for name in reversed(REQUIRED_AXES)}
        result = calculate_final_score(results)
        assert result.notes == tuple(f"{name} note" for name in REQUIRED_AXES)

    def test_details_keep_every_axis(self):
        result = calculate_final_score(_results())
        assert list(result.details) == list(REQUIRED_AXES)

    def test_payload(self):
        payload = calculate_final_score(_results()).to_payload()
        assert payload["total"] == 100
        assert payload["tier"] == "featured"
        assert payload["tier_label"] == "Featured article"
        assert set(payload["details"]) == set(REQUIRED_AXES)


class TestAdjustments:
    def test_language_penalties_are_capped(self):
        results = _results(language=_axis("language", details={"machine_translation_signals": 30}))
        assert calculate_final_score(results).axis_scores["language"] == 8

    def test_language_punctuation_bonus(self):
        results = _results(language=_axis("language", 5, {"punctuation_score": 100}))
        assert calculate_final_score(results).axis_scores["language"] == 5.5

    def test_reference_count_category(self):
        results = _results(references=_axis("references", 20, {"reference_count_category": "under10"}))
        assert calculate_final_score(results).axis_scores["references"] == 18

    def test_reference_source_mix(self):
        details = {
            "reference_types": {"book": 10, "journal": 0, "news": 0, "web": 2},
            "reference_languages": {"ar": 3, "en": 1, "other": 0},
        }
        results = _results(references=_axis("references", 20, details))
        assert calculate_final_score(results).axis_scores["references"] == 21.5

    def test_media_density_bonus(self):
        details = {"article_media_count_corrected": 2, "media_density": 1.0}
        results = _results(media=_axis("media", 5, details))
        assert calculate_final_score(results).axis_scores["media"] == 6

    def test_adjusted_score_is_clamped_to_weight(self):
        results = _results(references=_axis("references", 25, {"reference_count_category": "above50"}))
        assert calculate_final_score(results).axis_scores["references"] == 25

    def test_custom_weights(self):
        hp = Hyperparameters(weights=(("structure", 50), ("references", 50)))
        results = _results(structure=_axis("structure", 0))
        result = calculate_final_score(results, hp)
        assert result.total == 25
        assert set(result.axis_scores) == {"structure", "references"}


class TestValidation:
    def test_missing_axis(self):
        results = _results()
        del results["integration"]
        with pytest.raises(MissingAxisError) as exc_info:
            calculate_final_score(results)
        assert exc_info.value.axis == "integration"
        assert "integration" in str(exc_info.value)

    def test_malformed_axis(self):
        with pytest.raises(MissingAxisError, match="language"):
            calculate_final_score(_results(language=7))

    def test_missing_axis_is_a_key_error(self):
        with pytest.raises(KeyError):
            calculate_final_score({})
