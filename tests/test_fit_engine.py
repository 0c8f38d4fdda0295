"""Tests for the v1 fit engine."""

import itertools

import pytest
from pydantic import ValidationError

from bikefit.core.constants import STEM_SIZES_MM
from bikefit.core.enums import Flexibility, RidingStyle
from bikefit.models.fit import CurrentSetup, FrameGeometry, RiderProfile
from bikefit.services.fit_engine import (
    SPACER_FALLBACK_NOTE,
    calculate_base_reach,
    compute_fit_recommendation,
    get_allowed_stems,
    snap_stem_length,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _rider(**overrides) -> RiderProfile:
    defaults = {
        "height_cm": 175,
        "inseam_cm": 82,
        "torso_length_cm": 60,
        "arm_length_cm": 65,
        "flexibility": "medium",
        "riding_style": "endurance",
    }
    defaults.update(overrides)
    return RiderProfile(**defaults)


def _frame(**overrides) -> FrameGeometry:
    defaults = {
        "stack_mm": 590,
        "reach_mm": 386,
        "head_tube_angle_deg": 72.5,
        "seat_tube_angle_deg": 73.0,
        "wheelbase_mm": 1020,
    }
    defaults.update(overrides)
    return FrameGeometry(**defaults)


def _setup(**overrides) -> CurrentSetup:
    defaults = {
        "stem_length_mm": 90,
        "spacer_stack_mm": 20,
        "bar_reach_mm": 80,
        "hood_reach_offset_mm": 10,
        "saddle_height_mm": 740,
        "saddle_setback_mm": 25,
    }
    defaults.update(overrides)
    return CurrentSetup(**defaults)


def _mid(**rider_overrides) -> int:
    return compute_fit_recommendation(
        _rider(**rider_overrides), _frame(), _setup()
    ).target_reach.mid_mm


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


class TestBaselineRecommendation:
    def test_end_to_end_example(self):
        result = compute_fit_recommendation(_rider(), _frame(), _setup())
        assert result.target_reach.mid_mm == 486
        assert result.target_reach.min_mm == 481
        assert result.target_reach.max_mm == 491
        assert result.stem.basis_mm == 10
        assert result.stem.snapped_mm == 50
        assert result.confidence == 1.0

    def test_base_reach_formula(self):
        # 600 * 0.43 + 650 * 0.35
        assert calculate_base_reach(_rider()) == pytest.approx(485.5)

    def test_endurance_drop_range(self):
        result = compute_fit_recommendation(_rider(), _frame(), _setup())
        assert (result.target_drop.min_mm, result.target_drop.max_mm) == (20, 40)

    def test_allowed_stems_around_snapped(self):
        result = compute_fit_recommendation(_rider(), _frame(), _setup())
        assert result.stem.allowed_mm == [50, 60]

    def test_spacer_band_keeps_current(self):
        result = compute_fit_recommendation(_rider(), _frame(), _setup())
        assert result.spacers.recommended_mm == 20
        assert result.spacers.min_mm == 0
        assert result.spacers.max_mm == 40

    def test_complete_inputs_have_no_notes(self):
        result = compute_fit_recommendation(_rider(), _frame(), _setup())
        assert result.notes == []

    def test_default_hood_offset_is_10mm(self):
        with_default = compute_fit_recommendation(
            _rider(), _frame(), _setup(hood_reach_offset_mm=None)
        )
        assert with_default.stem.basis_mm == 10

    def test_explicit_zero_hood_offset_is_respected(self):
        result = compute_fit_recommendation(
            _rider(), _frame(), _setup(hood_reach_offset_mm=0)
        )
        # 485.5 - (386 + 80) = 19.5
        assert result.stem.basis_mm == 20

    def test_inputs_are_not_mutated(self):
        rider, frame, setup = _rider(), _frame(), _setup()
        before = (rider.model_dump(), frame.model_dump(), setup.model_dump())
        compute_fit_recommendation(rider, frame, setup)
        assert (rider.model_dump(), frame.model_dump(), setup.model_dump()) == before


# ---------------------------------------------------------------------------
# Adjustments
# ---------------------------------------------------------------------------


class TestAdjustments:
    def test_flexibility_monotonic(self):
        low = _mid(flexibility="low")
        medium = _mid(flexibility="medium")
        high = _mid(flexibility="high")
        assert low == medium - 15
        assert high == medium + 10

    def test_legacy_flexibility_levels(self):
        assert _rider(flexibility=1).flexibility == Flexibility.LOW
        assert _rider(flexibility=2).flexibility == Flexibility.MEDIUM
        assert _rider(flexibility=3).flexibility == Flexibility.HIGH

    def test_legacy_flexibility_level_strings(self):
        assert _rider(flexibility="1").flexibility == Flexibility.LOW
        assert _rider(flexibility=" 3 ").flexibility == Flexibility.HIGH
        assert _rider(flexibility="7").flexibility == Flexibility.MEDIUM

    def test_unknown_flexibility_rejected(self):
        with pytest.raises(ValidationError):
            _rider(flexibility="bendy")

    @pytest.mark.parametrize("style", ["racing", "relaxed", "Race"])
    def test_only_canonical_riding_styles(self, style):
        with pytest.raises(ValidationError):
            _rider(riding_style=style)

    def test_comfort_subtracts_20(self):
        assert _mid(riding_style="comfort") == _mid() - 20

    def test_race_adds_15(self):
        assert _mid(riding_style="race") == _mid() + 15

    def test_high_race_is_additive(self):
        assert _mid(flexibility="high", riding_style="race") == _mid() + 25

    def test_low_comfort_is_additive(self):
        assert _mid(flexibility="low", riding_style="comfort") == _mid() - 35

    @pytest.mark.parametrize(
        "style,expected",
        [("comfort", (10, 20)), ("endurance", (20, 40)), ("race", (50, 80))],
    )
    def test_drop_range_by_style(self, style, expected):
        result = compute_fit_recommendation(_rider(riding_style=style), _frame(), _setup())
        assert (result.target_drop.min_mm, result.target_drop.max_mm) == expected

    @pytest.mark.parametrize("style", list(RidingStyle))
    @pytest.mark.parametrize("flexibility", list(Flexibility))
    def test_band_invariant(self, style, flexibility):
        result = compute_fit_recommendation(
            _rider(riding_style=style, flexibility=flexibility), _frame(), _setup()
        )
        band = result.target_reach
        assert band.min_mm < band.mid_mm < band.max_mm
        assert result.target_drop.min_mm <= result.target_drop.max_mm

    def test_pain_points_do_not_move_engine_reach(self):
        assert _mid(pain_points=["hands", "neck"]) == _mid()


# ---------------------------------------------------------------------------
# Stem snapping
# ---------------------------------------------------------------------------


class TestStemSnapping:
    @pytest.mark.parametrize(
        "basis,expected",
        [
            (65, 70),
            (115, 120),
            (55, 60),
            (45, 50),
            (64.9, 60),
            (65.1, 70),
            (75, 80),
            (10, 50),
            (-40, 50),
            (125, 120),
            (300, 120),
        ],
    )
    def test_snap(self, basis, expected):
        assert snap_stem_length(basis) == expected

    def test_tie_rounds_up_end_to_end(self):
        # 485.5 - (330.5 + 80 + 10) = 65
        result = compute_fit_recommendation(_rider(), _frame(reach_mm=330.5), _setup())
        assert result.stem.basis_mm == 65
        assert result.stem.snapped_mm == 70

    def test_upper_tie_rounds_up_end_to_end(self):
        # 485.5 - (280.5 + 80 + 10) = 115
        result = compute_fit_recommendation(_rider(), _frame(reach_mm=280.5), _setup())
        assert result.stem.basis_mm == 115
        assert result.stem.snapped_mm == 120

    def test_snapping_uses_unrounded_basis(self):
        # 485.5 - (331 + 80 + 10) = 64.5: reported as 65, snapped from 64.5
        result = compute_fit_recommendation(_rider(), _frame(reach_mm=331), _setup())
        assert result.stem.basis_mm == 65
        assert result.stem.snapped_mm == 60

    def test_membership_and_allowed_subset(self):
        for basis in range(-50, 201, 3):
            snapped = snap_stem_length(basis)
            assert snapped in STEM_SIZES_MM
            assert get_allowed_stems(snapped) == [
                s for s in STEM_SIZES_MM if abs(s - snapped) <= 10
            ]

    @pytest.mark.parametrize(
        "snapped,allowed",
        [(50, [50, 60]), (80, [70, 80, 90]), (120, [110, 120])],
    )
    def test_allowed_stems(self, snapped, allowed):
        assert get_allowed_stems(snapped) == allowed


# ---------------------------------------------------------------------------
# Missing data
# ---------------------------------------------------------------------------


class TestMissingData:
    def test_missing_bar_and_stem(self):
        result = compute_fit_recommendation(
            _rider(), _frame(), _setup(bar_reach_mm=0, stem_length_mm=0)
        )
        assert result.confidence == 0.7
        assert any("bar reach" in note for note in result.notes)
        assert any("stem length" in note for note in result.notes)

    def test_missing_frame_reach_note(self):
        result = compute_fit_recommendation(_rider(), _frame(reach_mm=0), _setup())
        assert result.confidence == 0.85
        assert any("frame reach" in note for note in result.notes)

    def test_none_counts_as_missing(self):
        result = compute_fit_recommendation(
            _rider(torso_length_cm=None), _frame(), _setup()
        )
        assert result.confidence == 0.85
        assert "Missing torso length reduces confidence" in result.notes

    def test_all_missing_hits_floor(self):
        result = compute_fit_recommendation(RiderProfile(), FrameGeometry(), CurrentSetup())
        assert result.confidence == 0.3
        assert sum("Missing" in note for note in result.notes) == 6
        assert result.stem.snapped_mm == 50
        assert result.target_reach.min_mm < result.target_reach.mid_mm < result.target_reach.max_mm

    def test_still_returns_valid_structure(self):
        result = compute_fit_recommendation(_rider(), _frame(), _setup(bar_reach_mm=0))
        assert result.target_reach.mid_mm > 0
        assert result.stem.snapped_mm > 0

    def test_confidence_steps_for_every_combination(self):
        field_setters = [
            ("rider", "torso_length_cm"),
            ("rider", "arm_length_cm"),
            ("frame", "stack_mm"),
            ("frame", "reach_mm"),
            ("setup", "bar_reach_mm"),
            ("setup", "stem_length_mm"),
        ]
        for mask in itertools.product([False, True], repeat=len(field_setters)):
            overrides = {"rider": {}, "frame": {}, "setup": {}}
            for missing, (target, field) in zip(mask, field_setters):
                if missing:
                    overrides[target][field] = 0
            result = compute_fit_recommendation(
                _rider(**overrides["rider"]),
                _frame(**overrides["frame"]),
                _setup(**overrides["setup"]),
            )
            expected = max(0.3, round(1.0 - 0.15 * sum(mask), 2))
            assert result.confidence == expected
            assert 0.3 <= result.confidence <= 1.0


# ---------------------------------------------------------------------------
# Spacers
# ---------------------------------------------------------------------------


class TestSpacers:
    def test_no_frame_stack_uses_current(self):
        result = compute_fit_recommendation(_rider(), _frame(stack_mm=0), _setup())
        assert result.spacers.recommended_mm == 20
        assert result.spacers.min_mm is None
        assert result.spacers.max_mm is None
        assert SPACER_FALLBACK_NOTE in result.notes

    def test_no_current_spacers_defaults_to_20(self):
        result = compute_fit_recommendation(
            _rider(), _frame(), _setup(spacer_stack_mm=None)
        )
        assert result.spacers.recommended_mm == 20
        assert result.spacers.min_mm is None
        assert SPACER_FALLBACK_NOTE in result.notes

    def test_zero_spacers_is_a_value(self):
        result = compute_fit_recommendation(_rider(), _frame(), _setup(spacer_stack_mm=0))
        assert result.spacers.recommended_mm == 0
        assert result.spacers.min_mm == 0
        assert result.spacers.max_mm == 20
        assert SPACER_FALLBACK_NOTE not in result.notes

    def test_band_floor_is_zero(self):
        result = compute_fit_recommendation(_rider(), _frame(), _setup(spacer_stack_mm=10))
        assert (result.spacers.min_mm, result.spacers.max_mm) == (0, 30)
        assert result.spacers.recommended_mm == 10
