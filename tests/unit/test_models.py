"""Tests for segment and option models."""

import dataclasses

import pytest

from route_difficulty.models import (
    RATING_DISPLAY_ORDER,
    ChallengeRating,
    ClusterOptions,
    EnergyRating,
    RacePosition,
    Segment,
    SegmentType,
)

PAYLOAD = {
    "startDistance": 2.0,
    "endDistance": 2.5,
    "length": 0.5,
    "startElevation": 120.0,
    "endElevation": 160.0,
    "grade": 8.0,
    "type": "steep-uphill",
    "challengeRating": "hard",
    "estimatedTimeMultiplier": 1.6,
    "pacingAdvice": "Power hike if needed",
}


class TestSegment:
    def test_from_dict(self):
        seg = Segment.from_dict(PAYLOAD)
        assert seg.start_distance == 2.0
        assert seg.length == 0.5
        assert seg.type == SegmentType.STEEP_UPHILL
        assert seg.challenge_rating == ChallengeRating.HARD
        assert seg.estimated_time_multiplier == 1.6
        assert seg.pacing_advice == "Power hike if needed"
        assert seg.energy_rating is None
        assert seg.race_position is None

    def test_from_dict_underscore_tags(self):
        seg = Segment.from_dict({**PAYLOAD, "type": "gradual_downhill"})
        assert seg.type == SegmentType.GRADUAL_DOWNHILL

    def test_from_dict_optional_tags(self):
        seg = Segment.from_dict({**PAYLOAD, "energyRating": "high", "racePosition": "late"})
        assert seg.energy_rating == EnergyRating.HIGH
        assert seg.race_position == RacePosition.LATE

    def test_from_dict_missing_advice(self):
        payload = {k: v for k, v in PAYLOAD.items() if k != "pacingAdvice"}
        assert Segment.from_dict(payload).pacing_advice == ""

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="SegmentType"):
            Segment.from_dict({**PAYLOAD, "type": "cliff"})

    def test_unknown_rating(self):
        with pytest.raises(ValueError, match="ChallengeRating"):
            Segment.from_dict({**PAYLOAD, "challengeRating": "extreme"})

    def test_missing_field(self):
        payload = {k: v for k, v in PAYLOAD.items() if k != "grade"}
        with pytest.raises(KeyError):
            Segment.from_dict(payload)

    def test_to_dict_uses_canonical_tags(self):
        data = Segment.from_dict({**PAYLOAD, "racePosition": "mid"}).to_dict()
        assert data["type"] == "steep_uphill"
        assert data["racePosition"] == "mid"
        assert "energyRating" not in data
        assert Segment.from_dict(data) == Segment.from_dict({**PAYLOAD, "racePosition": "mid"})

    def test_frozen(self):
        seg = Segment.from_dict(PAYLOAD)
        with pytest.raises(dataclasses.FrozenInstanceError):
            seg.grade = 1.0


class TestChallengeRating:
    def test_display_order_hardest_first(self):
        assert RATING_DISPLAY_ORDER[0] == ChallengeRating.BRUTAL
        assert RATING_DISPLAY_ORDER[-1] == ChallengeRating.EASY

    def test_order_property(self):
        ratings = sorted(ChallengeRating, key=lambda r: r.order)
        assert ratings == RATING_DISPLAY_ORDER

    def test_every_rating_has_a_position(self):
        assert set(RATING_DISPLAY_ORDER) == set(ChallengeRating)


class TestClusterOptions:
    def test_defaults(self):
        options = ClusterOptions()
        assert options.grade_threshold == 1.5
        assert options.adjacency_epsilon_km == 0.01
