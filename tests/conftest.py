import pytest

from route_difficulty.models import ChallengeRating, ClusterOptions, Segment, SegmentType


@pytest.fixture
def cluster_options():
    return ClusterOptions(grade_threshold=1.5, adjacency_epsilon_km=0.01)


@pytest.fixture
def rolling_route():
    """A 6 km route: flat start, a two-part climb, a descent, a flat finish."""
    return [
        Segment(
            start_distance=0.0, end_distance=1.0, length=1.0,
            start_elevation=100.0, end_elevation=101.0, grade=0.1,
            type=SegmentType.FLAT, challenge_rating=ChallengeRating.EASY,
            estimated_time_multiplier=1.0, pacing_advice="Settle in",
        ),
        Segment(
            start_distance=1.0, end_distance=2.0, length=1.0,
            start_elevation=101.0, end_elevation=161.0, grade=6.0,
            type=SegmentType.MODERATE_UPHILL, challenge_rating=ChallengeRating.HARD,
            estimated_time_multiplier=1.4, pacing_advice="Shorten your stride",
        ),
        Segment(
            start_distance=2.0, end_distance=3.0, length=1.0,
            start_elevation=161.0, end_elevation=226.0, grade=6.5,
            type=SegmentType.MODERATE_UPHILL, challenge_rating=ChallengeRating.HARD,
            estimated_time_multiplier=1.5, pacing_advice="Shorten your stride",
        ),
        Segment(
            start_distance=3.0, end_distance=4.0, length=1.0,
            start_elevation=226.0, end_elevation=166.0, grade=-6.0,
            type=SegmentType.MODERATE_DOWNHILL, challenge_rating=ChallengeRating.MODERATE,
            estimated_time_multiplier=0.9, pacing_advice="Let gravity help",
        ),
        Segment(
            start_distance=4.0, end_distance=6.0, length=2.0,
            start_elevation=166.0, end_elevation=166.0, grade=0.0,
            type=SegmentType.FLAT, challenge_rating=ChallengeRating.EASY,
            estimated_time_multiplier=1.0, pacing_advice="Hold goal pace",
        ),
    ]
