"""Time and difficulty aggregation over classified segments.

Total time is what the runner spends covering the segments at their
configured base pace, adjusted by each segment's time multiplier. Difficulty
weight keeps only the time *above* base pace, so a breakdown by difficulty
weight shows how much of the route's slowdown each rating bucket is
responsible for, instead of how long the runner spends in it.
"""

import logging
from dataclasses import dataclass

from route_difficulty.cluster import cluster_segments
from route_difficulty.formatters import FormatOptions, format_pace, format_percentage, format_time
from route_difficulty.models import (
    RATING_DISPLAY_ORDER,
    ChallengeRating,
    ClusterOptions,
    Segment,
    SegmentCluster,
)

logger = logging.getLogger(__name__)

RATING_LABELS = {
    ChallengeRating.BRUTAL: "Brutal Climbs",
    ChallengeRating.HARD: "Hard Climbs",
    ChallengeRating.MODERATE: "Moderate Sections",
    ChallengeRating.EASY: "Easy / Flat Sections",
}

RATING_SHORT_LABELS = {
    ChallengeRating.BRUTAL: "Brutal",
    ChallengeRating.HARD: "Hard",
    ChallengeRating.MODERATE: "Moderate",
    ChallengeRating.EASY: "Easy",
}


@dataclass
class DifficultyGroupData:
    """Clusters and totals for one challenge rating."""
    rating: ChallengeRating
    clusters: list[SegmentCluster]
    total_time: float  # minutes
    total_elevation_gain: float  # meters
    percent_of_total_time: float  # 0-100
    percent_of_total_difficulty: float  # 0-100
    label: str = ""
    color: str | None = None  # assigned by the presentation layer

    @property
    def segments(self) -> list[Segment]:
        return [seg for cluster in self.clusters for seg in cluster.segments]


@dataclass
class ChartRow:
    """One slice of the time breakdown chart."""
    name: str
    value: float  # percent of total time
    time: str
    percentage: str
    difficulty: ChallengeRating
    segment_count: int  # number of clusters in the group


def compute_total_time(segments: list[Segment], base_pace_min_per_km: float) -> float:
    """Predicted time in minutes to cover the segments."""
    return sum(
        seg.length * base_pace_min_per_km * seg.estimated_time_multiplier
        for seg in segments
    )


def compute_difficulty_weight(segments: list[Segment], base_pace_min_per_km: float) -> float:
    """Minutes of slowdown beyond base pace.

    Segments at or below base pace (multiplier <= 1) contribute nothing; a
    fast downhill never offsets a slow climb.
    """
    return sum(
        seg.length * base_pace_min_per_km * max(0.0, seg.estimated_time_multiplier - 1)
        for seg in segments
    )


def compute_weighted_multiplier(cluster: SegmentCluster) -> float:
    """Length-weighted time multiplier of a cluster's members."""
    total_length = sum(seg.length for seg in cluster.segments)
    if total_length == 0:
        return 0.0
    weighted = sum(seg.estimated_time_multiplier * seg.length for seg in cluster.segments)
    return weighted / total_length


def group_by_challenge_rating(
    segments: list[Segment],
    base_pace_min_per_km: float,
    options: ClusterOptions | None = None,
    format_options: FormatOptions | None = None,
    total_race_time: float | None = None,
) -> list[DifficultyGroupData]:
    """Split a route into per-rating groups with time and difficulty shares.

    Each rating's segments are clustered on their own, each cluster gets its
    average pace string, and the group reports its share of total predicted
    time and of total difficulty weight. Ratings with no segments are left
    out; groups come back hardest first.

    Args:
        segments: All classified segments of the route (not modified)
        base_pace_min_per_km: Runner's flat-terrain pace
        options: Clustering options; defaults apply if None
        format_options: Units and locale for the cluster pace strings
        total_race_time: Overrides the denominator of the time share; computed
            from the segments when None

    Returns:
        Group data in display order
    """
    if base_pace_min_per_km <= 0:
        raise ValueError(f"Base pace must be positive, got {base_pace_min_per_km}")

    by_rating: dict[ChallengeRating, list[Segment]] = {rating: [] for rating in RATING_DISPLAY_ORDER}
    for seg in segments:
        by_rating[seg.challenge_rating].append(seg)

    if total_race_time is None:
        total_race_time = compute_total_time(segments, base_pace_min_per_km)
    total_difficulty_weight = compute_difficulty_weight(segments, base_pace_min_per_km)

    if segments and total_difficulty_weight == 0:
        logger.warning("Route has no slowdown beyond base pace; difficulty shares are all 0%")

    groups = []
    for rating in RATING_DISPLAY_ORDER:
        rating_segments = by_rating[rating]
        if not rating_segments:
            continue

        clusters = cluster_segments(rating_segments, options)
        for cluster in clusters:
            cluster.avg_pace = format_pace(
                compute_weighted_multiplier(cluster), base_pace_min_per_km, format_options
            )

        total_time = sum(compute_total_time(c.segments, base_pace_min_per_km) for c in clusters)
        total_elevation_gain = sum(c.elevation_gain for c in clusters)
        group_weight = compute_difficulty_weight(
            [seg for c in clusters for seg in c.segments], base_pace_min_per_km
        )

        percent_of_total_time = (total_time / total_race_time * 100) if total_race_time > 0 else 0.0
        percent_of_total_difficulty = (
            (group_weight / total_difficulty_weight * 100) if total_difficulty_weight > 0 else 0.0
        )

        groups.append(DifficultyGroupData(
            rating=rating,
            clusters=clusters,
            total_time=total_time,
            total_elevation_gain=total_elevation_gain,
            percent_of_total_time=percent_of_total_time,
            percent_of_total_difficulty=percent_of_total_difficulty,
            label=RATING_LABELS[rating],
        ))
        logger.debug(
            "%s: %d clusters, %.1f min (%.1f%% of time, %.1f%% of difficulty)",
            rating.value, len(clusters), total_time, percent_of_total_time, percent_of_total_difficulty,
        )

    return groups


def build_chart_rows(
    groups: list[DifficultyGroupData],
    format_options: FormatOptions | None = None,
) -> list[ChartRow]:
    """Turn group data into labelled rows for the time breakdown chart."""
    locale = (format_options or FormatOptions()).locale
    return [
        ChartRow(
            name=RATING_SHORT_LABELS[group.rating],
            value=group.percent_of_total_time,
            time=format_time(group.total_time),
            percentage=format_percentage(group.percent_of_total_time, 1, locale),
            difficulty=group.rating,
            segment_count=len(group.clusters),
        )
        for group in groups
    ]
