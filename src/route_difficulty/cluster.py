"""Segment clustering for route difficulty breakdowns.

Merges runs of adjacent segments that share a terrain type and have similar
grades, so a long climb made of many short classified segments reads as one
section.
"""

import logging

from route_difficulty.models import ClusterOptions, Segment, SegmentCluster

logger = logging.getLogger(__name__)


def build_cluster(segments: list[Segment]) -> SegmentCluster:
    """Compute aggregate statistics for one run of segments.

    Elevation gain is the sum of each member's positive delta, so a run that
    goes +20m, -5m, +20m reports 40m of climbing rather than the net 35m.
    Average grade is weighted by member length.

    Args:
        segments: Non-empty run of segments, ordered by distance

    Returns:
        SegmentCluster holding a copy of the member list
    """
    if not segments:
        raise ValueError("Cannot build a cluster from an empty run of segments")

    first = segments[0]
    last = segments[-1]

    elevation_gain = 0.0
    total_length = 0.0
    weighted_grade_sum = 0.0
    for seg in segments:
        delta = seg.end_elevation - seg.start_elevation
        if delta > 0:
            elevation_gain += delta
        total_length += seg.length
        weighted_grade_sum += seg.grade * seg.length

    avg_grade = (weighted_grade_sum / total_length) if total_length > 0 else 0.0

    return SegmentCluster(
        start_distance=first.start_distance,
        end_distance=last.end_distance,
        cluster_length=last.end_distance - first.start_distance,
        start_elevation=first.start_elevation,
        end_elevation=last.end_elevation,
        elevation_gain=elevation_gain,
        avg_grade=avg_grade,
        avg_pace="",
        segment_count=len(segments),
        segments=list(segments),
    )


def _can_merge(prev: Segment, current: Segment, options: ClusterOptions) -> bool:
    is_adjacent = abs(current.start_distance - prev.end_distance) < options.adjacency_epsilon_km
    is_similar_grade = abs(current.grade - prev.grade) <= options.grade_threshold
    return is_adjacent and is_similar_grade and current.type == prev.type


def cluster_segments(
    segments: list[Segment],
    options: ClusterOptions | None = None,
) -> list[SegmentCluster]:
    """Group adjacent similar segments into clusters.

    Algorithm:
    1. Sort a copy of the segments by start distance (input is left untouched)
    2. Compare each segment with the one before it
    3. Extend the current run when the two touch (gap below the adjacency
       epsilon), their grades differ by at most the grade threshold, and they
       share a terrain type
    4. Otherwise close the run and start a new one

    Args:
        segments: Classified segments in any order
        options: Grade threshold and adjacency tolerance; defaults apply if None

    Returns:
        Clusters in route order
    """
    if not segments:
        return []

    if options is None:
        options = ClusterOptions()

    ordered = sorted(segments, key=lambda seg: seg.start_distance)

    clusters = []
    run = [ordered[0]]
    for prev, current in zip(ordered, ordered[1:]):
        if _can_merge(prev, current, options):
            run.append(current)
        else:
            clusters.append(build_cluster(run))
            run = [current]
    clusters.append(build_cluster(run))

    logger.debug(
        "Clustered %d segments into %d clusters (grade_threshold=%s, epsilon=%s km)",
        len(segments), len(clusters), options.grade_threshold, options.adjacency_epsilon_km,
    )
    return clusters
