from dataclasses import dataclass, field
from enum import Enum


class SegmentType(Enum):
    """Terrain shape assigned to a segment by the upstream classifier."""
    FLAT = "flat"
    GRADUAL_UPHILL = "gradual_uphill"
    MODERATE_UPHILL = "moderate_uphill"
    STEEP_UPHILL = "steep_uphill"
    GRADUAL_DOWNHILL = "gradual_downhill"
    MODERATE_DOWNHILL = "moderate_downhill"
    STEEP_DOWNHILL = "steep_downhill"


class ChallengeRating(Enum):
    """Ordinal difficulty bucket used for the breakdown."""
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"
    BRUTAL = "brutal"

    @property
    def order(self) -> int:
        """Display position, hardest first."""
        return RATING_DISPLAY_ORDER.index(self)


# Groups are listed hardest first
RATING_DISPLAY_ORDER = [
    ChallengeRating.BRUTAL,
    ChallengeRating.HARD,
    ChallengeRating.MODERATE,
    ChallengeRating.EASY,
]


class EnergyRating(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RacePosition(Enum):
    EARLY = "early"
    MID = "mid"
    LATE = "late"


def _parse_tag(enum_cls: type[Enum], value: str) -> Enum:
    """Look up a taxonomy value, accepting '-' or '_' as word separator."""
    try:
        return enum_cls(str(value).strip().lower().replace("-", "_"))
    except ValueError:
        raise ValueError(f"Unknown {enum_cls.__name__} value: {value!r}") from None


@dataclass(frozen=True)
class Segment:
    start_distance: float  # km from route start
    end_distance: float  # km from route start
    length: float  # km
    start_elevation: float  # meters
    end_elevation: float  # meters
    grade: float  # percent slope
    type: SegmentType
    challenge_rating: ChallengeRating
    estimated_time_multiplier: float  # 1.0 = flat baseline pace
    pacing_advice: str = ""
    energy_rating: EnergyRating | None = None
    race_position: RacePosition | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Segment":
        """Build a segment from the classifier's camelCase payload."""
        energy = data.get("energyRating")
        position = data.get("racePosition")
        return cls(
            start_distance=float(data["startDistance"]),
            end_distance=float(data["endDistance"]),
            length=float(data["length"]),
            start_elevation=float(data["startElevation"]),
            end_elevation=float(data["endElevation"]),
            grade=float(data["grade"]),
            type=_parse_tag(SegmentType, data["type"]),
            challenge_rating=_parse_tag(ChallengeRating, data["challengeRating"]),
            estimated_time_multiplier=float(data["estimatedTimeMultiplier"]),
            pacing_advice=data.get("pacingAdvice") or "",
            energy_rating=_parse_tag(EnergyRating, energy) if energy else None,
            race_position=_parse_tag(RacePosition, position) if position else None,
        )

    def to_dict(self) -> dict:
        """Inverse of from_dict."""
        data = {
            "startDistance": self.start_distance,
            "endDistance": self.end_distance,
            "length": self.length,
            "startElevation": self.start_elevation,
            "endElevation": self.end_elevation,
            "grade": self.grade,
            "type": self.type.value,
            "challengeRating": self.challenge_rating.value,
            "estimatedTimeMultiplier": self.estimated_time_multiplier,
            "pacingAdvice": self.pacing_advice,
        }
        if self.energy_rating is not None:
            data["energyRating"] = self.energy_rating.value
        if self.race_position is not None:
            data["racePosition"] = self.race_position.value
        return data


@dataclass
class SegmentCluster:
    """A maximal run of adjacent, similarly graded, same-type segments."""
    start_distance: float  # km
    end_distance: float  # km
    cluster_length: float  # km, span from first start to last end
    start_elevation: float  # meters
    end_elevation: float  # meters
    elevation_gain: float  # meters, sum of positive member deltas
    avg_grade: float  # percent, length-weighted
    avg_pace: str  # filled in by the grouping step
    segment_count: int
    segments: list[Segment] = field(default_factory=list)


@dataclass(frozen=True)
class ClusterOptions:
    grade_threshold: float = 1.5  # percent; inclusive
    adjacency_epsilon_km: float = 0.01  # max gap between neighbours (exclusive)
