"""Formatting utilities for display.

Supports metric and imperial units with locale-aware number formatting.
"""

import copy
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from babel import Locale

KM_TO_MILES = 0.621371
M_TO_FEET = 3.28084

UNIT_SYSTEMS = ("metric", "imperial")


@dataclass(frozen=True)
class FormatOptions:
    units: str = "metric"  # "metric" or "imperial"
    locale: str = "en-US"  # BCP 47 tag or POSIX style ("de-DE", "de_DE")

    def __post_init__(self):
        if self.units not in UNIT_SYSTEMS:
            raise ValueError(f"Unknown unit system: {self.units}. Use 'metric' or 'imperial'.")

    @property
    def imperial(self) -> bool:
        return self.units == "imperial"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _format_number(value: float, decimals: int, locale: str) -> str:
    """Format a number with fixed decimals using the locale's separators."""
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    parsed = Locale.parse(locale.replace("-", "_"))
    # Keep the locale's grouping rule (e.g. 12,34,567 for en-IN), fix the decimals
    pattern = copy.copy(parsed.decimal_formats[None])
    pattern.frac_prec = (decimals, decimals)
    return pattern.apply(rounded, parsed)


def format_time(minutes: float) -> str:
    """Format minutes as Xh Ym string, dropping zero parts."""
    total_minutes = _round_half_up(minutes)
    hours, mins = divmod(total_minutes, 60)
    if hours > 0 and mins > 0:
        return f"{hours}h {mins}m"
    if hours > 0:
        return f"{hours}h"
    return f"{mins}m"


def format_pace(multiplier: float, base_pace: float, options: FormatOptions | None = None) -> str:
    """Format the pace for a time multiplier as M:SS/km or M:SS/mi.

    Args:
        multiplier: Estimated time multiplier (1.0 = base pace)
        base_pace: Flat-terrain pace in min/km
        options: Unit system; locale is not used for paces

    Returns:
        Pace string such as "5:00/km" or "8:03/mi"
    """
    options = options or FormatOptions()
    pace = base_pace * multiplier
    if options.imperial:
        pace = pace / KM_TO_MILES

    minutes = math.floor(pace)
    seconds = _round_half_up((pace - minutes) * 60)
    if seconds == 60:
        minutes += 1
        seconds = 0

    unit = "mi" if options.imperial else "km"
    return f"{minutes}:{seconds:02d}/{unit}"


def format_distance(distance_km: float, options: FormatOptions | None = None) -> str:
    """Format distance with one decimal and unit, e.g. "5.0 km"."""
    options = options or FormatOptions()
    distance = distance_km * KM_TO_MILES if options.imperial else distance_km
    unit = "mi" if options.imperial else "km"
    return f"{_format_number(distance, 1, options.locale)} {unit}"


def format_elevation(elevation_m: float, options: FormatOptions | None = None) -> str:
    """Format elevation as whole meters or feet, e.g. "100m"."""
    options = options or FormatOptions()
    elevation = elevation_m * M_TO_FEET if options.imperial else elevation_m
    unit = "ft" if options.imperial else "m"
    return f"{_format_number(elevation, 0, options.locale)}{unit}"


def format_percentage(value: float, decimals: int = 1, locale: str = "en-US") -> str:
    """Format a 0-100 value as a percentage string."""
    return f"{_format_number(value, decimals, locale)}%"


def format_distance_range(
    start_km: float,
    end_km: float,
    options: FormatOptions | None = None,
) -> str:
    """Format a distance range label such as "KM 5.0 − 10.5"."""
    options = options or FormatOptions()
    if options.imperial:
        start, end = start_km * KM_TO_MILES, end_km * KM_TO_MILES
    else:
        start, end = start_km, end_km
    unit = "MI" if options.imperial else "KM"
    start_str = _format_number(start, 1, options.locale)
    end_str = _format_number(end, 1, options.locale)
    return f"{unit} {start_str} − {end_str}"
