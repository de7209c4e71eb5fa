"""Shared numeric helpers over a window of recent videos."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

import numpy as np
from dateutil import parser as dateparser
from dateutil import tz

SECONDS_PER_DAY = 60 * 60 * 24


def round_half_up(value: float, ndigits: int = 0):
    """Round like JavaScript's Math.round (ties go toward +infinity)."""
    factor = 10 ** ndigits
    rounded = math.floor(value * factor + 0.5)
    if ndigits == 0:
        return int(rounded)
    return rounded / factor


def format_percent(value: float) -> str:
    """Two decimals plus a percent sign, ties rounded away from zero."""
    quantized = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{quantized}%"


def parse_percent(value: str) -> float:
    try:
        return float(str(value).strip().rstrip("%"))
    except ValueError:
        return 0.0


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(np.mean(values))


def parse_published_at(raw_value: str):
    """Parse an ISO timestamp; naive values are read as UTC."""
    parsed = dateparser.parse(raw_value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.UTC)
    return parsed


def average_engagement(videos) -> float:
    return mean([video.engagement_rate_value for video in videos])


def average_days_between(videos) -> Optional[float]:
    """Span between newest and oldest upload divided by the number of gaps.

    Returns None when fewer than two videos are available.
    """
    if len(videos) < 2:
        return None
    timestamps: List[float] = sorted(
        (parse_published_at(video.published_at).timestamp() for video in videos),
        reverse=True,
    )
    span_days = (timestamps[0] - timestamps[-1]) / SECONDS_PER_DAY
    return span_days / (len(videos) - 1)


def format_average_engagement(videos) -> str:
    if not videos:
        return "N/A"
    return format_percent(average_engagement(videos))


def format_upload_frequency(avg_days: Optional[float]) -> str:
    if avg_days is None:
        return "N/A"
    if avg_days < 1:
        return "毎日以上"
    if avg_days < 7:
        return f"約{round_half_up(avg_days)}日ごと"
    if avg_days < 30:
        return f"約{round_half_up(avg_days / 7)}週間ごと"
    return f"約{round_half_up(avg_days / 30)}ヶ月ごと"
