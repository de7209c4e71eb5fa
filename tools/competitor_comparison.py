"""Side-by-side comparison of a channel against a competitor channel."""

from __future__ import annotations

from typing import Any, Dict

from tools.channel_models import ChannelAnalysis, ChannelInfo
from tools.window_stats import average_days_between, parse_percent, round_half_up

TREND_MARGIN_PERCENT = 5


def compare_value(main: float, competitor: float) -> Dict[str, Any]:
    """Relative difference of the main value against the competitor, in percent."""
    if competitor == 0:
        return {"ratio": 0, "trend": "equal"}
    ratio = (main - competitor) / competitor * 100
    if ratio > TREND_MARGIN_PERCENT:
        trend = "up"
    elif ratio < -TREND_MARGIN_PERCENT:
        trend = "down"
    else:
        trend = "equal"
    return {"ratio": round_half_up(ratio), "trend": trend}


def compare_channels(main: ChannelInfo, competitor: ChannelInfo) -> Dict[str, Dict[str, Any]]:
    return {
        "subscribers": compare_value(main.subscriber_count, competitor.subscriber_count),
        "views": compare_value(main.view_count, competitor.view_count),
        "videos": compare_value(main.video_count, competitor.video_count),
    }


def _ratio(main: float, competitor: float) -> float:
    if not main:
        return 0
    return round_half_up(competitor / main, 2)


def build_competitor_data(main: ChannelAnalysis, competitor: ChannelAnalysis) -> Dict[str, Any]:
    if main.channel.id == competitor.channel.id:
        raise ValueError("Competitor must be a different channel")

    main_days = average_days_between(main.recent_videos) or 0
    competitor_days = average_days_between(competitor.recent_videos) or 0

    return {
        "channel": competitor.channel.to_dict(),
        "recentVideos": [video.to_dict() for video in competitor.recent_videos],
        "comparisonMetrics": {
            "subscriberRatio": _ratio(main.channel.subscriber_count, competitor.channel.subscriber_count),
            "viewRatio": _ratio(main.channel.view_count, competitor.channel.view_count),
            "engagementRatio": _ratio(
                parse_percent(main.average_engagement),
                parse_percent(competitor.average_engagement),
            ),
            "uploadFrequencyRatio": _ratio(main_days, competitor_days),
        },
    }
