"""Composite 0-100 channel health score."""

from __future__ import annotations

from typing import Sequence

from tools.benchmarks import HEALTH_SCORE, tier_benchmark
from tools.channel_models import AnalysisInsight, ChannelInfo, PerformanceMetrics, VideoInfo
from tools.window_stats import average_days_between, average_engagement, round_half_up


class HealthScorer:
    def __init__(
        self,
        channel: ChannelInfo,
        videos: Sequence[VideoInfo],
        insights: Sequence[AnalysisInsight],
        metrics: PerformanceMetrics,
    ):
        self.channel = channel
        self.videos = list(videos)
        self.insights = list(insights)
        self.metrics = metrics

    def calculate(self) -> int:
        """
        Calculate overall channel health score (0-100)

        Formula: 50 + engagement points + trend points
                 + sum(insight points) + posting cadence points
        """
        score = HEALTH_SCORE['base']
        score += self.engagement_points()
        score += HEALTH_SCORE['trend_points'][self.metrics.engagement_trend.value]
        score += sum(HEALTH_SCORE['insight_points'][insight.status.value] for insight in self.insights)
        score += self.frequency_points()
        return max(HEALTH_SCORE['min'], min(HEALTH_SCORE['max'], round_half_up(score)))

    def engagement_points(self) -> int:
        ratio = average_engagement(self.videos) / tier_benchmark(self.channel.subscriber_count)['avgEngagement']
        for min_ratio, points in HEALTH_SCORE['engagement_steps']:
            if ratio >= min_ratio:
                return points
        return HEALTH_SCORE['engagement_floor_points']

    def frequency_points(self) -> int:
        avg_days = average_days_between(self.videos)
        if avg_days is None:
            return 0
        for max_days, points in HEALTH_SCORE['frequency_steps']:
            if avg_days <= max_days:
                return points
        if avg_days > HEALTH_SCORE['frequency_stale_days']:
            return HEALTH_SCORE['frequency_stale_points']
        return 0
