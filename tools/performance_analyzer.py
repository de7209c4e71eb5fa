"""Channel-level averages, engagement trend and growth rate for a video window."""

from __future__ import annotations

from typing import Optional, Sequence

from tools.benchmarks import TREND_THRESHOLDS
from tools.channel_models import ChannelInfo, EngagementTrend, PerformanceMetrics, VideoInfo
from tools.window_stats import mean, round_half_up


class PerformanceAnalyzer:
    def __init__(self, channel: ChannelInfo, videos: Sequence[VideoInfo]):
        """Videos are expected most-recent-first."""
        self.channel = channel
        self.videos = list(videos)

    def analyze(self) -> PerformanceMetrics:
        avg_views = mean([video.view_count for video in self.videos])
        avg_likes = mean([video.like_count for video in self.videos])
        avg_comments = mean([video.comment_count for video in self.videos])
        return PerformanceMetrics(
            views_per_video=self.per_video(self.channel.view_count),
            subscribers_per_video=self.per_video(self.channel.subscriber_count),
            engagement_trend=self.engagement_trend(),
            top_performing_video=self.top_performing_video(),
            average_views=round_half_up(avg_views),
            average_likes=round_half_up(avg_likes),
            average_comments=round_half_up(avg_comments),
            views_growth_rate=self.views_growth_rate(avg_views),
        )

    def per_video(self, total: int) -> int:
        # A channel without uploads reports 0 rather than its raw total
        if self.channel.video_count <= 0:
            return 0
        return round_half_up(total / self.channel.video_count)

    def engagement_trend(self) -> EngagementTrend:
        """Newest three vs oldest three videos.

        Windows shorter than six videos report ``stable``; that value does not
        distinguish a flat trend from too little data.
        """
        if len(self.videos) < TREND_THRESHOLDS['min_videos']:
            return EngagementTrend.STABLE

        size = TREND_THRESHOLDS['sample_size']
        recent_avg = mean([video.engagement_rate_value for video in self.videos[:size]])
        older_avg = mean([video.engagement_rate_value for video in self.videos[-size:]])

        if recent_avg > older_avg * TREND_THRESHOLDS['up_ratio']:
            return EngagementTrend.UP
        if recent_avg < older_avg * TREND_THRESHOLDS['down_ratio']:
            return EngagementTrend.DOWN
        return EngagementTrend.STABLE

    def top_performing_video(self) -> Optional[VideoInfo]:
        top = None
        for video in self.videos:
            if top is None or video.view_count > top.view_count:
                top = video
        return top

    def views_growth_rate(self, avg_views: float) -> float:
        """Newest video's views relative to the window average, in percent."""
        if not self.videos or avg_views <= 0:
            return 0
        growth = (self.videos[0].view_count - avg_views) / avg_views * 100
        return round_half_up(growth, 1)
