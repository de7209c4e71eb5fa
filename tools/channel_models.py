"""Data model for one channel snapshot and the analysis derived from it.

All records are immutable and serialize to the camelCase JSON shape the
HTTP API returns. ``from_dict`` reverses ``to_dict`` exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from tools.window_stats import format_percent, parse_percent


class InsightCategory(str, Enum):
    TITLE = "title"
    THUMBNAIL = "thumbnail"
    ENGAGEMENT = "engagement"
    FREQUENCY = "frequency"
    GROWTH = "growth"
    SEO = "seo"
    CONTENT = "content"


class InsightStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class KeywordPerformance(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EngagementTrend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


def engagement_rate(view_count: int, like_count: int, comment_count: int) -> str:
    """(likes + comments) / views as a percentage string, e.g. ``6.00%``."""
    if view_count <= 0:
        return "0.00%"
    return format_percent((like_count + comment_count) / view_count * 100)


@dataclass(frozen=True)
class ChannelInfo:
    id: str
    title: str
    description: str = ""
    custom_url: str = ""
    thumbnail_url: str = ""
    subscriber_count: int = 0
    view_count: int = 0
    video_count: int = 0
    published_at: str = ""
    banner_url: Optional[str] = None
    country: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "customUrl": self.custom_url,
            "thumbnailUrl": self.thumbnail_url,
            "bannerUrl": self.banner_url,
            "subscriberCount": self.subscriber_count,
            "viewCount": self.view_count,
            "videoCount": self.video_count,
            "publishedAt": self.published_at,
            "country": self.country,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelInfo":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", "") or "",
            custom_url=data.get("customUrl", "") or "",
            thumbnail_url=data.get("thumbnailUrl", "") or "",
            subscriber_count=int(data.get("subscriberCount", 0) or 0),
            view_count=int(data.get("viewCount", 0) or 0),
            video_count=int(data.get("videoCount", 0) or 0),
            published_at=data.get("publishedAt", ""),
            banner_url=data.get("bannerUrl"),
            country=data.get("country"),
        )


@dataclass(frozen=True)
class VideoInfo:
    id: str
    title: str
    description: str = ""
    thumbnail_url: str = ""
    published_at: str = ""
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    duration: str = ""
    engagement_rate: str = "0.00%"
    tags: List[str] = field(default_factory=list)

    @property
    def engagement_rate_value(self) -> float:
        return parse_percent(self.engagement_rate)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "thumbnailUrl": self.thumbnail_url,
            "publishedAt": self.published_at,
            "viewCount": self.view_count,
            "likeCount": self.like_count,
            "commentCount": self.comment_count,
            "duration": self.duration,
            "engagementRate": self.engagement_rate,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VideoInfo":
        views = int(data.get("viewCount", 0) or 0)
        likes = int(data.get("likeCount", 0) or 0)
        comments = int(data.get("commentCount", 0) or 0)
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", "") or "",
            thumbnail_url=data.get("thumbnailUrl", "") or "",
            published_at=data.get("publishedAt", ""),
            view_count=views,
            like_count=likes,
            comment_count=comments,
            duration=data.get("duration", "") or "",
            engagement_rate=data.get("engagementRate") or engagement_rate(views, likes, comments),
            tags=list(data.get("tags") or []),
        )


@dataclass(frozen=True)
class KeywordItem:
    word: str
    count: int
    avg_views: int
    performance: KeywordPerformance

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "count": self.count,
            "avgViews": self.avg_views,
            "performance": self.performance.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeywordItem":
        return cls(
            word=data["word"],
            count=int(data["count"]),
            avg_views=int(data["avgViews"]),
            performance=KeywordPerformance(data["performance"]),
        )


@dataclass(frozen=True)
class TitlePattern:
    pattern: str
    description: str
    count: int
    effectiveness: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "description": self.description,
            "count": self.count,
            "effectiveness": self.effectiveness,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TitlePattern":
        return cls(
            pattern=data["pattern"],
            description=data["description"],
            count=int(data["count"]),
            effectiveness=data["effectiveness"],
        )


@dataclass(frozen=True)
class HashtagItem:
    tag: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"tag": self.tag, "count": self.count}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HashtagItem":
        return cls(tag=data["tag"], count=int(data["count"]))


@dataclass(frozen=True)
class KeywordAnalysis:
    top_keywords: List[KeywordItem] = field(default_factory=list)
    title_patterns: List[TitlePattern] = field(default_factory=list)
    hashtag_usage: List[HashtagItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topKeywords": [item.to_dict() for item in self.top_keywords],
            "titlePatterns": [item.to_dict() for item in self.title_patterns],
            "hashtagUsage": [item.to_dict() for item in self.hashtag_usage],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeywordAnalysis":
        return cls(
            top_keywords=[KeywordItem.from_dict(item) for item in data.get("topKeywords", [])],
            title_patterns=[TitlePattern.from_dict(item) for item in data.get("titlePatterns", [])],
            hashtag_usage=[HashtagItem.from_dict(item) for item in data.get("hashtagUsage", [])],
        )


@dataclass(frozen=True)
class InsightMetric:
    current: float
    benchmark: float
    unit: str

    def to_dict(self) -> Dict[str, Any]:
        return {"current": self.current, "benchmark": self.benchmark, "unit": self.unit}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InsightMetric":
        return cls(current=data["current"], benchmark=data["benchmark"], unit=data["unit"])


@dataclass(frozen=True)
class AnalysisInsight:
    id: str
    category: InsightCategory
    status: InsightStatus
    title: str
    description: str
    recommendation: Optional[str] = None
    metric: Optional[InsightMetric] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "id": self.id,
            "category": self.category.value,
            "status": self.status.value,
            "title": self.title,
            "description": self.description,
        }
        if self.recommendation is not None:
            payload["recommendation"] = self.recommendation
        if self.metric is not None:
            payload["metric"] = self.metric.to_dict()
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisInsight":
        metric = data.get("metric")
        return cls(
            id=data["id"],
            category=InsightCategory(data["category"]),
            status=InsightStatus(data["status"]),
            title=data["title"],
            description=data["description"],
            recommendation=data.get("recommendation"),
            metric=InsightMetric.from_dict(metric) if metric else None,
        )


@dataclass(frozen=True)
class Recommendation:
    id: str
    priority: Priority
    category: str
    title: str
    description: str
    action_items: List[str] = field(default_factory=list)
    expected_impact: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "priority": self.priority.value,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "actionItems": list(self.action_items),
            "expectedImpact": self.expected_impact,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Recommendation":
        return cls(
            id=data["id"],
            priority=Priority(data["priority"]),
            category=data["category"],
            title=data["title"],
            description=data["description"],
            action_items=list(data.get("actionItems", [])),
            expected_impact=data.get("expectedImpact", ""),
        )


@dataclass(frozen=True)
class PerformanceMetrics:
    views_per_video: int
    subscribers_per_video: int
    engagement_trend: EngagementTrend
    top_performing_video: Optional[VideoInfo]
    average_views: int
    average_likes: int
    average_comments: int
    views_growth_rate: float

    def to_dict(self) -> Dict[str, Any]:
        top = self.top_performing_video
        return {
            "viewsPerVideo": self.views_per_video,
            "subscribersPerVideo": self.subscribers_per_video,
            "engagementTrend": self.engagement_trend.value,
            "topPerformingVideo": top.to_dict() if top is not None else None,
            "averageViews": self.average_views,
            "averageLikes": self.average_likes,
            "averageComments": self.average_comments,
            "viewsGrowthRate": self.views_growth_rate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PerformanceMetrics":
        top = data.get("topPerformingVideo")
        return cls(
            views_per_video=int(data["viewsPerVideo"]),
            subscribers_per_video=int(data["subscribersPerVideo"]),
            engagement_trend=EngagementTrend(data["engagementTrend"]),
            top_performing_video=VideoInfo.from_dict(top) if top else None,
            average_views=int(data["averageViews"]),
            average_likes=int(data["averageLikes"]),
            average_comments=int(data["averageComments"]),
            views_growth_rate=data["viewsGrowthRate"],
        )


@dataclass(frozen=True)
class ChannelAnalysis:
    channel: ChannelInfo
    recent_videos: List[VideoInfo]
    health_score: int
    average_engagement: str
    upload_frequency: str
    insights: List[AnalysisInsight]
    performance_metrics: PerformanceMetrics
    keyword_analysis: KeywordAnalysis
    recommendations: List[Recommendation]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "channel": self.channel.to_dict(),
            "recentVideos": [video.to_dict() for video in self.recent_videos],
            "healthScore": self.health_score,
            "averageEngagement": self.average_engagement,
            "uploadFrequency": self.upload_frequency,
            "insights": [insight.to_dict() for insight in self.insights],
            "performanceMetrics": self.performance_metrics.to_dict(),
            "keywordAnalysis": self.keyword_analysis.to_dict(),
            "recommendations": [rec.to_dict() for rec in self.recommendations],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelAnalysis":
        return cls(
            channel=ChannelInfo.from_dict(data["channel"]),
            recent_videos=[VideoInfo.from_dict(item) for item in data.get("recentVideos", [])],
            health_score=int(data["healthScore"]),
            average_engagement=data["averageEngagement"],
            upload_frequency=data["uploadFrequency"],
            insights=[AnalysisInsight.from_dict(item) for item in data.get("insights", [])],
            performance_metrics=PerformanceMetrics.from_dict(data["performanceMetrics"]),
            keyword_analysis=KeywordAnalysis.from_dict(data["keywordAnalysis"]),
            recommendations=[Recommendation.from_dict(item) for item in data.get("recommendations", [])],
        )
