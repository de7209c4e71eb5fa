import io
import json
import unittest
from contextlib import redirect_stdout
from datetime import datetime, timedelta, timezone

from tools.channel_models import ChannelAnalysis, ChannelInfo, EngagementTrend, InsightStatus
from tools.health_scorer import HealthScorer
from tools.youtube_analyze_channel import ChannelAnalyzer

START = datetime(2024, 6, 30, tzinfo=timezone.utc)


def _channel(subscribers=5000, videos=50):
    return {
        "id": "UC_TEST",
        "title": "Test Channel",
        "description": "A channel about cooking",
        "customUrl": "@testchannel",
        "thumbnailUrl": "https://example.com/channel.jpg",
        "subscriberCount": subscribers,
        "viewCount": 250000,
        "videoCount": videos,
        "publishedAt": "2020-01-01T00:00:00Z",
        "country": "JP",
    }


def _video(index, title, views, likes, comments, days_ago, description=""):
    return {
        "id": f"v{index}",
        "title": title,
        "description": description,
        "thumbnailUrl": f"https://example.com/{index}.jpg",
        "publishedAt": (START - timedelta(days=days_ago)).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "viewCount": views,
        "likeCount": likes,
        "commentCount": comments,
        "duration": "PT10M",
        "tags": ["cooking"],
    }


def _analyze(raw):
    with redirect_stdout(io.StringIO()):
        return ChannelAnalyzer.from_raw(raw).generate_analysis()


class ChannelAnalyzerTests(unittest.TestCase):
    def test_single_video_window(self):
        raw = {"channel": _channel(), "videos": [_video(1, "First upload", 1000, 50, 10, 0)]}
        analysis = _analyze(raw)

        self.assertEqual(analysis.recent_videos[0].engagement_rate, "6.00%")
        self.assertEqual(analysis.performance_metrics.engagement_trend, EngagementTrend.STABLE)
        self.assertEqual(analysis.performance_metrics.top_performing_video.id, "v1")
        self.assertEqual(analysis.average_engagement, "6.00%")
        self.assertEqual(analysis.upload_frequency, "N/A")

    def test_identical_numbered_titles_are_neutral(self):
        videos = [_video(index, "Top 10 tips", 500, 20, 5, index) for index in range(10)]
        analysis = _analyze({"channel": _channel(), "videos": videos})

        patterns = {pattern.pattern: pattern for pattern in analysis.keyword_analysis.title_patterns}
        self.assertEqual(patterns["数字を含むタイトル"].count, 10)
        self.assertEqual(patterns["数字を含むタイトル"].effectiveness, 50)

    def test_engagement_above_micro_benchmark(self):
        videos = [_video(index, f"video {index}", 1000, 100, 0, index * 3) for index in range(5)]
        analysis = _analyze({"channel": _channel(subscribers=5000), "videos": videos})

        engagement = [insight for insight in analysis.insights if insight.id == "engagement-1"][0]
        self.assertEqual(engagement.status, InsightStatus.GOOD)
        self.assertEqual(analysis.average_engagement, "10.00%")

    def test_three_day_cadence_on_micro_channel(self):
        videos = [_video(index, f"video {index}", 1000, 100, 0, index * 3) for index in range(5)]
        raw = {"channel": _channel(subscribers=5000), "videos": videos}
        analysis = _analyze(raw)

        frequency = [insight for insight in analysis.insights if insight.id == "frequency-1"][0]
        self.assertEqual(frequency.status, InsightStatus.GOOD)
        self.assertEqual(analysis.upload_frequency, "約3日ごと")

        channel = ChannelInfo.from_dict(raw["channel"])
        scorer = HealthScorer(channel, analysis.recent_videos, analysis.insights, analysis.performance_metrics)
        self.assertEqual(scorer.frequency_points(), 10)
        self.assertEqual(scorer.calculate(), analysis.health_score)

    def test_empty_window(self):
        analysis = _analyze({"channel": _channel(), "videos": []})
        self.assertEqual(analysis.average_engagement, "N/A")
        self.assertEqual(analysis.upload_frequency, "N/A")
        self.assertIsNone(analysis.performance_metrics.top_performing_video)
        self.assertEqual(analysis.performance_metrics.views_growth_rate, 0)
        self.assertTrue(0 <= analysis.health_score <= 100)

    def test_json_round_trip(self):
        videos = [
            _video(0, "【保存版】簡単レシピ 5選", 4000, 300, 40, 0, "#料理 #レシピ " + "詳しい説明" * 50),
            _video(1, "なぜ失敗する？ cooking mistakes", 1500, 90, 12, 4, "#料理"),
            _video(2, "cooking basics 🍳", 800, 40, 3, 9),
            _video(3, "Weekly vlog", 600, 20, 1, 13),
            _video(4, "簡単レシピ 3 ways", 2500, 150, 20, 18),
            _video(5, "Q&A", 0, 0, 0, 25),
        ]
        analysis = _analyze({"channel": _channel(), "videos": videos})

        restored = ChannelAnalysis.from_dict(json.loads(json.dumps(analysis.to_dict(), ensure_ascii=False)))
        self.assertEqual(restored, analysis)
        self.assertEqual(restored.to_dict(), analysis.to_dict())

    def test_analysis_is_repeatable(self):
        videos = [_video(index, f"レシピ {index}", 100 * (index + 1), index, 1, index * 2) for index in range(8)]
        raw = {"channel": _channel(), "videos": videos}
        self.assertEqual(_analyze(raw).to_dict(), _analyze(raw).to_dict())

    def test_report_shape(self):
        videos = [_video(index, f"video {index}", 1000, 30, 2, index * 7) for index in range(3)]
        payload = _analyze({"channel": _channel(), "videos": videos}).to_dict()
        self.assertEqual(
            sorted(payload.keys()),
            sorted([
                "channel",
                "recentVideos",
                "healthScore",
                "averageEngagement",
                "uploadFrequency",
                "insights",
                "performanceMetrics",
                "keywordAnalysis",
                "recommendations",
            ]),
        )
        self.assertEqual(payload["recommendations"][-1]["id"], "rec-thumbnail")


if __name__ == "__main__":
    unittest.main()
