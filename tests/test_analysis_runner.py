import unittest
from unittest import mock

from tools.channel_models import ChannelInfo, VideoInfo, engagement_rate
from tools.errors import ChannelNotFoundError, InvalidChannelInputError
from web.services.analysis_runner import (
    extract_summary_metrics,
    normalize_channel_input,
    run_channel_analysis,
)


def _fetcher():
    fetcher = mock.MagicMock()
    fetcher.quota_used = 101
    fetcher.extract_channel_id.return_value = "UC_TEST"
    fetcher.fetch_channel_info.return_value = ChannelInfo(
        id="UC_TEST",
        title="Test Channel",
        subscriber_count=5000,
        view_count=100000,
        video_count=50,
    )
    fetcher.fetch_recent_videos.return_value = [
        VideoInfo(
            id=f"v{index}",
            title=f"video {index}",
            published_at=f"2024-01-{10 - index:02d}T00:00:00Z",
            view_count=1000,
            like_count=60,
            engagement_rate=engagement_rate(1000, 60, 0),
        )
        for index in range(3)
    ]
    return fetcher


class AnalysisRunnerTests(unittest.TestCase):
    def test_normalize_channel_input(self):
        self.assertEqual(
            normalize_channel_input(" http://youtube.com/@ChrisCappy/ "),
            "https://youtube.com/@ChrisCappy",
        )
        self.assertEqual(normalize_channel_input("@handle"), "@handle")

    def test_run_channel_analysis_logs_each_step(self):
        fetcher = _fetcher()
        messages = []

        analysis = run_channel_analysis("@test", "key", max_videos=3, logger=messages.append, fetcher=fetcher)

        self.assertEqual(analysis.channel.id, "UC_TEST")
        self.assertEqual(len(analysis.recent_videos), 3)
        fetcher.fetch_recent_videos.assert_called_once_with("UC_TEST", 3)

        log_text = "\n".join(messages)
        self.assertIn("Running analysis for: @test", log_text)
        self.assertIn("[Fetch Channel Data] starting...", log_text)
        self.assertIn("[Analyze Channel] complete", log_text)
        self.assertIn("Analysis complete!", log_text)
        self.assertIn("Quota used: ~101 units", log_text)

    def test_missing_api_key(self):
        with self.assertRaises(ValueError):
            run_channel_analysis("@test", "", fetcher=_fetcher())

    def test_blank_input(self):
        with self.assertRaises(InvalidChannelInputError):
            run_channel_analysis("  ", "key", fetcher=_fetcher())

    def test_channel_errors_propagate(self):
        fetcher = _fetcher()
        fetcher.extract_channel_id.side_effect = ChannelNotFoundError("Channel not found: @nobody")
        with self.assertRaises(ChannelNotFoundError):
            run_channel_analysis("@nobody", "key", fetcher=fetcher)

    def test_extract_summary_metrics(self):
        analysis = run_channel_analysis("@test", "key", fetcher=_fetcher())
        metrics = extract_summary_metrics(analysis)

        self.assertEqual(metrics["summary_health_score"], analysis.health_score)
        self.assertEqual(metrics["summary_high_priority"], 1)
        self.assertEqual(metrics["summary_medium_priority"], 1)
        self.assertEqual(metrics["summary_low_priority"], 0)
        self.assertEqual(metrics["videos_analyzed"], 3)


if __name__ == "__main__":
    unittest.main()
