import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from googleapiclient.errors import HttpError

from tools.errors import (
    ChannelNotFoundError,
    InvalidChannelInputError,
    YouTubeAPIError,
    YouTubeQuotaError,
)
from tools.youtube_fetch_channel_data import YouTubeChannelFetcher


def _http_error(status):
    resp = mock.Mock(status=status, reason="error")
    return HttpError(resp, b"{}")


def _channel_item():
    return {
        "id": "UC_TEST",
        "snippet": {
            "title": "Test Channel",
            "description": "desc",
            "customUrl": "@test",
            "publishedAt": "2020-01-01T00:00:00Z",
            "thumbnails": {"default": {"url": "https://example.com/default.jpg"}},
            "country": "JP",
        },
        "statistics": {"subscriberCount": "5000", "viewCount": "250000", "videoCount": "50"},
        "brandingSettings": {"image": {"bannerExternalUrl": "https://example.com/banner.jpg"}},
    }


def _video_item(video_id, views, likes=None, comments="0"):
    statistics = {"viewCount": views, "commentCount": comments}
    if likes is not None:
        statistics["likeCount"] = likes
    return {
        "id": video_id,
        "snippet": {
            "title": f"title {video_id}",
            "description": "",
            "publishedAt": "2024-01-01T00:00:00Z",
            "thumbnails": {"medium": {"url": f"https://example.com/{video_id}.jpg"}},
        },
        "statistics": statistics,
        "contentDetails": {"duration": "PT5M"},
    }


class ChannelIdTests(unittest.TestCase):
    def setUp(self):
        self.youtube = mock.MagicMock()
        self.fetcher = YouTubeChannelFetcher("key", youtube=self.youtube)

    def test_channel_url_needs_no_lookup(self):
        self.assertEqual(
            self.fetcher.extract_channel_id("https://www.youtube.com/channel/UCabc123/"),
            "UCabc123",
        )
        self.youtube.channels.assert_not_called()

    def test_raw_id_passes_through(self):
        self.assertEqual(self.fetcher.extract_channel_id("UCabcdefghijk"), "UCabcdefghijk")

    def test_handle_resolves_through_for_handle(self):
        self.youtube.channels.return_value.list.return_value.execute.return_value = {"items": [{"id": "UC_HANDLE"}]}

        self.assertEqual(self.fetcher.extract_channel_id("@mkbhd"), "UC_HANDLE")
        self.youtube.channels.return_value.list.assert_called_once_with(part="id", forHandle="mkbhd")
        self.assertEqual(self.fetcher.quota_used, 1)

    def test_handle_falls_back_to_username(self):
        self.youtube.channels.return_value.list.return_value.execute.side_effect = [
            {"items": []},
            {"items": [{"id": "UC_LEGACY"}]},
        ]
        self.assertEqual(self.fetcher.extract_channel_id("https://youtube.com/user/legacy"), "UC_LEGACY")

    def test_unknown_handle_is_not_found(self):
        self.youtube.channels.return_value.list.return_value.execute.return_value = {"items": []}
        with self.assertRaises(ChannelNotFoundError):
            self.fetcher.extract_channel_id("@nobody")

    def test_custom_url_uses_search(self):
        self.youtube.search.return_value.list.return_value.execute.return_value = {
            "items": [{"snippet": {"channelId": "UC_CUSTOM"}}]
        }
        self.assertEqual(self.fetcher.extract_channel_id("https://youtube.com/c/custom"), "UC_CUSTOM")
        self.assertEqual(self.fetcher.quota_used, 100)

    def test_invalid_inputs(self):
        for value in ["", "   ", "two words", "https://youtube.com/playlist?list=abc"]:
            with self.assertRaises(InvalidChannelInputError, msg=value):
                self.fetcher.extract_channel_id(value)

    def test_http_errors_are_typed(self):
        execute = self.youtube.channels.return_value.list.return_value.execute
        cases = [(403, YouTubeQuotaError, 429), (404, ChannelNotFoundError, 404), (500, YouTubeAPIError, 502)]
        for status, error_type, http_status in cases:
            execute.side_effect = _http_error(status)
            with self.assertRaises(error_type) as ctx:
                self.fetcher.fetch_channel_info("UC_TEST")
            self.assertEqual(ctx.exception.http_status, http_status)


class FetchTests(unittest.TestCase):
    def setUp(self):
        self.youtube = mock.MagicMock()
        self.fetcher = YouTubeChannelFetcher("key", youtube=self.youtube)

    def test_fetch_channel_info(self):
        self.youtube.channels.return_value.list.return_value.execute.return_value = {"items": [_channel_item()]}

        channel = self.fetcher.fetch_channel_info("UC_TEST")

        self.assertEqual(channel.subscriber_count, 5000)
        self.assertEqual(channel.view_count, 250000)
        self.assertEqual(channel.video_count, 50)
        self.assertEqual(channel.thumbnail_url, "https://example.com/default.jpg")
        self.assertEqual(channel.banner_url, "https://example.com/banner.jpg")
        self.assertEqual(channel.country, "JP")

    def test_missing_channel(self):
        self.youtube.channels.return_value.list.return_value.execute.return_value = {"items": []}
        with self.assertRaises(ChannelNotFoundError):
            self.fetcher.fetch_channel_info("UC_MISSING")

    def test_recent_videos_keep_search_order(self):
        self.youtube.search.return_value.list.return_value.execute.return_value = {
            "items": [{"id": {"videoId": "new"}}, {"id": {"videoId": "old"}}]
        }
        self.youtube.videos.return_value.list.return_value.execute.return_value = {
            "items": [_video_item("old", "1000", "50", "10"), _video_item("new", "200")]
        }

        with redirect_stdout(io.StringIO()):
            videos = self.fetcher.fetch_recent_videos("UC_TEST", 2)

        self.assertEqual([video.id for video in videos], ["new", "old"])
        self.assertEqual(videos[0].like_count, 0)
        self.assertEqual(videos[0].engagement_rate, "0.00%")
        self.assertEqual(videos[1].engagement_rate, "6.00%")
        self.assertEqual(videos[1].thumbnail_url, "https://example.com/old.jpg")
        self.assertEqual(videos[1].duration, "PT5M")
        self.assertEqual(self.fetcher.quota_used, 101)
        self.youtube.search.return_value.list.assert_called_once_with(
            part="snippet", channelId="UC_TEST", order="date", type="video", maxResults=2
        )

    def test_no_videos(self):
        self.youtube.search.return_value.list.return_value.execute.return_value = {"items": []}
        with redirect_stdout(io.StringIO()):
            self.assertEqual(self.fetcher.fetch_recent_videos("UC_TEST"), [])
        self.youtube.videos.assert_not_called()

    def test_save_data(self):
        self.youtube.channels.return_value.list.return_value.execute.return_value = {"items": [_channel_item()]}
        channel = self.fetcher.fetch_channel_info("UC_TEST")

        with tempfile.TemporaryDirectory() as tmp:
            output_file = self.fetcher.save_data(channel, [], Path(tmp) / "UC_TEST")
            data = json.loads(Path(output_file).read_text(encoding="utf-8"))

        self.assertEqual(data["channel"]["id"], "UC_TEST")
        self.assertEqual(data["videos"], [])
        self.assertEqual(data["metadata"]["videoCount"], 0)
        self.assertEqual(data["metadata"]["quotaUsed"], 1)


if __name__ == "__main__":
    unittest.main()
