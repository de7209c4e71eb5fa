#!/usr/bin/env python3
"""
YouTube Channel Data Fetcher
Fetches channel metadata and its most recent videos from YouTube Data API v3

Usage:
    python3 -m tools.youtube_fetch_channel_data "@channelname"
"""

import json
import os
import re
import sys
import time
from pathlib import Path

from dotenv import load_dotenv
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from tools.channel_models import ChannelInfo, VideoInfo, engagement_rate
from tools.errors import (
    ChannelNotFoundError,
    ChannelUnavailableError,
    InvalidChannelInputError,
    YouTubeAPIError,
    YouTubeQuotaError,
)

# Load environment variables
load_dotenv()

HANDLE_PATTERN = re.compile(r'^@([\w.-]+)$')
CHANNEL_ID_PATTERN = re.compile(r'^UC[\w-]{10,}$')


def _to_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _thumbnail_url(thumbnails, *sizes):
    for size in sizes:
        url = (thumbnails.get(size) or {}).get('url')
        if url:
            return url
    return ''


def _raise_for_http_error(error, subject):
    status = error.resp.status
    if status == 403:
        raise YouTubeQuotaError("YouTube API quota exceeded. Wait until midnight PT or use a different API key.")
    if status == 404:
        raise ChannelNotFoundError(f"Channel not found: {subject}")
    raise YouTubeAPIError(f"YouTube API error: {error}")


class YouTubeChannelFetcher:
    def __init__(self, api_key, youtube=None):
        """Initialize YouTube API client"""
        self.youtube = youtube or build('youtube', 'v3', developerKey=api_key)
        self.quota_used = 0

    def extract_channel_id(self, channel_input):
        """
        Resolve a channel ID from a handle, URL or raw ID

        Supported formats:
        - @username
        - https://youtube.com/@username
        - https://youtube.com/channel/UCxxxxxxxx
        - https://youtube.com/c/channelname
        - https://youtube.com/user/username
        - UCxxxxxxxx
        """
        value = (channel_input or '').strip().rstrip('/')
        if not value:
            raise InvalidChannelInputError("Channel ID or handle is required")

        match = HANDLE_PATTERN.match(value)
        if match:
            return self.get_channel_id_from_username(match.group(1))

        if 'youtube.com' in value:
            match = re.search(r'youtube\.com/channel/(UC[\w-]+)', value)
            if match:
                return match.group(1)

            match = re.search(r'youtube\.com/@([\w.-]+)', value)
            if match:
                return self.get_channel_id_from_username(match.group(1))

            match = re.search(r'youtube\.com/c/([\w-]+)', value)
            if match:
                return self.get_channel_id_from_custom_url(match.group(1))

            match = re.search(r'youtube\.com/user/([\w-]+)', value)
            if match:
                return self.get_channel_id_from_username(match.group(1))

            raise InvalidChannelInputError(
                f"Invalid YouTube channel URL format: {value}\n"
                "Supported formats:\n"
                "  - https://youtube.com/@username\n"
                "  - https://youtube.com/channel/UCxxxxxxxx\n"
                "  - https://youtube.com/c/channelname\n"
                "  - https://youtube.com/user/username"
            )

        if ' ' in value:
            raise InvalidChannelInputError(f"Invalid channel ID or handle: {value}")

        # Anything else is treated as a raw channel ID
        return value

    def get_channel_id_from_username(self, username):
        """Get channel ID from @handle, falling back to the legacy username lookup"""
        username = username.lstrip('@')
        try:
            response = self.youtube.channels().list(part='id', forHandle=username).execute()
            self.quota_used += 1
            if response.get('items'):
                return response['items'][0]['id']

            response = self.youtube.channels().list(part='id', forUsername=username).execute()
            self.quota_used += 1
            if response.get('items'):
                return response['items'][0]['id']

        except HttpError as e:
            _raise_for_http_error(e, f"@{username}")

        raise ChannelNotFoundError(f"Channel not found: @{username}")

    def get_channel_id_from_custom_url(self, custom_url):
        """Get channel ID from custom URL (/c/channelname)"""
        try:
            response = self.youtube.search().list(
                part='snippet',
                q=custom_url,
                type='channel',
                maxResults=1
            ).execute()
            self.quota_used += 100  # Search is expensive
        except HttpError as e:
            _raise_for_http_error(e, custom_url)

        if response.get('items'):
            return response['items'][0]['snippet']['channelId']
        raise ChannelNotFoundError(f"Channel not found with custom URL: {custom_url}")

    def fetch_channel_info(self, channel_id):
        """Fetch channel metadata"""
        try:
            response = self.youtube.channels().list(
                part='snippet,statistics,brandingSettings',
                id=channel_id
            ).execute()
            self.quota_used += 1
        except HttpError as e:
            _raise_for_http_error(e, channel_id)

        if not response.get('items'):
            raise ChannelNotFoundError(f"Channel not found: {channel_id}")

        channel = response['items'][0]
        snippet = channel['snippet']
        statistics = channel.get('statistics', {})
        branding = channel.get('brandingSettings', {})

        return ChannelInfo(
            id=channel['id'],
            title=snippet['title'],
            description=snippet.get('description', ''),
            custom_url=snippet.get('customUrl', ''),
            thumbnail_url=_thumbnail_url(snippet.get('thumbnails', {}), 'high', 'default'),
            banner_url=(branding.get('image') or {}).get('bannerExternalUrl'),
            subscriber_count=_to_int(statistics.get('subscriberCount')),
            view_count=_to_int(statistics.get('viewCount')),
            video_count=_to_int(statistics.get('videoCount')),
            published_at=snippet['publishedAt'],
            country=snippet.get('country'),
        )

    def fetch_recent_videos(self, channel_id, max_results=10):
        """
        Fetch the channel's most recent uploads, newest first.

        Strategy:
        1. Search the channel's videos ordered by date
        2. Get full video details including statistics
        3. Keep the search order (videos.list does not guarantee it)
        """
        print("📹 Fetching recent videos...")

        try:
            search_response = self.youtube.search().list(
                part='snippet',
                channelId=channel_id,
                order='date',
                type='video',
                maxResults=max_results
            ).execute()
            self.quota_used += 100

            video_ids = [item['id']['videoId'] for item in search_response.get('items', [])]
            if not video_ids:
                print("   No videos found")
                return []

            response = self.youtube.videos().list(
                part='snippet,statistics,contentDetails',
                id=','.join(video_ids)
            ).execute()
            self.quota_used += 1

        except HttpError as e:
            _raise_for_http_error(e, channel_id)

        videos_by_id = {}
        for video in response.get('items', []):
            snippet = video['snippet']
            statistics = video.get('statistics', {})
            views = _to_int(statistics.get('viewCount'))
            likes = _to_int(statistics.get('likeCount'))
            comments = _to_int(statistics.get('commentCount'))

            videos_by_id[video['id']] = VideoInfo(
                id=video['id'],
                title=snippet['title'],
                description=snippet.get('description', ''),
                thumbnail_url=_thumbnail_url(snippet.get('thumbnails', {}), 'high', 'medium', 'default'),
                published_at=snippet['publishedAt'],
                view_count=views,
                like_count=likes,
                comment_count=comments,
                duration=video.get('contentDetails', {}).get('duration', ''),
                engagement_rate=engagement_rate(views, likes, comments),
                tags=snippet.get('tags', []),
            )

        videos = [videos_by_id[video_id] for video_id in video_ids if video_id in videos_by_id]
        print(f"   Found {len(videos)} videos")
        return videos

    def save_data(self, channel_info, videos, output_dir):
        """Save fetched data to JSON file"""
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        data = {
            'channel': channel_info.to_dict(),
            'videos': [video.to_dict() for video in videos],
            'metadata': {
                'fetchedAt': time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime()),
                'videoCount': len(videos),
                'quotaUsed': self.quota_used
            }
        }

        output_file = output_path / 'raw_data.json'
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return str(output_file)


def main():
    """Main execution function"""
    if len(sys.argv) != 2:
        print("❌ Error: Missing channel handle or URL")
        print("\nUsage:")
        print("  python3 -m tools.youtube_fetch_channel_data \"CHANNEL\"")
        print("\nExample:")
        print("  python3 -m tools.youtube_fetch_channel_data \"@mkbhd\"")
        sys.exit(1)

    channel_input = sys.argv[1]

    api_key = os.getenv('YOUTUBE_API_KEY')
    max_videos = int(os.getenv('MAX_RECENT_VIDEOS', 10))
    output_folder = os.getenv('OUTPUT_FOLDER', '.tmp/channel_analyses')

    if not api_key:
        print("❌ Error: YOUTUBE_API_KEY not found in .env file")
        sys.exit(1)

    try:
        print("🚀 YouTube Channel Data Fetcher")
        print("=" * 50)
        print(f"Channel: {channel_input}")
        print(f"Recent videos: {max_videos}")
        print()

        fetcher = YouTubeChannelFetcher(api_key)

        print("🔍 Resolving channel ID...")
        channel_id = fetcher.extract_channel_id(channel_input)
        print(f"   Channel ID: {channel_id}")
        print()

        print("📊 Fetching channel information...")
        channel_info = fetcher.fetch_channel_info(channel_id)
        print(f"   Channel: {channel_info.title}")
        print(f"   Subscribers: {channel_info.subscriber_count:,}")
        print(f"   Total Videos: {channel_info.video_count:,}")
        print(f"   Total Views: {channel_info.view_count:,}")
        print()

        videos = fetcher.fetch_recent_videos(channel_id, max_videos)
        print()

        output_file = fetcher.save_data(channel_info, videos, f"{output_folder}/{channel_id}")

        print("=" * 50)
        print("✅ SUCCESS!")
        print(f"📁 Data saved to: {output_file}")
        print(f"📊 Videos fetched: {len(videos)}")
        print(f"💰 API quota used: ~{fetcher.quota_used} units")
        print()
        print("Next step:")
        print(f"  python3 -m tools.youtube_analyze_channel {output_file}")

    except ChannelUnavailableError as e:
        print(f"❌ Channel Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
