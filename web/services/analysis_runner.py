"""Analysis runner wrapper around the deterministic tool modules."""

from __future__ import annotations

import io
from contextlib import redirect_stdout
from typing import Callable, Dict, Optional

from tools.channel_models import ChannelAnalysis, Priority
from tools.errors import InvalidChannelInputError
from tools.youtube_analyze_channel import ChannelAnalyzer
from tools.youtube_fetch_channel_data import YouTubeChannelFetcher


def normalize_channel_input(channel_input: str) -> str:
    normalized = (channel_input or "").strip()
    if normalized.startswith("http://"):
        normalized = "https://" + normalized[len("http://") :]
    return normalized.rstrip("/")


def _emit(logger: Optional[Callable[[str], None]], message: str) -> None:
    if logger:
        logger(message)


def _capture_step(logger: Optional[Callable[[str], None]], step_name: str, fn) -> None:
    _emit(logger, f"\n[{step_name}] starting...")
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        fn()
    output = buffer.getvalue().strip()
    if output:
        _emit(logger, output)
    _emit(logger, f"[{step_name}] complete")


def extract_summary_metrics(analysis: ChannelAnalysis) -> Dict[str, int]:
    def count(priority: Priority) -> int:
        return sum(1 for rec in analysis.recommendations if rec.priority == priority)

    return {
        "summary_health_score": analysis.health_score,
        "summary_high_priority": count(Priority.HIGH),
        "summary_medium_priority": count(Priority.MEDIUM),
        "summary_low_priority": count(Priority.LOW),
        "videos_analyzed": len(analysis.recent_videos),
    }


def run_channel_analysis(
    channel_input: str,
    api_key: str,
    max_videos: int = 10,
    logger: Optional[Callable[[str], None]] = None,
    fetcher: Optional[YouTubeChannelFetcher] = None,
) -> ChannelAnalysis:
    """Fetch one channel snapshot and run the full analysis over it."""
    if not api_key:
        raise ValueError("YOUTUBE_API_KEY is missing")

    normalized = normalize_channel_input(channel_input)
    if not normalized:
        raise InvalidChannelInputError("Channel ID or handle is required")

    fetcher = fetcher or YouTubeChannelFetcher(api_key)
    _emit(logger, f"Running analysis for: {normalized}")

    holder: Dict = {}

    def do_fetch():
        channel_id = fetcher.extract_channel_id(normalized)
        holder["channel"] = fetcher.fetch_channel_info(channel_id)
        holder["videos"] = fetcher.fetch_recent_videos(channel_id, max_videos)

    _capture_step(logger, "Fetch Channel Data", do_fetch)

    def do_analysis():
        holder["analysis"] = ChannelAnalyzer(holder["channel"], holder["videos"]).generate_analysis()

    _capture_step(logger, "Analyze Channel", do_analysis)

    analysis = holder["analysis"]
    summary = extract_summary_metrics(analysis)
    _emit(
        logger,
        f"Health score: {summary['summary_health_score']}/100, "
        f"high-priority recommendations: {summary['summary_high_priority']}",
    )
    _emit(logger, f"Quota used: ~{fetcher.quota_used} units")
    return analysis
