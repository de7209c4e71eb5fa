"""JSON API routes for channel analysis, competitor comparison and AI analysis."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from tools.ai_analyzer import AIAnalyzer
from tools.competitor_comparison import build_competitor_data, compare_channels
from tools.errors import AIAnalysisError, AIRequestError, ChannelUnavailableError
from tools.youtube_fetch_channel_data import YouTubeChannelFetcher
from web.services.analysis_runner import normalize_channel_input, run_channel_analysis

api_bp = Blueprint("api", __name__)

MISSING_CHANNEL_MESSAGE = "チャンネルIDまたはハンドル名が必要です"


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _json_body():
    """Request body as a dict, or None when it is not a JSON object."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        return None
    return body


def _text_field(body: dict, name: str) -> str:
    return str(body.get(name) or "").strip()


def _analyze(channel_input: str, fetcher=None):
    return run_channel_analysis(
        channel_input,
        current_app.config["YOUTUBE_API_KEY"],
        max_videos=current_app.config["MAX_RECENT_VIDEOS"],
        logger=current_app.logger.info,
        fetcher=fetcher,
    )


@api_bp.get("/healthz")
def healthz():
    return jsonify({"status": "ok"})


@api_bp.post("/api/youtube/channel")
def analyze_channel():
    if not current_app.config.get("YOUTUBE_API_KEY"):
        return _error("サーバーにYouTube APIキーが設定されていません", 500)

    body = _json_body()
    if body is None:
        return _error(MISSING_CHANNEL_MESSAGE, 400)
    channel_input = _text_field(body, "channelInput")
    if not channel_input:
        return _error(MISSING_CHANNEL_MESSAGE, 400)

    try:
        analysis = _analyze(channel_input)
    except ChannelUnavailableError as exc:
        return _error(str(exc), exc.http_status)
    except Exception:  # pylint: disable=broad-except
        current_app.logger.exception("Channel analysis failed for %s", channel_input)
        return _error("APIリクエスト中にエラーが発生しました", 500)

    return jsonify(analysis.to_dict())


@api_bp.post("/api/youtube/compare")
def compare_channel():
    api_key = current_app.config.get("YOUTUBE_API_KEY")
    if not api_key:
        return _error("サーバーにYouTube APIキーが設定されていません", 500)

    body = _json_body()
    if body is None:
        return _error(MISSING_CHANNEL_MESSAGE, 400)
    channel_input = _text_field(body, "channelInput")
    competitor_input = _text_field(body, "competitorInput")
    if not channel_input or not competitor_input:
        return _error(MISSING_CHANNEL_MESSAGE, 400)

    try:
        # Ids resolve before any channel or video fetch
        fetcher = YouTubeChannelFetcher(api_key)
        channel_id = fetcher.extract_channel_id(normalize_channel_input(channel_input))
        competitor_id = fetcher.extract_channel_id(normalize_channel_input(competitor_input))
        if channel_id == competitor_id:
            return _error("Competitor must be a different channel", 400)

        main_analysis = _analyze(channel_id, fetcher)
        competitor_analysis = _analyze(competitor_id, fetcher)
        competitor = build_competitor_data(main_analysis, competitor_analysis)
    except ChannelUnavailableError as exc:
        return _error(str(exc), exc.http_status)
    except ValueError as exc:
        return _error(str(exc), 400)
    except Exception:  # pylint: disable=broad-except
        current_app.logger.exception("Competitor comparison failed for %s vs %s", channel_input, competitor_input)
        return _error("APIリクエスト中にエラーが発生しました", 500)

    return jsonify({
        "channel": main_analysis.to_dict(),
        "competitor": competitor,
        "comparison": compare_channels(main_analysis.channel, competitor_analysis.channel),
    })


@api_bp.post("/api/ai/analyze")
def ai_analyze():
    api_key = current_app.config.get("OPENAI_API_KEY")
    if not api_key:
        return _error("サーバーにOpenAI APIキーが設定されていません", 500)

    body = _json_body()
    if body is None:
        return _error("無効な分析タイプです", 400)

    analyzer = AIAnalyzer(
        api_key,
        model=current_app.config["OPENAI_MODEL"],
        vision_model=current_app.config["OPENAI_VISION_MODEL"],
    )

    try:
        result = analyzer.run(body)
    except AIRequestError as exc:
        return _error(str(exc), 400)
    except AIAnalysisError as exc:
        current_app.logger.warning("AI analysis (%s) failed: %s", body.get("type"), exc)
        return _error(str(exc), 500)
    except Exception:  # pylint: disable=broad-except
        current_app.logger.exception("AI analysis (%s) failed", body.get("type"))
        return _error("AI分析中にエラーが発生しました", 500)

    return jsonify({"success": True, "data": result})
