"""
AI Analyzer
Forwards thumbnail, title, description, theme and SWOT analysis requests to an
OpenAI chat model and returns the JSON it answers with.

Each analysis type has a fixed response shape (see the TypedDicts below). The
shape is requested in the prompt but not validated; only a reply without
parsable JSON is treated as a failure.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional, TypedDict

import openai

from tools.errors import AIAnalysisError, AIRequestError


JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


class ScoredFeedback(TypedDict):
    score: int
    feedback: str
    suggestions: List[str]


class ThumbnailAnalysis(TypedDict):
    overallScore: int
    textVisibility: ScoredFeedback
    composition: ScoredFeedback
    colorScheme: Dict[str, Any]
    emotionalImpact: Dict[str, Any]
    clickabilityFactors: List[str]
    improvements: List[str]


class TitleSEOAnalysis(TypedDict):
    overallScore: int
    keywordOptimization: Dict[str, Any]
    clickTriggers: Dict[str, Any]
    lengthAnalysis: Dict[str, Any]
    emotionalAppeal: Dict[str, Any]
    improvements: List[str]


class DescriptionAnalysis(TypedDict):
    overallScore: int
    seoOptimization: Dict[str, Any]
    ctaAnalysis: Dict[str, Any]
    structure: Dict[str, Any]
    improvedDescription: str


class VideoThemeSuggestion(TypedDict):
    id: str
    title: str
    description: str
    expectedPerformance: str
    reasoning: str
    keyPoints: List[str]
    suggestedTags: List[str]
    trendRelevance: int


class ChannelPositioning(TypedDict):
    strengths: List[str]
    weaknesses: List[str]
    opportunities: List[str]
    threats: List[str]


THUMBNAIL_PROMPT = """あなたはYouTubeサムネイルの専門アナリストです。以下のサムネイル画像を分析し、以下の観点から評価してください。

各項目を0-100のスコアで評価し、日本語で詳細なフィードバックを提供してください。

1. テキストの視認性（読みやすさ、フォントサイズ、コントラスト）
2. 構図（視線誘導、焦点、バランス）
3. 色彩（カラースキーム、コントラスト、目を引く色使い）
4. 感情的インパクト（表情、感情を誘発する要素）
5. クリック誘発要因（好奇心、緊急性、価値提案）

JSON形式で以下の構造で回答してください：
{
  "overallScore": 数値,
  "textVisibility": {"score": 数値, "feedback": "フィードバック", "suggestions": ["改善案1", "改善案2"]},
  "composition": {"score": 数値, "feedback": "フィードバック", "suggestions": ["改善案1", "改善案2"]},
  "colorScheme": {"score": 数値, "feedback": "フィードバック", "dominantColors": ["色1", "色2"], "suggestions": ["改善案1", "改善案2"]},
  "emotionalImpact": {"score": 数値, "feedback": "フィードバック", "detectedEmotions": ["感情1", "感情2"]},
  "clickabilityFactors": ["要因1", "要因2"],
  "improvements": ["総合的な改善案1", "改善案2", "改善案3"]
}"""

TITLE_PROMPT = """あなたはYouTube SEOの専門家です。以下の動画タイトルを分析してください。

タイトル: "{title}"
チャンネルジャンル: {channel_niche}

以下の観点から0-100のスコアで評価し、日本語で詳細なフィードバックを提供してください：

1. キーワード最適化（検索されやすいキーワードの使用）
2. クリックトリガー（好奇心、数字、感情的な言葉）
3. 長さの分析（最適な文字数か）
4. 感情的アピール（視聴者の感情に訴えかけるか）

JSON形式で回答してください：
{{
  "overallScore": 数値,
  "keywordOptimization": {{"score": 数値, "detectedKeywords": ["キーワード1"], "missingKeywords": ["推奨キーワード1"], "feedback": "フィードバック"}},
  "clickTriggers": {{"score": 数値, "detected": ["検出されたトリガー1"], "suggestions": ["追加すべきトリガー1"]}},
  "lengthAnalysis": {{"score": 数値, "currentLength": 文字数, "optimalRange": "40-60文字", "feedback": "フィードバック"}},
  "emotionalAppeal": {{"score": 数値, "feedback": "フィードバック"}},
  "improvements": ["改善されたタイトル案1", "タイトル案2", "タイトル案3"]
}}"""

DESCRIPTION_PROMPT = """あなたはYouTube動画の説明文最適化の専門家です。以下の説明文を分析してください。

動画タイトル: "{title}"
説明文: \"\"\"
{description}
\"\"\"

以下の観点から0-100のスコアで評価し、日本語でフィードバックを提供してください：

1. SEO最適化（キーワード、検索性）
2. CTA分析（行動喚起、登録促進など）
3. 構造（タイムスタンプ、リンク、ハッシュタグ）

そして、改善された説明文の例を提供してください。

JSON形式で回答してください：
{{
  "overallScore": 数値,
  "seoOptimization": {{"score": 数値, "keywordsFound": ["キーワード1"], "suggestions": ["SEO改善案1"]}},
  "ctaAnalysis": {{"score": 数値, "detectedCTAs": ["検出されたCTA1"], "missingSuggestions": ["追加すべきCTA1"]}},
  "structure": {{"score": 数値, "hasTimestamps": boolean, "hasLinks": boolean, "hasHashtags": boolean, "suggestions": ["構造改善案1"]}},
  "improvedDescription": "改善された説明文の例（500文字程度）"
}}"""

THEMES_PROMPT = """あなたはYouTubeコンテンツ戦略の専門家です。以下のチャンネル情報に基づいて、次に作成すべき動画のテーマを5つ提案してください。

チャンネル名: {channel_title}
最近の動画タイトル:
{recent_titles}

よく使われるキーワード: {top_keywords}
平均再生数: {avg_views:,}回

以下の観点を考慮してください：
- チャンネルの方向性との一貫性
- 視聴者のニーズとトレンド
- エンゲージメントを高める要素
- 検索されやすいテーマ

JSON形式で5つの提案を返してください：
[
  {{
    "id": "1",
    "title": "提案するタイトル",
    "description": "この動画の概要と狙い",
    "expectedPerformance": "high" | "medium" | "low",
    "reasoning": "なぜこのテーマを提案するか",
    "keyPoints": ["動画で扱うべきポイント1", "ポイント2", "ポイント3"],
    "suggestedTags": ["タグ1", "タグ2", "タグ3"],
    "trendRelevance": 0-100の数値
  }}
]"""

SWOT_PROMPT = """あなたはYouTubeマーケティングの専門家です。以下のチャンネル情報に基づいて、SWOT分析を行ってください。

チャンネル名: {channel_title}
チャンネル説明: {channel_description}
最近の動画タイトル:
{recent_titles}

一般的なYouTube市場のトレンドと比較して、このチャンネルのSWOT分析を行ってください。

JSON形式で回答してください：
{{
  "strengths": ["強み1", "強み2", "強み3"],
  "weaknesses": ["弱み1", "弱み2", "弱み3"],
  "opportunities": ["機会1", "機会2", "機会3"],
  "threats": ["脅威1", "脅威2", "脅威3"]
}}"""


def _numbered(titles: List[str], limit: int = 5) -> str:
    return "\n".join(f"{index}. {title}" for index, title in enumerate(titles[:limit], start=1))


def extract_json(content: str, pattern: re.Pattern, label: str):
    """Parse the first JSON object/array embedded in a model reply."""
    match = pattern.search(content or "")
    if not match:
        raise AIAnalysisError(f"Failed to parse {label}")
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise AIAnalysisError(f"Failed to parse {label}") from exc


class AIAnalyzer:
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        vision_model: str = "gpt-4o",
        client: Optional[Any] = None,
    ):
        self.model = model
        self.vision_model = vision_model
        self.client = client or openai.OpenAI(api_key=api_key)

    def _chat(self, messages: List[Dict[str, Any]], model: Optional[str] = None) -> str:
        try:
            response = self.client.chat.completions.create(
                model=model or self.model,
                messages=messages,
                temperature=0.7,
                max_tokens=2000,
            )
        except openai.OpenAIError as exc:
            raise AIAnalysisError(str(exc) or "OpenAI API error") from exc
        return response.choices[0].message.content or ""

    def analyze_thumbnail(self, thumbnail_url: str) -> ThumbnailAnalysis:
        content = self._chat(
            [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": THUMBNAIL_PROMPT},
                        {"type": "image_url", "image_url": {"url": thumbnail_url}},
                    ],
                }
            ],
            model=self.vision_model,
        )
        return extract_json(content, JSON_OBJECT_PATTERN, "thumbnail analysis")

    def analyze_title(self, title: str, channel_niche: str = "一般") -> TitleSEOAnalysis:
        prompt = TITLE_PROMPT.format(title=title, channel_niche=channel_niche)
        content = self._chat([{"role": "user", "content": prompt}])
        return extract_json(content, JSON_OBJECT_PATTERN, "title SEO analysis")

    def analyze_description(self, description: str, title: str) -> DescriptionAnalysis:
        prompt = DESCRIPTION_PROMPT.format(title=title, description=description[:2000])
        content = self._chat([{"role": "user", "content": prompt}])
        return extract_json(content, JSON_OBJECT_PATTERN, "description analysis")

    def suggest_video_themes(
        self,
        channel_title: str,
        recent_titles: List[str],
        top_keywords: List[str],
        avg_views: int,
    ) -> List[VideoThemeSuggestion]:
        prompt = THEMES_PROMPT.format(
            channel_title=channel_title,
            recent_titles=_numbered(recent_titles),
            top_keywords=", ".join(top_keywords),
            avg_views=int(avg_views),
        )
        content = self._chat([{"role": "user", "content": prompt}])
        return extract_json(content, JSON_ARRAY_PATTERN, "video theme suggestions")

    def analyze_swot(
        self,
        channel_title: str,
        channel_description: str,
        recent_titles: List[str],
    ) -> ChannelPositioning:
        prompt = SWOT_PROMPT.format(
            channel_title=channel_title,
            channel_description=channel_description[:500],
            recent_titles=_numbered(recent_titles),
        )
        content = self._chat([{"role": "user", "content": prompt}])
        return extract_json(content, JSON_OBJECT_PATTERN, "SWOT analysis")

    def run(self, request: Dict[str, Any]):
        """Dispatch an API request body to the matching analysis."""
        analysis_type = request.get("type")

        if analysis_type == "thumbnail":
            if not request.get("thumbnailUrl"):
                raise AIRequestError("サムネイルURLが必要です")
            return self.analyze_thumbnail(request["thumbnailUrl"])

        if analysis_type == "title":
            if not request.get("title"):
                raise AIRequestError("タイトルが必要です")
            return self.analyze_title(request["title"], request.get("channelNiche") or "一般")

        if analysis_type == "description":
            if not request.get("description") or not request.get("title"):
                raise AIRequestError("説明文とタイトルが必要です")
            return self.analyze_description(request["description"], request["title"])

        if analysis_type == "themes":
            if not request.get("channelTitle") or not request.get("recentTitles"):
                raise AIRequestError("チャンネル情報が必要です")
            return self.suggest_video_themes(
                request["channelTitle"],
                request["recentTitles"],
                request.get("topKeywords") or [],
                request.get("avgViews") or 0,
            )

        if analysis_type == "swot":
            if not request.get("channelTitle"):
                raise AIRequestError("チャンネル情報が必要です")
            return self.analyze_swot(
                request["channelTitle"],
                request.get("channelDescription") or "",
                request.get("recentTitles") or [],
            )

        raise AIRequestError("無効な分析タイプです")
