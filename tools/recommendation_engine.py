"""Prioritized action plans derived from insights and keyword findings."""

from __future__ import annotations

from typing import List, Optional, Sequence

from tools.benchmarks import KEYWORD_THRESHOLDS
from tools.channel_models import (
    AnalysisInsight,
    InsightCategory,
    InsightStatus,
    KeywordAnalysis,
    KeywordPerformance,
    PerformanceMetrics,
    Priority,
    Recommendation,
)
from tools.window_stats import round_half_up

PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class RecommendationEngine:
    def __init__(
        self,
        insights: Sequence[AnalysisInsight],
        metrics: Optional[PerformanceMetrics],
        keyword_analysis: KeywordAnalysis,
    ):
        # metrics reach the rules only through the trend insight
        self.insights = list(insights)
        self.metrics = metrics
        self.keyword_analysis = keyword_analysis

    def _has_insight(self, category: InsightCategory, *statuses: InsightStatus) -> bool:
        return any(
            insight.category == category and insight.status in statuses
            for insight in self.insights
        )

    def generate(self) -> List[Recommendation]:
        recommendations = []

        if self._has_insight(InsightCategory.ENGAGEMENT, InsightStatus.CRITICAL):
            recommendations.append(Recommendation(
                id="rec-engagement",
                priority=Priority.HIGH,
                category="エンゲージメント改善",
                title="視聴者との対話を強化",
                description="エンゲージメント率を改善するための包括的な戦略が必要です。",
                action_items=[
                    "動画内で視聴者に質問を投げかける",
                    "コメント欄で積極的に返信する",
                    "コミュニティ投稿で視聴者アンケートを実施",
                    "ライブ配信でリアルタイム交流を行う",
                ],
                expected_impact="エンゲージメント率20-50%向上",
            ))

        if self._has_insight(InsightCategory.FREQUENCY, InsightStatus.CRITICAL, InsightStatus.WARNING):
            recommendations.append(Recommendation(
                id="rec-frequency",
                priority=Priority.HIGH,
                category="投稿頻度改善",
                title="コンテンツカレンダーの作成",
                description="定期的な投稿でチャンネルの成長を加速させましょう。",
                action_items=[
                    "月間の投稿スケジュールを事前に計画",
                    "動画をバッチ制作して効率化",
                    "ショート動画で投稿頻度を補完",
                    "撮影・編集のテンプレート化",
                ],
                expected_impact="視聴者定着率15-30%向上",
            ))

        high_keywords = [
            keyword for keyword in self.keyword_analysis.top_keywords
            if keyword.performance == KeywordPerformance.HIGH
        ]
        if high_keywords:
            quoted = "」「".join(keyword.word for keyword in high_keywords[:3])
            recommendations.append(Recommendation(
                id="rec-keywords",
                priority=Priority.MEDIUM,
                category="コンテンツ戦略",
                title="高パフォーマンスキーワードの活用",
                description=f"「{quoted}」などのキーワードが高い再生数を獲得しています。",
                action_items=[
                    "これらのキーワードを含む新しい動画を企画",
                    "関連するシリーズコンテンツを作成",
                    "タイトルと説明文にキーワードを自然に含める",
                ],
                expected_impact="再生数10-25%向上の可能性",
            ))

        effective_patterns = [
            pattern for pattern in self.keyword_analysis.title_patterns
            if pattern.effectiveness > KEYWORD_THRESHOLDS['effective_pattern']
        ]
        if effective_patterns:
            recommendations.append(Recommendation(
                id="rec-titles",
                priority=Priority.MEDIUM,
                category="タイトル最適化",
                title="効果的なタイトルパターンの活用",
                description="分析結果から効果的なタイトルパターンが判明しています。",
                action_items=[
                    f"{pattern.pattern}（効果: {round_half_up(pattern.effectiveness)}%）を活用"
                    for pattern in effective_patterns
                ],
                expected_impact="クリック率5-15%向上",
            ))

        recommendations.append(Recommendation(
            id="rec-thumbnail",
            priority=Priority.MEDIUM,
            category="サムネイル改善",
            title="サムネイルのA/Bテスト",
            description="サムネイルはクリック率に最も影響する要素の一つです。",
            action_items=[
                "3-5語以内の大きく読みやすいテキスト",
                "人の顔や感情を表現する画像の使用",
                "ブランドカラーの一貫した使用",
                "複数のサムネイルを作成してテスト",
            ],
            expected_impact="クリック率10-30%向上",
        ))

        recommendations.sort(key=lambda rec: PRIORITY_ORDER[rec.priority])
        return recommendations
