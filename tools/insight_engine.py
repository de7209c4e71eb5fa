"""
Benchmark-driven insights about one channel snapshot.

Each check compares the recent video window against the channel's size tier
(see ``tools.benchmarks.CHANNEL_SIZE_BENCHMARKS``) and emits at most one
categorized, severity-tagged insight. Checks run in a fixed order:

1. Engagement level
2. Engagement trend
3. Numerals in titles
4. Brackets in titles
5. Upload frequency
6. Description length (SEO)
7. Thumbnail advisory
8. Subscribers gained per video
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from tools.benchmarks import INSIGHT_THRESHOLDS, get_channel_size, tier_benchmark
from tools.channel_models import (
    AnalysisInsight,
    ChannelInfo,
    EngagementTrend,
    InsightCategory,
    InsightMetric,
    InsightStatus,
    PerformanceMetrics,
    VideoInfo,
)
from tools.keyword_analyzer import BRACKET_PATTERN, DIGIT_PATTERN
from tools.window_stats import average_days_between, average_engagement, mean, round_half_up


class InsightEngine:
    def __init__(self, channel: ChannelInfo, videos: Sequence[VideoInfo], metrics: PerformanceMetrics):
        self.channel = channel
        self.videos = list(videos)
        self.metrics = metrics
        self.channel_size = get_channel_size(channel.subscriber_count)
        self.benchmark = tier_benchmark(channel.subscriber_count)

    def generate(self) -> List[AnalysisInsight]:
        checks = [
            self.engagement_insight,
            self.engagement_trend_insight,
            self.title_numbers_insight,
            self.title_brackets_insight,
            self.upload_frequency_insight,
            self.description_insight,
            self.thumbnail_insight,
            self.growth_insight,
        ]
        insights = []
        for check in checks:
            insight = check()
            if insight is not None:
                insights.append(insight)
        return insights

    def _title_share(self, pattern) -> float:
        if not self.videos:
            return 0.0
        matches = sum(1 for video in self.videos if pattern.search(video.title))
        return matches / len(self.videos)

    def engagement_insight(self) -> AnalysisInsight:
        avg_engagement = average_engagement(self.videos)
        tier_engagement = self.benchmark['avgEngagement']
        ratio = avg_engagement / tier_engagement
        metric = InsightMetric(current=avg_engagement, benchmark=tier_engagement, unit="%")

        if ratio >= INSIGHT_THRESHOLDS['engagement_good_ratio']:
            return AnalysisInsight(
                id="engagement-1",
                category=InsightCategory.ENGAGEMENT,
                status=InsightStatus.GOOD,
                title="優秀なエンゲージメント率",
                description=(
                    f"平均エンゲージメント率{avg_engagement:.2f}%は、同規模チャンネル"
                    f"（{self.channel_size}）の平均{tier_engagement:g}%を上回っています。"
                ),
                recommendation="この調子を維持してください！視聴者との良好な関係が築けています。",
                metric=metric,
            )
        if ratio >= INSIGHT_THRESHOLDS['engagement_warning_ratio']:
            return AnalysisInsight(
                id="engagement-1",
                category=InsightCategory.ENGAGEMENT,
                status=InsightStatus.WARNING,
                title="エンゲージメント率は標準的",
                description=(
                    f"平均エンゲージメント率{avg_engagement:.2f}%は、"
                    f"同規模チャンネルの平均{tier_engagement:g}%とほぼ同等です。"
                ),
                recommendation="コメント返信やコミュニティ投稿で視聴者との対話を増やしましょう。",
                metric=metric,
            )
        return AnalysisInsight(
            id="engagement-1",
            category=InsightCategory.ENGAGEMENT,
            status=InsightStatus.CRITICAL,
            title="エンゲージメント率が低め",
            description=(
                f"平均エンゲージメント率{avg_engagement:.2f}%は、"
                f"同規模チャンネルの平均{tier_engagement:g}%を下回っています。"
            ),
            recommendation="動画内でCTA（いいね・コメントの促し）を明確にし、視聴者参加型のコンテンツを検討してください。",
            metric=metric,
        )

    def engagement_trend_insight(self) -> Optional[AnalysisInsight]:
        if self.metrics.engagement_trend == EngagementTrend.UP:
            return AnalysisInsight(
                id="engagement-trend",
                category=InsightCategory.ENGAGEMENT,
                status=InsightStatus.GOOD,
                title="エンゲージメントが上昇傾向",
                description="直近の動画は過去の動画と比べてエンゲージメント率が向上しています。",
                recommendation="現在の戦略が効果的です。成功要因を分析して継続しましょう。",
            )
        if self.metrics.engagement_trend == EngagementTrend.DOWN:
            return AnalysisInsight(
                id="engagement-trend",
                category=InsightCategory.ENGAGEMENT,
                status=InsightStatus.WARNING,
                title="エンゲージメントが下降傾向",
                description="直近の動画のエンゲージメント率が低下しています。",
                recommendation="コンテンツの方向性や視聴者のニーズを再確認しましょう。",
            )
        return None

    def title_numbers_insight(self) -> AnalysisInsight:
        share = self._title_share(DIGIT_PATTERN)
        # An empty window reports the warning here, not a vacuous "good"
        if self.videos and share >= INSIGHT_THRESHOLDS['title_numbers_share']:
            return AnalysisInsight(
                id="title-numbers",
                category=InsightCategory.TITLE,
                status=InsightStatus.GOOD,
                title="数字を効果的に活用",
                description=f"{round_half_up(share * 100)}%のタイトルに具体的な数字が含まれています。",
                recommendation="数字はクリック率を高める効果があります。引き続き活用しましょう。",
            )
        return AnalysisInsight(
            id="title-numbers",
            category=InsightCategory.TITLE,
            status=InsightStatus.WARNING,
            title="タイトルに数字を増やす余地",
            description="タイトルに具体的な数字を含めることでクリック率が向上する可能性があります。",
            recommendation="「〇〇の5つの方法」「10分で分かる」など、数字を活用してみましょう。",
        )

    def title_brackets_insight(self) -> Optional[AnalysisInsight]:
        if not self.videos:
            return None
        if self._title_share(BRACKET_PATTERN) < INSIGHT_THRESHOLDS['title_brackets_share']:
            return None
        return AnalysisInsight(
            id="title-brackets",
            category=InsightCategory.TITLE,
            status=InsightStatus.GOOD,
            title="強調表現を活用",
            description="【】や[]を使った強調表現が効果的に使用されています。",
        )

    def upload_frequency_insight(self) -> Optional[AnalysisInsight]:
        avg_days = average_days_between(self.videos)
        if avg_days is None:
            return None

        interval = self.benchmark['uploadIntervalDays']
        metric = InsightMetric(current=avg_days, benchmark=interval, unit="日")

        if avg_days <= interval * INSIGHT_THRESHOLDS['frequency_good_ratio']:
            return AnalysisInsight(
                id="frequency-1",
                category=InsightCategory.FREQUENCY,
                status=InsightStatus.GOOD,
                title="安定した投稿頻度",
                description=f"平均{avg_days:.1f}日ごとに動画を投稿しており、アルゴリズムに好まれる頻度です。",
                recommendation="一貫した投稿スケジュールを維持してください。",
                metric=metric,
            )
        if avg_days <= interval * INSIGHT_THRESHOLDS['frequency_warning_ratio']:
            return AnalysisInsight(
                id="frequency-1",
                category=InsightCategory.FREQUENCY,
                status=InsightStatus.WARNING,
                title="投稿頻度を上げることを検討",
                description=f"平均{avg_days:.1f}日ごとの投稿です。",
                recommendation="可能であれば投稿頻度を上げることで、視聴者の定着率が向上します。",
                metric=metric,
            )
        return AnalysisInsight(
            id="frequency-1",
            category=InsightCategory.FREQUENCY,
            status=InsightStatus.CRITICAL,
            title="投稿頻度が低い",
            description=f"平均{avg_days:.1f}日ごとの投稿で、頻度が低めです。",
            recommendation="定期的な投稿はアルゴリズムに好まれます。コンテンツカレンダーを作成しましょう。",
            metric=metric,
        )

    def description_insight(self) -> AnalysisInsight:
        avg_length = mean([len(video.description) for video in self.videos])
        if avg_length < INSIGHT_THRESHOLDS['description_min_length']:
            return AnalysisInsight(
                id="seo-desc",
                category=InsightCategory.SEO,
                status=InsightStatus.WARNING,
                title="説明文が短め",
                description=f"平均説明文は{round_half_up(avg_length)}文字です。より詳細な説明でSEOを改善できます。",
                recommendation="説明文に関連キーワード、タイムスタンプ、関連リンクを追加しましょう。",
            )
        return AnalysisInsight(
            id="seo-desc",
            category=InsightCategory.SEO,
            status=InsightStatus.GOOD,
            title="説明文が充実",
            description=f"平均{round_half_up(avg_length)}文字の説明文でSEOに効果的です。",
        )

    def thumbnail_insight(self) -> AnalysisInsight:
        # Static advisory; image analysis lives in tools.ai_analyzer
        return AnalysisInsight(
            id="thumbnail-1",
            category=InsightCategory.THUMBNAIL,
            status=InsightStatus.WARNING,
            title="サムネイル最適化の機会",
            description="サムネイルの視認性はクリック率に大きく影響します。",
            recommendation="大きく読みやすいテキスト（3-5語）、人の顔、コントラストの高い色を使用することを推奨します。",
        )

    def growth_insight(self) -> AnalysisInsight:
        if self.channel.video_count > 0:
            subscribers_per_video = self.channel.subscriber_count / self.channel.video_count
        else:
            subscribers_per_video = 0

        if subscribers_per_video >= INSIGHT_THRESHOLDS['subscribers_per_video_good']:
            return AnalysisInsight(
                id="growth-1",
                category=InsightCategory.GROWTH,
                status=InsightStatus.GOOD,
                title="効率的な登録者獲得",
                description=f"動画1本あたり平均{round_half_up(subscribers_per_video)}人の登録者を獲得しています。",
            )
        if subscribers_per_video >= INSIGHT_THRESHOLDS['subscribers_per_video_warning']:
            return AnalysisInsight(
                id="growth-1",
                category=InsightCategory.GROWTH,
                status=InsightStatus.WARNING,
                title="登録者獲得に改善の余地",
                description=f"動画1本あたり{round_half_up(subscribers_per_video)}人の登録者を獲得しています。",
                recommendation="動画の冒頭と終わりに登録を促すCTAを追加しましょう。",
            )
        return AnalysisInsight(
            id="growth-1",
            category=InsightCategory.GROWTH,
            status=InsightStatus.CRITICAL,
            title="登録者獲得率が低め",
            description="視聴者を登録者に転換する施策が必要です。",
            recommendation="チャンネル登録のメリットを明確にし、シリーズコンテンツで視聴者を引き付けましょう。",
        )
