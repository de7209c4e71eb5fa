#!/usr/bin/env python3
"""
YouTube Channel Analyzer
Derives analytics for a channel snapshot and its most recent videos

Runs 5 analysis modules in dependency order:
1. Keyword & Title Pattern Analysis
2. Performance Metrics
3. Benchmark Insights
4. Recommendations
5. Channel Health Score

Usage:
    python3 -m tools.youtube_analyze_channel path/to/raw_data.json
"""

import json
import sys
from pathlib import Path

from tools.channel_models import ChannelAnalysis, ChannelInfo, VideoInfo
from tools.health_scorer import HealthScorer
from tools.insight_engine import InsightEngine
from tools.keyword_analyzer import KeywordAnalyzer
from tools.performance_analyzer import PerformanceAnalyzer
from tools.recommendation_engine import RecommendationEngine
from tools.window_stats import average_days_between, format_average_engagement, format_upload_frequency


class ChannelAnalyzer:
    def __init__(self, channel, videos):
        """Initialize analyzer with a channel snapshot and its videos, newest first"""
        self.channel = channel
        self.videos = list(videos)

    @classmethod
    def from_raw(cls, data):
        """Build from the raw_data.json structure written by the fetcher"""
        channel = ChannelInfo.from_dict(data['channel'])
        videos = [VideoInfo.from_dict(video) for video in data.get('videos', [])]
        return cls(channel, videos)

    def generate_analysis(self):
        """Generate complete analysis with all modules"""
        print("\n🔬 YouTube Channel Analysis")
        print("=" * 50)

        print("🏷️  Analyzing keywords and title patterns...")
        keyword_analysis = KeywordAnalyzer(self.videos).analyze()

        print("📈 Calculating performance metrics...")
        performance_metrics = PerformanceAnalyzer(self.channel, self.videos).analyze()

        print("🔍 Benchmarking against channels of the same size...")
        insights = InsightEngine(self.channel, self.videos, performance_metrics).generate()

        print("🎯 Building recommendations...")
        recommendations = RecommendationEngine(insights, performance_metrics, keyword_analysis).generate()

        health_score = HealthScorer(self.channel, self.videos, insights, performance_metrics).calculate()

        analysis = ChannelAnalysis(
            channel=self.channel,
            recent_videos=self.videos,
            health_score=health_score,
            average_engagement=format_average_engagement(self.videos),
            upload_frequency=format_upload_frequency(average_days_between(self.videos)),
            insights=insights,
            performance_metrics=performance_metrics,
            keyword_analysis=keyword_analysis,
            recommendations=recommendations,
        )

        print("\n✅ Analysis complete!")
        print(f"📊 Channel Health Score: {health_score}/100")
        print(f"💬 Average Engagement: {analysis.average_engagement}")
        print(f"📅 Upload Frequency: {analysis.upload_frequency}")
        print(f"🔍 Insights: {len(insights)}")
        print(f"📋 Total Recommendations: {len(recommendations)}")
        print(f"   - High Priority: {sum(1 for r in recommendations if r.priority.value == 'high')}")
        print(f"   - Medium Priority: {sum(1 for r in recommendations if r.priority.value == 'medium')}")
        print(f"   - Low Priority: {sum(1 for r in recommendations if r.priority.value == 'low')}")

        return analysis


def main():
    """Main execution function"""
    if len(sys.argv) != 2:
        print("❌ Error: Missing data file path")
        print("\nUsage:")
        print("  python3 -m tools.youtube_analyze_channel path/to/raw_data.json")
        sys.exit(1)

    data_file = sys.argv[1]
    data_path = Path(data_file)

    if not data_path.exists():
        print(f"❌ Error: File not found: {data_file}")
        sys.exit(1)

    try:
        print(f"📂 Loading data from: {data_file}")
        with open(data_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        analyzer = ChannelAnalyzer.from_raw(data)
        analysis = analyzer.generate_analysis()

        output_file = data_path.parent / 'analysis.json'
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(analysis.to_dict(), f, indent=2, ensure_ascii=False)

        print(f"\n📁 Analysis saved to: {output_file}")

    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
