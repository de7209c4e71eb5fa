"""Benchmark and scoring tables shared by the insight and health-score modules."""

from __future__ import annotations

import math
from typing import Dict

# Channel size tiers keyed by subscriber bracket (min inclusive, max exclusive)
CHANNEL_SIZE_BENCHMARKS: Dict[str, Dict] = {
    'micro': {'min': 0, 'max': 10_000, 'avgEngagement': 8.0, 'uploadIntervalDays': 14},
    'small': {'min': 10_000, 'max': 100_000, 'avgEngagement': 4.5, 'uploadIntervalDays': 14},
    'medium': {'min': 100_000, 'max': 1_000_000, 'avgEngagement': 3.0, 'uploadIntervalDays': 7},
    'large': {'min': 1_000_000, 'max': 10_000_000, 'avgEngagement': 2.0, 'uploadIntervalDays': 7},
    'mega': {'min': 10_000_000, 'max': math.inf, 'avgEngagement': 1.5, 'uploadIntervalDays': 7},
}

INSIGHT_THRESHOLDS = {
    # engagement ratio vs tier benchmark
    'engagement_good_ratio': 1.2,
    'engagement_warning_ratio': 0.8,
    # upload interval vs tier benchmark
    'frequency_good_ratio': 0.7,
    'frequency_warning_ratio': 1.5,
    'title_numbers_share': 0.4,
    'title_brackets_share': 0.3,
    'description_min_length': 200,
    'subscribers_per_video_good': 100,
    'subscribers_per_video_warning': 30,
}

KEYWORD_THRESHOLDS = {
    'high_performance_ratio': 1.2,
    'low_performance_ratio': 0.8,
    'top_keywords': 10,
    'top_hashtags': 10,
    'neutral_effectiveness': 50,
    'effective_pattern': 60,
}

TREND_THRESHOLDS = {
    'min_videos': 6,
    'sample_size': 3,
    'up_ratio': 1.1,
    'down_ratio': 0.9,
}

HEALTH_SCORE = {
    'base': 50,
    # (minimum engagement ratio, points); first matching step wins
    'engagement_steps': [(1.3, 15), (1.0, 10), (0.7, 5)],
    'engagement_floor_points': -5,
    'trend_points': {'up': 10, 'down': -5, 'stable': 0},
    'insight_points': {'good': 4, 'warning': 0, 'critical': -4},
    # (maximum average days between uploads, points)
    'frequency_steps': [(3, 10), (7, 5)],
    'frequency_stale_days': 21,
    'frequency_stale_points': -5,
    'min': 0,
    'max': 100,
}


def get_channel_size(subscriber_count: int) -> str:
    for size, bracket in CHANNEL_SIZE_BENCHMARKS.items():
        if subscriber_count < bracket['max']:
            return size
    return 'mega'


def tier_benchmark(subscriber_count: int) -> Dict:
    return CHANNEL_SIZE_BENCHMARKS[get_channel_size(subscriber_count)]
