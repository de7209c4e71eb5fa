"""Title keyword, hashtag and title-pattern mining over a window of videos."""

from __future__ import annotations

import re
from collections import Counter
from typing import Callable, Dict, List, Sequence

from tools.benchmarks import KEYWORD_THRESHOLDS
from tools.channel_models import (
    HashtagItem,
    KeywordAnalysis,
    KeywordItem,
    KeywordPerformance,
    TitlePattern,
    VideoInfo,
)
from tools.window_stats import mean, round_half_up

# Hiragana, katakana and CJK ideographs
CJK_CHARS = "\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF"

KEYWORD_PATTERN = re.compile(rf"[{CJK_CHARS}]{{2,}}|[a-zA-Z]{{3,}}")
HASHTAG_PATTERN = re.compile(rf"#[A-Za-z0-9_{CJK_CHARS}]+")

DIGIT_PATTERN = re.compile(r"[0-9]")
QUESTION_PATTERN = re.compile(r"[?？]")
BRACKET_PATTERN = re.compile(r"[\[\]【】]")
EMOJI_PATTERN = re.compile("[\U0001F300-\U0001F9FF]")

TITLE_PATTERNS = [
    {
        'pattern': '数字を含むタイトル',
        'description': '「5つの方法」「10分で分かる」など',
        'regex': DIGIT_PATTERN,
    },
    {
        'pattern': '疑問形タイトル',
        'description': '「なぜ？」「どうすれば？」など',
        'regex': QUESTION_PATTERN,
    },
    {
        'pattern': '括弧を使用',
        'description': '【重要】[解説]など強調表現',
        'regex': BRACKET_PATTERN,
    },
    {
        'pattern': '絵文字を使用',
        'description': 'タイトルに絵文字で視覚的アピール',
        'regex': EMOJI_PATTERN,
    },
]


def extract_keywords(title: str) -> List[str]:
    return [word.lower() for word in KEYWORD_PATTERN.findall(title)]


def extract_hashtags(description: str) -> List[str]:
    return HASHTAG_PATTERN.findall(description or "")


def title_matches(regex: re.Pattern) -> Callable[[VideoInfo], bool]:
    return lambda video: bool(regex.search(video.title))


class KeywordAnalyzer:
    def __init__(self, videos: Sequence[VideoInfo]):
        self.videos = list(videos)

    def analyze(self) -> KeywordAnalysis:
        return KeywordAnalysis(
            top_keywords=self.top_keywords(),
            title_patterns=self.title_patterns(),
            hashtag_usage=self.hashtag_usage(),
        )

    def top_keywords(self) -> List[KeywordItem]:
        """Most frequent title tokens, each rated against the window's average views."""
        counts: Counter = Counter()
        total_views: Dict[str, int] = {}
        for video in self.videos:
            for word in extract_keywords(video.title):
                counts[word] += 1
                total_views[word] = total_views.get(word, 0) + video.view_count

        overall_avg = mean([video.view_count for video in self.videos])
        keywords = []
        for word, count in counts.most_common(KEYWORD_THRESHOLDS['top_keywords']):
            avg_views = total_views[word] / count
            keywords.append(KeywordItem(
                word=word,
                count=count,
                avg_views=round_half_up(avg_views),
                performance=self.rate_keyword(avg_views, overall_avg),
            ))
        return keywords

    @staticmethod
    def rate_keyword(avg_views: float, overall_avg: float) -> KeywordPerformance:
        if avg_views > overall_avg * KEYWORD_THRESHOLDS['high_performance_ratio']:
            return KeywordPerformance.HIGH
        if avg_views < overall_avg * KEYWORD_THRESHOLDS['low_performance_ratio']:
            return KeywordPerformance.LOW
        return KeywordPerformance.MEDIUM

    def hashtag_usage(self) -> List[HashtagItem]:
        counts: Counter = Counter()
        for video in self.videos:
            counts.update(extract_hashtags(video.description))
        return [
            HashtagItem(tag=tag, count=count)
            for tag, count in counts.most_common(KEYWORD_THRESHOLDS['top_hashtags'])
        ]

    def title_patterns(self) -> List[TitlePattern]:
        patterns = []
        for entry in TITLE_PATTERNS:
            predicate = title_matches(entry['regex'])
            count = sum(1 for video in self.videos if predicate(video))
            if count > 0:
                patterns.append(TitlePattern(
                    pattern=entry['pattern'],
                    description=entry['description'],
                    count=count,
                    effectiveness=self.pattern_effectiveness(predicate),
                ))
        return patterns

    def pattern_effectiveness(self, predicate: Callable[[VideoInfo], bool]) -> float:
        """Views of matching vs non-matching videos, scaled so parity is 50.

        Returns the neutral score when either side of the split is empty.
        """
        matching = [video.view_count for video in self.videos if predicate(video)]
        not_matching = [video.view_count for video in self.videos if not predicate(video)]
        neutral = KEYWORD_THRESHOLDS['neutral_effectiveness']
        if not matching or not not_matching:
            return neutral

        avg_not_matching = mean(not_matching)
        if avg_not_matching == 0:
            return 100 if mean(matching) > 0 else neutral
        ratio = mean(matching) / avg_not_matching
        return min(100, max(0, ratio * 50))
