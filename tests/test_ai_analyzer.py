import unittest
from types import SimpleNamespace
from unittest import mock

import openai

from tools.ai_analyzer import AIAnalyzer
from tools.errors import AIAnalysisError, AIRequestError


def _reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class AIAnalyzerTests(unittest.TestCase):
    def setUp(self):
        self.client = mock.MagicMock()
        self.create = self.client.chat.completions.create
        self.analyzer = AIAnalyzer("sk-test", client=self.client)

    def _prompt(self):
        return self.create.call_args.kwargs["messages"][0]["content"]

    def test_title_analysis_extracts_embedded_json(self):
        self.create.return_value = _reply('```json\n{"overallScore": 72, "improvements": ["a"]}\n```')

        result = self.analyzer.analyze_title("5 tips", "料理")

        self.assertEqual(result["overallScore"], 72)
        kwargs = self.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "gpt-4o-mini")
        self.assertEqual(kwargs["temperature"], 0.7)
        self.assertEqual(kwargs["max_tokens"], 2000)
        self.assertIn('タイトル: "5 tips"', self._prompt())
        self.assertIn("チャンネルジャンル: 料理", self._prompt())

    def test_thumbnail_uses_vision_model(self):
        self.create.return_value = _reply('{"overallScore": 60}')

        self.analyzer.analyze_thumbnail("https://example.com/thumb.jpg")

        kwargs = self.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "gpt-4o")
        parts = kwargs["messages"][0]["content"]
        self.assertEqual(parts[1], {"type": "image_url", "image_url": {"url": "https://example.com/thumb.jpg"}})

    def test_description_is_truncated(self):
        self.create.return_value = _reply('{"overallScore": 50}')
        self.analyzer.analyze_description("a" * 2500, "title")
        self.assertIn("a" * 2000, self._prompt())
        self.assertNotIn("a" * 2001, self._prompt())

    def test_themes_return_array(self):
        self.create.return_value = _reply('Here you go: [{"id": "1", "title": "t"}, {"id": "2", "title": "u"}]')

        themes = self.analyzer.suggest_video_themes("Chan", [f"title {i}" for i in range(8)], ["料理"], 12345)

        self.assertEqual([theme["id"] for theme in themes], ["1", "2"])
        self.assertIn("5. title 4", self._prompt())
        self.assertNotIn("title 5", self._prompt())
        self.assertIn("12,345回", self._prompt())

    def test_swot_truncates_description(self):
        self.create.return_value = _reply('{"strengths": [], "weaknesses": [], "opportunities": [], "threats": []}')
        result = self.analyzer.analyze_swot("Chan", "b" * 600, ["one"])
        self.assertEqual(result["threats"], [])
        self.assertNotIn("b" * 501, self._prompt())

    def test_unparsable_reply(self):
        self.create.return_value = _reply("no json here")
        with self.assertRaisesRegex(AIAnalysisError, "Failed to parse title SEO analysis"):
            self.analyzer.analyze_title("x")

        self.create.return_value = _reply("{not: valid}")
        with self.assertRaisesRegex(AIAnalysisError, "Failed to parse SWOT analysis"):
            self.analyzer.analyze_swot("Chan", "", [])

    def test_sdk_errors_are_wrapped(self):
        self.create.side_effect = openai.OpenAIError("upstream down")
        with self.assertRaisesRegex(AIAnalysisError, "upstream down"):
            self.analyzer.analyze_title("x")


class AIRequestDispatchTests(unittest.TestCase):
    def setUp(self):
        self.client = mock.MagicMock()
        self.client.chat.completions.create.return_value = _reply('{"ok": true}')
        self.analyzer = AIAnalyzer("sk-test", client=self.client)

    def test_missing_fields(self):
        cases = [
            ({"type": "thumbnail"}, "サムネイルURLが必要です"),
            ({"type": "title"}, "タイトルが必要です"),
            ({"type": "description", "title": "t"}, "説明文とタイトルが必要です"),
            ({"type": "themes", "channelTitle": "c"}, "チャンネル情報が必要です"),
            ({"type": "swot"}, "チャンネル情報が必要です"),
            ({"type": "unknown"}, "無効な分析タイプです"),
        ]
        for body, message in cases:
            with self.assertRaisesRegex(AIRequestError, message):
                self.analyzer.run(body)
        self.client.chat.completions.create.assert_not_called()

    def test_dispatch(self):
        self.assertEqual(self.analyzer.run({"type": "title", "title": "t"}), {"ok": True})
        self.assertEqual(self.analyzer.run({"type": "swot", "channelTitle": "c"}), {"ok": True})
        self.assertEqual(self.client.chat.completions.create.call_count, 2)


if __name__ == "__main__":
    unittest.main()
