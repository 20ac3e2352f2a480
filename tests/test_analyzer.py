"""Tests for the oracle client and its fallback behaviour."""

import json

import httpx
import pytest

from app.utils.analyzer import ResumeAnalyzer, parse_oracle_reply


def gemini_reply(text: str) -> httpx.Response:
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def analyzer_for(handler) -> ResumeAnalyzer:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ResumeAnalyzer(api_key="test-key", model="gemini-test", client=client)


class TestAnalyze:

    @pytest.mark.asyncio
    async def test_parses_oracle_json(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return gemini_reply(json.dumps({
                "score": 78,
                "strongKeywords": ["Python", " FastAPI "],
                "missingKeywords": ["Docker"],
            }))

        result = await analyzer_for(handler).analyze("resume text", "job text")

        assert result.score == 78
        assert result.strong_keywords == ["Python", "FastAPI"]
        assert result.missing_keywords == ["Docker"]
        assert "gemini-test:generateContent" in seen["url"]
        assert "key=test-key" in seen["url"]
        prompt = seen["body"]["contents"][0]["parts"][0]["text"]
        assert "resume text" in prompt and "job text" in prompt

    @pytest.mark.asyncio
    async def test_fenced_json_is_accepted(self):
        fenced = '```json\n{"score": 64, "strongKeywords": [], "missingKeywords": ["SQL"]}\n```'
        result = await analyzer_for(lambda r: gemini_reply(fenced)).analyze("cv", "jd")
        assert result.score == 64
        assert result.missing_keywords == ["SQL"]

    @pytest.mark.asyncio
    async def test_score_is_clamped(self):
        reply = json.dumps({"score": 140.6, "strongKeywords": [], "missingKeywords": []})
        result = await analyzer_for(lambda r: gemini_reply(reply)).analyze("cv", "jd")
        assert result.score == 100

    @pytest.mark.asyncio
    async def test_non_json_reply_falls_back(self):
        result = await analyzer_for(lambda r: gemini_reply("Great resume! 8/10")).analyze("cv", "jd")
        assert result.score == 50
        assert result.strong_keywords == []
        assert result.missing_keywords == []

    @pytest.mark.asyncio
    async def test_wrong_shape_falls_back(self):
        reply = json.dumps({"score": "high", "strongKeywords": "Python"})
        result = await analyzer_for(lambda r: gemini_reply(reply)).analyze("cv", "jd")
        assert result.score == 50

    @pytest.mark.asyncio
    async def test_http_error_falls_back(self):
        result = await analyzer_for(lambda r: httpx.Response(503, json={"error": "overloaded"})).analyze("cv", "jd")
        assert result.score == 50

    @pytest.mark.asyncio
    async def test_transport_error_falls_back(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = await analyzer_for(handler).analyze("cv", "jd")
        assert result.score == 50

    @pytest.mark.asyncio
    async def test_unexpected_envelope_falls_back(self):
        result = await analyzer_for(lambda r: httpx.Response(200, json={"promptFeedback": {}})).analyze("cv", "jd")
        assert result.score == 50

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        await analyzer_for(handler).analyze("cv", "jd")
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_missing_api_key_skips_call(self):
        def handler(request):
            raise AssertionError("oracle must not be called without a key")

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        analyzer = ResumeAnalyzer(api_key=None, client=client)

        result = await analyzer.analyze("cv", "jd")
        assert result.score == 50


class TestReview:

    @pytest.mark.asyncio
    async def test_review_returns_suggestions(self):
        reply = json.dumps({
            "score": 71,
            "strongKeywords": ["React"],
            "missingKeywords": ["TypeScript"],
            "suggestions": ["Add metrics", "Use standard headings"],
        })
        result = await analyzer_for(lambda r: gemini_reply(reply)).review("cv")
        assert result.score == 71
        assert result.suggestions == ["Add metrics", "Use standard headings"]

    @pytest.mark.asyncio
    async def test_review_fallback_has_suggestions(self):
        result = await analyzer_for(lambda r: gemini_reply("not json")).review("cv")
        assert result.score == 70
        assert len(result.suggestions) == 3


def test_parse_rejects_json_array():
    with pytest.raises(ValueError):
        parse_oracle_reply('[{"score": 1}]')
