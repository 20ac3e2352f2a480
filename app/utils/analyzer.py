# ========================================
# app/utils/analyzer.py
# ========================================

import json
import os
import re
from typing import List, Optional

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-pro")
GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
ANALYZER_TIMEOUT_SECONDS = float(os.getenv("ANALYZER_TIMEOUT_SECONDS", "30"))

# Resume text sent to the oracle is capped to keep prompts bounded
MAX_PROMPT_CHARS = 20000

_FENCE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


class ResumeAnalysis(BaseModel):
    """Score and keyword sets produced for one resume."""

    score: int = 0
    strong_keywords: List[str] = []
    missing_keywords: List[str] = []
    suggestions: List[str] = []

    @classmethod
    def empty(cls) -> "ResumeAnalysis":
        return cls()

    @classmethod
    def job_fallback(cls) -> "ResumeAnalysis":
        return cls(score=50)

    @classmethod
    def check_fallback(cls) -> "ResumeAnalysis":
        return cls(
            score=70,
            suggestions=[
                "Add more technical skills relevant to your target roles",
                "Include quantifiable achievements in your experience section",
                "Use standard section headings like 'Skills', 'Experience', 'Education'",
            ],
        )


class OraclePayload(BaseModel):
    # Field names mirror the JSON shape requested in the prompt
    score: float
    strongKeywords: List[str] = []
    missingKeywords: List[str] = []
    suggestions: List[str] = []

    def to_analysis(self) -> ResumeAnalysis:
        return ResumeAnalysis(
            score=int(round(max(0.0, min(100.0, self.score)))),
            strong_keywords=[k.strip() for k in self.strongKeywords if k.strip()],
            missing_keywords=[k.strip() for k in self.missingKeywords if k.strip()],
            suggestions=[s.strip() for s in self.suggestions if s.strip()],
        )


JOB_PROMPT = """Compare this resume with the job description.
Return JSON only: {{"score": number, "strongKeywords": [string], "missingKeywords": [string]}}
The score is an ATS compatibility estimate from 0 to 100.

RESUME:
{resume}

JOB DESCRIPTION:
{job}
"""

CHECK_PROMPT = """Analyze this resume for ATS compatibility and provide detailed feedback:

Resume Content: {resume}

Please provide a comprehensive analysis including:
1. Overall ATS compatibility score (0-100)
2. Strong keywords present in the resume (top 10)
3. Missing keywords that should be added for better ATS performance (top 10)
4. Specific suggestions for improvement (3-5 actionable items)

Return JSON only: {{"score": number, "strongKeywords": [string], "missingKeywords": [string], "suggestions": [string]}}
"""


def parse_oracle_reply(raw: str) -> OraclePayload:
    """Parse the oracle's text reply, tolerating a markdown code fence around the JSON."""
    match = _FENCE.search(raw)
    if match:
        raw = match.group(1)
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Oracle reply is not a JSON object")
    return OraclePayload.model_validate(data)


class ResumeAnalyzer:
    """
    Client for the external text-analysis oracle (Gemini generateContent).

    One attempt per request, no retries. Any failure (transport, HTTP status,
    unexpected envelope, malformed JSON) is logged and answered with the
    fixed fallback result for the variant being requested.
    """

    def __init__(
        self,
        api_key: Optional[str] = GEMINI_API_KEY,
        model: str = GEMINI_MODEL,
        timeout: float = ANALYZER_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client
        if not api_key:
            logger.warning("GEMINI_API_KEY not set - resume analysis will use fallback scores")

    async def analyze(self, resume_text: str, job_description: str) -> ResumeAnalysis:
        """Score a resume against one job description."""
        prompt = JOB_PROMPT.format(
            resume=resume_text[:MAX_PROMPT_CHARS],
            job=job_description or "",
        )
        return await self._run(prompt, ResumeAnalysis.job_fallback())

    async def review(self, resume_text: str) -> ResumeAnalysis:
        """Standalone ATS review, includes improvement suggestions."""
        prompt = CHECK_PROMPT.format(resume=resume_text[:MAX_PROMPT_CHARS])
        return await self._run(prompt, ResumeAnalysis.check_fallback())

    async def _run(self, prompt: str, fallback: ResumeAnalysis) -> ResumeAnalysis:
        if not self.api_key:
            return fallback

        try:
            raw = await self._generate(prompt)
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning(f"Resume analyzer call failed, using fallback: {e}")
            return fallback

        try:
            return parse_oracle_reply(raw).to_analysis()
        except (ValueError, ValidationError) as e:
            logger.warning(f"Resume analyzer returned malformed JSON, using fallback: {e}")
            return fallback

    async def _generate(self, prompt: str) -> str:
        url = GEMINI_API_URL.format(model=self.model)
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": "application/json", "temperature": 0.2},
        }
        params = {"key": self.api_key}

        if self._client is not None:
            response = await self._client.post(url, params=params, json=payload, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, params=params, json=payload)

        response.raise_for_status()
        data = response.json()
        return data["candidates"][0]["content"]["parts"][0]["text"]
