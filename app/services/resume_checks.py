# ========================================
# app/services/resume_checks.py
# ========================================

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from loguru import logger

from app.models.resume_check import ResumeCheck
from app.repositories.common import utcnow
from app.services.lifecycle import ResumeUpload
from app.utils.analyzer import ResumeAnalysis
from app.utils.errors import BadRequestError, ConflictError, RateLimitedError
from app.utils.extractor import extract_text, file_extension

DAILY_LIMIT = 1
HISTORY_LIMIT = 10

UNREADABLE_SUGGESTION = "We could not read text from this file. Upload your resume as a PDF or .txt file."


@dataclass
class ResumeHistory:
    records: List[ResumeCheck]
    can_check_today: bool
    next_check_time: Optional[datetime]


class ResumeCheckLimiter:
    """Standalone ATS checks, one per applicant per UTC calendar day."""

    def __init__(self, checks, analyzer, storage=None, clock: Callable[[], datetime] = utcnow):
        self.checks = checks
        self.analyzer = analyzer
        self.storage = storage
        self.clock = clock

    def day_window(self, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        """[midnight, next midnight) in UTC around `now`."""
        now = (now or self.clock()).astimezone(timezone.utc)
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return start, start + timedelta(days=1)

    async def _used_today(self, applicant_id: str, start: datetime, end: datetime) -> int:
        return await self.checks.count_between(applicant_id, start, end)

    async def check(self, applicant_id: str, upload: Optional[ResumeUpload]) -> ResumeCheck:
        now = self.clock().astimezone(timezone.utc)
        start, end = self.day_window(now)

        if await self._used_today(applicant_id, start, end) >= DAILY_LIMIT:
            raise RateLimitedError(
                "Daily limit reached. You can check your resume once per day.",
                next_check_time=end,
            )

        if upload is None:
            raise BadRequestError("Resume file is required")

        analysis = await self._review(upload)

        resume = upload.filename
        if self.storage is not None:
            resume = await self.storage.save(upload.content, upload.filename, applicant_id, upload.content_type)

        check = ResumeCheck(
            user_id=applicant_id,
            resume=resume,
            ats_score=analysis.score,
            strong_keywords=analysis.strong_keywords,
            missing_keywords=analysis.missing_keywords,
            suggestions=analysis.suggestions,
            checked_at=now,
            check_day=start.date().isoformat(),
        )
        try:
            check = await self.checks.create(check)
        except Exception as exc:
            if self.storage is not None:
                await self.storage.delete(resume)
            if isinstance(exc, ConflictError):
                # a concurrent check for the same day got in first
                raise RateLimitedError(
                    "Daily limit reached. You can check your resume once per day.",
                    next_check_time=end,
                )
            raise

        logger.info(f"Resume check {check.id} recorded for {applicant_id} (score={check.ats_score})")
        return check

    async def _review(self, upload: ResumeUpload) -> ResumeAnalysis:
        extraction = extract_text(upload.content, file_extension(upload.filename))
        if not extraction.ok:
            logger.warning(f"Resume check on unreadable file '{upload.filename}' ({extraction.status})")
            return ResumeAnalysis(suggestions=[UNREADABLE_SUGGESTION])

        try:
            return await self.analyzer.review(extraction.text)
        except Exception:
            logger.exception("Resume analyzer raised during standalone check, using fallback")
            return ResumeAnalysis.check_fallback()

    async def history(self, applicant_id: str) -> ResumeHistory:
        start, end = self.day_window()
        records = await self.checks.recent(applicant_id, limit=HISTORY_LIMIT)
        used = await self._used_today(applicant_id, start, end)
        can_check = used < DAILY_LIMIT
        return ResumeHistory(
            records=records,
            can_check_today=can_check,
            next_check_time=None if can_check else end,
        )
