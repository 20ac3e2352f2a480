# ========================================
# app/services/lifecycle.py
# ========================================

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from loguru import logger

from app.models.application import PENDING, REJECTED, SELECTED, Application
from app.models.job import Job
from app.repositories.common import utcnow
from app.utils.analyzer import ResumeAnalysis
from app.utils.errors import BadRequestError, ConflictError, ForbiddenError, InvalidStateError, NotFoundError
from app.utils.extractor import extract_text, file_extension

REVERT_ATTEMPTS = 2


@dataclass(frozen=True)
class ResumeUpload:
    filename: str
    content: bytes
    content_type: Optional[str] = None


@dataclass(frozen=True)
class StatusChange:
    status: str
    rejection_reason: Optional[str] = None


class ApplicationLifecycleManager:
    """
    Creates applications and moves them out of `pending`.

    Selection consumes one of the job's openings. The application is first
    claimed with a compare-and-set on its status, then the job's counter is
    decremented conditionally; if the decrement does not happen the claim is
    rolled back, so the pair is either both written or neither.
    """

    def __init__(
        self,
        jobs,
        applications,
        analyzer,
        storage=None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.jobs = jobs
        self.applications = applications
        self.analyzer = analyzer
        self.storage = storage
        self.clock = clock

    # ===========================
    # CREATE
    # ===========================

    async def apply(self, job_id: str, applicant_id: str, upload: Optional[ResumeUpload] = None) -> Application:
        job = await self.jobs.get(job_id)
        if job is None:
            raise NotFoundError("Job not found")

        if await self.applications.find_for(job.id, applicant_id) is not None:
            raise ConflictError("You have already applied to this job")

        # Scoring happens before anything is written
        analysis = await self._score(upload, job) if upload else ResumeAnalysis.empty()

        resume = None
        if upload and self.storage is not None:
            resume = await self.storage.save(upload.content, upload.filename, applicant_id, upload.content_type)

        application = Application(
            job_id=job.id,
            applicant_id=applicant_id,
            resume=resume,
            ats_score=analysis.score,
            strong_keywords=analysis.strong_keywords,
            missing_keywords=analysis.missing_keywords,
            status=PENDING,
            applied_at=self.clock(),
        )
        try:
            application = await self.applications.create(application)
        except Exception:
            # duplicate lost a race, or the insert failed outright
            if resume:
                await self.storage.delete(resume)
            raise

        logger.info(
            f"Application {application.id} created for job {job.id} by {applicant_id} (score={application.ats_score})"
        )
        return application

    async def _score(self, upload: ResumeUpload, job: Job) -> ResumeAnalysis:
        extraction = extract_text(upload.content, file_extension(upload.filename))
        if not extraction.ok:
            logger.warning(f"No text extracted from '{upload.filename}' ({extraction.status}), score defaults to 0")
            return ResumeAnalysis.empty()

        try:
            return await self.analyzer.analyze(extraction.text, job.description)
        except Exception:
            logger.exception(f"Resume analyzer raised for job {job.id}, using fallback score")
            return ResumeAnalysis.job_fallback()

    # ===========================
    # STATUS TRANSITIONS
    # ===========================

    async def update_status(self, application_id: str, change: StatusChange, recruiter_id: str) -> Application:
        application = await self.applications.get(application_id)
        if application is None:
            raise NotFoundError("Application not found")

        job = await self.jobs.get(application.job_id)
        if job is None:
            raise NotFoundError("Job not found")

        if job.recruiter_id != recruiter_id:
            raise ForbiddenError("Access denied")

        if change.status == SELECTED:
            self._ensure_pending(application)
            return await self._select(application, job)

        if change.status == REJECTED:
            reason = (change.rejection_reason or "").strip()
            if not reason:
                raise BadRequestError("Rejection reason required")
            self._ensure_pending(application)
            return await self._reject(application, reason)

        raise BadRequestError("Invalid status")

    @staticmethod
    def _ensure_pending(application: Application) -> None:
        if application.is_terminal:
            raise InvalidStateError(f"Application already {application.status}")

    async def _select(self, application: Application, job: Job) -> Application:
        if job.openings <= 0:
            raise InvalidStateError("No openings left")

        claimed = await self.applications.transition(application.id, SELECTED, None)
        if claimed is None:
            raise InvalidStateError("Application is no longer pending")

        try:
            updated_job = await self.jobs.take_opening(job.id)
        except Exception:
            logger.error(f"Opening decrement failed for job {job.id}, reverting application {application.id}")
            await self._release_claim(application, job)
            raise

        if updated_job is None:
            await self._release_claim(application, job)
            raise InvalidStateError("No openings left")

        logger.info(
            f"Application {application.id} selected, job {job.id} has {updated_job.openings} openings left"
        )
        return claimed

    async def _release_claim(self, application: Application, job: Job) -> None:
        """Put a claimed application back to pending; never masks the caller's error."""
        for attempt in range(1, REVERT_ATTEMPTS + 1):
            try:
                await self.applications.revert_to_pending(application.id)
                return
            except Exception as exc:
                logger.warning(f"Revert of application {application.id} failed (attempt {attempt}): {exc}")

        logger.critical(
            f"Application {application.id} left selected without consuming an opening of job {job.id}"
        )

    async def _reject(self, application: Application, reason: str) -> Application:
        rejected = await self.applications.transition(application.id, REJECTED, reason)
        if rejected is None:
            raise InvalidStateError("Application is no longer pending")

        logger.info(f"Application {application.id} rejected")
        return rejected
