# ========================================
# app/routes/resume.py
# ========================================

import io
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import StreamingResponse

from app.dependencies import (
    get_application_repository,
    get_job_repository,
    get_resume_check_limiter,
    get_resume_storage,
)
from app.models.user import User
from app.repositories.applications import ApplicationRepository
from app.repositories.jobs import JobRepository
from app.repositories.resume_files import ResumeFileStorage
from app.schemas.resume import (
    KeywordSuggestions,
    ResumeCheckResponse,
    ResumeCheckResult,
    ResumeHistoryResponse,
    ResumeScoreResponse,
)
from app.services.resume_checks import ResumeCheckLimiter
from app.services.score_summary import summarize
from app.utils.auth import get_current_user, require_role
from app.utils.uploads import read_upload

router = APIRouter(prefix="/resume", tags=["Resumes"])


# ✅ 1. UPLOAD AND CHECK RESUME (once per day)
@router.post("/check", response_model=ResumeCheckResult, status_code=status.HTTP_201_CREATED)
async def check_resume(
    resume: Optional[UploadFile] = File(None),
    current_user: User = Depends(require_role("applicant")),
    limiter: ResumeCheckLimiter = Depends(get_resume_check_limiter),
):
    upload = await read_upload(resume)
    check = await limiter.check(current_user.id, upload)
    return ResumeCheckResult.model_validate(check)


# ✅ 2. CHECK HISTORY
@router.get("/history", response_model=ResumeHistoryResponse)
async def get_history(
    current_user: User = Depends(require_role("applicant")),
    limiter: ResumeCheckLimiter = Depends(get_resume_check_limiter),
):
    history = await limiter.history(current_user.id)
    return ResumeHistoryResponse(
        history=[ResumeCheckResponse.model_validate(r) for r in history.records],
        can_check_today=history.can_check_today,
        next_check_time=history.next_check_time,
    )


# ✅ 3. SCORE ACROSS MY APPLICATIONS
@router.get("/score", response_model=ResumeScoreResponse)
async def get_score(
    current_user: User = Depends(require_role("applicant")),
    applications: ApplicationRepository = Depends(get_application_repository),
    jobs: JobRepository = Depends(get_job_repository),
):
    mine = await applications.list_for_applicant(current_user.id)

    applied_jobs = {}
    for app in mine:
        if app.job_id not in applied_jobs:
            job = await jobs.get(app.job_id)
            if job:
                applied_jobs[app.job_id] = job

    summary = summarize(mine, applied_jobs)
    return ResumeScoreResponse(
        score=summary.score,
        suggestions=KeywordSuggestions(strong=summary.strong, missing=summary.missing),
    )


# ✅ 4. DOWNLOAD A STORED RESUME
@router.get("/files/{file_id}")
async def download_resume(
    file_id: str,
    current_user: User = Depends(get_current_user),
    storage: ResumeFileStorage = Depends(get_resume_storage),
):
    contents, filename, metadata = await storage.open(file_id)

    # Recruiters/admins can download any resume, applicants only their own
    if current_user.role not in ["recruiter", "admin"] and metadata.get("user_id") != current_user.id:
        raise HTTPException(status_code=403, detail="Access denied")

    return StreamingResponse(
        io.BytesIO(contents),
        media_type=metadata.get("content_type", "application/octet-stream"),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
