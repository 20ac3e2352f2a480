# ========================================
# app/routes/application.py
# ========================================

from fastapi import APIRouter, Depends
from typing import Dict, List

from app.dependencies import (
    get_application_repository,
    get_job_repository,
    get_lifecycle_manager,
    get_user_repository,
)
from app.models.application import SELECTED
from app.models.job import Job
from app.models.user import User
from app.repositories.applications import ApplicationRepository
from app.repositories.jobs import JobRepository
from app.repositories.users import UserRepository
from app.schemas.application import (
    ApplicationCandidateResponse,
    ApplicationDetailResponse,
    ApplicationResponse,
    ApplicationStatusUpdate,
    StatusUpdateResponse,
)
from app.services.lifecycle import ApplicationLifecycleManager, StatusChange
from app.utils.auth import require_role

router = APIRouter(prefix="/applications", tags=["Applications"])


# ===========================
# APPLICANT ENDPOINTS
# ===========================

# ✅ 1. GET MY APPLICATIONS
@router.get("/my-applications", response_model=List[ApplicationDetailResponse])
async def get_my_applications(
    current_user: User = Depends(require_role("applicant")),
    applications: ApplicationRepository = Depends(get_application_repository),
    jobs: JobRepository = Depends(get_job_repository),
):
    """Newest first, each with the job's title, company and location."""

    result = []
    for app in await applications.list_for_applicant(current_user.id):
        job = await jobs.get(app.job_id)
        result.append(
            ApplicationDetailResponse(
                **app.model_dump(),
                job_title=job.title if job else None,
                company=job.company if job else None,
                location=job.location if job else None,
            )
        )
    return result


# ===========================
# RECRUITER ENDPOINTS
# ===========================

# ✅ 2. ALL APPLICATIONS TO MY JOBS
@router.get("/all-applications", response_model=List[ApplicationCandidateResponse])
async def get_all_applications(
    current_user: User = Depends(require_role("recruiter")),
    applications: ApplicationRepository = Depends(get_application_repository),
    jobs: JobRepository = Depends(get_job_repository),
    users: UserRepository = Depends(get_user_repository),
):
    own_jobs: Dict[str, Job] = {job.id: job for job in await jobs.list_by_recruiter(current_user.id)}
    if not own_jobs:
        return []

    result = []
    for app in await applications.list_for_jobs(list(own_jobs)):
        applicant = await users.get(app.applicant_id)
        result.append(
            ApplicationCandidateResponse(
                **app.model_dump(),
                job_title=own_jobs[app.job_id].title,
                applicant_name=applicant.name if applicant else None,
                applicant_email=applicant.email if applicant else None,
                applicant_phone=applicant.phone if applicant else None,
            )
        )
    return result


# ✅ 3. SELECT / REJECT AN APPLICANT
@router.put("/{application_id}/status", response_model=StatusUpdateResponse)
async def update_status(
    application_id: str,
    status_update: ApplicationStatusUpdate,
    current_user: User = Depends(require_role("recruiter")),
    manager: ApplicationLifecycleManager = Depends(get_lifecycle_manager),
):
    application = await manager.update_status(
        application_id,
        StatusChange(status=status_update.status, rejection_reason=status_update.rejection_reason),
        recruiter_id=current_user.id,
    )

    message = "Applicant selected successfully" if application.status == SELECTED else "Applicant rejected successfully"
    return StatusUpdateResponse(message=message, application=ApplicationResponse.model_validate(application))
