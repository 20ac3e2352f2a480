# ========================================
# app/routes/job.py
# ========================================

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from typing import List, Optional

from app.dependencies import (
    get_application_repository,
    get_job_repository,
    get_lifecycle_manager,
    get_user_repository,
)
from app.models.job import Job
from app.models.user import User
from app.repositories.applications import ApplicationRepository
from app.repositories.jobs import JobRepository
from app.repositories.users import UserRepository
from app.schemas.application import ApplicationCandidateResponse, ApplicationSubmitResponse
from app.schemas.job import JobCreate, JobResponse, JobUpdate
from app.services.lifecycle import ApplicationLifecycleManager
from app.utils.auth import require_role
from app.utils.uploads import read_upload

router = APIRouter(prefix="/jobs", tags=["Jobs"])


async def _owned_job(job_id: str, recruiter: User, jobs: JobRepository) -> Job:
    job = await jobs.get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.recruiter_id != recruiter.id:
        raise HTTPException(status_code=403, detail="Access denied")
    return job


# ===========================
# PUBLIC ENDPOINTS
# ===========================

# ✅ 1. GET ALL JOBS WITH FILTERS
@router.get("", response_model=List[JobResponse])
async def get_all_jobs(
    title: Optional[str] = Query(None, description="Substring of the job title"),
    location: Optional[str] = Query(None, description="Substring of the location"),
    category: Optional[str] = Query(None, description="Exact category"),
    type: Optional[str] = Query(None, description="Substring of the job constraints, e.g. Remote"),
    limit: int = Query(100, le=500),
    jobs: JobRepository = Depends(get_job_repository),
):
    found = await jobs.search(title=title, location=location, category=category, job_type=type, limit=limit)
    return [JobResponse.model_validate(job) for job in found]


# ===========================
# RECRUITER ENDPOINTS
# ===========================

# ✅ 2. RECRUITER'S OWN JOBS
@router.get("/my-jobs", response_model=List[JobResponse])
async def get_my_jobs(
    current_user: User = Depends(require_role("recruiter")),
    jobs: JobRepository = Depends(get_job_repository),
):
    return [JobResponse.model_validate(job) for job in await jobs.list_by_recruiter(current_user.id)]


# ✅ 3. GET SINGLE JOB
@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, jobs: JobRepository = Depends(get_job_repository)):
    job = await jobs.get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobResponse.model_validate(job)


# ✅ 4. POST A JOB
@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job: JobCreate,
    current_user: User = Depends(require_role("recruiter")),
    jobs: JobRepository = Depends(get_job_repository),
):
    created = await jobs.create(Job(recruiter_id=current_user.id, **job.model_dump()))
    return JobResponse.model_validate(created)


# ✅ 5. EDIT JOB (owner only)
@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    job_update: JobUpdate,
    current_user: User = Depends(require_role("recruiter")),
    jobs: JobRepository = Depends(get_job_repository),
):
    await _owned_job(job_id, current_user, jobs)

    update_data = job_update.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=400, detail="No fields to update")

    return JobResponse.model_validate(await jobs.update(job_id, update_data))


# ✅ 6. APPLICATIONS FOR ONE JOB (owner only)
@router.get("/{job_id}/applications", response_model=List[ApplicationCandidateResponse])
async def get_job_applications(
    job_id: str,
    current_user: User = Depends(require_role("recruiter")),
    jobs: JobRepository = Depends(get_job_repository),
    applications: ApplicationRepository = Depends(get_application_repository),
    users: UserRepository = Depends(get_user_repository),
):
    job = await _owned_job(job_id, current_user, jobs)

    result = []
    for app in await applications.list_for_jobs([job.id]):
        applicant = await users.get(app.applicant_id)
        result.append(
            ApplicationCandidateResponse(
                **app.model_dump(),
                job_title=job.title,
                applicant_name=applicant.name if applicant else None,
                applicant_email=applicant.email if applicant else None,
                applicant_phone=applicant.phone if applicant else None,
            )
        )
    return result


# ===========================
# APPLICANT ENDPOINTS
# ===========================

# ✅ 7. APPLY FOR JOB (optional resume upload)
@router.post("/{job_id}/apply", response_model=ApplicationSubmitResponse, status_code=status.HTTP_201_CREATED)
async def apply_job(
    job_id: str,
    resume: Optional[UploadFile] = File(None),
    current_user: User = Depends(require_role("applicant")),
    manager: ApplicationLifecycleManager = Depends(get_lifecycle_manager),
):
    upload = await read_upload(resume)
    application = await manager.apply(job_id, current_user.id, upload)

    return ApplicationSubmitResponse(
        application_id=application.id,
        ats_score=application.ats_score,
        strong_keywords=application.strong_keywords,
        missing_keywords=application.missing_keywords,
    )
