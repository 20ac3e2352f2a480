# ========================================
# app/routes/admin.py
# ========================================

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from loguru import logger

from app.dependencies import get_application_repository, get_job_repository, get_user_repository
from app.models.user import User
from app.repositories.applications import ApplicationRepository
from app.repositories.jobs import JobRepository
from app.repositories.users import UserRepository
from app.schemas.admin import AnalyticsResponse, MessageResponse, PlatformStats
from app.schemas.job import JobResponse
from app.schemas.user import UserResponse
from app.utils.auth import require_role

router = APIRouter(prefix="/admin", tags=["Admin"])

admin_required = require_role("admin")


# ✅ 1. LIST USERS
@router.get("/users", response_model=List[UserResponse])
async def get_all_users(
    current_user: User = Depends(admin_required),
    users: UserRepository = Depends(get_user_repository),
):
    return [UserResponse.model_validate(u) for u in await users.list_all()]


# ✅ 2. BLOCK / UNBLOCK USER
@router.put("/users/block/{user_id}", response_model=MessageResponse)
async def block_user(
    user_id: str,
    current_user: User = Depends(admin_required),
    users: UserRepository = Depends(get_user_repository),
):
    if not await users.set_blocked(user_id, True):
        raise HTTPException(status_code=404, detail="User not found")
    logger.info(f"Admin {current_user.id} blocked user {user_id}")
    return MessageResponse(message="User blocked")


@router.put("/users/unblock/{user_id}", response_model=MessageResponse)
async def unblock_user(
    user_id: str,
    current_user: User = Depends(admin_required),
    users: UserRepository = Depends(get_user_repository),
):
    if not await users.set_blocked(user_id, False):
        raise HTTPException(status_code=404, detail="User not found")
    logger.info(f"Admin {current_user.id} unblocked user {user_id}")
    return MessageResponse(message="User unblocked")


# ✅ 3. JOBS
@router.get("/jobs", response_model=List[JobResponse])
async def get_all_jobs(
    current_user: User = Depends(admin_required),
    jobs: JobRepository = Depends(get_job_repository),
):
    return [JobResponse.model_validate(job) for job in await jobs.list_all()]


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: str,
    current_user: User = Depends(admin_required),
    jobs: JobRepository = Depends(get_job_repository),
):
    if not await jobs.delete(job_id):
        raise HTTPException(status_code=404, detail="Job not found")
    logger.info(f"Admin {current_user.id} deleted job {job_id}")
    return MessageResponse(message="Job deleted")


# ✅ 4. ANALYTICS
@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    current_user: User = Depends(admin_required),
    users: UserRepository = Depends(get_user_repository),
    jobs: JobRepository = Depends(get_job_repository),
    applications: ApplicationRepository = Depends(get_application_repository),
):
    return AnalyticsResponse(
        stats=PlatformStats(
            total_users=await users.count(),
            total_recruiters=await users.count("recruiter"),
            total_applicants=await users.count("applicant"),
            total_jobs=await jobs.count(),
            total_applications=await applications.count(),
        )
    )
