# ========================================
# app/dependencies.py
# ========================================
# FastAPI providers for repositories and services. Routes depend on these,
# tests swap them through app.dependency_overrides.

from functools import lru_cache

from fastapi import Depends

from app.database import get_db, get_fs_bucket
from app.repositories.applications import ApplicationRepository
from app.repositories.jobs import JobRepository
from app.repositories.resume_checks import ResumeCheckRepository
from app.repositories.resume_files import ResumeFileStorage
from app.repositories.users import UserRepository
from app.services.lifecycle import ApplicationLifecycleManager
from app.services.resume_checks import ResumeCheckLimiter
from app.utils.analyzer import ResumeAnalyzer


def get_job_repository() -> JobRepository:
    return JobRepository(get_db())


def get_application_repository() -> ApplicationRepository:
    return ApplicationRepository(get_db())


def get_resume_check_repository() -> ResumeCheckRepository:
    return ResumeCheckRepository(get_db())


def get_user_repository() -> UserRepository:
    return UserRepository(get_db())


def get_resume_storage() -> ResumeFileStorage:
    return ResumeFileStorage(get_fs_bucket())


@lru_cache(maxsize=1)
def get_analyzer() -> ResumeAnalyzer:
    return ResumeAnalyzer()


def get_lifecycle_manager(
    jobs: JobRepository = Depends(get_job_repository),
    applications: ApplicationRepository = Depends(get_application_repository),
    analyzer: ResumeAnalyzer = Depends(get_analyzer),
    storage: ResumeFileStorage = Depends(get_resume_storage),
) -> ApplicationLifecycleManager:
    return ApplicationLifecycleManager(jobs, applications, analyzer, storage)


def get_resume_check_limiter(
    checks: ResumeCheckRepository = Depends(get_resume_check_repository),
    analyzer: ResumeAnalyzer = Depends(get_analyzer),
    storage: ResumeFileStorage = Depends(get_resume_storage),
) -> ResumeCheckLimiter:
    return ResumeCheckLimiter(checks, analyzer, storage)
