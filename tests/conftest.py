"""Shared fixtures: in-memory stores with the same invariants as the Mongo repositories."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
from bson import ObjectId

from app.models.application import PENDING, SELECTED, Application
from app.models.job import Job
from app.models.resume_check import ResumeCheck
from app.models.user import User
from app.services.lifecycle import ApplicationLifecycleManager
from app.services.resume_checks import ResumeCheckLimiter
from app.utils.analyzer import ResumeAnalysis
from app.utils.errors import ConflictError, NotFoundError

RECRUITER_ID = str(ObjectId())
OTHER_RECRUITER_ID = str(ObjectId())


def new_id() -> str:
    return str(ObjectId())


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemoryJobRepository:
    def __init__(self):
        self.items: Dict[str, Job] = {}

    def add(self, job: Job) -> Job:
        job = job.model_copy(update={"id": job.id or new_id()})
        self.items[job.id] = job
        return job

    async def get(self, job_id: str) -> Optional[Job]:
        await asyncio.sleep(0)
        return self.items.get(job_id)

    async def create(self, job: Job) -> Job:
        await asyncio.sleep(0)
        return self.add(job)

    async def update(self, job_id: str, fields: dict) -> Optional[Job]:
        await asyncio.sleep(0)
        if job_id not in self.items:
            return None
        self.items[job_id] = self.items[job_id].model_copy(update=fields)
        return self.items[job_id]

    async def delete(self, job_id: str) -> bool:
        await asyncio.sleep(0)
        return self.items.pop(job_id, None) is not None

    async def search(self, title=None, location=None, category=None, job_type=None, limit=100) -> List[Job]:
        await asyncio.sleep(0)
        found = []
        for job in self.items.values():
            if title and title.lower() not in job.title.lower():
                continue
            if location and location.lower() not in job.location.lower():
                continue
            if category and job.category != category:
                continue
            if job_type and job_type.lower() not in (job.constraints or "").lower():
                continue
            found.append(job)
        return found[:limit]

    async def list_by_recruiter(self, recruiter_id: str) -> List[Job]:
        await asyncio.sleep(0)
        return [j for j in self.items.values() if j.recruiter_id == recruiter_id]

    async def list_all(self, limit: int = 1000) -> List[Job]:
        await asyncio.sleep(0)
        return list(self.items.values())[:limit]

    async def take_opening(self, job_id: str) -> Optional[Job]:
        await asyncio.sleep(0)
        job = self.items.get(job_id)
        if job is None or job.openings <= 0:
            return None
        self.items[job_id] = job.model_copy(update={"openings": job.openings - 1})
        return self.items[job_id]

    async def count(self) -> int:
        return len(self.items)


class InMemoryApplicationRepository:
    def __init__(self):
        self.items: Dict[str, Application] = {}

    def add(self, application: Application) -> Application:
        application = application.model_copy(update={"id": application.id or new_id()})
        self.items[application.id] = application
        return application

    async def get(self, application_id: str) -> Optional[Application]:
        await asyncio.sleep(0)
        return self.items.get(application_id)

    async def find_for(self, job_id: str, applicant_id: str) -> Optional[Application]:
        await asyncio.sleep(0)
        for app in self.items.values():
            if app.job_id == job_id and app.applicant_id == applicant_id:
                return app
        return None

    async def create(self, application: Application) -> Application:
        await asyncio.sleep(0)
        # unique (job_id, applicant_id), checked and inserted without yielding
        for app in self.items.values():
            if app.job_id == application.job_id and app.applicant_id == application.applicant_id:
                raise ConflictError("You have already applied to this job")
        return self.add(application)

    async def transition(self, application_id: str, status: str, rejection_reason=None) -> Optional[Application]:
        await asyncio.sleep(0)
        app = self.items.get(application_id)
        if app is None or app.status != PENDING:
            return None
        self.items[application_id] = app.model_copy(update={"status": status, "rejection_reason": rejection_reason})
        return self.items[application_id]

    async def revert_to_pending(self, application_id: str) -> None:
        await asyncio.sleep(0)
        app = self.items[application_id]
        if app.status == SELECTED:
            self.items[application_id] = app.model_copy(update={"status": PENDING, "rejection_reason": None})

    async def list_for_applicant(self, applicant_id: str) -> List[Application]:
        await asyncio.sleep(0)
        apps = [a for a in self.items.values() if a.applicant_id == applicant_id]
        return sorted(apps, key=lambda a: a.applied_at, reverse=True)

    async def list_for_jobs(self, job_ids: List[str]) -> List[Application]:
        await asyncio.sleep(0)
        apps = [a for a in self.items.values() if a.job_id in job_ids]
        return sorted(apps, key=lambda a: a.applied_at, reverse=True)

    async def count(self) -> int:
        return len(self.items)


class InMemoryResumeCheckRepository:
    def __init__(self):
        self.items: Dict[str, ResumeCheck] = {}

    async def count_between(self, user_id: str, start: datetime, end: datetime) -> int:
        await asyncio.sleep(0)
        return sum(1 for c in self.items.values() if c.user_id == user_id and start <= c.checked_at < end)

    async def create(self, check: ResumeCheck) -> ResumeCheck:
        await asyncio.sleep(0)
        for existing in self.items.values():
            if existing.user_id == check.user_id and existing.check_day == check.check_day:
                raise ConflictError(f"Resume already checked on {check.check_day}")
        check = check.model_copy(update={"id": new_id()})
        self.items[check.id] = check
        return check

    async def recent(self, user_id: str, limit: int = 10) -> List[ResumeCheck]:
        await asyncio.sleep(0)
        mine = sorted((c for c in self.items.values() if c.user_id == user_id), key=lambda c: c.checked_at, reverse=True)
        return mine[:limit]


class InMemoryUserRepository:
    def __init__(self):
        self.items: Dict[str, User] = {}

    def add(self, user: User) -> User:
        user = user.model_copy(update={"id": user.id or new_id()})
        self.items[user.id] = user
        return user

    async def get(self, user_id: str) -> Optional[User]:
        return self.items.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.items.values() if u.email == email), None)

    async def create(self, user: User) -> User:
        if await self.get_by_email(user.email):
            raise ConflictError("User already exists")
        return self.add(user)

    async def set_blocked(self, user_id: str, blocked: bool) -> bool:
        if user_id not in self.items:
            return False
        self.items[user_id] = self.items[user_id].model_copy(update={"is_blocked": blocked})
        return True

    async def list_all(self, limit: int = 1000) -> List[User]:
        return list(self.items.values())[:limit]

    async def count(self, role: Optional[str] = None) -> int:
        return sum(1 for u in self.items.values() if role is None or u.role == role)


class InMemoryResumeStorage:
    def __init__(self):
        self.files: Dict[str, dict] = {}

    async def save(self, content: bytes, filename: str, owner_id: str, content_type=None) -> str:
        file_id = new_id()
        self.files[file_id] = {"content": content, "filename": filename, "user_id": owner_id, "content_type": content_type}
        return f"/resume/files/{file_id}"

    async def open(self, file_id: str):
        if file_id not in self.files:
            raise NotFoundError("Resume file not found")
        f = self.files[file_id]
        return f["content"], f["filename"], {"user_id": f["user_id"], "content_type": f["content_type"]}

    async def delete(self, path: str) -> None:
        self.files.pop(path.rsplit("/", 1)[-1], None)


class StubAnalyzer:
    """Deterministic stand-in for the oracle client."""

    def __init__(self, result: Optional[ResumeAnalysis] = None, error: Optional[Exception] = None):
        self.result = result or ResumeAnalysis(
            score=82,
            strong_keywords=["Python", "FastAPI"],
            missing_keywords=["Kubernetes"],
            suggestions=["Quantify your impact"],
        )
        self.error = error
        self.calls = []

    async def analyze(self, resume_text: str, job_description: str) -> ResumeAnalysis:
        self.calls.append(("analyze", resume_text, job_description))
        if self.error:
            raise self.error
        return self.result

    async def review(self, resume_text: str) -> ResumeAnalysis:
        self.calls.append(("review", resume_text))
        if self.error:
            raise self.error
        return self.result


def make_job(openings: int = 1, recruiter_id: str = RECRUITER_ID, **overrides) -> Job:
    fields = dict(
        recruiter_id=recruiter_id,
        title="Backend Developer",
        description="Build Python services with FastAPI and MongoDB",
        company="Acme",
        location="Pune",
        category="Backend Developer",
        openings=openings,
        deadline=datetime(2030, 1, 1, tzinfo=timezone.utc),
        constraints="Full-time, Remote",
        salary="12 LPA",
    )
    fields.update(overrides)
    return Job(**fields)


def make_application(job_id: str, applicant_id: Optional[str] = None, **overrides) -> Application:
    fields = dict(
        job_id=job_id,
        applicant_id=applicant_id or new_id(),
        applied_at=datetime(2026, 10, 1, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Application(**fields)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def jobs():
    return InMemoryJobRepository()


@pytest.fixture
def applications():
    return InMemoryApplicationRepository()


@pytest.fixture
def resume_checks():
    return InMemoryResumeCheckRepository()


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def storage():
    return InMemoryResumeStorage()


@pytest.fixture
def analyzer():
    return StubAnalyzer()


@pytest.fixture
def manager(jobs, applications, analyzer, storage, clock):
    return ApplicationLifecycleManager(jobs, applications, analyzer, storage, clock=clock)


@pytest.fixture
def limiter(resume_checks, analyzer, storage, clock):
    return ResumeCheckLimiter(resume_checks, analyzer, storage, clock=clock)
