# ========================================
# app/schemas/job.py
# ========================================

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.job import JobCategory


# 1. Input: What the Recruiter sends
class JobCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str = Field(min_length=1)
    category: JobCategory
    openings: int = Field(ge=1)
    deadline: datetime
    constraints: Optional[str] = None  # free text, e.g. "Remote, Full-time"
    salary: Optional[str] = None


# 2. Input: Update existing job
class JobUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    category: Optional[JobCategory] = None
    openings: Optional[int] = Field(default=None, ge=0)
    deadline: Optional[datetime] = None
    constraints: Optional[str] = None
    salary: Optional[str] = None


# 3. Output
class JobResponse(BaseModel):
    id: str
    recruiter_id: str
    title: str
    description: str
    company: str
    location: str
    category: str
    openings: int
    deadline: datetime
    constraints: Optional[str] = None
    salary: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
