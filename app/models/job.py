from datetime import datetime
from typing import Literal, Optional

from .base import MongoBaseModel, PyObjectId

JobCategory = Literal[
    "Software Engineer",
    "Full Stack Developer",
    "Frontend Developer",
    "Backend Developer",
    "Data Scientist",
    "DevOps Engineer",
    "UI/UX Designer",
    "Product Manager",
    "Other",
]


class Job(MongoBaseModel):
    recruiter_id: PyObjectId
    title: str
    description: str
    company: str
    location: str
    category: JobCategory
    openings: int
    deadline: datetime
    constraints: Optional[str] = None
    salary: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
