from datetime import datetime
from typing import List, Literal, Optional

from .base import MongoBaseModel, PyObjectId

PENDING = "pending"
SELECTED = "selected"
REJECTED = "rejected"

ApplicationStatus = Literal["pending", "selected", "rejected"]


class Application(MongoBaseModel):
    job_id: PyObjectId
    applicant_id: PyObjectId
    resume: Optional[str] = None
    ats_score: int = 0
    strong_keywords: List[str] = []
    missing_keywords: List[str] = []
    status: ApplicationStatus = PENDING
    rejection_reason: Optional[str] = None
    applied_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def is_terminal(self) -> bool:
        return self.status != PENDING
