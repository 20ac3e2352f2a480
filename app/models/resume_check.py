from datetime import datetime
from typing import List

from .base import MongoBaseModel, PyObjectId


class ResumeCheck(MongoBaseModel):
    user_id: PyObjectId
    resume: str
    ats_score: int
    strong_keywords: List[str] = []
    missing_keywords: List[str] = []
    suggestions: List[str] = []
    checked_at: datetime
    # UTC calendar day "YYYY-MM-DD"; unique per user
    check_day: str
