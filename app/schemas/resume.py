from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class ResumeCheckResponse(BaseModel):
    id: str
    resume: str
    ats_score: int
    strong_keywords: List[str] = []
    missing_keywords: List[str] = []
    suggestions: List[str] = []
    checked_at: datetime

    class Config:
        from_attributes = True


class ResumeCheckResult(ResumeCheckResponse):
    message: str = "Resume checked successfully"


class ResumeHistoryResponse(BaseModel):
    history: List[ResumeCheckResponse]
    can_check_today: bool
    next_check_time: Optional[datetime] = None


class KeywordSuggestions(BaseModel):
    strong: List[str] = []
    missing: List[str] = []


class ResumeScoreResponse(BaseModel):
    score: int
    suggestions: KeywordSuggestions
