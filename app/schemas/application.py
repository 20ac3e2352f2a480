# ========================================
# app/schemas/application.py
# ========================================

from pydantic import AliasChoices, BaseModel, Field
from typing import Optional, List
from datetime import datetime


# 1. Input: Update Status (selected / rejected)
class ApplicationStatusUpdate(BaseModel):
    status: str
    rejection_reason: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("rejection_reason", "rejectionReason"),
    )


# 2. Output: What the applicant gets back after applying
class ApplicationSubmitResponse(BaseModel):
    message: str = "Application submitted"
    application_id: str
    ats_score: int
    strong_keywords: List[str] = []
    missing_keywords: List[str] = []


# 3. Output: Basic Response
class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    applicant_id: str
    resume: Optional[str] = None
    ats_score: int = 0
    strong_keywords: List[str] = []
    missing_keywords: List[str] = []
    status: str
    rejection_reason: Optional[str] = None
    applied_at: datetime

    class Config:
        from_attributes = True


# 4. Output: Applicant view, with job info
class ApplicationDetailResponse(ApplicationResponse):
    job_title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None


# 5. Output: Recruiter view, with candidate info
class ApplicationCandidateResponse(ApplicationResponse):
    job_title: Optional[str] = None
    applicant_name: Optional[str] = None
    applicant_email: Optional[str] = None
    applicant_phone: Optional[str] = None


class StatusUpdateResponse(BaseModel):
    message: str
    application: ApplicationResponse
