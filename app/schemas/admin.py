# ========================================
# app/schemas/admin.py
# ========================================

from pydantic import BaseModel


class PlatformStats(BaseModel):
    total_users: int
    total_recruiters: int
    total_applicants: int
    total_jobs: int
    total_applications: int


class AnalyticsResponse(BaseModel):
    success: bool = True
    stats: PlatformStats


class MessageResponse(BaseModel):
    success: bool = True
    message: str
