# ========================================
# app/utils/errors.py
# ========================================

from datetime import datetime
from typing import Optional


class JobBoardError(Exception):
    """Base class for every error the core surfaces to a caller."""

    category = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"category": self.category, "detail": self.message}


class NotFoundError(JobBoardError):
    category = "not_found"
    status_code = 404


class ForbiddenError(JobBoardError):
    category = "forbidden"
    status_code = 403


class ConflictError(JobBoardError):
    category = "conflict"
    status_code = 409


class BadRequestError(JobBoardError):
    category = "bad_request"
    status_code = 400


class InvalidStateError(JobBoardError):
    category = "invalid_state"
    status_code = 400


class RateLimitedError(JobBoardError):
    category = "rate_limited"
    status_code = 429

    def __init__(self, message: str, next_check_time: Optional[datetime] = None):
        super().__init__(message)
        self.next_check_time = next_check_time

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.next_check_time is not None:
            body["next_check_time"] = self.next_check_time.isoformat()
        return body
