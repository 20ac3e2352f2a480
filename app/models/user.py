from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr

from .base import MongoBaseModel

UserRole = Literal["recruiter", "applicant", "admin"]


class User(MongoBaseModel):
    name: str
    email: EmailStr
    password: str
    role: UserRole
    phone: str = ""
    is_blocked: bool = False
    created_at: Optional[datetime] = None
