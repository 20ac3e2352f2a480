from pydantic import BaseModel, EmailStr, Field
from typing import Literal, Optional


# 1. For Registration (Input)
class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Literal["recruiter", "applicant"]
    phone: Optional[str] = ""


# 2. For Login (Input)
class UserLogin(BaseModel):
    email: EmailStr
    password: str


# 3. For Responses (Output)
class UserResponse(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: str
    phone: Optional[str] = ""
    is_blocked: bool = False

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
