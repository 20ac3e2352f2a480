# ========================================
# app/routes/user.py
# ========================================

from fastapi import APIRouter, HTTPException, Depends, status
from loguru import logger

from app.dependencies import get_user_repository
from app.models.user import User
from app.repositories.users import UserRepository
from app.schemas.user import UserCreate, UserResponse, UserLogin, TokenResponse
from app.utils.auth import create_access_token, get_current_user
from app.utils.security import get_password_hash, verify_password

router = APIRouter(prefix="/users", tags=["Users"])


def _token_for(user: User) -> TokenResponse:
    access_token = create_access_token(data={"sub": user.id, "role": user.role})
    return TokenResponse(access_token=access_token, user=UserResponse.model_validate(user))


# ✅ 1. REGISTER
@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate, users: UserRepository = Depends(get_user_repository)):
    """Register a new recruiter or applicant and hand back a token."""

    if await users.get_by_email(user.email):
        raise HTTPException(status_code=400, detail="User already exists")

    created = await users.create(
        User(
            name=user.name,
            email=user.email,
            password=get_password_hash(user.password),
            role=user.role,
            phone=user.phone or "",
        )
    )
    logger.info(f"Registered {created.role} {created.id}")
    return _token_for(created)


# ✅ 2. LOGIN
@router.post("/login", response_model=TokenResponse)
async def login(user_credentials: UserLogin, users: UserRepository = Depends(get_user_repository)):
    user = await users.get_by_email(user_credentials.email)
    if not user or not verify_password(user_credentials.password, user.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if user.is_blocked:
        raise HTTPException(status_code=403, detail="Account is blocked")

    return _token_for(user)


# ✅ 3. GET MY PROFILE
@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)
