"""Patient registration, login (patients and the environment-configured admin),
profile maintenance and password changes."""

from fastapi import APIRouter, Depends, Request

from afyaconnect.api.deps import get_current_user
from afyaconnect.api.middleware.rate_limiter import ACCOUNT_LIMIT, limiter
from afyaconnect.models.auth import (
    LoginRequest,
    PasswordChange,
    ProfileUpdate,
    ProfileUpdated,
    RegisterRequest,
    TokenResponse,
    UserProfile,
)
from afyaconnect.models.common import SuccessResponse
from afyaconnect.services.auth import auth_service, create_token

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=TokenResponse, status_code=201)
@limiter.limit(ACCOUNT_LIMIT)
async def register(request: Request, payload: RegisterRequest):
    user = auth_service.register(payload)
    return TokenResponse(token=create_token(user), user=UserProfile(**user))


@router.post("/login", response_model=TokenResponse)
@limiter.limit(ACCOUNT_LIMIT)
async def login(request: Request, payload: LoginRequest):
    user = auth_service.login(payload.email, payload.password)
    return TokenResponse(token=create_token(user), user=UserProfile(**user))


@router.get("/profile", response_model=UserProfile)
async def profile(user: dict = Depends(get_current_user)):
    return user


@router.put("/profile", response_model=ProfileUpdated)
async def update_profile(payload: ProfileUpdate, user: dict = Depends(get_current_user)):
    updated = auth_service.update_profile(user["id"], payload)
    return ProfileUpdated(message="Profile updated successfully", user=UserProfile(**updated))


@router.post("/change-password", response_model=SuccessResponse)
@limiter.limit(ACCOUNT_LIMIT)
async def change_password(
    request: Request, payload: PasswordChange, user: dict = Depends(get_current_user)
):
    auth_service.change_password(user["id"], payload.current_password, payload.new_password)
    return SuccessResponse(message="Password changed successfully")
