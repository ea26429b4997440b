"""FastAPI endpoints for accounts and authentication."""

from fastapi import APIRouter, Depends

from storefront.api.auth import current_user
from storefront.api.schemas import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    ResetTokenResponse,
    StatusResponse,
    TokenResponse,
    UserResponse,
)
from storefront.user.authentication import login, refresh_token
from storefront.user.password import change_password, request_password_reset, reset_password
from storefront.user.registration import register_user

auth_router = APIRouter(prefix="/auth", tags=["auth"])
user_router = APIRouter(prefix="/users", tags=["users"])


@auth_router.post("/register", status_code=201, response_model=RegisterResponse)
async def register(body: RegisterRequest) -> RegisterResponse:
    user_id, token = register_user(name=body.name, email=body.email, password=body.password)
    return RegisterResponse(user_id=user_id, token=token)


@auth_router.post("/login", response_model=LoginResponse)
async def sign_in(body: LoginRequest) -> LoginResponse:
    token, user = login(body.email, body.password)
    return LoginResponse(token=token, user=UserResponse.from_user(user))


@auth_router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest) -> TokenResponse:
    return TokenResponse(token=refresh_token(body.token))


@auth_router.post("/forgot-password", response_model=ResetTokenResponse)
async def forgot_password(body: ForgotPasswordRequest) -> ResetTokenResponse:
    # The token is returned directly; there is no email link flow
    return ResetTokenResponse(reset_token=request_password_reset(body.email))


@auth_router.post("/reset-password/{token}", response_model=StatusResponse)
async def reset(token: str, body: ResetPasswordRequest) -> StatusResponse:
    reset_password(token, body.password)
    return StatusResponse(message="Password reset successful")


@user_router.get("/me", response_model=UserResponse)
async def profile(user=Depends(current_user)) -> UserResponse:
    return UserResponse.from_user(user)


@user_router.put("/me/password", response_model=StatusResponse)
async def update_password(body: ChangePasswordRequest, user=Depends(current_user)) -> StatusResponse:
    change_password(str(user.id), body.old_password, body.new_password)
    return StatusResponse(message="Password changed successfully")
