from fastapi import APIRouter, Depends, Request
from fitclub.config import settings
from fitclub.core.dependencies import get_current_token
from fitclub.core.rate_limit import limiter
from fitclub.core.schemas import SuccessResponse
from fitclub.database.supabase_client import get_supabase, get_auth_client
from fitclub.modules.auth.schemas import (
    SignUpRequest, SignUpResponse, SignInRequest, TokenResponse, PasswordResetRequest
)
from fitclub.modules.auth.service import AuthService
from supabase import Client

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    auth_client: Client = Depends(get_auth_client)
) -> AuthService:
    return AuthService(supabase, auth_client)


@router.post("/signup", response_model=SignUpResponse)
@limiter.limit(settings.auth_rate_limit)
def signup(
    request: Request,
    signup_data: SignUpRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new member"""
    return service.sign_up(signup_data)


@router.post("/signin", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
def signin(
    request: Request,
    signin_data: SignInRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Sign in and get an access token"""
    return service.sign_in(signin_data)


@router.post("/signout", response_model=SuccessResponse)
def signout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Sign out and revoke the token's sessions"""
    service.sign_out(token)
    return SuccessResponse()


@router.post("/reset-password", response_model=SuccessResponse)
@limiter.limit(settings.auth_rate_limit)
def reset_password(
    request: Request,
    reset_data: PasswordResetRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Send a password reset email; always succeeds"""
    service.request_password_reset(reset_data.email)
    return SuccessResponse()
