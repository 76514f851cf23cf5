import logging
from typing import Optional
from supabase import Client
from fitclub.modules.auth.schemas import (
    SignUpRequest, SignUpResponse, SignInRequest, TokenResponse
)
from fitclub.modules.users.service import UserService
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def _is_duplicate_user_error(error_message: str) -> bool:
    lowered = error_message.lower()
    return "already registered" in lowered or "already exists" in lowered or "already been registered" in lowered


class AuthService:
    def __init__(self, supabase: Client, auth_client: Optional[Client] = None):
        self.supabase = supabase
        self.auth_client = auth_client or supabase

    def sign_up(self, signup_data: SignUpRequest) -> SignUpResponse:
        """Create an identity with Supabase Auth and its companion user profile"""
        user_metadata = {}
        if signup_data.display_name:
            user_metadata["display_name"] = signup_data.display_name

        try:
            auth_response = self.supabase.auth.admin.create_user({
                "email": signup_data.email,
                "password": signup_data.password,
                "email_confirm": True,
                "user_metadata": user_metadata
            })
        except Exception as e:
            error_message = str(e)
            if _is_duplicate_user_error(error_message):
                raise HTTPException(status_code=400, detail="User already exists")
            if getattr(e, "status", None) in (400, 422):
                raise HTTPException(status_code=400, detail=error_message)
            logger.exception("Signup error: %s", e)
            raise HTTPException(status_code=500, detail=error_message or "Failed to create user")

        if not auth_response or not auth_response.user:
            raise HTTPException(status_code=500, detail="Failed to create user")

        user_id = auth_response.user.id
        try:
            UserService(self.supabase).create_profile(
                user_id,
                auth_response.user.email or signup_data.email,
                signup_data.display_name
            )
        except HTTPException:
            self._rollback_identity(user_id)
            raise

        logger.info("User %s signed up", user_id)
        return SignUpResponse(user_id=user_id)

    def _rollback_identity(self, user_id: str) -> None:
        """Delete an identity whose profile could not be written"""
        try:
            self.supabase.auth.admin.delete_user(user_id)
            logger.warning("Rolled back identity %s after profile write failure", user_id)
        except Exception as e:
            logger.error("Failed to roll back identity %s, it has no profile: %s", user_id, e)

    def sign_in(self, signin_data: SignInRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.auth_client.auth.sign_in_with_password({
                "email": signin_data.email,
                "password": signin_data.password
            })
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            logger.exception("Signin error: %s", e)
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

        if not auth_response or not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid email or password")

        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email or signin_data.email,
            expires_in=getattr(auth_response.session, "expires_in", None)
        )

    def sign_out(self, token: str) -> bool:
        """Revoke the sessions behind a token. Tokens are stateless JWTs and expire on their own."""
        try:
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning("Sign-out failed: %s", e)
            return False

    def request_password_reset(self, email: str) -> None:
        """Ask Supabase to send a reset email. Failures are not reported to the caller."""
        try:
            self.auth_client.auth.reset_password_for_email(email)
        except Exception as e:
            logger.warning("Password reset request failed: %s", e)
