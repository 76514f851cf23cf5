"""
Bearer-token authentication against Supabase Auth.

The gateway never raises: a request either yields a ``CallerIdentity`` or
``None`` (unauthenticated). Turning ``None`` into a 401 is the job of the
``get_current_caller`` dependency.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.security.utils import get_authorization_scheme_param
from pydantic import BaseModel, Field
from supabase import Client

logger = logging.getLogger(__name__)


class CallerIdentity(BaseModel):
    id: str
    claims: Dict[str, Any] = Field(default_factory=dict)

    @property
    def email(self) -> Optional[str]:
        return self.claims.get("email")


def extract_bearer_token(request: Request) -> Optional[str]:
    """Return the token from ``Authorization: Bearer <token>`` or None."""
    authorization = request.headers.get("Authorization")
    scheme, token = get_authorization_scheme_param(authorization)
    if not authorization or scheme.lower() != "bearer" or not token:
        return None
    return token


class AuthGateway:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def verify_token(self, token: str) -> Optional[CallerIdentity]:
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.debug("Token verification failed: %s", e)
            return None
        if not user_response or not user_response.user:
            return None
        user = user_response.user
        return CallerIdentity(
            id=user.id,
            claims={
                "email": user.email,
                "role": getattr(user, "role", None),
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
            },
        )

    def authenticate(self, request: Request) -> Optional[CallerIdentity]:
        token = extract_bearer_token(request)
        if token is None:
            return None
        return self.verify_token(token)
