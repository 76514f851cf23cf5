"""
Core dependencies for route protection
"""

from fastapi import Depends, HTTPException, Request, status
from fitclub.core.auth_gateway import AuthGateway, CallerIdentity, extract_bearer_token
from fitclub.database.supabase_client import get_supabase
from supabase import Client
import logging

logger = logging.getLogger(__name__)


def get_auth_gateway(supabase: Client = Depends(get_supabase)) -> AuthGateway:
    return AuthGateway(supabase)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_caller(
    request: Request,
    gateway: AuthGateway = Depends(get_auth_gateway)
) -> CallerIdentity:
    """Resolve the verified caller for a protected route, or fail with 401"""
    caller = gateway.authenticate(request)
    if caller is None:
        raise _unauthorized()
    return caller


def get_current_token(
    request: Request,
    caller: CallerIdentity = Depends(get_current_caller)
) -> str:
    """Bearer token of an already authenticated request"""
    token = extract_bearer_token(request)
    if token is None:
        raise _unauthorized()
    return token
