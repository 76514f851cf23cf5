from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fitclub.core.auth_gateway import CallerIdentity
from fitclub.core.dependencies import get_current_caller
from fitclub.database.supabase_client import get_supabase
from fitclub.modules.users.schemas import UserProfileResponse
from fitclub.modules.users.service import UserService
from supabase import Client

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("/me", response_model=UserProfileResponse)
def get_my_profile(
    caller: CallerIdentity = Depends(get_current_caller),
    service: UserService = Depends(get_user_service)
):
    """Profile of the authenticated caller"""
    return service.get_profile(caller.id, caller)


@router.get("/{user_id}", response_model=UserProfileResponse)
def get_user(
    user_id: str,
    caller: CallerIdentity = Depends(get_current_caller),
    service: UserService = Depends(get_user_service)
):
    """Get a profile by ID (only your own)"""
    return service.get_profile(user_id, caller)


@router.put("/{user_id}", response_model=UserProfileResponse)
def update_user(
    user_id: str,
    user_data: Dict[str, Any] = Body(...),
    caller: CallerIdentity = Depends(get_current_caller),
    service: UserService = Depends(get_user_service)
):
    """Update a profile (only your own)"""
    return service.update_profile(user_id, user_data, caller)
