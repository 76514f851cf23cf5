from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fitclub.core.auth_gateway import CallerIdentity
from fitclub.core.dependencies import get_current_caller
from fitclub.core.schemas import SuccessResponse
from fitclub.database.supabase_client import get_supabase
from fitclub.modules.workouts.schemas import (
    WorkoutCreate, WorkoutResponse, WorkoutListResponse,
    WorkoutCreatedResponse, WorkoutStats
)
from fitclub.modules.workouts.service import WorkoutService
from supabase import Client

router = APIRouter(prefix="/workouts", tags=["workouts"])


def get_workout_service(supabase: Client = Depends(get_supabase)) -> WorkoutService:
    return WorkoutService(supabase)


@router.get("", response_model=WorkoutListResponse)
def list_workouts(
    caller: CallerIdentity = Depends(get_current_caller),
    service: WorkoutService = Depends(get_workout_service)
):
    """List the caller's workouts, newest first"""
    return WorkoutListResponse(workouts=service.list_workouts(caller))


@router.post("", response_model=WorkoutCreatedResponse)
def create_workout(
    workout_data: WorkoutCreate,
    caller: CallerIdentity = Depends(get_current_caller),
    service: WorkoutService = Depends(get_workout_service)
):
    """Log a new workout for the caller"""
    return service.create_workout(workout_data, caller)


@router.get("/stats", response_model=WorkoutStats)
def get_workout_stats(
    caller: CallerIdentity = Depends(get_current_caller),
    service: WorkoutService = Depends(get_workout_service)
):
    """Aggregate statistics over the caller's workouts"""
    return service.get_stats(caller)


@router.get("/{workout_id}", response_model=WorkoutResponse)
def get_workout(
    workout_id: str,
    caller: CallerIdentity = Depends(get_current_caller),
    service: WorkoutService = Depends(get_workout_service)
):
    return service.get_workout(workout_id, caller)


@router.put("/{workout_id}", response_model=SuccessResponse)
def update_workout(
    workout_id: str,
    workout_data: Dict[str, Any] = Body(...),
    caller: CallerIdentity = Depends(get_current_caller),
    service: WorkoutService = Depends(get_workout_service)
):
    """Partially update a workout (owner only)"""
    return service.update_workout(workout_id, workout_data, caller)


@router.delete("/{workout_id}", response_model=SuccessResponse)
def delete_workout(
    workout_id: str,
    caller: CallerIdentity = Depends(get_current_caller),
    service: WorkoutService = Depends(get_workout_service)
):
    """Delete a workout (owner only)"""
    return service.delete_workout(workout_id, caller)
