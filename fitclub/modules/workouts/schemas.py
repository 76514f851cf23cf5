from pydantic import Field, field_validator, model_validator
from typing import Optional, List, Dict
from datetime import datetime

from fitclub.core.schemas import CamelModel


class WorkoutCreate(CamelModel):
    # user_id is deliberately absent: owner comes from the verified token
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    duration: int = Field(gt=0)  # minutes
    calories: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = ""

    @field_validator("notes")
    @classmethod
    def default_notes(cls, v: Optional[str]) -> str:
        return v or ""


class WorkoutUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[str] = Field(default=None, min_length=1)
    duration: Optional[int] = Field(default=None, gt=0)
    calories: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for field in ("name", "type", "duration"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        if "notes" in self.model_fields_set and self.notes is None:
            self.notes = ""
        return self


class WorkoutResponse(CamelModel):
    id: str
    user_id: str
    name: str
    type: str
    duration: int
    calories: Optional[int] = None
    notes: Optional[str] = ""
    created_at: datetime
    updated_at: Optional[datetime] = None


class WorkoutListResponse(CamelModel):
    workouts: List[WorkoutResponse]


class WorkoutCreatedResponse(CamelModel):
    success: bool = True
    workout_id: str


class WeeklyStat(CamelModel):
    week: str  # ISO week, e.g. 2024-W18
    count: int
    duration: int


class WorkoutStats(CamelModel):
    total_workouts: int = 0
    total_duration: int = 0
    total_calories: int = 0
    average_duration: float = 0.0
    workouts_by_type: Dict[str, int] = Field(default_factory=dict)
    weekly_stats: List[WeeklyStat] = Field(default_factory=list)
