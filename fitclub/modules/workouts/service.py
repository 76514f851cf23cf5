import logging
from collections import Counter, defaultdict
from typing import Any, Dict, List

from fastapi import HTTPException
from pydantic import ValidationError

from fitclub.core.auth_gateway import CallerIdentity
from fitclub.core.ownership import OwnedResourceService, utc_now
from fitclub.core.schemas import SuccessResponse
from fitclub.modules.workouts.schemas import (
    WorkoutCreate, WorkoutUpdate, WorkoutResponse, WorkoutCreatedResponse,
    WorkoutStats, WeeklyStat
)

logger = logging.getLogger(__name__)


class WorkoutService(OwnedResourceService):
    table = "workouts"
    owner_field = "user_id"
    resource_name = "Workout"

    def _to_response(self, row: Dict[str, Any]) -> WorkoutResponse:
        try:
            return WorkoutResponse.model_validate(row)
        except ValidationError as e:
            logger.error("Malformed workout row %s: %s", row.get("id"), e)
            raise HTTPException(status_code=500, detail=f"Malformed workout record {row.get('id')}")

    def list_workouts(self, caller: CallerIdentity) -> List[WorkoutResponse]:
        """All of the caller's workouts, newest first"""
        return [self._to_response(row) for row in self.list_owned(caller)]

    def create_workout(self, workout_data: WorkoutCreate, caller: CallerIdentity) -> WorkoutCreatedResponse:
        """Create a workout owned by the caller"""
        row = self.insert({
            "user_id": caller.id,
            "name": workout_data.name,
            "type": workout_data.type,
            "duration": workout_data.duration,
            "calories": workout_data.calories,
            "notes": workout_data.notes or "",
            "created_at": utc_now().isoformat(),
        })
        logger.info("Workout %s created for user %s", row["id"], caller.id)
        return WorkoutCreatedResponse(workout_id=row["id"])

    def get_workout(self, workout_id: str, caller: CallerIdentity) -> WorkoutResponse:
        return self._to_response(self.load_owned(workout_id, caller))

    def update_workout(self, workout_id: str, changes: Dict[str, Any], caller: CallerIdentity) -> SuccessResponse:
        """Merge the supplied fields into the workout; everything else is left as is"""
        self.load_owned(workout_id, caller)
        workout_data = self.parse_changes(WorkoutUpdate, changes)
        update_data = workout_data.model_dump(exclude_unset=True)
        update_data["updated_at"] = utc_now().isoformat()
        self.update_fields(workout_id, update_data)
        return SuccessResponse()

    def delete_workout(self, workout_id: str, caller: CallerIdentity) -> SuccessResponse:
        self.load_owned(workout_id, caller)
        self.remove(workout_id)
        logger.info("Workout %s deleted by user %s", workout_id, caller.id)
        return SuccessResponse()

    def get_stats(self, caller: CallerIdentity) -> WorkoutStats:
        """Totals, per-type counts and per-ISO-week figures over the caller's workouts"""
        workouts = self.list_workouts(caller)
        if not workouts:
            return WorkoutStats()

        total_duration = sum(w.duration for w in workouts)
        by_type = Counter(w.type for w in workouts)

        weeks: Dict[str, List[int]] = defaultdict(lambda: [0, 0])
        for w in workouts:
            year, week, _ = w.created_at.isocalendar()
            bucket = weeks[f"{year}-W{week:02d}"]
            bucket[0] += 1
            bucket[1] += w.duration

        return WorkoutStats(
            total_workouts=len(workouts),
            total_duration=total_duration,
            total_calories=sum(w.calories or 0 for w in workouts),
            average_duration=round(total_duration / len(workouts), 1),
            workouts_by_type=dict(by_type),
            weekly_stats=[
                WeeklyStat(week=label, count=count, duration=duration)
                for label, (count, duration) in sorted(weeks.items())
            ],
        )
