import logging
from datetime import timedelta
from typing import Any, Dict, Optional

from fastapi import HTTPException
from pydantic import ValidationError

from fitclub.config import settings
from fitclub.core.auth_gateway import CallerIdentity
from fitclub.core.ownership import OwnedResourceService, utc_now
from fitclub.modules.users.schemas import UserProfileUpdate, UserProfileResponse

logger = logging.getLogger(__name__)


class UserService(OwnedResourceService):
    """User profiles. A profile is owned by the identity whose id it shares."""

    table = "user_profiles"
    owner_field = "id"
    resource_name = "User"

    def _to_response(self, row: Dict[str, Any]) -> UserProfileResponse:
        try:
            return UserProfileResponse.model_validate(row)
        except ValidationError as e:
            logger.error("Malformed user profile %s: %s", row.get("id"), e)
            raise HTTPException(status_code=500, detail=f"Malformed user profile {row.get('id')}")

    def create_profile(self, user_id: str, email: str, display_name: Optional[str] = None) -> UserProfileResponse:
        """Write the companion profile for a freshly created identity"""
        now = utc_now()
        payload = {
            "id": user_id,
            "email": email,
            "display_name": display_name,
            "membership_type": settings.default_membership_type,
            "membership_expiry": (now + timedelta(days=settings.membership_trial_days)).isoformat(),
            "created_at": now.isoformat(),
            "updated_at": now.isoformat(),
        }
        # Validated before the insert; a rejected profile writes nothing
        profile = self._to_response(payload)
        self.insert(payload)
        return profile

    def get_profile(self, user_id: str, caller: CallerIdentity) -> UserProfileResponse:
        return self._to_response(self.load_owned(user_id, caller))

    def update_profile(self, user_id: str, changes: Dict[str, Any], caller: CallerIdentity) -> UserProfileResponse:
        """Update the supplied profile fields and stamp updated_at"""
        self.load_owned(user_id, caller)
        user_data = self.parse_changes(UserProfileUpdate, changes)
        update_data = user_data.model_dump(exclude_unset=True)
        update_data["updated_at"] = utc_now().isoformat()
        return self._to_response(self.update_fields(user_id, update_data))
