from pydantic import Field
from typing import Literal, Optional
from datetime import datetime

from fitclub.core.schemas import CamelModel

MembershipType = Literal["basic", "premium", "vip"]


class UserProfileUpdate(CamelModel):
    # Membership fields are managed server-side and cannot be set here
    display_name: Optional[str] = Field(default=None, max_length=100)


class UserProfileResponse(CamelModel):
    id: str
    email: str
    display_name: Optional[str] = None
    membership_type: MembershipType = "basic"
    membership_expiry: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
