from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List

from fitclub.modules.users.schemas import MembershipType


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # anon key, used for password sign-in only
    supabase_service_role_key: Optional[str] = None  # bypasses RLS; ownership is checked in the app

    # Membership defaults for new profiles
    default_membership_type: MembershipType = "basic"
    membership_trial_days: int = 30

    # App
    app_name: str = "fitclub-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    api_prefix: str = "/api"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    auth_rate_limit: str = "10/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
