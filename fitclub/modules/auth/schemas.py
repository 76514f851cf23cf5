from pydantic import EmailStr, Field
from typing import Optional

from fitclub.core.schemas import CamelModel


class SignUpRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)
    display_name: Optional[str] = None


class SignUpResponse(CamelModel):
    success: bool = True
    user_id: str


class SignInRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    expires_in: Optional[int] = None


class PasswordResetRequest(CamelModel):
    email: EmailStr
