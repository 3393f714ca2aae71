# user models — auth and profile schemas
# mirrors frontend useAuth user shape

from typing import Optional
from pydantic import BaseModel, Field


# auth

class UserCreate(BaseModel):
    email: str = Field(..., description="user email address")
    password: str = Field(..., min_length=8, description="plaintext password (min 8 chars)")
    name: str = Field(..., min_length=1, description="display name")


class UserLogin(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")
    token_type: str = "bearer"

    model_config = {"populate_by_name": True}


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., alias="refreshToken")

    model_config = {"populate_by_name": True}


# user responses

class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    is_premium: bool = Field(False, alias="isPremium")
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}
