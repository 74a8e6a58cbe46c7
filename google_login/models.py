"""
Response models for Google's token and userinfo endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class TokenResponse(BaseModel):
    """Body returned by https://oauth2.googleapis.com/token."""
    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(min_length=1)
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    id_token: Optional[str] = None
    scope: Optional[str] = None


class UserInfo(BaseModel):
    """Profile returned by Google's v3 userinfo endpoint."""
    model_config = ConfigDict(extra="ignore")

    sub: str = Field(min_length=1)      # stable Google account id
    email: Optional[str] = None
    email_verified: bool = False
    name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    picture: Optional[str] = None
    locale: Optional[str] = None

    @property
    def open_id(self) -> str:
        return self.sub

    @property
    def username(self) -> Optional[str]:
        return self.name

    @property
    def profile_url(self) -> Optional[str]:
        return self.picture
