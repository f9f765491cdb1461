"""
User model for BoiBritto.
Represents registered users; identity comes from Firebase.
"""

from pydantic import Field

from .common import CamelModel, TimestampedOut


class SignupRequest(CamelModel):
    """Body of POST /auth/signup. Email, display name and avatar come from the token."""

    username: str = Field(..., min_length=1, max_length=50)
    bio: str | None = Field(None, max_length=500)
    interested_genres: list[str] = Field(default_factory=list)


class UserOut(TimestampedOut):
    """Own profile (never exposes the Firebase uid)."""

    email: str
    username: str
    display_name: str
    bio: str | None = None
    avatar: str | None = None
    interested_genres: list[str] = Field(default_factory=list)
