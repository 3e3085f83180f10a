"""User profile.

Profiles are 1:1 with authenticated users and keyed by the user id. A user
may be verified without a profile; the username must be set before the
user may post.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from courseloop.domain.model.common import DomainModel, utcnow
from courseloop.domain.value import UserId, Username


class Profile(DomainModel):
    """Public profile of an authenticated user."""

    user_id: UserId
    username: Optional[Username] = None
    email: Optional[str] = None
    full_name: Optional[str] = Field(default=None, max_length=200)
    avatar_url: Optional[str] = None
    university: Optional[str] = Field(default=None, max_length=200)
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_onboarded(self) -> bool:
        return self.username is not None


class ProfilePatch(DomainModel):
    """Partial profile update. Fields left unset are not touched."""

    username: Optional[str] = None
    full_name: Optional[str] = Field(default=None, max_length=200)
    avatar_url: Optional[str] = None
    university: Optional[str] = Field(default=None, max_length=200)

    def supplied(self) -> dict[str, str]:
        """Fields that carry a value; absent, None and blank fields are dropped."""
        values = self.model_dump(exclude_unset=True, exclude_none=True)
        return {field: value for field, value in values.items() if value.strip()}
