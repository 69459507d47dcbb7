"""User documents."""

from typing import Any

from pydantic import BaseModel, EmailStr, Field

from minutebook.models.base import Document


class UserEmail(BaseModel):
    """An email address of a user."""

    address: EmailStr
    verified: bool = Field(default=False)
    from_ldap: bool = Field(default=False)


class UserDoc(Document):
    """A user account. Authentication is handled elsewhere."""

    username: str = Field(description="Unique login name")
    emails: list[UserEmail] = Field(default_factory=list)
    profile: dict[str, Any] = Field(default_factory=dict)
    is_ldap_user: bool = Field(default=False)
    is_inactive: bool = Field(default=False)

    def profile_name_with_fallback(self) -> str:
        """Profile name if set, otherwise the username."""
        name = self.profile.get("name")
        return name if name else self.username
