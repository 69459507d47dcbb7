"""LDAP import settings.

Mirrors the ``ldap`` section of a deployment's settings file. Only the
options that affect how directory entries become user documents are
modelled; connecting to the directory is done elsewhere.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class InactiveStrategy(str, Enum):
    """How an entry is recognised as a deactivated account."""

    NONE = "none"
    USER_ACCOUNT_CONTROL = "userAccountControl"
    PROPERTY = "property"


class InactiveUsersSettings(BaseModel):
    """Inactive user detection.

    ``userAccountControl`` treats the ACCOUNTDISABLE flag (0x2) as
    inactive. ``property`` treats an entry as inactive if every
    configured attribute has the configured value. Unknown strategies
    fall back to ``none``.
    """

    strategy: InactiveStrategy = Field(default=InactiveStrategy.NONE)
    properties: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _unknown_strategy_is_none(cls, data: object) -> object:
        if isinstance(data, dict):
            valid = {s.value for s in InactiveStrategy}
            if data.get("strategy") not in valid:
                data = {**data, "strategy": InactiveStrategy.NONE.value}
        return data


class LdapSettings(BaseModel):
    """Options of the LDAP user import."""

    search_dn: str | None = Field(
        default=None, description="Legacy username attribute, used without property_map"
    )
    property_map: dict[str, str] = Field(
        default_factory=dict,
        description="Maps username, email and longname to LDAP attributes",
    )
    allow_listed_fields: list[str] = Field(
        default_factory=list, description="Attributes copied into the user profile"
    )
    inactive_users: InactiveUsersSettings = Field(default_factory=InactiveUsersSettings)

    @property
    def username_attribute(self) -> str:
        return self.property_map.get("username") or self.search_dn or "cn"

    @property
    def email_attribute(self) -> str:
        return self.property_map.get("email") or "mail"

    @property
    def longname_attribute(self) -> str | None:
        return self.property_map.get("longname")
