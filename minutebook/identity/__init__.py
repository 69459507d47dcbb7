"""User identity: LDAP import and the user directory."""

from minutebook.identity.ldap_import import import_users, is_inactive, transform_user
from minutebook.identity.schemas import InactiveStrategy, InactiveUsersSettings, LdapSettings
from minutebook.identity.user_directory import UserDirectory

__all__ = [
    "InactiveStrategy",
    "InactiveUsersSettings",
    "LdapSettings",
    "UserDirectory",
    "import_users",
    "is_inactive",
    "transform_user",
]
