"""Import users from LDAP directory entries.

Entries are plain attribute dicts as returned by a directory search.
Users are matched by username: existing users are updated in place,
unknown ones inserted.
"""

from typing import Any

import structlog

from minutebook.events.bus import EventBus
from minutebook.events.types import UsersImported
from minutebook.identity.schemas import InactiveStrategy, LdapSettings
from minutebook.models.user import UserDoc, UserEmail
from minutebook.repositories.users_repo import UsersRepository

logger = structlog.get_logger()

ACCOUNT_DISABLE = 0x2


def _first(value: Any) -> Any:
    if isinstance(value, list | tuple):
        return value[0] if value else None
    return value


def is_inactive(ldap_settings: LdapSettings, entry: dict[str, Any]) -> bool:
    """Decide whether an entry is a deactivated account."""
    inactive = ldap_settings.inactive_users
    if inactive.strategy is InactiveStrategy.USER_ACCOUNT_CONTROL:
        try:
            uac = int(_first(entry.get("userAccountControl")) or 0)
        except (TypeError, ValueError):
            return False
        return bool(uac & ACCOUNT_DISABLE)
    if inactive.strategy is InactiveStrategy.PROPERTY:
        if not inactive.properties:
            return False
        return all(
            str(_first(entry.get(attr))) == value for attr, value in inactive.properties.items()
        )
    return False


def transform_user(ldap_settings: LdapSettings, entry: dict[str, Any]) -> UserDoc:
    """Map a directory entry to a user document.

    Args:
        ldap_settings: Import options
        entry: LDAP attributes of one user

    Returns:
        Unsaved user document with a fresh id
    """
    username = _first(entry.get(ldap_settings.username_attribute))

    emails = []
    address = _first(entry.get(ldap_settings.email_attribute))
    if address:
        emails.append(UserEmail(address=address, verified=True, from_ldap=True))

    profile: dict[str, Any] = {
        field: entry[field] for field in ldap_settings.allow_listed_fields if field in entry
    }
    if ldap_settings.longname_attribute:
        longname = _first(entry.get(ldap_settings.longname_attribute))
        if longname:
            profile["name"] = longname

    return UserDoc(
        username=str(username) if username is not None else "",
        emails=emails,
        profile=profile,
        is_ldap_user=True,
        is_inactive=is_inactive(ldap_settings, entry),
    )


async def import_users(
    entries: list[dict[str, Any]],
    ldap_settings: LdapSettings,
    users_repo: UsersRepository,
    event_bus: EventBus | None = None,
) -> tuple[int, int]:
    """Upsert users from directory entries.

    Entries without a username are skipped. Existing users keep their
    id; emails, profile and the inactive flag are taken from the entry.

    Returns:
        (inserted, updated) counts
    """
    inserted = updated = 0
    for entry in entries:
        user = transform_user(ldap_settings, entry)
        if not user.username:
            logger.warning(
                "skipping ldap entry without username",
                attribute=ldap_settings.username_attribute,
            )
            continue

        existing = await users_repo.get_by_username(user.username)
        if existing is None:
            await users_repo.save(user)
            inserted += 1
            continue

        existing.emails = user.emails or existing.emails
        existing.profile = {**existing.profile, **user.profile}
        existing.is_ldap_user = True
        existing.is_inactive = user.is_inactive
        await users_repo.save(existing)
        updated += 1

    logger.info("ldap import finished", inserted=inserted, updated=updated)
    if event_bus:
        await event_bus.publish(UsersImported(inserted=inserted, updated=updated))
    return inserted, updated
