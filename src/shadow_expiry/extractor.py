"""Derive calendar dates from the day-count fields of a shadow entry."""

import logging
from datetime import datetime, timedelta

from shadow_expiry.database import AccountDatabase
from shadow_expiry.models import NEVER_MARKER, AccountPolicyRecord, DayCount, ExpirationInfo

logger = logging.getLogger(__name__)


def time_from_epoch(value: int | DayCount) -> datetime:
    """
    Convert a day count since 1970-01-01 to a local datetime.

    -1 (or a never DayCount) maps to NEVER_MARKER.
    """
    count = value if isinstance(value, DayCount) else DayCount.from_raw(value)
    if count.is_never:
        return NEVER_MARKER
    return NEVER_MARKER + timedelta(days=count.days)


def expiration_from_record(record: AccountPolicyRecord) -> ExpirationInfo:
    last_changed = time_from_epoch(record.last_changed)
    inactive = time_from_epoch(record.inactive)

    if record.password_max.is_never:
        # expiry disabled, so inactivity after expiry never applies either
        expires = NEVER_MARKER
        inactive = NEVER_MARKER
    else:
        expires = last_changed + timedelta(days=record.max_days)

    return ExpirationInfo(
        password_last_changed=last_changed,
        password_inactive=inactive,
        password_expires=expires,
        account_expired=time_from_epoch(record.account_expire),
        min=record.min_days,
        max=record.max_days,
        warning=record.warn_days,
        expirable=record.expire_day > -1,
    )


def lookup(login: str, database: AccountDatabase) -> ExpirationInfo | None:
    """
    Return the ExpirationInfo for *login*, or None when it has no shadow entry.

    A non-strict ShadowFileDatabase that cannot be read has no entries, so
    every lookup against it returns None.
    """
    login = str(login or "").strip()
    if not login:
        return None
    record = database.lookup(login)
    if record is None:
        logger.debug("No shadow entry for %s", login)
        return None
    return expiration_from_record(record)
