"""Password expiration warning policy."""

import math
from datetime import datetime

from shadow_expiry.models import ExpirationInfo, is_never
from shadow_expiry.primitives import SECONDS_PER_DAY


def local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def days_since_change(info: ExpirationInfo, now: datetime | None = None) -> int:
    """Days elapsed since the last password change, rounded up."""
    now = local_naive(now or datetime.now())
    elapsed = now - info.password_last_changed
    return int(math.ceil(elapsed.total_seconds() / SECONDS_PER_DAY))


def should_warn_now(info: ExpirationInfo, now: datetime | None = None) -> bool:
    """
    True when a login at *now* shows an expiration warning the user can act on.

    Inside the warning window the user is only able to change the password
    once min days have passed, so both bounds must hold. The window is empty
    when min > warning.
    """
    if info.never_expires:
        return False
    days = days_since_change(info, now)
    return info.min <= days <= info.warning


def password_expires_or_never(info: ExpirationInfo) -> datetime | None:
    if info.never_expires or is_never(info.password_expires):
        return None
    return info.password_expires
