from datetime import datetime
from pydantic import BaseModel, ConfigDict

from shadow_expiry.primitives import NEVER_EXPIRES_MAX

from .base import DayCount

# 1970-01-01 00:00 local time. Stands for "does not apply" in every derived date.
NEVER_MARKER = datetime(1970, 1, 1)


def is_never(value: datetime) -> bool:
    return value == NEVER_MARKER


class ExpirationInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    password_last_changed: datetime
    password_inactive: datetime
    password_expires: datetime
    account_expired: datetime
    min: int
    max: int
    warning: int
    expirable: bool

    @property
    def never_expires(self) -> bool:
        return DayCount.from_raw(self.max, sentinel=NEVER_EXPIRES_MAX).is_never


class ExpirableLogin(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str
    expiration: ExpirationInfo
