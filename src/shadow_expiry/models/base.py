from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from shadow_expiry.primitives import MAX_DAY_COUNT, NEVER_EXPIRES_MAX, UNSET


class DayCount(BaseModel):
    """A day-count field that is either a finite number of days or never set."""

    model_config = ConfigDict(frozen=True)

    days: Optional[int] = None

    @classmethod
    def finite(cls, days: int) -> "DayCount":
        return cls(days=days)

    @classmethod
    def never(cls) -> "DayCount":
        return cls(days=None)

    @classmethod
    def from_raw(cls, value: int, sentinel: int = UNSET) -> "DayCount":
        if value == sentinel:
            return cls.never()
        return cls.finite(value)

    @property
    def is_never(self) -> bool:
        return self.days is None


class AccountPolicyRecord(BaseModel):
    """Policy fields of one shadow entry, exactly as stored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    login: str
    last_changed_day: int = Field(default=UNSET, ge=UNSET, le=MAX_DAY_COUNT)
    min_days: int = Field(default=UNSET, ge=UNSET, le=MAX_DAY_COUNT)
    max_days: int = Field(default=UNSET, ge=UNSET, le=MAX_DAY_COUNT)
    warn_days: int = Field(default=UNSET, ge=UNSET, le=MAX_DAY_COUNT)
    inactive_days: int = Field(default=UNSET, ge=UNSET, le=MAX_DAY_COUNT)
    expire_day: int = Field(default=UNSET, ge=UNSET, le=MAX_DAY_COUNT)

    @property
    def last_changed(self) -> DayCount:
        return DayCount.from_raw(self.last_changed_day)

    @property
    def inactive(self) -> DayCount:
        return DayCount.from_raw(self.inactive_days)

    @property
    def account_expire(self) -> DayCount:
        return DayCount.from_raw(self.expire_day)

    @property
    def password_max(self) -> DayCount:
        return DayCount.from_raw(self.max_days, sentinel=NEVER_EXPIRES_MAX)
