from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict


class ReportMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore")

    source: Optional[str] = None
    evaluated_at: str
    generated_at: Optional[str] = Field(default_factory=lambda: datetime.now().isoformat())


class ReportSummary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total: int = 0
    expirable: int = 0
    notify_now: int = 0
    never_expires: int = 0
    skipped: int = 0


class AccountReport(BaseModel):
    model_config = ConfigDict(extra="ignore")

    login: str
    last_password_change: Optional[str] = None
    password_expires: Optional[str] = None
    password_inactive: Optional[str] = None
    account_expires: Optional[str] = None
    warning: int
    min_days: int
    max_days: int
    expirable: bool
    notify_now: bool


class ExpiryReport(BaseModel):
    model_config = ConfigDict(extra="ignore")

    metadata: ReportMetadata
    summary: ReportSummary
    accounts: list[AccountReport] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
