"""Shared builders for shadow_expiry tests."""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from shadow_expiry.models import NEVER_MARKER, AccountPolicyRecord

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
SAMPLE_SHADOW = FIXTURES_DIR / "shadow.sample"

# 19000 days after the epoch
CHANGED_DAY = 19000
CHANGED_AT = datetime(2022, 1, 8)


def epoch_plus(days: float) -> datetime:
    return NEVER_MARKER + timedelta(days=days)


def make_record(**overrides: Any) -> AccountPolicyRecord:
    fields: dict[str, Any] = {
        "login": "alice",
        "last_changed_day": CHANGED_DAY,
        "min_days": 0,
        "max_days": 90,
        "warn_days": 7,
        "inactive_days": -1,
        "expire_day": 20000,
    }
    fields.update(overrides)
    return AccountPolicyRecord(**fields)
