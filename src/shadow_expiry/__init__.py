"""Report password expiration policy from the local shadow database."""

from shadow_expiry.database import AccountDatabase, InMemoryDatabase, ShadowFileDatabase
from shadow_expiry.enumeration import list_expirable_logins
from shadow_expiry.extractor import lookup, time_from_epoch
from shadow_expiry.models import NEVER_MARKER, ExpirableLogin, ExpirationInfo
from shadow_expiry.policy import should_warn_now

__all__ = [
    "AccountDatabase",
    "ExpirableLogin",
    "ExpirationInfo",
    "InMemoryDatabase",
    "NEVER_MARKER",
    "ShadowFileDatabase",
    "list_expirable_logins",
    "lookup",
    "should_warn_now",
    "time_from_epoch",
]
