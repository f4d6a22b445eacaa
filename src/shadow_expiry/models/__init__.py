from .base import AccountPolicyRecord, DayCount
from .expiration import NEVER_MARKER, ExpirableLogin, ExpirationInfo, is_never
from .report import AccountReport, ExpiryReport, ReportMetadata, ReportSummary

__all__ = [
    "AccountPolicyRecord",
    "AccountReport",
    "DayCount",
    "ExpirableLogin",
    "ExpirationInfo",
    "ExpiryReport",
    "NEVER_MARKER",
    "ReportMetadata",
    "ReportSummary",
    "is_never",
]
