"""Small coercion helpers shared by the database readers and report builders."""

from typing import Any

# Raw value used by the shadow format (and libc getspnam) for an empty field.
UNSET = -1

# max_days value meaning "password never expires".
NEVER_EXPIRES_MAX = 99999

SECONDS_PER_DAY = 86400

# Largest day count accepted from the database. Two of them added together
# (last change + max days) still fit in a datetime.
MAX_DAY_COUNT = 1000000


def safe_list(value: Any) -> list[Any]:
    if isinstance(value, str):
        return []
    try:
        return list(value or [])
    except (TypeError, ValueError):
        return []


def parse_field(raw: str) -> int:
    """
    Parse one numeric shadow field.

    An empty field reads as UNSET, matching getspnam(3). Anything else that is
    not an integer raises ValueError so the caller can reject the whole line.
    """
    raw = raw.strip()
    if not raw:
        return UNSET
    return int(raw)


def summary_counts(rows: list[dict[str, Any]], *flags: str) -> dict[str, int]:
    """Count rows where each named flag is truthy."""
    return {flag: sum(1 for row in safe_list(rows) if isinstance(row, dict) and row.get(flag)) for flag in flags}
