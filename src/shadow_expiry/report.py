"""Render expirable logins as console text, YAML or CSV."""

import csv
import re
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

import yaml

from shadow_expiry.models import (
    AccountReport,
    ExpirableLogin,
    ExpiryReport,
    ReportMetadata,
    ReportSummary,
    is_never,
)
from shadow_expiry.policy import password_expires_or_never, should_warn_now
from shadow_expiry.primitives import summary_counts

DATE_FORMAT = "%b %d, %Y"
NEVER_LABEL = "Never"

CSV_HEADERS = [
    "Login",
    "Last Password Change",
    "Password Expires",
    "Warning",
    "Min Days",
    "Notify Now",
]


def format_date(value: datetime) -> str:
    """Format a derived date for display; the never marker prints as "Never"."""
    if is_never(value):
        return NEVER_LABEL
    return value.strftime(DATE_FORMAT)


def _iso_or_none(value: datetime | None) -> str | None:
    if value is None or is_never(value):
        return None
    return value.date().isoformat()


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


def format_login(entry: ExpirableLogin, now: datetime | None = None) -> str:
    exp = entry.expiration
    lines = [
        f"Login: {entry.login}",
        f"Last password change: {format_date(exp.password_last_changed)}",
        f"Password expires: {format_date(exp.password_expires)}",
        f"Warning: {exp.warning}",
        f"Min password change allowed: {exp.min}",
        f"Is it effective to notify now?  {_bool_text(should_warn_now(exp, now))}",
    ]
    return "\n".join(lines) + "\n"


def format_text(entries: list[ExpirableLogin], now: datetime | None = None) -> str:
    """The console report: one block per login, each followed by a blank line."""
    return "".join(format_login(e, now) + "\n" for e in entries)


def build_report(
    entries: list[ExpirableLogin],
    now: datetime | None = None,
    source: str | None = None,
    skipped: int = 0,
) -> ExpiryReport:
    now = now or datetime.now()
    accounts = []
    for entry in entries:
        exp = entry.expiration
        accounts.append(
            AccountReport(
                login=entry.login,
                last_password_change=_iso_or_none(exp.password_last_changed),
                password_expires=_iso_or_none(password_expires_or_never(exp)),
                password_inactive=_iso_or_none(exp.password_inactive),
                account_expires=_iso_or_none(exp.account_expired),
                warning=exp.warning,
                min_days=exp.min,
                max_days=exp.max,
                expirable=exp.expirable,
                notify_now=should_warn_now(exp, now),
            )
        )

    rows = [{"expirable": a.expirable, "notify_now": a.notify_now, "never_expires": a.password_expires is None} for a in accounts]
    counts = summary_counts(rows, "expirable", "notify_now", "never_expires")
    return ExpiryReport(
        metadata=ReportMetadata(source=source, evaluated_at=now.isoformat()),
        summary=ReportSummary(total=len(accounts), skipped=skipped, **counts),
        accounts=accounts,
    )


def format_yaml(report: ExpiryReport) -> str:
    return yaml.dump(report.to_dict(), default_flow_style=False, sort_keys=False)


def header_to_key(header: str) -> str:
    """Convert a display header to a snake_case dict key.

    >>> header_to_key("Last Password Change")
    'last_password_change'
    """
    return re.sub(r"\s+", "_", header.strip()).lower()


def csv_rows(entries: list[ExpirableLogin], now: datetime | None = None) -> list[dict[str, Any]]:
    rows = []
    for entry in entries:
        exp = entry.expiration
        rows.append(
            {
                "login": entry.login,
                "last_password_change": format_date(exp.password_last_changed),
                "password_expires": format_date(exp.password_expires),
                "warning": exp.warning,
                "min_days": exp.min,
                "notify_now": _bool_text(should_warn_now(exp, now)),
            }
        )
    return rows


def write_csv(rows: list[dict[str, Any]], headers: list[str], stream: TextIO) -> None:
    keys = [header_to_key(h) for h in headers]
    writer = csv.writer(stream, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if row.get(k) is None else str(row.get(k)) for k in keys])


def write_output(content: str, output_path: str | Path) -> None:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
