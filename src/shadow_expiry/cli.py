import io
import logging
from datetime import datetime

import click

from .config import ReporterConfig, load_config
from .database import ShadowFileDatabase
from .enumeration import list_expirable_logins
from .errors import ConfigError, DatabaseUnavailableError
from .extractor import expiration_from_record
from .policy import days_since_change, local_naive, should_warn_now
from .report import (
    CSV_HEADERS,
    build_report,
    csv_rows,
    format_date,
    format_text,
    format_yaml,
    write_csv,
    write_output,
)

logger = logging.getLogger("shadow_expiry")


def _parse_now(ctx: click.Context, param: click.Parameter, value: str | None) -> datetime | None:
    """Parse --now as ISO 8601; aware values are converted to local time."""
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"not an ISO 8601 timestamp: {value!r}")
    return local_naive(parsed)


def _fail(message: str) -> None:
    click.echo(f"ERROR: {message}", err=True)
    raise SystemExit(1)


def _render(config: ReporterConfig, database: ShadowFileDatabase, now: datetime) -> str:
    entries = list_expirable_logins(
        database,
        workers=config.workers,
        include_unexpirable=config.include_unexpirable,
    )
    if config.output_format == "yaml":
        report = build_report(entries, now=now, source=database.path, skipped=database.skipped)
        return format_yaml(report)
    if config.output_format == "csv":
        buf = io.StringIO()
        write_csv(csv_rows(entries, now), CSV_HEADERS, buf)
        return buf.getvalue()
    return format_text(entries, now)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug-level logging.")
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False), help="Path to a YAML config file.")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_file: str | None) -> None:
    """Shadow Expiry: report password expiration policy for local accounts."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    try:
        ctx.obj = load_config(config_file)
    except ConfigError as exc:
        _fail(str(exc))

    if ctx.invoked_subcommand is None:
        ctx.invoke(report)


# ---------------------------------------------------------------------------
# report command
# ---------------------------------------------------------------------------

@main.command()
@click.option("--shadow-file", "-f", type=click.Path(dir_okay=False), help="Shadow database to read (default: /etc/shadow).")
@click.option("--strict", is_flag=True, default=False, help="Fail when the shadow database cannot be read.")
@click.option("--workers", "-w", type=click.IntRange(min=1), help="Number of parallel lookups.")
@click.option("--format", "output_format", type=click.Choice(["text", "yaml", "csv"]), help="Output format (default: text).")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the report to a file instead of stdout.")
@click.option("--now", callback=_parse_now, help="Evaluate as of this ISO 8601 timestamp instead of the current time.")
@click.option("--all", "include_all", is_flag=True, default=False, help="Include accounts without an account expiration date.")
@click.pass_obj
def report(
    config: ReporterConfig | None,
    shadow_file: str | None,
    strict: bool,
    workers: int | None,
    output_format: str | None,
    output: str | None,
    now: datetime | None,
    include_all: bool,
) -> None:
    """List expirable accounts and whether a warning is effective now."""
    try:
        config = (config or ReporterConfig()).merged(
            shadow_file=shadow_file,
            strict=True if strict else None,
            workers=workers,
            output_format=output_format,
            include_unexpirable=True if include_all else None,
        )
    except ConfigError as exc:
        _fail(str(exc))

    database = ShadowFileDatabase(config.shadow_file, strict=config.strict)
    try:
        content = _render(config, database, now or datetime.now())
    except DatabaseUnavailableError as exc:
        _fail(str(exc))

    if output:
        write_output(content, output)
        click.echo(f"Report written to {output}")
    else:
        click.echo(content, nl=False)


# ---------------------------------------------------------------------------
# show command
# ---------------------------------------------------------------------------

@main.command()
@click.argument("login")
@click.option("--shadow-file", "-f", type=click.Path(dir_okay=False), help="Shadow database to read (default: /etc/shadow).")
@click.option("--now", callback=_parse_now, help="Evaluate as of this ISO 8601 timestamp instead of the current time.")
@click.pass_obj
def show(config: ReporterConfig | None, login: str, shadow_file: str | None, now: datetime | None) -> None:
    """Show raw policy fields and derived dates for a single LOGIN."""
    config = (config or ReporterConfig()).merged(shadow_file=shadow_file)
    database = ShadowFileDatabase(config.shadow_file, strict=config.strict)
    try:
        record = database.lookup(login)
    except DatabaseUnavailableError as exc:
        _fail(str(exc))

    if record is None:
        _fail(f"No shadow entry for {login}")

    now = now or datetime.now()
    info = expiration_from_record(record)
    click.echo(f"Login: {record.login}")
    click.echo(f"  {'last changed (days)':28s} {record.last_changed_day}")
    click.echo(f"  {'min days':28s} {record.min_days}")
    click.echo(f"  {'max days':28s} {record.max_days}")
    click.echo(f"  {'warn days':28s} {record.warn_days}")
    click.echo(f"  {'inactive days':28s} {record.inactive_days}")
    click.echo(f"  {'account expire (days)':28s} {record.expire_day}")
    click.echo(f"  {'last password change':28s} {format_date(info.password_last_changed)}")
    click.echo(f"  {'password expires':28s} {format_date(info.password_expires)}")
    click.echo(f"  {'password inactive':28s} {format_date(info.password_inactive)}")
    click.echo(f"  {'account expires':28s} {format_date(info.account_expired)}")
    click.echo(f"  {'expirable':28s} {'yes' if info.expirable else 'no'}")
    if not info.never_expires:
        click.echo(f"  {'days since change':28s} {days_since_change(info, now)}")
    click.echo(f"  {'notify now':28s} {'true' if should_warn_now(info, now) else 'false'}")
