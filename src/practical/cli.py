"""practical CLI - goal progress, task quadrants and date formatting."""

import json
import logging
import sys
from datetime import date, datetime

import click

from .config import load_config
from .core import dates
from .core.priority import TaskRecord, classify
from .core.progress import compute_progress
from .preferences import build_formatter


def _read_json(source) -> object:
    try:
        return json.load(source)
    except json.JSONDecodeError as e:
        click.echo(f"Error: invalid JSON: {e}", err=True)
        sys.exit(1)


def _parse_now(value: str | None) -> date | datetime:
    if not value:
        return datetime.now().astimezone()
    parsed = dates.to_datetime(value)
    if parsed is None:
        click.echo(f"Error: invalid --now value {value!r}", err=True)
        sys.exit(1)
    return parsed.date() if len(value.strip()) == 10 else parsed


@click.group()
@click.version_option(package_name="practical-core")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """practical - productivity domain tools."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.argument("source", type=click.File("r"), default="-")
def progress(source):
    """Weighted completion percent of a milestone list (JSON array)."""
    milestones = _read_json(source)
    if not isinstance(milestones, list):
        click.echo("Error: expected a JSON array of milestones", err=True)
        sys.exit(1)
    click.echo(f"{compute_progress(m for m in milestones if isinstance(m, dict))}%")


@main.command("classify")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--now", "now_value", default=None, help="Reference date/time (ISO), defaults to now")
@click.option("--urgent-days", type=int, default=None, help="Urgency horizon in days")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def classify_cmd(source, now_value: str | None, urgent_days: int | None, as_json: bool):
    """Eisenhower quadrant for each task in a JSON object or array."""
    data = _read_json(source)
    records = data if isinstance(data, list) else [data]
    now = _parse_now(now_value)
    if urgent_days is None:
        urgent_days = load_config().urgent_days

    results = []
    for record in records:
        if not isinstance(record, dict):
            continue
        task = TaskRecord.from_api(record)
        results.append((task, classify(task, now, urgent_days)))

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "id": t.id,
                        "title": t.title,
                        "quadrant": int(q),
                        "label": q.label,
                    }
                    for t, q in results
                ],
                indent=2,
            )
        )
    else:
        for task, quadrant in results:
            title = task.title or task.id or "(untitled)"
            click.echo(f"Q{int(quadrant)} {quadrant.label:9} {title}")


@main.command("format-date")
@click.argument("value")
@click.option("--format", "pattern", default=None, help="Date pattern, defaults to preference")
def format_date_cmd(value: str, pattern: str | None):
    """Format an ISO date for display."""
    click.echo(build_formatter().format_date(value, pattern))


@main.command("parse-date")
@click.argument("text")
@click.option("--format", "pattern", default=None, help="Date pattern, defaults to preference")
def parse_date_cmd(text: str, pattern: str | None):
    """Parse a display date back to ISO."""
    parsed = build_formatter().parse_display_date(text, pattern)
    if parsed is None:
        click.echo(f"Error: {text!r} is not a valid date", err=True)
        sys.exit(1)
    click.echo(parsed.isoformat())


@main.command("format-time")
@click.argument("text")
@click.option("--format", "pattern", default=None, help="12h or 24h, defaults to preference")
def format_time_cmd(text: str, pattern: str | None):
    """Format an HH:MM time for display."""
    click.echo(build_formatter().format_time(text, pattern))


@main.command("to-utc")
@click.argument("value")
@click.option("--tz", "time_zone", default=None, help="IANA timezone, defaults to preference")
def to_utc(value: str, time_zone: str | None):
    """Convert a local wall-clock value to canonical UTC."""
    converted = build_formatter().local_to_utc(value, time_zone)
    if converted is None:
        click.echo(f"Error: {value!r} is not a valid date/time", err=True)
        sys.exit(1)
    click.echo(dates.to_iso_utc(converted))


@main.command("to-local")
@click.argument("value")
@click.option("--tz", "time_zone", default=None, help="IANA timezone, defaults to preference")
def to_local(value: str, time_zone: str | None):
    """Convert a UTC value to local wall-clock time."""
    converted = build_formatter().utc_to_local(value, time_zone)
    if converted is None:
        click.echo(f"Error: {value!r} is not a valid date/time", err=True)
        sys.exit(1)
    click.echo(converted.isoformat(timespec="seconds"))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def prefs(as_json: bool):
    """Show the active display preferences."""
    current = build_formatter().preferences
    if as_json:
        click.echo(json.dumps(current.to_api(), indent=2))
        return
    click.echo(f"Date format: {current.date_format.value} ({dates.example_date(current.date_format)})")
    click.echo(f"Time format: {current.time_format.value} ({dates.example_time(current.time_format)})")
    click.echo(f"Timezone:    {current.time_zone}")


@main.command()
def formats():
    """List the supported date and time patterns."""
    click.echo("Date formats:")
    for option in dates.date_format_options():
        click.echo(f"  {option['value']:14} {option['label']:24} {option['example']}")
    click.echo("Time formats:")
    for option in dates.time_format_options():
        click.echo(f"  {option['value']:14} {option['label']:24} {option['example']}")
