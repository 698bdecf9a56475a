"""Timestamp helpers shared by entities, repositories and services."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil import parser as date_parser


def format_utc_iso8601(dt: datetime) -> str:
    """Render an aware datetime as 'YYYY-MM-DDTHH:MM:SS.mmmZ' in UTC."""
    utc_dt = dt.astimezone(timezone.utc)
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_dt.microsecond // 1000:03d}Z"


def get_utc_iso8601_timestamp() -> str:
    return format_utc_iso8601(datetime.now(timezone.utc))


def parse_instant(value) -> Optional[datetime]:
    """Parse an ISO 8601 value into an aware datetime.

    Returns None for empty input, naive timestamps, anything unparseable and
    instants that fall outside the datetime range once moved to UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = date_parser.isoparse(str(value).strip())
        except (ValueError, OverflowError):
            return None
    if dt.tzinfo is None:
        return None
    try:
        dt.astimezone(timezone.utc)
    except OverflowError:
        # Offset pushes the instant outside the representable range.
        return None
    return dt


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_epoch_millis(dt: datetime) -> int:
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def format_display_date(value) -> str:
    """'05 Mar 2030, 14:30' in UTC; raw text when the value is not an instant."""
    if value is None or value == "":
        return ""
    dt = parse_instant(value)
    if dt is None:
        return str(value)
    return dt.astimezone(timezone.utc).strftime("%d %b %Y, %H:%M")


def format_history_date(value) -> str:
    rendered = format_display_date(value)
    return f"{rendered} UTC" if rendered else ""
