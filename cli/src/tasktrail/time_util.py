"""Timezone conversion utilities for CLI input and display."""

import os
from datetime import datetime, timezone

from storage.util import format_utc_iso8601, parse_instant


def _get_configured_tz():
    """Return the configured timezone, falling back to system local."""
    from dateutil import tz as dateutil_tz
    tz_name = os.getenv("TASKTRAIL_TIMEZONE")
    if tz_name:
        tz = dateutil_tz.gettz(tz_name)
        if tz:
            return tz
    return dateutil_tz.tzlocal()


def utc_to_local(utc_str: str) -> str:
    """Convert UTC ISO 8601 string to local datetime string."""
    if not utc_str:
        return "-"
    dt = parse_instant(utc_str)
    if dt is None:
        return utc_str
    local_dt = dt.astimezone(_get_configured_tz())
    return local_dt.strftime("%Y-%m-%d %H:%M")


def local_to_utc(local_str: str) -> str:
    """Convert a local datetime string to UTC ISO 8601 with Z suffix.

    Accepts: 'YYYY-MM-DDTHH:MM:SS', 'YYYY-MM-DDTHH:MM', 'YYYY-MM-DD'.
    Strings that already carry a zone (Z or an offset) are normalized as-is.
    """
    aware = parse_instant(local_str)
    if aware is not None:
        return format_utc_iso8601(aware)
    local_tz = _get_configured_tz()
    for fmt in ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M", "%Y-%m-%d"):
        try:
            dt = datetime.strptime(local_str, fmt)
            dt = dt.replace(tzinfo=local_tz)
            return format_utc_iso8601(dt.astimezone(timezone.utc))
        except ValueError:
            continue
    raise ValueError(f"Cannot parse datetime: {local_str}")
