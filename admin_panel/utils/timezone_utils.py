# File: admin_panel/utils/timezone_utils.py
import os
import pytz
from datetime import datetime, timezone
from typing import Optional
from flask import current_app, has_app_context

def get_app_timezone():
    """Display timezone: APP_TIMEZONE config, then the TZ environment variable, then UTC."""
    tz_name = None
    if has_app_context():
        tz_name = current_app.config.get('APP_TIMEZONE')
    tz_name = tz_name or os.environ.get('TZ', 'UTC')
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        return pytz.UTC

def utcnow():
    """Get current datetime in UTC (for database storage)."""
    return datetime.now(timezone.utc)

def to_app_timezone(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None:
        return None
    # Naive values come back from SQLite and are stored as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(get_app_timezone())

def format_datetime(dt: Optional[datetime], format_str: str = "%Y-%m-%d %H:%M", show_timezone: bool = True) -> str:
    """Format datetime in the application's timezone."""
    if dt is None:
        return "N/A"

    local_dt = to_app_timezone(dt)
    if not show_timezone:
        return local_dt.strftime(format_str)

    tz_abbr = local_dt.strftime('%Z') or str(local_dt.tzinfo)
    return f"{local_dt.strftime(format_str)} {tz_abbr}"
