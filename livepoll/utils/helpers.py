"""
Helper Functions
Utility functions used across the application
"""
from datetime import datetime, timezone
import random
import pytz


def now_utc():
    """Get current UTC timestamp"""
    return datetime.now(timezone.utc)


def to_local(utc_dt, tz_name="UTC"):
    """Convert a stored UTC datetime to the configured display timezone"""
    if not utc_dt:
        return None
    if utc_dt.tzinfo is None:
        # SQLite drops tzinfo on the way back out
        utc_dt = utc_dt.replace(tzinfo=pytz.utc)
    return utc_dt.astimezone(pytz.timezone(tz_name))


def generate_teacher_username(prefix="teacher"):
    """Generate a random teacher name like teacher4821"""
    return f"{prefix}{random.randint(1000, 9999)}"


def is_teacher_name(username, prefix="teacher"):
    """Teachers are recognised by a case-insensitive name prefix"""
    return username.lower().startswith(prefix.lower())
