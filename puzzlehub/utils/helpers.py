"""
Helper Functions

Contains utility functions used throughout the application.
"""

import datetime
import re
from typing import Dict, Optional
from zoneinfo import ZoneInfo

DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def is_valid_date(date) -> bool:
    """True for a real calendar date formatted YYYY-MM-DD."""
    if not isinstance(date, str) or not DATE_PATTERN.match(date):
        return False
    try:
        datetime.date.fromisoformat(date)
    except ValueError:
        return False
    return True


def puzzle_date(now: Optional[datetime.datetime] = None, timezone: str = 'America/New_York') -> str:
    """
    The puzzle date (YYYY-MM-DD) for an instant in the reference time zone.

    Naive datetimes are taken as UTC.
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=datetime.timezone.utc)
    return now.astimezone(ZoneInfo(timezone)).date().isoformat()


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract user identity information from request."""
    if request_obj is None:
        from flask import request
        request_obj = request

    user = getattr(request_obj, 'user', None) or {}

    return {
        'user_ip': getattr(request_obj, 'remote_addr', None) or 'unknown',
        'user_id': user.get('id'),
        'username': user.get('username')
    }
