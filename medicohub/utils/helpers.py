"""
Helper Functions
Utility functions used across the application
"""
from datetime import datetime, timezone
from functools import wraps
from flask import current_app, request, jsonify
import pytz


def now_utc():
    """Get current UTC timestamp"""
    return datetime.now(timezone.utc)


def isoformat(dt):
    """ISO-8601 string for a datetime, None passes through"""
    if not dt:
        return None
    return dt.isoformat()


def to_local(utc_dt, tz_name=None):
    """Convert a UTC datetime to the configured display timezone"""
    if not utc_dt:
        return None
    tz = pytz.timezone(tz_name or current_app.config['TIMEZONE'])
    if utc_dt.tzinfo is None:
        utc_dt = utc_dt.replace(tzinfo=pytz.utc)
    return utc_dt.astimezone(tz)


def as_utc(dt):
    """Treat naive datetimes (SQLite drops tzinfo) as UTC"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime(value):
    """
    Parse an ISO-8601 string into an aware UTC datetime

    Returns None for empty values, raises ValueError for garbage
    """
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    text = str(value)
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    return as_utc(datetime.fromisoformat(text))


def request_json():
    """JSON body of the current request, {} when absent or not an object"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def current_user_email():
    """Email supplied by the identity provider in the X-User-Email header"""
    email = request.headers.get('X-User-Email', '')
    return email.strip().lower() or None


def is_admin_email(email):
    return bool(email) and email in current_app.config['ADMIN_EMAILS']


# Decorators
def require_admin(f):
    """
    Decorator to require an admin caller
    Admin list comes from ADMIN_EMAILS in app config
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin_email(current_user_email()):
            return jsonify({'error': 'Access denied: Admins only'}), 403
        return f(*args, **kwargs)
    return decorated_function
