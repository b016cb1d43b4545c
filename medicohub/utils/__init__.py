"""
Utils Package
"""
from medicohub.utils.helpers import (
    now_utc,
    isoformat,
    to_local,
    as_utc,
    parse_datetime,
    request_json,
    current_user_email,
    is_admin_email,
    require_admin
)

__all__ = [
    'now_utc',
    'isoformat',
    'to_local',
    'as_utc',
    'parse_datetime',
    'request_json',
    'current_user_email',
    'is_admin_email',
    'require_admin'
]
