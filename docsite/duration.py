"""Human-readable phrasing for elapsed time."""

from __future__ import annotations

_MINUTE = 60
_HOUR = 3600
_DAY = 86400
_WEEK = 604800
_MONTH = 2419200  # four weeks
_YEAR = 31536000


def time_delta_string(seconds: int) -> str:
    """Describe ``seconds`` the way a person would ("about one hour", "3 days")."""
    if seconds < 60:
        return "less than a minute"
    if seconds < 3000:  # 50 minutes
        minutes = seconds // _MINUTE
        return f"{minutes} minute{'' if minutes == 1 else 's'}"
    if seconds < 5400:  # 90 minutes
        return "about one hour"
    if seconds < 64800:  # 18 hours
        return f"{seconds // _HOUR} hours"
    if seconds < _DAY:
        return "one day"
    if seconds < 2 * _DAY:
        return "about one day"
    if seconds < _WEEK:
        return f"{seconds // _DAY} days"
    if seconds < 2 * _WEEK:
        return "about one week"
    if seconds < 7257600:  # 3 months
        return f"{seconds // _WEEK} weeks"
    if seconds < _YEAR:
        return f"{seconds // _MONTH} months"
    return f"{seconds // _YEAR} years"


__all__ = ["time_delta_string"]
