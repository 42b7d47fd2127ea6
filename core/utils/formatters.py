"""
Formatting helpers shared by the StoreOps API responses.
"""

from datetime import datetime, time


def format_hm(value):
    """Format a time or datetime as ``HH:MM``."""
    if value is None:
        return None
    if isinstance(value, (datetime, time)):
        return value.strftime("%H:%M")
    return str(value)
