from datetime import datetime, timezone


def at(hour, minute=0, day=10):
    """A UTC instant in March 2025. The 10th is a Monday, the 15th a Saturday, the 16th a Sunday."""
    return datetime(2025, 3, day, hour, minute, tzinfo=timezone.utc)
