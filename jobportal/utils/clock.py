from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as naive UTC, the form pymongo hands back from the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
