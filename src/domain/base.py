from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database"""
    return datetime.now(UTC).replace(tzinfo=None)


def to_epoch_seconds(moment: datetime) -> int:
    """Whole seconds since the epoch for a naive UTC datetime"""
    return int(moment.replace(tzinfo=UTC).timestamp())
