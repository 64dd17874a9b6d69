"""
Time helpers

Timestamps are stored as naive UTC. Business-day boundaries ("today", "local
midnight", invoice dates) are computed in the configured TIMEZONE.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from dinedash.core.config import get_settings


def utcnow() -> datetime:
    """Current time as naive UTC"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def business_tz() -> ZoneInfo:
    return ZoneInfo(get_settings().TIMEZONE)


def to_local(value: datetime) -> datetime:
    """Convert a naive UTC timestamp into the business timezone"""
    return value.replace(tzinfo=timezone.utc).astimezone(business_tz())


def local_midnight(now: Optional[datetime] = None) -> datetime:
    """Start of the current business day, as naive UTC"""
    local_now = to_local(now or utcnow())
    midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc).replace(tzinfo=None)


def local_date_stamp(now: Optional[datetime] = None) -> str:
    """YYYYMMDD of the current business day"""
    return to_local(now or utcnow()).strftime("%Y%m%d")


def range_start(range_name: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Lower bound for a named reporting range; None means unbounded"""
    now = now or utcnow()
    if range_name == "today":
        return local_midnight(now)
    if range_name == "week":
        return now - timedelta(days=7)
    if range_name == "month":
        local_now = to_local(now)
        first = local_now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        return first.astimezone(timezone.utc).replace(tzinfo=None)
    return None
