from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from taskportal.core.config import settings

APP_TZ = ZoneInfo(settings.timezone)

REPORT_ANCHOR = time(12, 0)
END_OF_DAY = time(23, 59, 59, 999000)


def now_local() -> datetime:
    # stored datetimes are naive wall-clock values in APP_TZ
    return datetime.now(tz=APP_TZ).replace(tzinfo=None)


def today_local() -> date:
    return now_local().date()


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def day_bounds(d: date) -> tuple[datetime, datetime]:
    start = start_of_day(d)
    return start, start + timedelta(days=1)
