"""Calendar-day and calendar-month windows in the checklist timezone.

Submission timestamps are stored in UTC, but "today" and "this month" are
defined by the local calendar of the site running the inspections
(``CHECKLIST_TIMEZONE``). Every window returned here is expressed in UTC so
it can be compared directly against stored timestamps.
"""
import calendar
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

from app.core.config import settings


def local_zone() -> tzinfo:
    """Timezone that defines calendar days for checklists."""
    if settings.checklist_timezone.upper() == "UTC":
        return UTC
    return ZoneInfo(settings.checklist_timezone)


def as_utc(value: datetime) -> datetime:
    """Attach or convert to UTC. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def local_date(value: datetime) -> date:
    """Calendar date of a timestamp in the checklist timezone."""
    return as_utc(value).astimezone(local_zone()).date()


def start_of_day(day: date) -> datetime:
    """Local midnight at the start of ``day``, in UTC."""
    return datetime.combine(day, time.min, tzinfo=local_zone()).astimezone(UTC)


def day_window(now: datetime | None = None) -> tuple[datetime, datetime]:
    """
    Half-open window [today 00:00, tomorrow 00:00) around ``now``.

    A submission landing exactly on the next midnight belongs to the next
    day only.
    """
    today = local_date(now or datetime.now(UTC))
    return start_of_day(today), start_of_day(today + timedelta(days=1))


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_window(year: int, month: int) -> tuple[datetime, datetime]:
    """
    Closed window covering a calendar month.

    Runs from the first day at 00:00 to the last microsecond of the last
    day, local time.
    """
    first = date(year, month, 1)
    if month == 12:
        following = date(year + 1, 1, 1)
    else:
        following = date(year, month + 1, 1)
    return start_of_day(first), start_of_day(following) - timedelta(microseconds=1)


def month_name(month: int) -> str:
    return calendar.month_name[month]
