"""Human readable relative timestamps for timeline entries"""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal

NOW_EPSILON_MS = 3000

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR


@dataclass(frozen=True)
class RelativeTimeLabels:
    """Localized fragments used by format_relative_time"""

    just_now: str = "たった今"
    seconds: str = "秒"
    minutes: str = "分"
    hours: str = "時間"
    past: str = "前"
    future: str = "後"


JAPANESE_LABELS = RelativeTimeLabels()
ENGLISH_LABELS = RelativeTimeLabels(
    just_now="just now",
    seconds="s",
    minutes="m",
    hours="h",
    past=" ago",
    future=" later",
)


def _round(value: float) -> int:
    # round() would use banker's rounding: 2.5s must become 3s, not 2s
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def format_relative_time(
    event_time: datetime,
    now: datetime | None = None,
    tz: tzinfo | None = None,
    labels: RelativeTimeLabels = JAPANESE_LABELS,
) -> str:
    """
    Format event_time relative to now.

    Within 24 hours the result is a rounded magnitude with a past/future
    suffix ("45秒前", "2時間前", "10分後"). Older or further events render
    as a calendar stamp "MM-DD HH:MM", prefixed with "YYYY-" when the year
    differs from now's year. Naive datetimes are taken as UTC; the calendar
    stamp is rendered in tz (UTC when not given).

    Args:
        event_time: When the event happened
        now: Reference time (defaults to the current time)
        tz: Timezone used for the calendar stamp
        labels: Localized fragments

    Returns:
        Display string
    """
    event_time = _aware(event_time)
    now = _aware(now) if now else datetime.now(timezone.utc)

    elapsed_ms = (now - event_time).total_seconds() * MS_PER_SECOND
    magnitude = abs(elapsed_ms)

    if magnitude < NOW_EPSILON_MS:
        return labels.just_now

    suffix = labels.future if elapsed_ms < 0 else labels.past

    if magnitude < MS_PER_MINUTE:
        return f"{_round(magnitude / MS_PER_SECOND)}{labels.seconds}{suffix}"
    if magnitude < MS_PER_HOUR:
        return f"{_round(magnitude / MS_PER_MINUTE)}{labels.minutes}{suffix}"
    if magnitude < MS_PER_DAY:
        return f"{_round(magnitude / MS_PER_HOUR)}{labels.hours}{suffix}"

    zone = tz or timezone.utc
    local_event = event_time.astimezone(zone)
    local_now = now.astimezone(zone)

    year = "" if local_event.year == local_now.year else f"{local_event.year}-"
    return year + local_event.strftime("%m-%d %H:%M")
