"""Slot generation and bookable-date resolution."""

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

from pydantic import BaseModel

SATURDAY = 5


class TimeSlot(BaseModel):
    label: str
    available: bool


def format_slot_label(value: datetime | time) -> str:
    """Render a start time the way slots are labelled, e.g. ``9:00 AM``."""
    hour = value.hour
    display_hour = hour % 12 or 12
    period = 'AM' if hour < 12 else 'PM'
    return f'{display_hour}:{value.minute:02d} {period}'


def generate_time_slots(
    start_hour: int = 9,
    end_hour: int = 17,
    interval: int = 60,
    unavailable_times: Iterable[str] = (),
) -> list[TimeSlot]:
    """Build every slot from ``start_hour`` up to, not including, ``end_hour``.

    A slot is unavailable only when its label matches one of
    ``unavailable_times`` exactly. Booking durations are not considered, so a
    45 minute booking at 9:00 AM leaves 9:30 AM open.
    """
    if interval <= 0:
        raise ValueError('Slot interval must be a positive number of minutes.')
    if not 0 <= start_hour < end_hour <= 24:
        raise ValueError('Start hour must be before end hour, both within 0-24.')

    occupied = set(unavailable_times)
    slots: list[TimeSlot] = []

    minute_of_day = start_hour * 60
    while minute_of_day < end_hour * 60:
        label = format_slot_label(time(minute_of_day // 60, minute_of_day % 60))
        slots.append(TimeSlot(label=label, available=label not in occupied))
        minute_of_day += interval

    return slots


def get_available_dates(start: date, end: date) -> list[date]:
    """Weekdays between ``start`` and ``end``, both inclusive.

    Per-day availability rules are not consulted here.
    """
    available: list[date] = []
    current_day = start

    while current_day <= end:
        if current_day.weekday() < SATURDAY:
            available.append(current_day)
        current_day += timedelta(days=1)

    return available
