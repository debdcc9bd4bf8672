"""
scheduling.py
=============
Pure appointment logic, independent of any database:
 - time/date parsing for the app's string formats
 - slot conflict detection (30 minute window)
 - client-side ordering of appointment lists
 - the appointment status lifecycle

Appointments may be ORM rows, pydantic models or plain dicts.
"""

import logging
import re
import datetime
from typing import Any, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from .errors import InvalidDateError, InvalidTimeError, InvalidTransitionError
from .models import AppointmentStatus, NotificationType

logger = logging.getLogger(__name__)

CONFLICT_WINDOW_MINUTES = 30

# Years the booking calendar accepts
MIN_BOOKING_YEAR = 2024
MAX_BOOKING_YEAR = 2030

# Bookable slots offered to patients
TIME_SLOTS = [
    "09:00 AM", "09:30 AM", "10:00 AM", "10:30 AM",
    "11:00 AM", "11:30 AM", "02:00 PM", "02:30 PM",
    "03:00 PM", "03:30 PM", "04:00 PM", "04:30 PM",
]

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*(AM|PM)?\s*$", re.IGNORECASE)
_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")

_TRANSITIONS = {
    AppointmentStatus.pending: frozenset({AppointmentStatus.confirmed, AppointmentStatus.cancelled}),
    AppointmentStatus.confirmed: frozenset({AppointmentStatus.completed, AppointmentStatus.cancelled}),
    AppointmentStatus.cancelled: frozenset(),
    AppointmentStatus.completed: frozenset(),
}


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


# ---------------------------------------------------------------------------
# PARSING
# ---------------------------------------------------------------------------

def time_to_minutes(value: str) -> int:
    """
    Convert "hh:mm AM/PM" (or 24-hour "HH:MM") to minutes since midnight.
    12 AM is midnight, 12 PM is noon.
    """
    match = _TIME_RE.match(value or "")
    if not match:
        raise InvalidTimeError(f"Invalid time: {value!r}")

    hours, minutes, period = int(match.group(1)), int(match.group(2)), match.group(3)
    if minutes > 59:
        raise InvalidTimeError(f"Invalid time: {value!r}")

    if period:
        if not 1 <= hours <= 12:
            raise InvalidTimeError(f"Invalid time: {value!r}")
        period = period.upper()
        if period == "PM" and hours != 12:
            hours += 12
        elif period == "AM" and hours == 12:
            hours = 0
    elif hours > 23:
        raise InvalidTimeError(f"Invalid time: {value!r}")

    return hours * 60 + minutes


def parse_date(value: str) -> Tuple[int, int, int]:
    """Split a DD/MM/YYYY string into (year, month, day), rejecting impossible dates."""
    match = _DATE_RE.match(value or "")
    if not match:
        raise InvalidDateError(f"Invalid date: {value!r} (expected DD/MM/YYYY)")
    day, month, year = (int(g) for g in match.groups())
    try:
        datetime.date(year, month, day)
    except ValueError:
        raise InvalidDateError(f"Invalid date: {value!r}")
    return year, month, day


def validate_booking_date(value: str, today: Optional[datetime.date] = None) -> datetime.date:
    """
    A date a patient may book: a real DD/MM/YYYY date within the calendar
    years 2024-2030 and not before today.
    """
    year, month, day = parse_date(value)
    if not MIN_BOOKING_YEAR <= year <= MAX_BOOKING_YEAR:
        raise InvalidDateError(f"Year must be between {MIN_BOOKING_YEAR} and {MAX_BOOKING_YEAR}")
    booked = datetime.date(year, month, day)
    if booked < (today or datetime.date.today()):
        raise InvalidDateError("Please select a future date")
    return booked


# ---------------------------------------------------------------------------
# CONFLICT DETECTION
# ---------------------------------------------------------------------------

def _conflict_candidates(doctor_id, date: str, existing: Iterable[Any], exclude_id=None) -> List[Any]:
    return [
        a for a in existing
        if _field(a, "doctor_id") == doctor_id
        and _field(a, "date") == date
        and _field(a, "status") != AppointmentStatus.cancelled
        and (exclude_id is None or _field(a, "id") != exclude_id)
    ]


def has_conflict(doctor_id, date: str, time: str, existing: Iterable[Any], exclude_id=None) -> bool:
    """
    True when any active appointment for the same doctor and date starts
    strictly less than 30 minutes from ``time``.
    """
    requested = time_to_minutes(time)

    for appt in _conflict_candidates(doctor_id, date, existing, exclude_id):
        try:
            booked = time_to_minutes(_field(appt, "time"))
        except InvalidTimeError:
            logger.warning("Skipping appointment %s with unreadable time %r", _field(appt, "id"), _field(appt, "time"))
            continue
        if abs(booked - requested) < CONFLICT_WINDOW_MINUTES:
            return True
    return False


def available_slots(doctor_id, date: str, existing: Sequence[Any], slots: Sequence[str] = TIME_SLOTS) -> List[str]:
    """Slots from the bookable grid that would not conflict with existing bookings."""
    return [slot for slot in slots if not has_conflict(doctor_id, date, slot, existing)]


# ---------------------------------------------------------------------------
# ORDERING
# ---------------------------------------------------------------------------

def _sort_key(appt: Any):
    try:
        year, month, day = parse_date(_field(appt, "date"))
        date_key = (-year, -month, -day)
    except InvalidDateError:
        date_key = (1, 0, 0)  # unreadable dates last
    try:
        time_key = time_to_minutes(_field(appt, "time"))
    except InvalidTimeError:
        time_key = 24 * 60
    return date_key, time_key


def sort_appointments(appointments: Iterable[Any]) -> List[Any]:
    """Most recent date first; earliest time first within a day."""
    return sorted(appointments, key=_sort_key)


# ---------------------------------------------------------------------------
# STATUS LIFECYCLE
# ---------------------------------------------------------------------------

def allowed_transitions(current: AppointmentStatus) -> FrozenSet[AppointmentStatus]:
    return _TRANSITIONS[AppointmentStatus(current)]


def validate_transition(current: AppointmentStatus, new: AppointmentStatus) -> None:
    current, new = AppointmentStatus(current), AppointmentStatus(new)
    if new not in allowed_transitions(current):
        raise InvalidTransitionError(f"Cannot change appointment from {current.value} to {new.value}")


def is_terminal(status: AppointmentStatus) -> bool:
    return not allowed_transitions(status)


def notification_type_for(new_status: AppointmentStatus) -> NotificationType:
    # Every non-cancel change (completed included) is reported as appointment_confirmed.
    if AppointmentStatus(new_status) == AppointmentStatus.cancelled:
        return NotificationType.appointment_cancelled
    return NotificationType.appointment_confirmed


def filter_by_status(appointments: Iterable[Any], status: Optional[str] = None) -> List[Any]:
    """Dashboard filter: ``None`` or "all" keeps everything."""
    if status in (None, "all"):
        return list(appointments)
    return [a for a in appointments if _field(a, "status") == status]
