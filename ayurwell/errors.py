"""
errors.py
=========
Domain exceptions raised by the scheduling and persistence layers.
Routes translate these into HTTP responses.
"""


class AyurWellError(Exception):
    """Base class for all AyurWell domain errors."""


class PersistenceError(AyurWellError):
    """The underlying store failed to read or write."""


class NotFoundError(AyurWellError):
    """A requested record does not exist."""


class AvailabilityCheckError(AyurWellError):
    """The conflict check could not be completed, so the slot is NOT known to be free."""

    def __init__(self, message: str = "Availability check failed"):
        super().__init__(message)


class AppointmentsLoadError(AyurWellError):
    """Appointments could not be fetched from the store."""

    def __init__(self, message: str = "Failed to load appointments"):
        super().__init__(message)


class SlotUnavailableError(AyurWellError):
    """The requested time collides with an existing booking."""

    def __init__(self, message: str = "This time slot is already booked. Please select a different time."):
        super().__init__(message)


class DoctorHasAppointmentsError(AyurWellError):
    """The doctor still has pending or confirmed appointments."""

    def __init__(self, message: str = "Doctor has active appointments and cannot be removed"):
        super().__init__(message)


class InvalidTransitionError(AyurWellError):
    """A status change not permitted by the appointment lifecycle."""


class InvalidDateError(AyurWellError, ValueError):
    """Date string is not a real DD/MM/YYYY date."""


class InvalidTimeError(AyurWellError, ValueError):
    """Time string is not HH:MM or HH:MM AM/PM."""


class DuplicateRecordError(PersistenceError):
    """A write violated a uniqueness constraint."""
