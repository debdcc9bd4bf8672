"""
booking.py
==========
Appointment workflow orchestration:
 - Book a new appointment after a conflict check
 - Patient-side edits of date, time, notes and phone
 - Doctor-side status changes (confirm / cancel / complete)
 - Doctor notification inbox

Decisions come from scheduling.py; this module only sequences the store
calls around them and fires the notification side effects.
"""

import datetime
import logging
import threading
from typing import Any, Dict, List, Optional

from .errors import (
    DuplicateRecordError, InvalidTransitionError, NotFoundError, SlotUnavailableError,
)
from .models import Appointment, AppointmentStatus, DoctorNotification, NotificationStatus
from .notifications import notify_new_appointment, record_doctor_notification
from .scheduling import (
    has_conflict, is_terminal, notification_type_for, parse_date,
    time_to_minutes, validate_booking_date, validate_transition,
)
from .store import AppointmentRepository, DocumentStore

logger = logging.getLogger(__name__)

# Serialises conflict check + write within this process.
# The unique index on active slots covers identical slots across processes.
_booking_lock = threading.Lock()

EDITABLE_FIELDS = ("date", "time", "notes", "patient_phone")

# ---------------------------------------------------------------------------
# BOOKING
# ---------------------------------------------------------------------------

def book_appointment(store: DocumentStore, request: Dict[str, Any]) -> Appointment:
    """
    Create a pending appointment.
    Steps:
      1. Validate date/time (no past dates) and resolve the doctor
      2. Check for conflicts against the doctor's bookings
      3. Persist the appointment
      4. Notify the doctor and queue emails (best-effort)
    """
    validate_booking_date(request["date"])
    slot = time_to_minutes(request["time"])

    doctor = store.get("doctors", request["doctor_id"])
    if doctor is None:
        raise NotFoundError("Doctor not found")

    repo = AppointmentRepository(store)
    with _booking_lock:
        existing = repo.booked_for_doctor(doctor.id)
        if has_conflict(doctor.id, request["date"], request["time"], existing):
            raise SlotUnavailableError()

        try:
            appointment_id = store.create("appointments", {
                "doctor_id": doctor.id,
                "doctor_name": doctor.name,
                "doctor_email": doctor.email,
                "patient_id": request["patient_id"],
                "patient_name": request["patient_name"],
                "patient_email": request["patient_email"],
                "patient_phone": request["patient_phone"],
                "date": request["date"],
                "time": request["time"],
                "slot_minutes": slot,
                "notes": request.get("notes"),
                "status": AppointmentStatus.pending,
            })
        except DuplicateRecordError as e:
            raise SlotUnavailableError() from e

    appointment = repo.get(appointment_id)
    logger.info("Appointment %s booked with %s on %s at %s", appointment.id, doctor.name, appointment.date, appointment.time)

    notify_new_appointment(store, appointment, doctor)
    return appointment


def update_appointment(store: DocumentStore, appointment_id: int, changes: Dict[str, Any]) -> Appointment:
    """
    Edit an active appointment. A new date or time is checked for conflicts
    against the doctor's other bookings (the appointment itself is excluded).
    """
    repo = AppointmentRepository(store)
    appointment = repo.get(appointment_id)
    if is_terminal(appointment.status):
        raise InvalidTransitionError(f"Cannot edit a {appointment.status.value} appointment")

    updates = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None}
    new_date = updates.get("date", appointment.date)
    new_time = updates.get("time", appointment.time)
    if "date" in updates:
        validate_booking_date(new_date)
    else:
        parse_date(new_date)
    slot = time_to_minutes(new_time)

    with _booking_lock:
        if "date" in updates or "time" in updates:
            existing = repo.booked_for_doctor(appointment.doctor_id)
            if has_conflict(appointment.doctor_id, new_date, new_time, existing, exclude_id=appointment.id):
                raise SlotUnavailableError()
            updates["slot_minutes"] = slot
        try:
            store.update("appointments", appointment.id, updates)
        except DuplicateRecordError as e:
            raise SlotUnavailableError() from e

    logger.info("Appointment %s updated: %s", appointment_id, sorted(updates))
    return repo.get(appointment_id)


def change_status(store: DocumentStore, appointment_id: int, new_status: AppointmentStatus) -> Appointment:
    """Move an appointment along its lifecycle and notify the doctor."""
    new_status = AppointmentStatus(new_status)
    repo = AppointmentRepository(store)
    appointment = repo.get(appointment_id)
    validate_transition(appointment.status, new_status)

    store.update("appointments", appointment.id, {"status": new_status})
    appointment = repo.get(appointment_id)
    logger.info("Appointment %s is now %s", appointment.id, new_status.value)

    record_doctor_notification(store, appointment, notification_type_for(new_status))
    return appointment


def reschedule_appointment(store: DocumentStore, appointment_id: int) -> Appointment:
    # TODO: let doctors propose a new slot for cancelled/completed appointments
    raise NotImplementedError("Reschedule functionality will be available soon.")


def get_appointment(store: DocumentStore, appointment_id: int) -> Appointment:
    return AppointmentRepository(store).get(appointment_id)


def delete_appointment(store: DocumentStore, appointment_id: int) -> None:
    AppointmentRepository(store).get(appointment_id)
    store.delete("appointments", appointment_id)
    logger.info("Appointment %s deleted", appointment_id)


def doctor_appointments(store: DocumentStore, doctor_id: int, status: Optional[str] = None) -> List[Appointment]:
    return AppointmentRepository(store).for_doctor(doctor_id, status)


def patient_appointments(store: DocumentStore, patient_id: str) -> List[Appointment]:
    return AppointmentRepository(store).for_patient(patient_id)


# ---------------------------------------------------------------------------
# NOTIFICATION INBOX
# ---------------------------------------------------------------------------

def doctor_notifications(store: DocumentStore, doctor_id: int, unread_only: bool = False) -> List[DoctorNotification]:
    """Newest first."""
    rows = store.query("notifications", doctor_id=doctor_id)
    if unread_only:
        rows = [n for n in rows if n.status == NotificationStatus.unread]
    return sorted(rows, key=lambda n: (n.created_at or datetime.datetime.min, n.id), reverse=True)


def mark_notification_read(store: DocumentStore, notification_id: int) -> DoctorNotification:
    notification = store.get("notifications", notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.status != NotificationStatus.read:
        store.update("notifications", notification_id, {
            "status": NotificationStatus.read,
            "read_at": datetime.datetime.utcnow(),
        })
    return store.get("notifications", notification_id)
