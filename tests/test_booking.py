"""
test_booking.py
===============
Booking workflow against a real (temporary) SQLite store:
 - booking, conflicts and edits
 - status lifecycle with notifications
 - failure handling of the conflict check and of side effects
"""

import pytest

from ayurwell import booking, notifications
from ayurwell.errors import (
    AppointmentsLoadError, AvailabilityCheckError, DuplicateRecordError, InvalidDateError,
    InvalidTransitionError, NotFoundError, PersistenceError, SlotUnavailableError,
)
from ayurwell.models import AppointmentStatus, NotificationStatus, NotificationType


def notification_types(store, doctor_id):
    return [n.type for n in store.query("notifications", doctor_id=doctor_id)]


# --------------------------------------------------------------------------
# BOOKING
# --------------------------------------------------------------------------

def test_book_creates_pending_appointment(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)

    assert appt.status == AppointmentStatus.pending
    assert appt.doctor_name == doctor.name
    assert appt.doctor_email == doctor.email
    assert appt.slot_minutes == 9 * 60
    assert notification_types(store, doctor.id) == [NotificationType.new_appointment]
    assert len(store.query("email_queue")) == 2


def test_book_unknown_doctor(store, booking_request):
    booking_request["doctor_id"] = 999
    with pytest.raises(NotFoundError):
        booking.book_appointment(store, booking_request)


@pytest.mark.parametrize("date", ["01/01/1999", "01/01/2031", "31/02/2027"])
def test_book_rejects_past_or_out_of_range_date(store, doctor, booking_request, date):
    with pytest.raises(InvalidDateError):
        booking.book_appointment(store, dict(booking_request, date=date))
    assert store.query("appointments") == []


def test_book_rejects_yesterday(store, doctor, booking_request, future_date):
    with pytest.raises(InvalidDateError):
        booking.book_appointment(store, dict(booking_request, date=future_date(-1)))


def test_book_accepts_today(store, doctor, booking_request, future_date):
    appt = booking.book_appointment(store, dict(booking_request, date=future_date(0)))
    assert appt.date == future_date(0)


def test_book_rejects_overlapping_slot(store, doctor, booking_request):
    booking.book_appointment(store, booking_request)

    clash = dict(booking_request, patient_id="patient-2", time="09:20 AM")
    with pytest.raises(SlotUnavailableError):
        booking.book_appointment(store, clash)

    later = dict(booking_request, patient_id="patient-2", time="09:30 AM")
    assert booking.book_appointment(store, later).time == "09:30 AM"


def test_cancelled_slot_can_be_rebooked(store, doctor, booking_request):
    first = booking.book_appointment(store, booking_request)
    booking.change_status(store, first.id, AppointmentStatus.cancelled)

    again = booking.book_appointment(store, dict(booking_request, patient_id="patient-2"))
    assert again.id != first.id
    assert again.status == AppointmentStatus.pending


def test_unique_index_blocks_identical_active_slot(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)
    record = {
        "doctor_id": doctor.id, "doctor_name": doctor.name, "doctor_email": doctor.email,
        "patient_id": "p-x", "patient_name": "X", "patient_email": "x@example.com",
        "patient_phone": "1", "date": appt.date, "time": appt.time,
        "slot_minutes": appt.slot_minutes, "status": AppointmentStatus.pending,
    }
    with pytest.raises(DuplicateRecordError):
        store.create("appointments", record)


def test_failed_availability_check_blocks_booking(store, doctor, booking_request, monkeypatch):
    def broken_query(collection, **filters):
        raise PersistenceError("store unreachable")

    monkeypatch.setattr(store, "query", broken_query)
    with pytest.raises(AvailabilityCheckError):
        booking.book_appointment(store, booking_request)

    monkeypatch.undo()
    assert store.query("appointments") == []


def test_notification_failure_does_not_fail_booking(store, doctor, booking_request, monkeypatch):
    real_create = store.create

    def flaky_create(collection, record):
        if collection in ("notifications", "email_queue"):
            raise PersistenceError("notifications down")
        return real_create(collection, record)

    monkeypatch.setattr(store, "create", flaky_create)
    appt = booking.book_appointment(store, booking_request)
    monkeypatch.undo()

    assert store.get("appointments", appt.id) is not None
    assert store.query("notifications") == []


def test_new_booking_pushes_to_doctor(store, doctor, booking_request, monkeypatch):
    sent = []
    monkeypatch.setattr(notifications, "send_pushover", lambda **kw: sent.append(kw))
    booking.book_appointment(store, booking_request)
    assert sent and sent[0]["title"] == "New Appointment Request"


# --------------------------------------------------------------------------
# EDITS
# --------------------------------------------------------------------------

def test_update_moves_slot_and_ignores_itself(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)
    updated = booking.update_appointment(store, appt.id, {"time": "09:15 AM", "notes": "Moved"})

    assert updated.time == "09:15 AM"
    assert updated.slot_minutes == 9 * 60 + 15
    assert updated.notes == "Moved"


def test_update_rejects_conflict_with_other_booking(store, doctor, booking_request):
    booking.book_appointment(store, booking_request)
    other = booking.book_appointment(store, dict(booking_request, patient_id="p2", time="10:00 AM"))

    with pytest.raises(SlotUnavailableError):
        booking.update_appointment(store, other.id, {"time": "09:10 AM"})


def test_update_rejects_past_date(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)
    with pytest.raises(InvalidDateError):
        booking.update_appointment(store, appt.id, {"date": "01/01/1999"})
    assert booking.get_appointment(store, appt.id).date == booking_request["date"]


def test_update_rejects_terminal_appointment(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)
    booking.change_status(store, appt.id, "cancelled")
    with pytest.raises(InvalidTransitionError):
        booking.update_appointment(store, appt.id, {"notes": "too late"})


# --------------------------------------------------------------------------
# LIFECYCLE
# --------------------------------------------------------------------------

def test_end_to_end_confirm_then_complete(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)
    assert booking.get_appointment(store, appt.id).status == AppointmentStatus.pending
    assert notification_types(store, doctor.id) == [NotificationType.new_appointment]

    booking.change_status(store, appt.id, AppointmentStatus.confirmed)
    assert booking.get_appointment(store, appt.id).status == AppointmentStatus.confirmed
    assert notification_types(store, doctor.id)[-1] == NotificationType.appointment_confirmed

    booking.change_status(store, appt.id, AppointmentStatus.completed)
    assert booking.get_appointment(store, appt.id).status == AppointmentStatus.completed
    # completion reuses the confirmation notification type
    assert notification_types(store, doctor.id) == [
        NotificationType.new_appointment,
        NotificationType.appointment_confirmed,
        NotificationType.appointment_confirmed,
    ]


def test_cancel_notifies_with_cancel_type(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)
    booking.change_status(store, appt.id, "cancelled")
    assert notification_types(store, doctor.id)[-1] == NotificationType.appointment_cancelled


def test_illegal_transition_leaves_record_untouched(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)
    booking.change_status(store, appt.id, "confirmed")
    booking.change_status(store, appt.id, "completed")

    with pytest.raises(InvalidTransitionError):
        booking.change_status(store, appt.id, "pending")
    assert booking.get_appointment(store, appt.id).status == AppointmentStatus.completed


def test_reschedule_not_available(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)
    with pytest.raises(NotImplementedError):
        booking.reschedule_appointment(store, appt.id)


# --------------------------------------------------------------------------
# LISTINGS
# --------------------------------------------------------------------------

def test_doctor_appointments_sorted_and_filtered(store, doctor, booking_request, future_date):
    earlier, later = future_date(40), future_date(41)
    booking.book_appointment(store, dict(booking_request, date=earlier, time="02:00 PM"))
    booking.book_appointment(store, dict(booking_request, date=earlier, time="11:00 AM"))
    newest = booking.book_appointment(store, dict(booking_request, date=later, time="09:00 AM"))
    booking.change_status(store, newest.id, "confirmed")

    rows = booking.doctor_appointments(store, doctor.id)
    assert [(a.date, a.time) for a in rows] == [
        (later, "09:00 AM"),
        (earlier, "11:00 AM"),
        (earlier, "02:00 PM"),
    ]
    assert [a.id for a in booking.doctor_appointments(store, doctor.id, "confirmed")] == [newest.id]


def test_patient_appointments(store, doctor, booking_request):
    booking.book_appointment(store, booking_request)
    booking.book_appointment(store, dict(booking_request, patient_id="someone-else", time="11:00 AM"))
    rows = booking.patient_appointments(store, "patient-1")
    assert [a.patient_id for a in rows] == ["patient-1"]


def test_listing_failure_is_reported(store, doctor, monkeypatch):
    def broken_query(collection, **filters):
        raise PersistenceError("boom")

    monkeypatch.setattr(store, "query", broken_query)
    with pytest.raises(AppointmentsLoadError):
        booking.doctor_appointments(store, doctor.id)


def test_delete_appointment(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)
    booking.delete_appointment(store, appt.id)
    with pytest.raises(NotFoundError):
        booking.get_appointment(store, appt.id)


# --------------------------------------------------------------------------
# NOTIFICATION INBOX
# --------------------------------------------------------------------------

def test_mark_notification_read(store, doctor, booking_request):
    appt = booking.book_appointment(store, booking_request)
    booking.change_status(store, appt.id, "confirmed")

    inbox = booking.doctor_notifications(store, doctor.id)
    assert len(inbox) == 2
    assert inbox[0].type == NotificationType.appointment_confirmed

    read = booking.mark_notification_read(store, inbox[0].id)
    assert read.status == NotificationStatus.read
    assert read.read_at is not None
    assert [n.id for n in booking.doctor_notifications(store, doctor.id, unread_only=True)] == [inbox[1].id]


def test_mark_missing_notification(store):
    with pytest.raises(NotFoundError):
        booking.mark_notification_read(store, 12345)
