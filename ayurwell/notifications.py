"""
notifications.py
=================
Doctor-facing side effects of appointment events:
 - DoctorNotification records (in-app inbox)
 - Pushover push messages
 - WebSocket broadcasts to connected doctor dashboards
 - appointment emails logged to the email queue

Everything here is best-effort. A failure is logged and never undoes the
appointment write that triggered it.
"""

import logging
import requests
from typing import Dict, List, Optional
from fastapi import WebSocket

from .config import settings
from .models import Appointment, Doctor, EmailStatus, NotificationStatus, NotificationType

logger = logging.getLogger(__name__)

# Registry to store connected WebSocket clients per doctor
connected_doctors: Dict[int, List[WebSocket]] = {}

# ---------------------------------------------------------------------------
# In-app notification records
# ---------------------------------------------------------------------------

def record_doctor_notification(store, appointment: Appointment, kind: NotificationType) -> Optional[int]:
    """
    Create a notification for the appointment's doctor.
    Returns the notification id, or None when the write failed.
    """
    try:
        return store.create("notifications", {
            "doctor_id": appointment.doctor_id,
            "doctor_email": appointment.doctor_email,
            "appointment_id": appointment.id,
            "patient_name": appointment.patient_name,
            "patient_email": appointment.patient_email,
            "patient_phone": appointment.patient_phone,
            "date": appointment.date,
            "time": appointment.time,
            "notes": appointment.notes,
            "type": kind,
            "status": NotificationStatus.unread,
        })
    except Exception:
        logger.exception("Failed to create %s notification for appointment %s", kind.value, appointment.id)
        return None


# ---------------------------------------------------------------------------
# Pushover Notification (optional)
# ---------------------------------------------------------------------------

def send_pushover(user_key: Optional[str], title: str, message: str) -> bool:
    """
    Sends a push notification using the Pushover API.
    Requires AYURWELL_PUSHOVER_TOKEN and a pushover user on the doctor.
    """
    if not user_key:
        return False  # no pushover user configured

    token = settings.pushover_token
    if not token:
        logger.info("Pushover token not configured, skipping notification.")
        return False

    try:
        resp = requests.post(
            "https://api.pushover.net/1/messages.json",
            data={"token": token, "user": user_key, "title": title, "message": message},
            timeout=5
        )
        if resp.status_code != 200:
            logger.warning("Pushover error: %s", resp.text)
            return False
    except requests.RequestException as e:
        logger.warning("Pushover send failed: %s", e)
        return False
    return True


# ---------------------------------------------------------------------------
# Appointment emails
# ---------------------------------------------------------------------------

def _doctor_email(appointment: Appointment) -> Dict[str, str]:
    return {
        "to": appointment.doctor_email,
        "subject": f"New Appointment Request: {appointment.patient_name} on {appointment.date} at {appointment.time}",
        "html": (
            "<h2>New Appointment Request</h2>"
            f"<p>Dear Dr. {appointment.doctor_name},</p>"
            "<p>You have a new appointment request with the following details:</p>"
            "<ul>"
            f"<li><strong>Patient:</strong> {appointment.patient_name}</li>"
            f"<li><strong>Patient Email:</strong> {appointment.patient_email}</li>"
            f"<li><strong>Patient Phone:</strong> {appointment.patient_phone}</li>"
            f"<li><strong>Date:</strong> {appointment.date}</li>"
            f"<li><strong>Time:</strong> {appointment.time}</li>"
            f"<li><strong>Notes:</strong> {appointment.notes or 'No additional notes'}</li>"
            "</ul>"
            "<p>Please log in to the AyurWell app to confirm or cancel this appointment.</p>"
        ),
    }


def _patient_email(appointment: Appointment) -> Dict[str, str]:
    return {
        "to": appointment.patient_email,
        "subject": f"Appointment Request with Dr. {appointment.doctor_name}",
        "html": (
            "<h2>Appointment Request Received</h2>"
            f"<p>Dear {appointment.patient_name},</p>"
            "<p>Your appointment request has been sent with the following details:</p>"
            "<ul>"
            f"<li><strong>Doctor:</strong> Dr. {appointment.doctor_name}</li>"
            f"<li><strong>Date:</strong> {appointment.date}</li>"
            f"<li><strong>Time:</strong> {appointment.time}</li>"
            "</ul>"
            "<p>If you need to cancel, please do so at least 24 hours in advance through the app.</p>"
        ),
    }


def queue_appointment_emails(store, appointment: Appointment) -> int:
    """Log doctor and patient emails for a new booking. Returns how many were queued."""
    queued = 0
    for email in (_doctor_email(appointment), _patient_email(appointment)):
        try:
            store.create("email_queue", {**email, "status": EmailStatus.pending})
            queued += 1
        except Exception:
            logger.exception("Failed to queue email to %s", email["to"])
    return queued


def notify_new_appointment(store, appointment: Appointment, doctor: Optional[Doctor] = None) -> None:
    """All side effects of a fresh booking."""
    record_doctor_notification(store, appointment, NotificationType.new_appointment)
    queue_appointment_emails(store, appointment)
    if doctor is not None:
        send_pushover(
            user_key=doctor.pushover_user,
            title="New Appointment Request",
            message=f"{appointment.patient_name} requested {appointment.date} at {appointment.time}",
        )


# ---------------------------------------------------------------------------
# WebSocket Registry
# ---------------------------------------------------------------------------

def register_ws(doctor_id: int, ws: WebSocket):
    """Register a WebSocket connection for a doctor."""
    connected_doctors.setdefault(doctor_id, []).append(ws)
    logger.info("Doctor %s connected via WebSocket (%d active).", doctor_id, len(connected_doctors[doctor_id]))


def unregister_ws(doctor_id: int, ws: WebSocket):
    """Unregister a WebSocket connection when disconnected."""
    if doctor_id in connected_doctors:
        connected_doctors[doctor_id] = [w for w in connected_doctors[doctor_id] if w != ws]
        if not connected_doctors[doctor_id]:
            del connected_doctors[doctor_id]
    logger.info("Doctor %s disconnected. Remaining sockets: %d", doctor_id, len(connected_doctors.get(doctor_id, [])))


async def broadcast_to_doctor(doctor_id: int, data: dict):
    """Send a JSON message to all active WebSocket connections for a doctor."""
    if doctor_id not in connected_doctors:
        return

    for ws in connected_doctors[doctor_id]:
        try:
            await ws.send_json(data)
        except Exception:
            logger.warning("Failed to send WS message to doctor %s", doctor_id)
