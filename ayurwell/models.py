"""
models.py
=========
SQLAlchemy ORM models for the AyurWell backend.
Contains tables for:
 - Doctor
 - Appointment
 - DoctorNotification
 - EmailLog
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, Float, ForeignKey, Enum, Index, text
from sqlalchemy.orm import declarative_base
import datetime
import enum

# SQLAlchemy Base class
Base = declarative_base()

# ---------------------------------------------------------------------------
# ENUM DEFINITIONS
# ---------------------------------------------------------------------------

class AppointmentStatus(str, enum.Enum):
    """Lifecycle states of an appointment."""
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class NotificationType(str, enum.Enum):
    """Kinds of doctor notification."""
    new_appointment = "new_appointment"
    appointment_cancelled = "appointment_cancelled"
    appointment_confirmed = "appointment_confirmed"


class NotificationStatus(str, enum.Enum):
    unread = "unread"
    read = "read"


class EmailStatus(str, enum.Enum):
    pending = "pending"
    sent = "sent"
    failed = "failed"


# ---------------------------------------------------------------------------
# TABLE DEFINITIONS
# ---------------------------------------------------------------------------

class Doctor(Base):
    """Practitioner profile shown in the directory."""
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    specialization = Column(String, nullable=False)
    location = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    experience = Column(Integer, nullable=True)
    rating = Column(Float, nullable=True)
    consultation_fee = Column(Float, nullable=True)
    pushover_user = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)


class Appointment(Base):
    """A patient's booking with a doctor. Date is DD/MM/YYYY, time is "HH:MM AM/PM"."""
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)
    doctor_name = Column(String, nullable=False)
    doctor_email = Column(String, nullable=False)
    patient_id = Column(String, nullable=False)
    patient_name = Column(String, nullable=False)
    patient_email = Column(String, nullable=False)
    patient_phone = Column(String, nullable=False)
    date = Column(String, nullable=False)
    time = Column(String, nullable=False)
    slot_minutes = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    status = Column(Enum(AppointmentStatus), default=AppointmentStatus.pending, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    # No two active bookings may occupy the exact same slot
    __table_args__ = (
        Index(
            "uq_appointments_active_slot",
            "doctor_id", "date", "slot_minutes",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )


class DoctorNotification(Base):
    """In-app notice for a doctor about an appointment event."""
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)
    doctor_email = Column(String, nullable=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id", ondelete="SET NULL"), nullable=True)
    patient_name = Column(String)
    patient_email = Column(String)
    patient_phone = Column(String)
    date = Column(String)
    time = Column(String)
    notes = Column(Text, nullable=True)
    type = Column(Enum(NotificationType), nullable=False)
    status = Column(Enum(NotificationStatus), default=NotificationStatus.unread, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    read_at = Column(DateTime, nullable=True)


class EmailLog(Base):
    """Outgoing email record; every appointment email is logged here before sending."""
    __tablename__ = "email_queue"

    id = Column(Integer, primary_key=True)
    to = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    html = Column(Text)
    status = Column(Enum(EmailStatus), default=EmailStatus.pending, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
