"""
schemas.py
==========
Pydantic models used for validating incoming requests and
structuring outgoing API responses.
"""

import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, List, Optional

from .models import AppointmentStatus, NotificationStatus, NotificationType
from .scheduling import time_to_minutes, validate_booking_date


def _check_date(value: Optional[str]) -> Optional[str]:
    if value is not None:
        validate_booking_date(value)
    return value


def _check_time(value: Optional[str]) -> Optional[str]:
    if value is not None:
        time_to_minutes(value)
    return value


# ---------------------------------------------------------------------------
# Symptom checker
# ---------------------------------------------------------------------------

class SymptomCheckRequest(BaseModel):
    """Answers in question order; sleep and energy may be omitted."""
    answers: List[str] = Field(..., max_length=6)


class SymptomCheckResponse(BaseModel):
    dosha: str
    description: str
    remedies: List[str]
    scores: Dict[str, int]


class QuestionOption(BaseModel):
    text: str
    description: str


class QuestionResponse(BaseModel):
    id: int
    key: str
    text: str
    description: str
    options: List[QuestionOption]


# ---------------------------------------------------------------------------
# Remedies and health guidance
# ---------------------------------------------------------------------------

class RemedyResponse(BaseModel):
    id: int
    title: str
    description: str
    category: str
    instructions: List[str]
    ingredients: List[str]
    benefits: List[str]


class HealthTipResponse(BaseModel):
    id: int
    title: str
    content: List[str]


# ---------------------------------------------------------------------------
# Doctors
# ---------------------------------------------------------------------------

class DoctorCreate(BaseModel):
    """Request body for registering a practitioner."""
    name: str = Field(..., min_length=1)
    specialization: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    consultation_fee: Optional[float] = Field(None, ge=0)
    pushover_user: Optional[str] = None


class DoctorUpdate(BaseModel):
    """Partial profile edit; omitted fields are left unchanged."""
    name: Optional[str] = Field(None, min_length=1)
    specialization: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=3)
    phone: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    consultation_fee: Optional[float] = Field(None, ge=0)
    pushover_user: Optional[str] = None


class DoctorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    specialization: str
    location: str
    email: str
    phone: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[int] = None
    rating: Optional[float] = None
    consultation_fee: Optional[float] = None


class SlotsResponse(BaseModel):
    doctor_id: int
    date: str
    available: List[str]


# ---------------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------------

class BookingRequest(BaseModel):
    """Request body for booking an appointment."""
    doctor_id: int
    patient_id: str = Field(..., min_length=1)
    patient_name: str = Field(..., min_length=1)
    patient_email: str = Field(..., min_length=3)
    patient_phone: str = Field(..., min_length=1)
    date: str
    time: str
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, value):
        return _check_date(value)

    @field_validator("time")
    @classmethod
    def validate_time(cls, value):
        return _check_time(value)


class AppointmentUpdate(BaseModel):
    """Patient-side edit of an existing appointment."""
    date: Optional[str] = None
    time: Optional[str] = None
    notes: Optional[str] = None
    patient_phone: Optional[str] = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, value):
        return _check_date(value)

    @field_validator("time")
    @classmethod
    def validate_time(cls, value):
        return _check_time(value)


class StatusUpdate(BaseModel):
    status: AppointmentStatus


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    doctor_id: int
    doctor_name: str
    doctor_email: str
    patient_id: str
    patient_name: str
    patient_email: str
    patient_phone: str
    date: str
    time: str
    notes: Optional[str] = None
    status: AppointmentStatus
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    doctor_id: int
    doctor_email: Optional[str] = None
    appointment_id: Optional[int] = None
    patient_name: Optional[str] = None
    patient_email: Optional[str] = None
    patient_phone: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    notes: Optional[str] = None
    type: NotificationType
    status: NotificationStatus
    created_at: Optional[datetime.datetime] = None
    read_at: Optional[datetime.datetime] = None
