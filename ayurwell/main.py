"""
main.py
========
This is the FastAPI entry point for the AyurWell wellness backend.
It:
 - Initializes the database.
 - Seeds default doctors if none exist.
 - Exposes REST API endpoints for the symptom checker, doctors and appointments.
 - Serves the home-remedy catalog and general health guidance.
 - Handles WebSocket connections for real-time doctor notifications.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import booking, doctors, dosha, remedies
from .config import settings
from .db import SessionLocal, get_db, init_db
from .errors import (
    AppointmentsLoadError, AvailabilityCheckError, AyurWellError, DoctorHasAppointmentsError,
    InvalidDateError, InvalidTimeError, InvalidTransitionError, NotFoundError,
    PersistenceError, SlotUnavailableError,
)
from .models import Base
from .notifications import broadcast_to_doctor, register_ws, unregister_ws
from .scheduling import available_slots, parse_date
from .schemas import (
    AppointmentResponse, AppointmentUpdate, BookingRequest, DoctorCreate, DoctorResponse,
    DoctorUpdate, HealthTipResponse, NotificationResponse, QuestionResponse, RemedyResponse,
    SlotsResponse, StatusUpdate, SymptomCheckRequest, SymptomCheckResponse,
)
from .store import AppointmentRepository, DocumentStore

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# APP INITIALIZATION
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Initializes the database and seeds doctors before serving requests.
    """
    logger.info("Starting AyurWell backend...")
    init_db(Base)  # Create tables if missing

    if settings.seed_doctors:
        db = SessionLocal()
        try:
            doctors.seed_default_doctors(DocumentStore(db))
        finally:
            db.close()

    yield
    logger.info("AyurWell backend shutting down...")


app = FastAPI(title="AyurWell Backend", version="1.0", lifespan=lifespan)

# Allow the mobile/web frontend to communicate
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_store(db: Session = Depends(get_db)) -> DocumentStore:
    return DocumentStore(db)


# ---------------------------------------------------------------------------
# ERROR MAPPING
# ---------------------------------------------------------------------------

_STATUS_CODES = [
    (NotFoundError, 404),
    (SlotUnavailableError, 409),
    ((InvalidTransitionError, DoctorHasAppointmentsError), 409),
    ((InvalidDateError, InvalidTimeError), 422),
    ((AvailabilityCheckError, AppointmentsLoadError, PersistenceError), 503),
]


@app.exception_handler(AyurWellError)
async def domain_exception_handler(request: Request, exc: AyurWellError):
    status_code = 500
    for error_types, code in _STATUS_CODES:
        if isinstance(exc, error_types):
            status_code = code
            break
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


# ---------------------------------------------------------------------------
# SYMPTOM CHECKER
# ---------------------------------------------------------------------------

@app.get("/api/symptom-checker/questions", response_model=List[QuestionResponse])
def api_questions():
    """The six questionnaire steps in answer order."""
    return dosha.QUESTIONS


@app.post("/api/symptom-checker", response_model=SymptomCheckResponse)
def api_symptom_check(req: SymptomCheckRequest):
    """
    Classify questionnaire answers.
    Unknown answers are accepted and simply carry no weight.
    """
    result = dosha.classify(req.answers)
    return {
        "dosha": result.dosha,
        "description": result.description,
        "remedies": list(result.remedies),
        "scores": result.score.as_dict(),
    }


# ---------------------------------------------------------------------------
# REMEDIES & HEALTH INFO
# ---------------------------------------------------------------------------

@app.get("/api/remedies", response_model=List[RemedyResponse])
def api_list_remedies(q: Optional[str] = None):
    """Home remedies, optionally filtered by title, description or category."""
    return remedies.search_remedies(q)


@app.get("/api/remedies/{remedy_id}", response_model=RemedyResponse)
def api_get_remedy(remedy_id: int):
    return remedies.get_remedy(remedy_id)


@app.get("/api/health-info", response_model=List[HealthTipResponse])
def api_health_info():
    return remedies.HEALTH_TIPS


# ---------------------------------------------------------------------------
# DOCTORS
# ---------------------------------------------------------------------------

@app.get("/api/doctors", response_model=List[DoctorResponse])
def api_list_doctors(q: Optional[str] = None, store: DocumentStore = Depends(get_store)):
    """List doctors, optionally filtered by name, specialization or location."""
    return doctors.search_doctors(doctors.list_doctors(store), q)


@app.post("/api/doctors", response_model=DoctorResponse, status_code=201)
def api_register_doctor(req: DoctorCreate, store: DocumentStore = Depends(get_store)):
    return doctors.register_doctor(store, req.model_dump())


@app.get("/api/doctors/{doctor_id}", response_model=DoctorResponse)
def api_get_doctor(doctor_id: int, store: DocumentStore = Depends(get_store)):
    return doctors.get_doctor(store, doctor_id)


@app.patch("/api/doctors/{doctor_id}", response_model=DoctorResponse)
def api_update_doctor(doctor_id: int, req: DoctorUpdate, store: DocumentStore = Depends(get_store)):
    return doctors.update_doctor(store, doctor_id, req.model_dump(exclude_unset=True))


@app.delete("/api/doctors/{doctor_id}", status_code=204)
def api_delete_doctor(doctor_id: int, store: DocumentStore = Depends(get_store)):
    """Remove a doctor. 409 while they still have pending or confirmed appointments."""
    doctors.delete_doctor(store, doctor_id)


@app.get("/api/doctors/{doctor_id}/slots", response_model=SlotsResponse)
def api_doctor_slots(doctor_id: int, date: str = Query(...), store: DocumentStore = Depends(get_store)):
    """Bookable time slots for a doctor on a DD/MM/YYYY date."""
    parse_date(date)
    doctors.get_doctor(store, doctor_id)
    existing = AppointmentRepository(store).booked_for_doctor(doctor_id)
    return {"doctor_id": doctor_id, "date": date, "available": available_slots(doctor_id, date, existing)}


@app.get("/api/doctors/{doctor_id}/appointments", response_model=List[AppointmentResponse])
def api_doctor_appointments(doctor_id: int, status: Optional[str] = None, store: DocumentStore = Depends(get_store)):
    """
    Appointments for the doctor dashboard, newest date first.
    ``status`` filters by lifecycle state ("all" or omitted keeps everything).
    """
    doctors.get_doctor(store, doctor_id)
    return booking.doctor_appointments(store, doctor_id, status)


@app.get("/api/doctors/{doctor_id}/notifications", response_model=List[NotificationResponse])
def api_doctor_notifications(doctor_id: int, unread: bool = False, store: DocumentStore = Depends(get_store)):
    doctors.get_doctor(store, doctor_id)
    return booking.doctor_notifications(store, doctor_id, unread_only=unread)


@app.post("/api/notifications/{notification_id}/read", response_model=NotificationResponse)
def api_mark_notification_read(notification_id: int, store: DocumentStore = Depends(get_store)):
    return booking.mark_notification_read(store, notification_id)


# ---------------------------------------------------------------------------
# APPOINTMENTS
# ---------------------------------------------------------------------------

@app.post("/api/appointments", response_model=AppointmentResponse, status_code=201)
async def api_book_appointment(req: BookingRequest, store: DocumentStore = Depends(get_store)):
    """
    Book an appointment.

    - Rejects the request with 409 when the slot is within 30 minutes of another booking
    - Returns 503 if availability could not be checked
    - Notifies the doctor of the new request
    """
    # The booking path blocks (lock, SQLite, Pushover); keep it off the event loop.
    appointment = await run_in_threadpool(booking.book_appointment, store, req.model_dump())
    await broadcast_to_doctor(appointment.doctor_id, {
        "event": "new_appointment",
        "appointment_id": appointment.id,
    })
    return appointment


@app.get("/api/appointments/{appointment_id}", response_model=AppointmentResponse)
def api_get_appointment(appointment_id: int, store: DocumentStore = Depends(get_store)):
    return booking.get_appointment(store, appointment_id)


@app.patch("/api/appointments/{appointment_id}", response_model=AppointmentResponse)
def api_update_appointment(appointment_id: int, req: AppointmentUpdate, store: DocumentStore = Depends(get_store)):
    return booking.update_appointment(store, appointment_id, req.model_dump(exclude_unset=True))


@app.delete("/api/appointments/{appointment_id}", status_code=204)
def api_delete_appointment(appointment_id: int, store: DocumentStore = Depends(get_store)):
    booking.delete_appointment(store, appointment_id)


@app.post("/api/appointments/{appointment_id}/status", response_model=AppointmentResponse)
async def api_change_status(appointment_id: int, req: StatusUpdate, store: DocumentStore = Depends(get_store)):
    """Confirm, cancel or complete an appointment."""
    appointment = await run_in_threadpool(booking.change_status, store, appointment_id, req.status)
    await broadcast_to_doctor(appointment.doctor_id, {
        "event": "appointment_status",
        "appointment_id": appointment.id,
        "status": appointment.status.value,
    })
    return appointment


@app.post("/api/appointments/{appointment_id}/reschedule")
def api_reschedule_appointment(appointment_id: int, store: DocumentStore = Depends(get_store)):
    booking.get_appointment(store, appointment_id)
    try:
        return booking.reschedule_appointment(store, appointment_id)
    except NotImplementedError as e:
        raise HTTPException(status_code=501, detail=str(e))


@app.get("/api/patients/{patient_id}/appointments", response_model=List[AppointmentResponse])
def api_patient_appointments(patient_id: str, store: DocumentStore = Depends(get_store)):
    return booking.patient_appointments(store, patient_id)


# ---------------------------------------------------------------------------
# WEBSOCKET ENDPOINT
# ---------------------------------------------------------------------------

@app.websocket("/ws/doctor/{doctor_id}")
async def websocket_doctor(ws: WebSocket, doctor_id: int):
    """
    WebSocket endpoint for real-time notifications.
    Doctors connect here to receive new bookings and status changes.
    """
    await ws.accept()
    register_ws(doctor_id, ws)
    try:
        while True:
            data = await ws.receive_text()
            await ws.send_text(f"Echo: {data}")
    except WebSocketDisconnect:
        unregister_ws(doctor_id, ws)


# ---------------------------------------------------------------------------
# ROOT ENDPOINT
# ---------------------------------------------------------------------------

@app.get("/")
def root():
    """Basic health check endpoint."""
    return {"message": "AyurWell Backend is running!"}


def run():
    """Serve the app with uvicorn (console script: ``ayurwell-server``)."""
    uvicorn.run("ayurwell.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
