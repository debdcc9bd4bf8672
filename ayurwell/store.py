"""
store.py
========
Document-store style persistence facade over SQLAlchemy.

Records live in named collections (doctors, appointments, notifications,
email_queue). Only single-field equality queries are offered; further
filtering and ordering happen in Python (see AppointmentRepository).
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import (
    AppointmentsLoadError, AvailabilityCheckError, DuplicateRecordError,
    NotFoundError, PersistenceError,
)
from .models import Appointment, Doctor, DoctorNotification, EmailLog
from .scheduling import filter_by_status, sort_appointments

logger = logging.getLogger(__name__)

COLLECTIONS = {
    "doctors": Doctor,
    "appointments": Appointment,
    "notifications": DoctorNotification,
    "email_queue": EmailLog,
}


class DocumentStore:
    """
    Thin CRUD layer bound to one SQLAlchemy session.
    Every SQLAlchemy failure surfaces as PersistenceError.
    """

    def __init__(self, db: Session):
        self.db = db

    def _model(self, collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}")

    def query(self, collection: str, **filters) -> List[Any]:
        """Return records matching at most one ``field == value`` filter."""
        if len(filters) > 1:
            raise ValueError("Only single-field equality filters are supported")
        model = self._model(collection)
        try:
            q = self.db.query(model)
            for field, value in filters.items():
                q = q.filter(getattr(model, field) == value)
            return q.all()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Query on {collection} failed: {e}") from e

    def get(self, collection: str, record_id: int) -> Optional[Any]:
        model = self._model(collection)
        try:
            return self.db.get(model, record_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Read from {collection} failed: {e}") from e

    def create(self, collection: str, record: Dict[str, Any]) -> int:
        model = self._model(collection)
        obj = model(**record)
        try:
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecordError(f"Write to {collection} rejected: {e.orig}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Write to {collection} failed: {e}") from e
        return obj.id

    def update(self, collection: str, record_id: int, changes: Dict[str, Any]) -> None:
        obj = self.get(collection, record_id)
        if obj is None:
            raise NotFoundError(f"{collection} record {record_id} not found")
        try:
            for field, value in changes.items():
                setattr(obj, field, value)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecordError(f"Update of {collection} rejected: {e.orig}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Update of {collection} failed: {e}") from e

    def delete(self, collection: str, record_id: int) -> None:
        obj = self.get(collection, record_id)
        if obj is None:
            raise NotFoundError(f"{collection} record {record_id} not found")
        try:
            self.db.delete(obj)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Delete from {collection} failed: {e}") from e


class AppointmentRepository:
    """
    Appointment reads for dashboards and conflict checks.
    Fetches by a single field, then filters and sorts client-side so no
    composite index is ever required.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    def get(self, appointment_id: int) -> Appointment:
        appt = self.store.get("appointments", appointment_id)
        if appt is None:
            raise NotFoundError("Appointment not found")
        return appt

    def for_doctor(self, doctor_id: int, status: Optional[str] = None) -> List[Appointment]:
        try:
            rows = self.store.query("appointments", doctor_id=doctor_id)
        except PersistenceError as e:
            logger.error("Loading appointments for doctor %s failed: %s", doctor_id, e)
            raise AppointmentsLoadError() from e
        return sort_appointments(filter_by_status(rows, status))

    def for_patient(self, patient_id: str) -> List[Appointment]:
        try:
            rows = self.store.query("appointments", patient_id=patient_id)
        except PersistenceError as e:
            logger.error("Loading appointments for patient %s failed: %s", patient_id, e)
            raise AppointmentsLoadError() from e
        return sort_appointments(rows)

    def booked_for_doctor(self, doctor_id: int) -> List[Appointment]:
        """Raw bookings used by the conflict check. A failed read is never treated as 'free'."""
        try:
            return self.store.query("appointments", doctor_id=doctor_id)
        except PersistenceError as e:
            logger.error("Availability check for doctor %s failed: %s", doctor_id, e)
            raise AvailabilityCheckError() from e
