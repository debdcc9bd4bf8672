"""
conftest.py
===========
Shared fixtures. The settings are pointed at a throwaway SQLite file before
the application package is imported.
"""

import datetime
import os
import tempfile

_TEST_DB_DIR = tempfile.mkdtemp(prefix="ayurwell-tests-")
os.environ["AYURWELL_DB_PATH"] = os.path.join(_TEST_DB_DIR, "api.db")
os.environ.pop("AYURWELL_PUSHOVER_TOKEN", None)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ayurwell.models import Base
from ayurwell.store import DocumentStore


def days_ahead(days):
    """A DD/MM/YYYY date ``days`` from today, so bookings never land in the past."""
    return (datetime.date.today() + datetime.timedelta(days=days)).strftime("%d/%m/%Y")


# --------------------------------------------------------------------------
# FIXTURE: isolated store on a temporary database
# --------------------------------------------------------------------------

@pytest.fixture
def store(tmp_path):
    """A DocumentStore bound to a fresh SQLite database per test."""
    engine = create_engine(f"sqlite:///{tmp_path / 'store.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield DocumentStore(db)
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def doctor(store):
    doctor_id = store.create("doctors", {
        "name": "Dr. Asha Verma",
        "specialization": "Ayurvedic Physician",
        "location": "Colombo",
        "email": "asha@ayurwell.example",
    })
    return store.get("doctors", doctor_id)


@pytest.fixture
def future_date():
    return days_ahead


@pytest.fixture
def booking_request(doctor):
    return {
        "doctor_id": doctor.id,
        "patient_id": "patient-1",
        "patient_name": "Kamal Silva",
        "patient_email": "kamal@example.com",
        "patient_phone": "+94 77 123 4567",
        "date": days_ahead(30),
        "time": "09:00 AM",
        "notes": "Recurring headaches",
    }
