"""
doctors.py
==========
Practitioner directory: listing, lookup, registration, profile edits,
removal, search and seeding.
"""

import logging
from typing import Any, Dict, Iterable, List

from .errors import DoctorHasAppointmentsError, NotFoundError
from .models import Doctor
from .scheduling import is_terminal
from .store import AppointmentRepository

logger = logging.getLogger(__name__)

DEFAULT_DOCTORS = [
    {"name": "Dr. Anjali Sharma", "specialization": "Ayurvedic Physician", "location": "Colombo", "email": "anjali.sharma@ayurwell.example"},
    {"name": "Dr. Ravi Menon", "specialization": "Panchakarma Specialist", "location": "Kandy", "email": "ravi.menon@ayurwell.example"},
    {"name": "Dr. Nimal Perera", "specialization": "Marma Therapy Expert", "location": "Galle", "email": "nimal.perera@ayurwell.example"},
    {"name": "Dr. Priya Nair", "specialization": "Herbal Medicine Specialist", "location": "Colombo", "email": "priya.nair@ayurwell.example"},
    {"name": "Dr. Suresh Iyer", "specialization": "Nadi Pariksha Expert", "location": "Negombo", "email": "suresh.iyer@ayurwell.example"},
    {"name": "Dr. Kavya Rao", "specialization": "Ayurvedic Nutritionist", "location": "Kandy", "email": "kavya.rao@ayurwell.example"},
    {"name": "Dr. Dinesh Fernando", "specialization": "Ayurvedic Dermatologist", "location": "Matara", "email": "dinesh.fernando@ayurwell.example"},
    {"name": "Dr. Meera Joshi", "specialization": "Yoga Therapist", "location": "Colombo", "email": "meera.joshi@ayurwell.example"},
    {"name": "Dr. Lakshmi Silva", "specialization": "Ayurvedic Gynecologist", "location": "Jaffna", "email": "lakshmi.silva@ayurwell.example"},
    {"name": "Dr. Arjun Das", "specialization": "Ayurvedic Pediatrician", "location": "Kurunegala", "email": "arjun.das@ayurwell.example"},
]


def list_doctors(store) -> List[Doctor]:
    return sorted(store.query("doctors"), key=lambda d: d.name.lower())


def get_doctor(store, doctor_id: int) -> Doctor:
    doctor = store.get("doctors", doctor_id)
    if doctor is None:
        raise NotFoundError("Doctor not found")
    return doctor


def register_doctor(store, data: Dict[str, Any]) -> Doctor:
    doctor_id = store.create("doctors", data)
    logger.info("Registered doctor %s (ID: %s)", data.get("name"), doctor_id)
    return store.get("doctors", doctor_id)


def update_doctor(store, doctor_id: int, changes: Dict[str, Any]) -> Doctor:
    doctor = get_doctor(store, doctor_id)
    updates = {k: v for k, v in changes.items() if v is not None}
    if updates:
        store.update("doctors", doctor.id, updates)
        logger.info("Doctor %s updated: %s", doctor.id, sorted(updates))
    return store.get("doctors", doctor.id)


def delete_doctor(store, doctor_id: int) -> None:
    """
    Remove a practitioner. Refused while any of their appointments is still
    pending or confirmed; past appointments keep the doctor's name and email.
    """
    doctor = get_doctor(store, doctor_id)
    booked = AppointmentRepository(store).booked_for_doctor(doctor.id)
    if any(not is_terminal(a.status) for a in booked):
        raise DoctorHasAppointmentsError()
    store.delete("doctors", doctor.id)
    logger.info("Doctor %s (ID: %s) removed", doctor.name, doctor.id)


def search_doctors(doctors: Iterable[Doctor], query: str) -> List[Doctor]:
    """Case-insensitive substring match on name, specialization or location."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(doctors)
    return [
        d for d in doctors
        if needle in (d.name or "").lower()
        or needle in (d.specialization or "").lower()
        or needle in (d.location or "").lower()
    ]


def seed_default_doctors(store) -> int:
    """Insert the default practitioners when the directory is empty. Returns how many were added."""
    existing = store.query("doctors")
    if existing:
        logger.info("%d doctors already exist in the directory.", len(existing))
        return 0

    logger.info("No doctors found. Seeding default doctors...")
    for data in DEFAULT_DOCTORS:
        store.create("doctors", dict(data))
    logger.info("Default doctors have been seeded.")
    return len(DEFAULT_DOCTORS)
