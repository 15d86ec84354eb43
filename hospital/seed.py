from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .logging_config import get_logger
from .models import AppointmentStatus, Doctor, Patient, new_appointment, new_consultation
from .repositories import PatientRepository
from .services import RecordsService

logger = get_logger(__name__)

DEMO_PATIENTS = [
    # nom, malade, score
    ("messi", True, 10),
    ("hafid", False, 20),
    ("Karim", True, 5),
]
UPDATED_SCORE = 99

DEMO_DOCTOR = ("Dr. Salma", "salma@hopital.ma", "Cardiologie")
DEMO_REPORT = "Consultation initiale : état stable."


@dataclass(frozen=True)
class SeedResult:
    patient_ids: list[int]
    updated_patient_id: int
    deleted_patient_id: int
    doctor_id: int
    appointment_id: int
    consultation_id: int


def seed_demo(service: RecordsService, patients: PatientRepository) -> SeedResult:
    """
    Données de démonstration, exécutées une fois au démarrage.

    L'ordre est fixe :
    1. insère 3 patients
    2. relit tous les patients et logue leurs noms
    3. met à jour le score du premier de la liste relue
    4. supprime le deuxième de la liste relue
    5. crée un médecin
    6. crée un rendez-vous (premier patient + médecin, EN_ATTENTE)
    7. crée la consultation de ce rendez-vous

    Les patients sont relus une seule fois (étape 2) : les étapes 3, 4 et 6
    dépendent de l'ordre de lecture (ordre d'insertion, find_all trie par id).
    Toute erreur remonte à l'appelant, sans reprise partielle.
    """
    now = datetime.now()

    inserted = [
        service.save_patient(Patient(name=name, birth_date=now, is_sick=sick, score=score))
        for name, sick, score in DEMO_PATIENTS
    ]

    listed = patients.find_all()
    for p in listed:
        logger.info("Patient: %s", p.name)

    first = listed[0]
    first.score = UPDATED_SCORE
    service.save_patient(first)

    second = listed[1]
    patients.delete_by_id(second.id)

    name, email, specialty = DEMO_DOCTOR
    doctor = service.save_doctor(Doctor(name=name, email=email, specialty=specialty))

    appointment = service.save_appointment(
        new_appointment(first, doctor, datetime.now(), status=AppointmentStatus.EN_ATTENTE)
    )
    logger.info("Rendez-vous enregistré, id=%s", appointment.id)

    consultation = service.save_consultation(new_consultation(appointment, DEMO_REPORT, datetime.now()))

    return SeedResult(
        patient_ids=[p.id for p in inserted],
        updated_patient_id=first.id,
        deleted_patient_id=second.id,
        doctor_id=doctor.id,
        appointment_id=appointment.id,
        consultation_id=consultation.id,
    )
