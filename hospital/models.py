from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .db import Base
from .errors import ConstraintViolation


class AppointmentStatus(enum.Enum):
    EN_ATTENTE = "EN_ATTENTE"
    CONFIRME = "CONFIRME"
    ANNULE = "ANNULE"
    TERMINE = "TERMINE"


def _persisted_id(key: str, value) -> int | None:
    """Id d'une entité référencée ; elle doit déjà exister en base."""
    if value is None:
        return None
    if value.id is None:
        raise ConstraintViolation(f"{key} non enregistré : sauvegarder la référence avant de l'affecter")
    return value.id


class Patient(Base):
    __tablename__ = "patients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    birth_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    is_sick: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"Patient({self.id}, {self.name}, score={self.score})"


class Doctor(Base):
    __tablename__ = "doctors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(120), nullable=True)
    specialty: Mapped[str | None] = mapped_column(String(120), nullable=True)

    # pas de collection "appointments" : voir AppointmentRepository.find_by_doctor

    def __repr__(self) -> str:
        return f"Doctor({self.id}, {self.name}, {self.specialty})"


class Appointment(Base):
    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[AppointmentStatus] = mapped_column(
        Enum(AppointmentStatus), default=AppointmentStatus.EN_ATTENTE, nullable=False
    )

    patient_id: Mapped[int] = mapped_column(ForeignKey("patients.id", ondelete="RESTRICT"), nullable=False)
    doctor_id: Mapped[int] = mapped_column(ForeignKey("doctors.id", ondelete="RESTRICT"), nullable=False)

    # non persistées telles quelles : l'affectation recopie l'id dans patient_id / doctor_id
    patient: Mapped["Patient"] = relationship(viewonly=True, lazy="joined")
    doctor: Mapped["Doctor"] = relationship(viewonly=True, lazy="joined")

    @validates("patient", "doctor")
    def _sync_reference(self, key: str, value):
        setattr(self, f"{key}_id", _persisted_id(key, value))
        return value

    def __repr__(self) -> str:
        return f"Appointment({self.id}, {self.status.value if self.status else None}, {self.date_time})"


class Consultation(Base):
    __tablename__ = "consultations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    consultation_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    report: Mapped[str | None] = mapped_column(Text, nullable=True)

    # une seule consultation par rendez-vous
    appointment_id: Mapped[int] = mapped_column(
        ForeignKey("appointments.id", ondelete="RESTRICT"), nullable=False, unique=True
    )

    appointment: Mapped["Appointment"] = relationship(viewonly=True, lazy="joined")

    @validates("appointment")
    def _sync_reference(self, key: str, value):
        self.appointment_id = _persisted_id(key, value)
        return value

    def __repr__(self) -> str:
        return f"Consultation({self.id}, appointment={self.appointment_id})"


def new_appointment(
    patient: Patient,
    doctor: Doctor,
    date_time: datetime,
    status: AppointmentStatus = AppointmentStatus.EN_ATTENTE,
) -> Appointment:
    """Construit un rendez-vous à partir d'entités déjà persistées."""
    return Appointment(patient_id=patient.id, doctor_id=doctor.id, date_time=date_time, status=status)


def new_consultation(appointment: Appointment, report: str, consultation_date: datetime) -> Consultation:
    return Consultation(appointment_id=appointment.id, report=report, consultation_date=consultation_date)
