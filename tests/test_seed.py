from __future__ import annotations

import logging

import pytest

from hospital.bootstrap import bootstrap
from hospital.errors import ConstraintViolation
from hospital.models import AppointmentStatus, Patient
from hospital.seed import DEMO_REPORT, seed_demo


def test_seed_scenario(app):
    result = seed_demo(app.service, app.patients)

    messi_id, hafid_id, karim_id = result.patient_ids
    assert app.patients.find_by_id(hafid_id) is None
    assert result.deleted_patient_id == hafid_id
    assert result.updated_patient_id == messi_id

    messi = app.patients.find_by_id(messi_id)
    karim = app.patients.find_by_id(karim_id)
    assert (messi.name, messi.score, messi.is_sick) == ("messi", 99, True)
    assert (karim.name, karim.score, karim.is_sick) == ("Karim", 5, True)
    assert app.patients.count() == 2

    doctors = app.doctors.find_all()
    assert [(d.name, d.specialty) for d in doctors] == [("Dr. Salma", "Cardiologie")]

    appointments = app.appointments.find_all()
    assert len(appointments) == 1
    appointment = appointments[0]
    assert appointment.id == result.appointment_id
    assert appointment.status is AppointmentStatus.EN_ATTENTE
    assert appointment.patient_id == messi_id
    assert appointment.doctor_id == result.doctor_id

    consultations = app.consultations.find_all()
    assert len(consultations) == 1
    assert consultations[0].report == DEMO_REPORT == "Consultation initiale : état stable."
    assert consultations[0].appointment_id == appointment.id
    assert app.consultations.find_by_appointment(appointment.id).id == result.consultation_id


def test_seed_inserted_scores(app):
    seed_demo(app.service, app.patients)
    # hafid (20) supprimé, messi passé de 10 à 99
    assert sorted(p.score for p in app.patients.find_all()) == [5, 99]


def test_seed_logs_patient_names_and_appointment_id(app, caplog):
    with caplog.at_level(logging.INFO, logger="hospital.seed"):
        result = seed_demo(app.service, app.patients)

    messages = [r.getMessage() for r in caplog.records if r.name == "hospital.seed"]
    assert messages[:3] == ["Patient: messi", "Patient: hafid", "Patient: Karim"]
    assert f"Rendez-vous enregistré, id={result.appointment_id}" in messages


def test_seed_order_depends_on_existing_rows(app):
    # une ligne déjà présente devient "le premier patient" relu
    existing = app.patients.save(Patient(name="ancien", score=1))
    result = seed_demo(app.service, app.patients)

    assert result.updated_patient_id == existing.id
    assert app.patients.find_by_id(existing.id).score == 99
    assert app.patients.find_by_name("messi") is None


def test_bootstrap_runs_seed_once(settings):
    records = bootstrap(settings)
    try:
        assert records.seed_result is not None
        assert records.patients.count() == 2
        assert records.appointments.count() == 1
    finally:
        records.close()


def test_seed_failure_propagates(app, monkeypatch):
    def refuse(appointment):
        raise ConstraintViolation("refusé")

    monkeypatch.setattr(app.service, "save_appointment", refuse)
    with pytest.raises(ConstraintViolation):
        seed_demo(app.service, app.patients)
    # pas de reprise : la consultation n'est jamais créée
    assert app.consultations.count() == 0
