from __future__ import annotations

from .models import Appointment, Consultation, Doctor, Patient
from .repositories import AppointmentRepository, ConsultationRepository, DoctorRepository, PatientRepository


class RecordsService:
    """
    Point d'entrée des écritures métier.

    Pour l'instant chaque méthode délègue directement au repository : c'est
    ici que viendront les règles (ex. refuser un rendez-vous pour un patient
    malade sans autorisation) sans toucher aux appelants.
    """

    def __init__(
        self,
        patients: PatientRepository,
        doctors: DoctorRepository,
        appointments: AppointmentRepository,
        consultations: ConsultationRepository,
    ) -> None:
        self.patients = patients
        self.doctors = doctors
        self.appointments = appointments
        self.consultations = consultations

    def save_patient(self, patient: Patient) -> Patient:
        return self.patients.save(patient)

    def save_doctor(self, doctor: Doctor) -> Doctor:
        return self.doctors.save(doctor)

    def save_appointment(self, appointment: Appointment) -> Appointment:
        return self.appointments.save(appointment)

    def save_consultation(self, consultation: Consultation) -> Consultation:
        return self.consultations.save(consultation)
