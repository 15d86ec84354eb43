from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from .auth_models import Role, User
from .db import Base, db_session
from .errors import ConstraintViolation, NotFound
from .logging_config import get_logger
from .models import Appointment, Consultation, Doctor, Patient

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    Accès persistance pour une entité.

    Chaque appel ouvre sa propre session (commit / rollback / close) et
    renvoie des instances détachées : aucun cache n'est conservé entre deux
    appels.

    Politiques :
    - save() sur une entité sans id -> INSERT ; avec id -> UPDATE de la ligne
      existante, NotFound si elle n'existe pas (jamais d'insert implicite)
    - delete_by_id() strict : NotFound si l'id est absent
    - une violation d'intégrité (clé étrangère, unicité) -> ConstraintViolation
    """

    model: type[ModelT]

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    # =========================
    # Écriture
    # =========================
    def save(self, entity: ModelT) -> ModelT:
        try:
            with db_session(self._session_factory) as s:
                if entity.id is None:
                    s.add(entity)
                    s.flush()
                    saved = entity
                    logger.debug("%s inséré (id=%s)", self.entity_name, saved.id)
                else:
                    saved = s.get(self.model, entity.id)
                    if saved is None:
                        raise NotFound(self.entity_name, entity.id)
                    self._copy_state(s, entity, saved)
                    s.flush()
                    logger.debug("%s mis à jour (id=%s)", self.entity_name, saved.id)
                # recharge les références en lecture seule (patient, doctor, ...)
                s.refresh(saved)
                return saved
        except IntegrityError as e:
            raise ConstraintViolation(f"{self.entity_name}: {e.orig}") from e

    def delete_by_id(self, entity_id: int) -> None:
        try:
            with db_session(self._session_factory) as s:
                obj = s.get(self.model, entity_id)
                if obj is None:
                    raise NotFound(self.entity_name, entity_id)
                s.delete(obj)
                s.flush()
        except IntegrityError as e:
            raise ConstraintViolation(f"{self.entity_name} {entity_id} encore référencé: {e.orig}") from e
        logger.debug("%s supprimé (id=%s)", self.entity_name, entity_id)

    def _copy_state(self, s: Session, source: ModelT, target: ModelT) -> None:
        """Recopie les colonnes de l'instance reçue sur la ligne chargée."""
        for attr in inspect(self.model).column_attrs:
            if attr.key == "id":
                continue
            setattr(target, attr.key, getattr(source, attr.key))

    # =========================
    # Lecture
    # =========================
    def find_by_id(self, entity_id: int) -> ModelT | None:
        with db_session(self._session_factory) as s:
            return s.get(self.model, entity_id)

    def find_all(self) -> list[ModelT]:
        with db_session(self._session_factory) as s:
            return list(s.scalars(select(self.model).order_by(self.model.id)))

    def count(self) -> int:
        with db_session(self._session_factory) as s:
            return s.execute(select(func.count()).select_from(self.model)).scalar_one()

    def _first_where(self, *criteria) -> ModelT | None:
        with db_session(self._session_factory) as s:
            q = select(self.model).where(*criteria).order_by(self.model.id).limit(1)
            return s.scalars(q).first()

    def _all_where(self, *criteria) -> list[ModelT]:
        with db_session(self._session_factory) as s:
            return list(s.scalars(select(self.model).where(*criteria).order_by(self.model.id)))


class PatientRepository(Repository[Patient]):
    model = Patient

    def find_by_name(self, name: str) -> Patient | None:
        """Correspondance exacte ; le plus petit id gagne en cas de doublon."""
        return self._first_where(Patient.name == name)


class DoctorRepository(Repository[Doctor]):
    model = Doctor

    def find_by_name(self, name: str) -> Doctor | None:
        return self._first_where(Doctor.name == name)


class AppointmentRepository(Repository[Appointment]):
    model = Appointment

    def find_by_doctor(self, doctor_id: int) -> list[Appointment]:
        return self._all_where(Appointment.doctor_id == doctor_id)

    def find_by_patient(self, patient_id: int) -> list[Appointment]:
        return self._all_where(Appointment.patient_id == patient_id)


class ConsultationRepository(Repository[Consultation]):
    model = Consultation

    def find_by_appointment(self, appointment_id: int) -> Consultation | None:
        return self._first_where(Consultation.appointment_id == appointment_id)


class RoleRepository(Repository[Role]):
    model = Role

    def find_by_name(self, name: str) -> Role | None:
        return self._first_where(Role.name == name)


class UserRepository(Repository[User]):
    model = User

    def find_by_username(self, username: str) -> User | None:
        return self._first_where(User.username == username)

    def _copy_state(self, s: Session, source: User, target: User) -> None:
        super()._copy_state(s, source, target)
        # les rôles déjà persistés sont rattachés par id, les nouveaux insérés
        roles: list[Role] = []
        for r in source.roles:
            if r.id is None:
                roles.append(r)
                continue
            role = s.get(Role, r.id)
            if role is None:
                raise NotFound("Role", r.id)
            roles.append(role)
        target.roles = roles
