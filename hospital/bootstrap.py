from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from .config import Settings
from .db import create_db_engine, make_session_factory
from .logging_config import get_logger
from .repositories import (
    AppointmentRepository,
    ConsultationRepository,
    DoctorRepository,
    PatientRepository,
    RoleRepository,
    UserRepository,
)
from .schema import check_connection, sync_schema
from .seed import SeedResult, seed_demo
from .services import RecordsService

logger = get_logger(__name__)


@dataclass
class Application:
    """Composants câblés explicitement ; pas de registre global."""
    engine: Engine
    patients: PatientRepository
    doctors: DoctorRepository
    appointments: AppointmentRepository
    consultations: ConsultationRepository
    users: UserRepository
    roles: RoleRepository
    service: RecordsService
    seed_result: SeedResult | None = None

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Connexion base libérée")


def build_application(engine: Engine) -> Application:
    session_factory = make_session_factory(engine)
    patients = PatientRepository(session_factory)
    doctors = DoctorRepository(session_factory)
    appointments = AppointmentRepository(session_factory)
    consultations = ConsultationRepository(session_factory)
    return Application(
        engine=engine,
        patients=patients,
        doctors=doctors,
        appointments=appointments,
        consultations=consultations,
        users=UserRepository(session_factory),
        roles=RoleRepository(session_factory),
        service=RecordsService(patients, doctors, appointments, consultations),
    )


def open_application(settings: Settings) -> Application:
    """Engine + vérification de connexion + synchronisation du schéma, sans seed."""
    engine = create_db_engine(
        settings.database_url,
        username=settings.db_username,
        password=settings.db_password,
        echo=settings.sql_echo,
    )
    try:
        check_connection(engine)
        sync_schema(engine, settings.schema_sync)
    except Exception:
        engine.dispose()
        raise
    logger.info("Base prête (%s, schéma=%s)", engine.url.render_as_string(), settings.schema_sync)
    return build_application(engine)


def bootstrap(settings: Settings) -> Application:
    """
    Démarrage complet : connexion, schéma, câblage, puis seed (une fois).

    Toute erreur est fatale ; l'engine est libéré avant de la propager.
    """
    app = open_application(settings)
    try:
        app.seed_result = seed_demo(app.service, app.patients)
    except Exception:
        app.close()
        raise
    return app
