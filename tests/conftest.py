from __future__ import annotations

from datetime import datetime

import pytest

from hospital.bootstrap import Application, build_application
from hospital.config import Settings
from hospital.db import create_db_engine
from hospital.models import Doctor, Patient
from hospital.schema import sync_schema


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'test.sqlite'}"


@pytest.fixture
def settings(db_url) -> Settings:
    return Settings(database_url=db_url, schema_sync="update")


@pytest.fixture
def engine(db_url):
    engine = create_db_engine(db_url)
    sync_schema(engine, "update")
    yield engine
    engine.dispose()


@pytest.fixture
def app(engine) -> Application:
    return build_application(engine)


@pytest.fixture
def patient(app) -> Patient:
    return app.patients.save(Patient(name="Mohamed", birth_date=datetime(1990, 5, 17, 8, 30), is_sick=False, score=3))


@pytest.fixture
def doctor(app) -> Doctor:
    return app.doctors.save(Doctor(name="Dr. Salma", email="salma@hopital.ma", specialty="Cardiologie"))
