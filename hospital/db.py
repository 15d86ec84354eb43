from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Base ORM pour tous les modèles."""
    pass


def build_url(database_url: str, username: str | None = None, password: str | None = None) -> str:
    """Injecte utilisateur / mot de passe dans l'URL s'ils sont fournis à part."""
    url = make_url(database_url)
    if username:
        url = url.set(username=username)
    if password:
        url = url.set(password=password)
    return url.render_as_string(hide_password=False)


def _enable_sqlite_fk(dbapi_connection, connection_record) -> None:
    # SQLite n'applique pas les clés étrangères sans ce pragma
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(
    database_url: str,
    username: str | None = None,
    password: str | None = None,
    echo: bool = False,
) -> Engine:
    url = build_url(database_url, username, password)
    # SQLite : la connexion peut être ouverte par le thread du serveur
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(
        url,
        echo=echo,              # True pour voir les requêtes
        future=True,
        connect_args=connect_args,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_fk)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        future=True,
        expire_on_commit=False,
    )


@contextmanager
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """
    Context manager pour gérer correctement la session :
    - commit si tout va bien
    - rollback sur exception
    - close toujours
    """
    session: Session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
