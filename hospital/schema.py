from __future__ import annotations

from sqlalchemy import inspect, literal, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.schema import Column, Table

from .db import Base
from .errors import ConnectionFailure
from .logging_config import get_logger

# enregistre toutes les tables dans Base.metadata
from . import auth_models, models  # noqa: F401

logger = get_logger(__name__)


def check_connection(engine: Engine) -> None:
    """Ouvre une connexion de test ; ConnectionFailure si la base est injoignable."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except DBAPIError as e:
        raise ConnectionFailure(f"Base injoignable ({engine.url.render_as_string()}): {e.orig}") from e


def _default_clause(conn: Connection, column: Column) -> str:
    default = column.default
    if default is None or not default.is_scalar:
        return ""
    value = literal(default.arg, type_=column.type).compile(dialect=conn.dialect, compile_kwargs={"literal_binds": True})
    return f" DEFAULT {value}"


def _add_column(conn: Connection, table: Table, column: Column) -> None:
    # ajoutée nullable : impossible d'imposer NOT NULL sur des lignes existantes ;
    # un défaut scalaire remplit les lignes déjà présentes
    col_type = column.type.compile(dialect=conn.dialect)
    preparer = conn.dialect.identifier_preparer
    conn.exec_driver_sql(
        f"ALTER TABLE {preparer.format_table(table)} ADD COLUMN {preparer.format_column(column)} {col_type}"
        f"{_default_clause(conn, column)}"
    )


def sync_schema(engine: Engine, mode: str = "update") -> list[str]:
    """
    Aligne la structure de la base sur les modèles au démarrage.

    - none   : ne touche à rien
    - update : crée les tables manquantes et ajoute les colonnes manquantes,
               ne supprime jamais rien
    - create : supprime et recrée toutes les tables

    Best effort uniquement : pas de renommage, pas de changement de type,
    pas de contraintes ajoutées après coup. Ce n'est pas un outil de migration.

    Retourne la liste des changements appliqués ("table" ou "table.colonne").
    """
    if mode == "none":
        return []

    if mode == "create":
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        logger.info("Schéma recréé (%d tables)", len(Base.metadata.tables))
        return list(Base.metadata.tables)

    if mode != "update":
        raise ValueError(f"Mode de synchronisation inconnu: {mode!r}")

    changes: list[str] = []
    with engine.begin() as conn:
        existing = set(inspect(conn).get_table_names())
        missing_tables = [t for name, t in Base.metadata.tables.items() if name not in existing]
        Base.metadata.create_all(bind=conn, tables=missing_tables)
        changes.extend(t.name for t in missing_tables)

        for name, table in Base.metadata.tables.items():
            if name not in existing:
                continue
            db_cols = {c["name"] for c in inspect(conn).get_columns(name)}
            for column in table.columns:
                if column.name not in db_cols:
                    _add_column(conn, table, column)
                    changes.append(f"{name}.{column.name}")

    for change in changes:
        logger.info("Schéma mis à jour: %s", change)
    return changes
