from __future__ import annotations


class RecordsError(Exception):
    """Erreur de base du service de dossiers."""


class NotFound(RecordsError):
    """Aucune ligne ne correspond à l'identifiant demandé."""

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} introuvable (id={entity_id})")


class ConstraintViolation(RecordsError):
    """Contrainte d'intégrité refusée par la base (clé étrangère, unicité)."""


class ConnectionFailure(RecordsError):
    """Base de données injoignable au démarrage."""
