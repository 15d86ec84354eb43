from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hospital.db import Base


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey("roles.id", ondelete="RESTRICT"), primary_key=True),
)


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"Role({self.name})"


class User(Base):
    """
    Utilisateur applicatif.
    - username unique
    - roles chargés avec l'utilisateur (selectin)

    ATTENTION : le mot de passe est stocké en clair, comme dans le modèle
    d'origine. Aucun contrôle d'accès n'est fait dans cette version ; à
    hacher avant tout déploiement réel.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    roles: Mapped[list["Role"]] = relationship(secondary=user_roles, lazy="selectin")

    def __repr__(self) -> str:
        return f"User({self.username})"
