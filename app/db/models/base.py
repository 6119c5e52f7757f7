"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient les classes héritant de SQLModel (ou Base de SQLAlchemy).

Représente les objets persistés. Ici on représente les propriétés communes de toutes les tables :
identifiant UUID, horodatages de création / mise à jour, et `deleted_at` pour la suppression douce
(une ligne est "vivante" tant que `deleted_at` est NULL).

Chaque champ = une colonne SQL (avec type, index, clé primaire...).

🔹 Avantages :

Tu manipules des objets Python, pas du SQL brut.

Facile à migrer vers PostgreSQL ou MySQL plus tard.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)


# Prédicat des index uniques partiels : l'unicité ne s'applique qu'aux lignes non supprimées
LIVE_ROWS = text("deleted_at IS NULL")


def live_index_kwargs() -> dict:
    """Arguments d'Index pour un index unique partiel (SQLite / PostgreSQL)."""
    return {"sqlite_where": LIVE_ROWS, "postgresql_where": LIVE_ROWS}


class BaseModelDB(SQLModel, table=False):
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
