"""
➡️ But : Encapsuler toutes les opérations de base de données.

AdminRepository : CRUD sur la table admins.

Ne contient aucune logique métier, juste de la persistance.
"""

from typing import Optional, Sequence
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.admins import Admin

class AdminRepository(BaseRepository[Admin]):
    """
    Repository pour la table Admin.
    Hérite du CRUD générique de BaseRepository.
    Contient uniquement les requêtes spécifiques à Admin.
    """
    model = Admin

    def get_by_login(self, login: str) -> Optional[Admin]:
        """Retourne un administrateur vivant par son login."""
        return self.session.exec(
            self._select().where(self.model.login == login)
        ).first()

    def list_filtered(self, *, is_active: Optional[bool] = None, include_deleted: bool = False) -> Sequence[Admin]:
        stmt = self._select(include_deleted)
        if is_active is not None:
            stmt = stmt.where(self.model.is_active == is_active)
        return self.session.exec(stmt.order_by(self.model.created_at.desc())).all()
