"""
➡️ But : Encapsuler toutes les opérations de base de données.

SiteCategoryRepository : CRUD + recherche paginée sur la table site_categories.

Ne contient aucune logique métier, juste de la persistance.

🔹 Avantages :

Réutilisable (les services n’ont pas à savoir comment la DB fonctionne).

Testable indépendamment (mock du repo sans base réelle).
"""

from typing import Optional, Sequence, Tuple
from sqlmodel import select, or_, func

from app.db.repositories.base import BaseRepository
from app.db.models.site_categories import SiteCategory


class SiteCategoryRepository(BaseRepository[SiteCategory]):
    model = SiteCategory

    def get_by_libelle(self, libelle: str, *, include_deleted: bool = False) -> Optional[SiteCategory]:
        """Retourne une catégorie principale par son libellé exact."""
        stmt = self._select(include_deleted).where(self.model.libelle == libelle)
        return self.session.exec(stmt).first()

    def search(
        self,
        *,
        offset: int = 0,
        limit: int = 10,
        q: Optional[str] = None,
        is_active: Optional[bool] = None,
        include_deleted: bool = False,
    ) -> Tuple[Sequence[SiteCategory], int]:
        """
        Liste paginée + total, plus récentes d'abord.
        - q         : recherche insensible à la casse sur libelle/description
        - is_active : filtre d'égalité sur le statut
        """
        stmt = self._select(include_deleted)
        count_stmt = self._live(select(func.count(self.model.id)), include_deleted)

        if q:
            like = f"%{q}%"
            cond = or_(self.model.libelle.ilike(like), self.model.description.ilike(like))
            stmt = stmt.where(cond)
            count_stmt = count_stmt.where(cond)
        if is_active is not None:
            stmt = stmt.where(self.model.is_active == is_active)
            count_stmt = count_stmt.where(self.model.is_active == is_active)

        stmt = stmt.order_by(self.model.created_at.desc()).offset(offset).limit(limit)
        return self.session.exec(stmt).all(), self.session.exec(count_stmt).one()
