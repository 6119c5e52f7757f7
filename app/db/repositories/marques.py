from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from uuid import UUID
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.marques import Marque


class MarqueRepository(BaseRepository[Marque]):
    """CRUD Marques + requêtes spécifiques."""
    model = Marque

    def list_filtered(
        self,
        *,
        site_category_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
        include_deleted: bool = False,
    ) -> Sequence[Marque]:
        stmt = self._select(include_deleted)
        if site_category_id is not None:
            stmt = stmt.where(self.model.site_category_id == site_category_id)
        if is_active is not None:
            stmt = stmt.where(self.model.is_active == is_active)
        return self.session.exec(stmt.order_by(self.model.libelle.asc())).all()

    def summaries_by_site_category(self, site_category_ids: Iterable[UUID]) -> Dict[UUID, List[Tuple[UUID, str]]]:
        """Projection (id, libelle) des marques vivantes, groupées par catégorie principale."""
        ids = list(site_category_ids)
        grouped: Dict[UUID, List[Tuple[UUID, str]]] = {i: [] for i in ids}
        if not ids:
            return grouped
        stmt = self._live(
            select(self.model.id, self.model.libelle, self.model.site_category_id)
            .where(self.model.site_category_id.in_(ids))
            .order_by(self.model.libelle.asc())
        )
        for id_, libelle, parent_id in self.session.exec(stmt).all():
            grouped[parent_id].append((id_, libelle))
        return grouped
