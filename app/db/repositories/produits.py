from decimal import Decimal
from typing import Any, Optional, Sequence
from uuid import UUID
from sqlmodel import select, func

from app.db.repositories.base import BaseRepository
from app.db.models.produits import Produit


class ProduitRepository(BaseRepository[Produit]):
    """CRUD Produits + filtres catalogue."""
    model = Produit

    def list_filtered(
        self,
        *,
        marque_id: Optional[UUID] = None,
        category_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
        is_available: Optional[bool] = None,
        featured: Optional[bool] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        include_deleted: bool = False,
    ) -> Sequence[Produit]:
        """
        Liste des produits avec filtres optionnels, plus récents d'abord.
        - min_price / max_price : bornes incluses sur le prix
        """
        stmt = self._select(include_deleted)

        if marque_id is not None:
            stmt = stmt.where(self.model.marque_id == marque_id)
        if category_id is not None:
            stmt = stmt.where(self.model.category_id == category_id)
        if is_active is not None:
            stmt = stmt.where(self.model.is_active == is_active)
        if is_available is not None:
            stmt = stmt.where(self.model.is_available == is_available)
        if featured is not None:
            stmt = stmt.where(self.model.featured == featured)
        if min_price is not None:
            stmt = stmt.where(self.model.prix >= min_price)
        if max_price is not None:
            stmt = stmt.where(self.model.prix <= max_price)

        return self.session.exec(stmt.order_by(self.model.created_at.desc())).all()

    def list_summaries_for_marque(self, marque_id: UUID) -> Sequence[Produit]:
        stmt = self._select().where(self.model.marque_id == marque_id).order_by(self.model.libelle.asc())
        return self.session.exec(stmt).all()

    def count_in_stock(self, **filters: Any) -> int:
        """Nombre de produits vivants avec un stock strictement positif."""
        stmt = self._live(select(func.count(self.model.id))).where(self.model.quantite_stock > 0)
        for column, value in filters.items():
            stmt = stmt.where(getattr(self.model, column) == value)
        return self.session.exec(stmt).one()
