import logging
from typing import List, Optional
from uuid import UUID

from app.db.models.marques import Marque
from app.db.repositories.marques import MarqueRepository
from app.db.repositories.produits import ProduitRepository
from app.db.repositories.site_categories import SiteCategoryRepository
from app.domain.errors import BlockedError, ConflictError, NotDeletedError, NotFoundError
from app.domain.schemas import RefOut
from app.features.marques.schemas import (
    MarqueCreateIn,
    MarqueDetailOut,
    MarqueOut,
    MarqueStatsOut,
    MarqueUpdateIn,
    MarqueWithParentOut,
    ProduitSummaryOut,
)

logger = logging.getLogger(__name__)

NOT_FOUND = "Marque non trouvée"
PARENT_NOT_FOUND = "Catégorie principale non trouvée"
ALREADY_EXISTS = "Une marque avec ce libellé existe déjà dans cette catégorie principale"


class MarqueService:
    """
    Logique métier des marques.
    - Parent (catégorie principale) vivant exigé à l'écriture.
    - Unicité (libelle, site_category_id) parmi les lignes vivantes.
    - Suppression bloquée tant que des produits vivants référencent la marque.
    """

    def __init__(
        self,
        repo: MarqueRepository,
        site_category_repo: SiteCategoryRepository,
        produit_repo: ProduitRepository,
    ):
        self.repo = repo
        self.site_category_repo = site_category_repo
        self.produit_repo = produit_repo

    # -------- Helpers --------

    def _get_or_404(self, marque_id: UUID, *, include_deleted: bool = False) -> Marque:
        entity = self.repo.get(marque_id, include_deleted=include_deleted)
        if not entity:
            raise NotFoundError(NOT_FOUND)
        return entity

    def _assert_parent(self, site_category_id: UUID) -> None:
        if not self.site_category_repo.get(site_category_id):
            raise NotFoundError(PARENT_NOT_FOUND)

    def _assert_unique(self, libelle: str, site_category_id: UUID, *, exclude_id: Optional[UUID] = None) -> None:
        if self.repo.exists_live(libelle=libelle, site_category_id=site_category_id, exclude_id=exclude_id):
            raise ConflictError(ALREADY_EXISTS)

    def _with_parents(self, marques: List[Marque]) -> List[MarqueWithParentOut]:
        parents = self.site_category_repo.get_many((m.site_category_id for m in marques), include_deleted=True)
        return [
            MarqueWithParentOut(
                **MarqueOut.model_validate(m).model_dump(),
                site_category=RefOut.model_validate(parents[m.site_category_id])
                if m.site_category_id in parents else None,
            )
            for m in marques
        ]

    # -------- CRUD --------

    def create(self, payload: MarqueCreateIn) -> MarqueOut:
        self._assert_parent(payload.site_category_id)
        self._assert_unique(payload.libelle, payload.site_category_id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.create(**payload.model_dump())
        logger.info("Marque created: %s (%s)", entity.libelle, entity.id)
        return MarqueOut.model_validate(entity)

    def list(
        self,
        *,
        site_category_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
        include_deleted: bool = False,
    ) -> List[MarqueWithParentOut]:
        rows = self.repo.list_filtered(
            site_category_id=site_category_id, is_active=is_active, include_deleted=include_deleted
        )
        return self._with_parents(list(rows))

    def get_detail(self, marque_id: UUID) -> MarqueDetailOut:
        entity = self._get_or_404(marque_id)
        base = self._with_parents([entity])[0]
        produits = self.produit_repo.list_summaries_for_marque(entity.id)
        return MarqueDetailOut(
            **base.model_dump(),
            produits=[ProduitSummaryOut.model_validate(p) for p in produits],
        )

    def update(self, marque_id: UUID, payload: MarqueUpdateIn) -> MarqueOut:
        entity = self._get_or_404(marque_id)
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items()
                   if v is not None or k in ("description", "logo")}

        parent_id = changes.get("site_category_id", entity.site_category_id)
        libelle = changes.get("libelle", entity.libelle)

        if parent_id != entity.site_category_id:
            self._assert_parent(parent_id)
        if libelle != entity.libelle or parent_id != entity.site_category_id:
            self._assert_unique(libelle, parent_id, exclude_id=entity.id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.update(entity, **changes)
        return MarqueOut.model_validate(entity)

    # -------- Cycle de vie --------

    def delete(self, marque_id: UUID) -> None:
        entity = self._get_or_404(marque_id)
        produits = self.produit_repo.count(marque_id=entity.id)
        if produits > 0:
            raise BlockedError(
                f"Impossible de supprimer cette marque car elle est utilisée par {produits} produit(s)",
                details={"produits": produits},
            )
        self.repo.soft_delete(entity)
        logger.info("Marque soft-deleted: %s", marque_id)

    def restore(self, marque_id: UUID) -> MarqueOut:
        entity = self._get_or_404(marque_id, include_deleted=True)
        if not entity.is_deleted:
            raise NotDeletedError("La marque n'a pas été supprimée")
        self._assert_unique(entity.libelle, entity.site_category_id, exclude_id=entity.id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.restore(entity)
        logger.info("Marque restored: %s", marque_id)
        return MarqueOut.model_validate(entity)

    def stats(self, marque_id: UUID) -> MarqueStatsOut:
        entity = self._get_or_404(marque_id)
        return MarqueStatsOut(
            total_produits=self.produit_repo.count(marque_id=entity.id),
            produits_actifs=self.produit_repo.count(marque_id=entity.id, is_active=True),
            produits_disponibles=self.produit_repo.count(marque_id=entity.id, is_active=True, is_available=True),
            produits_en_stock=self.produit_repo.count_in_stock(marque_id=entity.id),
        )
