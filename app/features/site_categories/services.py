"""
➡️ But : Logique métier des catégories principales (SiteCategory).

- Unicité du libellé parmi les lignes vivantes (création, mise à jour, restauration).
- Suppression refusée tant que des catégories ou marques la référencent,
  y compris des lignes supprimées (comptage sans filtre).
- force=True : suppression définitive.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from app.db.models.site_categories import SiteCategory
from app.db.repositories.site_categories import SiteCategoryRepository
from app.db.repositories.categories import CategoryRepository
from app.db.repositories.marques import MarqueRepository
from app.domain.errors import BlockedError, ConflictError, NotDeletedError, NotFoundError
from app.domain.schemas import Pagination, RefOut
from app.features.categories import electro
from app.features.categories.schemas import CategoryBriefOut, ElectroOrganizedOut
from app.features.site_categories.schemas import (
    MarqueBriefOut,
    SiteCategoryCreateIn,
    SiteCategoryDetailOut,
    SiteCategoryListItemOut,
    SiteCategoryOut,
    SiteCategoryStats,
    SiteCategoryStatsOut,
    SiteCategoryUpdateIn,
)

logger = logging.getLogger(__name__)

NOT_FOUND = "Catégorie principale non trouvée"
ALREADY_EXISTS = "Une catégorie principale avec ce libellé existe déjà"


class SiteCategoryService:
    def __init__(
        self,
        repo: SiteCategoryRepository,
        category_repo: CategoryRepository,
        marque_repo: MarqueRepository,
    ):
        self.repo = repo
        self.category_repo = category_repo
        self.marque_repo = marque_repo

    # -------- Helpers --------

    def _get_or_404(self, site_category_id: UUID, *, include_deleted: bool = False) -> SiteCategory:
        entity = self.repo.get(site_category_id, include_deleted=include_deleted)
        if not entity:
            raise NotFoundError(NOT_FOUND)
        return entity

    def _assert_unique(self, libelle: str, *, exclude_id: Optional[UUID] = None) -> None:
        if self.repo.exists_live(libelle=libelle, exclude_id=exclude_id):
            raise ConflictError(ALREADY_EXISTS)

    def _organized(self, site_category_id: UUID) -> ElectroOrganizedOut:
        categories = self.category_repo.list_filtered(site_category_id=site_category_id, is_active=True)
        return ElectroOrganizedOut.model_validate(electro.organize(categories), from_attributes=True)

    # -------- CRUD --------

    def create(self, payload: SiteCategoryCreateIn) -> SiteCategoryOut:
        self._assert_unique(payload.libelle)
        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.create(**payload.model_dump())
        logger.info("SiteCategory created: %s (%s)", entity.libelle, entity.id)
        return SiteCategoryOut.model_validate(entity)

    def list(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        include_deleted: bool = False,
    ) -> Tuple[List[SiteCategoryListItemOut], Pagination]:
        rows, total = self.repo.search(
            offset=(page - 1) * limit,
            limit=limit,
            q=search,
            is_active=is_active,
            include_deleted=include_deleted,
        )
        ids = [r.id for r in rows]
        categories = self.category_repo.summaries_by_site_category(ids)
        marques = self.marque_repo.summaries_by_site_category(ids)

        items = [
            SiteCategoryListItemOut(
                **SiteCategoryOut.model_validate(r).model_dump(),
                categories=[RefOut(id=i, libelle=l) for i, l in categories[r.id]],
                marques=[RefOut(id=i, libelle=l) for i, l in marques[r.id]],
            )
            for r in rows
        ]
        return items, Pagination.build(total=total, page=page, limit=limit)

    def get_detail(self, site_category_id: UUID, *, organized: bool = False) -> SiteCategoryDetailOut:
        entity = self._get_or_404(site_category_id)
        categories = self.category_repo.list_filtered(site_category_id=entity.id, is_active=True)
        marques = self.marque_repo.list_filtered(site_category_id=entity.id)

        detail = SiteCategoryDetailOut(
            **SiteCategoryOut.model_validate(entity).model_dump(),
            categories=[CategoryBriefOut.model_validate(c) for c in categories],
            marques=[MarqueBriefOut.model_validate(m) for m in marques],
        )
        if organized and entity.libelle == electro.ELECTRO_SITE_CATEGORY:
            detail.organized_categories = self._organized(entity.id)
        return detail

    def update(self, site_category_id: UUID, payload: SiteCategoryUpdateIn) -> SiteCategoryOut:
        entity = self._get_or_404(site_category_id)
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items()
                   if v is not None or k == "description"}

        if "libelle" in changes and changes["libelle"] != entity.libelle:
            self._assert_unique(changes["libelle"], exclude_id=entity.id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.update(entity, **changes)
        return SiteCategoryOut.model_validate(entity)

    # -------- Cycle de vie --------

    def delete(self, site_category_id: UUID, *, force: bool = False) -> None:
        entity = self._get_or_404(site_category_id)

        # lignes supprimées comprises
        categories = self.category_repo.count(include_deleted=True, site_category_id=entity.id)
        marques = self.marque_repo.count(include_deleted=True, site_category_id=entity.id)
        if categories or marques:
            raise BlockedError(
                "Impossible de supprimer cette catégorie principale car elle contient "
                f"{categories} catégorie(s) et {marques} marque(s)",
                details={"categories": categories, "marques": marques},
            )

        if force:
            libelle = entity.libelle
            self.repo.purge(entity)
            logger.warning("SiteCategory purged: %s (%s)", libelle, site_category_id)
        else:
            self.repo.soft_delete(entity)
            logger.info("SiteCategory soft-deleted: %s", site_category_id)

    def restore(self, site_category_id: UUID) -> SiteCategoryOut:
        entity = self._get_or_404(site_category_id, include_deleted=True)
        if not entity.is_deleted:
            raise NotDeletedError("Cette catégorie principale n'est pas supprimée")
        self._assert_unique(entity.libelle, exclude_id=entity.id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.restore(entity)
        logger.info("SiteCategory restored: %s", site_category_id)
        return SiteCategoryOut.model_validate(entity)

    # -------- Lectures spécifiques --------

    def stats(self, site_category_id: UUID) -> SiteCategoryStatsOut:
        entity = self._get_or_404(site_category_id)
        stats = SiteCategoryStats(
            total_categories=self.category_repo.count(site_category_id=entity.id),
            total_marques=self.marque_repo.count(site_category_id=entity.id),
            active_categories=self.category_repo.count(site_category_id=entity.id, is_active=True),
            active_marques=self.marque_repo.count(site_category_id=entity.id, is_active=True),
        )
        return SiteCategoryStatsOut(category=SiteCategoryOut.model_validate(entity), stats=stats)

    def electro_organized(self) -> ElectroOrganizedOut:
        entity = self.repo.get_by_libelle(electro.ELECTRO_SITE_CATEGORY)
        if not entity:
            raise NotFoundError("Catégorie Electromenagers non trouvée")
        return self._organized(entity.id)
