"""
➡️ But : Logique métier des catégories (sous-catégories d'une catégorie principale).

Ordre des contrôles en écriture : champs (schémas) -> parent vivant -> unicité (libelle, parent).
Suppression / restauration sans garde bloquante.
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from app.db.models.categories import Category
from app.db.repositories.categories import CategoryRepository
from app.db.repositories.produits import ProduitRepository
from app.db.repositories.site_categories import SiteCategoryRepository
from app.domain.errors import ConflictError, NotDeletedError, NotFoundError
from app.domain.schemas import RefOut
from app.features.categories import electro
from app.features.categories.schemas import (
    CategoryCreateIn,
    CategoryOut,
    CategoryStatsOut,
    CategoryUpdateIn,
    CategoryWithParentOut,
    ElectroCategoryCreateIn,
    ElectroCategoryOut,
    ElectroSplitOut,
)

logger = logging.getLogger(__name__)

NOT_FOUND = "Catégorie non trouvée"
PARENT_NOT_FOUND = "Catégorie principale non trouvée"
ALREADY_EXISTS = "Une catégorie avec ce libellé existe déjà dans cette catégorie principale"


class CategoryService:
    def __init__(
        self,
        repo: CategoryRepository,
        site_category_repo: SiteCategoryRepository,
        produit_repo: ProduitRepository,
    ):
        self.repo = repo
        self.site_category_repo = site_category_repo
        self.produit_repo = produit_repo

    # -------- Helpers --------

    def _get_or_404(self, category_id: UUID, *, include_deleted: bool = False) -> Category:
        entity = self.repo.get(category_id, include_deleted=include_deleted)
        if not entity:
            raise NotFoundError(NOT_FOUND)
        return entity

    def _assert_parent(self, site_category_id: UUID) -> None:
        if not self.site_category_repo.get(site_category_id):
            raise NotFoundError(PARENT_NOT_FOUND)

    def _assert_unique(self, libelle: str, site_category_id: UUID, *, exclude_id: Optional[UUID] = None) -> None:
        if self.repo.exists_live(libelle=libelle, site_category_id=site_category_id, exclude_id=exclude_id):
            raise ConflictError(ALREADY_EXISTS)

    def _with_parents(self, categories: List[Category]) -> List[CategoryWithParentOut]:
        parents: Dict[UUID, object] = self.site_category_repo.get_many(
            (c.site_category_id for c in categories), include_deleted=True
        )
        out = []
        for c in categories:
            parent = parents.get(c.site_category_id)
            out.append(CategoryWithParentOut(
                **CategoryOut.model_validate(c).model_dump(),
                site_category=RefOut.model_validate(parent) if parent else None,
            ))
        return out

    # -------- CRUD --------

    def create(self, payload: CategoryCreateIn) -> CategoryOut:
        self._assert_parent(payload.site_category_id)
        self._assert_unique(payload.libelle, payload.site_category_id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.create(**payload.model_dump())
        logger.info("Category created: %s (%s)", entity.libelle, entity.id)
        return CategoryOut.model_validate(entity)

    def list(
        self,
        *,
        site_category_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
        include_deleted: bool = False,
    ) -> List[CategoryWithParentOut]:
        rows = self.repo.list_filtered(
            site_category_id=site_category_id, is_active=is_active, include_deleted=include_deleted
        )
        return self._with_parents(list(rows))

    def get(self, category_id: UUID) -> CategoryWithParentOut:
        return self._with_parents([self._get_or_404(category_id)])[0]

    def update(self, category_id: UUID, payload: CategoryUpdateIn) -> CategoryOut:
        entity = self._get_or_404(category_id)
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items()
                   if v is not None or k == "description"}

        parent_id = changes.get("site_category_id", entity.site_category_id)
        libelle = changes.get("libelle", entity.libelle)

        if parent_id != entity.site_category_id:
            self._assert_parent(parent_id)
        if libelle != entity.libelle or parent_id != entity.site_category_id:
            self._assert_unique(libelle, parent_id, exclude_id=entity.id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.update(entity, **changes)
        return CategoryOut.model_validate(entity)

    # -------- Cycle de vie --------

    def delete(self, category_id: UUID) -> None:
        entity = self._get_or_404(category_id)
        self.repo.soft_delete(entity)
        logger.info("Category soft-deleted: %s", category_id)

    def restore(self, category_id: UUID) -> CategoryOut:
        entity = self._get_or_404(category_id, include_deleted=True)
        if not entity.is_deleted:
            raise NotDeletedError("Cette catégorie n'est pas supprimée")
        self._assert_unique(entity.libelle, entity.site_category_id, exclude_id=entity.id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.restore(entity)
        logger.info("Category restored: %s", category_id)
        return CategoryOut.model_validate(entity)

    def stats(self, category_id: UUID) -> CategoryStatsOut:
        entity = self._get_or_404(category_id)
        return CategoryStatsOut(
            total_produits=self.produit_repo.count(category_id=entity.id),
            produits_actifs=self.produit_repo.count(category_id=entity.id, is_active=True),
            produits_disponibles=self.produit_repo.count(category_id=entity.id, is_active=True, is_available=True),
            produits_en_stock=self.produit_repo.count_in_stock(category_id=entity.id),
        )

    # -------- Electroménager --------

    def _electro_parent_id(self) -> UUID:
        parent = self.site_category_repo.get_by_libelle(electro.ELECTRO_SITE_CATEGORY)
        if not parent:
            raise NotFoundError("Catégorie Electromenagers non trouvée")
        return parent.id

    def list_electro(self) -> ElectroSplitOut:
        parent_id = self._electro_parent_id()
        rows = self.repo.list_filtered(site_category_id=parent_id, is_active=True)
        split = electro.split_by_type(rows)
        return ElectroSplitOut(
            petits_electromenagers=self._with_parents(split["petits_electromenagers"]),
            gros_electromenagers=self._with_parents(split["gros_electromenagers"]),
        )

    def create_electro(self, payload: ElectroCategoryCreateIn) -> ElectroCategoryOut:
        parent_id = self._electro_parent_id()
        if self.repo.exists_live(libelle=payload.libelle, site_category_id=parent_id):
            raise ConflictError("Cette sous-catégorie existe déjà")

        description = payload.description or (
            f"Sous-catégorie {payload.type_electro} électroménager: {payload.libelle}"
        )
        with self.repo.unique_guard("Cette sous-catégorie existe déjà"):
            entity = self.repo.create(
                libelle=payload.libelle,
                description=description,
                site_category_id=parent_id,
                is_active=payload.is_active,
            )
        logger.info("Electro category created: %s (%s)", entity.libelle, payload.type_electro)
        return ElectroCategoryOut(**CategoryOut.model_validate(entity).model_dump(), type_electro=payload.type_electro)
