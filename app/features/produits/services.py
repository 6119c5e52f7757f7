"""
➡️ But : Logique métier des produits.

- Marque (obligatoire) et catégorie (optionnelle) vivantes exigées à l'écriture.
- Référence unique parmi les produits vivants, générée si absente.
- Images : fichiers convertis en base64 inline, chaînes conservées, types base64 contrôlés.
- Ajustement de stock sous verrou de ligne.
"""

import logging
import secrets
import string
import time
from typing import Any, Dict, List, Optional
from uuid import UUID

from app.db.models.produits import Produit
from app.db.repositories.categories import CategoryRepository
from app.db.repositories.marques import MarqueRepository
from app.db.repositories.produits import ProduitRepository
from app.db.repositories.site_categories import SiteCategoryRepository
from app.domain.errors import ConflictError, NotDeletedError, NotFoundError, ValidationFailedError
from app.domain.schemas import RefOut
from app.features.produits.schemas import (
    MarqueRefOut,
    ProduitCreateIn,
    ProduitOut,
    ProduitUpdateIn,
    ProduitWithRelationsOut,
    StockOut,
    StockUpdateIn,
)
from app.utils.images import (
    ImageUpload,
    first_invalid_base64,
    is_base64,
    process_images_array,
    process_main_image,
    validate_base64,
    validate_upload,
)

logger = logging.getLogger(__name__)

NOT_FOUND = "Produit non trouvé"
ALREADY_EXISTS = "Un produit avec cette référence existe déjà"
STOCK_OPERATIONS = ("set", "add", "subtract")

# Champs qu'une mise à jour peut remettre à NULL
NULLABLE_FIELDS = {"description", "prix", "category_id", "image_principale"}

_BASE36 = string.digits + string.ascii_uppercase


def generate_reference(now_ms: Optional[int] = None) -> str:
    """PROD-<epoch ms>-<9 caractères base36 majuscules>"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"PROD-{now_ms}-{suffix}"


def compute_stock(current: int, quantity: int, operation: str) -> int:
    if operation == "set":
        return quantity
    if operation == "add":
        return current + quantity
    if operation == "subtract":
        return max(0, current - quantity)
    raise ValidationFailedError("Opération invalide. Utilisez 'set', 'add' ou 'subtract'")


class ProduitService:
    def __init__(
        self,
        repo: ProduitRepository,
        marque_repo: MarqueRepository,
        category_repo: CategoryRepository,
        site_category_repo: SiteCategoryRepository,
        *,
        max_upload_mb: int = 10,
        max_images: int = 10,
    ):
        self.repo = repo
        self.marque_repo = marque_repo
        self.category_repo = category_repo
        self.site_category_repo = site_category_repo
        self.max_upload_mb = max_upload_mb
        self.max_images = max_images

    # -------- Helpers --------

    def _get_or_404(self, produit_id: UUID, *, include_deleted: bool = False) -> Produit:
        entity = self.repo.get(produit_id, include_deleted=include_deleted)
        if not entity:
            raise NotFoundError(NOT_FOUND)
        return entity

    def _assert_marque(self, marque_id: UUID) -> None:
        if not self.marque_repo.get(marque_id):
            raise NotFoundError("Marque non trouvée")

    def _assert_category(self, category_id: Optional[UUID]) -> None:
        if category_id is not None and not self.category_repo.get(category_id):
            raise NotFoundError("Catégorie non trouvée")

    def _assert_unique_reference(self, reference: Optional[str], *, exclude_id: Optional[UUID] = None) -> None:
        if reference and self.repo.exists_live(reference=reference, exclude_id=exclude_id):
            raise ConflictError(ALREADY_EXISTS)

    @staticmethod
    def _process_images(fields: Dict[str, Any]) -> None:
        """Normalise et contrôle les champs image présents dans `fields` (modifié en place)."""
        if "image_principale" in fields:
            main = process_main_image(fields["image_principale"])
            if is_base64(main) and not validate_base64(main):
                raise ValidationFailedError(
                    "Format d'image principale invalide. Formats acceptés : JPEG, PNG, GIF, WEBP, SVG"
                )
            fields["image_principale"] = main

        if "images" in fields:
            images = process_images_array(fields["images"])
            index = first_invalid_base64(images)
            if index is not None:
                raise ValidationFailedError(
                    f"Format d'image invalide à la position {index}",
                    details={"index": index},
                )
            fields["images"] = images

    def _with_relations(self, produits: List[Produit]) -> List[ProduitWithRelationsOut]:
        marques = self.marque_repo.get_many((p.marque_id for p in produits), include_deleted=True)
        categories = self.category_repo.get_many((p.category_id for p in produits), include_deleted=True)
        site_categories = self.site_category_repo.get_many(
            (m.site_category_id for m in marques.values()), include_deleted=True
        )

        out = []
        for p in produits:
            marque = marques.get(p.marque_id)
            marque_ref = None
            if marque:
                parent = site_categories.get(marque.site_category_id)
                marque_ref = MarqueRefOut(
                    id=marque.id,
                    libelle=marque.libelle,
                    site_category=RefOut.model_validate(parent) if parent else None,
                )
            category = categories.get(p.category_id)
            out.append(ProduitWithRelationsOut(
                **ProduitOut.model_validate(p).model_dump(),
                marque=marque_ref,
                category=RefOut.model_validate(category) if category else None,
            ))
        return out

    # -------- CRUD --------

    def create(self, payload: ProduitCreateIn) -> ProduitOut:
        fields = payload.model_dump()
        if fields["images"] is None:
            fields["images"] = []
        if fields["caracteristiques"] is None:
            fields["caracteristiques"] = {}
        self._process_images(fields)

        self._assert_marque(payload.marque_id)
        self._assert_category(payload.category_id)

        if fields["reference"]:
            self._assert_unique_reference(fields["reference"])
        else:
            fields["reference"] = generate_reference()

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.create(**fields)
        logger.info("Produit created: %s (%s)", entity.reference, entity.id)
        return ProduitOut.model_validate(entity)

    def list(
        self,
        *,
        marque_id: Optional[UUID] = None,
        category_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
        is_available: Optional[bool] = None,
        featured: Optional[bool] = None,
        min_price=None,
        max_price=None,
        include_deleted: bool = False,
    ) -> List[ProduitWithRelationsOut]:
        rows = self.repo.list_filtered(
            marque_id=marque_id,
            category_id=category_id,
            is_active=is_active,
            is_available=is_available,
            featured=featured,
            min_price=min_price,
            max_price=max_price,
            include_deleted=include_deleted,
        )
        return self._with_relations(list(rows))

    def get(self, produit_id: UUID) -> ProduitWithRelationsOut:
        return self._with_relations([self._get_or_404(produit_id)])[0]

    def update(self, produit_id: UUID, payload: ProduitUpdateIn) -> ProduitOut:
        entity = self._get_or_404(produit_id)
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items()
                   if v is not None or k in NULLABLE_FIELDS}
        self._process_images(changes)

        if "marque_id" in changes and changes["marque_id"] != entity.marque_id:
            self._assert_marque(changes["marque_id"])
        if "category_id" in changes and changes["category_id"] != entity.category_id:
            self._assert_category(changes["category_id"])
        if changes.get("reference") and changes["reference"] != entity.reference:
            self._assert_unique_reference(changes["reference"], exclude_id=entity.id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.update(entity, **changes)
        return ProduitOut.model_validate(entity)

    # -------- Cycle de vie --------

    def delete(self, produit_id: UUID) -> None:
        entity = self._get_or_404(produit_id)
        self.repo.soft_delete(entity)
        logger.info("Produit soft-deleted: %s", produit_id)

    def restore(self, produit_id: UUID) -> ProduitOut:
        entity = self._get_or_404(produit_id, include_deleted=True)
        if not entity.is_deleted:
            raise NotDeletedError("Le produit n'a pas été supprimé")
        self._assert_unique_reference(entity.reference, exclude_id=entity.id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            entity = self.repo.restore(entity)
        logger.info("Produit restored: %s", produit_id)
        return ProduitOut.model_validate(entity)

    # -------- Stock --------

    def update_stock(self, produit_id: UUID, payload: StockUpdateIn) -> StockOut:
        if payload.operation not in STOCK_OPERATIONS:
            raise ValidationFailedError("Opération invalide. Utilisez 'set', 'add' ou 'subtract'")

        entity = self.repo.get_for_update(produit_id)
        if not entity:
            raise NotFoundError(NOT_FOUND)

        ancien = entity.quantite_stock
        nouveau = compute_stock(ancien, payload.quantite_stock, payload.operation)
        entity = self.repo.update(entity, quantite_stock=nouveau)
        logger.info("Stock %s: %s -> %s (%s)", entity.id, ancien, nouveau, payload.operation)

        return StockOut(
            id=entity.id,
            libelle=entity.libelle,
            operation=payload.operation,
            ancien_stock=ancien,
            nouveau_stock=nouveau,
        )

    # -------- Images (multipart) --------

    def _checked(self, upload: ImageUpload) -> ImageUpload:
        try:
            mime = validate_upload(upload.content, max_mb=self.max_upload_mb, declared_mime=upload.mime_type)
        except ValueError as e:
            raise ValidationFailedError(str(e)) from e
        return ImageUpload(content=upload.content, mime_type=mime)

    def upload_images(
        self,
        produit_id: UUID,
        *,
        image_principale: Optional[ImageUpload] = None,
        images: Optional[List[ImageUpload]] = None,
    ) -> ProduitOut:
        entity = self._get_or_404(produit_id)
        if image_principale is None and not images:
            raise ValidationFailedError("Aucune image fournie")
        if images and len(images) > self.max_images:
            raise ValidationFailedError(f"Maximum {self.max_images} images par produit")

        changes: Dict[str, Any] = {}
        if image_principale is not None:
            changes["image_principale"] = process_main_image(self._checked(image_principale))
        if images:
            changes["images"] = process_images_array([self._checked(u) for u in images])

        entity = self.repo.update(entity, **changes)
        logger.info("Produit %s images updated (%s)", entity.id, ", ".join(sorted(changes)))
        return ProduitOut.model_validate(entity)
