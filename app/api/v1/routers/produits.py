from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile, status

from app.api.v1.dependencies import get_current_admin, get_produit_service
from app.db.models.admins import Admin
from app.domain.schemas import ApiResponse, MessageOut
from app.features.produits.schemas import (
    ProduitCreateIn,
    ProduitOut,
    ProduitUpdateIn,
    ProduitWithRelationsOut,
    StockOut,
    StockUpdateIn,
)
from app.features.produits.services import ProduitService
from app.utils.images import ImageUpload

router = APIRouter(
    prefix="/products",
    tags=["products"],
    responses={404: {"description": "Not Found"}},
)

# -------- Helpers --------

async def _read_upload(file: Optional[UploadFile]) -> Optional[ImageUpload]:
    if file is None:
        return None
    content = await file.read()
    return ImageUpload(content=content, mime_type=file.content_type)


# -----------------------------
# Public
# -----------------------------
@router.get("", response_model=ApiResponse[List[ProduitWithRelationsOut]], summary="Lister les produits")
def list_produits(
    marque_id: Optional[UUID] = Query(None),
    category_id: Optional[UUID] = Query(None),
    is_active: Optional[bool] = Query(None),
    is_available: Optional[bool] = Query(None),
    featured: Optional[bool] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    include_deleted: bool = Query(False),
    svc: ProduitService = Depends(get_produit_service),
):
    return ApiResponse[List[ProduitWithRelationsOut]](
        data=svc.list(
            marque_id=marque_id,
            category_id=category_id,
            is_active=is_active,
            is_available=is_available,
            featured=featured,
            min_price=min_price,
            max_price=max_price,
            include_deleted=include_deleted,
        )
    )


@router.get("/{produit_id}", response_model=ApiResponse[ProduitWithRelationsOut], summary="Détail d'un produit")
def get_produit(produit_id: UUID = Path(...), svc: ProduitService = Depends(get_produit_service)):
    return ApiResponse[ProduitWithRelationsOut](data=svc.get(produit_id))


# -----------------------------
# Admin
# -----------------------------
@router.post(
    "",
    response_model=ApiResponse[ProduitOut],
    status_code=status.HTTP_201_CREATED,
    summary="Créer un produit",
)
def create_produit(
    payload: ProduitCreateIn,
    svc: ProduitService = Depends(get_produit_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[ProduitOut](message="Produit créé avec succès", data=svc.create(payload))


@router.put("/{produit_id}", response_model=ApiResponse[ProduitOut], summary="Mettre à jour un produit")
def update_produit(
    payload: ProduitUpdateIn,
    produit_id: UUID = Path(...),
    svc: ProduitService = Depends(get_produit_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[ProduitOut](message="Produit mis à jour avec succès", data=svc.update(produit_id, payload))


@router.put("/{produit_id}/stock", response_model=ApiResponse[StockOut], summary="Ajuster le stock (set / add / subtract)")
def update_stock(
    payload: StockUpdateIn,
    produit_id: UUID = Path(...),
    svc: ProduitService = Depends(get_produit_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[StockOut](message="Stock mis à jour avec succès", data=svc.update_stock(produit_id, payload))


@router.post(
    "/{produit_id}/images",
    response_model=ApiResponse[ProduitOut],
    summary="Uploader l'image principale et/ou les images secondaires (multipart)",
)
async def upload_images(
    produit_id: UUID = Path(...),
    image_principale: Optional[UploadFile] = File(None),
    images: Optional[List[UploadFile]] = File(None),
    svc: ProduitService = Depends(get_produit_service),
    _admin: Admin = Depends(get_current_admin),
):
    main = await _read_upload(image_principale)
    others = [await _read_upload(f) for f in images or []]
    return ApiResponse[ProduitOut](
        message="Images mises à jour avec succès",
        data=svc.upload_images(produit_id, image_principale=main, images=others),
    )


# Suppression / restauration ouvertes (sans Bearer)
@router.delete("/{produit_id}", response_model=MessageOut, summary="Supprimer un produit")
def delete_produit(produit_id: UUID = Path(...), svc: ProduitService = Depends(get_produit_service)):
    svc.delete(produit_id)
    return MessageOut(message="Produit supprimé avec succès")


@router.post("/{produit_id}/restore", response_model=ApiResponse[ProduitOut], summary="Restaurer un produit supprimé")
def restore_produit(produit_id: UUID = Path(...), svc: ProduitService = Depends(get_produit_service)):
    return ApiResponse[ProduitOut](message="Produit restauré avec succès", data=svc.restore(produit_id))
