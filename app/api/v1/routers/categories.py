from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.v1.dependencies import get_category_service, get_current_admin
from app.db.models.admins import Admin
from app.domain.schemas import ApiResponse, MessageOut
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
from app.features.categories.services import CategoryService

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Electroménager (avant /{category_id})
# -----------------------------
@router.get(
    "/electro",
    response_model=ApiResponse[ElectroSplitOut],
    summary="Sous-catégories électroménager (petits / gros)",
)
def list_electro(svc: CategoryService = Depends(get_category_service)):
    return ApiResponse[ElectroSplitOut](data=svc.list_electro())


@router.post(
    "/electro",
    response_model=ApiResponse[ElectroCategoryOut],
    status_code=status.HTTP_201_CREATED,
    summary="Créer une sous-catégorie électroménager",
)
def create_electro(
    payload: ElectroCategoryCreateIn,
    svc: CategoryService = Depends(get_category_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[ElectroCategoryOut](
        message=f"Sous-catégorie {payload.type_electro} électroménager créée avec succès",
        data=svc.create_electro(payload),
    )


# -----------------------------
# CRUD
# -----------------------------
@router.get("", response_model=ApiResponse[List[CategoryWithParentOut]], summary="Lister les catégories")
def list_categories(
    site_category_id: Optional[UUID] = Query(None),
    is_active: Optional[bool] = Query(None),
    include_deleted: bool = Query(False),
    svc: CategoryService = Depends(get_category_service),
):
    return ApiResponse[List[CategoryWithParentOut]](
        data=svc.list(site_category_id=site_category_id, is_active=is_active, include_deleted=include_deleted)
    )


@router.get("/{category_id}", response_model=ApiResponse[CategoryWithParentOut], summary="Détail d'une catégorie")
def get_category(category_id: UUID = Path(...), svc: CategoryService = Depends(get_category_service)):
    return ApiResponse[CategoryWithParentOut](data=svc.get(category_id))


@router.get(
    "/{category_id}/stats",
    response_model=ApiResponse[CategoryStatsOut],
    summary="Statistiques produits d'une catégorie",
)
def category_stats(category_id: UUID = Path(...), svc: CategoryService = Depends(get_category_service)):
    return ApiResponse[CategoryStatsOut](data=svc.stats(category_id))


@router.post(
    "",
    response_model=ApiResponse[CategoryOut],
    status_code=status.HTTP_201_CREATED,
    summary="Créer une catégorie",
)
def create_category(
    payload: CategoryCreateIn,
    svc: CategoryService = Depends(get_category_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[CategoryOut](message="Catégorie créée avec succès", data=svc.create(payload))


@router.put("/{category_id}", response_model=ApiResponse[CategoryOut], summary="Mettre à jour une catégorie")
def update_category(
    payload: CategoryUpdateIn,
    category_id: UUID = Path(...),
    svc: CategoryService = Depends(get_category_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[CategoryOut](message="Catégorie mise à jour avec succès", data=svc.update(category_id, payload))


# Suppression / restauration ouvertes (sans Bearer)
@router.delete("/{category_id}", response_model=MessageOut, summary="Supprimer une catégorie")
def delete_category(category_id: UUID = Path(...), svc: CategoryService = Depends(get_category_service)):
    svc.delete(category_id)
    return MessageOut(message="Catégorie supprimée avec succès")


@router.post(
    "/{category_id}/restore",
    response_model=ApiResponse[CategoryOut],
    summary="Restaurer une catégorie supprimée",
)
def restore_category(category_id: UUID = Path(...), svc: CategoryService = Depends(get_category_service)):
    return ApiResponse[CategoryOut](message="Catégorie restaurée avec succès", data=svc.restore(category_id))
