from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.v1.dependencies import get_current_admin, get_site_category_service
from app.db.models.admins import Admin
from app.domain.schemas import ApiResponse, MessageOut, PaginatedResponse
from app.features.categories.schemas import ElectroOrganizedOut
from app.features.site_categories.schemas import (
    SiteCategoryCreateIn,
    SiteCategoryDetailOut,
    SiteCategoryListItemOut,
    SiteCategoryOut,
    SiteCategoryStatsOut,
    SiteCategoryUpdateIn,
)
from app.features.site_categories.services import SiteCategoryService

router = APIRouter(
    prefix="/site-categories",
    tags=["site-categories"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Public
# -----------------------------
@router.get(
    "",
    response_model=PaginatedResponse[List[SiteCategoryListItemOut]],
    summary="Lister les catégories principales (paginé)",
)
def list_site_categories(
    page: int = Query(1, ge=1, description="Numéro de page"),
    limit: int = Query(10, ge=1, le=100, description="Taille de page"),
    search: Optional[str] = Query(None, description="Recherche sur libellé / description"),
    is_active: Optional[bool] = Query(None),
    include_deleted: bool = Query(False),
    svc: SiteCategoryService = Depends(get_site_category_service),
):
    items, pagination = svc.list(
        page=page, limit=limit, search=search, is_active=is_active, include_deleted=include_deleted
    )
    return PaginatedResponse[List[SiteCategoryListItemOut]](data=items, pagination=pagination)


# déclarée avant /{site_category_id}
@router.get(
    "/electromenagers/organized",
    response_model=ApiResponse[ElectroOrganizedOut],
    summary="Sous-catégories Electromenagers groupées (gros / petit)",
)
def electromenagers_organized(svc: SiteCategoryService = Depends(get_site_category_service)):
    return ApiResponse[ElectroOrganizedOut](data=svc.electro_organized())


@router.get(
    "/{site_category_id}",
    response_model=ApiResponse[SiteCategoryDetailOut],
    summary="Détail d'une catégorie principale",
)
def get_site_category(
    site_category_id: UUID = Path(...),
    organized: bool = Query(False, description="Grouper les sous-catégories Electromenagers"),
    svc: SiteCategoryService = Depends(get_site_category_service),
):
    return ApiResponse[SiteCategoryDetailOut](data=svc.get_detail(site_category_id, organized=organized))


@router.get(
    "/{site_category_id}/stats",
    response_model=ApiResponse[SiteCategoryStatsOut],
    summary="Statistiques d'une catégorie principale",
)
def site_category_stats(
    site_category_id: UUID = Path(...),
    svc: SiteCategoryService = Depends(get_site_category_service),
):
    return ApiResponse[SiteCategoryStatsOut](data=svc.stats(site_category_id))


# -----------------------------
# Admin
# -----------------------------
@router.post(
    "",
    response_model=ApiResponse[SiteCategoryOut],
    status_code=status.HTTP_201_CREATED,
    summary="Créer une catégorie principale",
)
def create_site_category(
    payload: SiteCategoryCreateIn,
    svc: SiteCategoryService = Depends(get_site_category_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[SiteCategoryOut](message="Catégorie principale créée avec succès", data=svc.create(payload))


@router.put(
    "/{site_category_id}",
    response_model=ApiResponse[SiteCategoryOut],
    summary="Mettre à jour une catégorie principale",
)
def update_site_category(
    payload: SiteCategoryUpdateIn,
    site_category_id: UUID = Path(...),
    svc: SiteCategoryService = Depends(get_site_category_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[SiteCategoryOut](
        message="Catégorie principale mise à jour avec succès",
        data=svc.update(site_category_id, payload),
    )


@router.delete(
    "/{site_category_id}",
    response_model=MessageOut,
    summary="Supprimer une catégorie principale (force=true : définitif)",
)
def delete_site_category(
    site_category_id: UUID = Path(...),
    force: bool = Query(False, description="Suppression définitive"),
    svc: SiteCategoryService = Depends(get_site_category_service),
    _admin: Admin = Depends(get_current_admin),
):
    svc.delete(site_category_id, force=force)
    if force:
        return MessageOut(message="Catégorie principale supprimée définitivement")
    return MessageOut(message="Catégorie principale supprimée avec succès")


@router.post(
    "/{site_category_id}/restore",
    response_model=ApiResponse[SiteCategoryOut],
    summary="Restaurer une catégorie principale supprimée",
)
def restore_site_category(
    site_category_id: UUID = Path(...),
    svc: SiteCategoryService = Depends(get_site_category_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[SiteCategoryOut](
        message="Catégorie principale restaurée avec succès",
        data=svc.restore(site_category_id),
    )
