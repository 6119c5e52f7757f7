from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.v1.dependencies import get_current_admin, get_marque_service
from app.db.models.admins import Admin
from app.domain.schemas import ApiResponse, MessageOut
from app.features.marques.schemas import (
    MarqueCreateIn,
    MarqueDetailOut,
    MarqueOut,
    MarqueStatsOut,
    MarqueUpdateIn,
    MarqueWithParentOut,
)
from app.features.marques.services import MarqueService

router = APIRouter(
    prefix="/brands",
    tags=["brands"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Public
# -----------------------------
@router.get("", response_model=ApiResponse[List[MarqueWithParentOut]], summary="Lister les marques")
def list_marques(
    site_category_id: Optional[UUID] = Query(None),
    is_active: Optional[bool] = Query(None),
    include_deleted: bool = Query(False),
    svc: MarqueService = Depends(get_marque_service),
):
    return ApiResponse[List[MarqueWithParentOut]](
        data=svc.list(site_category_id=site_category_id, is_active=is_active, include_deleted=include_deleted)
    )


@router.get("/{marque_id}", response_model=ApiResponse[MarqueDetailOut], summary="Détail d'une marque et ses produits")
def get_marque(marque_id: UUID = Path(...), svc: MarqueService = Depends(get_marque_service)):
    return ApiResponse[MarqueDetailOut](data=svc.get_detail(marque_id))


@router.get("/{marque_id}/stats", response_model=ApiResponse[MarqueStatsOut], summary="Statistiques d'une marque")
def marque_stats(marque_id: UUID = Path(...), svc: MarqueService = Depends(get_marque_service)):
    return ApiResponse[MarqueStatsOut](data=svc.stats(marque_id))


# -----------------------------
# Admin
# -----------------------------
@router.post(
    "",
    response_model=ApiResponse[MarqueOut],
    status_code=status.HTTP_201_CREATED,
    summary="Créer une marque",
)
def create_marque(
    payload: MarqueCreateIn,
    svc: MarqueService = Depends(get_marque_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[MarqueOut](message="Marque créée avec succès", data=svc.create(payload))


@router.put("/{marque_id}", response_model=ApiResponse[MarqueOut], summary="Mettre à jour une marque")
def update_marque(
    payload: MarqueUpdateIn,
    marque_id: UUID = Path(...),
    svc: MarqueService = Depends(get_marque_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[MarqueOut](message="Marque mise à jour avec succès", data=svc.update(marque_id, payload))


@router.delete("/{marque_id}", response_model=MessageOut, summary="Supprimer une marque")
def delete_marque(
    marque_id: UUID = Path(...),
    svc: MarqueService = Depends(get_marque_service),
    _admin: Admin = Depends(get_current_admin),
):
    svc.delete(marque_id)
    return MessageOut(message="Marque supprimée avec succès")


@router.post("/{marque_id}/restore", response_model=ApiResponse[MarqueOut], summary="Restaurer une marque supprimée")
def restore_marque(
    marque_id: UUID = Path(...),
    svc: MarqueService = Depends(get_marque_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[MarqueOut](message="Marque restaurée avec succès", data=svc.restore(marque_id))
