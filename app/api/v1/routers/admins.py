from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.v1.dependencies import get_admin_service, get_auth_service, get_current_admin
from app.db.models.admins import Admin
from app.domain.schemas import ApiResponse, MessageOut
from app.features.admins.schemas import AdminCreateIn, AdminOut, AdminUpdateIn
from app.features.admins.services import AdminService
from app.features.authentication.schemas import LoginIn, LoginOut
from app.features.authentication.services import AuthService

router = APIRouter(
    prefix="/admins",
    tags=["admins"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Authentification
# -----------------------------
@router.post("/login", response_model=ApiResponse[LoginOut], summary="Connexion administrateur")
def login(payload: LoginIn, auth_svc: AuthService = Depends(get_auth_service)):
    return ApiResponse[LoginOut](message="Authentification réussie", data=auth_svc.login(payload))


@router.get("/me", response_model=ApiResponse[AdminOut], summary="Administrateur connecté")
def me(admin: Admin = Depends(get_current_admin)):
    return ApiResponse[AdminOut](data=AdminOut.model_validate(admin))


# -----------------------------
# CRUD (Bearer requis)
# -----------------------------
@router.get("", response_model=ApiResponse[List[AdminOut]], summary="Lister les administrateurs")
def list_admins(
    is_active: Optional[bool] = Query(None),
    include_deleted: bool = Query(False),
    svc: AdminService = Depends(get_admin_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[List[AdminOut]](data=svc.list(is_active=is_active, include_deleted=include_deleted))


@router.post(
    "",
    response_model=ApiResponse[AdminOut],
    status_code=status.HTTP_201_CREATED,
    summary="Créer un administrateur",
)
def create_admin(
    payload: AdminCreateIn,
    svc: AdminService = Depends(get_admin_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[AdminOut](message="Administrateur créé avec succès", data=svc.create(payload))


@router.get("/{admin_id}", response_model=ApiResponse[AdminOut], summary="Détail d'un administrateur")
def get_admin(
    admin_id: UUID = Path(...),
    svc: AdminService = Depends(get_admin_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[AdminOut](data=svc.get(admin_id))


@router.put("/{admin_id}", response_model=ApiResponse[AdminOut], summary="Mettre à jour un administrateur")
def update_admin(
    payload: AdminUpdateIn,
    admin_id: UUID = Path(...),
    svc: AdminService = Depends(get_admin_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[AdminOut](message="Administrateur mis à jour avec succès", data=svc.update(admin_id, payload))


@router.delete("/{admin_id}", response_model=MessageOut, summary="Supprimer un administrateur")
def delete_admin(
    admin_id: UUID = Path(...),
    svc: AdminService = Depends(get_admin_service),
    _admin: Admin = Depends(get_current_admin),
):
    svc.delete(admin_id)
    return MessageOut(message="Administrateur supprimé avec succès")


@router.post("/{admin_id}/restore", response_model=ApiResponse[AdminOut], summary="Restaurer un administrateur")
def restore_admin(
    admin_id: UUID = Path(...),
    svc: AdminService = Depends(get_admin_service),
    _admin: Admin = Depends(get_current_admin),
):
    return ApiResponse[AdminOut](message="Administrateur restauré avec succès", data=svc.restore(admin_id))
