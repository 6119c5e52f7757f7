"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_produit_service() : crée un ProduitService à partir d’une session DB.

get_current_admin() : résout l'administrateur porteur du Bearer token.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from typing import Optional

from fastapi import Depends, Header
from sqlmodel import Session

from app.core.config import jwt_settings, settings
from app.db.models.admins import Admin
from app.db.session import get_session

from app.db.repositories.admins import AdminRepository
from app.db.repositories.categories import CategoryRepository
from app.db.repositories.marques import MarqueRepository
from app.db.repositories.produits import ProduitRepository
from app.db.repositories.site_categories import SiteCategoryRepository

from app.features.admins.services import AdminService
from app.features.authentication.services import AuthService
from app.features.categories.services import CategoryService
from app.features.marques.services import MarqueService
from app.features.produits.services import ProduitService
from app.features.site_categories.services import SiteCategoryService


# -----------------------------
# Repositories
# -----------------------------
def get_site_category_repository(session: Session = Depends(get_session)) -> SiteCategoryRepository:
    return SiteCategoryRepository(session)

def get_category_repository(session: Session = Depends(get_session)) -> CategoryRepository:
    return CategoryRepository(session)

def get_marque_repository(session: Session = Depends(get_session)) -> MarqueRepository:
    return MarqueRepository(session)

def get_produit_repository(session: Session = Depends(get_session)) -> ProduitRepository:
    return ProduitRepository(session)

def get_admin_repository(session: Session = Depends(get_session)) -> AdminRepository:
    return AdminRepository(session)


# -----------------------------
# Services
# -----------------------------
def get_site_category_service(
    repo: SiteCategoryRepository = Depends(get_site_category_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
    marque_repo: MarqueRepository = Depends(get_marque_repository),
) -> SiteCategoryService:
    return SiteCategoryService(repo=repo, category_repo=category_repo, marque_repo=marque_repo)

def get_category_service(
    repo: CategoryRepository = Depends(get_category_repository),
    site_category_repo: SiteCategoryRepository = Depends(get_site_category_repository),
    produit_repo: ProduitRepository = Depends(get_produit_repository),
) -> CategoryService:
    return CategoryService(repo=repo, site_category_repo=site_category_repo, produit_repo=produit_repo)

def get_marque_service(
    repo: MarqueRepository = Depends(get_marque_repository),
    site_category_repo: SiteCategoryRepository = Depends(get_site_category_repository),
    produit_repo: ProduitRepository = Depends(get_produit_repository),
) -> MarqueService:
    return MarqueService(repo=repo, site_category_repo=site_category_repo, produit_repo=produit_repo)

def get_produit_service(
    repo: ProduitRepository = Depends(get_produit_repository),
    marque_repo: MarqueRepository = Depends(get_marque_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
    site_category_repo: SiteCategoryRepository = Depends(get_site_category_repository),
) -> ProduitService:
    return ProduitService(
        repo=repo,
        marque_repo=marque_repo,
        category_repo=category_repo,
        site_category_repo=site_category_repo,
        max_upload_mb=settings.MAX_UPLOAD_MB,
        max_images=settings.MAX_PRODUCT_IMAGES,
    )

def get_admin_service(repo: AdminRepository = Depends(get_admin_repository)) -> AdminService:
    return AdminService(repo)


# -----------------------------
# Auth
# -----------------------------
def get_auth_service(admin_repo: AdminRepository = Depends(get_admin_repository)) -> AuthService:
    return AuthService(admin_repo=admin_repo, jwt_settings=jwt_settings)


def get_current_admin(
    authorization: Optional[str] = Header(default=None, description="Bearer <token>"),
    auth_svc: AuthService = Depends(get_auth_service),
) -> Admin:
    """
    En-tête lu tel quel (pas de HTTPBearer) : absent, mal formé, invalide
    et expiré donnent chacun un message distinct.
    """
    return auth_svc.authenticate(authorization)
