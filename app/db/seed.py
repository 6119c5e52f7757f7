"""
➡️ But : Remplir la base avec le catalogue de départ (seed_data.yaml).

Idempotent : une ligne déjà présente (même clé unique parmi les lignes vivantes)
est laissée telle quelle. Lancé au démarrage si SEED_ON_STARTUP, ou via scripts/seed.py.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from sqlmodel import Session

from app.core.config import settings
from app.db.models.site_categories import SiteCategory
from app.db.repositories.admins import AdminRepository
from app.db.repositories.categories import CategoryRepository
from app.db.repositories.marques import MarqueRepository
from app.db.repositories.site_categories import SiteCategoryRepository
from app.security.password import hash_password

logger = logging.getLogger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Seed catalogue
# -----------------------------
def _seed_children(repo, parent: SiteCategory, items: List[Dict[str, Any]], kind: str) -> int:
    created = 0
    for item in items:
        if repo.exists_live(libelle=item["libelle"], site_category_id=parent.id):
            continue
        repo.create(
            libelle=item["libelle"],
            description=item.get("description"),
            site_category_id=parent.id,
        )
        created += 1
    if created:
        logger.info("%d %s insérée(s) pour %s", created, kind, parent.libelle)
    return created


def seed_catalog(session: Session, data: Dict[str, Any]) -> None:
    site_repo = SiteCategoryRepository(session)
    category_repo = CategoryRepository(session)
    marque_repo = MarqueRepository(session)

    site_categories: List[Dict[str, Any]] = data.get("site_categories", [])
    if not site_categories:
        logger.warning("Aucune catégorie principale dans le YAML (clé 'site_categories').")
        return

    for sc in site_categories:
        parent = site_repo.get_by_libelle(sc["libelle"])
        if parent is None:
            parent = site_repo.create(libelle=sc["libelle"], description=sc.get("description"))
            logger.info("Catégorie principale créée: %s", parent.libelle)

        _seed_children(category_repo, parent, sc.get("categories", []), "catégorie(s)")
        _seed_children(marque_repo, parent, sc.get("marques", []), "marque(s)")


# -----------------------------
# Seed admin
# -----------------------------
def seed_admin(session: Session, data: Dict[str, Any], *, login: str, password: str) -> None:
    repo = AdminRepository(session)
    if repo.get_by_login(login):
        logger.info("Administrateur '%s' déjà présent, aucune insertion effectuée.", login)
        return

    profile: Dict[str, Any] = (data.get("admins") or [{}])[0]
    repo.create(
        login=login,
        hashed_password=hash_password(password),
        nom=profile.get("nom"),
        prenom=profile.get("prenom"),
        email=profile.get("email"),
    )
    logger.info("Administrateur par défaut créé: %s", login)


def seed_all(
    session: Session,
    seed_path: str | Path,
    *,
    admin_login: Optional[str] = None,
    admin_password: Optional[str] = None,
) -> None:
    data = load_seed_yaml(seed_path)

    seed_catalog(session, data)
    seed_admin(
        session,
        data,
        login=admin_login or settings.DEFAULT_ADMIN_LOGIN,
        password=admin_password or settings.DEFAULT_ADMIN_PASSWORD,
    )
