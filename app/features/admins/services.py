import logging
from typing import List, Optional
from uuid import UUID

from app.db.models.admins import Admin
from app.db.repositories.admins import AdminRepository
from app.domain.errors import ConflictError, NotDeletedError, NotFoundError
from app.features.admins.schemas import AdminCreateIn, AdminOut, AdminUpdateIn
from app.security.password import hash_password

logger = logging.getLogger(__name__)

NOT_FOUND = "Administrateur non trouvé"
ALREADY_EXISTS = "Un administrateur avec ce login existe déjà"

# Champs qu'une mise à jour peut remettre à NULL
NULLABLE_FIELDS = {"nom", "prenom", "email"}


class AdminService:
    """Gestion des comptes administrateurs (le login est unique parmi les comptes vivants)."""

    def __init__(self, repo: AdminRepository):
        self.repo = repo

    def _get_or_404(self, admin_id: UUID, *, include_deleted: bool = False) -> Admin:
        admin = self.repo.get(admin_id, include_deleted=include_deleted)
        if not admin:
            raise NotFoundError(NOT_FOUND)
        return admin

    def _assert_unique(self, login: str, *, exclude_id: Optional[UUID] = None) -> None:
        if self.repo.exists_live(login=login, exclude_id=exclude_id):
            raise ConflictError(ALREADY_EXISTS)

    def create(self, payload: AdminCreateIn) -> AdminOut:
        self._assert_unique(payload.login)
        fields = payload.model_dump(exclude={"password"})
        with self.repo.unique_guard(ALREADY_EXISTS):
            admin = self.repo.create(hashed_password=hash_password(payload.password), **fields)
        logger.info("Admin created: %s", admin.login)
        return AdminOut.model_validate(admin)

    def list(self, *, is_active: Optional[bool] = None, include_deleted: bool = False) -> List[AdminOut]:
        rows = self.repo.list_filtered(is_active=is_active, include_deleted=include_deleted)
        return [AdminOut.model_validate(a) for a in rows]

    def get(self, admin_id: UUID) -> AdminOut:
        return AdminOut.model_validate(self._get_or_404(admin_id))

    def update(self, admin_id: UUID, payload: AdminUpdateIn) -> AdminOut:
        admin = self._get_or_404(admin_id)
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items()
                   if v is not None or k in NULLABLE_FIELDS}

        if "login" in changes and changes["login"] != admin.login:
            self._assert_unique(changes["login"], exclude_id=admin.id)
        if "password" in changes:
            changes["hashed_password"] = hash_password(changes.pop("password"))

        with self.repo.unique_guard(ALREADY_EXISTS):
            admin = self.repo.update(admin, **changes)
        return AdminOut.model_validate(admin)

    def delete(self, admin_id: UUID) -> None:
        admin = self._get_or_404(admin_id)
        self.repo.soft_delete(admin)
        logger.info("Admin soft-deleted: %s", admin_id)

    def restore(self, admin_id: UUID) -> AdminOut:
        admin = self._get_or_404(admin_id, include_deleted=True)
        if not admin.is_deleted:
            raise NotDeletedError("Cet administrateur n'est pas supprimé")
        self._assert_unique(admin.login, exclude_id=admin.id)

        with self.repo.unique_guard(ALREADY_EXISTS):
            admin = self.repo.restore(admin)
        logger.info("Admin restored: %s", admin_id)
        return AdminOut.model_validate(admin)
