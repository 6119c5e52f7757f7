import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from app.db.models.admins import Admin
from app.db.repositories.admins import AdminRepository
from app.domain.errors import ForbiddenError, UnauthorizedError
from app.features.admins.schemas import AdminOut
from app.features.authentication.schemas import LoginIn, LoginOut
from app.security.password import verify_password
from app.security.tokens import (
    JWTSettings,
    TokenExpired,
    TokenInvalid,
    create_access_token,
    decode_token,
    subject_as_uuid,
)

logger = logging.getLogger(__name__)

MISSING_TOKEN = "Token d'authentification manquant. Veuillez fournir un Bearer token."
MALFORMED_TOKEN = "Format de token invalide."
INVALID_CREDENTIALS = "Identifiants invalides"
INACTIVE_ACCOUNT = "Compte administrateur désactivé"


class AuthService:
    """
    Service d'authentification : orchestre le repository admins + tokens.
    Ne contient pas d'accès SQL direct et lève des erreurs métier (401 / 403).
    """

    def __init__(
        self,
        *,
        admin_repo: AdminRepository,
        jwt_settings: JWTSettings,
        now_fn: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.admin_repo = admin_repo
        self.jwt = jwt_settings
        self.now_fn = now_fn

    # ---------- Login ----------
    def login(self, payload: LoginIn) -> LoginOut:
        admin = self.admin_repo.get_by_login(payload.login)
        if not admin:
            # Ne pas révéler si le compte existe
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not admin.is_active:
            raise ForbiddenError(INACTIVE_ACCOUNT)
        if not verify_password(payload.password, admin.hashed_password):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        now = self.now_fn()
        admin = self.admin_repo.update(admin, last_login=now)
        token = create_access_token(admin_id=admin.id, login=admin.login, settings=self.jwt, now=now)
        logger.info("Admin logged in: %s", admin.login)

        return LoginOut(
            token=token,
            expires_in=int(self.jwt.access_ttl.total_seconds()),
            admin=AdminOut.model_validate(admin),
        )

    # ---------- Bearer ----------
    def authenticate(self, authorization: Optional[str]) -> Admin:
        """
        Résout l'administrateur à partir de l'en-tête Authorization.
        Chaque cas d'échec a son propre message.
        """
        if not authorization:
            raise UnauthorizedError(MISSING_TOKEN)

        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token or " " in token:
            raise UnauthorizedError(MALFORMED_TOKEN)

        try:
            decoded = decode_token(token, self.jwt)
            admin_id = subject_as_uuid(decoded)
        except TokenExpired as e:
            raise UnauthorizedError("Token expiré") from e
        except TokenInvalid as e:
            raise UnauthorizedError("Token invalide") from e

        admin = self.admin_repo.get(admin_id)
        if not admin:
            raise UnauthorizedError("Administrateur non trouvé")
        if not admin.is_active:
            raise ForbiddenError(INACTIVE_ACCOUNT)
        return admin
