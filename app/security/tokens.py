import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TypedDict
from uuid import UUID

from jose import jwt, JWTError, ExpiredSignatureError

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation JWT
# ==========================================================

@dataclass(frozen=True)
class JWTSettings:
    """
    Configuration des tokens JWT.

    - `secret` : clé secrète pour signer/valider les tokens
    - `issuer` : émetteur (utilisé dans le payload)
    - `algorithm` : algo de signature (HS256 recommandé)
    - `access_ttl` : durée de vie d’un access token
    """
    secret: str
    issuer: str = "opportune-api"
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(hours=24)


# ==========================================================
# 🧱 Types
# ==========================================================

class DecodedToken(TypedDict, total=False):
    iss: str
    sub: str            # identifiant (UUID) de l'administrateur
    login: str
    typ: str            # "access"
    jti: str
    iat: int
    exp: int


class TokenExpired(Exception):
    """Signature valide mais date d'expiration dépassée."""


class TokenInvalid(Exception):
    """Signature, format ou contenu du token invalide."""


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)

def new_jti() -> str:
    """Crée un identifiant unique pour un token."""
    return str(uuid.uuid4())


# ==========================================================
# 🎟️ Génération des tokens
# ==========================================================

def create_access_token(*, admin_id: UUID, login: str, settings: JWTSettings, now: datetime | None = None) -> str:
    """
    Crée un access token JWT (par défaut 24 h).
    `now` permet de forger un token déjà expiré dans les tests.
    """
    now = now or _now()
    payload: DecodedToken = {
        "iss": settings.issuer,
        "sub": str(admin_id),
        "login": login,
        "typ": "access",
        "jti": new_jti(),
        "iat": int(now.timestamp()),
        "exp": int((now + settings.access_ttl).timestamp()),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.algorithm)


# ==========================================================
# 🔍 Décodage / Validation
# ==========================================================

def decode_token(token: str, settings: JWTSettings) -> DecodedToken:
    """
    Décode et valide un token JWT (signature + expiration).
    Lève TokenExpired si expiré, TokenInvalid pour tout autre problème.
    """
    try:
        decoded = jwt.decode(
            token,
            settings.secret,
            algorithms=[settings.algorithm],
            issuer=settings.issuer,
            options={"verify_aud": False},
        )
    except ExpiredSignatureError as e:
        raise TokenExpired("Token expiré") from e
    except JWTError as e:
        raise TokenInvalid("Token invalide") from e

    if decoded.get("typ") != "access" or not decoded.get("sub"):
        raise TokenInvalid("Token invalide")
    return decoded  # type: ignore[return-value]


def subject_as_uuid(decoded: DecodedToken) -> UUID:
    """Convertit le `sub` du token en UUID (TokenInvalid si mal formé)."""
    try:
        return UUID(decoded["sub"])
    except (KeyError, ValueError) as e:
        raise TokenInvalid("Token invalide") from e
