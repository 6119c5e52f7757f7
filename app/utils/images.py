"""
➡️ But : Gérer les références d'images des produits.

Une image produit est stockée sous l'une de trois formes :
- base64 inline      : "data:image/png;base64,...."
- chemin de fichier  : "/uploads/x.jpg" (ou tout ce qui ne commence ni par "data:" ni par "http")
- URL externe        : "https://..."

Les fichiers uploadés (bytes) sont convertis en base64 inline avant stockage.
Toutes les fonctions de classification sont pures (aucun effet de bord).
"""

import base64
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Set, Tuple

import filetype

UPLOAD_PREFIX = "/uploads/"
DEFAULT_MIME = "image/jpeg"

# Types MIME acceptés -> forme canonique
MIME_TYPE_MAP = {
    "image/jpeg": "image/jpeg",
    "image/jpg": "image/jpeg",
    "image/png": "image/png",
    "image/gif": "image/gif",
    "image/webp": "image/webp",
    "image/svg+xml": "image/svg+xml",
}

ALLOWED_UPLOAD_MIME: Set[str] = set(MIME_TYPE_MAP.values())

_BASE64_RE = re.compile(r"^data:image/(jpeg|jpg|png|gif|webp|svg\+xml);base64,", re.IGNORECASE)
_BASE64_MIME_RE = re.compile(r"^data:image/([^;]+);base64,")


class ImageKind(str, Enum):
    BASE64 = "base64"
    FILE_PATH = "file_path"
    URL = "url"


@dataclass(frozen=True)
class ImageUpload:
    """Fichier reçu en multipart : contenu brut + type MIME annoncé."""
    content: bytes
    mime_type: Optional[str] = None


# -----------------------------
# Classification
# -----------------------------

def is_base64(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    return value.startswith("data:image/")


def is_file_path(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    return value.startswith(UPLOAD_PREFIX) or (not value.startswith("data:") and not value.startswith("http"))


def classify(value: Any) -> Optional[ImageKind]:
    """Retourne la forme de l'image, ou None pour une valeur vide / non textuelle."""
    if not value or not isinstance(value, str):
        return None
    if is_base64(value):
        return ImageKind.BASE64
    if is_file_path(value):
        return ImageKind.FILE_PATH
    return ImageKind.URL


def validate_base64(value: Any) -> bool:
    """Vérifie le préfixe data:image/<type>;base64, contre la liste des types acceptés."""
    if not value or not isinstance(value, str):
        return False
    return _BASE64_RE.match(value) is not None


def get_base64_mime_type(value: Any) -> Optional[str]:
    """Sous-type d'une image base64 ('png', 'svg+xml'...) ou None."""
    if not is_base64(value):
        return None
    match = _BASE64_MIME_RE.match(value)
    return match.group(1) if match else None


# -----------------------------
# Encodage
# -----------------------------

def normalize_mime_type(mime_type: Optional[str]) -> str:
    if not mime_type:
        return DEFAULT_MIME
    return MIME_TYPE_MAP.get(mime_type.lower(), DEFAULT_MIME)


def file_to_base64(content: bytes, mime_type: Optional[str]) -> str:
    if not isinstance(content, (bytes, bytearray)):
        raise TypeError("Le fichier doit être un buffer (bytes) valide")
    payload = base64.b64encode(bytes(content)).decode("ascii")
    return f"data:{normalize_mime_type(mime_type)};base64,{payload}"


def process_main_image(value: Any, mime_type: Optional[str] = None) -> Optional[Any]:
    """Image principale : bytes -> base64 inline ; base64 / chemin / URL conservés tels quels."""
    if not value:
        return None
    if isinstance(value, (bytes, bytearray)):
        return file_to_base64(value, mime_type)
    if isinstance(value, ImageUpload):
        return file_to_base64(value.content, value.mime_type or mime_type)
    return value


def process_images_array(items: Any) -> List[Any]:
    """
    Traite chaque élément indépendamment, en conservant ordre et positions.
    Les entrées vides passent sans modification.
    """
    if not isinstance(items, list):
        return []

    processed: List[Any] = []
    for item in items:
        if not item:
            processed.append(item)
        elif isinstance(item, (bytes, bytearray)):
            processed.append(file_to_base64(item, DEFAULT_MIME))
        elif isinstance(item, ImageUpload):
            processed.append(file_to_base64(item.content, item.mime_type or DEFAULT_MIME))
        else:
            processed.append(item)
    return processed


def first_invalid_base64(values: List[Any]) -> Optional[int]:
    """Position de la première image base64 dont le type n'est pas accepté, sinon None."""
    for index, value in enumerate(values):
        if is_base64(value) and not validate_base64(value):
            return index
    return None


# -----------------------------
# Uploads (multipart)
# -----------------------------

def detect_mime_and_ext(file_bytes: bytes) -> Tuple[str, str]:
    """
    Détecte le type réel via 'filetype'.
    Retourne (real_mime, ext_with_dot).
    """
    kind = filetype.guess(file_bytes)
    real_mime = kind.mime if kind else "application/octet-stream"
    ext = "." + (kind.extension if kind else "bin")
    return real_mime, ext


def validate_upload(
    file_bytes: bytes,
    *,
    max_mb: int,
    declared_mime: Optional[str] = None,
    allowed_mime: Set[str] = ALLOWED_UPLOAD_MIME,
) -> str:
    """
    Retourne le type MIME retenu pour le fichier.
    Lève ValueError si invalide.
    """
    size = len(file_bytes)
    if size == 0:
        raise ValueError("Fichier vide")
    if size > max_mb * 1024 * 1024:
        raise ValueError(f"Taille invalide (max {max_mb} MB)")

    real_mime, _ = detect_mime_and_ext(file_bytes)
    if real_mime == "application/octet-stream" and declared_mime == "image/svg+xml":
        # SVG = texte, non détectable par signature binaire
        real_mime = declared_mime

    if real_mime not in allowed_mime:
        raise ValueError(
            f"Type de fichier non autorisé ({real_mime}). Formats acceptés : JPEG, PNG, GIF, WEBP, SVG"
        )
    return real_mime
