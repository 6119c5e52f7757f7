"""
➡️ But : Définir les erreurs métier communes à toutes les features.

Les services lèvent ces exceptions ; main.py les traduit en réponses JSON
{"success": false, "message": ...} avec le code HTTP porté par chaque classe.

🔹 Avantages :

Services testables sans FastAPI.

Un seul endroit pour le format des erreurs.
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    status_code: int = 500

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(CatalogError):
    """Entité (ou parent) absente ou supprimée."""
    status_code = 404


class ConflictError(CatalogError):
    """Violation d'unicité, détectée avant écriture ou par la base."""
    status_code = 409


class ValidationFailedError(CatalogError):
    status_code = 400


class BlockedError(CatalogError):
    """Suppression refusée : des éléments dépendants existent encore."""
    status_code = 400


class NotDeletedError(CatalogError):
    """Restauration demandée sur une ligne qui n'est pas supprimée."""
    status_code = 400


class UnauthorizedError(CatalogError):
    status_code = 401


class ForbiddenError(CatalogError):
    status_code = 403
