"""
➡️ But : Définir les formats de réponse communs de l'API.

Toutes les routes répondent avec la même enveloppe :
{"success": true, "message": "...", "data": ...}

Les listes paginées ajoutent un bloc "pagination".
"""

import math
from typing import Annotated, Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, StringConstraints

DataT = TypeVar("DataT")


# ---------- Types partagés ----------

Libelle100 = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
Libelle200 = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=200)]
Text = Annotated[str, StringConstraints(strip_whitespace=True)]


class RefOut(BaseModel):
    """Projection minimale (id, libelle) d'une entité liée."""
    id: UUID
    libelle: str

    model_config = {"from_attributes": True}


# ---------- Enveloppes ----------

class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, *, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit) if limit else 0)


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[DataT] = None


class PaginatedResponse(ApiResponse[DataT], Generic[DataT]):
    pagination: Pagination


class MessageOut(BaseModel):
    success: bool = True
    message: str
