from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field as PydField

from app.domain.schemas import Libelle100, RefOut, Text


# ---------- IN / UPDATE ----------

class MarqueCreateIn(BaseModel):
    libelle: Libelle100 = PydField(..., examples=["Samsung"])
    description: Optional[Text] = None
    logo: Optional[str] = PydField(default=None, max_length=255)
    site_category_id: UUID
    is_active: bool = True


class MarqueUpdateIn(BaseModel):
    libelle: Optional[Libelle100] = None
    description: Optional[Text] = None
    logo: Optional[str] = PydField(default=None, max_length=255)
    site_category_id: Optional[UUID] = None
    is_active: Optional[bool] = None


# ---------- OUT ----------

class MarqueOut(BaseModel):
    id: UUID
    libelle: str
    description: Optional[str]
    logo: Optional[str]
    site_category_id: UUID
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MarqueWithParentOut(MarqueOut):
    site_category: Optional[RefOut] = None


class ProduitSummaryOut(BaseModel):
    id: UUID
    libelle: str
    prix: Optional[Decimal] = None
    is_active: bool
    is_available: bool

    model_config = {"from_attributes": True}


class MarqueDetailOut(MarqueWithParentOut):
    produits: List[ProduitSummaryOut] = []


class MarqueStatsOut(BaseModel):
    total_produits: int
    produits_actifs: int
    produits_disponibles: int
    produits_en_stock: int
