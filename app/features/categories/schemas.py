from typing import List, Literal, Optional
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field as PydField, field_validator

from app.domain.schemas import Libelle100, RefOut, Text


# ---------- IN / UPDATE ----------

class CategoryCreateIn(BaseModel):
    libelle: Libelle100 = PydField(..., examples=["Réfrigérateurs"])
    description: Optional[Text] = None
    site_category_id: UUID
    is_active: bool = True


class CategoryUpdateIn(BaseModel):
    libelle: Optional[Libelle100] = None
    description: Optional[Text] = None
    site_category_id: Optional[UUID] = None
    is_active: Optional[bool] = None


class ElectroCategoryCreateIn(BaseModel):
    libelle: Libelle100
    type_electro: Literal["gros", "petit"] = PydField(..., description="gros | petit (insensible à la casse)")
    description: Optional[Text] = None
    is_active: bool = True

    @field_validator("type_electro", mode="before")
    @classmethod
    def _lower_type(cls, value):
        return value.lower() if isinstance(value, str) else value


# ---------- OUT ----------

class CategoryOut(BaseModel):
    id: UUID
    libelle: str
    description: Optional[str]
    site_category_id: UUID
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CategoryBriefOut(BaseModel):
    id: UUID
    libelle: str
    description: Optional[str] = None
    is_active: bool

    model_config = {"from_attributes": True}


class CategoryWithParentOut(CategoryOut):
    site_category: Optional[RefOut] = None


class ElectroCategoryOut(CategoryOut):
    type_electro: str


class ElectroSplitOut(BaseModel):
    petits_electromenagers: List[CategoryWithParentOut]
    gros_electromenagers: List[CategoryWithParentOut]


class ElectroGroupOut(BaseModel):
    category: Optional[CategoryBriefOut] = None
    subcategories: List[CategoryBriefOut] = []


class ElectroOrganizedOut(BaseModel):
    gros_electromenager: ElectroGroupOut
    petit_electromenager: ElectroGroupOut


class CategoryStatsOut(BaseModel):
    total_produits: int
    produits_actifs: int
    produits_disponibles: int
    produits_en_stock: int
