from typing import List, Optional
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field as PydField

from app.domain.schemas import Libelle100, RefOut, Text
from app.features.categories.schemas import CategoryBriefOut, ElectroOrganizedOut


# ---------- IN / UPDATE ----------

class SiteCategoryCreateIn(BaseModel):
    libelle: Libelle100 = PydField(..., examples=["Electromenagers"])
    description: Optional[Text] = None
    is_active: bool = True


class SiteCategoryUpdateIn(BaseModel):
    libelle: Optional[Libelle100] = None
    description: Optional[Text] = None
    is_active: Optional[bool] = None


# ---------- OUT ----------

class SiteCategoryOut(BaseModel):
    id: UUID
    libelle: str
    description: Optional[str]
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SiteCategoryListItemOut(SiteCategoryOut):
    categories: List[RefOut] = []
    marques: List[RefOut] = []


class MarqueBriefOut(BaseModel):
    id: UUID
    libelle: str
    description: Optional[str] = None
    logo: Optional[str] = None
    is_active: bool

    model_config = {"from_attributes": True}


class SiteCategoryDetailOut(SiteCategoryOut):
    categories: List[CategoryBriefOut] = []
    marques: List[MarqueBriefOut] = []
    organized_categories: Optional[ElectroOrganizedOut] = None


class SiteCategoryStats(BaseModel):
    total_categories: int
    total_marques: int
    active_categories: int
    active_marques: int


class SiteCategoryStatsOut(BaseModel):
    category: SiteCategoryOut
    stats: SiteCategoryStats
