"""
➡️ But : Formats d'entrée/sortie des produits.

Les champs image acceptent une chaîne base64 inline ("data:image/png;base64,..."),
un chemin relatif ("/uploads/x.jpg") ou une URL externe.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field as PydField

from app.domain.schemas import Libelle200, RefOut, Text


# ---------- IN / UPDATE ----------

class ProduitCreateIn(BaseModel):
    libelle: Libelle200 = PydField(..., examples=["Réfrigérateur combiné 300L"])
    description: Optional[Text] = None
    quantite_minimale: int = PydField(default=1, ge=1)
    prix: Optional[Decimal] = PydField(default=None, ge=0, max_digits=10, decimal_places=2)
    quantite_stock: int = PydField(default=0, ge=0)
    marque_id: UUID
    category_id: Optional[UUID] = None
    image_principale: Optional[str] = None
    images: Optional[List[Optional[str]]] = None
    caracteristiques: Optional[Dict[str, Any]] = None
    reference: Optional[str] = PydField(default=None, max_length=50)
    is_active: bool = True
    is_available: bool = True
    featured: bool = False


class ProduitUpdateIn(BaseModel):
    libelle: Optional[Libelle200] = None
    description: Optional[Text] = None
    quantite_minimale: Optional[int] = PydField(default=None, ge=1)
    prix: Optional[Decimal] = PydField(default=None, ge=0, max_digits=10, decimal_places=2)
    quantite_stock: Optional[int] = PydField(default=None, ge=0)
    marque_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    image_principale: Optional[str] = None
    images: Optional[List[Optional[str]]] = None
    caracteristiques: Optional[Dict[str, Any]] = None
    reference: Optional[str] = PydField(default=None, max_length=50)
    is_active: Optional[bool] = None
    is_available: Optional[bool] = None
    featured: Optional[bool] = None


class StockUpdateIn(BaseModel):
    quantite_stock: int = PydField(..., ge=0)
    operation: str = PydField(default="set", description="set | add | subtract")


# ---------- OUT ----------

class ProduitOut(BaseModel):
    id: UUID
    libelle: str
    description: Optional[str]
    quantite_minimale: int
    prix: Optional[Decimal]
    quantite_stock: int
    marque_id: UUID
    category_id: Optional[UUID]
    image_principale: Optional[str]
    images: List[Optional[str]] = []
    caracteristiques: Dict[str, Any] = {}
    reference: Optional[str]
    is_active: bool
    is_available: bool
    featured: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MarqueRefOut(RefOut):
    site_category: Optional[RefOut] = None


class ProduitWithRelationsOut(ProduitOut):
    marque: Optional[MarqueRefOut] = None
    category: Optional[RefOut] = None


class StockOut(BaseModel):
    id: UUID
    libelle: str
    operation: str
    ancien_stock: int
    nouveau_stock: int
