from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import JSON, Column, ForeignKey, Index, Numeric, Text, Uuid
from sqlmodel import Field

from .base import BaseModelDB, live_index_kwargs


class Produit(BaseModelDB, table=True):
    """
    Produits disponibles à la vente.
    Les images sont stockées telles quelles : base64 inline, chemin relatif (/uploads/...) ou URL externe.
    """

    __tablename__ = "produits"
    __table_args__ = (
        Index("uq_produits_reference", "reference", unique=True, **live_index_kwargs()),
        Index("ix_produits_active_available", "is_active", "is_available"),
    )

    libelle: str = Field(min_length=2, max_length=200, description="Libellé du produit")
    description: Optional[str] = Field(default=None)

    quantite_minimale: int = Field(default=1, ge=1, description="Quantité minimale de commande")
    prix: Optional[Decimal] = Field(
        default=None,
        ge=0,
        sa_column=Column(Numeric(10, 2), nullable=True),
        description="Prix unitaire",
    )
    quantite_stock: int = Field(default=0, ge=0, description="Quantité en stock")

    # Suppression d'une marque interdite tant que des produits la référencent
    marque_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("marques.id", ondelete="RESTRICT", onupdate="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    category_id: Optional[UUID] = Field(
        default=None,
        sa_column=Column(
            Uuid,
            ForeignKey("categories.id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=True,
            index=True,
        ),
    )

    image_principale: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    images: List[Optional[str]] = Field(default_factory=list, sa_column=Column(JSON, nullable=True))
    caracteristiques: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=True))

    reference: Optional[str] = Field(default=None, max_length=50, description="Référence produit")

    is_active: bool = Field(default=True)
    is_available: bool = Field(default=True)
    featured: bool = Field(default=False)
