from typing import Optional
from uuid import UUID

from sqlalchemy import Column, ForeignKey, Index, Uuid
from sqlmodel import Field

from .base import BaseModelDB, live_index_kwargs


class Marque(BaseModelDB, table=True):
    """Marques de produits, rattachées à une catégorie principale."""

    __tablename__ = "marques"
    __table_args__ = (
        Index(
            "uq_marques_libelle_site_category",
            "libelle",
            "site_category_id",
            unique=True,
            **live_index_kwargs(),
        ),
    )

    libelle: str = Field(min_length=2, max_length=100, description="Libellé de la marque")
    description: Optional[str] = Field(default=None)
    logo: Optional[str] = Field(default=None, max_length=255, description="Chemin ou URL du logo")
    is_active: bool = Field(default=True, index=True)

    site_category_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("site_categories.id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Catégorie principale",
    )
