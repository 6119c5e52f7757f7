from typing import Optional
from uuid import UUID

from sqlalchemy import Column, ForeignKey, Index, Uuid
from sqlmodel import Field

from .base import BaseModelDB, live_index_kwargs


class Category(BaseModelDB, table=True):
    """Sous-catégories rattachées à une catégorie principale (SiteCategory)."""

    __tablename__ = "categories"
    __table_args__ = (
        Index(
            "uq_categories_libelle_site_category",
            "libelle",
            "site_category_id",
            unique=True,
            **live_index_kwargs(),
        ),
    )

    libelle: str = Field(min_length=2, max_length=100, description="Libellé de la sous-catégorie")
    description: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True, index=True)

    # FK obligatoire vers SiteCategory
    site_category_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("site_categories.id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Catégorie principale",
    )
