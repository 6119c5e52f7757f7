from typing import Optional
from sqlalchemy import Index
from sqlmodel import Field

from .base import BaseModelDB, live_index_kwargs


class SiteCategory(BaseModelDB, table=True):
    """Grandes catégories du site : Electromenagers, Telephones, Mobiliers, Accessoires."""

    __tablename__ = "site_categories"
    __table_args__ = (
        Index("uq_site_categories_libelle", "libelle", unique=True, **live_index_kwargs()),
    )

    libelle: str = Field(min_length=2, max_length=100, description="Libellé de la catégorie principale")
    description: Optional[str] = Field(default=None, description="Description")
    is_active: bool = Field(default=True, index=True, description="Catégorie visible sur le site")
