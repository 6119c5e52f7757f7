"""
➡️ But : Définir la structure des tables de la base (ORM).

Représente les comptes administrateurs. Le mot de passe n'est stocké que sous forme de hash bcrypt
et n'est jamais exposé par les schémas de sortie.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import Index
from sqlmodel import Field

from .base import BaseModelDB, live_index_kwargs


class Admin(BaseModelDB, table=True):
    __tablename__ = "admins"
    __table_args__ = (
        Index("uq_admins_login", "login", unique=True, **live_index_kwargs()),
    )

    login: str = Field(min_length=3, max_length=100)
    hashed_password: str = Field(max_length=255)
    nom: Optional[str] = Field(default=None, max_length=100)
    prenom: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255, index=True)
    is_active: bool = Field(default=True, index=True)
    last_login: Optional[datetime] = Field(default=None)
