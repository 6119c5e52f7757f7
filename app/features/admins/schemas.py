"""
➡️ But : Définir les formats d’entrée/sortie de l’API (couche validation) pour les administrateurs.

AdminCreateIn → corps de requête POST
AdminUpdateIn → corps PUT (champs optionnels)
AdminOut → réponse de l’API

🔹 Le hash du mot de passe n'est jamais exposé.
"""

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, StringConstraints

Login = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
Password = Annotated[str, StringConstraints(min_length=6, max_length=128)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]


class AdminCreateIn(BaseModel):
    login: Login = Field(..., examples=["admin"])
    password: Password
    nom: Optional[Name] = None
    prenom: Optional[Name] = None
    email: Optional[EmailStr] = None
    is_active: bool = True


class AdminUpdateIn(BaseModel):
    login: Optional[Login] = None
    password: Optional[Password] = None
    nom: Optional[Name] = None
    prenom: Optional[Name] = None
    email: Optional[EmailStr] = None
    is_active: Optional[bool] = None


class AdminOut(BaseModel):
    id: UUID
    login: str
    nom: Optional[str]
    prenom: Optional[str]
    email: Optional[str]
    is_active: bool
    last_login: Optional[datetime]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
