from pydantic import BaseModel, Field

from app.features.admins.schemas import AdminOut

# ---------- Inputs ----------

class LoginIn(BaseModel):
    login: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)


# ---------- Outputs ----------

class LoginOut(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int  # secondes
    admin: AdminOut
