from typing import Optional
from pydantic import BaseModel, Field

from app.db.models.users import UserRole

# ---------- Inputs ----------
# Champs optionnels : la présence est contrôlée par le service (message dédié)

class LoginIn(BaseModel):
    email: Optional[str] = Field(None, examples=["admin@cliiink-reunion.re"])
    password: Optional[str] = None

class RegisterIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = Field(None, max_length=128)
    name: Optional[str] = None
    role: UserRole = UserRole.EDITOR

class ChangePasswordIn(BaseModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = Field(None, max_length=128)


# ---------- Outputs ----------

class UserOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: UserRole

    model_config = {"from_attributes": True}

class LoginOut(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int  # secondes
    user: UserOut
