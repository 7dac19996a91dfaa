from enum import Enum
from pydantic import BaseModel
from typing import Optional

class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"

class AuthUser(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: UserRole = UserRole.USER

class TokenData(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: UserRole = UserRole.USER
    exp: Optional[float] = None
