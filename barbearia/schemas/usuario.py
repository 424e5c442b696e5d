from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

Role = Literal["admin", "recepcionista", "profissional"]


class UsuarioBase(BaseModel):
    email: EmailStr
    nome: str = Field(..., min_length=2, max_length=100)
    role: Role = "profissional"
    telefone: Optional[str] = Field(None, max_length=20)
    especialidades: Optional[str] = Field(None, max_length=255)


class UsuarioCreate(UsuarioBase):
    password: str = Field(..., min_length=6)


class UsuarioUpdate(BaseModel):
    email: Optional[EmailStr] = None
    nome: Optional[str] = Field(None, min_length=2, max_length=100)
    role: Optional[Role] = None
    telefone: Optional[str] = Field(None, max_length=20)
    especialidades: Optional[str] = Field(None, max_length=255)
    ativo: Optional[bool] = None
    password: Optional[str] = Field(None, min_length=6)


class UsuarioRead(UsuarioBase):
    id: int
    ativo: bool
    email_confirmado: bool
    avatar_url: Optional[str] = None
    barbearia_id: Optional[int] = None
    criado_em: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfissionalPublico(BaseModel):
    id: int
    nome: str
    especialidades: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


# --- CADASTRO E LOGIN ---
class Cadastro(BaseModel):
    email: EmailStr
    senha: str = Field(..., min_length=6)
    nome: str = Field(..., min_length=2, max_length=100)


class ReenvioConfirmacao(BaseModel):
    email: EmailStr


class Token(BaseModel):
    access_token: str
    token_type: str
    user_info: UsuarioRead
