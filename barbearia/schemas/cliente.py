from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, validator


class ClienteBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    telefone: Optional[str] = Field(None, max_length=20)
    data_nascimento: Optional[date] = None
    observacoes: Optional[str] = None

    @validator("email", "telefone", pre=True)
    def vazio_para_none(cls, v):
        """Formulários mandam string vazia para campos não preenchidos."""
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


class ClienteCreate(ClienteBase):
    pass


class ClienteUpdate(ClienteBase):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)


class ClienteRead(ClienteBase):
    id: int
    avatar_url: Optional[str] = None
    criado_em: Optional[datetime] = None

    class Config:
        from_attributes = True
