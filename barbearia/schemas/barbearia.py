# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Barbearia.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from barbearia.schemas.servico import ServicoRead
from barbearia.schemas.usuario import ProfissionalPublico


class BarbeariaBase(BaseModel):
    nome: str = Field(..., min_length=2, max_length=100)
    cidade: str = Field(..., min_length=2, max_length=100)
    estado: str = Field(..., min_length=2, max_length=2)
    telefone: Optional[str] = Field(None, max_length=20)
    logo_url: Optional[str] = Field(None, max_length=255)


class BarbeariaCreate(BarbeariaBase):
    pass


class BarbeariaUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=2, max_length=100)
    cidade: Optional[str] = Field(None, min_length=2, max_length=100)
    estado: Optional[str] = Field(None, min_length=2, max_length=2)
    telefone: Optional[str] = Field(None, max_length=20)
    logo_url: Optional[str] = Field(None, max_length=255)
    ativa: Optional[bool] = None


class BarbeariaRead(BarbeariaBase):
    id: int
    slug: Optional[str] = None
    ativa: bool

    class Config:
        from_attributes = True


class BarbeariaDetalhes(BarbeariaRead):
    """Página pública: a barbearia, seus profissionais e serviços ativos."""
    profissionais: List[ProfissionalPublico] = []
    servicos: List[ServicoRead] = []
