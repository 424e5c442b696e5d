# -*- coding: utf-8 -*-
"""
Schemas Pydantic para Serviços e Produtos.
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field

TipoServico = Literal["servico", "produto"]


class ServicoBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    descricao: Optional[str] = Field(None, max_length=255)
    preco: float = Field(..., ge=0)
    duracao: Optional[int] = Field(None, gt=0)
    estoque: Optional[int] = Field(None, ge=0)
    tipo: TipoServico = "servico"
    ativo: bool = True


class ServicoCreate(ServicoBase):
    pass


class ServicoUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    descricao: Optional[str] = Field(None, max_length=255)
    preco: Optional[float] = Field(None, ge=0)
    duracao: Optional[int] = Field(None, gt=0)
    estoque: Optional[int] = Field(None, ge=0)
    tipo: Optional[TipoServico] = None
    ativo: Optional[bool] = None


class ServicoRead(ServicoBase):
    id: int

    class Config:
        from_attributes = True
