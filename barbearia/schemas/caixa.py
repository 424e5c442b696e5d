from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

TipoTransacao = Literal["entrada", "saida"]


class TransacaoCaixaBase(BaseModel):
    tipo: TipoTransacao
    valor: float = Field(..., gt=0)
    descricao: str = Field(..., min_length=1, max_length=255)
    categoria: Optional[str] = Field(None, max_length=50)


class TransacaoCaixaCreate(TransacaoCaixaBase):
    pass


class TransacaoCaixaUpdate(BaseModel):
    tipo: Optional[TipoTransacao] = None
    valor: Optional[float] = Field(None, gt=0)
    descricao: Optional[str] = Field(None, min_length=1, max_length=255)
    categoria: Optional[str] = Field(None, max_length=50)


class TransacaoCaixaRead(TransacaoCaixaBase):
    id: int
    criado_em: datetime

    class Config:
        from_attributes = True
