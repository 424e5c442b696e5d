from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

FormaPagamento = Literal["dinheiro", "cartao_debito", "cartao_credito", "pix", "transferencia"]


class ItemVendaCreate(BaseModel):
    servico_id: int
    quantidade: int = Field(1, ge=1)


class VendaCreate(BaseModel):
    profissional_id: int
    forma_pagamento: FormaPagamento
    cliente_id: Optional[int] = None
    agendamento_id: Optional[int] = None
    observacoes: Optional[str] = None
    itens: List[ItemVendaCreate] = []


class ItemVendaRead(BaseModel):
    id: int
    servico_id: int
    nome_servico: str
    quantidade: int
    valor_unitario: float
    valor_total: float

    class Config:
        from_attributes = True


class VendaRead(BaseModel):
    id: int
    profissional_id: int
    forma_pagamento: FormaPagamento
    cliente_id: Optional[int] = None
    agendamento_id: Optional[int] = None
    observacoes: Optional[str] = None
    valor_total: float
    data_pagamento: datetime
    itens: List[ItemVendaRead] = []

    class Config:
        from_attributes = True
