# -*- coding: utf-8 -*-
"""
Schemas Pydantic do fluxo de checkout.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from barbearia.schemas.agendamento import HORARIO_PATTERN, AgendamentoRead


class CheckoutCreate(BaseModel):
    """Rascunho do agendamento a ser pago. Nada é gravado antes da confirmação."""
    cliente_id: int
    profissional_id: int
    servico_id: int
    data_agendada: date
    horario: str = Field(..., pattern=HORARIO_PATTERN)
    observacoes: Optional[str] = None


class CheckoutRead(BaseModel):
    sessao_id: str
    url: str
    valor: float


class ConfirmacaoCreate(BaseModel):
    sessao_id: str = Field(..., min_length=1)


class ConfirmacaoRead(BaseModel):
    sucesso: bool
    mensagem: str
    agendamento: Optional[AgendamentoRead] = None
