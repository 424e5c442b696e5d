# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Agendamento.
"""
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

StatusAgendamento = Literal["agendado", "confirmado", "em_andamento", "concluido", "cancelado"]

HORARIO_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class AgendamentoBase(BaseModel):
    cliente_id: int
    profissional_id: int
    servico_id: int
    data_agendada: date
    horario: str = Field(..., pattern=HORARIO_PATTERN)
    observacoes: Optional[str] = None


class AgendamentoCreate(AgendamentoBase):
    pass


class AgendamentoUpdate(BaseModel):
    cliente_id: Optional[int] = None
    profissional_id: Optional[int] = None
    servico_id: Optional[int] = None
    data_agendada: Optional[date] = None
    horario: Optional[str] = Field(None, pattern=HORARIO_PATTERN)
    observacoes: Optional[str] = None


class AgendamentoStatusUpdate(BaseModel):
    status: StatusAgendamento


class AgendamentoRead(AgendamentoBase):
    id: int
    status: StatusAgendamento
    pago: bool
    criado_em: Optional[datetime] = None

    class Config:
        from_attributes = True


class AgendamentoPublicoCreate(BaseModel):
    """Agendamento feito pelo cliente final na página pública da barbearia."""
    cliente_nome: str = Field(..., min_length=1, max_length=100)
    cliente_telefone: str = Field(..., min_length=8, max_length=20)
    profissional_id: int
    servico_id: int
    data_agendada: date
    horario: str = Field(..., pattern=HORARIO_PATTERN)
    observacoes: Optional[str] = None
