# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Agendamento.
"""
from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from barbearia.database import Base

STATUS_AGENDAMENTO = ("agendado", "confirmado", "em_andamento", "concluido", "cancelado")

STATUS_LABELS = {
    "agendado": "Agendado",
    "confirmado": "Confirmado",
    "em_andamento": "Em Andamento",
    "concluido": "Concluído",
    "cancelado": "Cancelado",
}


class Agendamento(Base):
    __tablename__ = "agendamentos"

    id = Column(Integer, primary_key=True, index=True)
    cliente_id = Column(Integer, ForeignKey("clientes.id"), nullable=False, index=True)
    profissional_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    servico_id = Column(Integer, ForeignKey("servicos.id"), nullable=False)
    data_agendada = Column(Date, nullable=False, index=True)
    horario = Column(String(5), nullable=False)  # "HH:MM"
    status = Column(String(20), nullable=False, default="agendado")
    pago = Column(Boolean, default=False, nullable=False)
    observacoes = Column(Text, nullable=True)
    criado_em = Column(DateTime, default=datetime.utcnow)
    atualizado_em = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    barbearia_id = Column(Integer, ForeignKey("barbearias.id"), nullable=False, index=True)

    cliente = relationship("Cliente", back_populates="agendamentos")
    profissional = relationship("Usuario")
    servico = relationship("Servico")
