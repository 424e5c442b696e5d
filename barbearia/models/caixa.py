# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para as transações manuais do caixa (entradas e saídas).
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String

from barbearia.database import Base

TIPOS_TRANSACAO = ("entrada", "saida")


class TransacaoCaixa(Base):
    __tablename__ = "transacoes_caixa"

    id = Column(Integer, primary_key=True, index=True)
    tipo = Column(String(10), nullable=False)  # 'entrada' ou 'saida'
    valor = Column(Float, nullable=False)
    categoria = Column(String(50), nullable=True)
    descricao = Column(String(255), nullable=False)
    criado_em = Column(DateTime, default=datetime.utcnow, index=True)

    barbearia_id = Column(Integer, ForeignKey("barbearias.id"), nullable=False, index=True)
