# -*- coding: utf-8 -*-
"""
Modelos SQLAlchemy para Venda e seus itens.
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from barbearia.database import Base

FORMAS_PAGAMENTO = ("dinheiro", "cartao_debito", "cartao_credito", "pix", "transferencia")

FORMA_PAGAMENTO_LABELS = {
    "cartao_credito": "Cartão Créd.",
    "cartao_debito": "Cartão Déb.",
    "pix": "PIX",
    "dinheiro": "Dinheiro",
    "transferencia": "Transferência",
}


class Venda(Base):
    __tablename__ = "vendas"

    id = Column(Integer, primary_key=True, index=True)
    cliente_id = Column(Integer, ForeignKey("clientes.id"), nullable=True)
    profissional_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    agendamento_id = Column(Integer, ForeignKey("agendamentos.id"), nullable=True)
    forma_pagamento = Column(String(20), nullable=False)
    valor_total = Column(Float, nullable=False)
    observacoes = Column(Text, nullable=True)
    data_pagamento = Column(DateTime, default=datetime.utcnow, index=True)

    barbearia_id = Column(Integer, ForeignKey("barbearias.id"), nullable=False, index=True)

    cliente = relationship("Cliente")
    profissional = relationship("Usuario")
    itens = relationship("ItemVenda", back_populates="venda", cascade="all, delete-orphan")


class ItemVenda(Base):
    __tablename__ = "itens_venda"

    id = Column(Integer, primary_key=True, index=True)
    venda_id = Column(Integer, ForeignKey("vendas.id"), nullable=False, index=True)
    servico_id = Column(Integer, ForeignKey("servicos.id"), nullable=False)
    nome_servico = Column(String(100), nullable=False)
    quantidade = Column(Integer, nullable=False, default=1)
    valor_unitario = Column(Float, nullable=False)
    valor_total = Column(Float, nullable=False)

    venda = relationship("Venda", back_populates="itens")
    servico = relationship("Servico")
