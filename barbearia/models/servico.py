# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para Serviços e Produtos (mesma tabela, discriminada por 'tipo').
"""
from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from barbearia.database import Base

TIPOS_SERVICO = ("servico", "produto")


class Servico(Base):
    __tablename__ = "servicos"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(100), nullable=False)
    descricao = Column(String(255), nullable=True)
    preco = Column(Float, nullable=False)
    duracao = Column(Integer, nullable=True)  # minutos, apenas serviços
    estoque = Column(Integer, nullable=True)  # apenas produtos; None = não controlado
    tipo = Column(String(20), nullable=False, default="servico")
    ativo = Column(Boolean, default=True, nullable=False)

    barbearia_id = Column(Integer, ForeignKey("barbearias.id"), nullable=False, index=True)
    barbearia = relationship("Barbearia", back_populates="servicos")
