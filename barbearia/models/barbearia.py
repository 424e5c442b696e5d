# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Barbearia (o tenant do sistema).
"""
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from barbearia.database import Base


class Barbearia(Base):
    __tablename__ = "barbearias"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(100), nullable=False, index=True)
    cidade = Column(String(100), nullable=False)
    estado = Column(String(2), nullable=False)
    telefone = Column(String(20), nullable=True)
    logo_url = Column(String(255), nullable=True)
    slug = Column(String(120), unique=True, nullable=True)
    ativa = Column(Boolean, default=True, nullable=False)
    criada_por = Column(Integer, nullable=True)  # id do Usuario que criou
    criado_em = Column(DateTime, default=datetime.utcnow)

    equipe = relationship("Usuario", back_populates="barbearia")
    servicos = relationship("Servico", back_populates="barbearia")
