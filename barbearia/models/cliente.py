from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from barbearia.database import Base


class Cliente(Base):
    __tablename__ = "clientes"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(100), nullable=False, index=True)
    email = Column(String(120), nullable=True)
    telefone = Column(String(20), nullable=True, index=True)
    data_nascimento = Column(Date, nullable=True)
    observacoes = Column(Text, nullable=True)
    avatar_url = Column(String(255), nullable=True)
    criado_em = Column(DateTime, default=datetime.utcnow)

    barbearia_id = Column(Integer, ForeignKey("barbearias.id"), nullable=False, index=True)

    agendamentos = relationship("Agendamento", back_populates="cliente")
