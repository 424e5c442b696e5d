from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from barbearia.database import Base

ROLES = ("admin", "recepcionista", "profissional")


class Usuario(Base):
    """Perfil de um membro da equipe. É também a conta de login."""

    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(120), unique=True, index=True, nullable=False)
    nome = Column(String(100), nullable=False)
    hashed_password = Column(String, nullable=True)
    role = Column(String(20), nullable=False, default="profissional")
    ativo = Column(Boolean, default=True, nullable=False)
    email_confirmado = Column(Boolean, default=False, nullable=False)
    telefone = Column(String(20), nullable=True)
    especialidades = Column(String(255), nullable=True)  # separadas por vírgula
    avatar_url = Column(String(255), nullable=True)
    criado_em = Column(DateTime, default=datetime.utcnow)

    barbearia_id = Column(Integer, ForeignKey("barbearias.id"), nullable=True, index=True)
    barbearia = relationship("Barbearia", back_populates="equipe")
