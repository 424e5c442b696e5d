from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from barbearia.database import Base


class Pagamento(Base):
    __tablename__ = "pagamentos"

    id = Column(Integer, primary_key=True, index=True)
    cliente_id = Column(Integer, ForeignKey("clientes.id"), nullable=True)
    agendamento_id = Column(Integer, ForeignKey("agendamentos.id"), nullable=True)
    valor = Column(Float, nullable=False)
    metodo = Column(String(30), nullable=False, default="mercadopago")
    status = Column(String(20), nullable=False, default="pendente")
    # Uma sessão de checkout confirma no máximo um agendamento
    sessao_checkout_id = Column(String(120), unique=True, nullable=True, index=True)
    criado_em = Column(DateTime, default=datetime.utcnow)

    agendamento = relationship("Agendamento")
