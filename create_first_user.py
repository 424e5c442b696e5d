import logging

from sqlalchemy.exc import SQLAlchemyError

from barbearia.auth import get_password_hash
from barbearia.config import ADMIN_EMAIL, ADMIN_SENHA
from barbearia.database import Base, SessionLocal, engine
from barbearia.models.usuario import Usuario

# Importação dos outros modelos para garantir que o SQLAlchemy registre tudo
from barbearia.models.agendamento import Agendamento  # noqa: F401
from barbearia.models.barbearia import Barbearia  # noqa: F401
from barbearia.models.caixa import TransacaoCaixa  # noqa: F401
from barbearia.models.cliente import Cliente  # noqa: F401
from barbearia.models.pagamento import Pagamento  # noqa: F401
from barbearia.models.servico import Servico  # noqa: F401
from barbearia.models.venda import ItemVenda, Venda  # noqa: F401


def create_first_user():
    """
    Cria o administrador inicial, já confirmado e ainda sem barbearia.
    No primeiro login ele cadastra a barbearia em POST /api/v1/barbearias.
    """
    db = SessionLocal()

    try:
        user = db.query(Usuario).filter(Usuario.email == ADMIN_EMAIL).first()

        if not user:
            logging.info("Criando primeiro usuário administrador...")
            db_user = Usuario(
                email=ADMIN_EMAIL,
                nome="Administrador",
                hashed_password=get_password_hash(ADMIN_SENHA),
                role="admin",
                email_confirmado=True,
            )
            db.add(db_user)
            db.commit()
            logging.info(f"Usuário administrador criado: {ADMIN_EMAIL}")
        else:
            logging.info(f"Usuário administrador '{ADMIN_EMAIL}' já existe.")

    except SQLAlchemyError as e:
        logging.error(f"Erro ao criar usuário administrador: {e}")
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    create_first_user()
