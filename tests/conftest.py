import os

# Precisa vir antes de importar a aplicação: config.py lê o ambiente na importação
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CRIAR_ADMIN_INICIAL"] = "false"
os.environ["SECRET_KEY"] = "chave-de-teste"
os.environ["LOG_LEVEL"] = "WARNING"

import fakeredis
import pytest
from fastapi.testclient import TestClient

from barbearia import auth
from barbearia.cache import cache
from barbearia.database import Base, SessionLocal, engine
from barbearia.models.barbearia import Barbearia
from barbearia.models.cliente import Cliente
from barbearia.models.servico import Servico
from barbearia.models.usuario import Usuario
from barbearia.services.provedor_pagamento import (
    STATUS_PAGO,
    SessaoCheckout,
    SessaoNaoEncontrada,
    get_provedor_pagamento,
)
from main import app

SENHA = "senha123"


class FakeProvedor:
    """Provedor de pagamento em memória com a mesma interface do Mercado Pago."""

    def __init__(self):
        self.sessoes = {}
        self.criadas = []

    def criar_sessao(self, itens, url_sucesso, url_cancelamento, metadados, email_cliente=None):
        sessao_id = f"pref_{len(self.sessoes) + 1}"
        sessao = SessaoCheckout(
            id=sessao_id,
            url=f"https://checkout.exemplo/{sessao_id}",
            valor_total=sum(i.valor_unitario_centavos * i.quantidade for i in itens),
            metadados=dict(metadados),
        )
        self.sessoes[sessao_id] = sessao
        self.criadas.append({"itens": itens, "url_sucesso": url_sucesso, "url_cancelamento": url_cancelamento})
        return sessao

    def recuperar_sessao(self, sessao_id):
        if sessao_id not in self.sessoes:
            raise SessaoNaoEncontrada(sessao_id)
        return self.sessoes[sessao_id]

    def pagar(self, sessao_id):
        self.sessoes[sessao_id].status_pagamento = STATUS_PAGO


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    cache.cliente = fakeredis.FakeRedis(decode_responses=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def provedor():
    return FakeProvedor()


@pytest.fixture
def client(db, provedor):
    app.dependency_overrides[get_provedor_pagamento] = lambda: provedor
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def criar_usuario(db, email, role="admin", barbearia_id=None, confirmado=True, ativo=True):
    usuario = Usuario(
        email=email,
        nome=email.split("@")[0].title(),
        hashed_password=auth.get_password_hash(SENHA),
        role=role,
        email_confirmado=confirmado,
        ativo=ativo,
        barbearia_id=barbearia_id,
    )
    db.add(usuario)
    db.commit()
    db.refresh(usuario)
    return usuario


def login(client, email, senha=SENHA):
    resposta = client.post("/api/v1/auth/token", data={"username": email, "password": senha})
    assert resposta.status_code == 200, resposta.text
    return {"Authorization": f"Bearer {resposta.json()['access_token']}"}


@pytest.fixture
def barbearia(db):
    b = Barbearia(nome="Barbearia do Zé", cidade="Recife", estado="PE", slug="barbearia-do-ze")
    db.add(b)
    db.commit()
    db.refresh(b)
    return b


@pytest.fixture
def admin(db, barbearia):
    return criar_usuario(db, "admin@ze.com.br", role="admin", barbearia_id=barbearia.id)


@pytest.fixture
def profissional(db, barbearia):
    return criar_usuario(db, "joao@ze.com.br", role="profissional", barbearia_id=barbearia.id)


@pytest.fixture
def headers_admin(client, admin):
    return login(client, admin.email)


@pytest.fixture
def headers_profissional(client, profissional):
    return login(client, profissional.email)


@pytest.fixture
def cliente(db, barbearia):
    c = Cliente(nome="Carlos Souza", telefone="81999990000", email="carlos@cliente.com", barbearia_id=barbearia.id)
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


@pytest.fixture
def corte(db, barbearia):
    s = Servico(nome="Corte", preco=50.0, duracao=30, tipo="servico", barbearia_id=barbearia.id)
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@pytest.fixture
def pomada(db, barbearia):
    p = Servico(nome="Pomada", preco=30.0, estoque=3, tipo="produto", barbearia_id=barbearia.id)
    db.add(p)
    db.commit()
    db.refresh(p)
    return p
