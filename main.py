# -*- coding: utf-8 -*-
"""
Arquivo principal da aplicação FastAPI para o sistema de gestão de barbearias.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import create_first_user
from barbearia.config import CRIAR_ADMIN_INICIAL, ENVIRONMENT, FRONTEND_URL, LOG_FILE, LOG_LEVEL
from barbearia.database import Base, engine
from barbearia.models import agendamento, barbearia, caixa, cliente, pagamento, servico, usuario, venda  # noqa: F401
from barbearia.routes import (
    agendamentos_fastapi,
    auth_fastapi,
    barbearias_fastapi,
    caixa_fastapi,
    clientes_fastapi,
    dashboard_fastapi,
    equipe_fastapi,
    pagamentos_fastapi,
    publico_fastapi,
    relatorios_fastapi,
    servicos_fastapi,
    vendas_fastapi,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=LOG_FILE or None,
)

# Cria as tabelas no banco de dados
Base.metadata.create_all(bind=engine)

em_producao = ENVIRONMENT == "production"

app = FastAPI(
    title="API Barbearia",
    description="API para gestão de barbearias: agenda, clientes, vendas, caixa e relatórios",
    version="1.0.0",
    docs_url=None if em_producao else "/docs",
    redoc_url=None if em_producao else "/redoc",
    openapi_url=None if em_producao else "/openapi.json",
)

origins = [
    FRONTEND_URL,
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Montagem dos routers
app.include_router(auth_fastapi.router)
app.include_router(barbearias_fastapi.router, prefix="/api/v1/barbearias")
app.include_router(publico_fastapi.router, prefix="/api/v1/publico")
app.include_router(clientes_fastapi.router, prefix="/api/v1/clientes")
app.include_router(servicos_fastapi.router, prefix="/api/v1/servicos")
app.include_router(equipe_fastapi.router, prefix="/api/v1/equipe")
app.include_router(agendamentos_fastapi.router, prefix="/api/v1/agendamentos")
app.include_router(vendas_fastapi.router, prefix="/api/v1/vendas")
app.include_router(caixa_fastapi.router, prefix="/api/v1/caixa")
app.include_router(pagamentos_fastapi.router, prefix="/api/v1/pagamentos")
app.include_router(relatorios_fastapi.router, prefix="/api/v1/relatorios")
app.include_router(dashboard_fastapi.router, prefix="/api/v1/dashboard")

if CRIAR_ADMIN_INICIAL:
    create_first_user.create_first_user()


@app.get("/", tags=["Root"])
async def root():
    return {
        "mensagem": "API Barbearia - Sistema de Gestão",
        "documentacao": None if em_producao else "/docs",
        "endpoints": [
            {"auth": "/api/v1/auth"},
            {"barbearias": "/api/v1/barbearias"},
            {"publico": "/api/v1/publico/barbearias"},
            {"clientes": "/api/v1/clientes"},
            {"servicos": "/api/v1/servicos"},
            {"equipe": "/api/v1/equipe"},
            {"agendamentos": "/api/v1/agendamentos"},
            {"vendas": "/api/v1/vendas"},
            {"caixa": "/api/v1/caixa"},
            {"pagamentos": "/api/v1/pagamentos"},
            {"relatorios": "/api/v1/relatorios"},
            {"dashboard": "/api/v1/dashboard"},
        ]
    }
