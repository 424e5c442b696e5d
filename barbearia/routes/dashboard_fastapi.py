# -*- coding: utf-8 -*-
"""
Indicadores do painel inicial, calculados sobre os últimos `dias` dias.
"""
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from barbearia import auth
from barbearia.cache import CacheStore, chave_cache, get_cache
from barbearia.database import get_db
from barbearia.models.cliente import Cliente
from barbearia.services import consultas, relatorios

router = APIRouter(tags=["Dashboard"])

TAGS_DASHBOARD = ("vendas", "agendamentos", "clientes", "servicos", "equipe")


def montar_dashboard(db: Session, barbearia_id: int, dias: int) -> dict:
    inicio = (datetime.utcnow() - timedelta(days=dias - 1)).date()

    vendas = consultas.buscar_vendas(db, barbearia_id, data_inicio=inicio)
    agendamentos = consultas.buscar_agendamentos(db, barbearia_id, data_inicio=inicio)
    itens = consultas.buscar_itens_vendidos(db, barbearia_id, data_inicio=inicio)
    total_clientes = (
        db.query(func.count(Cliente.id)).filter(Cliente.barbearia_id == barbearia_id).scalar() or 0
    )
    concluidos = [a for a in agendamentos if a["status"] == "concluido"]

    return {
        "periodo": {"dias": dias, "inicio": inicio.isoformat()},
        "kpis": relatorios.kpis(total_clientes, len(agendamentos), vendas),
        "receita_diaria": relatorios.receita_diaria(vendas),
        "agendamentos_por_status": relatorios.agendamentos_por_status(agendamentos),
        "top_servicos": relatorios.top_servicos(itens),
        "desempenho_profissionais": relatorios.desempenho_profissionais(vendas, concluidos),
    }


@router.get("")
def get_dashboard(
    dias: int = Query(30, ge=1, le=366),
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("relatorios:ler")),
    cache: CacheStore = Depends(get_cache),
):
    chave = chave_cache("dashboard", sessao.barbearia_id, dias, datetime.utcnow().date())
    return cache.obter_ou_calcular(chave, TAGS_DASHBOARD, lambda: montar_dashboard(db, sessao.barbearia_id, dias))
