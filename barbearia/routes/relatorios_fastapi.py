# -*- coding: utf-8 -*-
"""
Rotas de relatórios gerenciais e exportação em CSV.

Todos aceitam os filtros opcionais data_inicio, data_fim e profissional_id.
Os resultados ficam em cache por barbearia + filtros até uma mutação
invalidar uma das tabelas de que dependem.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from barbearia import auth
from barbearia.cache import CacheStore, chave_cache, get_cache
from barbearia.config import ESTOQUE_BAIXO_LIMITE
from barbearia.database import get_db
from barbearia.services import consultas, exportacao, relatorios

router = APIRouter(tags=["Relatórios"])

# relatório -> tabelas de que depende
TAGS = {
    "financeiro": ("vendas", "clientes", "equipe"),
    "agendamentos": ("agendamentos", "clientes", "servicos", "equipe"),
    "clientes": ("clientes", "agendamentos"),
    "produtos-servicos": ("vendas", "servicos"),
    "estoque": ("servicos",),
}


@dataclass
class Filtros:
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    profissional_id: Optional[int] = None

    @property
    def ativo(self) -> bool:
        return any((self.data_inicio, self.data_fim, self.profissional_id))

    def como_kwargs(self) -> dict:
        return {
            "data_inicio": self.data_inicio,
            "data_fim": self.data_fim,
            "profissional_id": self.profissional_id,
        }


def _financeiro(db, barbearia_id, filtros):
    return relatorios.relatorio_financeiro(consultas.buscar_vendas(db, barbearia_id, **filtros.como_kwargs()))


def _agendamentos(db, barbearia_id, filtros):
    return relatorios.relatorio_agendamentos(consultas.buscar_agendamentos(db, barbearia_id, **filtros.como_kwargs()))


def _clientes(db, barbearia_id, filtros):
    return relatorios.relatorio_clientes(
        consultas.buscar_clientes(db, barbearia_id),
        consultas.buscar_agendamentos(db, barbearia_id, **filtros.como_kwargs()),
        filtrado=filtros.ativo,
    )


def _produtos_servicos(db, barbearia_id, filtros):
    return relatorios.relatorio_produtos_servicos(
        consultas.buscar_itens_vendidos(db, barbearia_id, **filtros.como_kwargs())
    )


def _estoque(db, barbearia_id, filtros):
    # estoque é uma fotografia atual; período e profissional não se aplicam
    return relatorios.relatorio_estoque(consultas.buscar_produtos(db, barbearia_id), ESTOQUE_BAIXO_LIMITE)


GERADORES = {
    "financeiro": _financeiro,
    "agendamentos": _agendamentos,
    "clientes": _clientes,
    "produtos-servicos": _produtos_servicos,
    "estoque": _estoque,
}


def gerar_relatorio(tipo: str, db: Session, barbearia_id: int, filtros: Filtros, cache: CacheStore) -> dict:
    gerador = GERADORES.get(tipo)
    if gerador is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Relatório não encontrado")
    chave = chave_cache("relatorio", tipo, barbearia_id, filtros.data_inicio, filtros.data_fim, filtros.profissional_id)
    return cache.obter_ou_calcular(chave, TAGS[tipo], lambda: gerador(db, barbearia_id, filtros))


def linhas_csv(tipo: str, relatorio: dict) -> list:
    """Linhas exportadas de cada relatório, com os rótulos legíveis."""
    if tipo == "financeiro":
        return [
            {**v, "forma_pagamento": relatorios.rotulo_forma_pagamento(v["forma_pagamento"])}
            for v in relatorio["vendas"]
        ]
    if tipo == "agendamentos":
        return [{**a, "status_label": relatorios.rotulo_status(a["status"])} for a in relatorio["agendamentos"]]
    if tipo == "clientes":
        return [{**c, "ativo_label": "Sim" if c["ativo"] else "Não"} for c in relatorio["clientes"]]
    if tipo == "produtos-servicos":
        return relatorio["itens"]
    return relatorio["produtos"]


@router.get("/financeiro")
def relatorio_financeiro(
    filtros: Filtros = Depends(),
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("relatorios:ler")),
    cache: CacheStore = Depends(get_cache),
):
    return gerar_relatorio("financeiro", db, sessao.barbearia_id, filtros, cache)


@router.get("/agendamentos")
def relatorio_agendamentos(
    filtros: Filtros = Depends(),
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("relatorios:ler")),
    cache: CacheStore = Depends(get_cache),
):
    return gerar_relatorio("agendamentos", db, sessao.barbearia_id, filtros, cache)


@router.get("/clientes")
def relatorio_clientes(
    filtros: Filtros = Depends(),
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("relatorios:ler")),
    cache: CacheStore = Depends(get_cache),
):
    return gerar_relatorio("clientes", db, sessao.barbearia_id, filtros, cache)


@router.get("/produtos-servicos")
def relatorio_produtos_servicos(
    filtros: Filtros = Depends(),
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("relatorios:ler")),
    cache: CacheStore = Depends(get_cache),
):
    return gerar_relatorio("produtos-servicos", db, sessao.barbearia_id, filtros, cache)


@router.get("/estoque")
def relatorio_estoque(
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("relatorios:ler")),
    cache: CacheStore = Depends(get_cache),
):
    return gerar_relatorio("estoque", db, sessao.barbearia_id, Filtros(), cache)


@router.get("/{tipo}/csv")
def exportar_csv(
    tipo: str,
    filtros: Filtros = Depends(),
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("relatorios:ler")),
    cache: CacheStore = Depends(get_cache),
):
    relatorio = gerar_relatorio(tipo, db, sessao.barbearia_id, filtros, cache)
    conteudo = exportacao.para_csv(linhas_csv(tipo, relatorio), exportacao.COLUNAS[tipo])
    return Response(
        content=conteudo,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{exportacao.nome_arquivo(tipo)}"'},
    )
