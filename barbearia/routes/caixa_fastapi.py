# -*- coding: utf-8 -*-
"""
Rotas do caixa: lançamentos manuais de entrada/saída, resumo e fluxo diário.
"""
from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from barbearia import auth
from barbearia.cache import get_cache
from barbearia.database import get_db
from barbearia.models.caixa import TransacaoCaixa
from barbearia.schemas.caixa import TipoTransacao, TransacaoCaixaCreate, TransacaoCaixaRead, TransacaoCaixaUpdate
from barbearia.services import consultas, relatorios

router = APIRouter(
    tags=["Caixa"],
    responses={404: {"description": "Transação não encontrada"}},
)


def get_transacao(db: Session, sessao: auth.Sessao, transacao_id: int) -> TransacaoCaixa:
    transacao = db.query(TransacaoCaixa).filter(
        TransacaoCaixa.id == transacao_id,
        TransacaoCaixa.barbearia_id == sessao.barbearia_id,
    ).first()
    if transacao is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transação não encontrada")
    return transacao


@router.get("/resumo")
def resumo(
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("caixa:ler")),
):
    """
    Totais de hoje e do mês corrente: vendas, entradas, saídas e saldo.
    """
    inicio_dia = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    inicio_mes = inicio_dia.replace(day=1)
    vendas = consultas.buscar_vendas(db, sessao.barbearia_id, data_inicio=inicio_mes.date())
    transacoes = consultas.buscar_transacoes(db, sessao.barbearia_id, desde=inicio_mes)
    return relatorios.resumo_caixa(vendas, transacoes, inicio_dia)


@router.get("/fluxo")
def fluxo(
    dias: int = Query(30, ge=1, le=366),
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("caixa:ler")),
):
    desde = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0) - timedelta(days=dias - 1)
    vendas = consultas.buscar_vendas(db, sessao.barbearia_id, data_inicio=desde.date())
    transacoes = consultas.buscar_transacoes(db, sessao.barbearia_id, desde=desde)
    return relatorios.fluxo_caixa(vendas, transacoes)


@router.get("", response_model=List[TransacaoCaixaRead])
def read_transacoes(
    tipo: Optional[TipoTransacao] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("caixa:ler")),
):
    query = db.query(TransacaoCaixa).filter(TransacaoCaixa.barbearia_id == sessao.barbearia_id)
    if tipo:
        query = query.filter(TransacaoCaixa.tipo == tipo)
    return query.order_by(TransacaoCaixa.criado_em.desc()).offset(skip).limit(limit).all()


@router.post("", response_model=TransacaoCaixaRead, status_code=status.HTTP_201_CREATED)
def create_transacao(
    transacao: TransacaoCaixaCreate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("caixa:gerenciar")),
):
    db_transacao = TransacaoCaixa(**transacao.dict(), barbearia_id=sessao.barbearia_id)
    db.add(db_transacao)
    db.commit()
    db.refresh(db_transacao)
    get_cache().invalidate("caixa")
    return db_transacao


@router.get("/{transacao_id}", response_model=TransacaoCaixaRead)
def read_transacao(
    transacao_id: int,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("caixa:ler")),
):
    return get_transacao(db, sessao, transacao_id)


@router.put("/{transacao_id}", response_model=TransacaoCaixaRead)
def update_transacao(
    transacao_id: int,
    transacao_update: TransacaoCaixaUpdate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("caixa:gerenciar")),
):
    db_transacao = get_transacao(db, sessao, transacao_id)
    for key, value in transacao_update.dict(exclude_unset=True).items():
        setattr(db_transacao, key, value)
    db.commit()
    db.refresh(db_transacao)
    get_cache().invalidate("caixa")
    return db_transacao


@router.delete("/{transacao_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transacao(
    transacao_id: int,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("caixa:gerenciar")),
):
    db_transacao = get_transacao(db, sessao, transacao_id)
    db.delete(db_transacao)
    db.commit()
    get_cache().invalidate("caixa")
    return None
