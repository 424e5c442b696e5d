# -*- coding: utf-8 -*-
"""
Rotas FastAPI para Agendamentos.

Não há exclusão: um agendamento que não vai acontecer é cancelado.
"""
import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from barbearia import auth
from barbearia.cache import get_cache
from barbearia.database import get_db
from barbearia.models.agendamento import STATUS_LABELS, Agendamento
from barbearia.models.cliente import Cliente
from barbearia.models.servico import Servico
from barbearia.models.usuario import Usuario
from barbearia.schemas.agendamento import (
    AgendamentoCreate,
    AgendamentoRead,
    AgendamentoStatusUpdate,
    AgendamentoUpdate,
    StatusAgendamento,
)

router = APIRouter(
    tags=["Agendamentos"],
    responses={404: {"description": "Agendamento não encontrado"}},
)

# status atual -> status permitidos
TRANSICOES = {
    "agendado": {"confirmado", "cancelado"},
    "confirmado": {"em_andamento", "cancelado"},
    "em_andamento": {"concluido", "cancelado"},
    "concluido": set(),
    "cancelado": set(),
}


def transicao_valida(atual: str, novo: str) -> bool:
    return novo in TRANSICOES.get(atual, set())


def get_agendamento(db: Session, sessao: auth.Sessao, agendamento_id: int) -> Agendamento:
    agendamento = db.query(Agendamento).filter(
        Agendamento.id == agendamento_id,
        Agendamento.barbearia_id == sessao.barbearia_id,
    ).first()
    if agendamento is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Agendamento não encontrado")
    return agendamento


def validar_referencias(db: Session, barbearia_id: int, cliente_id=None, profissional_id=None, servico_id=None):
    """Cliente, profissional e serviço precisam existir na mesma barbearia."""
    checagens = (
        (cliente_id, Cliente, "Cliente não encontrado"),
        (profissional_id, Usuario, "Profissional não encontrado"),
        (servico_id, Servico, "Serviço não encontrado"),
    )
    for id_, modelo, mensagem in checagens:
        if id_ is None:
            continue
        existe = db.query(modelo.id).filter(modelo.id == id_, modelo.barbearia_id == barbearia_id).first()
        if existe is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=mensagem)


@router.get("", response_model=List[AgendamentoRead])
def read_agendamentos(
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    profissional_id: Optional[int] = None,
    status_agendamento: Optional[StatusAgendamento] = Query(None, alias="status"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("agendamentos:ler")),
):
    query = db.query(Agendamento).filter(Agendamento.barbearia_id == sessao.barbearia_id)
    if data_inicio:
        query = query.filter(Agendamento.data_agendada >= data_inicio)
    if data_fim:
        query = query.filter(Agendamento.data_agendada <= data_fim)
    if profissional_id:
        query = query.filter(Agendamento.profissional_id == profissional_id)
    if status_agendamento:
        query = query.filter(Agendamento.status == status_agendamento)
    ordem = (Agendamento.data_agendada, Agendamento.horario)
    return query.order_by(*ordem).offset(skip).limit(limit).all()


@router.get("/{agendamento_id}", response_model=AgendamentoRead)
def read_agendamento(
    agendamento_id: int,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("agendamentos:ler")),
):
    return get_agendamento(db, sessao, agendamento_id)


@router.post("", response_model=AgendamentoRead, status_code=status.HTTP_201_CREATED)
def create_agendamento(
    agendamento: AgendamentoCreate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("agendamentos:criar")),
):
    validar_referencias(
        db, sessao.barbearia_id,
        cliente_id=agendamento.cliente_id,
        profissional_id=agendamento.profissional_id,
        servico_id=agendamento.servico_id,
    )
    db_agendamento = Agendamento(**agendamento.dict(), status="agendado", barbearia_id=sessao.barbearia_id)
    db.add(db_agendamento)
    db.commit()
    db.refresh(db_agendamento)
    get_cache().invalidate("agendamentos")
    return db_agendamento


@router.put("/{agendamento_id}", response_model=AgendamentoRead)
def update_agendamento(
    agendamento_id: int,
    agendamento_update: AgendamentoUpdate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("agendamentos:editar")),
):
    db_agendamento = get_agendamento(db, sessao, agendamento_id)
    update_data = agendamento_update.dict(exclude_unset=True)
    validar_referencias(
        db, sessao.barbearia_id,
        cliente_id=update_data.get("cliente_id"),
        profissional_id=update_data.get("profissional_id"),
        servico_id=update_data.get("servico_id"),
    )
    for key, value in update_data.items():
        setattr(db_agendamento, key, value)
    db_agendamento.atualizado_em = datetime.utcnow()
    db.commit()
    db.refresh(db_agendamento)
    get_cache().invalidate("agendamentos")
    return db_agendamento


@router.patch("/{agendamento_id}/status", response_model=AgendamentoRead)
def update_status(
    agendamento_id: int,
    dados: AgendamentoStatusUpdate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("agendamentos:status")),
):
    db_agendamento = get_agendamento(db, sessao, agendamento_id)
    atual = db_agendamento.status
    if not transicao_valida(atual, dados.status):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Não é possível mudar de '{STATUS_LABELS.get(atual, atual)}' "
                   f"para '{STATUS_LABELS.get(dados.status, dados.status)}'.",
        )
    db_agendamento.status = dados.status
    db_agendamento.atualizado_em = datetime.utcnow()
    db.commit()
    db.refresh(db_agendamento)
    get_cache().invalidate("agendamentos")
    logging.info(f"Agendamento #{agendamento_id}: {atual} -> {dados.status} por {sessao.usuario.email}")
    return db_agendamento
