# -*- coding: utf-8 -*-
"""
Rotas FastAPI para Vendas (atendimentos e produtos cobrados no balcão).
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from barbearia import auth
from barbearia.cache import get_cache
from barbearia.database import get_db
from barbearia.models.usuario import Usuario
from barbearia.models.venda import Venda
from barbearia.schemas.venda import FormaPagamento, VendaCreate, VendaRead
from barbearia.services import vendas as vendas_service

router = APIRouter(
    tags=["Vendas"],
    responses={404: {"description": "Venda não encontrada"}},
)


@router.post("", response_model=VendaRead, status_code=status.HTTP_201_CREATED)
def create_venda(
    venda: VendaCreate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("vendas:criar")),
):
    profissional = db.query(Usuario).filter(
        Usuario.id == venda.profissional_id,
        Usuario.barbearia_id == sessao.barbearia_id,
    ).first()
    if profissional is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Profissional não encontrado")

    db_venda = vendas_service.registrar_venda(db, sessao.barbearia_id, venda)

    cache = get_cache()
    cache.invalidate("vendas")
    cache.invalidate("servicos")
    logging.info(f"Venda #{db_venda.id} registrada: R$ {db_venda.valor_total:.2f} ({db_venda.forma_pagamento})")
    return db_venda


@router.get("", response_model=List[VendaRead])
def read_vendas(
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    profissional_id: Optional[int] = None,
    forma_pagamento: Optional[FormaPagamento] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("vendas:ler")),
):
    """
    Lista as vendas mais recentes primeiro.
    """
    query = (
        db.query(Venda)
        .options(joinedload(Venda.itens))
        .filter(Venda.barbearia_id == sessao.barbearia_id)
    )
    if data_inicio:
        query = query.filter(func.date(Venda.data_pagamento) >= data_inicio)
    if data_fim:
        query = query.filter(func.date(Venda.data_pagamento) <= data_fim)
    if profissional_id:
        query = query.filter(Venda.profissional_id == profissional_id)
    if forma_pagamento:
        query = query.filter(Venda.forma_pagamento == forma_pagamento)
    return query.order_by(Venda.data_pagamento.desc()).offset(skip).limit(limit).all()


@router.get("/{venda_id}", response_model=VendaRead)
def read_venda(
    venda_id: int,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("vendas:ler")),
):
    venda = db.query(Venda).filter(Venda.id == venda_id, Venda.barbearia_id == sessao.barbearia_id).first()
    if venda is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venda não encontrada")
    return venda
