# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o catálogo de Serviços e Produtos.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from barbearia import auth
from barbearia.cache import get_cache
from barbearia.database import get_db
from barbearia.models.servico import Servico
from barbearia.models.venda import ItemVenda
from barbearia.schemas.servico import ServicoCreate, ServicoRead, ServicoUpdate, TipoServico

router = APIRouter(
    tags=["Serviços"],
    responses={404: {"description": "Serviço não encontrado"}},
)

SEM_PERMISSAO = (
    "Você não tem permissão para criar/editar serviços. "
    "Verifique se seu perfil tem o papel adequado (admin ou recepcionista)."
)

requer_gestao = auth.requer("servicos:gerenciar", detail=SEM_PERMISSAO)


def get_servico(db: Session, sessao: auth.Sessao, servico_id: int) -> Servico:
    servico = db.query(Servico).filter(
        Servico.id == servico_id,
        Servico.barbearia_id == sessao.barbearia_id,
    ).first()
    if servico is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Serviço não encontrado")
    return servico


def _invalidar():
    get_cache().invalidate("servicos")


@router.post("", response_model=ServicoRead, status_code=status.HTTP_201_CREATED)
def create_servico(
    servico: ServicoCreate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(requer_gestao),
):
    db_servico = Servico(**servico.dict(), barbearia_id=sessao.barbearia_id)
    db.add(db_servico)
    db.commit()
    db.refresh(db_servico)
    _invalidar()
    return db_servico


@router.get("", response_model=List[ServicoRead])
def read_servicos(
    skip: int = 0,
    limit: int = 100,
    tipo: Optional[TipoServico] = None,
    ativo: Optional[bool] = None,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("servicos:ler")),
):
    query = db.query(Servico).filter(Servico.barbearia_id == sessao.barbearia_id)
    if tipo:
        query = query.filter(Servico.tipo == tipo)
    if ativo is not None:
        query = query.filter(Servico.ativo.is_(ativo))
    return query.order_by(Servico.nome).offset(skip).limit(limit).all()


@router.get("/{servico_id}", response_model=ServicoRead)
def read_servico(
    servico_id: int,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("servicos:ler")),
):
    return get_servico(db, sessao, servico_id)


@router.put("/{servico_id}", response_model=ServicoRead)
def update_servico(
    servico_id: int,
    servico_update: ServicoUpdate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(requer_gestao),
):
    db_servico = get_servico(db, sessao, servico_id)
    for key, value in servico_update.dict(exclude_unset=True).items():
        setattr(db_servico, key, value)
    db.commit()
    db.refresh(db_servico)
    _invalidar()
    return db_servico


@router.delete("/{servico_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_servico(
    servico_id: int,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(requer_gestao),
):
    """
    Exclui o serviço. Itens já vendidos impedem a exclusão; nesse caso, desative-o.
    """
    db_servico = get_servico(db, sessao, servico_id)
    if db.query(ItemVenda).filter(ItemVenda.servico_id == db_servico.id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Este item já foi vendido. Desative-o em vez de excluir.",
        )
    db.delete(db_servico)
    db.commit()
    _invalidar()
    return None
