# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Clientes.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from barbearia import auth, storage
from barbearia.cache import get_cache
from barbearia.database import get_db
from barbearia.models.cliente import Cliente
from barbearia.schemas.cliente import ClienteCreate, ClienteRead, ClienteUpdate

router = APIRouter(
    tags=["Clientes"],
    responses={404: {"description": "Cliente não encontrado"}},
)


def get_cliente(db: Session, sessao: auth.Sessao, cliente_id: int) -> Cliente:
    cliente = db.query(Cliente).filter(
        Cliente.id == cliente_id,
        Cliente.barbearia_id == sessao.barbearia_id,
    ).first()
    if cliente is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente não encontrado")
    return cliente


@router.post("", response_model=ClienteRead, status_code=status.HTTP_201_CREATED)
def create_cliente(
    cliente: ClienteCreate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("clientes:gerenciar")),
):
    db_cliente = Cliente(**cliente.dict(), barbearia_id=sessao.barbearia_id)
    db.add(db_cliente)
    db.commit()
    db.refresh(db_cliente)
    get_cache().invalidate("clientes")
    return db_cliente


@router.get("", response_model=List[ClienteRead])
def read_clientes(
    skip: int = 0,
    limit: int = 100,
    busca: Optional[str] = None,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("clientes:ler")),
):
    """
    Lista os clientes da barbearia, com busca por nome, telefone ou email.
    """
    query = db.query(Cliente).filter(Cliente.barbearia_id == sessao.barbearia_id)
    if busca:
        termo = f"%{busca.strip()}%"
        query = query.filter(or_(
            Cliente.nome.ilike(termo),
            Cliente.telefone.ilike(termo),
            Cliente.email.ilike(termo),
        ))
    return query.order_by(Cliente.nome).offset(skip).limit(limit).all()


@router.get("/{cliente_id}", response_model=ClienteRead)
def read_cliente(
    cliente_id: int,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("clientes:ler")),
):
    return get_cliente(db, sessao, cliente_id)


@router.put("/{cliente_id}", response_model=ClienteRead)
def update_cliente(
    cliente_id: int,
    cliente_update: ClienteUpdate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("clientes:gerenciar")),
):
    db_cliente = get_cliente(db, sessao, cliente_id)
    for key, value in cliente_update.dict(exclude_unset=True).items():
        setattr(db_cliente, key, value)
    db.commit()
    db.refresh(db_cliente)
    get_cache().invalidate("clientes")
    return db_cliente


@router.delete("/{cliente_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cliente(
    cliente_id: int,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("clientes:gerenciar")),
):
    db_cliente = get_cliente(db, sessao, cliente_id)
    if db_cliente.agendamentos:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Não é possível excluir um cliente com agendamentos.",
        )
    avatar_url = db_cliente.avatar_url
    db.delete(db_cliente)
    db.commit()
    storage.remover_imagem(avatar_url)
    get_cache().invalidate("clientes")
    logging.info(f"Cliente #{cliente_id} excluído")
    return None


@router.post("/{cliente_id}/avatar", response_model=ClienteRead)
def upload_avatar(
    cliente_id: int,
    foto: UploadFile = File(...),
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("clientes:gerenciar")),
):
    db_cliente = get_cliente(db, sessao, cliente_id)
    url_antiga = db_cliente.avatar_url
    db_cliente.avatar_url = storage.enviar_imagem(foto, "clientes")
    db.commit()
    db.refresh(db_cliente)
    storage.remover_imagem(url_antiga)
    return db_cliente
