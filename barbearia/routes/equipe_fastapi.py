# -*- coding: utf-8 -*-
"""
Rotas da equipe: usuários (admin, recepcionista, profissional) da barbearia.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from barbearia import auth
from barbearia.cache import get_cache
from barbearia.database import get_db
from barbearia.models.usuario import Usuario
from barbearia.schemas.usuario import Role, UsuarioCreate, UsuarioRead, UsuarioUpdate

router = APIRouter(
    tags=["Equipe"],
    responses={404: {"description": "Membro da equipe não encontrado"}},
)

SOMENTE_ADMIN = "Apenas administradores podem gerenciar a equipe."


def get_membro(db: Session, sessao: auth.Sessao, usuario_id: int) -> Usuario:
    membro = db.query(Usuario).filter(
        Usuario.id == usuario_id,
        Usuario.barbearia_id == sessao.barbearia_id,
    ).first()
    if membro is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Membro da equipe não encontrado")
    return membro


@router.get("", response_model=List[UsuarioRead])
def read_equipe(
    role: Optional[Role] = None,
    ativo: Optional[bool] = None,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("equipe:ler")),
):
    query = db.query(Usuario).filter(Usuario.barbearia_id == sessao.barbearia_id)
    if role:
        query = query.filter(Usuario.role == role)
    if ativo is not None:
        query = query.filter(Usuario.ativo.is_(ativo))
    return query.order_by(Usuario.nome).all()


@router.get("/{usuario_id}", response_model=UsuarioRead)
def read_membro(
    usuario_id: int,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("equipe:ler")),
):
    return get_membro(db, sessao, usuario_id)


@router.post("", response_model=UsuarioRead, status_code=status.HTTP_201_CREATED)
def create_membro(
    usuario: UsuarioCreate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("equipe:gerenciar", detail=SOMENTE_ADMIN)),
):
    """
    Cadastra um membro já confirmado na barbearia do administrador.
    """
    if auth.get_user(db, email=usuario.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email já cadastrado")

    dados = usuario.dict(exclude={"password"})
    db_usuario = Usuario(
        **dados,
        hashed_password=auth.get_password_hash(usuario.password),
        email_confirmado=True,
        barbearia_id=sessao.barbearia_id,
    )
    try:
        db.add(db_usuario)
        db.commit()
        db.refresh(db_usuario)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email já cadastrado")
    get_cache().invalidate("equipe")
    logging.info(f"Membro {db_usuario.email} ({db_usuario.role}) adicionado à barbearia #{sessao.barbearia_id}")
    return db_usuario


@router.put("/{usuario_id}", response_model=UsuarioRead)
def update_membro(
    usuario_id: int,
    usuario_update: UsuarioUpdate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("equipe:gerenciar", detail=SOMENTE_ADMIN)),
):
    db_usuario = get_membro(db, sessao, usuario_id)
    update_data = usuario_update.dict(exclude_unset=True)

    if update_data.get("email") and update_data["email"] != db_usuario.email:
        if auth.get_user(db, email=update_data["email"]):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email já cadastrado")
    if db_usuario.id == sessao.usuario.id and (
        update_data.get("ativo") is False or update_data.get("role", "admin") != "admin"
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Você não pode desativar ou rebaixar a própria conta.",
        )

    if "password" in update_data:
        senha = update_data.pop("password")
        if senha:
            db_usuario.hashed_password = auth.get_password_hash(senha)
    for key, value in update_data.items():
        setattr(db_usuario, key, value)
    db.commit()
    db.refresh(db_usuario)
    get_cache().invalidate("equipe")
    return db_usuario


@router.delete("/{usuario_id}", response_model=UsuarioRead)
def desativar_membro(
    usuario_id: int,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("equipe:gerenciar", detail=SOMENTE_ADMIN)),
):
    """
    Desativa o membro. O histórico de vendas e agendamentos continua apontando para ele.
    """
    db_usuario = get_membro(db, sessao, usuario_id)
    if db_usuario.id == sessao.usuario.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Você não pode desativar ou rebaixar a própria conta.",
        )
    db_usuario.ativo = False
    db.commit()
    db.refresh(db_usuario)
    get_cache().invalidate("equipe")
    return db_usuario
