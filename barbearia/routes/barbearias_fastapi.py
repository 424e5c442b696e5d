# -*- coding: utf-8 -*-
"""
Rotas de configuração da barbearia (o tenant) do usuário logado.
"""
import re
import unicodedata

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from barbearia import auth, storage
from barbearia.database import get_db
from barbearia.models.barbearia import Barbearia
from barbearia.schemas.barbearia import BarbeariaCreate, BarbeariaRead, BarbeariaUpdate

router = APIRouter(
    tags=["Barbearias"],
    responses={404: {"description": "Barbearia não encontrada"}},
)


def gerar_slug(db: Session, nome: str) -> str:
    base = unicodedata.normalize("NFKD", nome).encode("ascii", "ignore").decode()
    base = re.sub(r"[^a-z0-9]+", "-", base.lower()).strip("-") or "barbearia"
    slug, n = base, 1
    while db.query(Barbearia).filter(Barbearia.slug == slug).first():
        n += 1
        slug = f"{base}-{n}"
    return slug


def get_barbearia_da_sessao(db: Session, sessao: auth.Sessao) -> Barbearia:
    barbearia = db.query(Barbearia).filter(Barbearia.id == sessao.barbearia_id).first()
    if barbearia is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Barbearia não encontrada")
    return barbearia


@router.post("", response_model=BarbeariaRead, status_code=status.HTTP_201_CREATED)
def create_barbearia(
    dados: BarbeariaCreate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.get_sessao),
):
    """
    Cria a barbearia e vincula o usuário logado a ela.
    """
    if not sessao.pode("barbearia:gerenciar"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Apenas administradores podem criar barbearias.")
    if sessao.barbearia_id is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Você já está vinculado a uma barbearia.")

    dados_barbearia = dados.dict()
    dados_barbearia["estado"] = dados.estado.upper()
    barbearia = Barbearia(
        **dados_barbearia,
        slug=gerar_slug(db, dados.nome),
        criada_por=sessao.usuario.id,
    )
    db.add(barbearia)
    db.flush()

    sessao.usuario.barbearia_id = barbearia.id
    db.commit()
    db.refresh(barbearia)
    return barbearia


@router.get("/minha", response_model=BarbeariaRead)
def read_minha_barbearia(
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.get_sessao),
):
    if sessao.barbearia_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Barbearia não encontrada")
    return get_barbearia_da_sessao(db, sessao)


@router.put("/minha", response_model=BarbeariaRead)
def update_minha_barbearia(
    dados: BarbeariaUpdate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("barbearia:gerenciar")),
):
    barbearia = get_barbearia_da_sessao(db, sessao)
    update_data = dados.dict(exclude_unset=True)
    if update_data.get("estado"):
        update_data["estado"] = update_data["estado"].upper()
    for key, value in update_data.items():
        setattr(barbearia, key, value)
    db.commit()
    db.refresh(barbearia)
    return barbearia


@router.post("/minha/logo", response_model=BarbeariaRead)
def upload_logo(
    logo: UploadFile = File(...),
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("barbearia:gerenciar")),
):
    barbearia = get_barbearia_da_sessao(db, sessao)
    url_antiga = barbearia.logo_url
    barbearia.logo_url = storage.enviar_imagem(logo, "logos", max_size=(400, 400))
    db.commit()
    db.refresh(barbearia)
    storage.remover_imagem(url_antiga)
    return barbearia
