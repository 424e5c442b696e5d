# -*- coding: utf-8 -*-
"""
Rotas públicas (sem login): diretório de barbearias e agendamento pelo cliente final.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from barbearia.cache import get_cache
from barbearia.database import get_db
from barbearia.models.agendamento import Agendamento
from barbearia.models.barbearia import Barbearia
from barbearia.models.cliente import Cliente
from barbearia.models.servico import Servico
from barbearia.models.usuario import Usuario
from barbearia.schemas.agendamento import AgendamentoPublicoCreate, AgendamentoRead
from barbearia.schemas.barbearia import BarbeariaDetalhes, BarbeariaRead

router = APIRouter(
    tags=["Público"],
    responses={404: {"description": "Barbearia não encontrada"}},
)


def get_barbearia_ativa(db: Session, barbearia_id: int) -> Barbearia:
    barbearia = db.query(Barbearia).filter(Barbearia.id == barbearia_id, Barbearia.ativa.is_(True)).first()
    if barbearia is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Barbearia não encontrada")
    return barbearia


@router.get("/barbearias", response_model=List[BarbeariaRead])
def listar_barbearias(busca: Optional[str] = None, db: Session = Depends(get_db)):
    query = db.query(Barbearia).filter(Barbearia.ativa.is_(True))
    if busca:
        termo = f"%{busca.strip()}%"
        query = query.filter(or_(Barbearia.nome.ilike(termo), Barbearia.cidade.ilike(termo)))
    return query.order_by(Barbearia.nome).all()


@router.get("/barbearias/{barbearia_id}", response_model=BarbeariaDetalhes)
def detalhes_barbearia(barbearia_id: int, db: Session = Depends(get_db)):
    """
    Página da barbearia: dados, profissionais ativos e serviços ativos.
    """
    barbearia = get_barbearia_ativa(db, barbearia_id)
    profissionais = (
        db.query(Usuario)
        .filter(Usuario.barbearia_id == barbearia.id, Usuario.ativo.is_(True))
        .order_by(Usuario.nome)
        .all()
    )
    servicos = (
        db.query(Servico)
        .filter(Servico.barbearia_id == barbearia.id, Servico.ativo.is_(True))
        .order_by(Servico.nome)
        .all()
    )
    return {
        **BarbeariaRead.model_validate(barbearia).dict(),
        "profissionais": profissionais,
        "servicos": servicos,
    }


@router.post(
    "/barbearias/{barbearia_id}/agendamentos",
    response_model=AgendamentoRead,
    status_code=status.HTTP_201_CREATED,
)
def agendar(
    barbearia_id: int,
    dados: AgendamentoPublicoCreate,
    db: Session = Depends(get_db),
):
    barbearia = get_barbearia_ativa(db, barbearia_id)

    profissional = db.query(Usuario).filter(
        Usuario.id == dados.profissional_id,
        Usuario.barbearia_id == barbearia.id,
        Usuario.ativo.is_(True),
    ).first()
    if profissional is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Profissional não encontrado")

    servico = db.query(Servico).filter(
        Servico.id == dados.servico_id,
        Servico.barbearia_id == barbearia.id,
        Servico.tipo == "servico",
        Servico.ativo.is_(True),
    ).first()
    if servico is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Serviço não encontrado")

    telefone = dados.cliente_telefone.strip()
    cliente = db.query(Cliente).filter(
        Cliente.barbearia_id == barbearia.id,
        Cliente.telefone == telefone,
    ).first()
    if cliente is None:
        cliente = Cliente(nome=dados.cliente_nome.strip(), telefone=telefone, barbearia_id=barbearia.id)
        db.add(cliente)
        db.flush()

    agendamento = Agendamento(
        cliente_id=cliente.id,
        profissional_id=profissional.id,
        servico_id=servico.id,
        data_agendada=dados.data_agendada,
        horario=dados.horario,
        observacoes=dados.observacoes or None,
        status="agendado",
        barbearia_id=barbearia.id,
    )
    db.add(agendamento)
    db.commit()
    db.refresh(agendamento)

    cache = get_cache()
    cache.invalidate("clientes")
    cache.invalidate("agendamentos")
    logging.info(f"Agendamento público #{agendamento.id} criado na barbearia #{barbearia.id}")
    return agendamento
