# -*- coding: utf-8 -*-
"""
Consultas usadas pelos relatórios, dashboard e caixa.

Cada função aplica os filtros opcionais (período e profissional; vazio = sem
filtro), sempre dentro da barbearia da sessão, e devolve linhas como dicts
para as agregações de `relatorios`.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from barbearia.models.agendamento import Agendamento
from barbearia.models.caixa import TransacaoCaixa
from barbearia.models.cliente import Cliente
from barbearia.models.servico import Servico
from barbearia.models.venda import ItemVenda, Venda


def linha_venda(v: Venda) -> Dict[str, Any]:
    return {
        "id": v.id,
        "data_pagamento": v.data_pagamento,
        "data": v.data_pagamento.date().isoformat() if v.data_pagamento else None,
        "valor_total": v.valor_total,
        "forma_pagamento": v.forma_pagamento,
        "profissional_id": v.profissional_id,
        "profissional": v.profissional.nome if v.profissional else None,
        "cliente": v.cliente.nome if v.cliente else None,
    }


def linha_agendamento(a: Agendamento) -> Dict[str, Any]:
    return {
        "id": a.id,
        "cliente_id": a.cliente_id,
        "profissional_id": a.profissional_id,
        "data_agendada": a.data_agendada,
        "horario": a.horario,
        "status": a.status,
        "cliente": a.cliente.nome if a.cliente else None,
        "profissional": a.profissional.nome if a.profissional else None,
        "servico": a.servico.nome if a.servico else None,
    }


def buscar_vendas(
    db: Session,
    barbearia_id: int,
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    profissional_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    query = (
        db.query(Venda)
        .options(joinedload(Venda.profissional), joinedload(Venda.cliente))
        .filter(Venda.barbearia_id == barbearia_id)
    )
    if data_inicio:
        query = query.filter(func.date(Venda.data_pagamento) >= data_inicio)
    if data_fim:
        query = query.filter(func.date(Venda.data_pagamento) <= data_fim)
    if profissional_id:
        query = query.filter(Venda.profissional_id == profissional_id)
    return [linha_venda(v) for v in query.order_by(Venda.data_pagamento, Venda.id).all()]


def buscar_agendamentos(
    db: Session,
    barbearia_id: int,
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    profissional_id: Optional[int] = None,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    query = (
        db.query(Agendamento)
        .options(
            joinedload(Agendamento.cliente),
            joinedload(Agendamento.profissional),
            joinedload(Agendamento.servico),
        )
        .filter(Agendamento.barbearia_id == barbearia_id)
    )
    if data_inicio:
        query = query.filter(Agendamento.data_agendada >= data_inicio)
    if data_fim:
        query = query.filter(Agendamento.data_agendada <= data_fim)
    if profissional_id:
        query = query.filter(Agendamento.profissional_id == profissional_id)
    if status:
        query = query.filter(Agendamento.status == status)
    ordem = (Agendamento.data_agendada, Agendamento.horario, Agendamento.id)
    return [linha_agendamento(a) for a in query.order_by(*ordem).all()]


def buscar_itens_vendidos(
    db: Session,
    barbearia_id: int,
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    profissional_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    query = (
        db.query(ItemVenda, Servico.tipo)
        .join(Venda, ItemVenda.venda_id == Venda.id)
        .outerjoin(Servico, ItemVenda.servico_id == Servico.id)
        .filter(Venda.barbearia_id == barbearia_id)
    )
    if data_inicio:
        query = query.filter(func.date(Venda.data_pagamento) >= data_inicio)
    if data_fim:
        query = query.filter(func.date(Venda.data_pagamento) <= data_fim)
    if profissional_id:
        query = query.filter(Venda.profissional_id == profissional_id)
    linhas = query.order_by(Venda.data_pagamento, ItemVenda.id).all()
    return [
        {
            "nome_servico": item.nome_servico,
            "quantidade": item.quantidade,
            "valor_unitario": item.valor_unitario,
            "valor_total": item.valor_total,
            "tipo": tipo,
        }
        for item, tipo in linhas
    ]


def buscar_clientes(db: Session, barbearia_id: int) -> List[Dict[str, Any]]:
    clientes = db.query(Cliente).filter(Cliente.barbearia_id == barbearia_id).order_by(Cliente.nome).all()
    return [
        {"id": c.id, "nome": c.nome, "email": c.email, "telefone": c.telefone}
        for c in clientes
    ]


def buscar_produtos(db: Session, barbearia_id: int) -> List[Dict[str, Any]]:
    produtos = (
        db.query(Servico)
        .filter(Servico.barbearia_id == barbearia_id, Servico.tipo == "produto")
        .order_by(Servico.nome)
        .all()
    )
    return [
        {"id": p.id, "nome": p.nome, "preco": p.preco, "estoque": p.estoque, "ativo": p.ativo}
        for p in produtos
    ]


def buscar_transacoes(db: Session, barbearia_id: int, desde: Optional[datetime] = None) -> List[Dict[str, Any]]:
    query = db.query(TransacaoCaixa).filter(TransacaoCaixa.barbearia_id == barbearia_id)
    if desde:
        query = query.filter(TransacaoCaixa.criado_em >= desde)
    return [
        {"id": t.id, "tipo": t.tipo, "valor": t.valor, "categoria": t.categoria, "criado_em": t.criado_em}
        for t in query.order_by(TransacaoCaixa.criado_em).all()
    ]
