# -*- coding: utf-8 -*-
"""
Registro de vendas: venda, itens e baixa de estoque dos produtos.
"""
import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from barbearia.models.agendamento import Agendamento
from barbearia.models.cliente import Cliente
from barbearia.models.servico import Servico
from barbearia.models.venda import ItemVenda, Venda
from barbearia.schemas.venda import ItemVendaCreate, VendaCreate


def calcular_total(itens: List[ItemVenda]) -> float:
    return sum(item.valor_total for item in itens)


def montar_itens(db: Session, barbearia_id: int, itens: List[ItemVendaCreate]):
    """Resolve cada item para o serviço/produto do catálogo. Retorna [(ItemVenda, Servico)]."""
    ids = {item.servico_id for item in itens}
    catalogo = {
        s.id: s
        for s in db.query(Servico).filter(
            Servico.id.in_(ids),
            Servico.barbearia_id == barbearia_id,
            Servico.ativo.is_(True),
        )
    }

    montados = []
    for item in itens:
        servico = catalogo.get(item.servico_id)
        if servico is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Serviço ou produto #{item.servico_id} não encontrado ou inativo.",
            )
        montados.append((
            ItemVenda(
                servico_id=servico.id,
                nome_servico=servico.nome,
                quantidade=item.quantidade,
                valor_unitario=servico.preco,
                valor_total=item.quantidade * servico.preco,
            ),
            servico,
        ))
    return montados


def baixar_estoque(servico: Servico, quantidade: int) -> None:
    """Produtos com estoque controlado perdem `quantidade` unidades, sem ficar negativos."""
    if servico.tipo != "produto" or servico.estoque is None:
        return
    if servico.estoque < quantidade:
        # A venda segue mesmo sem estoque suficiente
        logging.warning(
            f"Estoque insuficiente para '{servico.nome}' (#{servico.id}): "
            f"disponível {servico.estoque}, vendido {quantidade}"
        )
    servico.estoque = max(0, servico.estoque - quantidade)


def validar_vinculos(db: Session, barbearia_id: int, dados: VendaCreate) -> None:
    """Cliente e agendamento informados precisam ser da mesma barbearia da venda."""
    checagens = (
        (dados.cliente_id, Cliente, "Cliente não encontrado"),
        (dados.agendamento_id, Agendamento, "Agendamento não encontrado"),
    )
    for id_, modelo, mensagem in checagens:
        if id_ is None:
            continue
        existe = db.query(modelo.id).filter(modelo.id == id_, modelo.barbearia_id == barbearia_id).first()
        if existe is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=mensagem)


def registrar_venda(db: Session, barbearia_id: int, dados: VendaCreate) -> Venda:
    if not dados.itens:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Adicione pelo menos um item à venda")

    validar_vinculos(db, barbearia_id, dados)
    montados = montar_itens(db, barbearia_id, dados.itens)
    itens = [item for item, _ in montados]

    venda = Venda(
        cliente_id=dados.cliente_id,
        profissional_id=dados.profissional_id,
        agendamento_id=dados.agendamento_id,
        forma_pagamento=dados.forma_pagamento,
        observacoes=dados.observacoes or None,
        valor_total=calcular_total(itens),
        barbearia_id=barbearia_id,
        itens=itens,
    )
    db.add(venda)

    for item, servico in montados:
        baixar_estoque(servico, item.quantidade)

    db.commit()
    db.refresh(venda)
    return venda
