# -*- coding: utf-8 -*-
"""
Orquestração do pagamento de agendamentos via checkout hospedado.

Etapa 1 (`criar_sessao_checkout`): monta o item, guarda os dados do agendamento
como metadados da sessão e devolve a URL de pagamento. Nada é gravado no banco.

Etapa 2 (`confirmar_pagamento`): na volta do checkout, consulta a sessão no
provedor; se paga, grava o Agendamento (confirmado, pago) e o Pagamento.
A sessão do provedor é a única fonte de verdade entre as duas etapas.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from barbearia.config import FRONTEND_URL
from barbearia.models.agendamento import Agendamento
from barbearia.models.cliente import Cliente
from barbearia.models.pagamento import Pagamento
from barbearia.models.servico import Servico
from barbearia.models.usuario import Usuario
from barbearia.services.provedor_pagamento import (
    STATUS_PAGO,
    ErroProvedor,
    ItemCheckout,
    SessaoNaoEncontrada,
)

MENSAGEM_CONFIRMADO = "Agendamento confirmado e pagamento processado com sucesso!"
MENSAGEM_NAO_PAGO = "Pagamento não foi processado com sucesso."

CAMPOS_METADADOS = (
    "cliente_id",
    "profissional_id",
    "servico_id",
    "data_agendada",
    "horario",
    "observacoes",
    "usuario_id",
    "barbearia_id",
)


class ErroCheckout(Exception):
    pass


class NaoAutorizado(ErroCheckout):
    pass


class ErroProvedorPagamento(ErroCheckout):
    pass


class ErroConsultaProvedor(ErroCheckout):
    pass


@dataclass
class RascunhoAgendamento:
    cliente_id: int
    profissional_id: int
    servico_id: int
    data_agendada: date
    horario: str
    observacoes: Optional[str] = None


@dataclass
class ResultadoCheckout:
    sessao_id: str
    url: str
    valor: float


@dataclass
class ResultadoConfirmacao:
    sucesso: bool
    mensagem: str
    agendamento: Optional[Agendamento] = None


def montar_item(rascunho: RascunhoAgendamento, servico: Servico, profissional: Usuario) -> ItemCheckout:
    return ItemCheckout(
        titulo=f"{servico.nome} - {profissional.nome}",
        descricao=f"Agendamento para {rascunho.data_agendada.isoformat()} às {rascunho.horario}",
        valor_unitario_centavos=round(servico.preco * 100),
        quantidade=1,
    )


def montar_metadados(rascunho: RascunhoAgendamento, usuario: Usuario, barbearia_id: int) -> dict:
    return {
        "cliente_id": str(rascunho.cliente_id),
        "profissional_id": str(rascunho.profissional_id),
        "servico_id": str(rascunho.servico_id),
        "data_agendada": rascunho.data_agendada.isoformat(),
        "horario": rascunho.horario,
        "observacoes": rascunho.observacoes or "",
        "usuario_id": str(usuario.id),
        "barbearia_id": str(barbearia_id),
    }


def criar_sessao_checkout(
    usuario: Optional[Usuario],
    rascunho: RascunhoAgendamento,
    cliente: Cliente,
    servico: Servico,
    profissional: Usuario,
    provedor,
) -> ResultadoCheckout:
    if usuario is None:
        raise NaoAutorizado("Usuário não autenticado")

    item = montar_item(rascunho, servico, profissional)
    metadados = montar_metadados(rascunho, usuario, servico.barbearia_id)

    try:
        sessao = provedor.criar_sessao(
            itens=[item],
            url_sucesso=f"{FRONTEND_URL}/agendamentos?payment=success",
            url_cancelamento=f"{FRONTEND_URL}/agendamentos?payment=cancelled",
            metadados=metadados,
            email_cliente=cliente.email or None,
        )
    except ErroProvedor as e:
        raise ErroProvedorPagamento(str(e)) from e

    logging.info(f"Sessão de checkout {sessao.id} criada para o usuário {usuario.id}")
    return ResultadoCheckout(sessao_id=sessao.id, url=sessao.url, valor=servico.preco)


def confirmar_pagamento(db: Session, sessao_id: str, provedor) -> ResultadoConfirmacao:
    # Sessão já confirmada: devolve o agendamento existente em vez de duplicar
    existente = db.query(Pagamento).filter(Pagamento.sessao_checkout_id == sessao_id).first()
    if existente is not None:
        return ResultadoConfirmacao(sucesso=True, mensagem=MENSAGEM_CONFIRMADO, agendamento=existente.agendamento)

    try:
        sessao = provedor.recuperar_sessao(sessao_id)
    except SessaoNaoEncontrada as e:
        raise ErroConsultaProvedor(f"Sessão de pagamento não encontrada: {sessao_id}") from e
    except ErroProvedor as e:
        raise ErroProvedorPagamento(str(e)) from e

    if sessao.status_pagamento != STATUS_PAGO:
        return ResultadoConfirmacao(sucesso=False, mensagem=MENSAGEM_NAO_PAGO)

    meta = sessao.metadados
    faltando = [c for c in CAMPOS_METADADOS if c not in meta and c != "observacoes"]
    if faltando:
        raise ErroConsultaProvedor(f"Sessão {sessao_id} sem os dados do agendamento: {', '.join(faltando)}")

    agendamento = Agendamento(
        cliente_id=int(meta["cliente_id"]),
        profissional_id=int(meta["profissional_id"]),
        servico_id=int(meta["servico_id"]),
        data_agendada=date.fromisoformat(meta["data_agendada"]),
        horario=meta["horario"],
        observacoes=meta.get("observacoes") or None,
        barbearia_id=int(meta["barbearia_id"]),
        status="confirmado",
        pago=True,
    )
    db.add(agendamento)
    db.flush()

    db.add(Pagamento(
        cliente_id=agendamento.cliente_id,
        agendamento_id=agendamento.id,
        valor=sessao.valor_total / 100,
        metodo="mercadopago",
        status="concluido",
        sessao_checkout_id=sessao_id,
    ))
    try:
        db.commit()
    except IntegrityError:
        # Outra confirmação da mesma sessão gravou primeiro
        db.rollback()
        existente = db.query(Pagamento).filter(Pagamento.sessao_checkout_id == sessao_id).one()
        return ResultadoConfirmacao(sucesso=True, mensagem=MENSAGEM_CONFIRMADO, agendamento=existente.agendamento)
    db.refresh(agendamento)

    logging.info(f"Pagamento da sessão {sessao_id} confirmado: agendamento #{agendamento.id}")
    return ResultadoConfirmacao(sucesso=True, mensagem=MENSAGEM_CONFIRMADO, agendamento=agendamento)
