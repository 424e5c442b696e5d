# -*- coding: utf-8 -*-
"""
Rotas de pagamento de agendamentos pelo checkout do Mercado Pago.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from barbearia import auth
from barbearia.cache import get_cache
from barbearia.config import MP_ACCESS_TOKEN, MP_PUBLIC_KEY
from barbearia.database import get_db
from barbearia.models.cliente import Cliente
from barbearia.models.servico import Servico
from barbearia.models.usuario import Usuario
from barbearia.schemas.agendamento import AgendamentoRead
from barbearia.schemas.pagamento import CheckoutCreate, CheckoutRead, ConfirmacaoCreate, ConfirmacaoRead
from barbearia.services import checkout
from barbearia.services.provedor_pagamento import get_provedor_pagamento

router = APIRouter(tags=["Pagamentos"])


@router.get("/config")
def config_pagamento():
    """
    Dados públicos para o frontend montar o checkout.
    """
    return {
        "provedor": "mercadopago",
        "public_key": MP_PUBLIC_KEY or None,
        "habilitado": bool(MP_ACCESS_TOKEN),
    }


@router.post("/checkout", response_model=CheckoutRead)
def criar_checkout(
    dados: CheckoutCreate,
    db: Session = Depends(get_db),
    sessao: auth.Sessao = Depends(auth.requer("pagamentos:checkout")),
    provedor=Depends(get_provedor_pagamento),
):
    cliente = db.query(Cliente).filter(
        Cliente.id == dados.cliente_id, Cliente.barbearia_id == sessao.barbearia_id
    ).first()
    if not cliente:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente não encontrado")

    servico = db.query(Servico).filter(
        Servico.id == dados.servico_id, Servico.barbearia_id == sessao.barbearia_id, Servico.ativo.is_(True)
    ).first()
    if not servico:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Serviço não encontrado")

    profissional = db.query(Usuario).filter(
        Usuario.id == dados.profissional_id, Usuario.barbearia_id == sessao.barbearia_id
    ).first()
    if not profissional:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profissional não encontrado")

    rascunho = checkout.RascunhoAgendamento(**dados.dict())
    try:
        resultado = checkout.criar_sessao_checkout(sessao.usuario, rascunho, cliente, servico, profissional, provedor)
    except checkout.NaoAutorizado as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except checkout.ErroProvedorPagamento as e:
        logging.error(f"Erro ao criar checkout no Mercado Pago: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Erro ao iniciar o pagamento. Tente novamente.")

    return CheckoutRead(sessao_id=resultado.sessao_id, url=resultado.url, valor=resultado.valor)


@router.post("/confirmar", response_model=ConfirmacaoRead)
def confirmar(
    dados: ConfirmacaoCreate,
    db: Session = Depends(get_db),
    provedor=Depends(get_provedor_pagamento),
):
    """
    Chamado na volta do checkout. A sessão no provedor é a fonte da verdade,
    por isso a rota não exige login.
    """
    try:
        resultado = checkout.confirmar_pagamento(db, dados.sessao_id, provedor)
    except checkout.ErroConsultaProvedor as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except checkout.ErroProvedorPagamento as e:
        logging.error(f"Erro ao consultar a sessão {dados.sessao_id}: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Erro ao consultar o pagamento.")

    if not resultado.sucesso:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"sucesso": False, "mensagem": resultado.mensagem},
        )

    get_cache().invalidate("agendamentos")
    return ConfirmacaoRead(
        sucesso=True,
        mensagem=resultado.mensagem,
        agendamento=AgendamentoRead.model_validate(resultado.agendamento),
    )
