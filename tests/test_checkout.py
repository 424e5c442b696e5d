from datetime import date

import pytest

from barbearia.models.agendamento import Agendamento
from barbearia.models.pagamento import Pagamento
from barbearia.services import checkout
from barbearia.services.provedor_pagamento import ErroProvedor


def rascunho(cliente, corte, profissional, **extra):
    return checkout.RascunhoAgendamento(
        cliente_id=cliente.id,
        profissional_id=profissional.id,
        servico_id=corte.id,
        data_agendada=date(2024, 7, 10),
        horario="14:30",
        **extra,
    )


def test_criar_sessao_monta_item_em_centavos(admin, cliente, corte, profissional, provedor):
    corte.preco = 45.9
    resultado = checkout.criar_sessao_checkout(
        admin, rascunho(cliente, corte, profissional), cliente, corte, profissional, provedor
    )

    item = provedor.criadas[0]["itens"][0]
    assert item.titulo == "Corte - Joao"
    assert item.valor_unitario_centavos == 4590
    assert item.quantidade == 1
    assert item.moeda == "BRL"
    assert provedor.criadas[0]["url_sucesso"].endswith("/agendamentos?payment=success")
    assert resultado.valor == 45.9

    meta = provedor.sessoes[resultado.sessao_id].metadados
    assert meta["data_agendada"] == "2024-07-10"
    assert meta["barbearia_id"] == str(corte.barbearia_id)
    assert all(isinstance(v, str) for v in meta.values())


def test_criar_sessao_sem_usuario(cliente, corte, profissional, provedor):
    with pytest.raises(checkout.NaoAutorizado):
        checkout.criar_sessao_checkout(None, rascunho(cliente, corte, profissional), cliente, corte, profissional, provedor)
    assert provedor.sessoes == {}


def test_falha_do_provedor_na_criacao(admin, cliente, corte, profissional, provedor):
    def falhar(**kwargs):
        raise ErroProvedor("timeout")

    provedor.criar_sessao = falhar
    with pytest.raises(checkout.ErroProvedorPagamento):
        checkout.criar_sessao_checkout(admin, rascunho(cliente, corte, profissional), cliente, corte, profissional, provedor)


def test_confirmar_sessao_paga_grava_agendamento_e_pagamento(db, admin, cliente, corte, profissional, provedor):
    sessao = checkout.criar_sessao_checkout(
        admin, rascunho(cliente, corte, profissional), cliente, corte, profissional, provedor
    )
    provedor.pagar(sessao.sessao_id)

    resultado = checkout.confirmar_pagamento(db, sessao.sessao_id, provedor)

    assert resultado.sucesso
    assert resultado.mensagem == checkout.MENSAGEM_CONFIRMADO
    agendamento = resultado.agendamento
    assert agendamento.status == "confirmado"
    assert agendamento.pago is True
    assert agendamento.horario == "14:30"
    assert agendamento.observacoes is None

    pagamento = db.query(Pagamento).one()
    assert pagamento.valor == 50.0
    assert pagamento.metodo == "mercadopago"
    assert pagamento.status == "concluido"
    assert pagamento.agendamento_id == agendamento.id


def test_confirmar_sessao_nao_paga_nao_grava_nada(db, admin, cliente, corte, profissional, provedor):
    sessao = checkout.criar_sessao_checkout(
        admin, rascunho(cliente, corte, profissional), cliente, corte, profissional, provedor
    )

    resultado = checkout.confirmar_pagamento(db, sessao.sessao_id, provedor)

    assert not resultado.sucesso
    assert resultado.mensagem == checkout.MENSAGEM_NAO_PAGO
    assert db.query(Agendamento).count() == 0
    assert db.query(Pagamento).count() == 0


def test_confirmar_duas_vezes_nao_duplica(db, admin, cliente, corte, profissional, provedor):
    sessao = checkout.criar_sessao_checkout(
        admin, rascunho(cliente, corte, profissional, observacoes="Degradê"), cliente, corte, profissional, provedor
    )
    provedor.pagar(sessao.sessao_id)

    primeiro = checkout.confirmar_pagamento(db, sessao.sessao_id, provedor)
    segundo = checkout.confirmar_pagamento(db, sessao.sessao_id, provedor)

    assert segundo.sucesso
    assert segundo.agendamento.id == primeiro.agendamento.id
    assert db.query(Agendamento).count() == 1
    assert db.query(Pagamento).count() == 1


def test_confirmar_sessao_desconhecida(db, provedor):
    with pytest.raises(checkout.ErroConsultaProvedor):
        checkout.confirmar_pagamento(db, "pref_inexistente", provedor)


# --- rotas ---

def payload(cliente, corte, profissional):
    return {
        "cliente_id": cliente.id,
        "profissional_id": profissional.id,
        "servico_id": corte.id,
        "data_agendada": "2024-07-10",
        "horario": "09:00",
    }


def test_rota_checkout_e_confirmacao(client, headers_admin, cliente, corte, profissional, provedor):
    resposta = client.post("/api/v1/pagamentos/checkout", json=payload(cliente, corte, profissional), headers=headers_admin)
    assert resposta.status_code == 200, resposta.text
    sessao_id = resposta.json()["sessao_id"]
    assert resposta.json()["url"].endswith(sessao_id)

    nao_pago = client.post("/api/v1/pagamentos/confirmar", json={"sessao_id": sessao_id})
    assert nao_pago.status_code == 400
    assert nao_pago.json() == {"sucesso": False, "mensagem": checkout.MENSAGEM_NAO_PAGO}

    provedor.pagar(sessao_id)
    pago = client.post("/api/v1/pagamentos/confirmar", json={"sessao_id": sessao_id})
    assert pago.status_code == 200
    assert pago.json()["sucesso"] is True
    assert pago.json()["agendamento"]["status"] == "confirmado"

    desconhecida = client.post("/api/v1/pagamentos/confirmar", json={"sessao_id": "pref_999"})
    assert desconhecida.status_code == 404


def test_rota_checkout_exige_login(client, cliente, corte, profissional):
    resposta = client.post("/api/v1/pagamentos/checkout", json=payload(cliente, corte, profissional))
    assert resposta.status_code == 401


def test_rota_checkout_profissional_sem_permissao(client, headers_profissional, cliente, corte, profissional):
    resposta = client.post(
        "/api/v1/pagamentos/checkout", json=payload(cliente, corte, profissional), headers=headers_profissional
    )
    assert resposta.status_code == 403


def test_rota_checkout_falha_do_provedor(client, headers_admin, cliente, corte, profissional, provedor):
    def falhar(**kwargs):
        raise ErroProvedor("fora do ar")

    provedor.criar_sessao = falhar
    resposta = client.post("/api/v1/pagamentos/checkout", json=payload(cliente, corte, profissional), headers=headers_admin)
    assert resposta.status_code == 502
