import logging
from datetime import date

import pytest
from fastapi import HTTPException

from barbearia.models.agendamento import Agendamento
from barbearia.models.barbearia import Barbearia
from barbearia.models.cliente import Cliente
from barbearia.models.servico import Servico
from barbearia.models.venda import ItemVenda, Venda
from barbearia.schemas.venda import ItemVendaCreate, VendaCreate
from barbearia.services import vendas
from conftest import criar_usuario


def nova_venda(profissional, *itens, forma="pix"):
    return VendaCreate(
        profissional_id=profissional.id,
        forma_pagamento=forma,
        itens=[ItemVendaCreate(servico_id=s.id, quantidade=q) for s, q in itens],
    )


def test_total_e_copia_de_nome_e_preco(db, barbearia, profissional, corte, pomada):
    venda = vendas.registrar_venda(db, barbearia.id, nova_venda(profissional, (corte, 1), (pomada, 2)))

    assert venda.valor_total == 110.0
    por_nome = {i.nome_servico: i for i in venda.itens}
    assert por_nome["Pomada"].valor_unitario == 30.0
    assert por_nome["Pomada"].valor_total == 60.0
    assert por_nome["Corte"].quantidade == 1


def test_baixa_estoque_de_produto(db, barbearia, profissional, pomada, corte):
    vendas.registrar_venda(db, barbearia.id, nova_venda(profissional, (pomada, 2), (corte, 1)))
    db.refresh(pomada)
    db.refresh(corte)
    assert pomada.estoque == 1
    assert corte.estoque is None


def test_estoque_insuficiente_zera_e_registra_aviso(db, barbearia, profissional, pomada, caplog):
    with caplog.at_level(logging.WARNING):
        venda = vendas.registrar_venda(db, barbearia.id, nova_venda(profissional, (pomada, 5)))

    db.refresh(pomada)
    assert pomada.estoque == 0
    assert venda.valor_total == 150.0
    assert "Estoque insuficiente" in caplog.text


def test_venda_sem_itens(db, barbearia, profissional):
    with pytest.raises(HTTPException) as exc:
        vendas.registrar_venda(db, barbearia.id, nova_venda(profissional))
    assert exc.value.status_code == 400
    assert exc.value.detail == "Adicione pelo menos um item à venda"


def test_item_inativo_nao_grava_nada(db, barbearia, profissional, corte, pomada):
    pomada.ativo = False
    db.commit()

    with pytest.raises(HTTPException) as exc:
        vendas.registrar_venda(db, barbearia.id, nova_venda(profissional, (corte, 1), (pomada, 1)))

    assert exc.value.status_code == 400
    assert db.query(ItemVenda).count() == 0


def test_item_de_outra_barbearia(db, barbearia, profissional):
    alheio = Servico(nome="Corte", preco=40.0, barbearia_id=barbearia.id + 1)
    db.add(alheio)
    db.commit()

    with pytest.raises(HTTPException):
        vendas.registrar_venda(db, barbearia.id, nova_venda(profissional, (alheio, 1)))


def test_rota_vendas(client, headers_profissional, profissional, corte, pomada):
    resposta = client.post(
        "/api/v1/vendas",
        json={
            "profissional_id": profissional.id,
            "forma_pagamento": "dinheiro",
            "itens": [{"servico_id": corte.id}, {"servico_id": pomada.id, "quantidade": 2}],
        },
        headers=headers_profissional,
    )
    assert resposta.status_code == 201, resposta.text
    venda = resposta.json()
    assert venda["valor_total"] == 110.0
    assert len(venda["itens"]) == 2

    lista = client.get("/api/v1/vendas?forma_pagamento=dinheiro", headers=headers_profissional)
    assert [v["id"] for v in lista.json()] == [venda["id"]]
    assert client.get("/api/v1/vendas?forma_pagamento=pix", headers=headers_profissional).json() == []

    detalhe = client.get(f"/api/v1/vendas/{venda['id']}", headers=headers_profissional)
    assert detalhe.status_code == 200


def test_rota_vendas_forma_pagamento_obrigatoria(client, headers_admin, profissional, corte):
    resposta = client.post(
        "/api/v1/vendas",
        json={"profissional_id": profissional.id, "itens": [{"servico_id": corte.id}]},
        headers=headers_admin,
    )
    assert resposta.status_code == 422


@pytest.fixture
def vizinha(db):
    b = Barbearia(nome="Navalha de Ouro", cidade="Olinda", estado="PE", slug="navalha-de-ouro")
    db.add(b)
    db.commit()
    db.refresh(b)
    return b


@pytest.fixture
def cliente_vizinho(db, vizinha):
    c = Cliente(nome="Pedro Lima", telefone="81988880000", barbearia_id=vizinha.id)
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


def test_cliente_de_outra_barbearia_nao_grava_venda(db, barbearia, profissional, corte, cliente_vizinho):
    dados = nova_venda(profissional, (corte, 1))
    dados.cliente_id = cliente_vizinho.id

    with pytest.raises(HTTPException) as exc:
        vendas.registrar_venda(db, barbearia.id, dados)

    assert exc.value.status_code == 400
    assert exc.value.detail == "Cliente não encontrado"
    assert db.query(Venda).count() == 0


def test_agendamento_de_outra_barbearia_nao_grava_venda(db, barbearia, profissional, corte, vizinha, cliente_vizinho):
    barbeiro = criar_usuario(db, "rui@navalha.com.br", role="profissional", barbearia_id=vizinha.id)
    servico = Servico(nome="Barba", preco=35.0, duracao=20, barbearia_id=vizinha.id)
    db.add(servico)
    db.commit()
    agendamento = Agendamento(
        cliente_id=cliente_vizinho.id, profissional_id=barbeiro.id, servico_id=servico.id,
        data_agendada=date(2024, 3, 1), horario="14:00", barbearia_id=vizinha.id,
    )
    db.add(agendamento)
    db.commit()

    dados = nova_venda(profissional, (corte, 1))
    dados.agendamento_id = agendamento.id

    with pytest.raises(HTTPException) as exc:
        vendas.registrar_venda(db, barbearia.id, dados)

    assert exc.value.status_code == 400
    assert exc.value.detail == "Agendamento não encontrado"
    assert db.query(Venda).count() == 0


def test_venda_com_cliente_e_agendamento_da_barbearia(db, barbearia, profissional, cliente, corte):
    agendamento = Agendamento(
        cliente_id=cliente.id, profissional_id=profissional.id, servico_id=corte.id,
        data_agendada=date(2024, 3, 1), horario="10:00", status="concluido", barbearia_id=barbearia.id,
    )
    db.add(agendamento)
    db.commit()

    dados = nova_venda(profissional, (corte, 1))
    dados.cliente_id = cliente.id
    dados.agendamento_id = agendamento.id
    venda = vendas.registrar_venda(db, barbearia.id, dados)

    assert venda.cliente_id == cliente.id
    assert venda.agendamento_id == agendamento.id


def test_rota_vendas_recusa_cliente_de_outra_barbearia(client, db, headers_admin, profissional, corte, cliente_vizinho):
    resposta = client.post(
        "/api/v1/vendas",
        json={
            "profissional_id": profissional.id,
            "forma_pagamento": "pix",
            "cliente_id": cliente_vizinho.id,
            "itens": [{"servico_id": corte.id}],
        },
        headers=headers_admin,
    )
    assert resposta.status_code == 400
    assert resposta.json()["detail"] == "Cliente não encontrado"

    relatorio = client.get("/api/v1/relatorios/financeiro", headers=headers_admin).json()
    assert relatorio["vendas"] == []


def test_rota_vendas_recusa_quantidade_zero(client, db, headers_admin, profissional, corte):
    resposta = client.post(
        "/api/v1/vendas",
        json={
            "profissional_id": profissional.id,
            "forma_pagamento": "pix",
            "itens": [{"servico_id": corte.id, "quantidade": 0}],
        },
        headers=headers_admin,
    )
    assert resposta.status_code == 422
    assert db.query(Venda).count() == 0
