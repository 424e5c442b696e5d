from datetime import date

from barbearia.models.agendamento import Agendamento
from barbearia.services import exportacao


def vender(client, headers, profissional, *itens, forma="pix"):
    resposta = client.post(
        "/api/v1/vendas",
        json={
            "profissional_id": profissional.id,
            "forma_pagamento": forma,
            "itens": [{"servico_id": s.id, "quantidade": q} for s, q in itens],
        },
        headers=headers,
    )
    assert resposta.status_code == 201, resposta.text
    return resposta.json()


def test_relatorio_financeiro_e_invalidacao_do_cache(client, headers_admin, profissional, corte):
    vender(client, headers_admin, profissional, (corte, 1))
    primeiro = client.get("/api/v1/relatorios/financeiro", headers=headers_admin).json()
    assert primeiro["total_receita"] == 50.0

    vender(client, headers_admin, profissional, (corte, 1), forma="dinheiro")
    segundo = client.get("/api/v1/relatorios/financeiro", headers=headers_admin).json()
    assert segundo["total_receita"] == 100.0
    assert {g["rotulo"] for g in segundo["por_forma_pagamento"]} == {"PIX", "Dinheiro"}


def test_relatorios_exigem_permissao(client, headers_profissional):
    assert client.get("/api/v1/relatorios/financeiro", headers=headers_profissional).status_code == 403


def test_relatorio_estoque(client, headers_admin, profissional, pomada):
    vender(client, headers_admin, profissional, (pomada, 2))
    estoque = client.get("/api/v1/relatorios/estoque", headers=headers_admin).json()
    assert estoque["produtos"][0]["estoque"] == 1
    assert estoque["produtos"][0]["situacao"] == "Estoque baixo"


def test_relatorio_clientes_filtrado_por_profissional(client, db, headers_admin, barbearia, cliente, profissional, corte):
    db.add(Agendamento(
        cliente_id=cliente.id, profissional_id=profissional.id, servico_id=corte.id,
        data_agendada=date.today(), horario="10:00", status="concluido", barbearia_id=barbearia.id,
    ))
    db.commit()

    r = client.get(f"/api/v1/relatorios/clientes?profissional_id={profissional.id}", headers=headers_admin).json()
    assert r["total_clientes"] == 1
    assert r["clientes"][0]["agendamentos_concluidos"] == 1

    vazio = client.get(f"/api/v1/relatorios/clientes?profissional_id={profissional.id + 99}", headers=headers_admin).json()
    assert vazio["total_clientes"] == 0


def test_exportar_csv(client, headers_admin, profissional, corte):
    vender(client, headers_admin, profissional, (corte, 2), forma="cartao_credito")
    resposta = client.get("/api/v1/relatorios/financeiro/csv", headers=headers_admin)

    assert resposta.status_code == 200
    assert resposta.headers["content-type"].startswith("text/csv")
    assert f'filename="{exportacao.nome_arquivo("financeiro")}"' in resposta.headers["content-disposition"]
    linhas = resposta.text.strip().splitlines()
    assert linhas[0] == "Data,Profissional,Cliente,Método Pagamento,Valor"
    assert linhas[1].endswith("Joao,N/A,Cartão Créd.,100.00")


def test_exportar_tipo_desconhecido(client, headers_admin):
    assert client.get("/api/v1/relatorios/inventado/csv", headers=headers_admin).status_code == 404


def test_dashboard(client, db, headers_admin, barbearia, cliente, profissional, corte, pomada):
    vender(client, headers_admin, profissional, (corte, 1), (pomada, 1))
    db.add(Agendamento(
        cliente_id=cliente.id, profissional_id=profissional.id, servico_id=corte.id,
        data_agendada=date.today(), horario="11:00", status="concluido", barbearia_id=barbearia.id,
    ))
    db.commit()

    painel = client.get("/api/v1/dashboard?dias=7", headers=headers_admin).json()
    assert painel["kpis"]["total_clientes"] == 1
    assert painel["kpis"]["receita_total"] == 80.0
    assert painel["kpis"]["ticket_medio"] == 80.0
    assert [s["rotulo"] for s in painel["top_servicos"]] == ["Corte", "Pomada"]
    assert painel["agendamentos_por_status"] == [{"rotulo": "Concluído", "valor": 1}]
    assert painel["desempenho_profissionais"][0]["agendamentos_concluidos"] == 1
