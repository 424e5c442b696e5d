from datetime import date, datetime
from unittest.mock import patch

from barbearia.services import exportacao


def test_para_csv_formata_valores_ausentes_e_decimais():
    linhas = [{"nome": "Pomada", "estoque": None, "situacao": "N/A"}, {"nome": "Gel", "estoque": 2, "situacao": "Estoque baixo"}]
    csv = exportacao.para_csv(linhas, exportacao.COLUNAS["estoque"])
    assert csv.splitlines() == [
        "Produto,Estoque,Situação",
        "Pomada,N/A,N/A",
        "Gel,2,Estoque baixo",
    ]


def test_para_csv_sem_linhas_mantem_cabecalho():
    csv = exportacao.para_csv([], exportacao.COLUNAS["produtos-servicos"])
    assert csv.strip() == "Item,Tipo,Quantidade,Receita"


def test_datas_e_valores():
    linhas = [{"nome": "Ana", "ultimo_agendamento": date(2024, 2, 3), "total_agendamentos": 4, "ativo_label": "Sim"}]
    csv = exportacao.para_csv(linhas, exportacao.COLUNAS["clientes"])
    assert csv.splitlines()[1] == "Ana,N/A,N/A,4,N/A,Sim,2024-02-03"


def test_nome_arquivo():
    assert exportacao.nome_arquivo("estoque", date(2024, 1, 5)) == "relatorio-estoque-2024-01-05.csv"


def test_nome_arquivo_usa_data_utc():
    with patch("barbearia.services.exportacao.datetime") as relogio:
        relogio.utcnow.return_value = datetime(2024, 1, 6, 2, 0)
        assert exportacao.nome_arquivo("financeiro") == "relatorio-financeiro-2024-01-06.csv"
