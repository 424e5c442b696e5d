# -*- coding: utf-8 -*-
"""
Exportação dos relatórios em CSV.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

# (coluna do CSV, campo da linha)
COLUNAS = {
    "financeiro": [
        ("Data", "data"),
        ("Profissional", "profissional"),
        ("Cliente", "cliente"),
        ("Método Pagamento", "forma_pagamento"),
        ("Valor", "valor_total"),
    ],
    "agendamentos": [
        ("Data", "data_agendada"),
        ("Horário", "horario"),
        ("Cliente", "cliente"),
        ("Profissional", "profissional"),
        ("Serviço", "servico"),
        ("Status", "status_label"),
    ],
    "clientes": [
        ("Nome", "nome"),
        ("Email", "email"),
        ("Telefone", "telefone"),
        ("Total Agendamentos", "total_agendamentos"),
        ("Agendamentos Concluídos", "agendamentos_concluidos"),
        ("Ativo", "ativo_label"),
        ("Último Agendamento", "ultimo_agendamento"),
    ],
    "produtos-servicos": [
        ("Item", "nome"),
        ("Tipo", "tipo"),
        ("Quantidade", "quantidade"),
        ("Receita", "receita"),
    ],
    "estoque": [
        ("Produto", "nome"),
        ("Estoque", "estoque"),
        ("Situação", "situacao"),
    ],
}


def _formatar(valor):
    if valor is None:
        return "N/A"
    if isinstance(valor, float):
        return f"{valor:.2f}"
    if isinstance(valor, date):
        return valor.isoformat()
    return valor


def para_csv(linhas: List[Dict[str, Any]], colunas: List[Tuple[str, str]]) -> str:
    """Monta o CSV com as colunas na ordem dada; campos ausentes saem como 'N/A'."""
    cabecalhos = [titulo for titulo, _ in colunas]
    registros = [[_formatar(linha.get(campo)) for _, campo in colunas] for linha in linhas]
    df = pd.DataFrame(registros, columns=cabecalhos)
    return df.to_csv(index=False)


def nome_arquivo(tipo: str, hoje: Optional[date] = None) -> str:
    hoje = hoje or datetime.utcnow().date()
    return f"relatorio-{tipo}-{hoje.isoformat()}.csv"
