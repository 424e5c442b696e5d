# -*- coding: utf-8 -*-
"""
Agregações dos relatórios e do dashboard.

Funções puras: recebem linhas já buscadas do banco (dicts) e devolvem
resumos prontos para os gráficos. Nenhuma consulta é feita aqui.
"""
from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional

from barbearia.models.agendamento import STATUS_LABELS
from barbearia.models.venda import FORMA_PAGAMENTO_LABELS

TOP_RELATORIOS = 10
TOP_DASHBOARD = 5
DIAS_CLIENTE_ATIVO = 90


def _arredondar(valor):
    return round(valor, 2) if isinstance(valor, float) else valor


def dia_de(valor) -> str:
    """Data de calendário (AAAA-MM-DD) de um date, datetime ou string ISO."""
    if isinstance(valor, datetime):
        return valor.date().isoformat()
    if isinstance(valor, date):
        return valor.isoformat()
    return str(valor).split("T")[0].split(" ")[0]


def agregar(
    linhas: Iterable[Dict[str, Any]],
    chave: Callable[[Dict[str, Any]], str],
    medida: Callable[[Dict[str, Any]], float] = lambda _: 1,
) -> List[Dict[str, Any]]:
    """
    Agrupa as linhas pelo rótulo devolvido por `chave` e soma `medida` em cada grupo.

    A ordem dos grupos é a da primeira aparição. Sem `medida`, conta as linhas.
    """
    grupos: Dict[str, Any] = OrderedDict()
    for linha in linhas:
        rotulo = chave(linha)
        grupos[rotulo] = grupos.get(rotulo, 0) + medida(linha)
    return [{"rotulo": rotulo, "valor": _arredondar(valor)} for rotulo, valor in grupos.items()]


def ordenar_por_rotulo(grupos: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(grupos, key=lambda g: g["rotulo"])


def top_n(grupos: List[Dict[str, Any]], n: int, campo: str = "valor") -> List[Dict[str, Any]]:
    """Os n maiores por `campo`, em ordem decrescente; empates mantêm a ordem de entrada."""
    return sorted(grupos, key=lambda g: -g[campo])[:n]


# --- FINANCEIRO ---

def rotulo_forma_pagamento(forma: str) -> str:
    return FORMA_PAGAMENTO_LABELS.get(forma, "Transferência")


def receita_diaria(vendas: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    grupos = ordenar_por_rotulo(agregar(vendas, lambda v: dia_de(v["data_pagamento"]), lambda v: float(v["valor_total"])))
    return [{"data": g["rotulo"], "receita": g["valor"]} for g in grupos]


def relatorio_financeiro(vendas: List[Dict[str, Any]]) -> Dict[str, Any]:
    total = sum(float(v["valor_total"]) for v in vendas)
    return {
        "total_receita": _arredondar(float(total)),
        "total_vendas": len(vendas),
        "por_forma_pagamento": agregar(
            vendas, lambda v: rotulo_forma_pagamento(v["forma_pagamento"]), lambda v: float(v["valor_total"])
        ),
        "por_profissional": agregar(
            vendas, lambda v: v.get("profissional") or "Desconhecido", lambda v: float(v["valor_total"])
        ),
        "receita_diaria": receita_diaria(vendas),
        "vendas": vendas,
    }


# --- AGENDAMENTOS ---

def rotulo_status(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def agendamentos_por_status(agendamentos: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return agregar(agendamentos, lambda a: rotulo_status(a["status"]))


def relatorio_agendamentos(agendamentos: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "total_agendamentos": len(agendamentos),
        "agendamentos_concluidos": sum(1 for a in agendamentos if a["status"] == "concluido"),
        "agendamentos_cancelados": sum(1 for a in agendamentos if a["status"] == "cancelado"),
        "por_status": agendamentos_por_status(agendamentos),
        "por_servico": agregar(agendamentos, lambda a: a.get("servico") or "Serviço não informado"),
        "por_profissional": agregar(agendamentos, lambda a: a.get("profissional") or "Profissional não informado"),
        "agendamentos": agendamentos,
    }


# --- CLIENTES ---

def media_dias_entre_visitas(datas: List[date]) -> int:
    if len(datas) < 2:
        return 0
    ordenadas = sorted(datas)
    total = sum((b - a).days for a, b in zip(ordenadas, ordenadas[1:]))
    return round(total / (len(ordenadas) - 1))


def estatisticas_cliente(cliente: Dict[str, Any], agendamentos: List[Dict[str, Any]], hoje: date) -> Dict[str, Any]:
    datas = [a["data_agendada"] for a in agendamentos]
    ultimo = max(datas) if datas else None
    return {
        **cliente,
        "total_agendamentos": len(agendamentos),
        "agendamentos_concluidos": sum(1 for a in agendamentos if a["status"] == "concluido"),
        "media_dias_entre_visitas": media_dias_entre_visitas(datas),
        "ultimo_agendamento": ultimo,
        "ativo": ultimo is not None and (hoje - ultimo) <= timedelta(days=DIAS_CLIENTE_ATIVO),
    }


def relatorio_clientes(
    clientes: List[Dict[str, Any]],
    agendamentos: List[Dict[str, Any]],
    filtrado: bool,
    hoje: Optional[date] = None,
) -> Dict[str, Any]:
    """
    `agendamentos` já vem filtrado por período/profissional. Com filtro ativo,
    clientes sem agendamentos no recorte ficam de fora.
    """
    hoje = hoje or datetime.utcnow().date()
    por_cliente: Dict[int, List[Dict[str, Any]]] = {}
    for a in agendamentos:
        por_cliente.setdefault(a["cliente_id"], []).append(a)

    estatisticas = [estatisticas_cliente(c, por_cliente.get(c["id"], []), hoje) for c in clientes]
    if filtrado:
        estatisticas = [c for c in estatisticas if c["total_agendamentos"] > 0]

    ordenados = sorted(estatisticas, key=lambda c: -c["total_agendamentos"])
    total = len(ordenados)
    media_visitas = sum(c["total_agendamentos"] for c in ordenados) / total if total else 0

    return {
        "total_clientes": total,
        "clientes_ativos": sum(1 for c in ordenados if c["ativo"]),
        "clientes_recorrentes": sum(1 for c in ordenados if c["total_agendamentos"] > 1),
        "media_visitas_por_cliente": round(media_visitas, 1),
        "top_clientes": [
            {"nome": c["nome"].split(" ")[0], "agendamentos": c["total_agendamentos"]}
            for c in ordenados[:TOP_RELATORIOS]
        ],
        "clientes": ordenados,
    }


# --- PRODUTOS E SERVIÇOS ---

def itens_vendidos(itens: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Quantidade e receita por nome de item, na ordem da primeira venda."""
    por_nome: Dict[str, Dict[str, Any]] = OrderedDict()
    for item in itens:
        nome = item.get("nome_servico") or "Item sem nome"
        atual = por_nome.setdefault(nome, {
            "nome": nome,
            "quantidade": 0,
            "receita": 0.0,
            "tipo": item.get("tipo") or "servico",
        })
        atual["quantidade"] += item.get("quantidade") or 0
        atual["receita"] = _arredondar(atual["receita"] + float(item.get("valor_total") or 0))
    return list(por_nome.values())


def relatorio_produtos_servicos(itens: List[Dict[str, Any]]) -> Dict[str, Any]:
    agrupados = top_n(itens_vendidos(itens), len(itens), campo="quantidade")
    return {
        "total_itens": len(agrupados),
        "quantidade_total": sum(i["quantidade"] for i in agrupados),
        "receita_total": _arredondar(float(sum(i["receita"] for i in agrupados))),
        "top_itens": agrupados[:TOP_RELATORIOS],
        "itens": agrupados,
    }


# --- ESTOQUE ---

def situacao_estoque(estoque: Optional[int], limite: int) -> str:
    if estoque is None:
        return "N/A"
    if estoque <= 0:
        return "Sem estoque"
    if estoque <= limite:
        return "Estoque baixo"
    return "Em estoque"


def relatorio_estoque(produtos: List[Dict[str, Any]], limite: int) -> Dict[str, Any]:
    linhas = [{**p, "situacao": situacao_estoque(p.get("estoque"), limite)} for p in produtos]
    return {
        "total_produtos": len(linhas),
        "estoque_baixo": [p for p in linhas if p.get("estoque") is not None and p["estoque"] <= limite],
        "produtos": linhas,
    }


# --- DASHBOARD ---

def kpis(total_clientes: int, total_agendamentos: int, vendas: List[Dict[str, Any]]) -> Dict[str, Any]:
    receita = float(sum(float(v["valor_total"]) for v in vendas))
    return {
        "total_clientes": total_clientes,
        "total_agendamentos": total_agendamentos,
        "receita_total": _arredondar(receita),
        "total_vendas": len(vendas),
        "ticket_medio": _arredondar(receita / len(vendas)) if vendas else 0,
    }


def top_servicos(itens: List[Dict[str, Any]], n: int = TOP_DASHBOARD) -> List[Dict[str, Any]]:
    receita = agregar(itens, lambda i: i.get("nome_servico") or "Item sem nome", lambda i: float(i["valor_total"]))
    return top_n(receita, n)


def desempenho_profissionais(vendas: List[Dict[str, Any]], concluidos: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Receita, vendas e atendimentos concluídos por profissional, maior receita primeiro."""
    stats: Dict[Any, Dict[str, Any]] = OrderedDict()

    def linha(prof_id, nome):
        return stats.setdefault(prof_id, {
            "profissional_id": prof_id,
            "nome": nome or "Desconhecido",
            "receita": 0.0,
            "vendas": 0,
            "agendamentos_concluidos": 0,
        })

    for v in vendas:
        atual = linha(v["profissional_id"], v.get("profissional"))
        atual["receita"] = _arredondar(atual["receita"] + float(v["valor_total"]))
        atual["vendas"] += 1
    for a in concluidos:
        linha(a["profissional_id"], a.get("profissional"))["agendamentos_concluidos"] += 1

    return top_n(list(stats.values()), len(stats), campo="receita")


# --- CAIXA ---

def fluxo_caixa(vendas: List[Dict[str, Any]], transacoes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Entradas (vendas + entradas manuais), saídas e saldo por dia, em ordem cronológica."""
    dias: Dict[str, Dict[str, Any]] = {}

    def dia(valor):
        chave = dia_de(valor)
        return dias.setdefault(chave, {"data": chave, "entradas": 0.0, "saidas": 0.0, "saldo": 0.0})

    for v in vendas:
        dia(v["data_pagamento"])["entradas"] += float(v["valor_total"])
    for t in transacoes:
        campo = "entradas" if t["tipo"] == "entrada" else "saidas"
        dia(t["criado_em"])[campo] += float(t["valor"])

    resultado = []
    for chave in sorted(dias):
        d = dias[chave]
        resultado.append({
            "data": chave,
            "entradas": _arredondar(d["entradas"]),
            "saidas": _arredondar(d["saidas"]),
            "saldo": _arredondar(d["entradas"] - d["saidas"]),
        })
    return resultado


def totais_caixa(vendas: List[Dict[str, Any]], transacoes: List[Dict[str, Any]]) -> Dict[str, Any]:
    total_vendas = float(sum(float(v["valor_total"]) for v in vendas))
    entradas = float(sum(float(t["valor"]) for t in transacoes if t["tipo"] == "entrada"))
    saidas = float(sum(float(t["valor"]) for t in transacoes if t["tipo"] == "saida"))
    return {
        "vendas": _arredondar(total_vendas),
        "entradas": _arredondar(entradas),
        "saidas": _arredondar(saidas),
        "saldo": _arredondar(total_vendas + entradas - saidas),
    }


def resumo_caixa(vendas, transacoes, inicio_dia: datetime) -> Dict[str, Any]:
    """Totais do dia e do mês. As linhas recebidas já são do mês corrente."""
    vendas_dia = [v for v in vendas if v["data_pagamento"] >= inicio_dia]
    transacoes_dia = [t for t in transacoes if t["criado_em"] >= inicio_dia]
    return {
        "dia": totais_caixa(vendas_dia, transacoes_dia),
        "mes": totais_caixa(vendas, transacoes),
    }
