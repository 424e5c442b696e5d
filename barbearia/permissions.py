# -*- coding: utf-8 -*-
"""
Tabela de capacidades por papel.

As rotas não testam o papel do usuário diretamente: cada rota declara a ação
que executa (ex.: "vendas:criar") e a dependência `auth.requer` consulta `can`.
"""

ACOES = frozenset({
    "agendamentos:ler",
    "agendamentos:criar",
    "agendamentos:editar",
    "agendamentos:status",
    "clientes:ler",
    "clientes:gerenciar",
    "servicos:ler",
    "servicos:gerenciar",
    "vendas:ler",
    "vendas:criar",
    "caixa:ler",
    "caixa:gerenciar",
    "equipe:ler",
    "equipe:gerenciar",
    "relatorios:ler",
    "barbearia:gerenciar",
    "pagamentos:checkout",
})

CAPACIDADES = {
    "admin": ACOES,
    "recepcionista": ACOES - {"equipe:gerenciar", "barbearia:gerenciar"},
    "profissional": frozenset({
        "agendamentos:ler",
        "agendamentos:status",
        "clientes:ler",
        "servicos:ler",
        "vendas:ler",
        "vendas:criar",
        "equipe:ler",
    }),
}


def can(role: str, acao: str) -> bool:
    """Retorna True se o papel pode executar a ação. Papéis ou ações desconhecidos negam."""
    return acao in CAPACIDADES.get(role, frozenset())
