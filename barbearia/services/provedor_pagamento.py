# -*- coding: utf-8 -*-
"""
Integração com o checkout hospedado do Mercado Pago.

A "sessão de checkout" é uma preferência do Mercado Pago: o id da preferência
é o id da sessão, e o status de pagamento é obtido buscando os pagamentos que
carregam a referência externa da preferência.
"""
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import mercadopago

from barbearia.config import MP_ACCESS_TOKEN

STATUS_PAGO = "paid"
STATUS_NAO_PAGO = "unpaid"


class ErroProvedor(Exception):
    """Falha de comunicação ou resposta inesperada do provedor."""


class SessaoNaoEncontrada(ErroProvedor):
    """O provedor não conhece a sessão informada."""


@dataclass
class ItemCheckout:
    titulo: str
    valor_unitario_centavos: int
    quantidade: int = 1
    descricao: str = ""
    moeda: str = "BRL"


@dataclass
class SessaoCheckout:
    id: str
    url: str = ""
    status_pagamento: str = STATUS_NAO_PAGO
    valor_total: int = 0  # centavos
    metadados: Dict[str, str] = field(default_factory=dict)


class ProvedorMercadoPago:
    def __init__(self, access_token: str = MP_ACCESS_TOKEN, sdk=None):
        self._sdk = sdk
        self._access_token = access_token

    @property
    def sdk(self):
        if self._sdk is None:
            if not self._access_token:
                logging.error("MP_ACCESS_TOKEN não configurado no ambiente.")
                raise ErroProvedor("Erro de configuração de pagamento (SDK).")
            self._sdk = mercadopago.SDK(self._access_token)
        return self._sdk

    def criar_sessao(
        self,
        itens: List[ItemCheckout],
        url_sucesso: str,
        url_cancelamento: str,
        metadados: Dict[str, str],
        email_cliente: Optional[str] = None,
    ) -> SessaoCheckout:
        referencia = f"checkout_{uuid.uuid4().hex}"
        preference_data = {
            "items": [
                {
                    "title": item.titulo,
                    "description": item.descricao,
                    "quantity": item.quantidade,
                    "currency_id": item.moeda,
                    # O Mercado Pago trabalha em reais, não em centavos
                    "unit_price": item.valor_unitario_centavos / 100,
                }
                for item in itens
            ],
            "back_urls": {
                "success": url_sucesso,
                "failure": url_cancelamento,
                "pending": url_cancelamento,
            },
            "auto_return": "approved",
            "external_reference": referencia,
            "metadata": metadados,
        }
        if email_cliente:
            preference_data["payer"] = {"email": email_cliente}

        request_options = mercadopago.config.RequestOptions()
        request_options.custom_headers = {"x-idempotency-key": referencia}

        try:
            resposta = self.sdk.preference().create(preference_data, request_options)
        except Exception as e:
            # O SDK propaga exceções de rede sem hierarquia própria
            logging.error(f"Erro ao criar preferência no Mercado Pago: {e}")
            raise ErroProvedor(str(e)) from e

        preferencia = resposta.get("response", {})
        if resposta.get("status") not in (200, 201):
            logging.error(f"Erro MP Response: {preferencia}")
            raise ErroProvedor(preferencia.get("message", "Erro ao criar sessão de pagamento."))

        return SessaoCheckout(
            id=preferencia["id"],
            url=preferencia.get("init_point", ""),
            valor_total=sum(i.valor_unitario_centavos * i.quantidade for i in itens),
            metadados=dict(metadados),
        )

    def recuperar_sessao(self, sessao_id: str) -> SessaoCheckout:
        try:
            resposta = self.sdk.preference().get(sessao_id)
        except Exception as e:
            logging.error(f"Erro ao consultar preferência {sessao_id}: {e}")
            raise ErroProvedor(str(e)) from e

        if resposta.get("status") == 404:
            raise SessaoNaoEncontrada(sessao_id)
        if resposta.get("status") != 200:
            raise ErroProvedor(f"Resposta inesperada do Mercado Pago: {resposta.get('status')}")

        preferencia = resposta["response"]
        referencia = preferencia.get("external_reference")

        aprovados = []
        if referencia:
            try:
                busca = self.sdk.payment().search({"external_reference": referencia})
            except Exception as e:
                logging.error(f"Erro ao buscar pagamentos da referência {referencia}: {e}")
                raise ErroProvedor(str(e)) from e
            resultados = busca.get("response", {}).get("results", [])
            aprovados = [p for p in resultados if p.get("status") == "approved"]

        valor_total = round(sum(float(p.get("transaction_amount", 0)) for p in aprovados) * 100)
        # O Mercado Pago devolve as chaves de metadata em snake_case, como enviadas
        metadados = {k: "" if v is None else str(v) for k, v in (preferencia.get("metadata") or {}).items()}

        return SessaoCheckout(
            id=preferencia["id"],
            url=preferencia.get("init_point", ""),
            status_pagamento=STATUS_PAGO if aprovados else STATUS_NAO_PAGO,
            valor_total=valor_total,
            metadados=metadados,
        )


def get_provedor_pagamento():
    return ProvedorMercadoPago()
