# -*- coding: utf-8 -*-
"""
Cache no Redis com invalidação explícita por tag.

Cada entrada é gravada com `setex` e registrada no conjunto de cada tag de que
depende (ex.: o relatório financeiro depende de "vendas"). Uma mutação chama
`invalidate("vendas")`, que apaga as entradas do conjunto e publica a tag no
canal de invalidação, visível para todos os workers.

Sem Redis disponível o cache só deixa de guardar: toda leitura é um miss e o
valor é recalculado.
"""
import json
import logging
from typing import Any, Callable, Iterable, Optional

import redis
from fastapi.encoders import jsonable_encoder

from barbearia.config import CACHE_TTL_SEGUNDOS, REDIS_URL

PREFIXO = "barbearia:cache:"
PREFIXO_TAG = "barbearia:tag:"
CANAL_INVALIDACAO = "barbearia:invalidacao:"

_redis_client: Optional[redis.Redis] = None


def get_redis_client() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
    return _redis_client


class CacheStore:
    def __init__(self, cliente: Optional[redis.Redis] = None, ttl: int = CACHE_TTL_SEGUNDOS):
        self._cliente = cliente
        self.ttl = ttl

    @property
    def cliente(self) -> redis.Redis:
        if self._cliente is None:
            self._cliente = get_redis_client()
        return self._cliente

    @cliente.setter
    def cliente(self, valor: redis.Redis):
        self._cliente = valor

    def get(self, chave: str, default: Any = None) -> Any:
        try:
            valor = self.cliente.get(PREFIXO + chave)
        except redis.RedisError as e:
            logging.warning(f"Cache indisponível ao ler {chave}: {e}")
            return default
        if valor is None:
            return default
        return json.loads(valor)

    def set(self, chave: str, valor: Any, tags: Iterable[str] = ()) -> None:
        """Grava o valor (serializável em JSON) com o TTL do cache e o associa às tags."""
        try:
            pipe = self.cliente.pipeline()
            pipe.setex(PREFIXO + chave, self.ttl, json.dumps(valor))
            for tag in tags:
                pipe.sadd(PREFIXO_TAG + tag, chave)
                pipe.expire(PREFIXO_TAG + tag, self.ttl)
            pipe.execute()
        except redis.RedisError as e:
            logging.warning(f"Cache indisponível ao gravar {chave}: {e}")

    def obter_ou_calcular(self, chave: str, tags: Iterable[str], calcular: Callable[[], Any]) -> Any:
        """
        Devolve o valor em cache ou calcula, grava e devolve.

        O valor passa por `jsonable_encoder`, então datas saem como strings ISO
        tanto no primeiro cálculo quanto nas leituras seguintes.
        """
        valor = self.get(chave)
        if valor is None:
            valor = jsonable_encoder(calcular())
            self.set(chave, valor, tags)
        return valor

    def invalidate(self, tag: str) -> int:
        """Remove todas as entradas com a tag e publica a invalidação. Retorna quantas saíram."""
        try:
            chaves = self.cliente.smembers(PREFIXO_TAG + tag)
            removidas = self.cliente.delete(*[PREFIXO + c for c in chaves]) if chaves else 0
            self.cliente.delete(PREFIXO_TAG + tag)
            self.cliente.publish(CANAL_INVALIDACAO + tag, tag)
        except redis.RedisError as e:
            logging.warning(f"Cache indisponível ao invalidar a tag {tag}: {e}")
            return 0
        logging.debug(f"Cache invalidado: tag={tag} entradas={removidas}")
        return removidas

    def subscribe(self, tag: str, callback: Callable[[str], None]) -> Callable[[], None]:
        """
        Chama `callback(tag)` a cada invalidação da tag, vinda de qualquer processo.
        Retorna a função que cancela a inscrição.
        """
        pubsub = self.cliente.pubsub(ignore_subscribe_messages=True)
        pubsub.subscribe(**{CANAL_INVALIDACAO + tag: lambda mensagem: callback(mensagem["data"])})
        thread = pubsub.run_in_thread(sleep_time=0.01, daemon=True)

        def cancelar():
            thread.stop()
            pubsub.close()

        return cancelar

    def clear(self) -> None:
        try:
            for padrao in (PREFIXO + "*", PREFIXO_TAG + "*"):
                chaves = list(self.cliente.scan_iter(padrao))
                if chaves:
                    self.cliente.delete(*chaves)
        except redis.RedisError as e:
            logging.warning(f"Cache indisponível ao limpar: {e}")


def chave_cache(*partes: Optional[Any]) -> str:
    return ":".join("" if p is None else str(p) for p in partes)


cache = CacheStore()


def get_cache() -> CacheStore:
    return cache
