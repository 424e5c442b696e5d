# -*- coding: utf-8 -*-
"""
Envio de mensagens ao usuário. Por enquanto o link de confirmação é apenas
registrado no log; o provedor de e-mail entra aqui.
"""
import logging

from barbearia.config import FRONTEND_URL


def link_confirmacao(token: str) -> str:
    return f"{FRONTEND_URL}/auth/confirm?token={token}"


def enviar_email_confirmacao(email: str, token: str) -> str:
    link = link_confirmacao(token)
    logging.info(f"Link de confirmação para {email}: {link}")
    return link
