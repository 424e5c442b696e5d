# -*- coding: utf-8 -*-
"""
Autenticação (senha + JWT), confirmação de e-mail e a sessão explícita
que as rotas recebem por injeção de dependência.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from barbearia import database
from barbearia.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    EMAIL_TOKEN_EXPIRE_HOURS,
    SECRET_KEY,
)
from barbearia.models.usuario import Usuario
from barbearia.permissions import can

FINALIDADE_CONFIRMACAO = "confirmacao_email"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict):
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_confirmation_token(email: str):
    expire = datetime.utcnow() + timedelta(hours=EMAIL_TOKEN_EXPIRE_HOURS)
    dados = {"sub": email, "finalidade": FINALIDADE_CONFIRMACAO, "exp": expire}
    return jwt.encode(dados, SECRET_KEY, algorithm=ALGORITHM)


def read_confirmation_token(token: str) -> Optional[str]:
    """Retorna o e-mail do token de confirmação, ou None se inválido/expirado."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("finalidade") != FINALIDADE_CONFIRMACAO:
        return None
    return payload.get("sub")


def get_user(db: Session, email: str):
    return db.query(Usuario).filter(Usuario.email == email).first()


@dataclass
class Sessao:
    """Usuário autenticado e o tenant em que ele atua."""

    usuario: Usuario
    barbearia_id: Optional[int]

    @property
    def role(self) -> str:
        return self.usuario.role

    def pode(self, acao: str) -> bool:
        return can(self.role, acao)


async def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(database.get_db)):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Credenciais inválidas", headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        email: str = payload.get("sub")
        if email is None or payload.get("finalidade") is not None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception
    user = get_user(db, email=email)
    if user is None:
        raise credentials_exception
    return user


async def get_current_active_user(current_user: Usuario = Depends(get_current_user)):
    """
    Bloqueia contas desativadas ou com e-mail ainda não confirmado.
    """
    if not current_user.ativo:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Sua conta está desativada.")
    if not current_user.email_confirmado:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Email não confirmado. Verifique sua caixa de entrada e clique no link de confirmação.",
        )
    return current_user


async def get_sessao(current_user: Usuario = Depends(get_current_active_user)) -> Sessao:
    return Sessao(usuario=current_user, barbearia_id=current_user.barbearia_id)


def requer(acao: str, detail: str = "Seu perfil não tem permissão para esta ação."):
    """
    Dependência que exige a capacidade `acao` e uma barbearia vinculada.

    Uso: `sessao: Sessao = Depends(auth.requer("vendas:criar"))`
    """
    async def dependencia(sessao: Sessao = Depends(get_sessao)) -> Sessao:
        if not sessao.pode(acao):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        if sessao.barbearia_id is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Configure sua barbearia antes de continuar.",
            )
        return sessao

    return dependencia
