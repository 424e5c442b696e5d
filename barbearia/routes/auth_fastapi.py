# -*- coding: utf-8 -*-
"""
Rotas de cadastro, confirmação de e-mail e login.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from barbearia import auth, database, notificacoes
from barbearia.models.usuario import Usuario
from barbearia.schemas import usuario as schemas_usuario

router = APIRouter(
    prefix="/api/v1/auth",
    tags=["Authentication"],
)

MENSAGEM_REENVIO = "Se o email estiver cadastrado e pendente, um novo link foi enviado."


@router.post("/cadastro", status_code=status.HTTP_201_CREATED)
def cadastrar(dados: schemas_usuario.Cadastro, db: Session = Depends(database.get_db)):
    """
    Cria a conta do dono da barbearia. O login só é liberado após a confirmação do e-mail.
    """
    if auth.get_user(db, email=dados.email):
        raise HTTPException(status_code=400, detail="Usuário já cadastrado")

    usuario = Usuario(
        email=dados.email,
        nome=dados.nome,
        hashed_password=auth.get_password_hash(dados.senha),
        role="admin",
        email_confirmado=False,
    )
    try:
        db.add(usuario)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Usuário já cadastrado")

    notificacoes.enviar_email_confirmacao(usuario.email, auth.create_confirmation_token(usuario.email))
    return {"mensagem": "Cadastro realizado! Verifique seu email para ativar a conta antes de fazer login."}


@router.get("/confirmar")
def confirmar_email(token: str, db: Session = Depends(database.get_db)):
    email = auth.read_confirmation_token(token)
    usuario = auth.get_user(db, email=email) if email else None
    if usuario is None:
        raise HTTPException(
            status_code=400,
            detail="Link inválido ou expirado. Tente fazer um novo cadastro.",
        )
    if not usuario.email_confirmado:
        usuario.email_confirmado = True
        db.commit()
    return {"mensagem": "Email confirmado! Sua conta foi ativada. Você pode fazer login agora."}


@router.post("/reenviar-confirmacao")
def reenviar_confirmacao(dados: schemas_usuario.ReenvioConfirmacao, db: Session = Depends(database.get_db)):
    usuario = auth.get_user(db, email=dados.email)
    # Mesma resposta para qualquer e-mail, para não revelar quem tem conta
    if usuario is not None and not usuario.email_confirmado:
        notificacoes.enviar_email_confirmacao(usuario.email, auth.create_confirmation_token(usuario.email))
    return {"mensagem": MENSAGEM_REENVIO}


@router.post("/token", response_model=schemas_usuario.Token)
async def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(database.get_db)):
    user = auth.get_user(db, email=form_data.username)  # o email é o username
    if not user or not user.hashed_password or not auth.verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha incorretos",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.email_confirmado:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Email não confirmado. Verifique sua caixa de entrada e clique no link de confirmação.",
        )
    if not user.ativo:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Sua conta está desativada.")

    access_token = auth.create_access_token(data={"sub": user.email, "role": user.role})
    user_info = schemas_usuario.UsuarioRead.model_validate(user)
    return {"access_token": access_token, "token_type": "bearer", "user_info": user_info}


@router.get("/me", response_model=schemas_usuario.UsuarioRead)
async def read_users_me(current_user: Usuario = Depends(auth.get_current_active_user)):
    """
    Retorna os dados do usuário atualmente logado.
    """
    return current_user
