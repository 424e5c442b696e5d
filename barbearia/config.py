# -*- coding: utf-8 -*-
"""
Configurações da aplicação, lidas do ambiente ou do arquivo .env.
"""

from starlette.config import Config

config = Config(".env")

ENVIRONMENT = config("ENVIRONMENT", default="development")

# --- BANCO DE DADOS ---
DATABASE_URL = config("DATABASE_URL", default="sqlite:///./barbearia.db")

# Render/Heroku ainda entregam o prefixo antigo
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- SEGURANÇA ---
SECRET_KEY = config("SECRET_KEY", default="troque-esta-chave-em-producao")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = config("ACCESS_TOKEN_EXPIRE_MINUTES", cast=int, default=60 * 8)
EMAIL_TOKEN_EXPIRE_HOURS = config("EMAIL_TOKEN_EXPIRE_HOURS", cast=int, default=24)
CRIAR_ADMIN_INICIAL = config("CRIAR_ADMIN_INICIAL", cast=bool, default=True)
ADMIN_EMAIL = config("ADMIN_EMAIL", default="admin@barbearia.com.br")
ADMIN_SENHA = config("ADMIN_SENHA", default="admin123")

# --- URLs ---
FRONTEND_URL = config("FRONTEND_URL", default="http://localhost:5173").rstrip("/")
BACKEND_URL = config("BACKEND_URL", default="http://localhost:8000").rstrip("/")

# --- MERCADO PAGO ---
MP_ACCESS_TOKEN = config("MP_ACCESS_TOKEN", default="")
MP_PUBLIC_KEY = config("MP_PUBLIC_KEY", default="")

# --- ARMAZENAMENTO (Cloudflare R2 / S3) ---
S3_ENDPOINT_URL = config("S3_ENDPOINT_URL", default="")
AWS_ACCESS_KEY_ID = config("AWS_ACCESS_KEY_ID", default="")
AWS_SECRET_ACCESS_KEY = config("AWS_SECRET_ACCESS_KEY", default="")
S3_BUCKET_NAME = config("S3_BUCKET_NAME", default="")
PUBLIC_BUCKET_URL = config("PUBLIC_BUCKET_URL", default="").rstrip("/")

# --- LOGS ---
LOG_LEVEL = config("LOG_LEVEL", default="INFO")
LOG_FILE = config("LOG_FILE", default="")

# --- REGRAS DE NEGÓCIO ---
ESTOQUE_BAIXO_LIMITE = config("ESTOQUE_BAIXO_LIMITE", cast=int, default=5)
CACHE_TTL_SEGUNDOS = config("CACHE_TTL_SEGUNDOS", cast=int, default=60)
REDIS_URL = config("REDIS_URL", default="redis://localhost:6379/0")
