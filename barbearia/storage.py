# -*- coding: utf-8 -*-
"""
Upload de imagens para armazenamento compatível com S3 (Cloudflare R2).
"""
import logging
import uuid

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException, UploadFile, status

from barbearia import config
from barbearia.image_utils import processar_imagem


def storage_configurado() -> bool:
    return all([
        config.S3_ENDPOINT_URL,
        config.AWS_ACCESS_KEY_ID,
        config.AWS_SECRET_ACCESS_KEY,
        config.S3_BUCKET_NAME,
        config.PUBLIC_BUCKET_URL,
    ])


def get_s3_client():
    return boto3.client(
        "s3",
        endpoint_url=config.S3_ENDPOINT_URL,
        aws_access_key_id=config.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
        region_name="auto",
    )


def enviar_imagem(arquivo: UploadFile, pasta: str, max_size=(500, 500)) -> str:
    """Processa a imagem e envia ao bucket. Retorna a URL pública."""
    if not storage_configurado():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Armazenamento de imagens não configurado.",
        )

    imagem, content_type = processar_imagem(arquivo.file, max_size=max_size)
    if imagem is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Arquivo de imagem inválido.")

    chave = f"{pasta}/{uuid.uuid4().hex}.jpg"
    try:
        get_s3_client().upload_fileobj(imagem, config.S3_BUCKET_NAME, chave, ExtraArgs={"ContentType": content_type})
    except (BotoCoreError, ClientError) as e:
        logging.error(f"Erro no upload para o R2 ({pasta}): {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Falha ao enviar a imagem.")

    return f"{config.PUBLIC_BUCKET_URL}/{chave}"


def remover_imagem(url: str) -> None:
    """Remove do bucket uma imagem enviada por `enviar_imagem`. Falhas são apenas registradas."""
    if not url or not storage_configurado() or not url.startswith(config.PUBLIC_BUCKET_URL):
        return
    chave = url[len(config.PUBLIC_BUCKET_URL):].lstrip("/")
    try:
        get_s3_client().delete_object(Bucket=config.S3_BUCKET_NAME, Key=chave)
    except (BotoCoreError, ClientError) as e:
        logging.error(f"Erro ao remover imagem antiga do R2: {e}")
