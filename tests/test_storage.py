import io
from unittest.mock import MagicMock, patch

import pytest
from fastapi import HTTPException
from PIL import Image

from barbearia import storage
from barbearia.image_utils import processar_imagem

CONFIG_R2 = {
    "S3_ENDPOINT_URL": "https://r2.exemplo",
    "AWS_ACCESS_KEY_ID": "id",
    "AWS_SECRET_ACCESS_KEY": "segredo",
    "S3_BUCKET_NAME": "barbearia",
    "PUBLIC_BUCKET_URL": "https://cdn.exemplo",
}


def png(largura=1200, altura=800, modo="RGBA"):
    buffer = io.BytesIO()
    Image.new(modo, (largura, altura), (200, 30, 30, 128) if modo == "RGBA" else (200, 30, 30)).save(buffer, "PNG")
    buffer.seek(0)
    return buffer


def test_processar_imagem_redimensiona_e_converte_para_jpeg():
    imagem, content_type = processar_imagem(png(), max_size=(500, 500))
    assert content_type == "image/jpeg"
    resultado = Image.open(imagem)
    assert resultado.format == "JPEG"
    assert resultado.size == (500, 333)


def test_processar_imagem_invalida():
    assert processar_imagem(io.BytesIO(b"texto"), max_size=(100, 100)) == (None, None)


@pytest.fixture
def r2():
    with patch.multiple("barbearia.config", **CONFIG_R2):
        cliente_s3 = MagicMock()
        with patch("barbearia.storage.get_s3_client", return_value=cliente_s3):
            yield cliente_s3


def test_enviar_imagem(r2):
    arquivo = MagicMock(file=png(300, 300, "RGB"))
    url = storage.enviar_imagem(arquivo, "logos")

    assert url.startswith("https://cdn.exemplo/logos/")
    assert url.endswith(".jpg")
    _, bucket, chave = r2.upload_fileobj.call_args.args
    assert bucket == "barbearia"
    assert url.endswith(chave)


def test_enviar_arquivo_que_nao_e_imagem(r2):
    with pytest.raises(HTTPException) as exc:
        storage.enviar_imagem(MagicMock(file=io.BytesIO(b"abc")), "logos")
    assert exc.value.status_code == 400
    r2.upload_fileobj.assert_not_called()


def test_remover_imagem_ignora_urls_externas(r2):
    storage.remover_imagem("https://outro.site/foto.jpg")
    storage.remover_imagem(None)
    r2.delete_object.assert_not_called()

    storage.remover_imagem("https://cdn.exemplo/logos/abc.jpg")
    r2.delete_object.assert_called_once_with(Bucket="barbearia", Key="logos/abc.jpg")
