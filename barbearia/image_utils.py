import io
import logging

from PIL import Image, UnidentifiedImageError


def processar_imagem(file_stream, max_size=(500, 500), quality=85):
    """
    Redimensiona e comprime uma imagem (logo da barbearia ou avatar).

    :param file_stream: stream de bytes do arquivo enviado.
    :param max_size: tupla (largura, altura) máxima, mantendo a proporção.
    :param quality: qualidade da compressão JPEG (0-100).
    :return: (BytesIO com o JPEG, content type) ou (None, None) se não for imagem.
    """
    try:
        img = Image.open(file_stream)

        # Paletas (GIF) e canal alfa (PNG) não existem em JPEG
        if img.mode in ("P", "RGBA", "LA"):
            img = img.convert("RGB")

        img.thumbnail(max_size, Image.Resampling.LANCZOS)

        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=quality, optimize=True)
        buffer.seek(0)
        return buffer, "image/jpeg"

    except (UnidentifiedImageError, OSError) as e:
        logging.warning(f"Arquivo enviado não é uma imagem válida: {e}")
        return None, None
