"""
StockPro - Upload Storage
Grava fotografias das encomendas na pasta de uploads e devolve a URL publica
"""
import os
import uuid
import logging
from pathlib import Path
from typing import List

from fastapi import UploadFile

from stockpro.core.config import settings
from stockpro.core.errors import ValidationError

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"
ORDER_IMAGES_FOLDER = "orders"


def get_uploads_dir() -> Path:
    """Diretorio base de uploads (criado se nao existir)"""
    uploads_dir = Path(settings.UPLOADS_DIR).resolve()
    (uploads_dir / ORDER_IMAGES_FOLDER).mkdir(parents=True, exist_ok=True)
    return uploads_dir


def validate_image(file: UploadFile, contents: bytes):
    if not file.content_type or not file.content_type.startswith("image/"):
        raise ValidationError(f"Arquivo '{file.filename}' deve ser uma imagem")

    max_bytes = settings.MAX_IMAGE_SIZE_MB * 1024 * 1024
    if len(contents) > max_bytes:
        raise ValidationError(
            f"Imagem '{file.filename}' excede {settings.MAX_IMAGE_SIZE_MB} MB"
        )


def _image_extension(file: UploadFile) -> str:
    """Extensao do nome do arquivo se for simples, senao a do content type"""
    name = file.filename or ""
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    if ext.isalnum() and len(ext) <= 5:
        return ext

    subtype = (file.content_type or "").split("/", 1)[-1].split("+", 1)[0].lower()
    return subtype if subtype.isalnum() and len(subtype) <= 5 else "jpg"


async def save_order_images(files: List[UploadFile]) -> List[str]:
    """
    Valida e grava as imagens. Tudo ou nada: se uma imagem for invalida
    nenhuma fica gravada.
    """
    if len(files) > settings.MAX_ORDER_IMAGES:
        raise ValidationError(f"Maximo de {settings.MAX_ORDER_IMAGES} imagens por encomenda")

    payloads = []
    for file in files:
        contents = await file.read()
        validate_image(file, contents)
        payloads.append((file, contents))

    upload_dir = get_uploads_dir() / ORDER_IMAGES_FOLDER
    urls = []
    for file, contents in payloads:
        filename = f"{uuid.uuid4().hex}.{_image_extension(file)}"

        with open(upload_dir / filename, "wb") as f:
            f.write(contents)

        urls.append(f"{UPLOADS_URL_PREFIX}/{ORDER_IMAGES_FOLDER}/{filename}")

    return urls


def delete_uploads(urls: List[str]):
    """Remove arquivos de upload; URLs fora da pasta de uploads sao ignoradas"""
    uploads_dir = get_uploads_dir()
    for url in urls:
        if not url.startswith(UPLOADS_URL_PREFIX + "/"):
            continue

        filepath = (uploads_dir / url[len(UPLOADS_URL_PREFIX) + 1:]).resolve()
        if uploads_dir not in filepath.parents:
            logger.warning(f"Caminho de upload invalido ignorado: {url}")
            continue

        if filepath.exists():
            os.remove(filepath)
