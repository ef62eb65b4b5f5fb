import base64
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile

from errors import ImageReadError, NotAnImageError

logger = logging.getLogger("farm-scanner.ingestion")


@dataclass(frozen=True)
class EncodedImage:
    content_type: str
    base64_data: str  # sans le préfixe "data:...;base64,"
    filename: Optional[str] = None

    @property
    def data_url(self) -> str:
        return f"data:{self.content_type};base64,{self.base64_data}"


def is_image(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.startswith("image/")


def ingest(content_type: Optional[str], data: bytes, filename: Optional[str] = None) -> EncodedImage:
    """Valide le type MIME puis encode le contenu en base64.

    Aucun redimensionnement ni conversion de format : les octets sont
    encodés tels quels.
    """
    if not is_image(content_type):
        logger.info("Fichier refusé (%s): type %r", filename, content_type)
        raise NotAnImageError()

    encoded = base64.b64encode(data).decode("ascii")
    return EncodedImage(content_type=content_type, base64_data=encoded, filename=filename)


async def ingest_upload(file: UploadFile) -> EncodedImage:
    """Lit entièrement un upload FastAPI et l'encode."""
    if not is_image(file.content_type):
        raise NotAnImageError()

    try:
        image_bytes = await file.read()
    except Exception as e:
        logger.error("Lecture de %s impossible: %s", file.filename, e)
        raise ImageReadError() from e

    return ingest(file.content_type, image_bytes, filename=file.filename)
