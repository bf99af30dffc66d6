"""
============================================================
TARJETA CRC - infrastructure/thumbnails.py
============================================================
Class: PillowThumbnailGenerator

Responsibilities:
  - Derivar un thumbnail de ancho fijo desde una imagen en disco.
  - Mantener la relación de aspecto (alto proporcional).
  - Conservar el formato de la imagen fuente en los bytes generados.

Collaborators:
  - Pillow (PIL.Image)
  - application.usecases.process_file_job (escribe los bytes a disco)

Policy:
  - Cualquier falla de lectura/decodificación -> ThumbnailError(width=...).
  - La escritura del artefacto NO es responsabilidad de este módulo.
============================================================
"""

from __future__ import annotations

import io

from PIL import Image, UnidentifiedImageError

from ..crosscutting.exceptions import ThumbnailError

_DEFAULT_FORMAT = "PNG"


class PillowThumbnailGenerator:
    def generate(self, source_path: str, width: int) -> bytes:
        if width <= 0:
            raise ThumbnailError(f"Ancho inválido: {width}", width=width)

        try:
            with Image.open(source_path) as image:
                image_format = image.format or _DEFAULT_FORMAT
                src_width, src_height = image.size
                height = max(1, round(src_height * width / src_width))
                resized = image.resize((width, height), Image.Resampling.LANCZOS)

                buffer = io.BytesIO()
                resized.save(buffer, format=image_format)
        except (OSError, ValueError, UnidentifiedImageError) as exc:
            raise ThumbnailError(
                f"No se pudo generar thumbnail de {width}px",
                width=width,
                original_error=exc,
            ) from exc

        return buffer.getvalue()
