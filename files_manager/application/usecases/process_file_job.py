"""
===============================================================================
USE CASE: Process File Job (consumidor de fileQueue)
===============================================================================

Business Goal:
    Derivar thumbnails de un archivo recién subido, fuera del ciclo HTTP.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ProcessFileJobUseCase

Responsibilities:
    - Re-leer el archivo filtrando por (fileId, userId) en la misma query.
    - Para cada ancho (mayor a menor) generar y escribir `<localPath>_<width>`.
    - Cada ancho es independiente: un fallo se loguea y NO falla el job.
    - Idempotente ante re-entregas (sobrescribe los mismos artefactos).

Collaborators:
    - FileRepository.find_for_owner
    - ThumbnailGenerator.generate
    - crosscutting.metrics (thumbnails generados/fallidos)

Error Mapping:
    - NotFoundError("File not found"): fatal para el intento.
    - ThumbnailError / OSError por ancho: parcial, solo log + métrica.
===============================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence
from uuid import uuid4

from ...crosscutting.exceptions import NotFoundError, ThumbnailError
from ...crosscutting.logger import logger
from ...crosscutting.metrics import (
    record_thumbnail_failed,
    record_thumbnail_generated,
)
from ...domain.entities import FileJob
from ...domain.services import FileRepository, ThumbnailGenerator

DEFAULT_THUMBNAIL_WIDTHS: tuple[int, ...] = (500, 250, 100)


def thumbnail_path(local_path: str, width: int) -> str:
    return f"{local_path}_{width}"


def _write_atomic(target: str, data: bytes) -> None:
    """Escribe a un temporal hermano y lo mueve: nunca queda un artefacto truncado."""
    tmp = Path(f"{target}.tmp-{uuid4().hex}")
    try:
        tmp.write_bytes(data)
        os.replace(tmp, target)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


@dataclass
class ProcessFileJobResult:
    file_id: str
    created: list[str] = field(default_factory=list)
    failed_widths: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "fileId": self.file_id,
            "created": list(self.created),
            "failed_widths": list(self.failed_widths),
        }


class ProcessFileJobUseCase:
    def __init__(
        self,
        *,
        files: FileRepository,
        generator: ThumbnailGenerator,
        widths: Sequence[int] = DEFAULT_THUMBNAIL_WIDTHS,
    ) -> None:
        self._files = files
        self._generator = generator
        self._widths = tuple(widths)

    def execute(self, job: FileJob) -> ProcessFileJobResult:
        record = self._files.find_for_owner(job.file_id, job.user_id)
        if record is None:
            raise NotFoundError("File not found")

        result = ProcessFileJobResult(file_id=record.id)
        if not record.local_path:
            logger.warning("Archivo sin localPath", extra={"file_id": record.id})
            return result

        for width in self._widths:
            target = thumbnail_path(record.local_path, width)
            try:
                data = self._generator.generate(record.local_path, width)
                _write_atomic(target, data)
            except (ThumbnailError, OSError) as exc:
                # Parcial: los demás anchos siguen.
                record_thumbnail_failed(width)
                result.failed_widths.append(width)
                logger.warning(
                    "Thumbnail falló",
                    extra={"file_id": record.id, "width": width, "error": str(exc)},
                )
                continue

            record_thumbnail_generated(width)
            result.created.append(target)

        logger.info(
            "Thumbnails procesados",
            extra={
                "file_id": record.id,
                "thumbnails_created": len(result.created),
                "thumbnails_failed": len(result.failed_widths),
            },
        )
        return result
