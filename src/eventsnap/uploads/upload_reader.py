"""Streaming of multipart uploads into :class:`RawFile` values."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from fastapi import UploadFile

from ..config import UploadLimits
from .upload_errors import PayloadTooLargeError, UploadReadError
from .upload_models import RawFile

logger = logging.getLogger(__name__)


def from_epoch_millis(value: int | None) -> datetime | None:
    """Convert a browser ``File.lastModified`` value to local wall-clock time."""
    if value is None or value <= 0:
        return None
    return datetime.fromtimestamp(value / 1000)


@dataclass(slots=True)
class UploadReader:
    """Read uploads in chunks, refusing anything above the absolute cap."""

    limits: UploadLimits

    async def read(
        self,
        upload: UploadFile,
        *,
        last_modified: datetime | None = None,
    ) -> RawFile:
        cap = self.limits.absolute_cap_bytes
        chunks: list[bytes] = []
        size = 0

        try:
            while True:
                chunk = await upload.read(self.limits.chunk_size_bytes)
                if not chunk:
                    break
                size += len(chunk)
                if size > cap:
                    logger.warning(
                        "uploads.read.payload_too_large",
                        extra={"size_bytes": size, "limit_bytes": cap},
                    )
                    raise PayloadTooLargeError(size)
                chunks.append(chunk)
        except PayloadTooLargeError:
            raise
        except Exception as exc:  # pragma: no cover - defensive branch
            logger.error("uploads.read.failed", exc_info=exc)
            raise UploadReadError(str(exc)) from exc
        finally:
            await upload.close()

        return RawFile(
            name=upload.filename,
            mimetype=upload.content_type,
            size=size,
            data=b"".join(chunks),
            last_modified_date=last_modified,
        )
