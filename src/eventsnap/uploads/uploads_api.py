"""HTTP routes for photo uploads."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from ..responses import FailureReason, error_response
from .upload_errors import (
    EventNotFoundError,
    InvalidFileError,
    PayloadTooLargeError,
    UploadReadError,
)
from .upload_reader import UploadReader, from_epoch_millis
from .upload_schemas import UploadBatchSchema
from .upload_service import UploadService

router = APIRouter(prefix="/api/upload", tags=["uploads"])


def get_upload_service(request: Request) -> UploadService:
    """Fetch upload service from application state."""
    try:
        return request.app.state.upload_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("UploadService is not configured") from exc


def get_upload_reader(request: Request) -> UploadReader:
    try:
        return request.app.state.upload_reader  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("UploadReader is not configured") from exc


@router.post("/{access_token}", response_model=UploadBatchSchema)
async def upload_files(
    access_token: str,
    files: list[UploadFile] = File(...),
    last_modified: list[int] | None = Form(None),
    service: UploadService = Depends(get_upload_service),
    reader: UploadReader = Depends(get_upload_reader),
) -> UploadBatchSchema:
    """Validate every file against the event and accept the batch as a whole.

    ``last_modified`` carries the client-side ``File.lastModified`` values in
    epoch milliseconds, aligned with ``files`` by position.
    """
    try:
        service.resolve_event(access_token)
    except EventNotFoundError as exc:
        raise error_response(
            status.HTTP_404_NOT_FOUND, FailureReason.EVENT_NOT_FOUND
        ) from exc

    stamps = list(last_modified or [])
    try:
        raw_files = [
            await reader.read(
                upload,
                last_modified=from_epoch_millis(stamps[index]) if index < len(stamps) else None,
            )
            for index, upload in enumerate(files)
        ]
    except PayloadTooLargeError as exc:
        raise error_response(
            status.HTTP_413_CONTENT_TOO_LARGE, FailureReason.PAYLOAD_TOO_LARGE
        ) from exc
    except UploadReadError as exc:
        raise error_response(
            status.HTTP_400_BAD_REQUEST, FailureReason.INVALID_REQUEST
        ) from exc

    try:
        result = await service.validate_batch(access_token, raw_files)
    except InvalidFileError as exc:
        raise error_response(
            status.HTTP_400_BAD_REQUEST,
            FailureReason.INVALID_REQUEST,
            details=str(exc),
        ) from exc
    except EventNotFoundError as exc:
        raise error_response(
            status.HTTP_404_NOT_FOUND, FailureReason.EVENT_NOT_FOUND
        ) from exc

    payload = UploadBatchSchema.from_domain(result)
    if not result.accepted:
        raise error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            FailureReason.UPLOAD_REJECTED,
            files=[item.model_dump(mode="json") for item in payload.files],
        )
    return payload
