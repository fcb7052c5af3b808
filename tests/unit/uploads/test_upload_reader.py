from datetime import datetime
from io import BytesIO

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from src.eventsnap.config import UploadLimits
from src.eventsnap.uploads.upload_errors import PayloadTooLargeError
from src.eventsnap.uploads.upload_reader import UploadReader, from_epoch_millis
from tests.helpers.images import make_png

pytestmark = pytest.mark.unit


def make_upload(data: bytes, *, content_type: str, filename: str) -> UploadFile:
    headers = Headers({"content-type": content_type})
    return UploadFile(filename=filename, file=BytesIO(data), headers=headers)


def build_reader(*, cap: int = 50 * 1024 * 1024, chunk_size: int = 1024) -> UploadReader:
    return UploadReader(UploadLimits(absolute_cap_bytes=cap, chunk_size_bytes=chunk_size))


@pytest.mark.asyncio
async def test_read_collects_all_chunks() -> None:
    data = make_png()
    upload = make_upload(data, content_type="image/png", filename="tiny.png")
    reader = build_reader(chunk_size=2)
    modified = datetime(2024, 6, 1, 10, 0)

    raw = await reader.read(upload, last_modified=modified)

    assert raw.data == data
    assert raw.size == len(data)
    assert raw.name == "tiny.png"
    assert raw.mimetype == "image/png"
    assert raw.last_modified_date == modified


@pytest.mark.asyncio
async def test_read_rejects_payload_above_cap() -> None:
    data = make_png() * 50
    upload = make_upload(data, content_type="image/png", filename="large.png")
    reader = build_reader(cap=len(data) - 1, chunk_size=512)

    with pytest.raises(PayloadTooLargeError):
        await reader.read(upload)


def test_from_epoch_millis_converts_to_local_time() -> None:
    stamp = datetime(2024, 6, 1, 10, 0, 0)
    millis = int(stamp.timestamp() * 1000)

    assert from_epoch_millis(millis) == stamp
    assert from_epoch_millis(None) is None
    assert from_epoch_millis(0) is None
