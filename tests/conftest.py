from __future__ import annotations

from datetime import datetime

import pytest

from src.eventsnap.uploads.metadata import EmbeddedMetadata
from src.eventsnap.uploads.upload_models import RawFile


@pytest.fixture
def make_file():
    def _make(
        *,
        name: str = "photo.jpg",
        mimetype: str = "image/jpeg",
        size: int | None = 2048,
        data: bytes | None = b"\xff\xd8\xff\xe0jpeg",
        last_modified_date: datetime | None = None,
    ) -> RawFile:
        return RawFile(
            name=name,
            mimetype=mimetype,
            size=size,
            data=data,
            last_modified_date=last_modified_date,
        )

    return _make


@pytest.fixture
def tags_loader():
    """Return a loader factory yielding fixed EXIF tags instead of parsing bytes."""

    def _factory(tags: dict[str, str] | None = None):
        def _load(_data: bytes) -> EmbeddedMetadata:
            return EmbeddedMetadata(tags=dict(tags or {}))

        return _load

    return _factory
