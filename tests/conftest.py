"""Pytest fixtures for the taste backend tests."""

import io

import pytest
from PIL import Image

from taste.services.context import TasteContext
from tests.fakes import FakeFaceRecognition, FakeHttp, FakeObjectStore

BUCKET = "get-me-a-date-test"
COLLECTION = "get-me-a-date-test"


@pytest.fixture
def object_store():
    return FakeObjectStore(buckets=[BUCKET])


@pytest.fixture
def faces():
    return FakeFaceRecognition(collections=[COLLECTION])


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def ctx(object_store, faces, http):
    return TasteContext(
        object_store=object_store,
        faces=faces,
        http=http,
        region="eu-west-1",
        bucket=BUCKET,
        collection=COLLECTION,
    )


@pytest.fixture
def jpeg_bytes():
    out = io.BytesIO()
    Image.new("RGB", (200, 120), (200, 30, 30)).save(out, format="JPEG")
    return out.getvalue()
