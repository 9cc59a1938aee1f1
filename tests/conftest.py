# tests/conftest.py
import os

# Settings are required at import time of catalog_api.main
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ADMIN_EMAIL", "admin@x.com")
os.environ.setdefault("ADMIN_PASSWORD", "admin123")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient

from catalog_api.core.config import Settings
from catalog_api.core.credentials import AdminCredentialStore
from catalog_api.core.storage_utils import StoredMedia
from catalog_api.database import build_engine, create_db_and_tables
from catalog_api.main import create_app

ADMIN_EMAIL = "admin@x.com"
ADMIN_PASSWORD = "admin123"


class FakeMediaStorage:
    """
    In-memory media host.

    - uploads: (folder, content_type, size) per upload call
    - deleted: handles passed to delete(), in call order
    - fail_uploads / fail_deletes: make the corresponding call raise
    - fail_after: number of uploads that succeed before the next one raises
    """

    def __init__(self):
        self.uploads: list[tuple[str, str, int]] = []
        self.deleted: list[str] = []
        self.fail_uploads = False
        self.fail_deletes = False
        self.fail_after: int | None = None

    def upload(self, folder: str, content_type: str, file_bytes: bytes) -> StoredMedia:
        if self.fail_uploads or (self.fail_after is not None and len(self.uploads) >= self.fail_after):
            raise RuntimeError("media host unavailable")
        self.uploads.append((folder, content_type, len(file_bytes)))
        handle = f"{folder}/{len(self.uploads)}"
        return StoredMedia(url=f"https://media.test/{handle}", handle=handle)

    def delete(self, handle: str) -> None:
        self.deleted.append(handle)
        if self.fail_deletes:
            raise RuntimeError("media host unavailable")


def fast_hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        SEED_ON_STARTUP=False,
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings.DATABASE_URL)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def media() -> FakeMediaStorage:
    return FakeMediaStorage()


@pytest.fixture
def app(settings, engine, media):
    return create_app(
        settings=settings,
        engine=engine,
        media=media,
        credentials=AdminCredentialStore(ADMIN_EMAIL, ADMIN_PASSWORD, hasher=fast_hasher()),
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    resp = client.post(
        "/api/admin/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def image_file(name: str = "photo.png", content_type: str = "image/png", size: int = 16):
    return (name, b"\x89PNG" + b"0" * size, content_type)


@pytest.fixture
def create_product(client, auth_headers):
    """Factory: create a product through the admin API and return its JSON."""

    def _create(images: int = 0, **fields):
        data = {"name": "Test Kaftan", "price": "₦10,000", "category": "Traditional"}
        data.update(fields)
        files = [("images", image_file(f"img{i}.png")) for i in range(images)]
        resp = client.post(
            "/api/admin/products",
            data=data,
            files=files or None,
            headers=auth_headers,
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _create
