from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from mediahub_backend.app.core.config import Settings
from mediahub_backend.app.database import Base, build_engine, build_session_factory
from mediahub_backend.app.main import create_app
from mediahub_backend.app.media import MediaService
from mediahub_backend.app.storage import MediaStorage


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        upload_dir=str(tmp_path / "uploads"),
        public_base_url=None,
        reconcile_on_startup=False,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def engine(settings):
    engine = build_engine(settings)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db(session_factory):
    database = session_factory()
    try:
        yield database
    finally:
        database.close()


@pytest.fixture
def storage(settings):
    storage = MediaStorage(settings.upload_dir)
    storage.ensure_dir()
    return storage


@pytest.fixture
def service(storage):
    return MediaService(storage)


@pytest.fixture
def upload_dir(storage) -> Path:
    return storage.root
