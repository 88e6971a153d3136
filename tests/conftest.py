import pytest
from fastapi.testclient import TestClient

from sports_store.api.routes.uploads import get_upload_service
from sports_store.core.database import create_db_engine
from sports_store.main import app
from sports_store.services.upload_service import ImageUploadService

FIXED_NOW_MS = 1700000000000


@pytest.fixture
def upload_dir(tmp_path):
    # Deliberately not created: the service must create it
    return tmp_path / "public" / "uploads"


@pytest.fixture
def upload_service(upload_dir):
    return ImageUploadService(upload_dir, clock=lambda: FIXED_NOW_MS)


@pytest.fixture
def client(upload_service):
    app.dependency_overrides[get_upload_service] = lambda: upload_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'store.db'}"


@pytest.fixture
def sqlite_engine(database_url):
    engine = create_db_engine(database_url)
    yield engine
    engine.dispose()
