import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def make_settings(tmp_path):
    def make(**overrides) -> Settings:
        values = dict(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite3'}",
            upload_dir=str(tmp_path / "uploads"),
            assets_dir=str(tmp_path / "assets"),
            spa_build_dir=str(tmp_path / "build"),
            public_base_url="http://testserver",
        )
        values.update(overrides)
        return Settings(**values)

    return make


@pytest.fixture(params=["database", "memory"])
def client(request, make_settings):
    app = create_app(make_settings(storage_backend=request.param))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def memory_client(make_settings):
    app = create_app(make_settings(storage_backend="memory"))
    with TestClient(app) as c:
        yield c
