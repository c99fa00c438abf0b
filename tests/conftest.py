import json

import pytest
from fastapi.testclient import TestClient

from user_directory_api.app.core.storage import RecordStore, get_store
from user_directory_api.app.main import app


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture
def store(data_path):
    return RecordStore(data_path)


@pytest.fixture
def seed(data_path):
    """Write records straight to the backing file."""
    def _seed(records):
        data_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    return _seed


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
