"""
Shared fixtures - in-memory SQLite with the real ORM
"""

import pytest
from fastapi.testclient import TestClient

from tests.database_test_config import (
    create_test_engine,
    create_test_session_factory,
    drop_test_database,
)

from catalog_service.adapters.secondary.database.category_registry import SQLCategoryRegistry
from catalog_service.adapters.secondary.database.sql_repository import SQLItemRepository
from catalog_service.adapters.secondary.storage.image_store import FileImageStore, InMemoryImageStore
from catalog_service.application.services import ItemService
from catalog_service.config.settings import Settings
from catalog_service.main import create_app

from tests.sample_data import PLACEHOLDER_BYTES


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def engine():
    """Fresh in-memory database for each test"""
    engine = create_test_engine()
    yield engine
    drop_test_database(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_test_session_factory(engine)


@pytest.fixture
def category_registry():
    return SQLCategoryRegistry()


@pytest.fixture
def item_repository(session_factory, category_registry):
    return SQLItemRepository(session_factory, category_registry)


# ============================================================================
# IMAGE STORE FIXTURES
# ============================================================================

@pytest.fixture
def image_dir(tmp_path):
    """Image directory containing only the placeholder"""
    directory = tmp_path / "images"
    directory.mkdir()
    (directory / "default.jpg").write_bytes(PLACEHOLDER_BYTES)
    return directory


@pytest.fixture
def file_image_store(image_dir):
    return FileImageStore(image_dir)


@pytest.fixture
def memory_image_store():
    return InMemoryImageStore(placeholder=PLACEHOLDER_BYTES)


# ============================================================================
# SERVICE / API FIXTURES
# ============================================================================

@pytest.fixture
def item_service(item_repository, file_image_store):
    return ItemService(item_repository, file_image_store)


@pytest.fixture
def test_settings(tmp_path, image_dir):
    return Settings(
        database_url="sqlite:///:memory:",
        image_dir=str(image_dir),
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def client(test_settings, session_factory, file_image_store):
    """
    TestClient wired to the in-memory database and the tmp image dir.
    Used without ``with`` so the lifespan (logging setup) does not run.
    """
    app = create_app(test_settings, session_factory=session_factory, image_store=file_image_store)
    return TestClient(app)
