"""
Pytest configuration and shared fixtures.

Storages point at per-test temporary directories; the catalog is the
pytest-django test database.
"""

from pathlib import Path

import pytest
from rest_framework.test import APIClient

from files.blobs import BlobStore, PathLocks
from files.services import FileService
from storage.services import StorageService


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def django_db_modify_db_settings(tmp_path_factory, django_db_modify_db_settings_parallel_suffix):
    """
    File-backed sqlite test catalog. Worker threads each open their own
    connection and wait on sqlite's busy timeout instead of failing with
    "table is locked" as the shared in-memory database does.
    """
    from django.conf import settings

    database = settings.DATABASES["default"]
    if database["ENGINE"] == "django.db.backends.sqlite3":
        database.setdefault("TEST", {})["NAME"] = str(tmp_path_factory.mktemp("catalog") / "test.sqlite3")


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory backing the default storage."""
    directory = tmp_path / "data"
    directory.mkdir()
    return directory


@pytest.fixture
def other_dir(tmp_path: Path) -> Path:
    """Directory backing a second storage."""
    directory = tmp_path / "other"
    directory.mkdir()
    return directory


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def storage_service() -> StorageService:
    return StorageService()


@pytest.fixture
def blobs() -> BlobStore:
    """Blob store with its own lock table so tests never share locks."""
    return BlobStore(locks=PathLocks())


@pytest.fixture
def file_service(storage_service, blobs) -> FileService:
    return FileService(storage_service=storage_service, blobs=blobs)


@pytest.fixture
def default_storage(db, storage_service, data_dir):
    return storage_service.create_storage(path=str(data_dir), is_default=True)


# =============================================================================
# HTTP Fixtures
# =============================================================================

@pytest.fixture
def api_client() -> APIClient:
    return APIClient()
