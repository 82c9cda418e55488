"""
Unit Tests: Storage Registry and Default Storage Resolver
"""

from unittest.mock import patch

import pytest
from django.db import IntegrityError
from rest_framework.exceptions import NotFound

from files.models import File
from fmngr.exceptions import Conflict
from storage.models import Storage

pytestmark = pytest.mark.django_db


# =============================================================================
# Registry
# =============================================================================

class TestCreateStorage:
    """Test storage creation and the single-default rule."""

    def test_create_returns_stored_fields(self, storage_service):
        """The new row carries an id and exactly the given fields."""
        storage = storage_service.create_storage(path="/srv/blobs", is_default=False)

        assert storage.id is not None
        assert storage.path == "/srv/blobs"
        assert storage.is_default is False

    def test_path_is_not_checked(self, storage_service):
        """Paths are recorded as given, even when the directory does not exist."""
        storage = storage_service.create_storage(path="/definitely/not/here")

        assert Storage.objects.get(pk=storage.id).path == "/definitely/not/here"

    def test_second_default_takes_over(self, storage_service):
        """Creating a new default clears the previous one."""
        first = storage_service.create_storage(path="/a", is_default=True)
        second = storage_service.create_storage(path="/b", is_default=True)

        first.refresh_from_db()
        assert first.is_default is False
        assert second.is_default is True
        assert Storage.objects.filter(is_default=True).count() == 1

    def test_non_default_keeps_existing_default(self, storage_service):
        """A non-default storage does not disturb the current default."""
        first = storage_service.create_storage(path="/a", is_default=True)
        storage_service.create_storage(path="/b", is_default=False)

        first.refresh_from_db()
        assert first.is_default is True

    def test_racing_default_conflicts(self, storage_service):
        """A default committed between the clear and the insert is a Conflict, not a 500."""
        first = storage_service.create_storage(path="/a", is_default=True)

        # The other writer's default is invisible to this clear.
        with patch.object(storage_service, "_clear_default"):
            with pytest.raises(Conflict):
                storage_service.create_storage(path="/b", is_default=True)

        first.refresh_from_db()
        assert first.is_default is True
        assert Storage.objects.filter(is_default=True).count() == 1

    def test_integrity_error_on_insert_conflicts(self, storage_service):
        with patch.object(Storage.objects, "create", side_effect=IntegrityError("single_default_storage")):
            with pytest.raises(Conflict):
                storage_service.create_storage(path="/a", is_default=True)


class TestReadStorage:
    """Test listing and single lookups."""

    def test_list_returns_all(self, storage_service):
        storage_service.create_storage(path="/a", is_default=True)
        storage_service.create_storage(path="/b")

        paths = sorted(s.path for s in storage_service.list_storages())
        assert paths == ["/a", "/b"]

    def test_list_empty(self, storage_service):
        assert list(storage_service.list_storages()) == []

    def test_get_unknown_raises_not_found(self, storage_service):
        with pytest.raises(NotFound):
            storage_service.get_storage(4242)


class TestModifyStorage:
    """Test updates to path and default flag."""

    def test_modify_path(self, storage_service):
        storage = storage_service.create_storage(path="/old")

        updated = storage_service.modify_storage(storage_id=storage.id, path="/new")

        assert updated.path == "/new"

    def test_modify_default_swaps(self, storage_service):
        """Promoting a storage demotes the previous default."""
        first = storage_service.create_storage(path="/a", is_default=True)
        second = storage_service.create_storage(path="/b")

        storage_service.modify_storage(storage_id=second.id, is_default=True)

        first.refresh_from_db()
        second.refresh_from_db()
        assert first.is_default is False
        assert second.is_default is True

    def test_unset_default_leaves_no_default(self, storage_service):
        storage = storage_service.create_storage(path="/a", is_default=True)

        storage_service.modify_storage(storage_id=storage.id, is_default=False)

        with pytest.raises(NotFound):
            storage_service.get_default_storage()

    def test_path_change_refused_while_files_exist(self, storage_service):
        """Moving a storage that holds files would strand its blobs."""
        storage = storage_service.create_storage(path="/a", is_default=True)
        File.objects.create(title="x", ext=".txt", size=1, storage=storage)

        with pytest.raises(Conflict):
            storage_service.modify_storage(storage_id=storage.id, path="/b")

        storage.refresh_from_db()
        assert storage.path == "/a"

    def test_racing_promotion_conflicts(self, storage_service):
        first = storage_service.create_storage(path="/a", is_default=True)
        second = storage_service.create_storage(path="/b")

        with patch.object(storage_service, "_clear_default"):
            with pytest.raises(Conflict):
                storage_service.modify_storage(storage_id=second.id, is_default=True)

        first.refresh_from_db()
        second.refresh_from_db()
        assert first.is_default is True
        assert second.is_default is False

    def test_modify_unknown_raises_not_found(self, storage_service):
        with pytest.raises(NotFound):
            storage_service.modify_storage(storage_id=4242, path="/x")


class TestDeleteStorage:
    """Test the referential guard on deletion."""

    def test_delete_empty_storage(self, storage_service):
        storage = storage_service.create_storage(path="/a")

        storage_service.delete_storage(storage_id=storage.id)

        assert not Storage.objects.filter(pk=storage.id).exists()

    def test_delete_refused_while_files_exist(self, storage_service):
        storage = storage_service.create_storage(path="/a")
        File.objects.create(title="x", ext=".txt", size=1, storage=storage)

        with pytest.raises(Conflict):
            storage_service.delete_storage(storage_id=storage.id)

        assert Storage.objects.filter(pk=storage.id).exists()

    def test_delete_unknown_raises_not_found(self, storage_service):
        with pytest.raises(NotFound):
            storage_service.delete_storage(storage_id=4242)


# =============================================================================
# Resolver
# =============================================================================

class TestDefaultStorage:
    """Test the default storage lookup."""

    def test_returns_flagged_storage(self, storage_service):
        storage_service.create_storage(path="/a")
        default = storage_service.create_storage(path="/b", is_default=True)

        assert storage_service.get_default_storage().id == default.id

    def test_none_configured_raises_not_found(self, storage_service):
        storage_service.create_storage(path="/a", is_default=False)

        with pytest.raises(NotFound):
            storage_service.get_default_storage()

    def test_multiple_defaults_raise_conflict(self, storage_service, monkeypatch):
        """If the catalog ever yields two defaults, the resolver refuses to guess."""
        a = Storage(id=1, path="/a", is_default=True)
        b = Storage(id=2, path="/b", is_default=True)

        class FakeQuerySet(list):
            def __getitem__(self, item):
                return FakeQuerySet(list.__getitem__(self, item))

        monkeypatch.setattr(Storage.objects, "filter", lambda **kwargs: FakeQuerySet([a, b]))

        with pytest.raises(Conflict):
            storage_service.get_default_storage()
