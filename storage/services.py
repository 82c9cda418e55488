# storage/services.py

import logging

from django.db import DatabaseError, IntegrityError, transaction
from rest_framework.exceptions import NotFound

from fmngr.exceptions import CatalogError, Conflict
from .models import Storage

logger = logging.getLogger(__name__)


class StorageService:
    """
    The Storage Registry and the Default Storage Resolver.
    This is the only writer of `storage` rows.
    """

    def list_storages(self):
        return Storage.objects.all()

    def get_storage(self, storage_id) -> Storage:
        try:
            return Storage.objects.get(pk=storage_id)
        except Storage.DoesNotExist:
            raise NotFound(f"Storage {storage_id} not found.")

    def get_default_storage(self) -> Storage:
        """
        Returns the storage flagged default.
        Raises NotFound when none is configured and Conflict when the catalog
        somehow holds more than one.
        """
        defaults = list(Storage.objects.filter(is_default=True)[:2])
        if not defaults:
            raise NotFound("No default storage is configured.")
        if len(defaults) > 1:
            logger.error(f"Catalog holds more than one default storage: {[s.id for s in defaults]}")
            raise Conflict("More than one storage is flagged default.")
        return defaults[0]

    def create_storage(self, *, path: str, is_default: bool = False) -> Storage:
        """
        Inserts a storage row. When `is_default` is set, any previous default
        is cleared in the same transaction so exactly one default remains.
        """
        try:
            with transaction.atomic():
                if is_default:
                    self._clear_default()
                storage = Storage.objects.create(path=path, is_default=is_default)
        except IntegrityError as e:
            logger.warning(f"Catalog refused storage at '{path}' (default={is_default}): {e}")
            raise Conflict("Another storage was made default concurrently.")
        except DatabaseError as e:
            logger.error(f"Could not create storage at '{path}': {e}", exc_info=True)
            raise CatalogError(f"Could not create storage: {e}")

        logger.info(f"Created storage {storage.id} at '{storage.path}' (default={storage.is_default}).")
        return storage

    def modify_storage(self, *, storage_id, path: str = None, is_default: bool = None) -> Storage:
        """
        Updates `path` and/or `is_default`.
        The path of a storage that still holds files cannot change, because the
        existing blobs would no longer be reachable.
        """
        try:
            with transaction.atomic():
                storage = self._get_for_update(storage_id)

                if path is not None and path != storage.path:
                    if storage.files.exists():
                        raise Conflict(f"Storage {storage_id} still holds files; its path cannot change.")
                    storage.path = path

                if is_default is not None and is_default != storage.is_default:
                    if is_default:
                        self._clear_default()
                    storage.is_default = is_default

                storage.save()
        except IntegrityError as e:
            logger.warning(f"Catalog refused changes to storage {storage_id}: {e}")
            raise Conflict("Another storage was made default concurrently.")
        except DatabaseError as e:
            logger.error(f"Could not modify storage {storage_id}: {e}", exc_info=True)
            raise CatalogError(f"Could not modify storage: {e}")

        logger.info(f"Modified storage {storage.id}: path='{storage.path}', default={storage.is_default}.")
        return storage

    def delete_storage(self, *, storage_id):
        """Deletes a storage row. Refused while any file row references it."""
        try:
            with transaction.atomic():
                storage = self._get_for_update(storage_id)
                if storage.files.exists():
                    raise Conflict(f"Storage {storage_id} still holds files and cannot be deleted.")
                storage.delete()
        except DatabaseError as e:
            logger.error(f"Could not delete storage {storage_id}: {e}", exc_info=True)
            raise CatalogError(f"Could not delete storage: {e}")

        logger.info(f"Deleted storage {storage_id}.")

    def _get_for_update(self, storage_id) -> Storage:
        try:
            return Storage.objects.select_for_update().get(pk=storage_id)
        except Storage.DoesNotExist:
            raise NotFound(f"Storage {storage_id} not found.")

    def _clear_default(self):
        # The UPDATE row-locks the previous default until the transaction commits.
        cleared = Storage.objects.filter(is_default=True).update(is_default=False)
        if cleared:
            logger.info("Cleared previous default storage.")
