# files/services.py

import base64
import logging

from django.db import DatabaseError, IntegrityError, transaction
from rest_framework.exceptions import NotFound

from fmngr.exceptions import CatalogError, Conflict
from storage.models import Storage
from storage.services import StorageService
from .blobs import BlobStore
from .models import File
from .naming import split_filename, validate_filename

logger = logging.getLogger(__name__)


class FileService:
    """
    Keeps each `file` row and its blob in agreement.
    This is the only writer of `file` rows and the only code that writes or
    removes blob bytes.
    """

    def __init__(self, *, storage_service: StorageService = None, blobs: BlobStore = None):
        self.storage_service = storage_service or StorageService()
        self.blobs = blobs or BlobStore()

    def create_file(self, *, upload, filename: str) -> File:
        # 1. Resolve where new uploads go. NotFound here aborts before touching disk.
        storage = self.storage_service.get_default_storage()

        # 2. Refuse names that could escape the storage directory.
        filename = validate_filename(filename)
        title, ext = split_filename(filename)

        with self.blobs.locked(storage, filename):
            if File.objects.filter(storage=storage, title=title, ext=ext).exists():
                raise Conflict(f"A file named '{filename}' already exists in storage {storage.id}.")

            # 3. Write the blob, then commit the row. If the row cannot be
            #    committed the blob is rolled back by `staged`.
            with self.blobs.staged(storage, filename, upload) as size:
                try:
                    with transaction.atomic():
                        new_file = File.objects.create(title=title, ext=ext, size=size, storage=storage)
                except IntegrityError as e:
                    logger.warning(f"Catalog refused '{filename}' in storage {storage.id}: {e}")
                    raise Conflict(f"A file named '{filename}' already exists in storage {storage.id}.")
                except DatabaseError as e:
                    logger.error(f"Recording '{filename}' in the catalog failed: {e}", exc_info=True)
                    raise CatalogError(f"Could not record file metadata: {e}")

        logger.info(f"Stored file {new_file.id} '{filename}' ({size} bytes) in storage {storage.id}.")
        return new_file

    def list_files(self):
        """
        Files that belong to the current default storage only. Files under a
        previous default disappear from this listing when the default changes.
        """
        storage = self.storage_service.get_default_storage()
        return File.objects.filter(storage_id=storage.id)

    def get_file(self, file_id) -> File:
        try:
            return File.objects.get(pk=file_id)
        except File.DoesNotExist:
            raise NotFound(f"File {file_id} not found.")

    def get_file_with_content(self, file_id) -> File:
        """
        Returns the file with its bytes attached as `base64_value` (standard alphabet).
        A row whose blob is gone raises BlobMissing, not NotFound.
        """
        file_instance = self.get_file(file_id)
        storage = self._storage_of(file_instance)
        if storage is None:
            raise NotFound(f"Storage {file_instance.storage_id} of file {file_id} not found.")

        data = self.blobs.read(storage, file_instance.filename)
        file_instance.base64_value = base64.b64encode(data).decode("ascii")
        return file_instance

    def delete_file(self, file_id):
        """
        Removes the blob, then the row.
        A missing storage or an unremovable blob is logged and the row is
        deleted anyway, so repeated deletes of a half-deleted file succeed.
        """
        file_instance = self.get_file(file_id)
        storage = self._storage_of(file_instance)

        if storage is None:
            logger.warning(
                f"Storage {file_instance.storage_id} of file {file_id} not found; deleting the catalog row only."
            )
            self._delete_row(file_instance)
            return

        with self.blobs.locked(storage, file_instance.filename):
            try:
                if not self.blobs.remove(storage, file_instance.filename):
                    logger.warning(
                        f"Blob '{file_instance.filename}' of file {file_id} was already missing from storage {storage.id}."
                    )
            except OSError as e:
                logger.warning(f"Could not remove blob '{file_instance.filename}' of file {file_id}: {e}")

            self._delete_row(file_instance)

        logger.info(f"Deleted file {file_id} '{file_instance.filename}' from storage {storage.id}.")

    def _storage_of(self, file_instance: File):
        try:
            return Storage.objects.get(pk=file_instance.storage_id)
        except Storage.DoesNotExist:
            return None

    def _delete_row(self, file_instance: File):
        file_id = file_instance.id
        try:
            with transaction.atomic():
                file_instance.delete()
        except DatabaseError as e:
            logger.error(f"Deleting catalog row of file {file_id} failed: {e}", exc_info=True)
            raise CatalogError(f"Could not delete file metadata: {e}")
