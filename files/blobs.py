# files/blobs.py

import logging
import threading
from contextlib import contextmanager

from django.core.files import File as DjangoFile
from django.core.files.storage import FileSystemStorage

from fmngr.exceptions import BlobMissing, Conflict, StorageIOError

logger = logging.getLogger(__name__)


class ExclusiveFileSystemStorage(FileSystemStorage):
    """
    FileSystemStorage that never renames or overwrites.
    An existing name is a Conflict instead of a reason to pick `name_XyZ12.ext`.
    """

    def get_available_name(self, name, max_length=None):
        if self.exists(name):
            raise Conflict(f"A file named '{name}' already exists in storage '{self.location}'.")
        return name


class PathLocks:
    """
    Process-wide locks keyed by (storage id, filename).
    Entries are reference counted and dropped once nobody holds or waits on them.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._entries = {}

    @contextmanager
    def hold(self, storage_id, filename):
        key = (storage_id, filename)
        with self._guard:
            entry = self._entries.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        lock = entry[0]
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self):
        with self._guard:
            return len(self._entries)


# One lock table per process, shared by every BlobStore that is not given its own.
path_locks = PathLocks()


class BlobStore:
    """
    The filesystem half of a file object: bytes at <storage.path>/<filename>.
    The catalog half lives in FileService.
    """

    def __init__(self, locks: PathLocks = None):
        self.locks = locks if locks is not None else path_locks

    def filesystem(self, storage) -> ExclusiveFileSystemStorage:
        return ExclusiveFileSystemStorage(location=storage.path)

    def path_for(self, storage, filename: str) -> str:
        return self.filesystem(storage).path(filename)

    def locked(self, storage, filename: str):
        return self.locks.hold(storage.id, filename)

    def write(self, storage, filename: str, stream) -> int:
        """
        Copies `stream` to a new blob and returns its on-disk size.
        A partially written blob is removed before any error leaves this method.
        """
        fs = self.filesystem(storage)
        content = stream if isinstance(stream, DjangoFile) else DjangoFile(stream, name=filename)

        keep = False
        try:
            fs.save(filename, content)
            size = fs.size(filename)
            keep = True
            return size
        except Conflict:
            # Whatever is on disk belongs to someone else.
            keep = True
            raise
        except OSError as e:
            logger.error(f"Writing blob '{filename}' to '{storage.path}' failed: {e}", exc_info=True)
            raise StorageIOError(f"Could not write '{filename}' to storage {storage.id}: {e}")
        finally:
            if not keep:
                self.discard(storage, filename)

    @contextmanager
    def staged(self, storage, filename: str, stream):
        """
        Writes the blob and yields its size. Unless the managed block completes,
        the blob is removed again on the way out.
        """
        size = self.write(storage, filename, stream)
        completed = False
        try:
            yield size
            completed = True
        finally:
            if not completed:
                logger.warning(f"Rolling back blob '{filename}' in storage {storage.id}.")
                self.discard(storage, filename)

    def read(self, storage, filename: str) -> bytes:
        fs = self.filesystem(storage)
        try:
            with fs.open(filename, 'rb') as blob:
                return blob.read()
        except FileNotFoundError:
            raise BlobMissing(f"Content of '{filename}' is missing from storage {storage.id}.")
        except OSError as e:
            logger.error(f"Reading blob '{filename}' from '{storage.path}' failed: {e}", exc_info=True)
            raise StorageIOError(f"Could not read '{filename}' from storage {storage.id}: {e}")

    def remove(self, storage, filename: str) -> bool:
        """
        Deletes the blob. Returns False when it was already gone.
        Other filesystem failures raise OSError.
        """
        fs = self.filesystem(storage)
        if not fs.exists(filename):
            return False
        fs.delete(filename)
        return True

    def discard(self, storage, filename: str):
        """Best-effort removal used on rollback paths; filesystem errors are logged, not raised."""
        try:
            self.remove(storage, filename)
        except OSError as e:
            logger.error(f"Could not remove blob '{filename}' from storage {storage.id} during rollback: {e}")

    def size(self, storage, filename: str):
        """On-disk size, or None when the blob does not exist."""
        fs = self.filesystem(storage)
        if not fs.exists(filename):
            return None
        return fs.size(filename)

    def listdir(self, storage) -> list[str]:
        """Regular files directly under the storage directory."""
        fs = self.filesystem(storage)
        try:
            _, filenames = fs.listdir('')
        except FileNotFoundError:
            return []
        return sorted(filenames)
