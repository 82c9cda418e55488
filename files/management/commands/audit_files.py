# files/management/commands/audit_files.py

import logging
from django.core.management.base import BaseCommand, CommandError

from files.blobs import BlobStore
from files.models import File
from storage.models import Storage

logger = logging.getLogger(__name__)


def audit_storage(storage: Storage, blobs: BlobStore) -> dict:
    """
    Compares the catalog rows of one storage with its directory.
    Returns lists of dangling rows, size mismatches and orphan blobs.
    """
    report = {"dangling": [], "size_mismatch": [], "orphan": []}
    known_names = set()

    for file_record in File.objects.filter(storage=storage):
        known_names.add(file_record.filename)
        on_disk = blobs.size(storage, file_record.filename)
        if on_disk is None:
            report["dangling"].append(file_record)
        elif on_disk != file_record.size:
            report["size_mismatch"].append((file_record, on_disk))

    for name in blobs.listdir(storage):
        if name not in known_names:
            report["orphan"].append(name)

    return report


class Command(BaseCommand):
    """
    Reports file rows and blobs that have drifted apart. Read-only: nothing
    is repaired or deleted.
    """
    help = 'Audits every storage (or one) for dangling rows, size mismatches and orphan blobs.'

    def add_arguments(self, parser):
        parser.add_argument('--storage', type=int, help='Only audit the storage with this id.')

    def handle(self, *args, **options):
        storages = Storage.objects.all()
        if options.get('storage') is not None:
            storages = storages.filter(pk=options['storage'])
            if not storages.exists():
                raise CommandError(f"Storage {options['storage']} does not exist.")

        blobs = BlobStore()
        totals = {"dangling": 0, "size_mismatch": 0, "orphan": 0}

        for storage in storages:
            self.stdout.write(f"--- Storage {storage.id} at '{storage.path}' ---")
            report = audit_storage(storage, blobs)

            for file_record in report["dangling"]:
                self.stdout.write(self.style.ERROR(
                    f"dangling: file {file_record.id} '{file_record.filename}' has no blob"
                ))
            for file_record, on_disk in report["size_mismatch"]:
                self.stdout.write(self.style.WARNING(
                    f"size_mismatch: file {file_record.id} '{file_record.filename}' "
                    f"catalog={file_record.size} disk={on_disk}"
                ))
            for name in report["orphan"]:
                self.stdout.write(self.style.WARNING(f"orphan: '{name}' has no catalog row"))

            for kind in totals:
                totals[kind] += len(report[kind])

        summary = ", ".join(f"{count} {kind}" for kind, count in totals.items())
        logger.info(f"Audit finished: {summary}.")
        if any(totals.values()):
            self.stdout.write(self.style.WARNING(f"Audit finished: {summary}."))
        else:
            self.stdout.write(self.style.SUCCESS(f"Audit finished: {summary}."))
