from django.db import models

from storage.models import Storage


class File(models.Model):
    """
    Catalog half of a stored file. The blob lives at
    <storage.path>/<title><ext> and is exactly `size` bytes long.
    """
    title = models.CharField(max_length=255, help_text="Filename without its extension.")
    ext = models.CharField(max_length=255, blank=True, help_text="Extension including the leading dot, or empty.")
    size = models.BigIntegerField(help_text="Byte length read back from disk after the copy.")

    storage = models.ForeignKey(
        Storage,
        on_delete=models.PROTECT,
        related_name='files',
        help_text="The storage whose directory holds the blob."
    )

    class Meta:
        db_table = 'file'
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['storage', 'title', 'ext'], name='unique_file_per_storage')
        ]

    @property
    def filename(self) -> str:
        return f"{self.title}{self.ext}"

    def __str__(self):
        return f"{self.filename} (ID: {self.id}, storage {self.storage_id})"
