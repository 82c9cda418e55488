from django.db import models
from django.db.models import Q


class Storage(models.Model):
    """
    A filesystem directory that holds file blobs.
    At most one storage is flagged default; every new upload lands there.
    """
    path = models.CharField(
        max_length=1024,
        help_text="Directory holding the blobs. Not checked for existence when the row is created."
    )

    is_default = models.BooleanField(
        default=False,
        db_index=True,
        help_text="True for the single storage that receives new uploads."
    )

    class Meta:
        db_table = 'storage'
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['is_default'],
                condition=Q(is_default=True),
                name='single_default_storage',
            )
        ]

    def __str__(self):
        marker = ' [default]' if self.is_default else ''
        return f"{self.path} (ID: {self.id}){marker}"
