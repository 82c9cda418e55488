from rest_framework import serializers
from .models import File


class FileSerializer(serializers.ModelSerializer):
    storage_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = File
        fields = ['id', 'title', 'size', 'ext', 'storage_id']
        read_only_fields = fields


class FileContentSerializer(FileSerializer):
    """File metadata plus the blob encoded as base64."""
    base64_value = serializers.CharField(read_only=True)

    class Meta(FileSerializer.Meta):
        fields = FileSerializer.Meta.fields + ['base64_value']
        read_only_fields = fields


class FileUploadSerializer(serializers.Serializer):
    file = serializers.FileField(write_only=True, allow_empty_file=True)
