from rest_framework import serializers
from .models import Storage


class StorageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Storage
        fields = ['id', 'path', 'is_default']
        read_only_fields = fields


class StorageCreateSerializer(serializers.Serializer):
    path = serializers.CharField(max_length=1024)
    is_default = serializers.BooleanField(default=False)


class StorageUpdateSerializer(serializers.Serializer):
    """Both fields optional; only the ones present are changed."""
    path = serializers.CharField(max_length=1024, required=False)
    is_default = serializers.BooleanField(required=False)
