# storage/views.py

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response

from .services import StorageService
from .serializers import StorageSerializer, StorageCreateSerializer, StorageUpdateSerializer


class StorageListCreateAPIView(APIView):
    """
    * GET: Returns every registered storage.
    * POST: Registers a new storage; `is_default=true` takes over the default flag.
    """
    service = StorageService()

    def get(self, request):
        storages = self.service.list_storages()
        serializer = StorageSerializer(storages, many=True)
        return Response(serializer.data)

    def post(self, request):
        write_serializer = StorageCreateSerializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)

        # Service errors (Conflict, CatalogError) propagate to the exception handler.
        storage = self.service.create_storage(**write_serializer.validated_data)
        return Response(StorageSerializer(storage).data, status=status.HTTP_201_CREATED)


class StorageDetailAPIView(APIView):
    service = StorageService()

    def get(self, request, pk):
        storage = self.service.get_storage(pk)
        return Response(StorageSerializer(storage).data)

    def put(self, request, pk):
        write_serializer = StorageUpdateSerializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)

        storage = self.service.modify_storage(storage_id=pk, **write_serializer.validated_data)
        return Response(StorageSerializer(storage).data)

    def delete(self, request, pk):
        self.service.delete_storage(storage_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
