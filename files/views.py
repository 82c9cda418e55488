# files/views.py

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response

from .services import FileService
from .serializers import FileSerializer, FileContentSerializer, FileUploadSerializer


class FileListCreateAPIView(APIView):
    """
    * GET: Lists the files held by the current default storage.
    * POST: Uploads the multipart field `file` into the default storage.
    """
    parser_classes = [MultiPartParser, FormParser]
    service = FileService()

    def get(self, request):
        files = self.service.list_files()
        serializer = FileSerializer(files, many=True)
        return Response(serializer.data)

    def post(self, request):
        serializer = FileUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        upload = serializer.validated_data['file']

        # Any failing stage raises; the exception handler turns it into
        # {"error", "message"} with the matching status code.
        new_file = self.service.create_file(upload=upload, filename=upload.name)
        return Response(FileSerializer(new_file).data, status=status.HTTP_201_CREATED)


class FileDetailAPIView(APIView):
    service = FileService()

    def get(self, request, pk):
        file_instance = self.service.get_file_with_content(pk)
        return Response(FileContentSerializer(file_instance).data)

    def delete(self, request, pk):
        self.service.delete_file(pk)
        return Response(status=status.HTTP_200_OK)
