from django.urls import path
from .views import FileListCreateAPIView, FileDetailAPIView

urlpatterns = [
    path('files', FileListCreateAPIView.as_view(), name='file-list-create'),
    path('files/<int:pk>', FileDetailAPIView.as_view(), name='file-detail'),
]
