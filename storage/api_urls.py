from django.urls import path
from .views import StorageListCreateAPIView, StorageDetailAPIView

urlpatterns = [
    path('storage', StorageListCreateAPIView.as_view(), name='storage-list-create'),
    path('storage/<int:pk>', StorageDetailAPIView.as_view(), name='storage-detail'),
]
