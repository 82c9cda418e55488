from django.http import HttpResponse
from django.urls import path, include


def index(request):
    return HttpResponse("hello", content_type="text/plain")


urlpatterns = [
    path('', index, name='index'),
    path('auth/', include('accounts.api_urls')),
    path('', include('storage.api_urls')),
    path('', include('files.api_urls')),
]
