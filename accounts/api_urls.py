from django.urls import path
from .api_views import RegisterView, AccessTokenView

urlpatterns = [
    path('register', RegisterView.as_view(), name='register'),
    path('tokens/access', AccessTokenView.as_view(), name='token-access'),
]
