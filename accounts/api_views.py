# accounts/api_views.py

from django.http import HttpResponse
from rest_framework.views import APIView


class RegisterView(APIView):
    """Placeholder. Registration is not implemented and touches no tables."""

    def post(self, request):
        return HttpResponse("register", content_type="text/plain")


class AccessTokenView(APIView):
    """Placeholder. Token issuance is not implemented."""

    def post(self, request):
        return HttpResponse("token", content_type="text/plain")
