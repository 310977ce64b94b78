# src/apps/core/views/country.py
"""
Country ViewSet

- GET /countries/ - Reference list of countries
"""

from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from apps.core.serializers import CountrySerializer
from apps.core.services import CountryService
from apps.core.views.base import ServiceResultMixin


class CountryViewSet(ServiceResultMixin, viewsets.ViewSet):

    permission_classes = [AllowAny]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.country_service = CountryService()

    def list(self, request):
        result = self.country_service.get_countries()
        return self._result_response(result, data=CountrySerializer(result.data, many=True).data)
