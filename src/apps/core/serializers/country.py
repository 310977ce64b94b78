# src/apps/core/serializers/country.py
from rest_framework import serializers

from apps.core.models import Country


class CountrySerializer(serializers.ModelSerializer):

    class Meta:
        model = Country
        fields = ['id', 'name']
        read_only_fields = fields
