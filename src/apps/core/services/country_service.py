# src/apps/core/services/country_service.py
"""
Country Service

Reference list of countries.
"""

import logging
from typing import Optional

from apps.core.constants import COUNTRIES
from apps.core.models import Country
from apps.core.services.results import ServiceResult

logger = logging.getLogger(__name__)


class CountryService:

    def get_countries(self) -> ServiceResult:
        return ServiceResult.ok(list(Country.objects.order_by('name')))

    def find_country_by_id(self, country_id) -> Optional[Country]:
        try:
            return Country.objects.get(id=int(country_id))
        except (Country.DoesNotExist, TypeError, ValueError):
            return None

    def seed_countries(self) -> int:
        """Create missing reference countries. Returns the number created."""
        created = 0
        for name in COUNTRIES:
            _, was_created = Country.objects.get_or_create(name=name)
            created += int(was_created)

        if created:
            logger.info(f"Seeded {created} countries")
        return created
