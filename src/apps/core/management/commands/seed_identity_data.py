# src/apps/core/management/commands/seed_identity_data.py
"""
Seed the fixed role set and the country reference list.

Safe to run repeatedly; existing rows are left untouched.
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.core.services import CountryService, RoleService


class Command(BaseCommand):
    help = 'Create the SuperAdmin/Admin/User roles and the country reference list'

    @transaction.atomic
    def handle(self, *args, **options):
        roles_created = RoleService().seed_roles()
        countries_created = CountryService().seed_countries()

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {roles_created} roles and {countries_created} countries"
        ))
