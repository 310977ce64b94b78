# src/apps/core/filters.py
"""
Query Filters

Django Filter classes for the user and audit log listings. Paging and the
status/action filters are handled by the services; these cover the
optional query parameters.
"""

import django_filters
from django.db.models import Q

from apps.core.models import AuditLog, User


class UserFilter(django_filters.FilterSet):
    """Filter for user listings."""

    country_id = django_filters.NumberFilter(field_name='country_id')

    # Creation window
    created_from = django_filters.DateFilter(
        field_name='created_at',
        lookup_expr='date__gte'
    )
    created_to = django_filters.DateFilter(
        field_name='created_at',
        lookup_expr='date__lte'
    )

    # Free-text search
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = User
        fields = ['country_id']

    def filter_search(self, queryset, name, value):
        """Match username, names or email."""
        return queryset.filter(
            Q(username__icontains=value) |
            Q(first_name__icontains=value) |
            Q(last_name__icontains=value) |
            Q(email__icontains=value)
        )


class AuditLogFilter(django_filters.FilterSet):
    """Filter for audit log listings."""

    user_id = django_filters.UUIDFilter()
    ip_address = django_filters.CharFilter()

    timestamp_from = django_filters.DateTimeFilter(
        field_name='timestamp',
        lookup_expr='gte'
    )
    timestamp_to = django_filters.DateTimeFilter(
        field_name='timestamp',
        lookup_expr='lte'
    )

    class Meta:
        model = AuditLog
        fields = ['user_id', 'ip_address']


def filter_errors(filterset: django_filters.FilterSet) -> list:
    """Flatten FilterSet form errors into messages."""
    return [
        f"{field_name}: {message}"
        for field_name, messages in filterset.errors.items()
        for message in messages
    ]
