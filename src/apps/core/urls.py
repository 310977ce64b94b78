# src/apps/core/urls.py
"""
URL configuration for Identity Service API

Endpoints:
    /api/v1/users/          - User management (CRUD, activation, statistics)
    /api/v1/password/       - Password set and rotation
    /api/v1/login/          - Token issuance
    /api/v1/roles/          - Role listing and assignment
    /api/v1/audit-logs/     - Audit log viewing and deletion
    /api/v1/countries/      - Country reference data
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.core.views import (
    UserViewSet,
    PasswordViewSet,
    LoginViewSet,
    RoleViewSet,
    AuditLogViewSet,
    CountryViewSet,
)

router = DefaultRouter()
router.register(r'users', UserViewSet, basename='user')
router.register(r'password', PasswordViewSet, basename='password')
router.register(r'login', LoginViewSet, basename='login')
router.register(r'roles', RoleViewSet, basename='role')
router.register(r'audit-logs', AuditLogViewSet, basename='audit-log')
router.register(r'countries', CountryViewSet, basename='country')

urlpatterns = [
    path('', include(router.urls)),
]
