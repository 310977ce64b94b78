# src/apps/core/models/audit.py
"""
Audit log model

Records authorization breaches, unhandled exceptions and slow requests.
"""

import uuid
from django.db import models


class AuditLog(models.Model):
    """Audit trail entry."""

    class Action(models.TextChoices):
        AUTHORIZATION_BREACH = 'AuthorizationBreach', 'Authorization Breach'
        EXCEPTION = 'Exception', 'Exception'
        SLOW_PERFORMANCE = 'SlowPerformance', 'Slow Performance'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(null=True, blank=True, db_index=True)
    action = models.CharField(max_length=30, choices=Action.choices, db_index=True)
    details = models.TextField()
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-timestamp']

    def __str__(self):
        return f"{self.action} at {self.timestamp}"
