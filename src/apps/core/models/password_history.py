# src/apps/core/models/password_history.py
"""
Password history model

Append-only record of password hashes per user, used for reuse detection.
Retention is enforced by the cleanup service, not by the model.
"""

from django.db import models


class PasswordHistory(models.Model):
    """A password hash that was set for a user."""

    id = models.BigAutoField(primary_key=True)
    user = models.ForeignKey(
        'core.User',
        on_delete=models.CASCADE,
        related_name='password_histories'
    )
    password_hash = models.CharField(max_length=255)
    created_at = models.DateTimeField(db_index=True)

    class Meta:
        db_table = 'password_histories'
        ordering = ['created_at', 'id']
        verbose_name_plural = 'password histories'
        indexes = [
            models.Index(fields=['user', 'created_at']),
        ]

    def __str__(self):
        return f"PasswordHistory({self.user_id}, {self.created_at.isoformat()})"
