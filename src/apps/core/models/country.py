# src/apps/core/models/country.py
from django.db import models


class Country(models.Model):
    """Reference list of countries a user may belong to."""

    id = models.AutoField(primary_key=True)
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        db_table = 'countries'
        ordering = ['name']
        verbose_name_plural = 'countries'

    def __str__(self):
        return self.name
