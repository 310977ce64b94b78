# src/apps/core/middleware/__init__.py
from .audit import AuditMiddleware

__all__ = ['AuditMiddleware']
