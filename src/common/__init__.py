# Shared helpers for the Identity Service: JWT authentication, the DRF
# exception handler, request middleware, pagination and argument validators.

__version__ = "1.0.0"
