# src/apps/core/services/requests.py
"""
Service request payloads

Plain value objects passed from the views into the password lifecycle.
"""

from dataclasses import dataclass


@dataclass
class SetPasswordRequest:
    password: str
    password_confirmed: str


@dataclass
class UpdatePasswordRequest:
    current_password: str
    new_password: str


@dataclass
class StorePasswordHistoryRequest:
    user_id: str
    password_hash: str


@dataclass
class SearchPasswordHistoryRequest:
    user_id: str
    password: str
