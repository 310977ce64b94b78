# src/common/authentication.py
"""
JWT Authentication

Token generation and the DRF authentication backend.
"""

import jwt
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from django.conf import settings
from rest_framework import authentication, exceptions
from rest_framework.request import Request

logger = logging.getLogger(__name__)


class JWTAuthentication(authentication.BaseAuthentication):
    """
    JWT Token Authentication for API requests.
    Uses a shared HMAC secret (HS256 by default).
    """

    keyword = 'Bearer'

    def authenticate(self, request: Request) -> Optional[Tuple[Any, Dict]]:
        auth_header = authentication.get_authorization_header(request)

        if not auth_header:
            return None

        try:
            auth_parts = auth_header.decode('utf-8').split()
        except UnicodeDecodeError:
            raise exceptions.AuthenticationFailed('Invalid token header encoding')

        if len(auth_parts) != 2:
            raise exceptions.AuthenticationFailed('Invalid token header format')

        if auth_parts[0].lower() != self.keyword.lower():
            return None

        token = auth_parts[1]
        return self.authenticate_token(token)

    def authenticate_token(self, token: str) -> Tuple[Any, Dict]:
        """Validate and decode JWT token"""
        try:
            payload = JWTTokenGenerator.decode_token(token)
        except jwt.ExpiredSignatureError:
            raise exceptions.AuthenticationFailed('Token has expired')
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            raise exceptions.AuthenticationFailed('Invalid token')

        if payload.get('type') != 'access':
            raise exceptions.AuthenticationFailed('Invalid token type')

        return (TokenUser(payload), payload)

    def authenticate_header(self, request: Request) -> str:
        return self.keyword


class TokenUser:
    """
    User object created from JWT token payload.
    Provides a consistent interface for accessing user data.
    """

    def __init__(self, payload: Dict):
        self.payload = payload
        self.id = payload.get('sub')
        self.username = payload.get('name')
        self.roles = payload.get('roles', [])
        self.is_active = True
        self.is_authenticated = True
        self.is_anonymous = False

    def __str__(self) -> str:
        return f"TokenUser({self.username})"


class JWTTokenGenerator:
    """
    Generate and decode JWT tokens.
    """

    @staticmethod
    def generate_access_token(user_id: str, username: str, roles: List[str]) -> str:
        """Generate an access token"""
        now = datetime.now(timezone.utc)

        payload = {
            'sub': user_id,
            'name': username,
            'roles': roles,
            'iat': now,
            'exp': now + settings.JWT_SETTINGS['ACCESS_TOKEN_LIFETIME'],
            'iss': settings.JWT_SETTINGS['ISSUER'],
            'aud': settings.JWT_SETTINGS['AUDIENCE'],
            'type': 'access',
        }

        return jwt.encode(
            payload,
            settings.JWT_SETTINGS['SIGNING_KEY'],
            algorithm=settings.JWT_SETTINGS['ALGORITHM']
        )

    @staticmethod
    def decode_token(token: str, verify_exp: bool = True) -> Dict:
        """Decode and verify a token. Raises jwt.InvalidTokenError subclasses."""
        return jwt.decode(
            token,
            settings.JWT_SETTINGS['SIGNING_KEY'],
            algorithms=[settings.JWT_SETTINGS['ALGORITHM']],
            issuer=settings.JWT_SETTINGS['ISSUER'],
            audience=settings.JWT_SETTINGS['AUDIENCE'],
            options={
                'require': ['exp', 'iat', 'sub', 'iss', 'aud'],
                'verify_exp': verify_exp,
            }
        )
