# src/apps/core/models/user.py
"""
User model for the Identity Service.

A user is provisioned without a password; the password is attached later
through the password lifecycle. Account status gates login and role
assignment.
"""

import uuid
from datetime import timedelta
from typing import List

from django.contrib.auth import password_validation
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.db import models, transaction
from django.utils import timezone

from apps.core.constants import ErrorMessages, Roles
from apps.core.models.password_history import PasswordHistory
from apps.core.models.role import Role, UserRole


class UserManager(BaseUserManager):
    """User manager keyed on username."""

    def create_user(self, username, email, password=None, **extra_fields):
        """
        Create a user. Without a password the account has no credential.

        A password given here is recorded in the password history like
        any other password that gets set.
        """
        if not username:
            raise ValueError('Username is required')
        if not email:
            raise ValueError('Email is required')

        user = self.model(
            username=username,
            email=self.normalize_email(email),
            **extra_fields
        )
        with transaction.atomic(using=self._db):
            if password:
                user.set_password(password)
            user.save(using=self._db)
            if password:
                PasswordHistory.objects.using(self._db).create(
                    user=user,
                    password_hash=user.password,
                    created_at=timezone.now(),
                )
        return user

    def create_superuser(self, username, email, password=None, **extra_fields):
        """Create an active account holding the SuperAdmin role."""
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('account_status', User.AccountStatus.ACTIVE)

        with transaction.atomic(using=self._db):
            user = self.create_user(username, email, password, **extra_fields)
            role, _ = Role.objects.using(self._db).get_or_create(name=Roles.SUPER_ADMIN.value)
            UserRole.objects.using(self._db).create(user=user, role=role)
        return user

    def active(self):
        return self.filter(account_status=User.AccountStatus.ACTIVE)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Identity user.

    ``password`` is nullable: ``None`` means no password has been set yet.
    """

    class AccountStatus(models.IntegerChoices):
        INACTIVE = 0, 'Inactive'
        ACTIVE = 1, 'Active'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    username = models.CharField(max_length=150, unique=True)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=255, unique=True)

    phone_regex = RegexValidator(
        regex=r'^\+?1?\d{9,15}$',
        message="Phone number format: '+999999999'. Up to 15 digits allowed."
    )
    phone_number = models.CharField(validators=[phone_regex], max_length=50, blank=True, null=True)

    country = models.ForeignKey(
        'core.Country',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='users'
    )

    password = models.CharField('password', max_length=128, null=True, blank=True)

    account_status = models.PositiveSmallIntegerField(
        choices=AccountStatus.choices,
        default=AccountStatus.INACTIVE,
        db_index=True
    )

    # Lockout
    failed_login_attempts = models.PositiveIntegerField(default=0)
    locked_until = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'username'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['email', 'first_name', 'last_name']

    class Meta:
        db_table = 'users'
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return self.username

    # ==================== STATE ====================

    @property
    def is_active(self) -> bool:
        return self.account_status == self.AccountStatus.ACTIVE

    @property
    def has_password(self) -> bool:
        return bool(self.password)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_locked(self) -> bool:
        return bool(self.locked_until and self.locked_until > timezone.now())

    def get_roles(self) -> List[str]:
        """Names of the roles held by this user."""
        return list(
            self.user_roles.order_by('role__name').values_list('role__name', flat=True)
        )

    # ==================== CREDENTIALS ====================

    def check_password(self, raw_password) -> bool:
        if not self.has_password:
            return False
        return super().check_password(raw_password)

    def add_password(self, raw_password: str) -> List[str]:
        """
        Attach a first password.

        Returns:
            Password policy violations; empty when the password was stored.
        """
        errors = self._validate_password(raw_password)
        if errors:
            return errors

        self.set_password(raw_password)
        self.save(update_fields=['password', 'updated_at'])
        return []

    def change_password(self, current_password: str, new_password: str) -> List[str]:
        """
        Replace the password after verifying the current one.

        Returns:
            Password policy violations; empty when the password was changed.
        """
        if not self.check_password(current_password):
            return [ErrorMessages.Password.INVALID_CREDENTIALS]

        errors = self._validate_password(new_password)
        if errors:
            return errors

        self.set_password(new_password)
        self.save(update_fields=['password', 'updated_at'])
        return []

    def _validate_password(self, raw_password: str) -> List[str]:
        try:
            password_validation.validate_password(raw_password, self)
        except ValidationError as e:
            return list(e.messages)
        return []

    # ==================== LOCKOUT ====================

    def record_login_failure(self, max_attempts: int = 5, lock_duration: int = 5) -> bool:
        """
        Count a failed login and lock the account once the limit is reached.

        Returns:
            True if the account is now locked
        """
        self.failed_login_attempts += 1
        locked = self.failed_login_attempts >= max_attempts
        if locked:
            self.locked_until = timezone.now() + timedelta(minutes=lock_duration)
        self.save(update_fields=['failed_login_attempts', 'locked_until', 'updated_at'])
        return locked

    def record_login_success(self) -> None:
        self.failed_login_attempts = 0
        self.locked_until = None
        self.last_login = timezone.now()
        self.save(update_fields=['failed_login_attempts', 'locked_until', 'last_login', 'updated_at'])

    def activate(self) -> None:
        self.account_status = self.AccountStatus.ACTIVE
        self.save(update_fields=['account_status', 'updated_at'])

    def deactivate(self) -> None:
        self.account_status = self.AccountStatus.INACTIVE
        self.save(update_fields=['account_status', 'updated_at'])
