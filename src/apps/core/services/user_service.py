# src/apps/core/services/user_service.py
"""
User Service - User management

Handles user management operations including:
- Paginated listing with account status filter
- User CRUD (reads and mutations are permission-gated)
- Activation and deactivation
- Role assignment (delegated to RoleService)
- State metrics and creation statistics
"""

import logging
from typing import Dict, Mapping, Optional

from django.db import IntegrityError, transaction
from django.db.models import Count, Q
from django.db.models.functions import TruncDate

from apps.core.constants import ErrorMessages
from apps.core.filters import UserFilter, filter_errors
from apps.core.models import User
from apps.core.services.country_service import CountryService
from apps.core.services.lookup_service import UserLookupService
from apps.core.services.mutation import GuardedUserMutation
from apps.core.services.password_history_cleanup_service import PasswordHistoryCleanupService
from apps.core.services.principal import Principal
from apps.core.services.results import ServiceResult
from apps.core.services.role_service import RoleService
from common.pagination import DEFAULT_PAGE_SIZE, paginate_queryset
from common.validators import validate_not_empty, validate_positive_int

logger = logging.getLogger(__name__)


class UserService:
    """
    User management service.

    Features:
    - Listing and statistics for administrators
    - Permission-gated read, update, delete, activate, deactivate
    - Password history erasure on deletion
    """

    UPDATABLE_FIELDS = ('username', 'first_name', 'last_name', 'email', 'phone_number', 'country_id')

    def __init__(
        self,
        lookup_service: UserLookupService = None,
        mutation: GuardedUserMutation = None,
        role_service: RoleService = None,
        cleanup_service: PasswordHistoryCleanupService = None,
        country_service: CountryService = None
    ):
        self.lookup_service = lookup_service or UserLookupService()
        self.mutation = mutation or GuardedUserMutation(lookup_service=self.lookup_service)
        self.role_service = role_service or RoleService(mutation=self.mutation)
        self.cleanup_service = cleanup_service or PasswordHistoryCleanupService()
        self.country_service = country_service or CountryService()

    # ==================== LISTING ====================

    def list_users(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        account_status: Optional[int] = None,
        filters: Optional[Mapping] = None
    ) -> ServiceResult:
        """
        List users ordered by last name.

        Args:
            page: 1-based page number
            page_size: Items per page
            account_status: Optional User.AccountStatus filter
            filters: Optional UserFilter parameters (search, country_id, created_from, created_to)

        Returns:
            ServiceResult with {'users': [...], 'pagination': {...}}
        """
        validate_positive_int(page, 'page')
        validate_positive_int(page_size, 'page_size')

        query = User.objects.select_related('country').order_by('last_name', 'first_name', 'id')
        if account_status is not None:
            query = query.filter(account_status=account_status)

        if filters:
            filterset = UserFilter(filters, queryset=query)
            if not filterset.is_valid():
                return ServiceResult.failure(filter_errors(filterset))
            query = filterset.qs

        users, pagination = paginate_queryset(query, page, page_size)
        return ServiceResult.ok({'users': users, 'pagination': pagination})

    def get_user(self, principal: Optional[Principal], user_id: str) -> ServiceResult:
        """Get a single user the principal may access."""
        return self.mutation.execute(principal, user_id, ServiceResult.ok, for_update=False)

    # ==================== STATISTICS ====================

    def get_user_state_metrics(self) -> ServiceResult:
        stats = User.objects.aggregate(
            total_users_count=Count('id'),
            activated_users=Count('id', filter=Q(account_status=User.AccountStatus.ACTIVE)),
            deactivated_users=Count('id', filter=Q(account_status=User.AccountStatus.INACTIVE)),
        )
        return ServiceResult.ok(stats)

    def get_user_creation_stats(self) -> ServiceResult:
        """Number of users created per day, oldest first."""
        stats = (
            User.objects
            .annotate(date=TruncDate('created_at'))
            .values('date')
            .annotate(count=Count('id'))
            .order_by('date')
        )
        return ServiceResult.ok([{'date': row['date'], 'count': row['count']} for row in stats])

    # ==================== USER CRUD ====================

    def create_user(
        self,
        user_name: str,
        first_name: str,
        last_name: str,
        email: str,
        phone_number: str,
        country_id: int
    ) -> ServiceResult:
        """
        Create an inactive user without a password.

        Returns:
            ServiceResult with the created User

        Raises:
            ValueError: If a required field is missing
        """
        validate_not_empty(user_name, 'user_name')
        validate_not_empty(first_name, 'first_name')
        validate_not_empty(last_name, 'last_name')
        validate_not_empty(email, 'email')
        validate_not_empty(phone_number, 'phone_number')

        country = self.country_service.find_country_by_id(country_id)
        if country is None:
            return ServiceResult.failure(ErrorMessages.User.COUNTRY_NOT_FOUND)

        conflict = self._find_conflict(user_name, email)
        if conflict:
            return ServiceResult.failure(conflict)

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=user_name.strip(),
                    email=email.strip(),
                    first_name=first_name.strip(),
                    last_name=last_name.strip(),
                    phone_number=phone_number.strip(),
                    country=country,
                )
        except IntegrityError as e:
            logger.warning(f"User creation conflict for {user_name}: {e}")
            return ServiceResult.failure(ErrorMessages.User.USERNAME_TAKEN)

        logger.info(f"User created: {user.username}")
        return ServiceResult.ok(user)

    def update_user(self, principal: Optional[Principal], user_id: str, changes: Dict) -> ServiceResult:
        """
        Update profile fields of a user.

        Args:
            principal: Acting principal
            user_id: Target user id
            changes: Subset of UPDATABLE_FIELDS

        Returns:
            ServiceResult with the updated User
        """
        validate_not_empty(user_id, 'user_id')
        changes = {key: value for key, value in (changes or {}).items() if key in self.UPDATABLE_FIELDS}

        def _update(user: User) -> ServiceResult:
            updates = dict(changes)
            if 'country_id' in updates:
                country = self.country_service.find_country_by_id(updates['country_id'])
                if country is None:
                    return ServiceResult.failure(ErrorMessages.User.COUNTRY_NOT_FOUND)
                updates['country_id'] = country.id

            conflict = self._find_conflict(
                updates.get('username'),
                updates.get('email'),
                exclude_id=user.id
            )
            if conflict:
                return ServiceResult.failure(conflict)

            for field_name, value in updates.items():
                setattr(user, field_name, value.strip() if isinstance(value, str) else value)
            user.save()

            logger.info(f"User updated: {user.username}")
            return ServiceResult.ok(user)

        return self.mutation.execute(principal, user_id, _update)

    def delete_user(self, principal: Optional[Principal], user_id: str) -> ServiceResult:
        """Delete a user together with its password history."""

        def _delete(user: User) -> ServiceResult:
            self.cleanup_service.delete_password_history(str(user.id))
            username = user.username
            user.delete()
            logger.info(f"User deleted: {username}")
            return ServiceResult.ok()

        return self.mutation.execute(principal, user_id, _delete)

    # ==================== STATUS MANAGEMENT ====================

    def activate_user(self, principal: Optional[Principal], user_id: str) -> ServiceResult:

        def _activate(user: User) -> ServiceResult:
            if user.account_status != User.AccountStatus.INACTIVE:
                return ServiceResult.failure(ErrorMessages.User.ALREADY_ACTIVATED)
            user.activate()
            logger.info(f"User activated: {user.username}")
            return ServiceResult.ok()

        return self.mutation.execute(principal, user_id, _activate)

    def deactivate_user(self, principal: Optional[Principal], user_id: str) -> ServiceResult:

        def _deactivate(user: User) -> ServiceResult:
            if user.account_status != User.AccountStatus.ACTIVE:
                return ServiceResult.failure(ErrorMessages.User.NOT_ACTIVATED)
            user.deactivate()
            logger.info(f"User deactivated: {user.username}")
            return ServiceResult.ok()

        return self.mutation.execute(principal, user_id, _deactivate)

    # ==================== ROLES ====================

    def assign_role(self, principal: Optional[Principal], user_id: str, role_name: str) -> ServiceResult:
        return self.role_service.assign_role(principal, user_id, role_name)

    def remove_role(self, principal: Optional[Principal], user_id: str) -> ServiceResult:
        return self.role_service.remove_role(principal, user_id)

    # ==================== HELPER METHODS ====================

    def _find_conflict(self, username: Optional[str], email: Optional[str], exclude_id=None) -> Optional[str]:
        query = User.objects.all()
        if exclude_id is not None:
            query = query.exclude(id=exclude_id)

        if username and query.filter(username__iexact=username.strip()).exists():
            return ErrorMessages.User.USERNAME_TAKEN
        if email and query.filter(email__iexact=email.strip()).exists():
            return ErrorMessages.User.EMAIL_TAKEN
        return None
