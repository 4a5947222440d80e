"""Auth Service — credential checks with database-backed lockout.

Invariants:
    - Unknown email, inactive admin and wrong password are indistinguishable (401)
    - Failures older than the window reset the counter before counting a new one
    - Reaching login_max_attempts locks the account for login_lockout_minutes;
      while locked every attempt gets 429, even with the right password
    - Every attempt (success or failure) leaves an audit entry

Design Decisions:
    - Lockout state on the admin row, not in process memory (ADR: survives restarts)
    - Session cookie handling stays in the route; this service never sees the request
"""

import logging
import math
from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.config import Settings, get_settings
from argan_hr.core import clock
from argan_hr.core.domain_types import AuditAction, AuditEntity
from argan_hr.core.errors import InvalidCredentialsError, RateLimitExceededError
from argan_hr.core.validation import (
    check_email, check_required, normalize_email, raise_if_errors,
)
from argan_hr.infrastructure.passwords import verify_password
from argan_hr.models.admin import Admin
from argan_hr.services.admin_service import AdminService
from argan_hr.services.audit_log import AuditLogService, RequestMeta

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self, db: AsyncSession, meta: RequestMeta | None = None,
        settings: Settings | None = None,
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.audit = AuditLogService(db, meta)
        self.admins = AdminService(db)

    async def login(self, email: str, password: str) -> Admin:
        errors = check_required({"email": email, "password": password}, ["email", "password"])
        errors += check_email("email", email)
        raise_if_errors(errors)

        email = normalize_email(email)
        admin = await self.admins.get_by_email(email)
        now = clock.utc_now()

        locked_until = clock.as_utc(admin.locked_until) if admin else None
        if locked_until and locked_until > now:
            await self._record_failure(email, admin, reason="locked", count=False)
            retry = math.ceil((locked_until - now).total_seconds())
            raise RateLimitExceededError(
                retry, "Too many failed login attempts. Try again later.",
            )

        if (
            admin is None
            or not admin.is_active
            or not verify_password(admin.password_hash, password)
        ):
            await self._record_failure(email, admin, reason="invalid_credentials")
            raise InvalidCredentialsError()

        admin.failed_login_attempts = 0
        admin.last_failed_attempt = None
        admin.locked_until = None
        admin.last_login = now
        self.audit.record(
            AuditAction.LOGIN_SUCCESS, AuditEntity.AUTH, admin.id,
            admin_id=admin.id, changes={"email": email},
        )
        await self.db.commit()
        logger.info("Admin signed in", extra={"admin_id": admin.id})
        return admin

    async def logout(self, admin_id: UUID | None) -> None:
        self.audit.record(
            AuditAction.LOGOUT, AuditEntity.AUTH, admin_id, admin_id=admin_id,
        )
        await self.db.commit()

    async def _record_failure(
        self, email: str, admin: Admin | None, reason: str, count: bool = True,
    ) -> None:
        if admin is not None and count:
            self._count_failure(admin)
        self.audit.record(
            AuditAction.LOGIN_FAILED, AuditEntity.AUTH,
            admin.id if admin else None,
            admin_id=admin.id if admin else None,
            changes={"email": email, "reason": reason},
        )
        await self.db.commit()
        logger.warning(f"Login failed ({reason})", extra={"admin_id": admin.id if admin else None})

    def _count_failure(self, admin: Admin) -> None:
        now = clock.utc_now()
        window = timedelta(minutes=self.settings.login_window_minutes)
        last = clock.as_utc(admin.last_failed_attempt)
        if last is None or now - last > window:
            admin.failed_login_attempts = 0
        admin.failed_login_attempts += 1
        admin.last_failed_attempt = now
        if admin.failed_login_attempts >= self.settings.login_max_attempts:
            admin.locked_until = now + timedelta(minutes=self.settings.login_lockout_minutes)
            logger.warning("Admin account locked", extra={"admin_id": admin.id})
