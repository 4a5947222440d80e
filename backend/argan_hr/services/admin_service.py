"""Admin Service — staff account management (list, create, update, soft delete).

Invariants:
    - Emails stored lowercase; unique across all admins (active or not)
    - Passwords hashed with werkzeug before they touch the session; never logged
    - Deactivation is soft (is_active=False) and reversible via reactivate
    - An admin can neither deactivate nor demote themselves
    - Every mutation writes an audit entry in the same transaction

Design Decisions:
    - Field errors collected into one FieldValidationError (form-friendly)
"""

import logging
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.core.domain_types import AdminRole, AuditAction, AuditEntity
from argan_hr.core.errors import (
    BusinessRuleError, EmailAlreadyExistsError, ResourceNotFoundError,
)
from argan_hr.core.list_view import PageRequest, build_pagination, like_pattern
from argan_hr.core.validation import (
    check_email, check_password, check_required, normalize_email, raise_if_errors,
)
from argan_hr.infrastructure.passwords import hash_password
from argan_hr.models.admin import Admin
from argan_hr.schemas.admin import AdminCreate, AdminUpdate
from argan_hr.services.audit_log import AuditLogService, RequestMeta

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self, db: AsyncSession, actor: Admin | None = None,
        meta: RequestMeta | None = None,
    ):
        self.db = db
        self.actor = actor
        self.audit = AuditLogService(db, meta)

    @property
    def _actor_id(self) -> UUID | None:
        return self.actor.id if self.actor else None

    # ─── Queries ──────────────────────────────────────────────────

    async def list_admins(
        self,
        page: PageRequest,
        search: str | None = None,
        role: AdminRole | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[Admin], dict]:
        query = select(Admin)
        if search and search.strip():
            pattern = like_pattern(search)
            query = query.where(or_(
                Admin.email.ilike(pattern, escape="\\"),
                Admin.name.ilike(pattern, escape="\\"),
            ))
        if role:
            query = query.where(Admin.role == role.value)
        if is_active is not None:
            query = query.where(Admin.is_active == is_active)

        total = await self.db.scalar(
            select(func.count()).select_from(query.subquery()),
        )
        result = await self.db.execute(
            query.order_by(Admin.created_at.desc())
            .limit(page.limit).offset(page.offset),
        )
        return list(result.scalars().all()), build_pagination(page, total or 0)

    async def list_active_admins(self) -> list[Admin]:
        result = await self.db.execute(
            select(Admin).where(Admin.is_active.is_(True)).order_by(Admin.name),
        )
        return list(result.scalars().all())

    async def get_admin(self, admin_id: UUID) -> Admin:
        admin = await self.db.get(Admin, admin_id)
        if not admin:
            raise ResourceNotFoundError("Admin", admin_id)
        return admin

    async def get_by_email(self, email: str) -> Admin | None:
        result = await self.db.execute(
            select(Admin).where(Admin.email == normalize_email(email)),
        )
        return result.scalar_one_or_none()

    # ─── Mutations ────────────────────────────────────────────────

    async def create_admin(self, data: AdminCreate) -> Admin:
        errors = check_required(data.model_dump(), ["name", "email", "password"])
        errors += check_email("email", data.email)
        if data.password:
            errors += check_password("password", data.password)
        raise_if_errors(errors)

        email = normalize_email(data.email)
        if await self.get_by_email(email):
            raise EmailAlreadyExistsError(email)

        admin = Admin(
            email=email,
            name=data.name.strip(),
            password_hash=hash_password(data.password),
            role=data.role.value,
            is_active=True,
        )
        self.db.add(admin)
        await self.db.flush()
        self.audit.record(
            AuditAction.ADMIN_CREATED, AuditEntity.ADMIN, admin.id,
            admin_id=self._actor_id,
            changes={"email": email, "name": admin.name, "role": admin.role},
        )
        await self.db.commit()
        logger.info("Admin created", extra={"admin_id": admin.id})
        return admin

    async def update_admin(self, admin_id: UUID, data: AdminUpdate) -> Admin:
        admin = await self.get_admin(admin_id)
        changes = data.model_dump(exclude_unset=True)

        errors = []
        for name in ("name", "email", "password"):
            if name in changes and not (changes[name] or "").strip():
                errors.append({"field": name, "message": f"{name.capitalize()} cannot be empty"})
        errors += check_email("email", changes.get("email"))
        if changes.get("password"):
            errors += check_password("password", changes["password"])
        raise_if_errors(errors)

        if self._is_self(admin):
            if changes.get("is_active") is False:
                raise BusinessRuleError("You cannot deactivate your own account")
            if changes.get("role") is not None and changes["role"] != AdminRole(admin.role):
                raise BusinessRuleError("You cannot change your own role")

        if "email" in changes:
            email = normalize_email(changes["email"])
            if email != admin.email:
                existing = await self.get_by_email(email)
                if existing and existing.id != admin.id:
                    raise EmailAlreadyExistsError(email)
            admin.email = email
        if "name" in changes:
            admin.name = changes["name"].strip()
        if changes.get("role") is not None:
            admin.role = changes["role"].value
        if changes.get("is_active") is not None:
            admin.is_active = changes["is_active"]
        if changes.get("password"):
            admin.password_hash = hash_password(changes["password"])

        audited = {k: v for k, v in changes.items() if k != "password"}
        if "password" in changes:
            audited["password_changed"] = True
        self.audit.record(
            AuditAction.ADMIN_UPDATED, AuditEntity.ADMIN, admin.id,
            admin_id=self._actor_id, changes=audited,
        )
        await self.db.commit()
        return admin

    async def deactivate_admin(self, admin_id: UUID) -> Admin:
        admin = await self.get_admin(admin_id)
        if self._is_self(admin):
            raise BusinessRuleError("You cannot deactivate your own account")
        admin.is_active = False
        self.audit.record(
            AuditAction.ADMIN_DEACTIVATED, AuditEntity.ADMIN, admin.id,
            admin_id=self._actor_id,
        )
        await self.db.commit()
        return admin

    async def reactivate_admin(self, admin_id: UUID) -> Admin:
        admin = await self.get_admin(admin_id)
        admin.is_active = True
        admin.failed_login_attempts = 0
        admin.locked_until = None
        self.audit.record(
            AuditAction.ADMIN_REACTIVATED, AuditEntity.ADMIN, admin.id,
            admin_id=self._actor_id,
        )
        await self.db.commit()
        return admin

    def _is_self(self, admin: Admin) -> bool:
        return self.actor is not None and self.actor.id == admin.id
