"""Admin Schemas — request bodies and views for admin user management.

Invariants:
    - Passwords never appear in any response model
    - Create/update bodies accept raw strings; AdminService collects field errors
      (email format, password strength) into one FieldValidationError

Design Decisions:
    - role typed as AdminRole: unknown roles rejected by Pydantic before the service runs
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from argan_hr.core.domain_types import AdminRole
from argan_hr.schemas.common import Pagination


class AdminCreate(BaseModel):
    name: str = Field("", max_length=200)
    email: str = Field("", max_length=255)
    password: str = Field("", max_length=128)
    role: AdminRole = AdminRole.ADMIN


class AdminUpdate(BaseModel):
    name: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)
    role: AdminRole | None = None
    is_active: bool | None = None


class AdminResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    role: AdminRole
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime


class AdminOption(BaseModel):
    """Minimal admin view for assignee dropdowns."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: AdminRole


class AdminListResponse(BaseModel):
    admins: list[AdminResponse]
    pagination: Pagination
