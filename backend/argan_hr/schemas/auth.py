"""Auth Schemas — login body and the signed-in admin view."""

from pydantic import BaseModel, Field

from argan_hr.schemas.admin import AdminResponse


class LoginRequest(BaseModel):
    email: str = Field("", max_length=255)
    password: str = Field("", max_length=128)


class CurrentAdminResponse(BaseModel):
    admin: AdminResponse
    permissions: list[str]
