"""Case Schemas — cases, interactions and file metadata.

Invariants:
    - Required text fields are stripped and must be non-empty
    - Interaction parties are ActionParty values on both sides
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from argan_hr.core.domain_types import ActionParty, CaseStatus
from argan_hr.schemas.common import Pagination


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty or whitespace")
    return v


class CaseCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    escalated_by: str = Field(min_length=1, max_length=200)
    assigned_to: str | None = Field(None, max_length=200)
    status: CaseStatus = CaseStatus.OPEN
    action_required: str | None = None
    action_required_by: ActionParty | None = None

    @field_validator("title", "escalated_by")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)


class CaseUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    escalated_by: str | None = Field(None, min_length=1, max_length=200)
    assigned_to: str | None = Field(None, max_length=200)
    status: CaseStatus | None = None
    action_required: str | None = None
    action_required_by: ActionParty | None = None

    @field_validator("title", "escalated_by")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return _strip_required(v) if v is not None else v


class CaseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    case_number: str
    title: str
    description: str | None = None
    escalated_by: str
    assigned_to: str | None = None
    status: CaseStatus
    action_required: str | None = None
    action_required_by: ActionParty | None = None
    created_at: datetime
    updated_at: datetime
    company_name: str | None = None
    interaction_count: int = 0
    file_count: int = 0


class CaseListResponse(BaseModel):
    cases: list[CaseResponse]
    pagination: Pagination


class InteractionCreate(BaseModel):
    party1_name: str = Field(min_length=1, max_length=200)
    party1_type: ActionParty
    party2_name: str = Field(min_length=1, max_length=200)
    party2_type: ActionParty
    content: str = Field(min_length=1)
    action_required: str | None = None
    action_required_by: ActionParty | None = None
    action_required_by_date: date | None = None
    is_active_action: bool = False

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        return _strip_required(v)


class InteractionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    case_id: int
    party1_name: str
    party1_type: ActionParty
    party2_name: str
    party2_type: ActionParty
    content: str
    action_required: str | None = None
    action_required_by: ActionParty | None = None
    action_required_by_date: date | None = None
    is_active_action: bool
    created_at: datetime
    file_count: int = 0


class CaseFileCreate(BaseModel):
    file_name: str = Field(min_length=1, max_length=255)
    file_url: str = Field(min_length=1, max_length=1000)
    file_size: int | None = Field(None, ge=0)
    uploaded_by: str = Field(min_length=1, max_length=200)
    file_title: str | None = Field(None, max_length=255)
    file_description: str | None = None
    file_tags: list[str] = Field(default_factory=list)
    interaction_id: int | None = None


class CaseFileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    case_id: int
    interaction_id: int | None = None
    file_name: str
    file_url: str
    file_size: int | None = None
    uploaded_by: str
    file_title: str | None = None
    file_description: str | None = None
    file_tags: list[str]
    created_at: datetime
