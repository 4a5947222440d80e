"""Onboarding Schemas — checklist view and single-flag updates."""

from pydantic import AliasChoices, BaseModel, Field

from argan_hr.core.domain_types import OnboardingScope


class OnboardingUpdate(BaseModel):
    """Toggle one flag. `type` accepted as an alias of `scope` for older clients."""
    scope: OnboardingScope = Field(validation_alias=AliasChoices("scope", "type"))
    field: str = Field(min_length=1, max_length=60)
    value: bool


class OnboardingProgress(BaseModel):
    completed: int
    total: int
    percentage: int


class OnboardingChecklist(BaseModel):
    client_id: int
    payment_method: str | None = None
    client: dict[str, bool | None]
    contract_id: int | None = None
    contract: dict[str, bool] | None = None
    progress: OnboardingProgress
