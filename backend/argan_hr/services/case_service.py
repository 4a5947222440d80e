"""Case Service — client cases, their interaction log, active actions and file metadata.

Invariants:
    - Case references are per client and strictly increasing (core/case_rules.py)
    - At most one interaction per case is the active action; setting one clears the rest
      and copies action_required/action_required_by onto the case
    - Unsetting (or deleting) the active interaction clears the case's action fields
    - Files listed without an interaction id are case-level files only
    - Deleting a case removes its files and interactions first

Design Decisions:
    - Counts via correlated scalar subqueries: one round trip per list page
    - Views returned as CaseResponse/InteractionResponse because they mix row and
      aggregate columns
"""

import logging

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.core.case_rules import next_case_number
from argan_hr.core.domain_types import (
    ActionParty, AuditAction, AuditEntity, CaseStatus,
)
from argan_hr.core.errors import ResourceNotFoundError, ValidationError
from argan_hr.core.list_view import (
    PageRequest, build_pagination, like_pattern, resolve_sort,
)
from argan_hr.models.admin import Admin
from argan_hr.models.case import Case, CaseFile, CaseInteraction
from argan_hr.models.client import Client
from argan_hr.schemas.case import (
    CaseCreate, CaseFileCreate, CaseResponse, CaseUpdate, InteractionCreate,
    InteractionResponse,
)
from argan_hr.services.audit_log import AuditLogService, RequestMeta

logger = logging.getLogger(__name__)

CASE_SORT_FIELDS = {
    "created_at": Case.created_at,
    "updated_at": Case.updated_at,
    "title": Case.title,
    "status": Case.status,
    "case_number": Case.case_number,
}

_interaction_count = (
    select(func.count(CaseInteraction.id))
    .where(CaseInteraction.case_id == Case.id)
    .correlate(Case).scalar_subquery()
)
_case_file_count = (
    select(func.count(CaseFile.id))
    .where(CaseFile.case_id == Case.id)
    .correlate(Case).scalar_subquery()
)
_interaction_file_count = (
    select(func.count(CaseFile.id))
    .where(CaseFile.interaction_id == CaseInteraction.id)
    .correlate(CaseInteraction).scalar_subquery()
)


def _case_view(case: Case, company_name: str | None, interactions: int, files: int) -> CaseResponse:
    return CaseResponse.model_validate(case).model_copy(update={
        "company_name": company_name,
        "interaction_count": interactions or 0,
        "file_count": files or 0,
    })


class CaseService:
    def __init__(
        self, db: AsyncSession, actor: Admin | None = None,
        meta: RequestMeta | None = None,
    ):
        self.db = db
        self.actor = actor
        self.audit = AuditLogService(db, meta)

    # ─── Cases ────────────────────────────────────────────────────

    async def list_cases(
        self,
        page: PageRequest,
        client_id: int | None = None,
        status: CaseStatus | None = None,
        assigned_to: str | None = None,
        action_required_by: ActionParty | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_dir: str | None = "desc",
    ) -> tuple[list[CaseResponse], dict]:
        if client_id is not None:
            await self._require_client(client_id)
        filtered = select(Case.id)
        if client_id is not None:
            filtered = filtered.where(Case.client_id == client_id)
        if status:
            filtered = filtered.where(Case.status == status.value)
        if assigned_to:
            filtered = filtered.where(Case.assigned_to == assigned_to)
        if action_required_by:
            filtered = filtered.where(Case.action_required_by == action_required_by.value)
        if search and search.strip():
            pattern = like_pattern(search)
            filtered = filtered.where(or_(
                Case.title.ilike(pattern, escape="\\"),
                Case.case_number.ilike(pattern, escape="\\"),
            ))

        total = await self.db.scalar(
            select(func.count()).select_from(filtered.subquery()),
        )
        column, descending = resolve_sort(sort_by, sort_dir, CASE_SORT_FIELDS, "created_at")
        result = await self.db.execute(
            select(Case, Client.company_name, _interaction_count, _case_file_count)
            .join(Client, Client.id == Case.client_id)
            .where(Case.id.in_(filtered))
            .order_by(column.desc() if descending else column.asc(), Case.id.desc())
            .limit(page.limit).offset(page.offset),
        )
        cases = [_case_view(*row) for row in result.all()]
        return cases, build_pagination(page, total or 0)

    async def get_case(self, case_id: int) -> CaseResponse:
        result = await self.db.execute(
            select(Case, Client.company_name, _interaction_count, _case_file_count)
            .join(Client, Client.id == Case.client_id)
            .where(Case.id == case_id)
            .execution_options(populate_existing=True),
        )
        row = result.one_or_none()
        if row is None:
            raise ResourceNotFoundError("Case", case_id)
        return _case_view(*row)

    async def create_case(self, client_id: int, data: CaseCreate) -> CaseResponse:
        await self._require_client(client_id)
        last_number = await self.db.scalar(
            select(Case.case_number).where(Case.client_id == client_id)
            .order_by(Case.id.desc()).limit(1),
        )
        case = Case(
            client_id=client_id,
            case_number=next_case_number(last_number),
            title=data.title,
            description=data.description,
            escalated_by=data.escalated_by,
            assigned_to=data.assigned_to,
            status=data.status.value,
            action_required=data.action_required,
            action_required_by=data.action_required_by.value if data.action_required_by else None,
        )
        self.db.add(case)
        await self.db.flush()
        self._record(AuditAction.CASE_CREATED, case, {"case_number": case.case_number})
        await self.db.commit()
        logger.info(
            f"Case {case.case_number} opened",
            extra={"client_id": client_id, "case_id": case.id},
        )
        return await self.get_case(case.id)

    async def update_case(self, case_id: int, data: CaseUpdate) -> CaseResponse:
        case = await self._get_case_row(case_id)
        changes = {
            k: (v.value if hasattr(v, "value") else v)
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in ("description", "assigned_to", "action_required", "action_required_by")
        }
        for name, value in changes.items():
            setattr(case, name, value)
        self._record(AuditAction.CASE_UPDATED, case, changes)
        await self.db.commit()
        return await self.get_case(case_id)

    async def delete_case(self, case_id: int) -> None:
        case = await self._get_case_row(case_id)
        self._record(AuditAction.CASE_DELETED, case, {"case_number": case.case_number})
        await self.db.execute(delete(CaseFile).where(CaseFile.case_id == case_id))
        await self.db.execute(delete(CaseInteraction).where(CaseInteraction.case_id == case_id))
        await self.db.delete(case)
        await self.db.commit()

    # ─── Interactions ─────────────────────────────────────────────

    async def list_interactions(self, case_id: int) -> list[InteractionResponse]:
        await self._get_case_row(case_id)
        result = await self.db.execute(
            select(CaseInteraction, _interaction_file_count)
            .where(CaseInteraction.case_id == case_id)
            .order_by(CaseInteraction.created_at.desc(), CaseInteraction.id.desc()),
        )
        return [
            InteractionResponse.model_validate(interaction).model_copy(
                update={"file_count": files or 0},
            )
            for interaction, files in result.all()
        ]

    async def create_interaction(
        self, case_id: int, data: InteractionCreate,
    ) -> CaseInteraction:
        case = await self._get_case_row(case_id)
        values = {
            k: (v.value if hasattr(v, "value") else v)
            for k, v in data.model_dump().items()
        }
        values["is_active_action"] = False
        interaction = CaseInteraction(case_id=case_id, **values)
        self.db.add(interaction)
        await self.db.flush()
        if data.is_active_action:
            await self._make_active(case, interaction)
        await self.db.commit()
        return interaction

    async def delete_interaction(self, case_id: int, interaction_id: int) -> None:
        case = await self._get_case_row(case_id)
        interaction = await self._get_interaction(case_id, interaction_id)
        if interaction.is_active_action:
            self._clear_case_action(case)
        await self.db.execute(delete(CaseFile).where(CaseFile.interaction_id == interaction_id))
        await self.db.delete(interaction)
        await self.db.commit()

    async def set_active_action(self, case_id: int, interaction_id: int) -> CaseInteraction:
        case = await self._get_case_row(case_id)
        interaction = await self._get_interaction(case_id, interaction_id)
        await self._make_active(case, interaction)
        await self.db.commit()
        return interaction

    async def unset_active_action(self, case_id: int, interaction_id: int) -> CaseInteraction:
        case = await self._get_case_row(case_id)
        interaction = await self._get_interaction(case_id, interaction_id)
        if interaction.is_active_action:
            interaction.is_active_action = False
            self._clear_case_action(case)
        await self.db.commit()
        return interaction

    # ─── Files ────────────────────────────────────────────────────

    async def list_files(
        self, case_id: int, interaction_id: int | None = None,
    ) -> list[CaseFile]:
        await self._get_case_row(case_id)
        query = select(CaseFile).where(CaseFile.case_id == case_id)
        if interaction_id is None:
            query = query.where(CaseFile.interaction_id.is_(None))
        else:
            query = query.where(CaseFile.interaction_id == interaction_id)
        result = await self.db.execute(
            query.order_by(CaseFile.created_at.desc(), CaseFile.id.desc()),
        )
        return list(result.scalars().all())

    async def add_file(self, case_id: int, data: CaseFileCreate) -> CaseFile:
        await self._get_case_row(case_id)
        if data.interaction_id is not None:
            await self._get_interaction(case_id, data.interaction_id)
        tags = [t.strip() for t in data.file_tags if t.strip()]
        case_file = CaseFile(
            case_id=case_id, **data.model_dump(exclude={"file_tags"}), file_tags=tags,
        )
        self.db.add(case_file)
        await self.db.commit()
        return case_file

    # ─── Internals ────────────────────────────────────────────────

    async def _make_active(self, case: Case, interaction: CaseInteraction) -> None:
        if not interaction.action_required:
            raise ValidationError(
                "Only interactions with a required action can be the active action",
                field="action_required",
            )
        await self.db.execute(
            update(CaseInteraction)
            .where(CaseInteraction.case_id == case.id)
            .where(CaseInteraction.id != interaction.id)
            .values(is_active_action=False),
            execution_options={"synchronize_session": "fetch"},
        )
        interaction.is_active_action = True
        case.action_required = interaction.action_required
        case.action_required_by = interaction.action_required_by

    @staticmethod
    def _clear_case_action(case: Case) -> None:
        case.action_required = None
        case.action_required_by = None

    async def _require_client(self, client_id: int) -> None:
        if not await self.db.get(Client, client_id):
            raise ResourceNotFoundError("Client", client_id)

    async def _get_case_row(self, case_id: int) -> Case:
        case = await self.db.get(Case, case_id)
        if not case:
            raise ResourceNotFoundError("Case", case_id)
        return case

    async def _get_interaction(self, case_id: int, interaction_id: int) -> CaseInteraction:
        interaction = await self.db.get(CaseInteraction, interaction_id)
        if not interaction or interaction.case_id != case_id:
            raise ResourceNotFoundError("Interaction", interaction_id)
        return interaction

    def _record(self, action: AuditAction, case: Case, changes: dict) -> None:
        self.audit.record(
            action, AuditEntity.CASE, case.id,
            admin_id=self.actor.id if self.actor else None,
            changes={"client_id": case.client_id, **changes},
        )
