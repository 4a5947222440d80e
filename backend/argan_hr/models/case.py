"""Case ORM — client escalations, their interaction log and attached files.

Invariants:
    - (client_id, case_number) unique; case_number format CASE-0001
    - At most one interaction per case has is_active_action=True (CaseService)
    - A case's action_required/action_required_by mirror its active interaction
    - Files with interaction_id NULL are case-level attachments

Design Decisions:
    - No ORM relationships between case rows: counts come from aggregate queries and
      deletes are explicit statements (ADR: predictable async IO)
"""

from datetime import date, datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Boolean, Date, DateTime, JSON, ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from argan_hr.db.base import Base


def _now():
    return datetime.now(timezone.utc)


class Case(Base):
    __tablename__ = "cases"
    __table_args__ = (
        UniqueConstraint("client_id", "case_number", name="uq_cases_client_number"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    case_number: Mapped[str] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    escalated_by: Mapped[str] = mapped_column(String(200), nullable=False)
    assigned_to: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="OPEN")
    action_required: Mapped[str | None] = mapped_column(Text, nullable=True)
    action_required_by: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now,
    )


class CaseInteraction(Base):
    __tablename__ = "case_interactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    case_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    party1_name: Mapped[str] = mapped_column(String(200), nullable=False)
    party1_type: Mapped[str] = mapped_column(String(20), nullable=False)
    party2_name: Mapped[str] = mapped_column(String(200), nullable=False)
    party2_type: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    action_required: Mapped[str | None] = mapped_column(Text, nullable=True)
    action_required_by: Mapped[str | None] = mapped_column(String(20), nullable=True)
    action_required_by_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_active_action: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )


class CaseFile(Base):
    """Metadata for a file stored elsewhere (object storage URL)."""
    __tablename__ = "case_files"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    case_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    interaction_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("case_interactions.id", ondelete="CASCADE"), nullable=True,
    )
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    file_size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    uploaded_by: Mapped[str] = mapped_column(String(200), nullable=False)
    file_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    file_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
