"""Client ORM — customer companies and their contacts, addresses and external audits.

Invariants:
    - status holds a ClientStatus value; clients are never hard-deleted
    - Onboarding flags are tri-state: True done, False pending, None not applicable
    - contact_name/contact_email mirror the primary SERVICE contact for list views
    - Contacts, addresses and audits belong to exactly one client and die with it

Design Decisions:
    - Child collections eager-loaded (selectin): client detail always needs them and
      async sessions cannot lazy-load
    - Money as Numeric(asdecimal=False): exact storage, plain floats in JSON
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Boolean, Date, DateTime, Numeric, ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from argan_hr.db.base import Base


def _now():
    return datetime.now(timezone.utc)


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_type: Mapped[str] = mapped_column(String(20), nullable=False, default="COMPANY")
    business_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    sector: Mapped[str | None] = mapped_column(String(100), nullable=True)
    service_tier: Mapped[str] = mapped_column(String(20), nullable=False)
    monthly_retainer: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True,
    )
    contact_name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="ACTIVE")
    external_audit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    payment_method: Mapped[str | None] = mapped_column(String(20), nullable=True)
    last_price_increase: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Onboarding checklist (None = not applicable)
    welcome_email_sent: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    direct_debit_setup: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    direct_debit_confirmed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    contract_added_to_xero: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    recurring_invoice_setup: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    dpa_signed_gdpr: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    first_invoice_sent: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    first_payment_made: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)

    created_by: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("admins.id"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now,
    )

    contacts: Mapped[list["ClientContact"]] = relationship(
        back_populates="client", cascade="all, delete-orphan",
        lazy="selectin", order_by="ClientContact.id",
    )
    addresses: Mapped[list["ClientAddress"]] = relationship(
        back_populates="client", cascade="all, delete-orphan",
        lazy="selectin", order_by="ClientAddress.id",
    )
    audits: Mapped[list["ClientAudit"]] = relationship(
        back_populates="client", cascade="all, delete-orphan",
        lazy="selectin", order_by="ClientAudit.next_audit_date",
    )


class ClientContact(Base):
    __tablename__ = "client_contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="SERVICE")
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    role: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )

    client: Mapped[Client] = relationship(back_populates="contacts")


class ClientAddress(Base):
    __tablename__ = "client_addresses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="SERVICE")
    address_line_1: Mapped[str] = mapped_column(String(255), nullable=False)
    address_line_2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    postcode: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False, default="United Kingdom")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )

    client: Mapped[Client] = relationship(back_populates="addresses")


class ClientAudit(Base):
    """Scheduled external audit of the client's HR practice (not the audit log)."""
    __tablename__ = "client_audits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    audited_by: Mapped[str] = mapped_column(String(200), nullable=False)
    interval: Mapped[str] = mapped_column(String(20), nullable=False)
    next_audit_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )

    client: Mapped[Client] = relationship(back_populates="audits")
