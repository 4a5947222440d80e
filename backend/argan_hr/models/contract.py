"""Contract ORM — versioned service agreements attached to a client.

Invariants:
    - contract_number unique across all clients
    - (client_id, version) unique; versions start at 1
    - At most one ACTIVE contract per client (enforced in ContractService)
    - Rate fields are meaningless when the matching *_not_needed flag is set

Design Decisions:
    - Services in/out of scope as JSON string lists: small, read whole, never queried into
"""

from datetime import date, datetime, timezone

from sqlalchemy import (
    String, Integer, Boolean, Date, DateTime, Numeric, JSON, ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from argan_hr.db.base import Base


def _now():
    return datetime.now(timezone.utc)


class Contract(Base):
    __tablename__ = "contracts"
    __table_args__ = (
        UniqueConstraint("client_id", "version", name="uq_contracts_client_version"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    contract_number: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="ACTIVE")
    contract_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    contract_renewal_date: Mapped[date] = mapped_column(Date, nullable=False)
    doc_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    signed_contract_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Inclusive hours
    inclusive_hours_hr_admin: Mapped[float | None] = mapped_column(
        Numeric(8, 2, asdecimal=False), nullable=True,
    )
    inclusive_hours_hr_admin_period: Mapped[str] = mapped_column(
        String(20), nullable=False, default="MONTHLY",
    )
    inclusive_hours_employment_law: Mapped[float | None] = mapped_column(
        Numeric(8, 2, asdecimal=False), nullable=True,
    )
    inclusive_hours_employment_law_period: Mapped[str] = mapped_column(
        String(20), nullable=False, default="MONTHLY",
    )

    services_in_scope: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    services_out_of_scope: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    # Rates
    hr_admin_rate: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    hr_admin_rate_unit: Mapped[str] = mapped_column(String(10), nullable=False, default="HOURLY")
    hr_admin_rate_not_needed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    employment_law_rate: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    employment_law_rate_unit: Mapped[str] = mapped_column(String(10), nullable=False, default="HOURLY")
    employment_law_rate_not_needed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    mileage_rate: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    mileage_rate_not_needed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    overnight_rate: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    overnight_rate_not_needed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Contract-level onboarding
    signed_contract_received: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    contract_uploaded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    contract_sent_to_client: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    payment_terms_agreed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now,
    )
