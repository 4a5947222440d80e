"""Initial schema — admins, clients and their records, contracts, cases, audit log.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    cols = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())]
    if updated:
        cols.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()))
    return cols


def _client_fk() -> sa.Column:
    return sa.Column(
        "client_id", sa.Integer,
        sa.ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )


def upgrade() -> None:
    op.create_table(
        "admins",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="ADMIN"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("failed_login_attempts", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_failed_attempt", sa.DateTime(timezone=True), nullable=True),
        sa.Column("locked_until", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "clients",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("client_type", sa.String(20), nullable=False, server_default="COMPANY"),
        sa.Column("business_id", sa.String(100), nullable=True),
        sa.Column("sector", sa.String(100), nullable=True),
        sa.Column("service_tier", sa.String(20), nullable=False),
        sa.Column("monthly_retainer", sa.Numeric(10, 2), nullable=True),
        sa.Column("contact_name", sa.String(200), nullable=False),
        sa.Column("contact_email", sa.String(255), nullable=False, index=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE"),
        sa.Column("external_audit", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("payment_method", sa.String(20), nullable=True),
        sa.Column("last_price_increase", sa.Date, nullable=True),
        sa.Column("welcome_email_sent", sa.Boolean, nullable=True),
        sa.Column("direct_debit_setup", sa.Boolean, nullable=True),
        sa.Column("direct_debit_confirmed", sa.Boolean, nullable=True),
        sa.Column("contract_added_to_xero", sa.Boolean, nullable=True),
        sa.Column("recurring_invoice_setup", sa.Boolean, nullable=True),
        sa.Column("dpa_signed_gdpr", sa.Boolean, nullable=True),
        sa.Column("first_invoice_sent", sa.Boolean, nullable=True),
        sa.Column("first_payment_made", sa.Boolean, nullable=True),
        sa.Column("created_by", UUID(as_uuid=True), sa.ForeignKey("admins.id"), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "client_contacts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _client_fk(),
        sa.Column("type", sa.String(20), nullable=False, server_default="SERVICE"),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("role", sa.String(100), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "client_addresses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _client_fk(),
        sa.Column("type", sa.String(20), nullable=False, server_default="SERVICE"),
        sa.Column("address_line_1", sa.String(255), nullable=False),
        sa.Column("address_line_2", sa.String(255), nullable=True),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("postcode", sa.String(20), nullable=False),
        sa.Column("country", sa.String(100), nullable=False, server_default="United Kingdom"),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "client_audits",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _client_fk(),
        sa.Column("audited_by", sa.String(200), nullable=False),
        sa.Column("interval", sa.String(20), nullable=False),
        sa.Column("next_audit_date", sa.Date, nullable=False),
        *_timestamps(updated=False),
    )

    op.create_table(
        "contracts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _client_fk(),
        sa.Column("contract_number", sa.String(30), nullable=False, unique=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE"),
        sa.Column("contract_start_date", sa.Date, nullable=False),
        sa.Column("contract_renewal_date", sa.Date, nullable=False),
        sa.Column("doc_url", sa.String(1000), nullable=True),
        sa.Column("signed_contract_url", sa.String(1000), nullable=True),
        sa.Column("inclusive_hours_hr_admin", sa.Numeric(8, 2), nullable=True),
        sa.Column("inclusive_hours_hr_admin_period", sa.String(20), nullable=False, server_default="MONTHLY"),
        sa.Column("inclusive_hours_employment_law", sa.Numeric(8, 2), nullable=True),
        sa.Column("inclusive_hours_employment_law_period", sa.String(20), nullable=False, server_default="MONTHLY"),
        sa.Column("services_in_scope", sa.JSON, nullable=False),
        sa.Column("services_out_of_scope", sa.JSON, nullable=False),
        sa.Column("hr_admin_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("hr_admin_rate_unit", sa.String(10), nullable=False, server_default="HOURLY"),
        sa.Column("hr_admin_rate_not_needed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("employment_law_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("employment_law_rate_unit", sa.String(10), nullable=False, server_default="HOURLY"),
        sa.Column("employment_law_rate_not_needed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("mileage_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("mileage_rate_not_needed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("overnight_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("overnight_rate_not_needed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("signed_contract_received", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("contract_uploaded", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("contract_sent_to_client", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("payment_terms_agreed", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
        sa.UniqueConstraint("client_id", "version", name="uq_contracts_client_version"),
    )

    op.create_table(
        "cases",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _client_fk(),
        sa.Column("case_number", sa.String(20), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("escalated_by", sa.String(200), nullable=False),
        sa.Column("assigned_to", sa.String(200), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="OPEN"),
        sa.Column("action_required", sa.Text, nullable=True),
        sa.Column("action_required_by", sa.String(20), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("client_id", "case_number", name="uq_cases_client_number"),
    )

    op.create_table(
        "case_interactions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "case_id", sa.Integer,
            sa.ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("party1_name", sa.String(200), nullable=False),
        sa.Column("party1_type", sa.String(20), nullable=False),
        sa.Column("party2_name", sa.String(200), nullable=False),
        sa.Column("party2_type", sa.String(20), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("action_required", sa.Text, nullable=True),
        sa.Column("action_required_by", sa.String(20), nullable=True),
        sa.Column("action_required_by_date", sa.Date, nullable=True),
        sa.Column("is_active_action", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(updated=False),
    )

    op.create_table(
        "case_files",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "case_id", sa.Integer,
            sa.ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column(
            "interaction_id", sa.Integer,
            sa.ForeignKey("case_interactions.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_url", sa.String(1000), nullable=False),
        sa.Column("file_size", sa.Integer, nullable=True),
        sa.Column("uploaded_by", sa.String(200), nullable=False),
        sa.Column("file_title", sa.String(255), nullable=True),
        sa.Column("file_description", sa.Text, nullable=True),
        sa.Column("file_tags", sa.JSON, nullable=False),
        *_timestamps(updated=False),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("admin_id", UUID(as_uuid=True), sa.ForeignKey("admins.id"), nullable=True, index=True),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("entity_id", sa.String(64), nullable=True),
        sa.Column("action", sa.String(30), nullable=False, index=True),
        sa.Column("changes", sa.JSON, nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.String(500), nullable=True),
        *_timestamps(updated=False),
    )


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("case_files")
    op.drop_table("case_interactions")
    op.drop_table("cases")
    op.drop_table("contracts")
    op.drop_table("client_audits")
    op.drop_table("client_addresses")
    op.drop_table("client_contacts")
    op.drop_table("clients")
    op.drop_table("admins")
