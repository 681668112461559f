"""create ticket catalog and booking ledger

Revision ID: 0001_create_tables
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_create_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "tickets",
        sa.Column("ticket_code", sa.String(length=255), primary_key=True),
        sa.Column("ticket_name", sa.String(length=255), nullable=False),
        sa.Column("category_name", sa.String(length=255), nullable=False),
        sa.Column("event_date_minimum", sa.DateTime(timezone=True), nullable=False),
        sa.Column("event_date_maximum", sa.DateTime(timezone=True), nullable=False),
        sa.Column("quota", sa.Integer(), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.CheckConstraint("quota >= 0", name="ck_tickets_quota_non_negative"),
        sa.CheckConstraint("price >= 0", name="ck_tickets_price_non_negative"),
        sa.CheckConstraint("event_date_minimum <= event_date_maximum", name="ck_tickets_event_window"),
    )

    op.create_table(
        "booked_tickets",
        sa.Column("booking_id", sa.String(length=255), primary_key=True),
        sa.Column(
            "ticket_code",
            sa.String(length=255),
            sa.ForeignKey("tickets.ticket_code", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.CheckConstraint("quantity > 0", name="ck_booked_tickets_quantity_positive"),
    )

    op.create_index("ix_booked_tickets_ticket_code", "booked_tickets", ["ticket_code"])
    op.create_index("ix_tickets_event_date_minimum", "tickets", ["event_date_minimum"])


def downgrade():
    op.drop_index("ix_tickets_event_date_minimum", table_name="tickets")
    op.drop_index("ix_booked_tickets_ticket_code", table_name="booked_tickets")
    op.drop_table("booked_tickets")
    op.drop_table("tickets")
