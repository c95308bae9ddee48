"""Create companies and invoices tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `companies` and `invoices`, linked by invoices.comp_code.
How:   Column definitions mirror biztime/models/company.py and invoice.py.

Rollback: downgrade() drops both tables (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column(
            "code",
            sa.String(50),
            nullable=False,
            comment="Short unique company code, supplied by the client",
        ),
        sa.Column("name", sa.Text(), nullable=False, comment="Company display name"),
        sa.Column(
            "description",
            sa.Text(),
            nullable=True,
            comment="Optional free-form description",
        ),
        sa.PrimaryKeyConstraint("code"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "comp_code",
            sa.String(50),
            nullable=False,
            comment="Code of the company that issued this invoice",
        ),
        sa.Column("amt", sa.Float(), nullable=False, comment="Invoice amount, never negative"),
        sa.Column("paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "add_date",
            sa.Date(),
            nullable=False,
            server_default=sa.text("CURRENT_DATE"),
        ),
        sa.Column("paid_date", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        # Deleting a company deletes its invoices
        sa.ForeignKeyConstraint(["comp_code"], ["companies.code"], ondelete="CASCADE"),
        sa.CheckConstraint("amt >= 0", name="invoices_amt_check"),
    )

    # Company detail looks up invoice ids by comp_code
    op.create_index("idx_invoices_comp_code", "invoices", ["comp_code"])


def downgrade() -> None:
    op.drop_index("idx_invoices_comp_code", table_name="invoices")
    op.drop_table("invoices")
    op.drop_table("companies")
