"""
BizTime Backend — Invoice SQLAlchemy Model
===========================================

What:  ORM model representing the `invoices` table.
Who:   Used by InvoiceService and PaymentService; read by Alembic.

Table Design:
    - id: integer primary key generated by the database
    - comp_code: foreign key to companies.code; deleting a company deletes
      its invoices (ON DELETE CASCADE)
    - amt: non-negative amount, enforced by invoices_amt_check
    - paid / paid_date: paid_date is set when an invoice is paid and cleared
      when it is marked unpaid again
    - add_date: date the invoice was created
"""

from datetime import date
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    false,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from biztime.database import Base

# Upper bound of the INTEGER primary key; larger ids cannot name a row
INVOICE_ID_MAX = 2_147_483_647


class Invoice(Base):
    """
    An invoice billed by one company.

    Lifecycle:
        1. Created unpaid (paid=False, paid_date=NULL, add_date=today)
        2. Amount may be changed; may be paid (paid_date=today) or un-paid
        3. Deleted directly, or together with its company

    Query Patterns:
        - Company detail: SELECT id FROM invoices WHERE comp_code = :code
          → Uses idx_invoices_comp_code
        - Invoice detail: SELECT ... FROM companies JOIN invoices
          ON invoices.comp_code = companies.code WHERE invoices.id = :id
    """

    __tablename__ = "invoices"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    comp_code: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("companies.code", ondelete="CASCADE"),
        nullable=False,
        comment="Code of the company that issued this invoice",
    )

    amt: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Invoice amount, never negative",
    )

    paid: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    add_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        default=date.today,
        server_default=text("CURRENT_DATE"),
    )

    paid_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        default=None,
    )

    __table_args__ = (
        CheckConstraint("amt >= 0", name="invoices_amt_check"),
        Index("idx_invoices_comp_code", "comp_code"),
    )

    def __repr__(self) -> str:
        return (
            f"<Invoice(id={self.id}, comp_code='{self.comp_code}', "
            f"amt={self.amt}, paid={self.paid})>"
        )
