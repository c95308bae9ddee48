"""
BizTime Backend — Company SQLAlchemy Model
===========================================

What:  ORM model representing the `companies` table.
Who:   Queried by CompanyService and joined by InvoiceService; read by Alembic.

Table Design:
    - code: user-supplied short key (e.g. "apple"); primary key
    - name: display name, required and unique
    - description: free text, optional
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from biztime.database import Base


class Company(Base):
    """
    A company that issues invoices.

    One Company has many Invoices through `invoices.comp_code`. The link is
    resolved with explicit queries in the service layer rather than an ORM
    relationship, so every lookup is a visible, awaited statement.
    """

    __tablename__ = "companies"

    code: Mapped[str] = mapped_column(
        String(50),
        primary_key=True,
        comment="Short unique company code, supplied by the client",
    )

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        comment="Company display name",
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Optional free-form description",
    )

    def __repr__(self) -> str:
        return f"<Company(code='{self.code}', name='{self.name}')>"
