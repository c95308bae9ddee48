"""
BizTime Backend — Invoice Request/Response Schemas
===================================================

What:  Pydantic models defining the /invoices API contract.

Amount validation:
    `amt` must be present, numeric (numeric strings such as "12.5" are
    coerced), finite, and >= 0. Zero is a valid amount.
    JSON booleans are rejected even though pydantic would read `true` as 1.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from biztime.schemas.company import CompanyResponse


def _reject_boolean(value):
    if isinstance(value, bool):
        raise ValueError("amt must be a number, not a boolean")
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class InvoiceCreate(BaseModel):
    """Body of POST /invoices."""
    comp_code: str = Field(min_length=1, max_length=50, description="Issuing company code")
    amt: float = Field(ge=0, allow_inf_nan=False, description="Invoice amount (>= 0)")

    model_config = {"str_strip_whitespace": True}

    @field_validator("amt", mode="before")
    @classmethod
    def reject_boolean_amount(cls, v):
        return _reject_boolean(v)


class InvoiceUpdate(BaseModel):
    """
    Body of PUT /invoices/{id}.

    `paid` is optional. When given, it drives paid_date:
        unpaid → paid:  paid_date = today
        paid → unpaid:  paid_date = null
        otherwise:      paid_date unchanged
    """
    amt: float = Field(ge=0, allow_inf_nan=False, description="New invoice amount (>= 0)")
    paid: Optional[bool] = Field(default=None, description="Mark the invoice paid or unpaid")

    @field_validator("amt", mode="before")
    @classmethod
    def reject_boolean_amount(cls, v):
        return _reject_boolean(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class InvoiceListItem(BaseModel):
    id: int
    comp_code: str

    model_config = {"from_attributes": True}


class InvoiceListResponse(BaseModel):
    invoices: List[InvoiceListItem] = Field(description="All invoices, ordered by id")


class InvoiceResponse(BaseModel):
    """A full invoice row, as returned by create and update."""
    id: int
    comp_code: str
    amt: float
    paid: bool
    add_date: date
    paid_date: Optional[date] = None

    model_config = {"from_attributes": True}


class InvoiceDetail(BaseModel):
    """
    An invoice with its issuing company nested under `company`.

    `company` is null only if the company was deleted between the two
    lookups that build this response.
    """
    id: int
    amt: float
    paid: bool
    add_date: date
    paid_date: Optional[date] = None
    company: Optional[CompanyResponse] = None


class InvoiceEnvelope(BaseModel):
    invoice: InvoiceResponse


class InvoiceDetailEnvelope(BaseModel):
    invoice: InvoiceDetail
