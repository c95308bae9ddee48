"""
BizTime Backend — Company Request/Response Schemas
===================================================

What:  Pydantic models defining the /companies API contract.
How:   Request models validate JSON bodies before a handler runs (failures
       become 400 responses); response models wrap rows in the
       `{"company": ...}` / `{"companies": [...]}` envelopes.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CompanyCreate(BaseModel):
    """Body of POST /companies. `code` and `name` must be non-blank."""
    code: str = Field(min_length=1, max_length=50, description="Unique company code")
    name: str = Field(min_length=1, description="Company display name")
    description: Optional[str] = Field(default=None, description="Optional description")

    model_config = {"str_strip_whitespace": True}


class CompanyUpdate(BaseModel):
    """
    Body of PUT /companies/{code}.

    PUT replaces both editable fields: an omitted description is stored as null.
    """
    name: str = Field(min_length=1, description="New company display name")
    description: Optional[str] = Field(default=None, description="New description")

    model_config = {"str_strip_whitespace": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CompanyListItem(BaseModel):
    """Compact company representation for GET /companies."""
    code: str
    name: str

    model_config = {"from_attributes": True}


class CompanyListResponse(BaseModel):
    companies: List[CompanyListItem] = Field(description="All companies, ordered by name")


class CompanyResponse(BaseModel):
    """A full company row. Also nested inside invoice detail responses."""
    code: str = Field(description="Unique company code")
    name: str = Field(description="Company display name")
    description: Optional[str] = Field(default=None, description="Optional description")

    model_config = {"from_attributes": True}


class CompanyDetail(CompanyResponse):
    """A company row plus the ids of every invoice it issued."""
    invoices: List[int] = Field(
        default_factory=list,
        description="Ids of this company's invoices (empty when there are none)",
    )


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetail
