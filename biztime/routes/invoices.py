"""
BizTime Backend — Invoice Route Handlers
=========================================

What:  /invoices endpoints (list, detail, create, update, delete).

Routes:
    GET    /invoices        → {invoices: [{id, comp_code}, ...]}
    GET    /invoices/{id}   → {invoice: {id, amt, paid, add_date, paid_date, company}}
    POST   /invoices        → {invoice: {id, comp_code, amt, paid, add_date, paid_date}}  (201)
    PUT    /invoices/{id}   → {invoice: {id, comp_code, amt, paid, add_date, paid_date}}
    DELETE /invoices/{id}   → {status: "Deleted"}

`id` is parsed as an integer by FastAPI; a non-integer id is rejected with
400 before any query runs.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from biztime.database import get_db_session
from biztime.schemas.common import ErrorResponse, StatusResponse
from biztime.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetailEnvelope,
    InvoiceEnvelope,
    InvoiceListResponse,
    InvoiceUpdate,
)
from biztime.services.invoice_service import invoice_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.get(
    "",
    response_model=InvoiceListResponse,
    summary="List all invoices",
)
async def list_invoices(
    db: AsyncSession = Depends(get_db_session),
) -> InvoiceListResponse:
    invoices = await invoice_service.list_invoices(db)
    return InvoiceListResponse(invoices=invoices)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDetailEnvelope,
    responses={404: {"description": "Invoice not found", "model": ErrorResponse}},
    summary="Get an invoice and its company",
)
async def get_invoice(
    invoice_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> InvoiceDetailEnvelope:
    invoice = await invoice_service.get_invoice(db, invoice_id)
    return InvoiceDetailEnvelope(invoice=invoice)


@router.post(
    "",
    status_code=201,
    response_model=InvoiceEnvelope,
    responses={
        400: {"description": "Missing comp_code, or missing/negative/non-numeric amt",
              "model": ErrorResponse},
    },
    summary="Create an invoice",
)
async def create_invoice(
    payload: InvoiceCreate,
    db: AsyncSession = Depends(get_db_session),
) -> InvoiceEnvelope:
    invoice = await invoice_service.create_invoice(db, payload)
    return InvoiceEnvelope(invoice=invoice)


@router.put(
    "/{invoice_id}",
    response_model=InvoiceEnvelope,
    responses={
        400: {"description": "Missing body or invalid amt", "model": ErrorResponse},
        404: {"description": "Invoice not found", "model": ErrorResponse},
    },
    summary="Update an invoice amount and payment status",
)
async def update_invoice(
    invoice_id: int,
    payload: InvoiceUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> InvoiceEnvelope:
    """
    Sets `amt`. When `paid` is supplied and differs from the stored status,
    paid_date is set to today (paying) or cleared (un-paying).
    """
    invoice = await invoice_service.update_invoice(db, invoice_id, payload)
    return InvoiceEnvelope(invoice=invoice)


@router.delete(
    "/{invoice_id}",
    response_model=StatusResponse,
    responses={404: {"description": "Invoice not found", "model": ErrorResponse}},
    summary="Delete an invoice",
)
async def delete_invoice(
    invoice_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> StatusResponse:
    await invoice_service.delete_invoice(db, invoice_id)
    return StatusResponse(status="Deleted")
