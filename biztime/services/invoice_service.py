"""
BizTime Backend — Invoice Service
==================================

What:  Business logic for the `invoices` resource.
How:   Same shape as CompanyService: statements run on the session passed
       in by the route; missing rows become NotFoundError, driver failures
       become DatabaseError.
Who:   Called by the /invoices route handlers.

Invoice detail is built from two sequential queries:
    1. SELECT id, amt, paid, add_date, paid_date FROM invoices WHERE id = :id
    2. SELECT c.code, c.name, c.description
         FROM companies AS c JOIN invoices AS i ON i.comp_code = c.code
        WHERE i.id = :id
The statements are not wrapped in a transaction of their own; if the
company disappears between them the detail carries `company: null`.

Payment transitions (PUT with `paid`):
    unpaid → paid     paid_date = today
    paid → unpaid     paid_date = NULL
    unchanged         paid_date kept as-is
"""

import logging
from datetime import date
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from biztime.exceptions import DatabaseError, NotFoundError
from biztime.models.company import Company
from biztime.models.invoice import INVOICE_ID_MAX, Invoice
from biztime.schemas.company import CompanyResponse
from biztime.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetail,
    InvoiceListItem,
    InvoiceResponse,
    InvoiceUpdate,
)
from biztime.services.payment_service import payment_service

logger = logging.getLogger(__name__)


def _ensure_storable_id(invoice_id: int) -> None:
    """Ids outside the INTEGER range match no row; the driver would reject them."""
    if not 1 <= invoice_id <= INVOICE_ID_MAX:
        raise NotFoundError(resource="invoice", resource_id=str(invoice_id))


class InvoiceService:
    """CRUD operations over `invoices`, plus owning-company resolution."""

    async def list_invoices(self, db: AsyncSession) -> List[InvoiceListItem]:
        """Return every invoice as `{id, comp_code}`, ordered by id."""
        try:
            result = await db.execute(
                select(Invoice.id, Invoice.comp_code).order_by(Invoice.id)
            )
            return [
                InvoiceListItem(id=invoice_id, comp_code=comp_code)
                for invoice_id, comp_code in result.all()
            ]
        except SQLAlchemyError as e:
            logger.error("Database error listing invoices: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve invoices. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def get_invoice(self, db: AsyncSession, invoice_id: int) -> InvoiceDetail:
        """
        Fetch one invoice and nest its issuing company under `company`.

        Raises:
            NotFoundError: no invoice has this id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        _ensure_storable_id(invoice_id)
        try:
            result = await db.execute(select(Invoice).where(Invoice.id == invoice_id))
            invoice = result.scalar_one_or_none()
            if invoice is None:
                raise NotFoundError(resource="invoice", resource_id=str(invoice_id))

            company_result = await db.execute(
                select(Company)
                .join(Invoice, Invoice.comp_code == Company.code)
                .where(Invoice.id == invoice_id)
            )
            company = company_result.scalar_one_or_none()

            return InvoiceDetail(
                id=invoice.id,
                amt=invoice.amt,
                paid=invoice.paid,
                add_date=invoice.add_date,
                paid_date=invoice.paid_date,
                company=CompanyResponse.model_validate(company) if company is not None else None,
            )

        except NotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching invoice %s: %s", invoice_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the invoice. Please try again.",
                context={"invoice_id": invoice_id},
            ) from e

    async def create_invoice(self, db: AsyncSession, payload: InvoiceCreate) -> InvoiceResponse:
        """
        Insert an unpaid invoice and return the stored row.

        An unknown comp_code violates the foreign key and surfaces as
        DatabaseError.
        """
        invoice = Invoice(comp_code=payload.comp_code, amt=payload.amt)
        try:
            db.add(invoice)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Database error creating invoice for %s: %s", payload.comp_code, str(e)
            )
            raise DatabaseError(
                message="Could not create the invoice. Please try again.",
                context={"comp_code": payload.comp_code, "error_type": type(e).__name__},
            ) from e

        logger.info("Invoice %s created for company %s", invoice.id, invoice.comp_code)
        return InvoiceResponse.model_validate(invoice)

    async def update_invoice(
        self, db: AsyncSession, invoice_id: int, payload: InvoiceUpdate
    ) -> InvoiceResponse:
        """
        Change the amount and, optionally, the payment status of an invoice.

        Raises:
            NotFoundError: no invoice has this id; nothing is written
        """
        was_paid = await payment_service.check_paid(db, invoice_id)

        try:
            invoice = await db.get(Invoice, invoice_id)
            if invoice is None:
                raise NotFoundError(resource="invoice", resource_id=str(invoice_id))

            invoice.amt = payload.amt
            if payload.paid is not None and payload.paid != was_paid:
                invoice.paid = payload.paid
                invoice.paid_date = date.today() if payload.paid else None
            await db.flush()

        except NotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating invoice %s: %s", invoice_id, str(e))
            raise DatabaseError(
                message="Could not update the invoice. Please try again.",
                context={"invoice_id": invoice_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Invoice %s updated (paid=%s)", invoice_id, invoice.paid)
        return InvoiceResponse.model_validate(invoice)

    async def delete_invoice(self, db: AsyncSession, invoice_id: int) -> None:
        """
        Delete an invoice.

        Raises:
            NotFoundError: nothing was deleted
        """
        _ensure_storable_id(invoice_id)
        try:
            result = await db.execute(delete(Invoice).where(Invoice.id == invoice_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting invoice %s: %s", invoice_id, str(e))
            raise DatabaseError(
                message="Could not delete the invoice. Please try again.",
                context={"invoice_id": invoice_id, "error_type": type(e).__name__},
            ) from e

        if result.rowcount == 0:
            raise NotFoundError(resource="invoice", resource_id=str(invoice_id))
        logger.info("Invoice deleted: %s", invoice_id)


invoice_service = InvoiceService()
