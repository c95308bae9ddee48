"""
BizTime Backend — Payment Service
==================================

What:  Reads the payment status of an invoice.
Who:   InvoiceService.update_invoice(), which needs the current status to
       decide whether paid_date must be set or cleared.

A missing invoice is reported with NotFoundError, the same structured error
every other lookup uses.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from biztime.exceptions import DatabaseError, NotFoundError
from biztime.models.invoice import INVOICE_ID_MAX, Invoice

logger = logging.getLogger(__name__)


class PaymentService:

    async def check_paid(self, db: AsyncSession, invoice_id: int) -> bool:
        """
        Return whether the invoice is marked paid.

        Query: SELECT paid FROM invoices WHERE id = :id

        Raises:
            NotFoundError: no invoice has this id (ids outside the
                           primary key range included, without a query)
            DatabaseError: query execution failed
        """
        logger.debug("Checking payment status of invoice %s", invoice_id)
        if not 1 <= invoice_id <= INVOICE_ID_MAX:
            raise NotFoundError(resource="invoice", resource_id=str(invoice_id))

        try:
            result = await db.execute(select(Invoice.paid).where(Invoice.id == invoice_id))
            paid = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error checking invoice %s: %s", invoice_id, str(e))
            raise DatabaseError(
                message="Could not check the invoice payment status.",
                context={"invoice_id": invoice_id},
            ) from e

        if paid is None:
            raise NotFoundError(resource="invoice", resource_id=str(invoice_id))
        return bool(paid)


payment_service = PaymentService()
