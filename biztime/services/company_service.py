"""
BizTime Backend — Company Service
==================================

What:  Business logic for the `companies` resource.
How:   Issues SQLAlchemy statements through the session handed in by the
       route, maps rows to response schemas, and translates missing rows
       into NotFoundError and driver failures into DatabaseError.
Who:   Called by the /companies route handlers.

Company detail is built from two sequential queries:
    1. SELECT code, name, description FROM companies WHERE code = :code
    2. SELECT id FROM invoices WHERE comp_code = :code ORDER BY id
The second depends on the first having found the company.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from biztime.exceptions import DatabaseError, NotFoundError
from biztime.models.company import Company
from biztime.models.invoice import Invoice
from biztime.schemas.company import (
    CompanyCreate,
    CompanyDetail,
    CompanyListItem,
    CompanyResponse,
    CompanyUpdate,
)

logger = logging.getLogger(__name__)


class CompanyService:
    """
    CRUD operations over `companies`.

    Stateless: every method receives the request's AsyncSession. Writes are
    flushed here and committed by the session dependency.
    """

    async def list_companies(self, db: AsyncSession) -> List[CompanyListItem]:
        """Return every company as `{code, name}`, ordered by name."""
        try:
            result = await db.execute(
                select(Company.code, Company.name).order_by(Company.name)
            )
            return [CompanyListItem(code=code, name=name) for code, name in result.all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing companies: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve companies. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def get_company(self, db: AsyncSession, code: str) -> CompanyDetail:
        """
        Fetch one company together with the ids of its invoices.

        Raises:
            NotFoundError: no company has this code (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Company).where(Company.code == code))
            company = result.scalar_one_or_none()
            if company is None:
                raise NotFoundError(resource="company", resource_id=code)

            invoice_result = await db.execute(
                select(Invoice.id).where(Invoice.comp_code == code).order_by(Invoice.id)
            )
            invoice_ids = list(invoice_result.scalars().all())

            return CompanyDetail(
                code=company.code,
                name=company.name,
                description=company.description,
                invoices=invoice_ids,
            )

        except NotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching company %s: %s", code, str(e))
            raise DatabaseError(
                message="Could not retrieve the company. Please try again.",
                context={"code": code},
            ) from e

    async def create_company(self, db: AsyncSession, payload: CompanyCreate) -> CompanyResponse:
        """
        Insert a company and return the stored row.

        A duplicate code or name violates a table constraint and surfaces as
        DatabaseError.
        """
        company = Company(
            code=payload.code,
            name=payload.name,
            description=payload.description,
        )
        try:
            db.add(company)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating company %s: %s", payload.code, str(e))
            raise DatabaseError(
                message="Could not create the company. Please try again.",
                context={"code": payload.code, "error_type": type(e).__name__},
            ) from e

        logger.info("Company created: %s", company.code)
        return CompanyResponse.model_validate(company)

    async def update_company(
        self, db: AsyncSession, code: str, payload: CompanyUpdate
    ) -> CompanyResponse:
        """
        Replace name and description of an existing company.

        Raises:
            NotFoundError: no company has this code; nothing is written
        """
        try:
            company = await db.get(Company, code)
            if company is None:
                raise NotFoundError(resource="company", resource_id=code)

            company.name = payload.name
            company.description = payload.description
            await db.flush()

        except NotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating company %s: %s", code, str(e))
            raise DatabaseError(
                message="Could not update the company. Please try again.",
                context={"code": code, "error_type": type(e).__name__},
            ) from e

        logger.info("Company updated: %s", code)
        return CompanyResponse.model_validate(company)

    async def delete_company(self, db: AsyncSession, code: str) -> None:
        """
        Delete a company. Its invoices go with it (ON DELETE CASCADE).

        Raises:
            NotFoundError: nothing was deleted
        """
        try:
            result = await db.execute(delete(Company).where(Company.code == code))
        except SQLAlchemyError as e:
            logger.error("Database error deleting company %s: %s", code, str(e))
            raise DatabaseError(
                message="Could not delete the company. Please try again.",
                context={"code": code, "error_type": type(e).__name__},
            ) from e

        if result.rowcount == 0:
            raise NotFoundError(resource="company", resource_id=code)
        logger.info("Company deleted: %s", code)


company_service = CompanyService()
