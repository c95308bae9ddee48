"""
BizTime Backend — Company Route Handlers
=========================================

What:  /companies endpoints (list, detail, create, update, delete).
How:   Validates path/body via FastAPI + Pydantic, hands the request's
       session to CompanyService, wraps the result in its JSON envelope.

Routes:
    GET    /companies          → {companies: [{code, name}, ...]}
    GET    /companies/{code}   → {company: {code, name, description, invoices}}
    POST   /companies          → {company: {code, name, description}}  (201)
    PUT    /companies/{code}   → {company: {code, name, description}}
    DELETE /companies/{code}   → {status: "Deleted"}
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from biztime.database import get_db_session
from biztime.schemas.common import ErrorResponse, StatusResponse
from biztime.schemas.company import (
    CompanyCreate,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyUpdate,
)
from biztime.services.company_service import company_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get(
    "",
    response_model=CompanyListResponse,
    summary="List all companies",
)
async def list_companies(
    db: AsyncSession = Depends(get_db_session),
) -> CompanyListResponse:
    companies = await company_service.list_companies(db)
    return CompanyListResponse(companies=companies)


@router.get(
    "/{code}",
    response_model=CompanyDetailEnvelope,
    responses={404: {"description": "Company not found", "model": ErrorResponse}},
    summary="Get a company and its invoice ids",
)
async def get_company(
    code: str,
    db: AsyncSession = Depends(get_db_session),
) -> CompanyDetailEnvelope:
    """
    Returns the company row plus `invoices`, the ids of every invoice whose
    comp_code is this company's code (empty list when there are none).
    """
    company = await company_service.get_company(db, code)
    return CompanyDetailEnvelope(company=company)


@router.post(
    "",
    status_code=201,
    response_model=CompanyEnvelope,
    responses={400: {"description": "Missing code or name", "model": ErrorResponse}},
    summary="Create a company",
)
async def create_company(
    payload: CompanyCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CompanyEnvelope:
    company = await company_service.create_company(db, payload)
    return CompanyEnvelope(company=company)


@router.put(
    "/{code}",
    response_model=CompanyEnvelope,
    responses={
        400: {"description": "Missing body or name", "model": ErrorResponse},
        404: {"description": "Company not found", "model": ErrorResponse},
    },
    summary="Replace a company's name and description",
)
async def update_company(
    code: str,
    payload: CompanyUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> CompanyEnvelope:
    company = await company_service.update_company(db, code, payload)
    return CompanyEnvelope(company=company)


@router.delete(
    "/{code}",
    response_model=StatusResponse,
    responses={404: {"description": "Company not found", "model": ErrorResponse}},
    summary="Delete a company and its invoices",
)
async def delete_company(
    code: str,
    db: AsyncSession = Depends(get_db_session),
) -> StatusResponse:
    await company_service.delete_company(db, code)
    return StatusResponse(status="Deleted")
