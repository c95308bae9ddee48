# Services package init
"""
BizTime Backend — Services Layer
=================================

Service Inventory:
    - CompanyService: companies CRUD + invoice id resolution
    - InvoiceService: invoices CRUD + owning company resolution
    - PaymentService: invoice payment status lookup

Each module exposes a stateless singleton (`company_service`, ...). The
database session is always passed in by the caller.
"""
