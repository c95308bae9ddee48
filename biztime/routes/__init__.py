# Routes package init
"""
BizTime Backend — API Routes Package
=====================================

Route Inventory:
    - companies.py: /companies, /companies/{code}
    - invoices.py:  /invoices, /invoices/{id}
    - health.py:    GET /health

Routes stay thin: extract path params and bodies, call a service, wrap the
result. Queries and error mapping live in services.
"""
