"""
BizTime Backend — Application Package Initializer
==================================================

What:  Marks the `biztime` directory as a Python package.
Who:   Imported by uvicorn (`biztime.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is split into four layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← SQL statements, error mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never build queries; services never touch Request/Response objects.
"""

__version__ = "1.0.0"
