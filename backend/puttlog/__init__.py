"""
PuttLog Backend - Application Package Initializer
=================================================

What: Marks the `puttlog` directory as a Python package.
Who:  Imported by uvicorn (`puttlog.main:app`), Alembic, pytest and the API client.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, caller identity
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Ownership checks, validation, totals
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Sessions and their putt records are only ever reached through a service
    call that carries the caller's owner id; routes never query the store.
"""

__version__ = "1.0.0"
