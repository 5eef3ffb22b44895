"""
Noteful Backend: Application Package Initializer
================================================

What: The `noteful` package: a REST API for notes, folders and tags.
Who:  Imported by uvicorn (noteful.main:app), Alembic, pytest and the
      bundled API client (noteful.client).

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, cascades
    ├─────────────────────────────────────┤
    │   Document Store (noteful.store)    │  ← Mongo-style filters/updates
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
