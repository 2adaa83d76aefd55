"""
Filmovi API — Application Package
==================================

What: A small REST API over the `filmovi` table, with generated Swagger docs.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Repositories (Storage)       │  ← parameterized SQL
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Pool)              │  ← Async engine + unit of work
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
