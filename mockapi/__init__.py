"""
MockAPI — Application Package Initializer
==========================================

What:  Marks the `mockapi` directory as a Python package.
Who:   Used by uvicorn (`mockapi.main:app`), pytest, and `python -m mockapi`.

Architecture Note:
    The server is a thin layer over an in-memory JSON collection store:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Query Engine)         │  ← Pure filter/search/sort
    ├─────────────────────────────────────┤
    │          Schemas (Contracts)        │  ← Pydantic query + response models
    ├─────────────────────────────────────┤
    │     Store (Collections in memory)   │  ← Loaded once from db.json
    └─────────────────────────────────────┘

    Services never touch the store directly; routes fetch the records they
    need from the injected store and hand them to the services.
"""

__version__ = "1.0.0"
