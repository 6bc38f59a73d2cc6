"""
Contactbook API — Application Package Initializer
===================================================

What: Marks the `contactbook` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows a small layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Decoding, Lookup)     │  ← Payload decoding, id parsing
    ├─────────────────────────────────────┤
    │          Schemas (Data)             │  ← Pydantic models (wire contract)
    ├─────────────────────────────────────┤
    │       Store (In-Memory State)       │  ← Seeded, append-only, process-lifetime
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
