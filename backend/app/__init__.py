"""
Inventra Backend — Application Package
========================================

Layers:

    ┌─────────────────────────────────────┐
    │   Middleware (request ID, logging,  │  ← field validation of bound
    │   field validation)                 │    operations happens here
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (CRUD)             │  ← outcome messages, not-found
    ├─────────────────────────────────────┤
    │     Repository (persistence port)   │  ← in-memory by default
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
