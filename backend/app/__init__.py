"""
Aula Backend — Application Package
====================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │  Routes (API layer)                 │  ← query params / raw body in, envelope out
    ├─────────────────────────────────────┤
    │  Services                           │  ← validation, Result (Ok / Err)
    ├─────────────────────────────────────┤
    │  Store                              │  ← select / insert, injected per request
    ├─────────────────────────────────────┤
    │  Models & Schemas                   │  ← SQLAlchemy tables + Pydantic contracts
    └─────────────────────────────────────┘

    Hooks (app.hooks) are the client side: they call the routes over HTTP
    and keep data / loading / error state for a UI.
"""

__version__ = "1.0.0"
