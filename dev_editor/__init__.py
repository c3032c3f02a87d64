"""
Dev Editor — Application Package Initializer
=============================================

What: Local development API used by the site's in-browser editor.
How:  Routes accept JSON, services touch the filesystem, and global
      exception handlers turn application errors into HTTP responses.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Filesystem Logic)     │  ← sanitize, contain, read/write
    ├─────────────────────────────────────┤
    │        Schemas (API Contracts)      │  ← Pydantic request/response models
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
