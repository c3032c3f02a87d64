# Middleware package init
"""
Dev Editor — Middleware Package
================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    The request ID is assigned first so the access log line and any error
    response for the same request carry the same ID.
"""
