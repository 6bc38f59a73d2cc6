# Middleware package init
"""
Contactbook API — Middleware Package
======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    Responses travel back in reverse order, so the logging middleware sees
    the final status code and the request id header is added last.
"""
