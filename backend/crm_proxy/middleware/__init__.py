# Middleware package init
"""
CRM Proxy — Middleware Package
===============================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error envelope
    carry the same correlation ID.
"""
