# Middleware package init
"""
Filmovi API — Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request context: ID + access log] → Route Handler
"""
