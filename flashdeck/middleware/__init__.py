"""
Flashdeck Backend — Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Access Logging] → [GZip] → [CORS] → Route

    The request ID is set first so the access log line (written on the way
    back out) carries it.
"""
