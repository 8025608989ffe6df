# Middleware package init
"""
Aula Backend — Middleware Package
===================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry the correlation ID
    2. Access log: records method, path, status and duration per request
"""
