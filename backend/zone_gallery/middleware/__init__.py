# Middleware package init
"""
Zone Gallery — Middleware Package
==================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → [Errors] → Route Handler

    - Request ID first: every later log line can carry the correlation ID
    - Logging: records status and duration once the response is built
    - CORS: origins from CORS_ORIGINS (default "*")
    - Errors: unexpected exceptions become a JSON 500 that still passes
      back out through CORS and Request ID
"""
