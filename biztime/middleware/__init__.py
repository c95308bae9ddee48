# Middleware package init
"""
BizTime Backend — Middleware Package
=====================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assign the correlation ID used by every log line
    2. Logging: log method, path, status and duration with that ID

    Responses travel the chain in reverse, so the request ID header is added
    and the duration measured after the handler has finished.
"""
