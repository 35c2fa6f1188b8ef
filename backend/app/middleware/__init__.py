"""
Inventra Backend — Middleware Package
=======================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Field Validation] → Route Handler

    1. Request ID: correlation ID for every later log line
    2. Logging: access line with status and duration
    3. Field Validation: rejects bound requests with invalid bodies before
       the route runs; replays the body otherwise
"""
