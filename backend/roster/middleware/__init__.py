# Middleware package init
"""
Roster Backend — Middleware Package
====================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Assign a correlation ID used by logs and error bodies
    2. Logging: Log method, path, status and duration with that ID
    3. CORS: FastAPI's CORSMiddleware (answers preflight requests)
"""
