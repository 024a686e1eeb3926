"""API Layer — FastAPI routes, dependencies, error handlers and the admin gate.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; typed errors are translated in error_handlers.py

Design Decisions:
    - Thin routes: parse the body with request_body(Model), call one service method
"""
