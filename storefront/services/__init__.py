"""Services Layer — one service class per resource, plus seeding.

Invariants:
    - Services take a request-scoped AsyncSession (and injected handles)
    - Services raise typed errors from core/errors.py, never HTTP responses

Design Decisions:
    - One file per resource for locality; routes call exactly one method
"""
