"""Pydantic Schemas — request and response contracts for API endpoints.

Invariants:
    - JSON keys are camelCase (alias generator), ids serialize as strings
    - Datetimes serialize as timezone-aware UTC ISO-8601
    - Request models (RequestModel) turn every body failure into InvalidInputError
      with a stable code; response models (ApiModel) only serialize

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
