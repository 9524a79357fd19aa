"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain enums from core/domain_types.py used for enum fields
    - Derived aggregates appear in responses only, never in request bodies

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
