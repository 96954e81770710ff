"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (posted Parameters bodies)
    - Converted into core types before reaching handlers

Design Decisions:
    - Separate from core/parameters.py: schemas are API contracts, core types are domain
"""
