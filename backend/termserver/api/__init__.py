"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON: Parameters envelopes, FHIR resources or error bodies

Design Decisions:
    - Thin routes: resolve arguments, call one service method, serialize
"""
