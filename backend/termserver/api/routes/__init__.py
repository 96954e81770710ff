"""Route Modules — one file per FHIR resource type, plus capabilities and health.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain terminology logic (delegate to services)

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
