"""Services Layer — async operation handlers around the pure core.

Invariants:
    - Handlers split by resource type (CodeSystem, ValueSet, ConceptMap, plain resources)
    - Handlers depend on the TerminologyStore protocol, never on SQLAlchemy

Design Decisions:
    - One handler file per resource type for locality
"""
