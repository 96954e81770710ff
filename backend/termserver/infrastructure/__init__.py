"""Infrastructure Layer — store adapter, database sessions and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; core never imports infrastructure
    - All storage failures mapped to DatabaseError before leaving this package

Design Decisions:
    - SqlTerminologyStore is the only production TerminologyStore adapter
"""
