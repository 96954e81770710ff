"""Core Layer — pure terminology logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Operation builders are pure and deterministic (ids/timestamps injected by callers)
    - repository_protocols.py is the only place async appears, as a contract

Design Decisions:
    - Functional core separated from imperative shell: services/ awaits the store,
      core/ decides what the answer is
"""
