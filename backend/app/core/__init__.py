"""Core Layer — pure domain logic, no IO, no async, no FastAPI imports.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - Functions are deterministic given their inputs (callers pass the clock)

Design Decisions:
    - Functional core separated from imperative shell
"""
