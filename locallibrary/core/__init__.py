"""Core Layer: pure domain logic (validation, derived fields, view data), no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic
    - repository_protocols.py references ORM classes for typing only

Design Decisions:
    - Functional core separated from the imperative shell (services/ + infrastructure/)
"""
