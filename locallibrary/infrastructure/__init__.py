"""Infrastructure Layer: database session management, the catalog store, and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All SQLAlchemy failures surface as core.errors.DatabaseError
"""
