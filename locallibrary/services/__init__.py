"""Services Layer: one request-handler class per catalog entity.

Invariants:
    - Handlers receive the store handle explicitly (constructor injection)
    - Handlers return an outcome (services/outcomes.py) or raise a CatalogError
    - Handlers never touch FastAPI request/response objects
"""
