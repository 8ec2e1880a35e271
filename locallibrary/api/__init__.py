"""API Layer: FastAPI routes, templating and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes are thin: read path/body, call a handler, render its outcome
"""
